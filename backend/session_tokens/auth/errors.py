"""Failures reported when a session token cannot be accepted."""


class SessionTokenError(Exception):
    """Base class for every verification failure."""


class InvalidToken(SessionTokenError):
    """The token is structurally broken or its signature does not check out."""


class MalformedToken(InvalidToken):
    """Not a well-formed signed envelope, or a mandatory claim is missing."""


class InvalidSignature(InvalidToken):
    """The signature does not verify against the supplied key."""


class TemporallyInvalid(SessionTokenError):
    """The signature is fine but the token is outside its validity window."""


class NotYetValid(TemporallyInvalid):
    pass


class Expired(TemporallyInvalid):
    pass
