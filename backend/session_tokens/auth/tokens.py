"""
Time-bounded session tokens on top of PyJWT.

Every token carries ``nbf`` (issuance time) and ``exp`` (issuance time plus
the requested validity) next to the caller's payload. ``verify`` accepts a
token only while the current time, give or take the policy leeway, sits
inside that window. Both bounds are inclusive and measured in whole seconds.
"""
import logging
import math
import time
from dataclasses import dataclass
from datetime import timedelta
from functools import lru_cache
from typing import Any, Optional, Type, TypeVar

import jwt
from pydantic import TypeAdapter, ValidationError
from pydantic_core import to_jsonable_python

from session_tokens.auth.errors import (
    Expired,
    InvalidSignature,
    MalformedToken,
    NotYetValid,
    SessionTokenError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

REQUIRED_CLAIMS = ("nbf", "exp")
PAYLOAD_CLAIM = "inner"


@dataclass(frozen=True)
class TokenPolicy:
    algorithm: str = "HS256"
    # Clock skew tolerated on both bounds, in seconds
    leeway: int = 60

    def __post_init__(self):
        if self.leeway < 0:
            raise ValueError(f"leeway must not be negative, got {self.leeway}")


DEFAULT_POLICY = TokenPolicy()


def _current_time() -> float:
    now = time.time()
    if now < 0:
        raise RuntimeError("system clock reads before the Unix epoch")
    return now


@lru_cache(maxsize=None)
def _adapter_for(payload_type):
    return TypeAdapter(payload_type)


def _is_timestamp(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    # ints are always finite; math.isfinite would overflow on huge ones
    return isinstance(value, int) or math.isfinite(value)


def _issue_at(payload: Any, validity: timedelta, signing_key, now: float,
              *, policy: TokenPolicy = DEFAULT_POLICY) -> str:
    """Same as :func:`issue`, with the issuance time supplied by the caller."""
    if validity < timedelta(0):
        raise ValueError(f"validity must not be negative, got {validity}")

    claims = {
        "nbf": int(now),
        "exp": int(now + validity.total_seconds()),
        PAYLOAD_CLAIM: to_jsonable_python(payload),
    }
    token = jwt.encode(claims, signing_key, algorithm=policy.algorithm)
    logger.debug("issued session token valid from %s until %s", claims["nbf"], claims["exp"])
    return token


def issue(payload: Any, validity: timedelta, signing_key,
          *, policy: TokenPolicy = DEFAULT_POLICY) -> str:
    """
    Sign ``payload`` into a token that is valid from now for ``validity``.

    Args:
        payload: Anything pydantic can turn into JSON (str, dict, dataclass, model, ...)
        validity: How long the token stays valid; zero is allowed, negative is not
        signing_key: Key handed to PyJWT for ``policy.algorithm``

    Returns:
        Compact JWS string
    """
    return _issue_at(payload, validity, signing_key, _current_time(), policy=policy)


def _decode_claims(token, verification_key, policy: TokenPolicy) -> dict:
    try:
        return jwt.decode(
            token,
            verification_key,
            algorithms=[policy.algorithm],
            options={
                "require": list(REQUIRED_CLAIMS),
                # The window is checked below, in whole seconds and inclusive
                "verify_exp": False,
                "verify_nbf": False,
            },
        )
    except (jwt.InvalidSignatureError, jwt.InvalidAlgorithmError) as exc:
        raise InvalidSignature(str(exc)) from exc
    except jwt.InvalidTokenError as exc:
        # DecodeError, MissingRequiredClaimError and friends
        raise MalformedToken(str(exc)) from exc
    except UnicodeError as exc:
        # str tokens are utf-8 encoded before parsing; lone surrogates fail there
        raise MalformedToken("token is not valid utf-8 text") from exc


def _check_window(claims: dict, now: int, leeway: int) -> None:
    nbf, exp = claims["nbf"], claims["exp"]
    if not _is_timestamp(nbf) or not _is_timestamp(exp):
        raise MalformedToken("nbf and exp must be finite numeric timestamps")
    if exp < nbf:
        raise MalformedToken(f"token expires ({exp}) before it becomes valid ({nbf})")

    if now + leeway < nbf:
        raise NotYetValid(f"token is not valid before {nbf}")
    if now - leeway > exp:
        raise Expired(f"token expired at {exp}")


def _verify_at(token, verification_key, now: float, payload_type: Optional[Type[T]] = None,
               *, policy: TokenPolicy = DEFAULT_POLICY):
    """Same as :func:`verify`, with the verification time supplied by the caller."""
    try:
        claims = _decode_claims(token, verification_key, policy)
        if PAYLOAD_CLAIM not in claims:
            raise MalformedToken("token carries no payload")
        _check_window(claims, int(now), policy.leeway)

        inner = claims[PAYLOAD_CLAIM]
        if payload_type is None:
            return inner
        try:
            return _adapter_for(payload_type).validate_python(inner)
        except ValidationError as exc:
            raise MalformedToken(f"payload does not match {payload_type!r}") from exc
    except SessionTokenError as exc:
        logger.info("rejected session token: %s: %s", type(exc).__name__, exc)
        raise


def verify(token, verification_key, payload_type: Optional[Type[T]] = None,
           *, policy: TokenPolicy = DEFAULT_POLICY):
    """
    Check signature and validity window of ``token`` and return its payload.

    Without ``payload_type`` the payload comes back as decoded JSON. With it,
    the payload is validated into that type (dataclass, pydantic model, ...).

    Raises:
        MalformedToken: Not a signed envelope, or nbf/exp/payload missing or invalid
        InvalidSignature: Signature or algorithm does not match the key
        NotYetValid: ``now + leeway`` is before ``nbf``
        Expired: ``now - leeway`` is after ``exp``
    """
    return _verify_at(token, verification_key, _current_time(), payload_type, policy=policy)
