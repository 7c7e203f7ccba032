from datetime import timedelta
from typing import Optional
from session_tokens.auth.tokens import TokenPolicy, issue, verify
from session_tokens.config import settings

SESSION_POLICY = TokenPolicy(algorithm=settings.JWT_ALGO, leeway=settings.CLOCK_SKEW_SECONDS)

def create_session_token(payload, validity: Optional[timedelta] = None) -> str:
    if validity is None:
        validity = timedelta(seconds=settings.SESSION_TTL_SECONDS)
    return issue(payload, validity, settings.JWT_SECRET, policy=SESSION_POLICY)

def verify_session_token(token: str, payload_type=None):
    return verify(token, settings.JWT_SECRET, payload_type, policy=SESSION_POLICY)
