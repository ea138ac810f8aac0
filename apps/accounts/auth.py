"""
Signed-in user state

The backend issues the tokens; we keep them in the Django session (a signed
cookie, see SESSION_ENGINE) as an AuthSession and hand that record to the
views explicitly. Expired tokens are refreshed on the next request; a
failed refresh signs the user out.
"""

import logging
import time
from dataclasses import asdict, dataclass
from typing import Optional

from apps.core.backend import Backend, BackendError

logger = logging.getLogger(__name__)

SESSION_KEY = '_backend_auth'

# Refresh a little before the token actually expires
EXPIRY_LEEWAY_SECONDS = 30


@dataclass
class AuthSession:
    user_id: str
    email: str
    access_token: str
    refresh_token: str
    expires_at: Optional[int] = None

    @classmethod
    def from_backend(cls, user, session) -> 'AuthSession':
        """Build from the user/session pair returned by sign-in, sign-up or refresh."""
        return cls(
            user_id=str(user.id),
            email=user.email or '',
            access_token=session.access_token,
            refresh_token=session.refresh_token,
            expires_at=session.expires_at,
        )

    @classmethod
    def load(cls, request) -> Optional['AuthSession']:
        data = request.session.get(SESSION_KEY)
        if not data:
            return None
        try:
            return cls(**data)
        except TypeError:
            logger.warning("Discarding malformed auth session")
            request.session.pop(SESSION_KEY, None)
            return None

    def save(self, request):
        request.session[SESSION_KEY] = asdict(self)

    def is_expired(self, now: Optional[float] = None) -> bool:
        if not self.expires_at:
            return False
        now = time.time() if now is None else now
        return now >= self.expires_at - EXPIRY_LEEWAY_SECONDS


def sign_in_session(request, auth: AuthSession):
    """Start a fresh session for auth (new session key, old data dropped)."""
    request.session.cycle_key()
    auth.save(request)


def clear_session(request):
    request.session.flush()


def get_auth_session(request) -> Optional[AuthSession]:
    """
    The request's AuthSession, refreshed if expired

    Returns None when nobody is signed in or the refresh failed.
    """
    auth = AuthSession.load(request)
    if auth is None or not auth.is_expired():
        return auth

    logger.info(f"Refreshing expired session for {auth.email}")
    try:
        response = Backend.anonymous().refresh(auth.refresh_token)
    except BackendError as e:
        logger.warning(f"Session refresh failed for {auth.email}: {e.message}")
        clear_session(request)
        return None

    if not response or not response.session or not response.user:
        clear_session(request)
        return None

    auth = AuthSession.from_backend(response.user, response.session)
    auth.save(request)
    return auth
