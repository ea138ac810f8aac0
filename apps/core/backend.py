"""
This module handles communication with the hosted backend (Supabase).

Every record and every user account lives there; this site only renders
pages. Views never touch the Supabase client directly, they go through a
Backend instance so that:
- failures become BackendError (with a message safe to show the user)
- every failure is logged in one place
- table calls carry the signed-in user's token (row-level security)
"""

import logging
from typing import List, Optional

import httpx
from django.conf import settings
from supabase import AuthError, Client, ClientOptions, PostgrestAPIError, create_client

logger = logging.getLogger(__name__)

PLACEHOLDER_URL = 'https://placeholder.supabase.co'
# create_client() rejects keys that are not JWT shaped
PLACEHOLDER_KEY = 'placeholder.anon.key'

UNREACHABLE_MESSAGE = 'Could not reach the server. Please try again.'
NO_ROWS_MESSAGE = 'The record no longer exists or you do not have access to it.'


class BackendError(Exception):
    """
    Base exception for backend failures

    message is user-presentable; code is the backend's error code if any.
    """

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code


class BackendAuthError(BackendError):
    """Sign-in, sign-up, token or password errors."""
    pass


class BackendAPIError(BackendError):
    """Table query errors and transport failures."""
    pass


class BackendNoRowsError(BackendError):
    """A write the backend accepted but that changed no rows (missing id or hidden by row-level security)."""
    pass


def get_client() -> Client:
    """
    Build a Supabase client from settings

    Missing SUPABASE_URL / SUPABASE_ANON_KEY fall back to placeholders so
    the site still boots; every backend call will then fail and be shown
    to the user as an error.
    """
    url = settings.SUPABASE_URL
    key = settings.SUPABASE_ANON_KEY

    if not url or not key:
        logger.warning("SUPABASE_URL / SUPABASE_ANON_KEY not set, using placeholder backend")
        url = url or PLACEHOLDER_URL
        key = key or PLACEHOLDER_KEY

    options = ClientOptions(
        auto_refresh_token=False,
        persist_session=False,
        flow_type='implicit',
    )
    return create_client(url, key, options=options)


class Backend:

    def __init__(self, client: Client, access_token: Optional[str] = None):
        self.client = client
        self.access_token = access_token
        if access_token:
            # Table calls now run as the user, so row-level security applies
            self.client.postgrest.auth(access_token)

    @classmethod
    def anonymous(cls) -> 'Backend':
        return cls(get_client())

    @classmethod
    def for_session(cls, auth) -> 'Backend':
        return cls(get_client(), auth.access_token)

    @classmethod
    def with_token(cls, access_token: str) -> 'Backend':
        return cls(get_client(), access_token)

    def _auth_call(self, action: str, func, *args):
        try:
            return func(*args)
        except AuthError as e:
            logger.warning(f"Auth {action} failed: {e.message}")
            raise BackendAuthError(e.message, getattr(e, 'code', None)) from e
        except httpx.HTTPError as e:
            logger.error(f"Auth {action} could not reach backend: {e}")
            raise BackendAPIError(UNREACHABLE_MESSAGE) from e

    # AUTH

    def sign_in(self, email: str, password: str):
        logger.info(f"Signing in {email}")
        return self._auth_call(
            'sign-in',
            self.client.auth.sign_in_with_password,
            {'email': email, 'password': password},
        )

    def sign_up(self, email: str, password: str):
        logger.info(f"Signing up {email}")
        return self._auth_call(
            'sign-up',
            self.client.auth.sign_up,
            {'email': email, 'password': password},
        )

    def sign_out(self, access_token: str, refresh_token: str):
        """Revoke the session server-side. Best effort: the local session is dropped regardless."""
        try:
            self.client.auth.set_session(access_token, refresh_token)
            self.client.auth.sign_out()
        except (AuthError, httpx.HTTPError) as e:
            logger.warning(f"Sign-out could not revoke session: {e}")

    def request_password_reset(self, email: str, redirect_to: str):
        logger.info(f"Requesting password reset for {email}")
        return self._auth_call(
            'password reset',
            self.client.auth.reset_password_for_email,
            email,
            {'redirect_to': redirect_to},
        )

    def update_password(self, access_token: str, refresh_token: str, password: str):
        self._auth_call('restore session', self.client.auth.set_session, access_token, refresh_token)
        return self._auth_call('password update', self.client.auth.update_user, {'password': password})

    def refresh(self, refresh_token: str):
        return self._auth_call('refresh', self.client.auth.refresh_session, refresh_token)

    def get_user(self, access_token: str):
        """The user the token belongs to, or None."""
        response = self._auth_call('get user', self.client.auth.get_user, access_token)
        return response.user if response else None

    # TABLES

    def table(self, name: str):
        return self.client.table(name)

    def execute(self, query, action: str = 'query'):
        """
        Run a query built with table(...)

        Raises:
            BackendAPIError: the backend rejected the query or was unreachable
        """
        try:
            return query.execute()
        except PostgrestAPIError as e:
            logger.error(f"Backend {action} failed: {e.message} (code={e.code})")
            raise BackendAPIError(e.message or f'Could not {action}.', e.code) from e
        except httpx.HTTPError as e:
            logger.error(f"Backend {action} could not reach backend: {e}")
            raise BackendAPIError(UNREACHABLE_MESSAGE) from e

    def fetch(self, query, action: str = 'query') -> List[dict]:
        return self.execute(query, action).data or []

    def write(self, query, action: str = 'write') -> List[dict]:
        """
        Run an update or delete and return the rows it changed

        PostgREST answers 200 with no rows when the filter matches nothing,
        including rows row-level security hides from the user.

        Raises:
            BackendNoRowsError: nothing was changed
            BackendAPIError: the backend rejected the query or was unreachable
        """
        rows = self.fetch(query, action)
        if not rows:
            logger.warning(f"Backend {action} changed no rows")
            raise BackendNoRowsError(NO_ROWS_MESSAGE)
        return rows

    def fetch_one(self, query, action: str = 'query') -> Optional[dict]:
        rows = self.fetch(query.limit(1), action)
        return rows[0] if rows else None

    def count(self, query, action: str = 'count') -> int:
        return self.execute(query, action).count or 0
