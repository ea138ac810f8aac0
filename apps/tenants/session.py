"""
Tenant session - which businesses the user belongs to and which one is active

The selected tenant id is persisted in a long-lived signed cookie so it
survives sign-out (a user who belongs to several businesses lands back on
the one they used last).
"""

import logging
from typing import List, Optional

from django.conf import settings

from apps.core.backend import Backend
from apps.industries.resolver import IndustryResolver
from .schema import BrandingSettings, SchemaVersionError

logger = logging.getLogger(__name__)


def read_selected_tenant(request) -> Optional[str]:
    """Persisted tenant id, or None (missing or tampered cookie)."""
    return request.get_signed_cookie(settings.TENANT_COOKIE_NAME, default=None)


def persist_selected_tenant(response, tenant_id):
    response.set_signed_cookie(
        settings.TENANT_COOKIE_NAME,
        str(tenant_id),
        max_age=settings.TENANT_COOKIE_AGE,
        httponly=True,
        samesite='Lax',
    )
    return response


class TenantSession:
    """
    Memberships of one user plus the active tenant

    memberships are tenant_users rows with the tenant embedded under
    'tenants'. A membership whose tenant could not be joined (deleted or
    hidden by row-level security) is skipped.
    """

    def __init__(self, memberships: List[dict], selected_id=None):
        self.memberships = memberships
        self.tenants = [m['tenants'] for m in memberships if m.get('tenants')]
        self.tenant = None
        self.membership = None
        if not self.switch(selected_id) and self.tenants:
            self.switch(self.tenants[0]['id'])

    @classmethod
    def load(cls, backend: Backend, user_id: str, selected_id=None) -> 'TenantSession':
        """
        Raises:
            BackendError: memberships could not be loaded
        """
        query = (
            backend.table('tenant_users')
            .select('*, tenants(*)')
            .eq('user_id', user_id)
            .eq('is_active', True)
        )
        return cls(backend.fetch(query, 'load tenants'), selected_id)

    def find(self, tenant_id) -> Optional[dict]:
        if tenant_id is None:
            return None
        for tenant in self.tenants:
            if str(tenant['id']) == str(tenant_id):
                return tenant
        return None

    def switch(self, tenant_id) -> bool:
        """Make tenant_id active. Only tenants the user belongs to can be selected."""
        tenant = self.find(tenant_id)
        if tenant is None:
            return False
        self.tenant = tenant
        self.membership = next(
            (m for m in self.memberships if str(m.get('tenant_id')) == str(tenant['id'])),
            None,
        )
        return True

    @property
    def role(self) -> Optional[str]:
        return self.membership.get('role') if self.membership else None

    @property
    def has_multiple(self) -> bool:
        return len(self.tenants) > 1


class TenantContext:
    """
    Everything a page view needs for one request

    Built by @tenant_required and passed to the view as its second argument.
    """

    def __init__(self, auth, backend: Backend, session: TenantSession, industry: IndustryResolver):
        self.auth = auth
        self.backend = backend
        self.session = session
        self.industry = industry

    @classmethod
    def build(cls, request, auth) -> 'TenantContext':
        backend = Backend.for_session(auth)
        session = TenantSession.load(backend, auth.user_id, read_selected_tenant(request))
        return cls(auth, backend, session, IndustryResolver.for_tenant(session.tenant))

    @property
    def tenant(self) -> Optional[dict]:
        return self.session.tenant

    @property
    def tenant_id(self):
        return self.tenant['id'] if self.tenant else None

    @property
    def membership(self) -> Optional[dict]:
        return self.session.membership

    @property
    def role(self) -> Optional[str]:
        return self.session.role

    @property
    def branding(self) -> BrandingSettings:
        """The active tenant's branding, or the defaults when the blob is unreadable."""
        try:
            return BrandingSettings.from_blob(self.tenant.get('branding') if self.tenant else None)
        except SchemaVersionError as e:
            logger.warning(f"Tenant {self.tenant_id} branding unreadable: {e}")
            return BrandingSettings()

    def select(self, table: str, columns: str = '*', **kwargs):
        """Select query on table, already filtered to the active tenant."""
        return self.backend.table(table).select(columns, **kwargs).eq('tenant_id', self.tenant_id)
