import logging
import re
import time
from typing import Optional

from apps.core.backend import Backend, BackendError

logger = logging.getLogger(__name__)

DEFAULT_INDUSTRY = 'blue_collar'
DEFAULT_SUBSCRIPTION_TIER = 'starter'


def make_slug(prefix: str, epoch_ms: int) -> str:
    """'Jane.Doe', 1700000000000 -> 'jane-doe-1700000000000'"""
    return re.sub(r'[^a-z0-9-]', '-', f'{prefix}-{epoch_ms}'.lower())


def ensure_user_has_tenant(backend: Backend, user_id: str, email: str) -> Optional[dict]:
    """
    Give a freshly signed-in user a business if they have none

    Creates "<email prefix>'s Business" and links the user as its owner.
    Returns the new tenant, or None when the user already had one or the
    backend refused. Failures are logged, never raised: the user can
    still sign in and will see the "no business" page.
    """
    try:
        existing = backend.fetch_one(
            backend.table('tenant_users').select('id').eq('user_id', user_id),
            'check membership',
        )
        if existing:
            return None

        prefix = (email or 'user').split('@')[0]
        rows = backend.fetch(
            backend.table('tenants').insert({
                'name': f"{prefix}'s Business",
                'slug': make_slug(prefix, int(time.time() * 1000)),
                'industry': DEFAULT_INDUSTRY,
                'subscription_tier': DEFAULT_SUBSCRIPTION_TIER,
            }),
            'create tenant',
        )
        if not rows:
            logger.error(f"Tenant insert for {email} returned no row")
            return None
        tenant = rows[0]

        backend.execute(
            backend.table('tenant_users').insert({
                'tenant_id': tenant['id'],
                'user_id': user_id,
                'role': 'owner',
            }),
            'link tenant owner',
        )
    except BackendError as e:
        logger.error(f"Could not create a tenant for {email}: {e.message}")
        return None

    logger.info(f"Created tenant {tenant['id']} ({tenant.get('slug')}) for {email}")
    return tenant
