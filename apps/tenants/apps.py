from django.apps import AppConfig


class TenantsConfig(AppConfig):
    """
    Tenants (businesses)

    - TenantSession / TenantContext: memberships and the active tenant
    - first sign-in tenant creation (services.ensure_user_has_tenant)
    - structured JSON settings (schema.py)
    - settings page and tenant switcher
    """
    name = 'apps.tenants'
    verbose_name = 'Tenants'
