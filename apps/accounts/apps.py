from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class AccountsConfig(AppConfig):
    """
    Configuration class for accounts app

    Users live in the hosted backend, not in a local table. This app holds:
    - AuthSession (tokens kept in the signed session cookie)
    - login/sign-up, sign-out and password reset views
    - login_required / tenant_required / role_required decorators
    """

    name = 'apps.accounts'

    # Human-readable app name
    verbose_name = _('Accounts')
