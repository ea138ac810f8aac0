from django.apps import AppConfig


class CoreConfig(AppConfig):
    """
    Configuration for Core application

    This app contains:
        - Backend gateway (apps/core/backend.py) used by every other app
        - Dashboard view
        - "Coming soon" pages for inventory, appointments and compliance
        - Shared page helpers (sidebar, search filter)
    """
    name = 'apps.core'
    verbose_name = 'Core'
