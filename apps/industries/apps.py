from django.apps import AppConfig


class IndustriesConfig(AppConfig):
    """
    Configuration for the Industries application

    This app contains:
        - The industry registry (bundled JSON configs, one per industry)
        - IndustryResolver (terminology, features, pipeline, partner taxonomy)
        - Template tags used by every page ({% term %}, |has_feature)
        - Read-only JSON API over the registry
    """
    name = 'apps.industries'
    verbose_name = 'Industries'

    def ready(self):
        """Load and validate every bundled config once, at startup."""
        from apps.industries import registry
        registry.load()
