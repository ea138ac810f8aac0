from django.apps import AppConfig


class PartnersConfig(AppConfig):
    """
    Partners - contacts with contact_type 'partner'

    Partner type and tier lists come from the active industry.
    """
    name = 'apps.partners'
    verbose_name = 'Partners'
