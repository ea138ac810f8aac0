from django.apps import AppConfig


class ContactsConfig(AppConfig):
    """
    Contacts (customers, patients, clients... depending on the industry)

    List with search, create, edit, delete and CSV/Excel export.
    """
    name = 'apps.contacts'
    verbose_name = 'Contacts'
