from django.apps import AppConfig


class JobsConfig(AppConfig):
    """
    Jobs (loans, visits, deals... depending on the industry)

    Kanban board over the industry's pipeline stages, create form and
    stage moves.
    """
    name = 'apps.jobs'
    verbose_name = 'Jobs'
