#!/usr/bin/env python
# FIELDDESK CRM - DJANGO MANAGEMENT SCRIPT
#
# Common commands:
# - python manage.py runserver          # Start development server
# - python manage.py test               # Run tests
# - python manage.py collectstatic      # Collect static files for production
#
# There is no local database, so there are no migrations to run.
# ==============================================================================

import os
import sys


def main():
    """Run administrative tasks."""

    # Points to config/settings.py
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

    try:
        from django.core.management import execute_from_command_line
    except ImportError as exc:
        raise ImportError(
            "Couldn't import Django. Are you sure it's installed and "
            "available on your PYTHONPATH environment variable? Did you "
            "forget to activate a virtual environment?"
        ) from exc

    execute_from_command_line(sys.argv)


if __name__ == '__main__':
    main()
