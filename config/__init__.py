# ==============================================================================
# FIELDDESK CRM - CONFIG PACKAGE INITIALIZER
# ==============================================================================

# Import Celery app to ensure it's loaded when Django starts, so that
# @shared_task functions (apps/voice/tasks.py) bind to our configured app
from .celery import app as celery_app

# This allows importing as: from config import celery_app
__all__ = ('celery_app',)
