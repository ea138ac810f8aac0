# Celery is the task queue used for background jobs
#
# - Transcribe and parse voice entries (apps/voice/tasks.py)
#
# Start worker: celery -A config worker -l info
#
# In development and tests CELERY_TASK_ALWAYS_EAGER runs tasks inline,
# so no broker is needed.
# ==============================================================================

import os
from celery import Celery

# Set the default Django settings module for Celery
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

# 'fielddesk' is the app name (appears in logs and monitoring)
app = Celery('fielddesk')

# All settings prefixed with 'CELERY_' will be used
# Example: CELERY_BROKER_URL, CELERY_TASK_ALWAYS_EAGER
app.config_from_object('django.conf:settings', namespace='CELERY')

# Looks for tasks.py file in each installed app
app.autodiscover_tasks()


# CELERY TASK ANNOTATIONS

app.conf.task_annotations = {
    # The transcription service is slow; keep a ceiling on each run
    'apps.voice.tasks.process_voice_entry': {
        'time_limit': 120,
        'soft_time_limit': 100,
    },
}
