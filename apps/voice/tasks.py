import logging

from celery import shared_task
from django.conf import settings
from django.utils import timezone

from apps.core.backend import Backend, BackendError
from apps.industries.resolver import IndustryResolver
from .parsing import parse_transcription, transcribe

logger = logging.getLogger(__name__)


def _update_entry(backend, entry_id, values, action):
    backend.write(backend.table('voice_entries').update(values).eq('id', entry_id), action)


@shared_task(ignore_result=True)
def process_voice_entry(entry_id, industry_id, access_token):
    """
    pending -> processing -> parsed (or failed)

    Runs with the submitting user's token so the updates pass row-level
    security. Returns the final status.
    """
    backend = Backend.with_token(access_token)
    industry = IndustryResolver.for_industry(industry_id)

    try:
        _update_entry(backend, entry_id, {'status': 'processing'}, 'mark voice entry processing')

        text = transcribe(entry_id)
        parsed = parse_transcription(text, industry.voice_parsing(), settings.VOICE_DEFAULT_LABOR_RATE)

        _update_entry(backend, entry_id, {
            'raw_transcription': text,
            'parsed_data': parsed,
            'billing_items_generated': parsed['billing_items'],
            'tasks_generated': parsed['tasks'],
            'status': 'parsed',
            'processed_at': timezone.now().isoformat(),
        }, 'store parsed voice entry')
    except BackendError as e:
        logger.error(f"Voice entry {entry_id} failed: {e.message}")
        try:
            _update_entry(backend, entry_id, {'status': 'failed'}, 'mark voice entry failed')
        except BackendError as mark_error:
            logger.error(f"Could not mark voice entry {entry_id} failed: {mark_error.message}")
        return 'failed'

    logger.info(
        f"Voice entry {entry_id} parsed: {len(parsed['billing_items'])} billing items, "
        f"{len(parsed['tasks'])} tasks"
    )
    return 'parsed'
