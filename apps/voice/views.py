import logging

from django.contrib import messages
from django.http import JsonResponse
from django.shortcuts import redirect
from django.urls import reverse
from django.views.decorators.http import require_POST
from kombu.exceptions import OperationalError

from apps.accounts.decorators import tenant_required
from apps.core.backend import BackendError
from apps.core.utils import render_page
from .forms import VoiceEntryForm
from .tasks import process_voice_entry

logger = logging.getLogger(__name__)

OPEN_JOB_STATUSES = ['scheduled', 'in_progress']
JOB_PICKER_LIMIT = 20
RECENT_ENTRIES_LIMIT = 10
QUEUE_UNAVAILABLE_MESSAGE = 'Recording could not be queued for processing. Please try again.'


def _is_ajax(request):
    return request.headers.get('X-Requested-With') == 'XMLHttpRequest'


def _open_jobs(ctx):
    return ctx.backend.fetch(
        ctx.select('jobs', 'id, title, status')
        .in_('status', OPEN_JOB_STATUSES)
        .order('scheduled_date')
        .limit(JOB_PICKER_LIMIT),
        'load open jobs',
    )


def _render_voice_page(request, ctx, form=None, status=None):
    jobs, recent_entries = [], []
    try:
        jobs = _open_jobs(ctx)
        recent_entries = ctx.backend.fetch(
            ctx.select('voice_entries', '*, jobs(title)')
            .order('created_at', desc=True)
            .limit(RECENT_ENTRIES_LIMIT),
            'load voice entries',
        )
    except BackendError as e:
        messages.error(request, f'Could not load voice entries: {e.message}')

    job_label = ctx.industry.label('job')
    context = {
        'form': form or VoiceEntryForm(jobs=jobs, job_label=job_label),
        'recent_entries': recent_entries,
    }
    return render_page(request, ctx, 'voice/voice_entry.html', context, active_page='voice', status=status)


@tenant_required
def voice_entry_view(request, ctx):
    if not ctx.industry.has_feature('voice_workflow'):
        return redirect('core:dashboard')
    return _render_voice_page(request, ctx)


@tenant_required
@require_POST
def voice_submit_view(request, ctx):
    """
    Store a new voice entry (status 'pending') and queue its processing

    The recorder page posts with XMLHttpRequest and gets JSON back; a
    plain form post is redirected.
    """
    if not ctx.industry.has_feature('voice_workflow'):
        if _is_ajax(request):
            return JsonResponse({'success': False, 'error': 'Voice entry is not enabled'}, status=403)
        return redirect('core:dashboard')

    try:
        jobs = _open_jobs(ctx)
    except BackendError as e:
        jobs = []
        logger.warning(f"Voice submit could not load jobs: {e.message}")

    form = VoiceEntryForm(request.POST, request.FILES, jobs=jobs, job_label=ctx.industry.label('job'))

    if not form.is_valid():
        if _is_ajax(request):
            return JsonResponse({'success': False, 'errors': form.errors.get_json_data()}, status=400)
        messages.error(request, 'Please correct the errors below.')
        return _render_voice_page(request, ctx, form=form, status=400)

    record = {
        'tenant_id': ctx.tenant_id,
        'job_id': form.cleaned_data.get('job_id'),
        'user_id': ctx.auth.user_id,
        'duration_seconds': form.cleaned_data.get('duration_seconds'),
        'status': 'pending',
    }

    try:
        rows = ctx.backend.fetch(ctx.backend.table('voice_entries').insert(record), 'create voice entry')
    except BackendError as e:
        if _is_ajax(request):
            return JsonResponse({'success': False, 'error': e.message}, status=502)
        messages.error(request, f'Could not save recording: {e.message}')
        return redirect('voice:voice_entry')

    entry_id = rows[0]['id'] if rows else None
    if entry_id is None:
        logger.error(f"Voice entry insert for tenant {ctx.tenant_id} returned no row")
        if _is_ajax(request):
            return JsonResponse({'success': False, 'error': 'Recording was not saved'}, status=502)
        messages.error(request, 'Recording was not saved. Please try again.')
        return redirect('voice:voice_entry')

    try:
        process_voice_entry.delay(entry_id, ctx.industry.id, ctx.auth.access_token)
    except OperationalError as e:
        logger.error(f"Voice entry {entry_id} could not be queued: {e}")
        try:
            ctx.backend.write(
                ctx.backend.table('voice_entries').update({'status': 'failed'})
                .eq('id', entry_id).eq('tenant_id', ctx.tenant_id),
                'mark voice entry failed',
            )
        except BackendError as mark_error:
            logger.error(f"Could not mark voice entry {entry_id} failed: {mark_error.message}")
        if _is_ajax(request):
            return JsonResponse({'success': False, 'error': QUEUE_UNAVAILABLE_MESSAGE}, status=502)
        messages.error(request, QUEUE_UNAVAILABLE_MESSAGE)
        return redirect('voice:voice_entry')

    logger.info(f"Voice entry {entry_id} queued by {ctx.auth.email}")

    if _is_ajax(request):
        return JsonResponse({'success': True, 'entry_id': entry_id, 'redirect': reverse('voice:voice_entry')})

    messages.success(request, 'Recording uploaded. It will appear below once processed.')
    return redirect('voice:voice_entry')
