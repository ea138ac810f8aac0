import logging

from django.contrib import messages
from django.http import JsonResponse
from django.shortcuts import redirect
from django.views.decorators.http import require_POST

from apps.accounts.decorators import tenant_required
from apps.core.backend import BackendError, BackendNoRowsError
from apps.core.utils import render_page
from .forms import JobForm

logger = logging.getLogger(__name__)

# Each card offers this many "move to" buttons
STAGE_MOVES_PER_CARD = 3


def build_board(stages, jobs):
    """
    One column per pipeline stage, in stage order

    A job sits in the column equal to its status; jobs whose status is not
    one of the industry's stages are left off the board.
    """
    columns = []
    for stage in stages:
        stage_jobs = [job for job in jobs if job.get('status') == stage]
        columns.append({
            'stage': stage,
            'jobs': stage_jobs,
            'count': len(stage_jobs),
            'moves': [other for other in stages if other != stage][:STAGE_MOVES_PER_CARD],
        })
    return columns


@tenant_required
def job_board_view(request, ctx):
    try:
        jobs = ctx.backend.fetch(
            ctx.select('jobs', '*, contacts(full_name)').order('created_at', desc=True),
            'load jobs',
        )
    except BackendError as e:
        jobs = []
        messages.error(request, f'Could not load {ctx.industry.label("jobs").lower()}: {e.message}')

    context = {
        'columns': build_board(ctx.industry.pipeline_stages(), jobs),
        'total_count': len(jobs),
    }
    return render_page(request, ctx, 'jobs/job_board.html', context, active_page='jobs')


@tenant_required
def job_create_view(request, ctx):
    job_label = ctx.industry.label('job')

    try:
        contacts = ctx.backend.fetch(ctx.select('contacts', 'id, full_name').order('full_name'), 'load contacts')
    except BackendError as e:
        contacts = []
        messages.error(request, f'Could not load {ctx.industry.label("contacts").lower()}: {e.message}')

    if request.method == 'POST':
        form = JobForm(request.POST, industry=ctx.industry, contacts=contacts)

        if form.is_valid():
            record = form.to_record()
            record['tenant_id'] = ctx.tenant_id
            try:
                ctx.backend.execute(ctx.backend.table('jobs').insert(record), 'create job')
            except BackendError as e:
                messages.error(request, f'Error creating {job_label.lower()}: {e.message}')
            else:
                messages.success(request, f'{job_label} "{record["title"]}" created successfully')
                return redirect('jobs:job_board')
    else:
        form = JobForm(industry=ctx.industry, contacts=contacts)

    context = {
        'form': form,
        'form_title': f'New {job_label}',
        'submit_text': 'Create',
    }
    return render_page(request, ctx, 'jobs/job_form.html', context, active_page='jobs')


@tenant_required
@require_POST
def job_change_status_view(request, ctx, pk):
    new_status = request.POST.get('status')
    is_ajax = request.headers.get('X-Requested-With') == 'XMLHttpRequest'

    if new_status not in ctx.industry.pipeline_stages():
        if is_ajax:
            return JsonResponse({'success': False, 'error': 'Invalid status'}, status=400)
        messages.error(request, 'Invalid status')
        return redirect('jobs:job_board')

    try:
        ctx.backend.write(
            ctx.backend.table('jobs').update({'status': new_status}).eq('id', pk).eq('tenant_id', ctx.tenant_id),
            'change job status',
        )
    except BackendError as e:
        if is_ajax:
            status = 404 if isinstance(e, BackendNoRowsError) else 502
            return JsonResponse({'success': False, 'error': e.message}, status=status)
        messages.error(request, f'Could not move {ctx.industry.label("job").lower()}: {e.message}')
        return redirect('jobs:job_board')

    logger.info(f"Job {pk} moved to {new_status} by {ctx.auth.email}")
    if is_ajax:
        return JsonResponse({'success': True, 'status': new_status})

    messages.success(request, f'Status changed to "{new_status.replace("_", " ")}"')
    return redirect('jobs:job_board')
