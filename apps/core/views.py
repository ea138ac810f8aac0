import logging

from django.contrib import messages
from django.shortcuts import redirect

from apps.accounts.auth import get_auth_session
from apps.accounts.decorators import tenant_required
from apps.core.backend import BackendError
from .utils import render_page, to_number

logger = logging.getLogger(__name__)

ACTIVE_JOB_STATUSES = ('scheduled', 'in_progress', 'quoted')
RECENT_JOBS_LIMIT = 5


def home_view(request):
    if get_auth_session(request) is not None:
        return redirect('core:dashboard')
    return redirect('accounts:login')


@tenant_required
def dashboard_view(request, ctx):
    """
    Main dashboard view
    - counts of contacts / jobs / active jobs, revenue
    - most recent jobs with their contact
    - quick actions gated by industry features
    """
    stats = {
        'total_contacts': 0,
        'total_jobs': 0,
        'active_jobs': 0,
        'revenue': 0,
    }
    recent_jobs = []

    try:
        stats['total_contacts'] = ctx.backend.count(
            ctx.select('contacts', '*', count='exact', head=True),
            'count contacts',
        )

        jobs = ctx.backend.fetch(ctx.select('jobs', 'status, actual_total'), 'load job stats')
        stats['total_jobs'] = len(jobs)
        stats['active_jobs'] = sum(1 for job in jobs if job.get('status') in ACTIVE_JOB_STATUSES)
        stats['revenue'] = sum(to_number(job.get('actual_total')) for job in jobs)

        recent_jobs = ctx.backend.fetch(
            ctx.select('jobs', '*, contacts(full_name)')
            .order('created_at', desc=True)
            .limit(RECENT_JOBS_LIMIT),
            'load recent jobs',
        )
    except BackendError as e:
        messages.error(request, f'Could not load dashboard data: {e.message}')

    context = {
        'stats': stats,
        'recent_jobs': recent_jobs,
        'show_voice_action': ctx.industry.has_feature('voice_workflow'),
        'show_schedule_action': ctx.industry.has_feature('appointments'),
    }
    return render_page(request, ctx, 'core/dashboard.html', context, active_page='dashboard')


def _coming_soon(request, ctx, feature, title):
    if not ctx.industry.has_feature(feature):
        return redirect('core:dashboard')
    return render_page(request, ctx, 'core/coming_soon.html', {'title': title}, active_page=feature)


@tenant_required
def inventory_view(request, ctx):
    return _coming_soon(request, ctx, 'inventory', 'Inventory')


@tenant_required
def appointments_view(request, ctx):
    return _coming_soon(request, ctx, 'appointments', 'Appointments')


@tenant_required
def compliance_view(request, ctx):
    return _coming_soon(request, ctx, 'compliance', 'Compliance')
