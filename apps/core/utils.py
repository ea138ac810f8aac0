"""
Helpers shared by the page views
"""
import re

from django.shortcuts import render

# Characters that would break out of a PostgREST or=(...) filter
_FILTER_UNSAFE = re.compile(r'[,()%*\\]')


def build_nav_items(industry):
    """
    Sidebar entries for the active industry

    Dashboard, contacts, jobs, partners and settings are always shown;
    the rest only when the industry enables the matching feature.
    """
    items = [
        {'name': 'dashboard', 'label': 'Dashboard', 'url_name': 'core:dashboard', 'icon': 'bi-speedometer2'},
        {'name': 'contacts', 'label': industry.label('contacts'), 'url_name': 'contacts:contact_list', 'icon': 'bi-people'},
        {'name': 'jobs', 'label': industry.label('jobs'), 'url_name': 'jobs:job_board', 'icon': 'bi-briefcase'},
        {'name': 'partners', 'label': 'Partners', 'url_name': 'partners:partner_list', 'icon': 'bi-person-badge'},
        {'name': 'voice', 'label': 'Voice Entry', 'url_name': 'voice:voice_entry', 'icon': 'bi-mic', 'feature': 'voice_workflow'},
        {'name': 'inventory', 'label': 'Inventory', 'url_name': 'core:inventory', 'icon': 'bi-box-seam', 'feature': 'inventory'},
        {'name': 'appointments', 'label': 'Appointments', 'url_name': 'core:appointments', 'icon': 'bi-calendar-event', 'feature': 'appointments'},
        {'name': 'compliance', 'label': 'Compliance', 'url_name': 'core:compliance', 'icon': 'bi-shield-check', 'feature': 'compliance'},
        {'name': 'settings', 'label': 'Settings', 'url_name': 'tenants:settings', 'icon': 'bi-gear'},
    ]
    return [item for item in items if 'feature' not in item or industry.has_feature(item['feature'])]


def render_page(request, ctx, template_name, context=None, active_page=None, status=None):
    """
    render() for pages inside the app shell

    Adds the tenant context, the industry resolver (used by {% term %})
    and the sidebar to the template context.
    """
    page_context = {
        'ctx': ctx,
        'tenant': ctx.tenant,
        'tenants': ctx.session.tenants,
        'has_multiple_tenants': ctx.session.has_multiple,
        'branding': ctx.branding,
        'industry': ctx.industry,
        'nav_items': build_nav_items(ctx.industry),
        'active_page': active_page,
        'user_email': ctx.auth.email,
    }
    page_context.update(context or {})
    return render(request, template_name, page_context, status=status)


def search_filter(term, columns):
    """
    PostgREST or-filter matching term (case-insensitive substring) in any column

    search_filter('ann', ['full_name', 'email'])
        -> 'full_name.ilike.%ann%,email.ilike.%ann%'

    Returns None when nothing searchable is left after cleaning.
    """
    cleaned = _FILTER_UNSAFE.sub(' ', term or '').strip()
    if not cleaned:
        return None
    return ','.join(f'{column}.ilike.%{cleaned}%' for column in columns)


def to_number(value):
    """Backend numerics arrive as int, float, str or None."""
    if value in (None, ''):
        return 0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0
