import logging

from django.contrib import messages
from django.shortcuts import redirect
from django.urls import reverse
from django.views.decorators.http import require_POST

from apps.accounts.decorators import role_required, tenant_required
from apps.core.backend import BackendError, BackendNoRowsError
from apps.core.utils import render_page
from .forms import BrandingSettingsForm, BusinessSettingsForm
from .schema import BrandingSettings, SchemaVersionError
from .session import persist_selected_tenant

logger = logging.getLogger(__name__)

SETTINGS_TABS = [
    ('business', 'Business', 'bi-building'),
    ('team', 'Team', 'bi-people'),
    ('branding', 'Branding', 'bi-palette'),
    ('notifications', 'Notifications', 'bi-bell'),
    ('security', 'Security', 'bi-shield-lock'),
]

SETTINGS_EDITOR_ROLES = ('owner', 'admin', 'manager')


def _settings_url(tab):
    return f"{reverse('tenants:settings')}?tab={tab}"


def _failed_write_status(error):
    # The tenant row exists, so a write that changed nothing was refused by row-level security
    return 403 if isinstance(error, BackendNoRowsError) else 502


def _current_branding(request, ctx):
    try:
        return BrandingSettings.from_blob(ctx.tenant.get('branding'))
    except SchemaVersionError as e:
        logger.warning(f"Tenant {ctx.tenant_id} branding unreadable: {e}")
        messages.warning(request, 'Saved branding was written by a newer version and could not be read.')
        return BrandingSettings()


def _render_settings(request, ctx, tab, business_form=None, branding_form=None, status=None):
    context = {
        'tabs': SETTINGS_TABS,
        'active_tab': tab,
        'business_form': business_form or BusinessSettingsForm(initial={'name': ctx.tenant.get('name', '')}),
        'branding_form': branding_form or BrandingSettingsForm.from_settings(_current_branding(request, ctx)),
        'can_edit': ctx.role in SETTINGS_EDITOR_ROLES,
    }
    return render_page(request, ctx, 'tenants/settings.html', context, active_page='settings', status=status)


@tenant_required
def settings_view(request, ctx):
    tab = request.GET.get('tab', 'business')
    if tab not in [key for key, _, _ in SETTINGS_TABS]:
        tab = 'business'
    return _render_settings(request, ctx, tab)


@tenant_required
@role_required(*SETTINGS_EDITOR_ROLES)
@require_POST
def business_settings_view(request, ctx):
    form = BusinessSettingsForm(request.POST)
    if not form.is_valid():
        messages.error(request, 'Please correct the errors below.')
        return _render_settings(request, ctx, 'business', business_form=form, status=400)

    name = form.cleaned_data['name']
    try:
        ctx.backend.write(
            ctx.backend.table('tenants').update({'name': name}).eq('id', ctx.tenant_id),
            'update business name',
        )
    except BackendError as e:
        messages.error(request, f'Could not save business settings: {e.message}')
        return _render_settings(request, ctx, 'business', business_form=form, status=_failed_write_status(e))

    logger.info(f"Tenant {ctx.tenant_id} renamed to '{name}' by {ctx.auth.email}")
    messages.success(request, 'Business settings saved')
    return redirect(_settings_url('business'))


@tenant_required
@role_required(*SETTINGS_EDITOR_ROLES)
@require_POST
def branding_settings_view(request, ctx):
    form = BrandingSettingsForm(request.POST)
    if not form.is_valid():
        messages.error(request, 'Please correct the errors below.')
        return _render_settings(request, ctx, 'branding', branding_form=form, status=400)

    try:
        ctx.backend.write(
            ctx.backend.table('tenants').update({'branding': form.to_settings().to_blob()}).eq('id', ctx.tenant_id),
            'update branding',
        )
    except BackendError as e:
        messages.error(request, f'Could not save branding: {e.message}')
        return _render_settings(request, ctx, 'branding', branding_form=form, status=_failed_write_status(e))

    messages.success(request, 'Branding saved')
    return redirect(_settings_url('branding'))


@tenant_required
@require_POST
def switch_tenant_view(request, ctx):
    """Make another of the user's businesses active and remember the choice."""
    tenant_id = request.POST.get('tenant_id', '')

    if not ctx.session.switch(tenant_id):
        logger.warning(f"{ctx.auth.email} tried to switch to tenant {tenant_id!r}")
        messages.error(request, 'You are not a member of that business.')
        return redirect('core:dashboard')

    messages.success(request, f'Switched to {ctx.tenant.get("name")}')
    return persist_selected_tenant(redirect('core:dashboard'), ctx.tenant_id)
