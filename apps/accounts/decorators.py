# Decorators in this file:
# 1. login_required - a signed-in backend user (passes AuthSession to the view)
# 2. tenant_required - signed in AND belongs to a business (passes TenantContext)
# 3. role_required - the membership role of the active tenant is allowed
#
# Order matters:
#   @tenant_required      <- outermost, builds the context
#   @role_required(...)   <- receives the context
#   def view(request, ctx):
# ==============================================================================

import logging
from functools import wraps

from django.conf import settings
from django.contrib import messages
from django.http import JsonResponse
from django.shortcuts import redirect, render
from django.utils.translation import gettext_lazy as _

from apps.accounts.auth import get_auth_session
from apps.core.backend import BackendError
from apps.tenants.session import TenantContext

logger = logging.getLogger(__name__)


def _is_ajax(request):
    return request.headers.get('X-Requested-With') == 'XMLHttpRequest'


def login_required(view_func):
    """
    Decorator: user must be signed in to the backend

    The view is called as view_func(request, auth, *args, **kwargs).
    Anonymous requests go to the login page (AJAX gets a 401 JSON error).
    """

    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        auth = get_auth_session(request)
        if auth is None:
            if _is_ajax(request):
                return JsonResponse({'success': False, 'error': 'Authentication required'}, status=401)
            messages.error(request, _('Please login to continue.'))
            return redirect(settings.LOGIN_URL)

        return view_func(request, auth, *args, **kwargs)

    return wrapper


def tenant_required(view_func):
    """
    Decorator: user must belong to at least one active tenant

    Builds the TenantContext (memberships, active tenant, industry) and
    calls view_func(request, ctx, *args, **kwargs).

    Users without a tenant see tenants/no_tenant.html instead of the page.
    """

    @login_required
    @wraps(view_func)
    def wrapper(request, auth, *args, **kwargs):
        try:
            ctx = TenantContext.build(request, auth)
        except BackendError as e:
            logger.error(f"Could not load tenants for {auth.email}: {e.message}")
            return render(request, 'tenants/no_tenant.html', {
                'error': _('Could not load your business. Please try again.'),
            }, status=503)

        if ctx.tenant is None:
            return render(request, 'tenants/no_tenant.html', {'email': auth.email})

        return view_func(request, ctx, *args, **kwargs)

    return wrapper


def role_required(*allowed_roles):
    """
    Decorator: only specific membership roles can access

    Must sit below @tenant_required.

    Usage:
        @tenant_required
        @role_required('owner', 'admin')
        def business_settings_view(request, ctx):
            ...
    """

    def decorator(view_func):
        @wraps(view_func)
        def wrapper(request, ctx, *args, **kwargs):
            if ctx.role in allowed_roles:
                return view_func(request, ctx, *args, **kwargs)

            logger.warning(f"{ctx.auth.email} ({ctx.role}) denied {request.path}")
            if _is_ajax(request):
                return JsonResponse({'success': False, 'error': 'Permission denied'}, status=403)
            messages.error(request, _('You do not have permission to perform this action.'))
            return redirect('core:dashboard')

        return wrapper

    return decorator
