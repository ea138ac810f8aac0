import logging

from django.conf import settings
from django.contrib import messages
from django.http import JsonResponse
from django.shortcuts import render, redirect
from django.urls import reverse
from django.utils.http import url_has_allowed_host_and_scheme
from django.utils.translation import gettext_lazy as _
from django.views.decorators.cache import never_cache
from django.views.decorators.http import require_POST

from apps.core.backend import Backend, BackendError
from apps.tenants.services import ensure_user_has_tenant
from .auth import AuthSession, clear_session, get_auth_session, sign_in_session
from .decorators import login_required
from .forms import LoginForm, PasswordResetRequestForm, PasswordUpdateForm

logger = logging.getLogger(__name__)

INVALID_RESET_LINK = _('Invalid or expired reset link. Please request a new one.')


def _safe_next_url(request):
    next_url = request.POST.get('next') or request.GET.get('next')
    if next_url and url_has_allowed_host_and_scheme(next_url, allowed_hosts={request.get_host()}):
        return next_url
    return None


# AUTHENTICATION VIEWS
@never_cache
def login_view(request):
    """
    Sign in or sign up (toggled by the 'mode' field)

    Backend errors are shown inline on the form. After a successful
    sign-in the user is guaranteed a business (ensure_user_has_tenant).
    """
    if get_auth_session(request) is not None:
        return redirect('core:dashboard')

    error = None

    if request.method == 'POST':
        form = LoginForm(request.POST)

        if form.is_valid():
            email = form.cleaned_data['email']
            password = form.cleaned_data['password']
            signing_up = form.cleaned_data['mode'] == LoginForm.MODE_SIGN_UP
            backend = Backend.anonymous()

            try:
                if signing_up:
                    response = backend.sign_up(email, password)
                else:
                    response = backend.sign_in(email, password)
            except BackendError as e:
                error = e.message
            else:
                if response.session is None or response.user is None:
                    # Sign-up with email confirmation turned on
                    messages.info(
                        request,
                        _('Check your email to confirm your account, then sign in.')
                    )
                    return redirect('accounts:login')

                auth = AuthSession.from_backend(response.user, response.session)
                sign_in_session(request, auth)
                ensure_user_has_tenant(Backend.for_session(auth), auth.user_id, auth.email)

                logger.info(f"{auth.email} signed {'up' if signing_up else 'in'}")
                messages.success(request, _('Welcome, {}!').format(auth.email))

                return redirect(_safe_next_url(request) or 'core:dashboard')
    else:
        mode = LoginForm.MODE_SIGN_UP if request.GET.get('mode') == LoginForm.MODE_SIGN_UP else LoginForm.MODE_SIGN_IN
        form = LoginForm(initial={'mode': mode})

    is_sign_up = (form['mode'].value() or LoginForm.MODE_SIGN_IN) == LoginForm.MODE_SIGN_UP

    context = {
        'form': form,
        'error': error,
        'is_sign_up': is_sign_up,
        'next': _safe_next_url(request) or '',
        'page_title': _('Sign up') if is_sign_up else _('Sign in'),
    }
    return render(request, 'accounts/login.html', context)


@login_required
def logout_view(request, auth):
    Backend.anonymous().sign_out(auth.access_token, auth.refresh_token)

    # The tenant selection cookie outlives the session
    clear_session(request)
    logger.info(f"{auth.email} signed out")

    messages.success(request, _('You have been signed out.'))
    return redirect('accounts:login')


# PASSWORD RESET
@never_cache
def password_reset_request_view(request):
    error = None

    if request.method == 'POST':
        form = PasswordResetRequestForm(request.POST)

        if form.is_valid():
            redirect_to = f"{settings.SITE_URL.rstrip('/')}{reverse('accounts:password_update')}"
            try:
                Backend.anonymous().request_password_reset(form.cleaned_data['email'], redirect_to)
            except BackendError as e:
                error = e.message
            else:
                messages.success(request, _('Check your email for a password reset link.'))
                return redirect('accounts:password_reset')
    else:
        form = PasswordResetRequestForm()

    context = {
        'form': form,
        'error': error,
        'page_title': _('Reset Password'),
    }
    return render(request, 'accounts/password_reset.html', context)


@require_POST
def password_recovery_view(request):
    """
    Exchange the tokens from the reset email for a session

    The reset link carries the tokens in the URL fragment, which never
    reaches the server; static/js/reset_password.js reads them and posts
    them here.
    """
    access_token = request.POST.get('access_token', '').strip()
    refresh_token = request.POST.get('refresh_token', '').strip()

    if not access_token or not refresh_token:
        return JsonResponse({'success': False, 'error': str(INVALID_RESET_LINK)}, status=400)

    try:
        user = Backend.anonymous().get_user(access_token)
    except BackendError as e:
        logger.warning(f"Recovery token rejected: {e.message}")
        user = None

    if user is None:
        return JsonResponse({'success': False, 'error': str(INVALID_RESET_LINK)}, status=400)

    try:
        expires_at = int(request.POST.get('expires_at', ''))
    except ValueError:
        expires_at = None

    sign_in_session(request, AuthSession(
        user_id=str(user.id),
        email=user.email or '',
        access_token=access_token,
        refresh_token=refresh_token,
        expires_at=expires_at,
    ))
    logger.info(f"Recovery session started for {user.email}")

    return JsonResponse({'success': True, 'redirect': reverse('accounts:password_update')})


@never_cache
def password_update_view(request):
    """Set a new password; needs the session started by password_recovery_view."""
    auth = get_auth_session(request)
    error = None if auth else INVALID_RESET_LINK

    if request.method == 'POST' and auth:
        form = PasswordUpdateForm(request.POST)

        if form.is_valid():
            try:
                Backend.anonymous().update_password(
                    auth.access_token,
                    auth.refresh_token,
                    form.cleaned_data['password'],
                )
            except BackendError as e:
                error = e.message
            else:
                logger.info(f"Password updated for {auth.email}")
                clear_session(request)
                messages.success(request, _('Your password has been updated. Please sign in.'))
                return redirect('accounts:login')
    else:
        form = PasswordUpdateForm()

    context = {
        'form': form,
        'error': error,
        'has_session': auth is not None,
        'page_title': _('Set New Password'),
    }
    return render(request, 'accounts/password_update.html', context)
