"""
Tests for Custom Decorators
============================

Tests all custom decorators to ensure proper access control.

Test Cases:
1. login_required decorator
2. tenant_required decorator
3. role_required decorator
"""

import time

from django.contrib.messages import get_messages
from django.contrib.messages.middleware import MessageMiddleware
from django.contrib.sessions.middleware import SessionMiddleware
from django.http import HttpResponse
from django.test import RequestFactory, SimpleTestCase

from apps.accounts.auth import AuthSession
from apps.accounts.decorators import login_required, role_required, tenant_required
from apps.core.tests.fakes import BackendTestMixin, membership_row, tenant_row


def _prepare(request, auth=None):
    SessionMiddleware(lambda r: HttpResponse()).process_request(request)
    MessageMiddleware(lambda r: HttpResponse()).process_request(request)
    if auth is not None:
        auth.save(request)
    return request


def _auth():
    return AuthSession(
        user_id='user-1',
        email='owner@example.com',
        access_token='access-user-1',
        refresh_token='refresh-user-1',
        expires_at=int(time.time()) + 3600,
    )


class LoginRequiredDecoratorTest(BackendTestMixin, SimpleTestCase):
    """Test @login_required decorator"""

    def setUp(self):
        """Setup test data"""
        super().setUp()
        self.factory = RequestFactory()

        @login_required
        def test_view(request, auth):
            return HttpResponse(f'Hello {auth.email}')

        self.test_view = test_view

    def test_signed_in_user_can_access(self):
        request = _prepare(self.factory.get('/test/'), _auth())

        response = self.test_view(request)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.content, b'Hello owner@example.com')

    def test_anonymous_redirected_to_login(self):
        request = _prepare(self.factory.get('/test/'))

        response = self.test_view(request)

        self.assertEqual(response.status_code, 302)
        self.assertEqual(response.url, '/accounts/login/')
        messages = [str(m) for m in get_messages(request)]
        self.assertIn('Please login to continue.', messages)

    def test_anonymous_ajax_gets_401(self):
        request = _prepare(self.factory.get('/test/', HTTP_X_REQUESTED_WITH='XMLHttpRequest'))

        response = self.test_view(request)

        self.assertEqual(response.status_code, 401)


class TenantRequiredDecoratorTest(BackendTestMixin, SimpleTestCase):
    """Test @tenant_required decorator"""

    tables = {
        'tenants': [tenant_row('t-1', 'Acme Plumbing'), tenant_row('t-2', 'Smile Dental', industry='medical')],
        'tenant_users': [membership_row('t-1'), membership_row('t-2', role='staff')],
    }

    def setUp(self):
        """Setup test data"""
        super().setUp()
        self.factory = RequestFactory()

        @tenant_required
        def test_view(request, ctx):
            return HttpResponse(f'{ctx.tenant["name"]}|{ctx.industry.id}|{ctx.role}')

        self.test_view = test_view

    def test_first_tenant_by_default(self):
        response = self.test_view(_prepare(self.factory.get('/test/'), _auth()))
        self.assertEqual(response.content, b'Acme Plumbing|blue_collar|owner')

    def test_backend_called_with_user_token(self):
        self.test_view(_prepare(self.factory.get('/test/'), _auth()))
        self.backend_client.postgrest.auth.assert_called_with('access-user-1')

    def test_inactive_memberships_ignored(self):
        self.backend_client.tables['tenant_users'][0]['is_active'] = False

        response = self.test_view(_prepare(self.factory.get('/test/'), _auth()))

        self.assertEqual(response.content, b'Smile Dental|medical|staff')


class RoleRequiredDecoratorTest(BackendTestMixin, SimpleTestCase):
    """Test @role_required decorator"""

    role = 'staff'

    def setUp(self):
        """Setup test data"""
        super().setUp()
        self.factory = RequestFactory()

        @tenant_required
        @role_required('owner', 'admin')
        def test_view(request, ctx):
            return HttpResponse('Allowed')

        self.test_view = test_view

    def test_other_roles_redirected(self):
        request = _prepare(self.factory.get('/test/'), _auth())

        response = self.test_view(request)

        self.assertEqual(response.status_code, 302)
        self.assertEqual(response.url, '/dashboard/')
        messages = [str(m) for m in get_messages(request)]
        self.assertIn('You do not have permission to perform this action.', messages)

    def test_other_roles_ajax_gets_403(self):
        request = _prepare(self.factory.get('/test/', HTTP_X_REQUESTED_WITH='XMLHttpRequest'), _auth())
        self.assertEqual(self.test_view(request).status_code, 403)

    def test_allowed_role(self):
        self.backend_client.tables['tenant_users'][0]['role'] = 'admin'
        response = self.test_view(_prepare(self.factory.get('/test/'), _auth()))
        self.assertEqual(response.content, b'Allowed')
