"""
Job Views Tests
===============

Test Coverage:
1. Board - one column per industry pipeline stage
2. Create View - choices from the industry, default status
3. Change Status View - validation, AJAX, failed writes, missing jobs
"""

from django.test import SimpleTestCase
from django.urls import reverse

from apps.core.tests.fakes import BackendTestMixin
from apps.jobs.views import build_board


def _job(pk, title, status, tenant_id='t-1', **extra):
    row = {'id': pk, 'tenant_id': tenant_id, 'title': title, 'status': status,
           'contact_id': None, 'created_at': f'2024-02-{pk:02d}'}
    row.update(extra)
    return row


class BuildBoardTest(SimpleTestCase):

    def test_columns_follow_stage_order(self):
        jobs = [_job(1, 'A', 'quoted'), _job(2, 'B', 'lead'), _job(3, 'C', 'quoted'), _job(4, 'D', 'archived')]

        columns = build_board(['lead', 'quoted', 'paid'], jobs)

        self.assertEqual([c['stage'] for c in columns], ['lead', 'quoted', 'paid'])
        self.assertEqual([c['count'] for c in columns], [1, 2, 0])
        self.assertEqual([j['title'] for j in columns[1]['jobs']], ['A', 'C'])

    def test_moves_exclude_current_stage(self):
        columns = build_board(['lead', 'quoted', 'scheduled', 'in_progress', 'complete'], [])
        self.assertEqual(columns[1]['moves'], ['lead', 'scheduled', 'in_progress'])


class JobBoardViewTest(BackendTestMixin, SimpleTestCase):

    industry = 'real_estate'
    tables = {
        'contacts': [{'id': 7, 'tenant_id': 't-1', 'full_name': 'Pat Buyer'}],
        'jobs': [
            _job(1, '12 Elm St', 'showing', contact_id=7),
            _job(2, '9 Oak Ave', 'offer'),
            _job(3, 'Not ours', 'offer', tenant_id='t-2'),
        ],
    }

    def setUp(self):
        super().setUp()
        self.login()

    def test_board_uses_industry_stages(self):
        response = self.client.get(reverse('jobs:job_board'))

        self.assertEqual(response.status_code, 200)
        columns = response.context['columns']
        self.assertEqual([c['stage'] for c in columns], ['lead', 'showing', 'offer', 'under_contract', 'closed'])
        self.assertEqual(response.context['total_count'], 2)
        self.assertContains(response, 'Pat Buyer')
        self.assertContains(response, 'under contract')
        self.assertNotContains(response, 'Not ours')

    def test_create_form_choices(self):
        response = self.client.get(reverse('jobs:job_create'))

        form = response.context['form']
        self.assertEqual(form.fields['status'].initial, 'lead')
        self.assertEqual([value for value, _ in form.fields['contact_id'].choices], ['', 7])
        self.assertEqual(form.fields['title'].label, 'Deal Title')


class JobCreateViewTest(BackendTestMixin, SimpleTestCase):

    tables = {'contacts': [{'id': 7, 'tenant_id': 't-1', 'full_name': 'Ann Lee'}], 'jobs': []}

    def setUp(self):
        super().setUp()
        self.login()

    def test_create(self):
        response = self.client.post(reverse('jobs:job_create'), {
            'title': 'Replace water heater',
            'contact_id': '7',
            'job_type': 'installation',
            'status': 'scheduled',
            'scheduled_date': '2024-03-01',
            'estimated_total': '1250.00',
        })

        self.assertRedirects(response, reverse('jobs:job_board'), fetch_redirect_response=False)
        (job,) = self.backend_client.rows('jobs')
        self.assertEqual(job['tenant_id'], 't-1')
        self.assertEqual(job['contact_id'], 7)
        self.assertEqual(job['status'], 'scheduled')
        self.assertEqual(job['scheduled_date'], '2024-03-01')
        self.assertEqual(job['estimated_total'], 1250.0)

    def test_status_defaults_to_first_stage(self):
        self.client.post(reverse('jobs:job_create'), {'title': 'Quick fix'})

        (job,) = self.backend_client.rows('jobs')
        self.assertEqual(job['status'], 'lead')
        self.assertIsNone(job['contact_id'])

    def test_status_from_another_industry_rejected(self):
        response = self.client.post(reverse('jobs:job_create'), {'title': 'Loan', 'status': 'underwriting'})

        self.assertEqual(response.status_code, 200)
        self.assertIn('status', response.context['form'].errors)
        self.assertEqual(self.backend_client.rows('jobs'), [])

    def test_failed_insert_reported(self):
        self.backend_client.fail('jobs', 'insert', 'null value in column "title"')

        response = self.client.post(reverse('jobs:job_create'), {'title': 'Quick fix'})

        self.assertContains(response, 'Error creating job')
        self.assertNotContains(response, 'created successfully')


class JobChangeStatusViewTest(BackendTestMixin, SimpleTestCase):

    tables = {'jobs': [_job(1, 'Fix sink', 'lead'), _job(2, 'Other', 'lead', tenant_id='t-2')]}

    def setUp(self):
        super().setUp()
        self.login()

    def test_change_status(self):
        response = self.client.post(reverse('jobs:job_change_status', args=[1]), {'status': 'in_progress'})

        self.assertRedirects(response, reverse('jobs:job_board'), fetch_redirect_response=False)
        self.assertEqual(self.backend_client.rows('jobs')[0]['status'], 'in_progress')

    def test_change_status_ajax(self):
        response = self.client.post(
            reverse('jobs:job_change_status', args=[1]),
            {'status': 'complete'},
            HTTP_X_REQUESTED_WITH='XMLHttpRequest',
        )

        self.assertEqual(response.json(), {'success': True, 'status': 'complete'})

    def test_unknown_status_rejected(self):
        response = self.client.post(
            reverse('jobs:job_change_status', args=[1]),
            {'status': 'funded'},
            HTTP_X_REQUESTED_WITH='XMLHttpRequest',
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(self.backend_client.rows('jobs')[0]['status'], 'lead')

    def test_other_tenant_job_untouched(self):
        response = self.client.post(reverse('jobs:job_change_status', args=[2]), {'status': 'paid'}, follow=True)

        self.assertContains(response, 'Could not move job: The record no longer exists')
        self.assertNotContains(response, 'Status changed')
        self.assertEqual(self.backend_client.rows('jobs')[1]['status'], 'lead')

    def test_missing_job_ajax(self):
        response = self.client.post(
            reverse('jobs:job_change_status', args=[999]),
            {'status': 'quoted'},
            HTTP_X_REQUESTED_WITH='XMLHttpRequest',
        )

        self.assertEqual(response.status_code, 404)
        self.assertFalse(response.json()['success'])

    def test_ajax_errors_leave_no_flash_message(self):
        self.client.post(
            reverse('jobs:job_change_status', args=[1]),
            {'status': 'funded'},
            HTTP_X_REQUESTED_WITH='XMLHttpRequest',
        )
        self.client.post(
            reverse('jobs:job_change_status', args=[999]),
            {'status': 'quoted'},
            HTTP_X_REQUESTED_WITH='XMLHttpRequest',
        )

        response = self.client.get(reverse('jobs:job_board'))

        self.assertNotContains(response, 'Invalid status')
        self.assertNotContains(response, 'Could not move')

    def test_failed_update_reported(self):
        self.backend_client.fail('jobs', 'update', 'permission denied for table jobs')

        response = self.client.post(
            reverse('jobs:job_change_status', args=[1]),
            {'status': 'paid'},
            HTTP_X_REQUESTED_WITH='XMLHttpRequest',
        )

        self.assertEqual(response.status_code, 502)
        self.assertFalse(response.json()['success'])
