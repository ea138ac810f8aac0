"""
Contact Views Tests
===================

Test Coverage:
1. List View - search, tenant scoping, terminology
2. Create View - insert with tenant id, failed writes
3. Edit View - pre-filled form, missing contact, writes that change nothing
4. Delete View - missing or hidden rows reported as errors
5. Export - Excel and CSV
"""

import io

import openpyxl
from django.test import SimpleTestCase
from django.urls import reverse

from apps.core.tests.fakes import BackendTestMixin


def _contact(pk, name, tenant_id='t-1', **extra):
    row = {
        'id': pk, 'tenant_id': tenant_id, 'full_name': name, 'email': None, 'phone': None,
        'contact_type': 'customer', 'created_at': f'2024-01-{pk:02d}',
    }
    row.update(extra)
    return row


class ContactListViewTest(BackendTestMixin, SimpleTestCase):

    tables = {'contacts': [
        _contact(1, 'Ann Lee', email='ann@example.com'),
        _contact(2, 'Bob Stone', phone='555-0100'),
        _contact(3, 'Carla Ng'),
        _contact(4, 'Ann Other', tenant_id='t-2'),
    ]}

    def setUp(self):
        super().setUp()
        self.login()

    def test_newest_first(self):
        response = self.client.get(reverse('contacts:contact_list'))

        self.assertEqual(response.status_code, 200)
        self.assertEqual([c['id'] for c in response.context['contacts']], [3, 2, 1])
        self.assertContains(response, 'Add Customer')

    def test_search_name(self):
        response = self.client.get(reverse('contacts:contact_list'), {'search': 'ann'})
        self.assertEqual([c['full_name'] for c in response.context['contacts']], ['Ann Lee'])

    def test_search_phone(self):
        response = self.client.get(reverse('contacts:contact_list'), {'search': '0100'})
        self.assertEqual([c['full_name'] for c in response.context['contacts']], ['Bob Stone'])

    def test_search_with_filter_syntax_is_neutralised(self):
        response = self.client.get(reverse('contacts:contact_list'), {'search': ',(),'})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.context['contacts']), 3)

    def test_load_failure(self):
        self.backend_client.fail('contacts', 'select', 'canceling statement due to statement timeout')

        response = self.client.get(reverse('contacts:contact_list'))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context['contacts'], [])
        self.assertContains(response, 'statement timeout')


class MedicalContactListTest(BackendTestMixin, SimpleTestCase):

    industry = 'medical'

    def test_terminology(self):
        self.login()
        response = self.client.get(reverse('contacts:contact_list'))
        self.assertContains(response, 'Add Patient')
        self.assertContains(response, 'No patients yet')


class ContactCreateViewTest(BackendTestMixin, SimpleTestCase):

    tables = {'contacts': []}

    def setUp(self):
        super().setUp()
        self.login()

    def test_form_label_uses_terminology(self):
        response = self.client.get(reverse('contacts:contact_create'))
        self.assertContains(response, 'Customer Name')

    def test_create(self):
        response = self.client.post(reverse('contacts:contact_create'), {
            'full_name': 'Dana Fox',
            'email': 'Dana@Example.com',
            'phone': '',
            'contact_type': '',
        })

        self.assertRedirects(response, reverse('contacts:contact_list'), fetch_redirect_response=False)
        (contact,) = self.backend_client.rows('contacts')
        self.assertEqual(contact['tenant_id'], 't-1')
        self.assertEqual(contact['full_name'], 'Dana Fox')
        self.assertEqual(contact['email'], 'dana@example.com')
        self.assertIsNone(contact['phone'])
        self.assertEqual(contact['contact_type'], 'customer')

    def test_name_required(self):
        response = self.client.post(reverse('contacts:contact_create'), {'full_name': ''})

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.context['form'].errors)
        self.assertEqual(self.backend_client.rows('contacts'), [])

    def test_failed_insert_is_not_reported_as_success(self):
        self.backend_client.fail('contacts', 'insert', 'new row violates row-level security policy')

        response = self.client.post(reverse('contacts:contact_create'), {'full_name': 'Dana Fox'})

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'Error creating customer: new row violates row-level security policy')
        self.assertNotContains(response, 'created successfully')


class ContactEditDeleteViewTest(BackendTestMixin, SimpleTestCase):

    tables = {'contacts': [
        _contact(1, 'Ann Lee', email='ann@example.com'),
        _contact(2, 'Other Tenant', tenant_id='t-2'),
    ]}

    def setUp(self):
        super().setUp()
        self.login()

    def test_edit_form_prefilled(self):
        response = self.client.get(reverse('contacts:contact_edit', args=[1]))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context['form'].initial['full_name'], 'Ann Lee')
        self.assertEqual(response.context['form'].initial['email'], 'ann@example.com')

    def test_edit_other_tenant_contact_is_404(self):
        response = self.client.get(reverse('contacts:contact_edit', args=[2]))
        self.assertEqual(response.status_code, 404)

    def test_update(self):
        response = self.client.post(reverse('contacts:contact_edit', args=[1]), {
            'full_name': 'Ann Lee-Park', 'email': 'ann@example.com', 'contact_type': 'lead',
        })

        self.assertRedirects(response, reverse('contacts:contact_list'), fetch_redirect_response=False)
        contact = self.backend_client.rows('contacts')[0]
        self.assertEqual(contact['full_name'], 'Ann Lee-Park')
        self.assertEqual(contact['contact_type'], 'lead')

    def test_update_cannot_touch_other_tenant(self):
        response = self.client.post(reverse('contacts:contact_edit', args=[2]), {'full_name': 'Hijacked'})

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'Error updating customer: The record no longer exists')
        self.assertNotContains(response, 'updated successfully')
        self.assertEqual(self.backend_client.rows('contacts')[1]['full_name'], 'Other Tenant')

    def test_update_missing_contact_reported(self):
        response = self.client.post(reverse('contacts:contact_edit', args=[999]), {'full_name': 'Ghost'})

        self.assertContains(response, 'Error updating customer')
        self.assertNotContains(response, 'updated successfully')
        self.assertEqual(response.context['form'].data['full_name'], 'Ghost')

    def test_delete(self):
        response = self.client.post(reverse('contacts:contact_delete', args=[1]))

        self.assertRedirects(response, reverse('contacts:contact_list'), fetch_redirect_response=False)
        self.assertEqual([c['id'] for c in self.backend_client.rows('contacts')], [2])

    def test_delete_requires_post(self):
        response = self.client.get(reverse('contacts:contact_delete', args=[1]))
        self.assertEqual(response.status_code, 405)

    def test_delete_missing_contact_reported(self):
        response = self.client.post(reverse('contacts:contact_delete', args=[999]), follow=True)

        self.assertContains(response, 'Error deleting customer: The record no longer exists')
        self.assertNotContains(response, 'deleted successfully')

    def test_delete_other_tenant_contact_reported(self):
        response = self.client.post(reverse('contacts:contact_delete', args=[2]), follow=True)

        self.assertContains(response, 'Error deleting customer')
        self.assertEqual([c['id'] for c in self.backend_client.rows('contacts')], [1, 2])

    def test_delete_hidden_by_row_level_security_reported(self):
        self.backend_client.hide('contacts', 'delete')

        response = self.client.post(reverse('contacts:contact_delete', args=[1]), follow=True)

        self.assertContains(response, 'Error deleting customer')
        self.assertNotContains(response, 'deleted successfully')
        self.assertEqual(len(self.backend_client.rows('contacts')), 2)

    def test_failed_delete_reported(self):
        self.backend_client.fail('contacts', 'delete', 'update or delete on table "contacts" violates foreign key constraint')

        response = self.client.post(reverse('contacts:contact_delete', args=[1]), follow=True)

        self.assertContains(response, 'Error deleting customer')
        self.assertNotContains(response, 'deleted successfully')


class ContactExportViewTest(BackendTestMixin, SimpleTestCase):

    tables = {'contacts': [
        _contact(1, 'Zoë Müller', email='zoe@example.com'),
        _contact(2, 'Other Tenant', tenant_id='t-2'),
    ]}

    def setUp(self):
        super().setUp()
        self.login()

    def test_excel_export(self):
        response = self.client.get(reverse('contacts:contact_export'), {'format': 'excel'})

        self.assertEqual(response.status_code, 200)
        self.assertIn('.xlsx', response['Content-Disposition'])
        self.assertIn('customers_', response['Content-Disposition'])

        sheet = openpyxl.load_workbook(io.BytesIO(response.content)).active
        self.assertEqual(sheet.title, 'Customers')
        self.assertEqual(sheet.cell(row=1, column=2).value, 'Name')
        self.assertEqual(sheet.cell(row=2, column=2).value, 'Zoë Müller')
        self.assertEqual(sheet.max_row, 2)

    def test_csv_export(self):
        response = self.client.get(reverse('contacts:contact_export'), {'format': 'csv'})

        self.assertEqual(response.status_code, 200)
        content = response.content.decode('utf-8')
        self.assertTrue(content.startswith('\ufeffID,Name,Email'))
        self.assertIn('Zoë Müller', content)
        self.assertNotIn('Other Tenant', content)

    def test_invalid_format(self):
        response = self.client.get(reverse('contacts:contact_export'), {'format': 'pdf'})
        self.assertRedirects(response, reverse('contacts:contact_list'), fetch_redirect_response=False)
