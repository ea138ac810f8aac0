import csv
import logging

import openpyxl
from openpyxl.styles import Font, PatternFill
from django.conf import settings
from django.contrib import messages
from django.http import Http404, HttpResponse
from django.shortcuts import redirect
from django.utils import timezone
from django.views.decorators.http import require_POST

from apps.accounts.decorators import tenant_required
from apps.core.backend import BackendError
from apps.core.utils import render_page, search_filter
from .forms import ContactForm

logger = logging.getLogger(__name__)

SEARCH_COLUMNS = ('full_name', 'email', 'phone')

EXPORT_COLUMNS = [
    ('id', 'ID'),
    ('full_name', 'Name'),
    ('email', 'Email'),
    ('phone', 'Phone'),
    ('address', 'Address'),
    ('city', 'City'),
    ('state', 'State'),
    ('zip', 'Zip'),
    ('contact_type', 'Type'),
    ('source', 'Source'),
    ('notes', 'Notes'),
    ('created_at', 'Created'),
]


def _contacts_query(ctx, search_query):
    query = ctx.select('contacts').order('created_at', desc=True)
    filters = search_filter(search_query, SEARCH_COLUMNS)
    if filters:
        query = query.or_(filters)
    return query


def _get_contact(ctx, pk):
    contact = ctx.backend.fetch_one(ctx.select('contacts').eq('id', pk), 'load contact')
    if contact is None:
        raise Http404('Contact not found')
    return contact


@tenant_required
def contact_list_view(request, ctx):
    search_query = request.GET.get('search', '').strip()

    try:
        contacts = ctx.backend.fetch(
            _contacts_query(ctx, search_query).limit(settings.LIST_PAGE_LIMIT),
            'load contacts',
        )
    except BackendError as e:
        contacts = []
        messages.error(request, f'Could not load {ctx.industry.label("contacts").lower()}: {e.message}')

    context = {
        'contacts': contacts,
        'search_query': search_query,
    }
    return render_page(request, ctx, 'contacts/contact_list.html', context, active_page='contacts')


@tenant_required
def contact_create_view(request, ctx):
    contact_label = ctx.industry.label('contact')

    if request.method == 'POST':
        form = ContactForm(request.POST, industry=ctx.industry)

        if form.is_valid():
            record = form.to_record()
            record['tenant_id'] = ctx.tenant_id
            try:
                ctx.backend.execute(ctx.backend.table('contacts').insert(record), 'create contact')
            except BackendError as e:
                messages.error(request, f'Error creating {contact_label.lower()}: {e.message}')
            else:
                messages.success(request, f'{contact_label} "{record["full_name"]}" created successfully')
                return redirect('contacts:contact_list')
    else:
        form = ContactForm(industry=ctx.industry)

    context = {
        'form': form,
        'form_title': f'Add {contact_label}',
        'submit_text': 'Create',
    }
    return render_page(request, ctx, 'contacts/contact_form.html', context, active_page='contacts')


@tenant_required
def contact_edit_view(request, ctx, pk):
    contact_label = ctx.industry.label('contact')

    if request.method == 'POST':
        form = ContactForm(request.POST, industry=ctx.industry)

        if form.is_valid():
            record = form.to_record()
            try:
                ctx.backend.write(
                    ctx.backend.table('contacts').update(record).eq('id', pk).eq('tenant_id', ctx.tenant_id),
                    'update contact',
                )
            except BackendError as e:
                messages.error(request, f'Error updating {contact_label.lower()}: {e.message}')
            else:
                messages.success(request, f'{contact_label} "{record["full_name"]}" updated successfully')
                return redirect('contacts:contact_list')
    else:
        try:
            contact = _get_contact(ctx, pk)
        except BackendError as e:
            messages.error(request, f'Could not load {contact_label.lower()}: {e.message}')
            return redirect('contacts:contact_list')
        form = ContactForm.from_record(contact, industry=ctx.industry)

    context = {
        'form': form,
        'form_title': f'Edit {contact_label}',
        'submit_text': 'Update',
        'pk': pk,
    }
    return render_page(request, ctx, 'contacts/contact_form.html', context, active_page='contacts')


@tenant_required
@require_POST
def contact_delete_view(request, ctx, pk):
    contact_label = ctx.industry.label('contact')

    try:
        ctx.backend.write(
            ctx.backend.table('contacts').delete().eq('id', pk).eq('tenant_id', ctx.tenant_id),
            'delete contact',
        )
    except BackendError as e:
        messages.error(request, f'Error deleting {contact_label.lower()}: {e.message}')
    else:
        logger.info(f"Contact {pk} deleted from tenant {ctx.tenant_id} by {ctx.auth.email}")
        messages.success(request, f'{contact_label} deleted successfully')

    return redirect('contacts:contact_list')


@tenant_required
def contact_export_view(request, ctx):
    export_format = request.GET.get('format', 'excel')
    if export_format not in ('excel', 'csv'):
        messages.error(request, 'Invalid export format')
        return redirect('contacts:contact_list')

    search_query = request.GET.get('search', '').strip()
    try:
        contacts = ctx.backend.fetch(_contacts_query(ctx, search_query), 'export contacts')
    except BackendError as e:
        messages.error(request, f'Export failed: {e.message}')
        return redirect('contacts:contact_list')

    headers = [header for _, header in EXPORT_COLUMNS]
    rows = [[contact.get(column) or '' for column, _ in EXPORT_COLUMNS] for contact in contacts]
    filename = f'{ctx.industry.label("contacts").lower().replace(" ", "_")}_{timezone.now().strftime("%Y%m%d_%H%M%S")}'

    if export_format == 'excel':
        wb = openpyxl.Workbook()
        ws = wb.active
        ws.title = ctx.industry.label('contacts')[:31]

        # Write headers with styling
        for col, header in enumerate(headers, start=1):
            cell = ws.cell(row=1, column=col, value=header)
            cell.font = Font(bold=True, color="FFFFFF")
            cell.fill = PatternFill(start_color="2563EB", end_color="2563EB", fill_type="solid")

        for row_number, row in enumerate(rows, start=2):
            for col, value in enumerate(row, start=1):
                ws.cell(row=row_number, column=col, value=value)

        # Adjust column widths
        for col in ws.columns:
            max_length = max(len(str(cell.value or '')) for cell in col)
            ws.column_dimensions[col[0].column_letter].width = min(max_length + 2, 50)

        response = HttpResponse(
            content_type='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
        )
        response['Content-Disposition'] = f'attachment; filename="{filename}.xlsx"'
        wb.save(response)
        return response

    response = HttpResponse(content_type='text/csv; charset=utf-8')
    response['Content-Disposition'] = f'attachment; filename="{filename}.csv"'

    # Write BOM for Excel UTF-8 compatibility
    response.write('\ufeff')

    writer = csv.writer(response)
    writer.writerow(headers)
    writer.writerows(rows)
    return response
