import logging

from django.conf import settings
from django.contrib import messages
from django.shortcuts import redirect

from apps.accounts.decorators import tenant_required
from apps.core.backend import BackendError
from apps.core.utils import render_page, search_filter
from apps.tenants.schema import PartnerProfile, SchemaVersionError
from .forms import PartnerForm

logger = logging.getLogger(__name__)

SEARCH_COLUMNS = ('full_name', 'email')

# Bootstrap badge colour per tier
TIER_BADGES = {
    'prospect': 'secondary',
    'top50': 'info',
    'account': 'warning',
    'channel': 'success',
    'active': 'info',
    'preferred': 'info',
    'exclusive': 'success',
    'strategic': 'success',
}


def partner_profile(contact):
    try:
        return PartnerProfile.from_blob(contact.get('custom_fields'))
    except SchemaVersionError as e:
        logger.warning(f"Partner {contact.get('id')} has unreadable custom_fields: {e}")
        return PartnerProfile()


@tenant_required
def partner_list_view(request, ctx):
    search_query = request.GET.get('search', '').strip()

    query = ctx.select('contacts').eq('contact_type', 'partner').order('full_name')
    filters = search_filter(search_query, SEARCH_COLUMNS)
    if filters:
        query = query.or_(filters)

    try:
        contacts = ctx.backend.fetch(query.limit(settings.LIST_PAGE_LIMIT), 'load partners')
    except BackendError as e:
        contacts = []
        messages.error(request, f'Could not load partners: {e.message}')

    partners = []
    for contact in contacts:
        profile = partner_profile(contact)
        partners.append({
            'contact': contact,
            'profile': profile,
            'badge': TIER_BADGES.get(profile.partner_tier, 'secondary'),
        })

    context = {
        'partners': partners,
        'search_query': search_query,
    }
    return render_page(request, ctx, 'partners/partner_list.html', context, active_page='partners')


@tenant_required
def partner_create_view(request, ctx):
    if request.method == 'POST':
        form = PartnerForm(request.POST, industry=ctx.industry)

        if form.is_valid():
            record = form.to_record()
            record['tenant_id'] = ctx.tenant_id
            try:
                ctx.backend.execute(ctx.backend.table('contacts').insert(record), 'create partner')
            except BackendError as e:
                messages.error(request, f'Error creating partner: {e.message}')
            else:
                messages.success(request, f'Partner "{record["full_name"]}" created successfully')
                return redirect('partners:partner_list')
    else:
        form = PartnerForm(industry=ctx.industry)

    context = {
        'form': form,
        'form_title': 'Add Partner',
        'submit_text': 'Create',
    }
    return render_page(request, ctx, 'partners/partner_form.html', context, active_page='partners')
