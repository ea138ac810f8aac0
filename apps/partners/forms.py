from django import forms
from django.utils.translation import gettext_lazy as _
from crispy_forms.helper import FormHelper

from apps.industries.templatetags.industry_tags import humanize
from apps.tenants.schema import PartnerProfile


class PartnerForm(forms.Form):

    full_name = forms.CharField(
        label=_('Name'),
        max_length=200,
        widget=forms.TextInput(attrs={'class': 'form-control', 'autofocus': True}),
    )
    company = forms.CharField(
        max_length=200,
        required=False,
        widget=forms.TextInput(attrs={'class': 'form-control'}),
    )
    email = forms.EmailField(required=False, widget=forms.EmailInput(attrs={'class': 'form-control'}))
    phone = forms.CharField(max_length=50, required=False, widget=forms.TextInput(attrs={'class': 'form-control'}))
    partner_type = forms.ChoiceField(
        label=_('Partner Type'),
        widget=forms.Select(attrs={'class': 'form-select'}),
    )
    partner_tier = forms.ChoiceField(
        label=_('Tier'),
        widget=forms.Select(attrs={'class': 'form-select'}),
    )
    notes = forms.CharField(required=False, widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 3}))

    def __init__(self, *args, industry, **kwargs):
        super().__init__(*args, **kwargs)

        partner_types = industry.partner_types()
        partner_tiers = industry.partner_tiers()

        self.fields['partner_type'].choices = [(value, humanize(value).title()) for value in partner_types]
        self.fields['partner_type'].initial = partner_types[0]
        self.fields['partner_tier'].choices = [(value, humanize(value).title()) for value in partner_tiers]
        self.fields['partner_tier'].initial = 'prospect' if 'prospect' in partner_tiers else partner_tiers[0]

        self.helper = FormHelper()
        self.helper.form_tag = False

    def clean_email(self):
        return self.cleaned_data.get('email', '').lower().strip()

    def to_record(self):
        data = self.cleaned_data
        profile = PartnerProfile(
            partner_type=data['partner_type'],
            partner_tier=data['partner_tier'],
            company=data.get('company', '').strip(),
        )
        return {
            'full_name': data['full_name'].strip(),
            'email': data.get('email') or None,
            'phone': data.get('phone', '').strip() or None,
            'notes': data.get('notes', '').strip() or None,
            'contact_type': 'partner',
            'custom_fields': profile.to_blob(),
        }
