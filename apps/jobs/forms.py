from django import forms
from django.utils.translation import gettext_lazy as _
from crispy_forms.helper import FormHelper

from apps.industries.templatetags.industry_tags import humanize


class JobForm(forms.Form):
    """
    Create form for a job

    Choices come from the active industry: job_type from its job types,
    status from its pipeline stages (defaulting to the first stage).
    """

    title = forms.CharField(
        max_length=200,
        widget=forms.TextInput(attrs={'class': 'form-control', 'autofocus': True}),
    )
    contact_id = forms.TypedChoiceField(
        coerce=int,
        empty_value=None,
        required=False,
        widget=forms.Select(attrs={'class': 'form-select'}),
    )
    job_type = forms.ChoiceField(
        required=False,
        widget=forms.Select(attrs={'class': 'form-select'}),
    )
    status = forms.ChoiceField(
        required=False,
        widget=forms.Select(attrs={'class': 'form-select'}),
    )
    scheduled_date = forms.DateField(
        required=False,
        widget=forms.DateInput(attrs={'class': 'form-control', 'type': 'date'}),
    )
    estimated_total = forms.DecimalField(
        required=False,
        min_value=0,
        max_digits=12,
        decimal_places=2,
        widget=forms.NumberInput(attrs={'class': 'form-control', 'step': '0.01', 'placeholder': '0.00'}),
    )
    description = forms.CharField(
        required=False,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 3}),
    )

    def __init__(self, *args, industry, contacts=(), **kwargs):
        super().__init__(*args, **kwargs)

        job_label = industry.label('job')
        contact_label = industry.label('contact')
        stages = industry.pipeline_stages()
        job_types = industry.job_types()

        self.fields['title'].label = _('%(job)s Title') % {'job': job_label}

        self.fields['contact_id'].label = contact_label
        self.fields['contact_id'].choices = [('', _('Select %(contact)s...') % {'contact': contact_label.lower()})] + [
            (contact['id'], contact.get('full_name') or f"#{contact['id']}") for contact in contacts
        ]

        self.fields['job_type'].label = _('%(job)s Type') % {'job': job_label}
        self.fields['job_type'].choices = [(value, humanize(value).title()) for value in job_types]
        if job_types:
            self.fields['job_type'].initial = job_types[0]

        self.fields['status'].choices = [(stage, humanize(stage).title()) for stage in stages]
        self.default_status = stages[0] if stages else None
        self.fields['status'].initial = self.default_status

        self.helper = FormHelper()
        self.helper.form_tag = False

    def clean_status(self):
        return self.cleaned_data.get('status') or self.default_status

    def to_record(self):
        data = self.cleaned_data
        return {
            'title': data['title'].strip(),
            'contact_id': data.get('contact_id'),
            'job_type': data.get('job_type') or None,
            'status': data['status'],
            'scheduled_date': data['scheduled_date'].isoformat() if data.get('scheduled_date') else None,
            'estimated_total': float(data['estimated_total']) if data.get('estimated_total') is not None else None,
            'description': (data.get('description') or '').strip(),
        }
