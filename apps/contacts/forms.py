from django import forms
from django.utils.translation import gettext_lazy as _
from crispy_forms.helper import FormHelper


CONTACT_TYPE_CHOICES = [
    ('customer', _('Customer')),
    ('lead', _('Lead')),
    ('partner', _('Partner')),
    ('vendor', _('Vendor')),
]

# Columns the form writes; the rest of a contact row is owned by the backend
CONTACT_FIELDS = (
    'full_name', 'email', 'phone', 'address', 'city', 'state', 'zip',
    'contact_type', 'source', 'notes',
)


class ContactForm(forms.Form):

    full_name = forms.CharField(
        max_length=200,
        widget=forms.TextInput(attrs={'class': 'form-control', 'autofocus': True}),
    )
    phone = forms.CharField(
        max_length=50,
        required=False,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': '(555) 123-4567'}),
    )
    email = forms.EmailField(
        required=False,
        widget=forms.EmailInput(attrs={'class': 'form-control'}),
    )
    source = forms.CharField(
        max_length=100,
        required=False,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': _('e.g., Referral, Google')}),
    )
    address = forms.CharField(
        max_length=255,
        required=False,
        widget=forms.TextInput(attrs={'class': 'form-control'}),
    )
    city = forms.CharField(max_length=100, required=False, widget=forms.TextInput(attrs={'class': 'form-control'}))
    state = forms.CharField(max_length=50, required=False, widget=forms.TextInput(attrs={'class': 'form-control'}))
    zip = forms.CharField(max_length=20, required=False, widget=forms.TextInput(attrs={'class': 'form-control'}))
    contact_type = forms.ChoiceField(
        choices=CONTACT_TYPE_CHOICES,
        initial='customer',
        required=False,
        widget=forms.Select(attrs={'class': 'form-select'}),
    )
    notes = forms.CharField(
        required=False,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 3}),
    )

    def __init__(self, *args, industry=None, **kwargs):
        super().__init__(*args, **kwargs)

        # Field labels follow the industry ('Patient Name', 'Client Name', ...)
        contact_label = industry.label('contact') if industry else 'Contact'
        self.fields['full_name'].label = _('%(contact)s Name') % {'contact': contact_label}

        self.helper = FormHelper()
        self.helper.form_tag = False

    @classmethod
    def from_record(cls, contact, **kwargs):
        """Unbound form pre-filled from a contact row."""
        initial = {name: contact.get(name) or '' for name in CONTACT_FIELDS}
        initial['contact_type'] = contact.get('contact_type') or 'customer'
        return cls(initial=initial, **kwargs)

    def clean_email(self):
        return self.cleaned_data.get('email', '').lower().strip()

    def clean_contact_type(self):
        return self.cleaned_data.get('contact_type') or 'customer'

    def to_record(self):
        """Row values for insert/update; blank optional fields are stored as null."""
        record = {}
        for name in CONTACT_FIELDS:
            value = self.cleaned_data.get(name)
            if isinstance(value, str):
                value = value.strip()
            record[name] = value or None
        return record
