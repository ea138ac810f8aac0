from django import forms
from django.utils.translation import gettext_lazy as _

from .schema import BrandingSettings, HEX_COLOR_RE


class BusinessSettingsForm(forms.Form):
    """Only the name is editable; slug and industry are shown read-only."""

    name = forms.CharField(
        label=_('Business Name'),
        max_length=200,
        widget=forms.TextInput(attrs={'class': 'form-control'}),
    )

    def clean_name(self):
        name = self.cleaned_data.get('name', '').strip()
        if not name:
            raise forms.ValidationError(_('Business name is required.'))
        return name


class BrandingSettingsForm(forms.Form):

    display_name = forms.CharField(
        label=_('Display Name'),
        max_length=200,
        required=False,
        widget=forms.TextInput(attrs={'class': 'form-control'}),
        help_text=_('Shown in the sidebar instead of the business name.'),
    )
    primary_color = forms.CharField(
        label=_('Primary Color'),
        max_length=7,
        initial='#2563eb',
        widget=forms.TextInput(attrs={'class': 'form-control form-control-color', 'type': 'color'}),
    )
    logo_url = forms.URLField(
        label=_('Logo URL'),
        required=False,
        widget=forms.URLInput(attrs={'class': 'form-control', 'placeholder': 'https://'}),
    )

    @classmethod
    def from_settings(cls, branding: BrandingSettings):
        return cls(initial={
            'display_name': branding.display_name,
            'primary_color': branding.primary_color,
            'logo_url': branding.logo_url,
        })

    def clean_primary_color(self):
        color = self.cleaned_data.get('primary_color', '').strip()
        if not HEX_COLOR_RE.match(color):
            raise forms.ValidationError(_('Enter a colour like #2563eb.'))
        return color.lower()

    def to_settings(self) -> BrandingSettings:
        return BrandingSettings(
            primary_color=self.cleaned_data['primary_color'],
            logo_url=self.cleaned_data.get('logo_url') or '',
            display_name=(self.cleaned_data.get('display_name') or '').strip(),
        )
