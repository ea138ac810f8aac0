
from django import forms
from django.utils.translation import gettext_lazy as _
from django.core.exceptions import ValidationError
from crispy_forms.helper import FormHelper
from crispy_forms.layout import Layout, Field, Submit
from crispy_forms.bootstrap import FormActions

MIN_PASSWORD_LENGTH = 6


# LOGIN / SIGN-UP FORM
class LoginForm(forms.Form):
    """
    One form for both modes; the page toggles the hidden 'mode' field
    between sign-in and sign-up.
    """

    MODE_SIGN_IN = 'signin'
    MODE_SIGN_UP = 'signup'

    mode = forms.ChoiceField(
        choices=[(MODE_SIGN_IN, _('Sign in')), (MODE_SIGN_UP, _('Sign up'))],
        initial=MODE_SIGN_IN,
        required=False,
        widget=forms.HiddenInput(),
    )

    email = forms.EmailField(
        label=_('Email Address'),
        max_length=255,
        required=True,
        widget=forms.EmailInput(attrs={
            'class': 'form-control',
            'placeholder': _('you@business.com'),
            'autofocus': True,
        })
    )

    password = forms.CharField(
        label=_('Password'),
        required=True,
        widget=forms.PasswordInput(attrs={
            'class': 'form-control',
            'placeholder': _('Enter your password'),
        })
    )

    def clean_email(self):
        email = self.cleaned_data.get('email', '')
        return email.lower().strip()

    def clean_mode(self):
        return self.cleaned_data.get('mode') or self.MODE_SIGN_IN


class PasswordResetRequestForm(forms.Form):

    email = forms.EmailField(
        label=_('Email Address'),
        max_length=255,
        required=True,
        widget=forms.EmailInput(attrs={
            'class': 'form-control',
            'placeholder': _('you@business.com'),
            'autofocus': True,
        }),
        help_text=_('Enter your email address to receive a password reset link.')
    )

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.helper = FormHelper()
        self.helper.form_method = 'post'

        self.helper.layout = Layout(
            'email',
            FormActions(
                Submit('submit', _('Send Reset Link'), css_class='btn btn-primary w-100')
            )
        )

    def clean_email(self):
        """Clean and normalize email"""
        return self.cleaned_data.get('email', '').lower().strip()


class PasswordUpdateForm(forms.Form):

    password = forms.CharField(
        label=_('New Password'),
        required=True,
        strip=False,
        widget=forms.PasswordInput(attrs={
            'class': 'form-control',
            'placeholder': _('Enter new password'),
            'autofocus': True,
        }),
    )

    confirm_password = forms.CharField(
        label=_('Confirm Password'),
        required=True,
        strip=False,
        widget=forms.PasswordInput(attrs={
            'class': 'form-control',
            'placeholder': _('Confirm new password'),
        })
    )

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.helper = FormHelper()
        self.helper.form_method = 'post'

        self.helper.layout = Layout(
            Field('password', css_class='mb-3'),
            Field('confirm_password', css_class='mb-3'),
            FormActions(
                Submit('submit', _('Update Password'), css_class='btn btn-primary w-100')
            )
        )

    def clean(self):
        cleaned_data = super().clean()
        password = cleaned_data.get('password')
        confirm = cleaned_data.get('confirm_password')

        if password is None or confirm is None:
            return cleaned_data

        if password != confirm:
            raise ValidationError(_('Passwords do not match'))

        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                _('Password must be at least %(min)d characters') % {'min': MIN_PASSWORD_LENGTH}
            )

        return cleaned_data
