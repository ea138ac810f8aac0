from django import forms
from django.conf import settings
from django.core.exceptions import ValidationError
from django.template.defaultfilters import filesizeformat
from django.utils.translation import gettext_lazy as _


class VoiceEntryForm(forms.Form):

    job_id = forms.TypedChoiceField(
        coerce=int,
        empty_value=None,
        required=False,
        widget=forms.Select(attrs={'class': 'form-select'}),
    )
    recording = forms.FileField(
        widget=forms.ClearableFileInput(attrs={'class': 'form-control', 'accept': 'audio/*'}),
    )
    duration_seconds = forms.IntegerField(required=False, min_value=0, widget=forms.HiddenInput())

    def __init__(self, *args, jobs=(), job_label='Job', **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['job_id'].label = _('Select %(job)s') % {'job': job_label}
        self.fields['job_id'].choices = [('', _('Choose a %(job)s...') % {'job': job_label.lower()})] + [
            (job['id'], f"{job.get('title')} ({str(job.get('status', '')).replace('_', ' ')})") for job in jobs
        ]

    def clean_recording(self):
        recording = self.cleaned_data['recording']

        if recording.size > settings.VOICE_MAX_UPLOAD_SIZE:
            raise ValidationError(
                _('Recording is too large (max %(size)s).') % {'size': filesizeformat(settings.VOICE_MAX_UPLOAD_SIZE)}
            )

        content_type = getattr(recording, 'content_type', '') or ''
        if not content_type.startswith('audio/'):
            raise ValidationError(_('Upload an audio recording.'))

        return recording
