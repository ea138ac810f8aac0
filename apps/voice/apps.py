from django.apps import AppConfig


class VoiceConfig(AppConfig):
    """
    Voice entry - dictated field notes attached to a job

    Recordings are queued to apps.voice.tasks.process_voice_entry, which
    transcribes and parses them into billing items, tasks and notes.
    """
    name = 'apps.voice'
    verbose_name = 'Voice Entry'
