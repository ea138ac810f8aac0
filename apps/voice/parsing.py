"""
Turning a dictated field note into billing items, tasks and notes

Transcription is stubbed: transcribe() returns a fixed sample until a
speech-to-text service is wired in. Parsing is real and driven by the
industry's voice_parsing keywords:

    "Spent 2 hours on the water heater."   -> labor item, 2 x labor rate
    "Replaced the pressure valve."         -> part item
    "Need to come back next week."         -> task
    anything else                          -> job notes
"""

import re
from typing import Optional

SAMPLE_TRANSCRIPTION = (
    "Spent 2 hours replacing the water heater. "
    "Replaced the pressure valve and two fittings. "
    "Need to come back next week to check the pilot light. "
    "Customer was happy with the work."
)

_SENTENCE_SPLIT = re.compile(r'(?<=[.!?])\s+|\n+')
_HOURS = re.compile(r'(\d+(?:\.\d+)?)\s*(?:hours?|hrs?)\b', re.IGNORECASE)
_MINUTES = re.compile(r'(\d+)\s*(?:minutes?|mins?)\b', re.IGNORECASE)

DEFAULT_HOURS = 1


def transcribe(entry_id) -> str:
    """Speech-to-text for a voice entry. Stub: always the sample text."""
    return SAMPLE_TRANSCRIPTION


def split_sentences(text: str):
    return [s.strip() for s in _SENTENCE_SPLIT.split(text or '') if s and s.strip()]


def _matches(sentence: str, keywords) -> bool:
    lowered = sentence.lower()
    return any(re.search(rf'\b{re.escape(keyword.lower())}\b', lowered) for keyword in keywords)


def read_hours(sentence: str) -> float:
    """Hours mentioned in sentence ('2 hours', '1.5 hrs', '30 minutes'), default 1."""
    match = _HOURS.search(sentence)
    if match:
        return float(match.group(1))
    match = _MINUTES.search(sentence)
    if match:
        return round(int(match.group(1)) / 60, 2)
    return DEFAULT_HOURS


def _format_hours(hours: float) -> str:
    return str(int(hours)) if float(hours).is_integer() else str(hours)


def parse_transcription(text: str, voice_parsing: Optional[dict], labor_rate: float) -> dict:
    """
    Split text into {'billing_items', 'tasks', 'job_notes'}

    Each sentence lands in exactly one bucket, checked in order: time
    keywords, part keywords, follow-up keywords, notes. Without a
    voice_parsing config everything becomes notes.
    """
    voice_parsing = voice_parsing or {}
    time_keywords = voice_parsing.get('time_keywords') or []
    part_keywords = voice_parsing.get('part_keywords') or []
    followup_keywords = voice_parsing.get('followup_keywords') or []

    billing_items = []
    tasks = []
    notes = []

    for sentence in split_sentences(text):
        if _matches(sentence, time_keywords):
            hours = read_hours(sentence)
            billing_items.append({
                'description': f'Labor - {_format_hours(hours)} hours',
                'quantity': hours,
                'unit_price': labor_rate,
                'type': 'labor',
            })
        elif _matches(sentence, part_keywords):
            billing_items.append({
                'description': sentence.rstrip('.!?'),
                'quantity': 1,
                'unit_price': 0,
                'type': 'part',
            })
        elif _matches(sentence, followup_keywords):
            tasks.append({'description': sentence.rstrip('.!?')})
        else:
            notes.append(sentence)

    return {
        'billing_items': billing_items,
        'tasks': tasks,
        'job_notes': ' '.join(notes),
    }
