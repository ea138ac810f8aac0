"""
Industry registry

Static map of industry id -> IndustryConfig, built once from the JSON files
in apps/industries/data/. Every lookup is total: an unknown, empty or
missing id resolves to the 'custom' config, so callers never have to guard
against a missing industry.

Usage:
    from apps.industries import registry

    config = registry.resolve(tenant.get('industry'))
    config.terminology['contacts']   # 'Clients', 'Patients', ...
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from django.core.exceptions import ImproperlyConfigured

from apps.industries.constants import DEFAULT_INDUSTRY, INDUSTRY_IDS, VOICE_KEYWORD_GROUPS

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent / 'data'


@dataclass(frozen=True)
class VoiceParsing:
    """Keyword lists used to split a dictated note into billing items, tasks and notes."""
    time_keywords: Tuple[str, ...] = ()
    part_keywords: Tuple[str, ...] = ()
    followup_keywords: Tuple[str, ...] = ()

    def as_dict(self) -> dict:
        return {group: list(getattr(self, group)) for group in VOICE_KEYWORD_GROUPS}


@dataclass(frozen=True)
class IndustryConfig:
    """
    One industry's configuration

    Instances are immutable: lists are stored as tuples and maps as
    read-only proxies, so a config handed to a view can't leak changes
    into the shared registry.
    """
    id: str
    name: str
    terminology: Mapping[str, str]
    features: Mapping[str, object]
    pipeline_stages: Tuple[str, ...]
    job_types: Tuple[str, ...]
    billing_types: Tuple[str, ...] = ()
    compliance_requirements: Tuple[str, ...] = ()
    voice_parsing: Optional[VoiceParsing] = None
    custom_fields: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_data(cls, data: dict) -> 'IndustryConfig':
        """Build a config from already-validated data."""
        voice = data.get('voice_parsing')
        return cls(
            id=data['id'],
            name=data['name'],
            terminology=MappingProxyType(dict(data['terminology'])),
            features=MappingProxyType(dict(data['features'])),
            pipeline_stages=tuple(data['pipeline_stages']),
            job_types=tuple(data['job_types']),
            billing_types=tuple(data.get('billing_types') or ()),
            compliance_requirements=tuple(data.get('compliance_requirements') or ()),
            voice_parsing=VoiceParsing(**{k: tuple(voice.get(k) or ()) for k in VOICE_KEYWORD_GROUPS}) if voice else None,
            custom_fields=MappingProxyType(dict(data.get('custom_fields') or {})),
        )

    def as_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'terminology': dict(self.terminology),
            'features': dict(self.features),
            'pipeline_stages': list(self.pipeline_stages),
            'job_types': list(self.job_types),
            'billing_types': list(self.billing_types),
            'compliance_requirements': list(self.compliance_requirements),
            'voice_parsing': self.voice_parsing.as_dict() if self.voice_parsing else None,
            'custom_fields': dict(self.custom_fields),
        }


# PARTNER TAXONOMY
# Kept here (not in the JSON files) so every industry shares the same
# default lists without repeating them.

DEFAULT_PARTNER_TYPES = ('referral_partner', 'vendor', 'contractor')

PARTNER_TYPES = {
    'mortgage': ('realtor', 'title_company', 'appraiser', 'insurance_agent', 'financial_planner'),
    'insurance': ('referral_partner', 'agency', 'carrier_rep', 'adjuster'),
    'real_estate': ('lender', 'title_company', 'inspector', 'contractor', 'stager'),
    'legal': ('co_counsel', 'expert_witness', 'court_reporter', 'investigator'),
    'accounting': ('attorney', 'financial_advisor', 'banker', 'insurance_agent'),
    'blue_collar': ('supplier', 'subcontractor', 'equipment_vendor', 'referral_partner'),
    'home_services': ('supplier', 'subcontractor', 'equipment_vendor', 'referral_partner'),
    'automotive': ('parts_supplier', 'tow_service', 'body_shop', 'dealer'),
    'medical': ('specialist', 'lab', 'pharmacy', 'insurance_rep'),
    'beauty_wellness': ('product_vendor', 'educator', 'influencer', 'referral_partner'),
    'fitness': ('nutritionist', 'physical_therapist', 'supplement_vendor', 'influencer'),
    'pet_services': ('vet', 'pet_store', 'rescue_organization', 'trainer'),
    'events': ('venue', 'caterer', 'photographer', 'florist', 'dj_band'),
    'professional_services': ('referral_partner', 'technology_vendor', 'consultant', 'contractor'),
}

DEFAULT_PARTNER_TIERS = ('prospect', 'active', 'preferred', 'strategic')

PARTNER_TIERS = {
    'mortgage': ('prospect', 'top50', 'account', 'channel'),
    'real_estate': ('prospect', 'preferred', 'exclusive'),
}


def lookup(table, key, default):
    """
    Return table[key], or default when key is missing, empty or not a string.

    Shared by resolve(), partner_types() and partner_tiers().
    """
    if isinstance(key, str) and key and key in table:
        return table[key]
    return default


# Global registry of industry configs, filled by load()
_registry: Dict[str, IndustryConfig] = {}


def _read_file(path: Path) -> IndustryConfig:
    # Imported here: DRF needs settings configured before its serializers load
    from apps.industries.serializers import IndustryConfigSerializer

    try:
        raw = json.loads(path.read_text(encoding='utf-8'))
    except (OSError, ValueError) as e:
        raise ImproperlyConfigured(f"Industry config {path.name} could not be read: {e}") from e

    serializer = IndustryConfigSerializer(data=raw)
    if not serializer.is_valid():
        raise ImproperlyConfigured(f"Industry config {path.name} is invalid: {serializer.errors}")

    config = IndustryConfig.from_data(serializer.validated_data)
    if config.id != path.stem:
        raise ImproperlyConfigured(f"Industry config {path.name} declares id '{config.id}'")
    return config


def load(data_dir: Path = DATA_DIR) -> Dict[str, IndustryConfig]:
    """
    Load every supported industry from data_dir

    Raises:
        ImproperlyConfigured: a bundled file is missing or malformed
    """
    configs = {}
    for industry_id in INDUSTRY_IDS:
        configs[industry_id] = _read_file(data_dir / f'{industry_id}.json')

    _registry.clear()
    _registry.update(configs)
    logger.debug(f"Loaded {len(configs)} industry configs from {data_dir}")
    return _registry


def _configs() -> Dict[str, IndustryConfig]:
    if not _registry:
        load()
    return _registry


def resolve(industry_id) -> IndustryConfig:
    """Config for industry_id; anything unknown resolves to 'custom'."""
    configs = _configs()
    return lookup(configs, industry_id, configs[DEFAULT_INDUSTRY])


def supported_ids() -> Tuple[str, ...]:
    return INDUSTRY_IDS


def all_industries() -> List[IndustryConfig]:
    configs = _configs()
    return [configs[industry_id] for industry_id in INDUSTRY_IDS]


def partner_types(industry_id) -> List[str]:
    return list(lookup(PARTNER_TYPES, industry_id, DEFAULT_PARTNER_TYPES))


def partner_tiers(industry_id) -> List[str]:
    return list(lookup(PARTNER_TIERS, industry_id, DEFAULT_PARTNER_TIERS))
