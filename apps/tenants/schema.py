"""
Structured records for the JSON blobs stored on tenants and contacts

The backend stores these as free-form JSON, so every blob we write carries
a schema_version. Reading goes through migrate_blob(): unversioned blobs
(written before versioning) are upgraded, blobs from a newer version are
refused rather than silently half-read.

    branding = BrandingSettings.from_blob(tenant.get('branding'))
    backend.table('tenants').update({'branding': branding.to_blob()})
"""

import re
from dataclasses import asdict, dataclass, replace
from typing import Optional

CURRENT_SCHEMA_VERSION = 1

HEX_COLOR_RE = re.compile(r'^#[0-9a-fA-F]{6}$')


class SchemaVersionError(ValueError):
    """A stored blob was written by a newer schema than this code understands."""
    pass


def migrate_blob(blob: Optional[dict]) -> dict:
    """
    Return a copy of blob upgraded to CURRENT_SCHEMA_VERSION

    Raises:
        SchemaVersionError: blob is from a newer (or an unreadable) version
    """
    data = dict(blob) if isinstance(blob, dict) else {}
    version = data.get('schema_version', 0)

    if not isinstance(version, int) or isinstance(version, bool) or version < 0:
        raise SchemaVersionError(f"Unreadable schema_version: {version!r}")
    if version > CURRENT_SCHEMA_VERSION:
        raise SchemaVersionError(
            f"Blob schema_version {version} is newer than supported {CURRENT_SCHEMA_VERSION}"
        )

    if version == 0:
        # v0 branding used 'color' / 'logo'
        if 'color' in data and 'primary_color' not in data:
            data['primary_color'] = data.pop('color')
        if 'logo' in data and 'logo_url' not in data:
            data['logo_url'] = data.pop('logo')

    data['schema_version'] = CURRENT_SCHEMA_VERSION
    return data


def _text(value) -> str:
    return value.strip() if isinstance(value, str) else ''


@dataclass(frozen=True)
class BrandingSettings:
    primary_color: str = '#2563eb'
    logo_url: str = ''
    display_name: str = ''

    @classmethod
    def from_blob(cls, blob: Optional[dict]) -> 'BrandingSettings':
        data = migrate_blob(blob)
        branding = cls(logo_url=_text(data.get('logo_url')), display_name=_text(data.get('display_name')))
        color = _text(data.get('primary_color'))
        if HEX_COLOR_RE.match(color):
            branding = replace(branding, primary_color=color.lower())
        return branding

    def to_blob(self) -> dict:
        return {'schema_version': CURRENT_SCHEMA_VERSION, **asdict(self)}


@dataclass(frozen=True)
class PartnerProfile:
    """Partner details kept in a partner contact's custom_fields."""
    partner_type: str = ''
    partner_tier: str = 'prospect'
    company: str = ''

    @classmethod
    def from_blob(cls, blob: Optional[dict]) -> 'PartnerProfile':
        data = migrate_blob(blob)
        return cls(
            partner_type=_text(data.get('partner_type')),
            partner_tier=_text(data.get('partner_tier')) or 'prospect',
            company=_text(data.get('company')),
        )

    def to_blob(self) -> dict:
        return {'schema_version': CURRENT_SCHEMA_VERSION, **asdict(self)}
