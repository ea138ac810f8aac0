"""
IndustryResolver - accessors over one resolved industry config

Every page builds one of these for the active tenant and asks it for
labels, feature flags, pipeline stages and the partner taxonomy. None of
the accessors raise: missing optional data comes back as an empty list
or map (voice_parsing() returns None).

Usage:
    industry = IndustryResolver.for_tenant(ctx.tenant)
    industry.label('contacts')          # 'Patients' for medical
    industry.has_feature('inventory')   # strict: True only for literal True
"""

from typing import Dict, List, Optional

from apps.industries import registry
from apps.industries.registry import IndustryConfig


class IndustryResolver:

    def __init__(self, config: IndustryConfig):
        self.config = config

    @classmethod
    def for_industry(cls, industry_id) -> 'IndustryResolver':
        return cls(registry.resolve(industry_id))

    @classmethod
    def for_tenant(cls, tenant: Optional[dict]) -> 'IndustryResolver':
        """Resolver for a tenant row; no tenant means the 'custom' industry."""
        return cls.for_industry(tenant.get('industry') if tenant else None)

    @property
    def id(self) -> str:
        return self.config.id

    @property
    def name(self) -> str:
        return self.config.name

    def label(self, key: str) -> str:
        """Industry term for key ('contact', 'jobs', ...), or key itself."""
        return self.config.terminology.get(key) or key

    def has_feature(self, flag: str) -> bool:
        return self.config.features.get(flag) is True

    def pipeline_stages(self) -> List[str]:
        return list(self.config.pipeline_stages)

    def job_types(self) -> List[str]:
        return list(self.config.job_types)

    def billing_types(self) -> List[str]:
        return list(self.config.billing_types)

    def compliance_requirements(self) -> List[str]:
        return list(self.config.compliance_requirements)

    def custom_fields(self) -> Dict[str, str]:
        return dict(self.config.custom_fields)

    def voice_parsing(self) -> Optional[dict]:
        if self.config.voice_parsing is None:
            return None
        return self.config.voice_parsing.as_dict()

    def partner_types(self) -> List[str]:
        return registry.partner_types(self.config.id)

    def partner_tiers(self) -> List[str]:
        return registry.partner_tiers(self.config.id)

    def as_dict(self) -> dict:
        data = self.config.as_dict()
        data['partner_types'] = self.partner_types()
        data['partner_tiers'] = self.partner_tiers()
        return data

    def __repr__(self):
        return f'<IndustryResolver {self.config.id}>'
