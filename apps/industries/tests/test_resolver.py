"""
Tests for IndustryResolver and the industry template helpers
"""

import json

from django.template import Context, Template
from django.test import SimpleTestCase

from apps.industries import registry
from apps.industries.resolver import IndustryResolver


class IndustryResolverTest(SimpleTestCase):

    def test_mortgage_end_to_end(self):
        industry = IndustryResolver.for_industry('mortgage')
        self.assertEqual(industry.id, 'mortgage')
        self.assertEqual(
            industry.partner_types(),
            ['realtor', 'title_company', 'appraiser', 'insurance_agent', 'financial_planner'],
        )
        self.assertEqual(industry.label('contacts'), 'Borrowers')
        self.assertEqual(industry.label('job'), 'Loan')
        self.assertTrue(industry.has_feature('compliance'))
        self.assertFalse(industry.has_feature('voice_workflow'))

    def test_unknown_industry_end_to_end(self):
        industry = IndustryResolver.for_industry('unknown_xyz')
        self.assertEqual(industry.id, 'custom')
        self.assertEqual(industry.partner_tiers(), ['prospect', 'active', 'preferred', 'strategic'])

    def test_for_tenant(self):
        self.assertEqual(IndustryResolver.for_tenant({'industry': 'medical'}).id, 'medical')
        self.assertEqual(IndustryResolver.for_tenant({'industry': None}).id, 'custom')
        self.assertEqual(IndustryResolver.for_tenant({}).id, 'custom')
        self.assertEqual(IndustryResolver.for_tenant(None).id, 'custom')

    def test_label_falls_back_to_key(self):
        industry = IndustryResolver.for_industry('medical')
        self.assertEqual(industry.label('contact'), 'Patient')
        self.assertEqual(industry.label('invoice'), 'invoice')

    def test_has_feature_only_for_literal_true(self):
        industry = IndustryResolver.for_industry('blue_collar')
        self.assertTrue(industry.has_feature('voice_workflow'))
        self.assertFalse(industry.has_feature('compliance'))
        self.assertFalse(industry.has_feature('no_such_flag'))

    def test_has_feature_ignores_truthy_non_booleans(self):
        data = json.loads((registry.DATA_DIR / 'custom.json').read_text(encoding='utf-8'))
        data['features'] = dict(data['features'], text_flag='true', number_flag=1, real_flag=True)
        industry = IndustryResolver(registry.IndustryConfig.from_data(data))

        self.assertFalse(industry.has_feature('text_flag'))
        self.assertFalse(industry.has_feature('number_flag'))
        self.assertTrue(industry.has_feature('real_flag'))

    def test_optional_lists_default_to_empty(self):
        industry = IndustryResolver.for_industry('custom')
        self.assertEqual(industry.billing_types(), [])
        self.assertEqual(industry.compliance_requirements(), [])
        self.assertEqual(industry.custom_fields(), {})
        self.assertIsNone(industry.voice_parsing())

    def test_voice_parsing(self):
        parsing = IndustryResolver.for_industry('blue_collar').voice_parsing()
        self.assertIn('hours', parsing['time_keywords'])
        self.assertIn('replaced', parsing['part_keywords'])
        self.assertIn('follow up', parsing['followup_keywords'])

    def test_accessors_return_copies(self):
        industry = IndustryResolver.for_industry('real_estate')
        stages = industry.pipeline_stages()
        stages.clear()
        self.assertEqual(industry.pipeline_stages()[0], 'lead')

    def test_as_dict_includes_partner_taxonomy(self):
        data = IndustryResolver.for_industry('real_estate').as_dict()
        self.assertEqual(data['id'], 'real_estate')
        self.assertEqual(data['partner_tiers'], ['prospect', 'preferred', 'exclusive'])
        self.assertIn('lender', data['partner_types'])


class IndustryTagsTest(SimpleTestCase):
    """{% term %}, |has_feature and |humanize"""

    def render(self, source, **context):
        return Template('{% load industry_tags %}' + source).render(Context(context))

    def test_term(self):
        industry = IndustryResolver.for_industry('medical')
        self.assertEqual(self.render("{% term 'contacts' %}", industry=industry), 'Patients')
        self.assertEqual(self.render("{% term 'contact' 'lower' %}", industry=industry), 'patient')

    def test_term_without_industry_uses_custom(self):
        self.assertEqual(self.render("{% term 'jobs' %}"), 'Jobs')

    def test_has_feature(self):
        industry = IndustryResolver.for_industry('mortgage')
        source = "{% if industry|has_feature:'compliance' %}yes{% else %}no{% endif %}"
        self.assertEqual(self.render(source, industry=industry), 'yes')
        self.assertEqual(self.render(source), 'no')

    def test_humanize_replaces_every_underscore(self):
        self.assertEqual(self.render('{{ value|humanize }}', value='cash_out_refinance'), 'cash out refinance')
        self.assertEqual(self.render('{{ value|humanize }}', value=None), '')
