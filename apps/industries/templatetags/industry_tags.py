"""
Template helpers for industry-aware pages

    {% load industry_tags %}
    {% term 'contacts' %}                 -> 'Patients'
    {% term 'contact' 'lower' %}          -> 'patient'
    {% if industry|has_feature:'inventory' %} ... {% endif %}
    {{ job.status|humanize }}             -> 'in progress'
"""

from django import template

from apps.industries.resolver import IndustryResolver

register = template.Library()


@register.simple_tag(takes_context=True)
def term(context, key, case=None):
    industry = context.get('industry')
    if not isinstance(industry, IndustryResolver):
        industry = IndustryResolver.for_industry(None)
    value = industry.label(key)
    if case == 'lower':
        return value.lower()
    return value


@register.filter
def has_feature(industry, flag):
    if not isinstance(industry, IndustryResolver):
        return False
    return industry.has_feature(flag)


@register.filter
def humanize(value):
    """Replace every underscore with a space: 'in_progress' -> 'in progress'."""
    if value is None:
        return ''
    return str(value).replace('_', ' ')
