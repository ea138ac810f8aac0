# Identifiers and field names shared by the registry, the serializer and
# the tenant schema.

DEFAULT_INDUSTRY = 'custom'

INDUSTRY_IDS = (
    'blue_collar',
    'medical',
    'beauty_wellness',
    'mortgage',
    'insurance',
    'real_estate',
    'legal',
    'accounting',
    'home_services',
    'automotive',
    'fitness',
    'pet_services',
    'events',
    'professional_services',
    'custom',
)

TERMINOLOGY_KEYS = ('contact', 'contacts', 'job', 'jobs', 'complete')

REQUIRED_FEATURES = ('inventory', 'voice_workflow', 'appointments', 'compliance')

VOICE_KEYWORD_GROUPS = ('time_keywords', 'part_keywords', 'followup_keywords')
