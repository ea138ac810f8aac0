from rest_framework import serializers

from apps.industries.constants import INDUSTRY_IDS, REQUIRED_FEATURES, TERMINOLOGY_KEYS


class VoiceParsingSerializer(serializers.Serializer):
    time_keywords = serializers.ListField(child=serializers.CharField())
    part_keywords = serializers.ListField(child=serializers.CharField())
    followup_keywords = serializers.ListField(child=serializers.CharField())


class IndustryConfigSerializer(serializers.Serializer):
    """
    Validates a bundled industry JSON file and renders a config for the API.

    Feature values are passed through untouched: has_feature() only treats
    a literal true as enabled, so a stray "true" string stays disabled.
    """
    id = serializers.ChoiceField(choices=INDUSTRY_IDS)
    name = serializers.CharField()
    terminology = serializers.DictField(child=serializers.CharField())
    features = serializers.DictField()
    pipeline_stages = serializers.ListField(child=serializers.CharField(), allow_empty=False)
    job_types = serializers.ListField(child=serializers.CharField())
    billing_types = serializers.ListField(child=serializers.CharField(), required=False)
    compliance_requirements = serializers.ListField(child=serializers.CharField(), required=False)
    voice_parsing = VoiceParsingSerializer(required=False, allow_null=True)
    custom_fields = serializers.DictField(child=serializers.CharField(), required=False)

    def validate_terminology(self, value):
        missing = [key for key in TERMINOLOGY_KEYS if key not in value]
        if missing:
            raise serializers.ValidationError(f"Missing terminology: {', '.join(missing)}")
        return value

    def validate_features(self, value):
        missing = [flag for flag in REQUIRED_FEATURES if flag not in value]
        if missing:
            raise serializers.ValidationError(f"Missing features: {', '.join(missing)}")
        return value


class IndustrySummarySerializer(serializers.Serializer):
    id = serializers.CharField()
    name = serializers.CharField()


class IndustryDetailSerializer(IndustryConfigSerializer):
    partner_types = serializers.ListField(child=serializers.CharField())
    partner_tiers = serializers.ListField(child=serializers.CharField())
