"""
Read-only JSON API over the industry registry.

GET /api/industries/        -> [{"id", "name"}, ...]
GET /api/industries/<id>/   -> full config plus partner taxonomy
"""

import logging

from rest_framework.response import Response
from rest_framework.views import APIView

from apps.industries import registry
from apps.industries.resolver import IndustryResolver
from apps.industries.serializers import IndustryDetailSerializer, IndustrySummarySerializer

logger = logging.getLogger(__name__)


class IndustryListView(APIView):
    """
    GET /api/industries/

    Every supported industry, in registry order.
    """

    def get(self, request):
        configs = registry.all_industries()
        return Response(IndustrySummarySerializer(configs, many=True).data)


class IndustryDetailView(APIView):
    """
    GET /api/industries/<industry_id>/

    Unknown ids resolve to the 'custom' config (200, not 404), the same
    way a tenant with an unknown industry is rendered.
    """

    def get(self, request, industry_id):
        industry = IndustryResolver.for_industry(industry_id)
        if industry.id != industry_id:
            logger.debug(f"Unknown industry '{industry_id}' resolved to '{industry.id}'")
        return Response(IndustryDetailSerializer(industry.as_dict()).data)
