from __future__ import annotations

from console import skills
from console.audit import log_action
from console.permissions import IsPlatformAdmin

from .api_helpers import coerce_str, request_data

try:
    from rest_framework.exceptions import ValidationError
    from rest_framework.permissions import IsAuthenticated
    from rest_framework.response import Response
    from rest_framework.views import APIView
except Exception as exc:  # pragma: no cover
    raise RuntimeError(
        "Django REST Framework is required for API views. "
        "Install 'djangorestframework' and ensure 'rest_framework' is in INSTALLED_APPS."
    ) from exc


class SkillsCatalogView(APIView):
    permission_classes = [IsAuthenticated, IsPlatformAdmin]

    def get(self, request):
        catalog = skills.get_catalog()
        log_action(request.user, "SKILLS_CATALOG_VIEW", target_type="SKILL")
        return Response(catalog)


class SkillAdoptionView(APIView):
    permission_classes = [IsAuthenticated, IsPlatformAdmin]

    def get(self, request, agent_type: str):
        adoption = skills.get_skill_adoption(agent_type)
        log_action(request.user, "SKILL_ADOPTION_VIEW", target_type="SKILL", target_id=agent_type)
        return Response(adoption)


class SkillPlatformOverrideView(APIView):
    permission_classes = [IsAuthenticated, IsPlatformAdmin]

    def post(self, request, agent_type: str):
        data = request_data(request)
        enabled = data.get("enabled")
        if not isinstance(enabled, bool):
            raise ValidationError({"enabled": "Must be true or false."})
        reason = coerce_str(data.get("reason"), field="reason", required=False, max_length=500)

        result = skills.platform_override(agent_type, enabled, request.user)
        log_action(
            request.user,
            "SKILL_PLATFORM_OVERRIDE",
            target_type="SKILL",
            target_id=agent_type,
            reason=reason,
            metadata={"enabled": enabled, "affected_count": result["affected_count"]},
        )
        return Response(result)
