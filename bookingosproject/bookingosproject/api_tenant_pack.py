from __future__ import annotations

from console.skills import get_business_skills
from packs.definitions import get_all_packs
from packs.models import VerticalPackVersion
from packs.rollout import resolve_pack_for_business
from packs.setup import apply_pack_to_business

from .api_helpers import coerce_str, get_org_and_membership, request_data

try:
    from rest_framework.exceptions import PermissionDenied, ValidationError
    from rest_framework.permissions import IsAuthenticated
    from rest_framework.response import Response
    from rest_framework.views import APIView
except Exception as exc:  # pragma: no cover
    raise RuntimeError(
        "Django REST Framework is required for API views. "
        "Install 'djangorestframework' and ensure 'rest_framework' is in INSTALLED_APPS."
    ) from exc


def _org_payload(org):
    return {
        "id": org.id,
        "slug": org.slug,
        "name": org.name,
        "vertical_pack": org.vertical_pack,
        "setup_complete": bool(org.setup_complete),
    }


class BusinessPackView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        org, _membership = get_org_and_membership(user=request.user, org_param=request.query_params.get("org"))
        return Response(
            {
                "org": _org_payload(org),
                "pack": resolve_pack_for_business(org),
                "skills": get_business_skills(org),
            }
        )


class SetupApplyPackView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        org, membership = get_org_and_membership(user=request.user, org_param=request.query_params.get("org"))
        if membership.role not in {"owner", "admin"}:
            raise PermissionDenied("Only owners and admins can change the business pack.")

        data = request_data(request)
        slug = coerce_str(data.get("pack"), field="pack", max_length=64)
        known = slug in get_all_packs() or VerticalPackVersion.objects.filter(slug=slug).exclude(
            rollout_stage=VerticalPackVersion.STAGE_DRAFT
        ).exists()
        if not known:
            raise ValidationError({"pack": f'Unknown pack "{slug}".'})

        result = apply_pack_to_business(org, slug)
        return Response({"org": _org_payload(org), **result})
