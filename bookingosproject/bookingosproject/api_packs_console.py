from __future__ import annotations

from console.audit import log_action
from console.permissions import IsPlatformAdmin
from packs import rollout

from .api_helpers import coerce_int, coerce_str, request_data

try:
    from rest_framework import status
    from rest_framework.permissions import IsAuthenticated
    from rest_framework.response import Response
    from rest_framework.views import APIView
except Exception as exc:  # pragma: no cover
    raise RuntimeError(
        "Django REST Framework is required for API views. "
        "Install 'djangorestframework' and ensure 'rest_framework' is in INSTALLED_APPS."
    ) from exc


class PacksRegistryView(APIView):
    permission_classes = [IsAuthenticated, IsPlatformAdmin]

    def get(self, request):
        packs = rollout.get_registry()
        log_action(request.user, "PACK_REGISTRY_VIEW", target_type="PACK")
        return Response({"count": len(packs), "items": packs})


class PackDetailView(APIView):
    permission_classes = [IsAuthenticated, IsPlatformAdmin]

    def get(self, request, slug: str):
        detail = rollout.get_pack_detail(slug)
        log_action(request.user, "PACK_DETAIL_VIEW", target_type="PACK", target_id=slug)
        return Response(detail)


class PackVersionsView(APIView):
    permission_classes = [IsAuthenticated, IsPlatformAdmin]

    def get(self, request, slug: str):
        versions = rollout.get_versions(slug)
        log_action(request.user, "PACK_VERSIONS_VIEW", target_type="PACK", target_id=slug)
        return Response({"slug": slug, "count": len(versions), "items": versions})


class PackRolloutView(APIView):
    permission_classes = [IsAuthenticated, IsPlatformAdmin]

    def post(self, request, slug: str, version: int):
        data = request_data(request)
        target_percent = coerce_int(data.get("target_percent"), field="target_percent", minimum=1, maximum=100)
        reason = coerce_str(data.get("reason"), field="reason", required=False, max_length=500)

        pv = rollout.start_or_advance_rollout(slug, version, target_percent)
        log_action(
            request.user,
            "PACK_ROLLOUT_ADVANCE",
            target_type="PACK_VERSION",
            target_id=f"{slug}/v{version}",
            reason=reason,
            metadata={"target_percent": target_percent, "rollout_stage": pv.rollout_stage},
        )
        return Response({"version": rollout.version_summary(pv)})


class PackPauseView(APIView):
    permission_classes = [IsAuthenticated, IsPlatformAdmin]

    def post(self, request, slug: str, version: int):
        data = request_data(request)
        reason = coerce_str(data.get("reason"), field="reason", required=False, max_length=500)

        pv = rollout.pause_rollout(slug, version)
        log_action(
            request.user,
            "PACK_ROLLOUT_PAUSE",
            target_type="PACK_VERSION",
            target_id=f"{slug}/v{version}",
            reason=reason,
            metadata={"rollout_percent": pv.rollout_percent},
        )
        return Response({"version": rollout.version_summary(pv)})


class PackResumeView(APIView):
    permission_classes = [IsAuthenticated, IsPlatformAdmin]

    def post(self, request, slug: str, version: int):
        data = request_data(request)
        reason = coerce_str(data.get("reason"), field="reason", required=False, max_length=500)

        pv = rollout.resume_rollout(slug, version)
        log_action(
            request.user,
            "PACK_ROLLOUT_RESUME",
            target_type="PACK_VERSION",
            target_id=f"{slug}/v{version}",
            reason=reason,
            metadata={"rollout_percent": pv.rollout_percent},
        )
        return Response({"version": rollout.version_summary(pv)})


class PackRollbackView(APIView):
    permission_classes = [IsAuthenticated, IsPlatformAdmin]

    def post(self, request, slug: str, version: int):
        data = request_data(request)
        reason = coerce_str(data.get("reason"), field="reason", max_length=500)

        pv = rollout.rollback_version(slug, version, reason)
        log_action(
            request.user,
            "PACK_ROLLOUT_ROLLBACK",
            target_type="PACK_VERSION",
            target_id=f"{slug}/v{version}",
            reason=reason,
        )
        return Response({"version": rollout.version_summary(pv)})


class PackPinsView(APIView):
    permission_classes = [IsAuthenticated, IsPlatformAdmin]

    def get(self, request, slug: str):
        pins = rollout.get_pins(slug)
        log_action(request.user, "PACK_PINS_VIEW", target_type="PACK", target_id=slug)
        return Response({"slug": slug, "count": len(pins), "items": pins})

    def post(self, request, slug: str):
        data = request_data(request)
        business_id = coerce_int(data.get("business_id"), field="business_id", minimum=1)
        pinned_version = coerce_int(data.get("pinned_version"), field="pinned_version", minimum=1)
        reason = coerce_str(data.get("reason"), field="reason", max_length=500)

        pin = rollout.pin_business(slug, business_id, pinned_version, reason, request.user)
        log_action(
            request.user,
            "PACK_TENANT_PIN",
            target_type="BUSINESS",
            target_id=business_id,
            reason=reason,
            metadata={"pack_slug": slug, "pinned_version": pinned_version},
        )
        return Response({"pin": rollout.serialize_pin(pin)}, status=status.HTTP_201_CREATED)


class PackPinDetailView(APIView):
    permission_classes = [IsAuthenticated, IsPlatformAdmin]

    def delete(self, request, slug: str, business_id: int):
        rollout.unpin_business(slug, business_id)
        log_action(
            request.user,
            "PACK_TENANT_UNPIN",
            target_type="BUSINESS",
            target_id=business_id,
            metadata={"pack_slug": slug},
        )
        return Response(status=status.HTTP_204_NO_CONTENT)
