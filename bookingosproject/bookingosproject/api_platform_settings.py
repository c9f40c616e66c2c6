from __future__ import annotations

from console import platform_settings
from console.audit import log_action
from console.permissions import IsPlatformAdmin

from .api_helpers import request_data

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


class PlatformSettingsView(APIView):
    permission_classes = [IsAuthenticated, IsPlatformAdmin]

    def get(self, request):
        grouped = platform_settings.get_all_settings()
        log_action(request.user, "SETTINGS_VIEW", target_type="SETTING")
        return Response({"settings": grouped})

    def put(self, request):
        data = request_data(request)
        items = data.get("settings")
        if not isinstance(items, list) or not items:
            raise ValidationError({"settings": "Provide a non-empty list of {key, value} objects."})
        for item in items:
            if not isinstance(item, dict) or not isinstance(item.get("key"), str) or "value" not in item:
                raise ValidationError({"settings": "Each entry needs a string key and a value."})

        results = platform_settings.bulk_update(items, request.user)
        log_action(
            request.user,
            "SETTINGS_BULK_UPDATE",
            target_type="SETTING",
            metadata={"keys": [r["key"] for r in results]},
        )
        return Response({"settings": results})


class PlatformSettingDetailView(APIView):
    permission_classes = [IsAuthenticated, IsPlatformAdmin]

    def get(self, request, key: str):
        return Response(platform_settings.get_setting(key))

    def put(self, request, key: str):
        data = request_data(request)
        if "value" not in data:
            raise ValidationError({"value": "This field is required."})

        result = platform_settings.update_setting(key, data["value"], request.user)
        log_action(
            request.user,
            "SETTING_UPDATE",
            target_type="SETTING",
            target_id=key,
            metadata={"value": result["value"]},
        )
        return Response(result)


class PlatformSettingResetView(APIView):
    permission_classes = [IsAuthenticated, IsPlatformAdmin]

    def post(self, request, key: str):
        result = platform_settings.reset_setting(key)
        log_action(request.user, "SETTING_RESET", target_type="SETTING", target_id=key)
        return Response(result)
