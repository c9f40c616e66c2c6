"""Platform-wide settings with typed defaults.

Only keys listed in SETTING_DEFAULTS exist. A stored PlatformSetting row
overrides the default; resetting deletes the row.
"""
from __future__ import annotations

from typing import Any

from django.db import transaction
from rest_framework.exceptions import NotFound, ValidationError

from .models import PlatformSetting

SETTING_DEFAULTS: dict[str, dict[str, Any]] = {
    "security.sessionTimeoutMins": {"default": 60, "type": "number", "min": 5, "max": 1440},
    "security.requireEmailVerification": {"default": True, "type": "boolean"},
    "security.maxViewAsSessionMins": {"default": 15, "type": "number", "min": 5, "max": 120},
    "security.maxLoginAttempts": {"default": 5, "type": "number", "min": 3, "max": 20},
    "notifications.defaultReminderHours": {"default": 24, "type": "number", "min": 1, "max": 168},
    "notifications.quietHoursStart": {"default": "22:00", "type": "string"},
    "notifications.quietHoursEnd": {"default": "07:00", "type": "string"},
    "regional.defaultTimezone": {"default": "UTC", "type": "string"},
    "regional.defaultLocale": {"default": "en", "type": "string"},
    "regional.defaultCurrency": {"default": "USD", "type": "string"},
    "platform.maintenanceMode": {"default": False, "type": "boolean"},
    "platform.maxTenantsAllowed": {"default": 100, "type": "number", "min": 1, "max": 10000},
    "platform.apiRateLimitPerMin": {"default": 60, "type": "number", "min": 10, "max": 1000},
}


def _definition(key: str) -> dict[str, Any]:
    definition = SETTING_DEFAULTS.get(key)
    if definition is None:
        raise NotFound(f"Unknown setting key: {key}")
    return definition


def validate_value(key: str, value: Any, definition: dict[str, Any]) -> None:
    kind = definition["type"]
    if kind == "number":
        # bool is an int subclass; JSON true/false are not numbers here.
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValidationError({key: f"{key} must be a number"})
        if "min" in definition and value < definition["min"]:
            raise ValidationError({key: f"{key} must be at least {definition['min']}"})
        if "max" in definition and value > definition["max"]:
            raise ValidationError({key: f"{key} must be at most {definition['max']}"})
    elif kind == "boolean":
        if not isinstance(value, bool):
            raise ValidationError({key: f"{key} must be a boolean"})
    elif kind == "string":
        if not isinstance(value, str):
            raise ValidationError({key: f"{key} must be a string"})
        options = definition.get("options")
        if options and value not in options:
            raise ValidationError({key: f"{key} must be one of: {', '.join(options)}"})


def get_all_settings() -> dict[str, list[dict[str, Any]]]:
    stored = {s.key: s.value for s in PlatformSetting.objects.all()}

    grouped: dict[str, list[dict[str, Any]]] = {}
    for key, definition in SETTING_DEFAULTS.items():
        category = key.split(".", 1)[0]
        has_stored = key in stored
        grouped.setdefault(category, []).append(
            {
                "key": key,
                "value": stored[key] if has_stored else definition["default"],
                "is_default": not has_stored,
            }
        )
    return grouped


def get_setting(key: str) -> dict[str, Any]:
    definition = _definition(key)
    stored = PlatformSetting.objects.filter(key=key).first()
    return {
        "key": key,
        "value": stored.value if stored else definition["default"],
        "is_default": stored is None,
    }


def get_value(key: str) -> Any:
    return get_setting(key)["value"]


def update_setting(key: str, value: Any, actor=None) -> dict[str, Any]:
    definition = _definition(key)
    validate_value(key, value, definition)

    row, _ = PlatformSetting.objects.update_or_create(
        key=key,
        defaults={"value": value, "updated_by": actor},
    )
    return {"key": row.key, "value": row.value, "is_default": False}


def bulk_update(items: list[dict[str, Any]], actor=None) -> list[dict[str, Any]]:
    # Validate everything before writing anything.
    for item in items:
        key = item.get("key")
        validate_value(key, item.get("value"), _definition(key))

    results = []
    with transaction.atomic():
        for item in items:
            row, _ = PlatformSetting.objects.update_or_create(
                key=item["key"],
                defaults={"value": item["value"], "updated_by": actor},
            )
            results.append({"key": row.key, "value": row.value, "is_default": False})
    return results


def reset_setting(key: str) -> dict[str, Any]:
    definition = _definition(key)
    PlatformSetting.objects.filter(key=key).delete()
    return {"key": key, "value": definition["default"], "is_default": True}
