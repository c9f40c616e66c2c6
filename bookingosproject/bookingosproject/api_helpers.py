from __future__ import annotations

from datetime import datetime, timezone as dt_timezone
from typing import Any

from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

from accounts.models import Business, Membership

try:
    from rest_framework.exceptions import ValidationError
except Exception as exc:  # pragma: no cover
    raise RuntimeError(
        "Django REST Framework is required for API views. "
        "Install 'djangorestframework' and ensure 'rest_framework' is in INSTALLED_APPS."
    ) from exc


TRUTHY = {"1", "true", "True", "yes", "on"}


def get_org_and_membership(*, user, org_param: str | None):
    if not org_param:
        raise ValidationError({"org": "This query param is required (org slug or id)."})

    org: Business | None
    if str(org_param).isdigit():
        org = Business.objects.filter(id=int(org_param)).first()
    else:
        org = Business.objects.filter(slug=str(org_param)).first()

    if not org:
        raise ValidationError({"org": "Unknown organization."})

    membership = Membership.objects.filter(user=user, organization=org, is_active=True).first()
    if not membership:
        raise ValidationError({"detail": "You do not have access to this organization."})

    return org, membership


def request_data(request) -> dict[str, Any]:
    data = getattr(request, "data", None)
    return data if isinstance(data, dict) else {}


def coerce_int(raw, *, field: str, minimum: int | None = None, maximum: int | None = None, required: bool = True) -> int | None:
    if raw is None or raw == "":
        if required:
            raise ValidationError({field: "This field is required."})
        return None
    if isinstance(raw, bool):
        raise ValidationError({field: "Must be an integer."})
    if isinstance(raw, float):
        if not raw.is_integer():
            raise ValidationError({field: "Must be an integer."})
        raw = int(raw)
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        raise ValidationError({field: "Must be an integer."})
    if minimum is not None and value < minimum:
        raise ValidationError({field: f"Must be at least {minimum}."})
    if maximum is not None and value > maximum:
        raise ValidationError({field: f"Must be at most {maximum}."})
    return value


def coerce_str(raw, *, field: str, required: bool = True, max_length: int | None = None) -> str | None:
    if raw is None:
        if required:
            raise ValidationError({field: "This field is required."})
        return None
    if not isinstance(raw, str):
        raise ValidationError({field: "Must be a string."})
    value = raw.strip()
    if required and not value:
        raise ValidationError({field: "This field may not be blank."})
    if max_length is not None and len(value) > max_length:
        raise ValidationError({field: f"Ensure this field has no more than {max_length} characters."})
    return value


def coerce_object(raw, *, field: str) -> dict[str, Any] | None:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise ValidationError({field: "Must be a JSON object."})
    return raw


def page_params(request, *, default_size: int = 20, max_size: int = 100) -> tuple[int, int]:
    try:
        page = int(request.query_params.get("page") or 1)
    except Exception:
        page = 1
    page = max(1, page)

    raw_size = request.query_params.get("page_size") or request.query_params.get("per_page")
    try:
        page_size = int(raw_size or default_size)
    except Exception:
        page_size = default_size
    page_size = max(1, min(page_size, max_size))
    return page, page_size


def parse_when(raw: str | None, *, field: str) -> datetime | None:
    """Accept ISO datetimes or YYYY-MM-DD (start of day, UTC)."""
    if not raw:
        return None
    s = raw.strip()
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    dt = parse_datetime(s)
    if dt is not None:
        if timezone.is_naive(dt):
            dt = timezone.make_aware(dt, dt_timezone.utc)
        return dt
    d = parse_date(s)
    if d is not None:
        return datetime(d.year, d.month, d.day, tzinfo=dt_timezone.utc)
    raise ValidationError({field: f"Invalid datetime/date: {raw}"})
