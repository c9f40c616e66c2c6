from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation

from django.db import transaction
from django.utils.crypto import get_random_string
from django.utils.text import slugify

from accounts.models import Business
from bookings.models import Service

from .rollout import resolve_pack_for_business

logger = logging.getLogger(__name__)


def _unique_service_slug(business: Business, name: str) -> str:
    base_slug = slugify(f"{business.slug}-{name}") or get_random_string(8)
    slug = base_slug
    i = 1
    while Service.objects.filter(slug=slug).exists():
        i += 1
        slug = f"{base_slug}-{i}"
    return slug


def _coerce_price(raw) -> Decimal:
    try:
        return Decimal(str(raw if raw not in (None, "") else 0))
    except (InvalidOperation, ValueError, TypeError):
        return Decimal("0")


@transaction.atomic
def apply_pack_to_business(business: Business, slug: str) -> dict:
    """Setup-wizard pack step.

    Switches the business to ``slug``, seeds the resolved version's default
    services (skipping names the business already has) and marks setup as
    complete. Returns the resolved pack plus the names of created services.
    """
    business.vertical_pack = slug
    resolved = resolve_pack_for_business(business, slug)

    existing = {n.lower() for n in Service.objects.filter(organization=business).values_list("name", flat=True)}
    valid_kinds = {k for k, _ in Service.KIND_CHOICES}

    created = []
    for svc in resolved["config"].get("defaultServices") or []:
        name = str(svc.get("name") or "").strip()
        if not name or name.lower() in existing:
            continue
        try:
            duration = int(svc.get("durationMins") or 30)
        except (TypeError, ValueError):
            duration = 30
        kind = svc.get("kind") if svc.get("kind") in valid_kinds else Service.KIND_OTHER

        Service.objects.create(
            organization=business,
            name=name[:120],
            slug=_unique_service_slug(business, name),
            duration=max(1, duration),
            price=_coerce_price(svc.get("price")),
            category=str(svc.get("category") or "")[:80],
            kind=kind,
        )
        existing.add(name.lower())
        created.append(name)

    business.setup_complete = True
    business.save(update_fields=["vertical_pack", "setup_complete"])

    logger.info(
        "Applied pack %s (%s v%s) to business %s; created %d services",
        slug,
        resolved["source"],
        resolved["version"],
        business.id,
        len(created),
    )
    return {"pack": resolved, "created_services": created}
