"""Staged rollout, pause/resume/rollback and tenant pins for pack versions.

Stage transitions::

    draft -> published -> rolling_out -> completed
    rolling_out <-> paused
    rolling_out | paused | completed -> rolled_back (terminal)

Which version a business actually runs is decided by
``resolve_pack_for_business``: a pin wins, then the newest version whose
rollout covers the business, then the built-in definition.
"""
from __future__ import annotations

import hashlib
import logging
from typing import Any

from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import NotFound, ValidationError

from accounts.models import Business

from .definitions import PACK_SKILLS, get_all_packs, get_pack, pack_config_from_definition
from .models import PackTenantPin, VerticalPackVersion

logger = logging.getLogger(__name__)

# Markers the console offers as the next rollout step.
ROLLOUT_STAGES = (5, 25, 50, 100)

ROLLBACKABLE_STAGES = (
    VerticalPackVersion.STAGE_ROLLING_OUT,
    VerticalPackVersion.STAGE_PAUSED,
    VerticalPackVersion.STAGE_COMPLETED,
)


def _iso(dt):
    return dt.isoformat() if dt else None


def _adoption_percent(business_count: int, total_businesses: int) -> int:
    if total_businesses <= 0:
        return 0
    return round(business_count / total_businesses * 100)


def version_summary(v: VerticalPackVersion, *, include_config: bool = False) -> dict[str, Any]:
    data = {
        "id": v.id,
        "slug": v.slug,
        "version": v.version,
        "name": v.name,
        "description": v.description,
        "is_published": v.is_published,
        "rollout_stage": v.rollout_stage,
        "rollout_percent": v.rollout_percent,
        "rollout_started_at": _iso(v.rollout_started_at),
        "rollout_completed_at": _iso(v.rollout_completed_at),
        "rollout_paused_at": _iso(v.rollout_paused_at),
        "rolled_back_at": _iso(v.rolled_back_at),
        "rolled_back_reason": v.rolled_back_reason,
        "published_at": _iso(v.published_at),
        "created_at": _iso(v.created_at),
        "updated_at": _iso(v.updated_at),
    }
    if include_config:
        data["config"] = v.config
    return data


def get_registry() -> list[dict[str, Any]]:
    total_businesses = Business.objects.count()

    grouped: dict[str, list[VerticalPackVersion]] = {}
    for v in VerticalPackVersion.objects.order_by("slug", "-version"):
        grouped.setdefault(v.slug, []).append(v)

    packs = []
    for slug, versions in grouped.items():
        latest = versions[0]
        business_count = Business.objects.filter(vertical_pack=slug).count()
        packs.append(
            {
                "slug": slug,
                "name": latest.name,
                "description": latest.description,
                "latest_version": latest.version,
                "rollout_stage": latest.rollout_stage,
                "rollout_percent": latest.rollout_percent,
                "is_published": latest.is_published,
                "business_count": business_count,
                "total_businesses": total_businesses,
                "adoption_percent": _adoption_percent(business_count, total_businesses),
                "skill_count": len(PACK_SKILLS.get(slug, [])),
                "version_count": len(versions),
            }
        )
    return packs


def _versions_or_404(slug: str) -> list[VerticalPackVersion]:
    versions = list(VerticalPackVersion.objects.filter(slug=slug).order_by("-version"))
    if not versions:
        raise NotFound(f'Pack "{slug}" not found')
    return versions


def get_pack_detail(slug: str) -> dict[str, Any]:
    versions = _versions_or_404(slug)

    business_count = Business.objects.filter(vertical_pack=slug).count()
    total_businesses = Business.objects.count()
    pinned_count = PackTenantPin.objects.filter(pack_slug=slug).count()

    return {
        "slug": slug,
        "name": versions[0].name,
        "description": versions[0].description,
        "versions": [version_summary(v, include_config=True) for v in versions],
        "business_count": business_count,
        "total_businesses": total_businesses,
        "adoption_percent": _adoption_percent(business_count, total_businesses),
        "pinned_count": pinned_count,
        "rollout_stages": list(ROLLOUT_STAGES),
    }


def get_versions(slug: str) -> list[dict[str, Any]]:
    return [version_summary(v) for v in _versions_or_404(slug)]


def _get_version_for_update(slug: str, version: int) -> VerticalPackVersion:
    pv = VerticalPackVersion.objects.select_for_update().filter(slug=slug, version=version).first()
    if not pv:
        raise NotFound(f'Pack "{slug}" v{version} not found')
    return pv


@transaction.atomic
def start_or_advance_rollout(slug: str, version: int, target_percent: int) -> VerticalPackVersion:
    pv = _get_version_for_update(slug, version)

    stage = pv.rollout_stage
    if stage == VerticalPackVersion.STAGE_DRAFT:
        raise ValidationError({"detail": "Pack must be published before starting rollout"})
    if stage == VerticalPackVersion.STAGE_COMPLETED:
        raise ValidationError({"detail": "Rollout already completed"})
    if stage == VerticalPackVersion.STAGE_ROLLED_BACK:
        raise ValidationError({"detail": "Cannot advance a rolled-back version"})
    if stage == VerticalPackVersion.STAGE_PAUSED:
        raise ValidationError({"detail": "Rollout is paused, resume before advancing"})

    if target_percent <= pv.rollout_percent:
        raise ValidationError(
            {
                "target_percent": (
                    f"Target percent ({target_percent}%) must be greater than current ({pv.rollout_percent}%)"
                )
            }
        )

    now = timezone.now()
    previous_percent = pv.rollout_percent
    completing = target_percent == 100

    pv.rollout_stage = VerticalPackVersion.STAGE_COMPLETED if completing else VerticalPackVersion.STAGE_ROLLING_OUT
    pv.rollout_percent = target_percent
    if pv.rollout_started_at is None:
        pv.rollout_started_at = now
    if completing:
        pv.rollout_completed_at = now
    pv.save()

    logger.info("Rollout %s v%s: %s%% -> %s%%", slug, version, previous_percent, target_percent)
    return pv


@transaction.atomic
def pause_rollout(slug: str, version: int) -> VerticalPackVersion:
    pv = _get_version_for_update(slug, version)
    if pv.rollout_stage != VerticalPackVersion.STAGE_ROLLING_OUT:
        raise ValidationError({"detail": f'Cannot pause rollout in "{pv.rollout_stage}" stage'})

    pv.rollout_stage = VerticalPackVersion.STAGE_PAUSED
    pv.rollout_paused_at = timezone.now()
    pv.save()

    logger.info("Paused rollout %s v%s at %s%%", slug, version, pv.rollout_percent)
    return pv


@transaction.atomic
def resume_rollout(slug: str, version: int) -> VerticalPackVersion:
    pv = _get_version_for_update(slug, version)
    if pv.rollout_stage != VerticalPackVersion.STAGE_PAUSED:
        raise ValidationError({"detail": f'Cannot resume rollout in "{pv.rollout_stage}" stage'})

    pv.rollout_stage = VerticalPackVersion.STAGE_ROLLING_OUT
    pv.rollout_paused_at = None
    pv.save()

    logger.info("Resumed rollout %s v%s at %s%%", slug, version, pv.rollout_percent)
    return pv


@transaction.atomic
def rollback_version(slug: str, version: int, reason: str) -> VerticalPackVersion:
    pv = _get_version_for_update(slug, version)
    if pv.rollout_stage not in ROLLBACKABLE_STAGES:
        raise ValidationError({"detail": f'Cannot rollback from "{pv.rollout_stage}" stage'})

    pv.rollout_stage = VerticalPackVersion.STAGE_ROLLED_BACK
    pv.rolled_back_at = timezone.now()
    pv.rolled_back_reason = reason
    pv.save()

    logger.warning("Rolled back %s v%s: %s", slug, version, reason)
    return pv


def serialize_pin(p: PackTenantPin) -> dict[str, Any]:
    by = p.pinned_by
    return {
        "id": p.id,
        "business_id": p.business_id,
        "business_name": p.business.name,
        "business_slug": p.business.slug,
        "pack_slug": p.pack_slug,
        "pinned_version": p.pinned_version,
        "reason": p.reason,
        "pinned_by": {"id": by.id, "username": by.get_username(), "email": by.email} if by else None,
        "created_at": _iso(p.created_at),
        "updated_at": _iso(p.updated_at),
    }


def get_pins(slug: str) -> list[dict[str, Any]]:
    pins = (
        PackTenantPin.objects.filter(pack_slug=slug)
        .select_related("business", "pinned_by")
        .order_by("-created_at", "-id")
    )
    return [serialize_pin(p) for p in pins]


def pin_business(slug: str, business_id: int, pinned_version: int, reason: str, actor) -> PackTenantPin:
    business = Business.objects.filter(id=business_id).first()
    if not business:
        raise NotFound("Business not found")

    pv = VerticalPackVersion.objects.filter(slug=slug, version=pinned_version).first()
    if not pv:
        raise NotFound(f'Pack "{slug}" v{pinned_version} not found')
    if pv.rollout_stage == VerticalPackVersion.STAGE_DRAFT:
        raise ValidationError({"pinned_version": "Cannot pin a business to an unpublished draft"})

    pin, created = PackTenantPin.objects.update_or_create(
        business=business,
        pack_slug=slug,
        defaults={
            "pinned_version": pinned_version,
            "reason": reason,
            "pinned_by": actor,
        },
    )

    logger.info("Pinned business %s to %s v%s%s", business.id, slug, pinned_version, "" if created else " (updated)")
    return pin


def unpin_business(slug: str, business_id: int) -> None:
    pin = PackTenantPin.objects.filter(business_id=business_id, pack_slug=slug).first()
    if not pin:
        raise NotFound("Pin not found")

    pin.delete()
    logger.info("Unpinned business %s from %s", business_id, slug)


def rollout_bucket(slug: str, business_id: int) -> int:
    """Stable 0-99 bucket for a business within one pack's rollout."""
    digest = hashlib.sha256(f"{slug}:{business_id}".encode("utf-8")).hexdigest()
    return int(digest[:8], 16) % 100


def _covers(pv: VerticalPackVersion, bucket: int) -> bool:
    if pv.rollout_stage == VerticalPackVersion.STAGE_COMPLETED:
        return True
    if pv.rollout_stage in (VerticalPackVersion.STAGE_ROLLING_OUT, VerticalPackVersion.STAGE_PAUSED):
        return bucket < pv.rollout_percent
    return False


def resolve_pack_for_business(business: Business, slug: str | None = None) -> dict[str, Any]:
    """Return the pack version a business runs on.

    ``source`` is ``pin`` when an explicit pin applied, ``rollout`` when a
    rolled-out version covers the business, and ``default`` when it falls
    back to the built-in definition.
    """
    slug = slug or business.vertical_pack

    pin = PackTenantPin.objects.filter(business=business, pack_slug=slug).first()
    if pin:
        pv = VerticalPackVersion.objects.filter(slug=slug, version=pin.pinned_version).first()
        if pv:
            return {
                "slug": slug,
                "version": pv.version,
                "name": pv.name,
                "source": "pin",
                "config": pv.config,
            }
        logger.warning("Pin for business %s targets missing %s v%s; ignoring", business.id, slug, pin.pinned_version)

    bucket = rollout_bucket(slug, business.id)
    for pv in VerticalPackVersion.objects.filter(slug=slug).order_by("-version"):
        if _covers(pv, bucket):
            return {
                "slug": slug,
                "version": pv.version,
                "name": pv.name,
                "source": "rollout",
                "config": pv.config,
            }

    # Custom packs with nothing rolled out yet run on the general definition
    # but keep their own name.
    if slug in get_all_packs():
        fallback = slug
        name = get_pack(slug).get("displayName", slug)
    else:
        fallback = "general"
        latest = VerticalPackVersion.objects.filter(slug=slug).order_by("-version").first()
        name = latest.name if latest else slug
    return {
        "slug": slug,
        "version": None,
        "name": name,
        "source": "default",
        "config": pack_config_from_definition(fallback),
    }
