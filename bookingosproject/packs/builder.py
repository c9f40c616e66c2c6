"""Draft / publish / new-version lifecycle for vertical pack versions.

A version is editable only while it is a draft. Publishing freezes it;
further edits go into a new draft created from the latest version.
"""
from __future__ import annotations

import logging
from typing import Any

from django.db import transaction
from django.db.models import Max
from django.utils import timezone
from rest_framework.exceptions import NotFound, ValidationError

from .definitions import default_pack_config
from .models import VerticalPackVersion

logger = logging.getLogger(__name__)


def list_packs(include_all_versions: bool = False) -> list[VerticalPackVersion]:
    qs = VerticalPackVersion.objects.order_by("slug", "-version")
    if include_all_versions:
        return list(qs)

    latest_by_slug: dict[str, VerticalPackVersion] = {}
    for pack in qs:
        if pack.slug not in latest_by_slug:
            latest_by_slug[pack.slug] = pack
    return list(latest_by_slug.values())


def get_pack_by_slug(slug: str) -> VerticalPackVersion:
    pack = VerticalPackVersion.objects.filter(slug=slug).order_by("-version").first()
    if not pack:
        raise NotFound(f'Pack "{slug}" not found')
    return pack


def get_pack_by_id(pack_id: int) -> VerticalPackVersion:
    pack = VerticalPackVersion.objects.filter(id=pack_id).first()
    if not pack:
        raise NotFound("Pack version not found")
    return pack


def get_pack_versions(slug: str) -> list[VerticalPackVersion]:
    versions = list(VerticalPackVersion.objects.filter(slug=slug).order_by("-version"))
    if not versions:
        raise NotFound(f'Pack "{slug}" not found')
    return versions


def create_pack(*, slug: str, name: str, description: str | None = None, config: dict[str, Any] | None = None) -> VerticalPackVersion:
    if VerticalPackVersion.objects.filter(slug=slug).exists():
        raise ValidationError({"slug": f'Pack with slug "{slug}" already exists'})

    pack = VerticalPackVersion.objects.create(
        slug=slug,
        name=name,
        description=description,
        config=config if config is not None else default_pack_config(),
        version=1,
        is_published=False,
        rollout_stage=VerticalPackVersion.STAGE_DRAFT,
    )
    logger.info('Created pack "%s" v1', slug)
    return pack


def update_pack(pack_id: int, *, name: str | None = None, description: str | None = None, config: dict[str, Any] | None = None) -> VerticalPackVersion:
    pack = get_pack_by_id(pack_id)
    if pack.is_published:
        raise ValidationError(
            {"detail": "Cannot update a published pack version. Create a new version instead."}
        )

    if name is not None:
        pack.name = name
    if description is not None:
        pack.description = description
    if config is not None:
        pack.config = config
    pack.save()
    return pack


def publish_pack(pack_id: int) -> VerticalPackVersion:
    pack = get_pack_by_id(pack_id)
    if pack.is_published:
        raise ValidationError({"detail": "This pack version is already published"})

    pack.is_published = True
    pack.rollout_stage = VerticalPackVersion.STAGE_PUBLISHED
    pack.published_at = timezone.now()
    pack.save(update_fields=["is_published", "rollout_stage", "published_at", "updated_at"])

    logger.info('Published pack "%s" v%s', pack.slug, pack.version)
    return pack


@transaction.atomic
def create_new_version(slug: str) -> VerticalPackVersion:
    latest = get_pack_by_slug(slug)

    existing_draft = (
        VerticalPackVersion.objects.filter(slug=slug, is_published=False).order_by("-version").first()
    )
    if existing_draft:
        raise ValidationError(
            {
                "detail": (
                    f'An unpublished draft (v{existing_draft.version}) already exists for "{slug}". '
                    "Update or publish it first."
                )
            }
        )

    next_version = (VerticalPackVersion.objects.filter(slug=slug).aggregate(m=Max("version"))["m"] or 0) + 1
    pack = VerticalPackVersion.objects.create(
        slug=slug,
        name=latest.name,
        description=latest.description,
        config=latest.config,
        version=next_version,
        is_published=False,
        rollout_stage=VerticalPackVersion.STAGE_DRAFT,
    )
    logger.info('Created draft "%s" v%s from v%s', slug, pack.version, latest.version)
    return pack


def delete_pack(pack_id: int) -> VerticalPackVersion:
    pack = get_pack_by_id(pack_id)
    if pack.is_published:
        raise ValidationError({"detail": "Cannot delete a published pack version"})

    pack.delete()
    logger.info('Deleted draft "%s" v%s', pack.slug, pack.version)
    return pack
