from __future__ import annotations

import logging
from typing import Any

from django.db import transaction
from rest_framework.exceptions import NotFound

from accounts.models import Business
from packs.definitions import PACK_SKILLS, find_skill, skills_for_pack
from packs.models import AgentConfig

logger = logging.getLogger(__name__)


def _adoption_percent(enabled: int, total: int) -> int:
    return round(enabled / total * 100) if total > 0 else 0


def get_catalog() -> dict[str, Any]:
    packs = []
    for slug, skills in PACK_SKILLS.items():
        business_count = Business.objects.filter(vertical_pack=slug).count()

        skill_stats = []
        for skill in skills:
            enabled_count = 0
            if business_count > 0:
                enabled_count = AgentConfig.objects.filter(
                    agent_type=skill["agent_type"],
                    is_enabled=True,
                    business__vertical_pack=slug,
                ).count()
            skill_stats.append(
                {
                    **skill,
                    "enabled_count": enabled_count,
                    "business_count": business_count,
                    "adoption_percent": _adoption_percent(enabled_count, business_count),
                }
            )
        packs.append({"slug": slug, "skills": skill_stats})
    return {"packs": packs}


def _skill_or_404(agent_type: str) -> dict[str, Any]:
    skill = find_skill(agent_type)
    if not skill:
        raise NotFound(f"Unknown agent type: {agent_type}")
    return skill


def get_skill_adoption(agent_type: str) -> dict[str, Any]:
    skill = _skill_or_404(agent_type)

    configs = list(
        AgentConfig.objects.filter(agent_type=agent_type).select_related("business").order_by("-created_at", "-id")
    )
    return {
        "agent_type": agent_type,
        "name": skill["name"],
        "category": skill["category"],
        "total_businesses": Business.objects.count(),
        "enabled_count": sum(1 for c in configs if c.is_enabled),
        "configs": [
            {
                "business_id": c.business.id,
                "business_name": c.business.name,
                "business_slug": c.business.slug,
                "vertical_pack": c.business.vertical_pack,
                "is_enabled": c.is_enabled,
                "autonomy_level": c.autonomy_level,
                "created_at": c.created_at.isoformat() if c.created_at else None,
            }
            for c in configs
        ],
    }


def get_business_skills(business: Business) -> list[dict[str, Any]]:
    """Skills offered by the business's pack, merged with its own configs.

    Custom packs offer the general catalogue. A skill without a config row
    reports its default enablement.
    """
    configs = {c.agent_type: c for c in AgentConfig.objects.filter(business=business)}
    result = []
    for skill in skills_for_pack(business.vertical_pack or "general"):
        config = configs.get(skill["agent_type"])
        result.append(
            {
                **skill,
                "is_enabled": config.is_enabled if config else skill["default_enabled"],
                "autonomy_level": config.autonomy_level if config else "SUGGEST",
                "has_config": config is not None,
            }
        )
    return result


def platform_override(agent_type: str, enabled: bool, actor=None) -> dict[str, Any]:
    """Force a skill on or off for every business."""
    _skill_or_404(agent_type)

    business_ids = list(Business.objects.values_list("id", flat=True))
    if not business_ids:
        return {"agent_type": agent_type, "enabled": enabled, "affected_count": 0}

    with transaction.atomic():
        for business_id in business_ids:
            AgentConfig.objects.update_or_create(
                business_id=business_id,
                agent_type=agent_type,
                defaults={"is_enabled": enabled},
            )

    logger.warning(
        "Platform override: %s -> %s for %d businesses by %s",
        agent_type,
        "enabled" if enabled else "disabled",
        len(business_ids),
        getattr(actor, "email", None) or getattr(actor, "pk", None),
    )
    return {"agent_type": agent_type, "enabled": enabled, "affected_count": len(business_ids)}
