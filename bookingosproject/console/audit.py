from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from django.db import transaction
from django.db.models import Q

from .models import PlatformAuditLog

logger = logging.getLogger(__name__)


def log_action(
    user,
    action: str,
    *,
    target_type: str | None = None,
    target_id: Any = None,
    reason: str | None = None,
    metadata: dict[str, Any] | None = None,
) -> PlatformAuditLog | None:
    """Append an audit entry for a console action.

    Auditing must never break the request that triggered it, so write
    failures are logged and swallowed. The insert runs in its own savepoint
    so a failed write leaves the surrounding transaction usable.
    """
    try:
        actor = user if getattr(user, "is_authenticated", False) else None
        with transaction.atomic():
            return PlatformAuditLog.objects.create(
                actor=actor,
                actor_email=getattr(actor, "email", "") or "",
                action=action,
                target_type=target_type or "",
                target_id="" if target_id is None else str(target_id),
                reason=reason or "",
                metadata=metadata or {},
            )
    except Exception:
        logger.exception("Failed to write platform audit entry %s", action)
        return None


def serialize_entry(e: PlatformAuditLog) -> dict[str, Any]:
    return {
        "id": e.id,
        "actor_id": e.actor_id,
        "actor_email": e.actor_email,
        "action": e.action,
        "target_type": e.target_type or None,
        "target_id": e.target_id or None,
        "reason": e.reason or None,
        "metadata": e.metadata or {},
        "created_at": e.created_at.isoformat() if e.created_at else None,
    }


def list_entries(
    *,
    search: str | None = None,
    action: str | None = None,
    date_from: datetime | None = None,
    date_to: datetime | None = None,
    page: int = 1,
    page_size: int = 50,
) -> dict[str, Any]:
    qs = PlatformAuditLog.objects.all().order_by("-created_at", "-id")

    if search:
        qs = qs.filter(
            Q(actor_email__icontains=search)
            | Q(action__icontains=search)
            | Q(target_id__icontains=search)
            | Q(reason__icontains=search)
        )
    if action:
        qs = qs.filter(action=action)
    if date_from is not None:
        qs = qs.filter(created_at__gte=date_from)
    if date_to is not None:
        qs = qs.filter(created_at__lt=date_to)

    total = qs.count()
    start = (page - 1) * page_size
    items = [serialize_entry(e) for e in qs[start:start + page_size]]
    return {"items": items, "total": total, "page": page, "page_size": page_size}


def get_action_types() -> list[str]:
    return list(
        PlatformAuditLog.objects.order_by("action").values_list("action", flat=True).distinct()
    )
