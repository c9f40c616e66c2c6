from __future__ import annotations

import logging
from typing import Any

from django.db.models import Case, Count, IntegerField, Q, Value, When
from django.utils import timezone
from rest_framework.exceptions import NotFound, ValidationError

from accounts.models import Business

from .models import SupportCase, SupportCaseNote

logger = logging.getLogger(__name__)

STATUSES = {s for s, _ in SupportCase.STATUS_CHOICES}
PRIORITIES = {p for p, _ in SupportCase.PRIORITY_CHOICES}

# Work queue order: open first, then in progress, resolved, closed.
_STATUS_RANK = Case(
    When(status=SupportCase.STATUS_OPEN, then=Value(0)),
    When(status=SupportCase.STATUS_IN_PROGRESS, then=Value(1)),
    When(status=SupportCase.STATUS_RESOLVED, then=Value(2)),
    default=Value(3),
    output_field=IntegerField(),
)


def _iso(dt):
    return dt.isoformat() if dt else None


def serialize_note(n: SupportCaseNote) -> dict[str, Any]:
    return {
        "id": n.id,
        "case_id": n.case_id,
        "author_id": n.author_id,
        "author_name": n.author_name,
        "content": n.content,
        "created_at": _iso(n.created_at),
    }


def serialize_case(c: SupportCase, *, notes: list[SupportCaseNote] | None = None) -> dict[str, Any]:
    data = {
        "id": c.id,
        "business_id": c.business_id,
        "business_name": c.business_name,
        "subject": c.subject,
        "description": c.description,
        "status": c.status,
        "priority": c.priority,
        "category": c.category,
        "resolution": c.resolution,
        "created_by_id": c.created_by_id,
        "resolved_at": _iso(c.resolved_at),
        "closed_at": _iso(c.closed_at),
        "created_at": _iso(c.created_at),
        "updated_at": _iso(c.updated_at),
    }
    note_count = getattr(c, "note_count", None)
    if note_count is not None:
        data["note_count"] = note_count
    if notes is not None:
        data["notes"] = [serialize_note(n) for n in notes]
        data["business"] = {"id": c.business.id, "name": c.business.name, "slug": c.business.slug}
    return data


def list_cases(
    *,
    search: str | None = None,
    status: str | None = None,
    priority: str | None = None,
    business_id: int | None = None,
    page: int = 1,
    page_size: int = 20,
) -> dict[str, Any]:
    qs = SupportCase.objects.all()

    if search:
        qs = qs.filter(
            Q(subject__icontains=search)
            | Q(business_name__icontains=search)
            | Q(description__icontains=search)
        )
    if status:
        qs = qs.filter(status=status)
    if priority:
        qs = qs.filter(priority=priority)
    if business_id:
        qs = qs.filter(business_id=business_id)

    total = qs.count()
    qs = qs.annotate(note_count=Count("notes"), status_rank=_STATUS_RANK).order_by("status_rank", "-created_at", "-id")

    start = (page - 1) * page_size
    items = [serialize_case(c) for c in qs[start:start + page_size]]
    return {"items": items, "total": total, "page": page, "page_size": page_size}


def _get_case(case_id: int) -> SupportCase:
    case = SupportCase.objects.select_related("business").filter(id=case_id).first()
    if not case:
        raise NotFound("Support case not found")
    return case


def get_case(case_id: int) -> dict[str, Any]:
    case = _get_case(case_id)
    return serialize_case(case, notes=list(case.notes.order_by("created_at", "id")))


def create_case(
    *,
    business_id: int,
    subject: str,
    description: str,
    priority: str | None = None,
    category: str | None = None,
    actor=None,
) -> SupportCase:
    business = Business.objects.filter(id=business_id).first()
    if not business:
        raise NotFound("Business not found")
    if priority and priority not in PRIORITIES:
        raise ValidationError({"priority": f"Must be one of: {', '.join(sorted(PRIORITIES))}"})

    case = SupportCase.objects.create(
        business=business,
        business_name=business.name,
        subject=subject,
        description=description,
        priority=priority or "normal",
        category=category or None,
        created_by=actor,
    )
    logger.info("Opened support case %s for business %s", case.id, business.id)
    return case


def update_case(case_id: int, *, status: str | None = None, priority: str | None = None, resolution: str | None = None) -> SupportCase:
    case = _get_case(case_id)

    if status:
        if status not in STATUSES:
            raise ValidationError({"status": f"Must be one of: {', '.join(sorted(STATUSES))}"})
        case.status = status
    if priority:
        if priority not in PRIORITIES:
            raise ValidationError({"priority": f"Must be one of: {', '.join(sorted(PRIORITIES))}"})
        case.priority = priority
    if resolution is not None:
        case.resolution = resolution

    now = timezone.now()
    if status == SupportCase.STATUS_RESOLVED and not case.resolved_at:
        case.resolved_at = now
    if status == SupportCase.STATUS_CLOSED and not case.closed_at:
        case.closed_at = now

    case.save()
    return case


def add_note(case_id: int, *, content: str, author) -> SupportCaseNote:
    case = _get_case(case_id)
    author_name = ""
    if author is not None:
        author_name = (author.get_full_name() or author.get_username() or "").strip()
    return SupportCaseNote.objects.create(
        case=case,
        author=author,
        author_name=author_name,
        content=content,
    )
