from __future__ import annotations

from console import support
from console.audit import log_action
from console.permissions import IsPlatformAdmin

from .api_helpers import coerce_int, coerce_str, page_params, request_data

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


class SupportCasesView(APIView):
    permission_classes = [IsAuthenticated, IsPlatformAdmin]

    def get(self, request):
        qp = request.query_params
        page, page_size = page_params(request)
        business_id = coerce_int(qp.get("business_id"), field="business_id", minimum=1, required=False)

        return Response(
            support.list_cases(
                search=(qp.get("search") or "").strip() or None,
                status=(qp.get("status") or "").strip() or None,
                priority=(qp.get("priority") or "").strip() or None,
                business_id=business_id,
                page=page,
                page_size=page_size,
            )
        )

    def post(self, request):
        data = request_data(request)
        business_id = coerce_int(data.get("business_id"), field="business_id", minimum=1)
        subject = coerce_str(data.get("subject"), field="subject", max_length=200)
        description = coerce_str(data.get("description"), field="description")
        priority = coerce_str(data.get("priority"), field="priority", required=False)
        category = coerce_str(data.get("category"), field="category", required=False, max_length=60)

        case = support.create_case(
            business_id=business_id,
            subject=subject,
            description=description,
            priority=priority,
            category=category,
            actor=request.user,
        )
        log_action(
            request.user,
            "SUPPORT_CASE_CREATE",
            target_type="SUPPORT_CASE",
            target_id=case.id,
            metadata={"business_id": business_id, "priority": case.priority},
        )
        return Response({"case": support.serialize_case(case)}, status=status.HTTP_201_CREATED)


class SupportCaseDetailView(APIView):
    permission_classes = [IsAuthenticated, IsPlatformAdmin]

    def get(self, request, case_id: int):
        return Response({"case": support.get_case(case_id)})

    def patch(self, request, case_id: int):
        data = request_data(request)
        status_value = coerce_str(data.get("status"), field="status", required=False)
        priority = coerce_str(data.get("priority"), field="priority", required=False)
        resolution = None
        if "resolution" in data:
            resolution = coerce_str(data.get("resolution"), field="resolution", required=False) or ""

        case = support.update_case(case_id, status=status_value, priority=priority, resolution=resolution)
        log_action(
            request.user,
            "SUPPORT_CASE_UPDATE",
            target_type="SUPPORT_CASE",
            target_id=case.id,
            metadata={k: data[k] for k in ("status", "priority") if data.get(k)},
        )
        return Response({"case": support.serialize_case(case)})


class SupportCaseNotesView(APIView):
    permission_classes = [IsAuthenticated, IsPlatformAdmin]

    def post(self, request, case_id: int):
        data = request_data(request)
        content = coerce_str(data.get("content"), field="content")

        note = support.add_note(case_id, content=content, author=request.user)
        log_action(
            request.user,
            "SUPPORT_CASE_NOTE",
            target_type="SUPPORT_CASE",
            target_id=case_id,
        )
        return Response({"note": support.serialize_note(note)}, status=status.HTTP_201_CREATED)
