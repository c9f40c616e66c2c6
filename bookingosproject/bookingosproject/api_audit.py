from __future__ import annotations

from console import audit
from console.permissions import IsPlatformAdmin

from .api_helpers import page_params, parse_when

try:
    from rest_framework.permissions import IsAuthenticated
    from rest_framework.response import Response
    from rest_framework.views import APIView
except Exception as exc:  # pragma: no cover
    raise RuntimeError(
        "Django REST Framework is required for API views. "
        "Install 'djangorestframework' and ensure 'rest_framework' is in INSTALLED_APPS."
    ) from exc


class AuditLogListView(APIView):
    permission_classes = [IsAuthenticated, IsPlatformAdmin]

    def get(self, request):
        qp = request.query_params
        page, page_size = page_params(request, default_size=50, max_size=200)
        return Response(
            audit.list_entries(
                search=(qp.get("search") or "").strip() or None,
                action=(qp.get("action") or "").strip() or None,
                date_from=parse_when(qp.get("from"), field="from"),
                date_to=parse_when(qp.get("to"), field="to"),
                page=page,
                page_size=page_size,
            )
        )


class AuditActionTypesView(APIView):
    permission_classes = [IsAuthenticated, IsPlatformAdmin]

    def get(self, request):
        return Response({"items": audit.get_action_types()})
