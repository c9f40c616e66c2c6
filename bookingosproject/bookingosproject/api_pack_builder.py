from __future__ import annotations

import re

from console.audit import log_action
from console.permissions import IsPlatformAdmin
from packs import builder
from packs.models import VerticalPackVersion
from packs.rollout import version_summary

from .api_helpers import TRUTHY, coerce_object, coerce_str, request_data

try:
    from rest_framework import status
    from rest_framework.exceptions import ValidationError
    from rest_framework.permissions import IsAuthenticated
    from rest_framework.response import Response
    from rest_framework.views import APIView
except Exception as exc:  # pragma: no cover
    raise RuntimeError(
        "Django REST Framework is required for API views. "
        "Install 'djangorestframework' and ensure 'rest_framework' is in INSTALLED_APPS."
    ) from exc


SLUG_RE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def _serialize_pack(pack: VerticalPackVersion):
    return version_summary(pack, include_config=True)


class PackBuilderListCreateView(APIView):
    permission_classes = [IsAuthenticated, IsPlatformAdmin]

    def get(self, request):
        include_all = (request.query_params.get("all") or "").strip() in TRUTHY
        packs = builder.list_packs(include_all_versions=include_all)
        return Response({"count": len(packs), "items": [_serialize_pack(p) for p in packs]})

    def post(self, request):
        data = request_data(request)

        slug = coerce_str(data.get("slug"), field="slug", max_length=64)
        if not SLUG_RE.match(slug):
            raise ValidationError({"slug": "Use lowercase letters, numbers and single hyphens."})
        name = coerce_str(data.get("name"), field="name", max_length=255)
        description = coerce_str(data.get("description"), field="description", required=False)
        config = coerce_object(data.get("config"), field="config")

        pack = builder.create_pack(slug=slug, name=name, description=description, config=config)
        log_action(
            request.user,
            "PACK_BUILDER_CREATE",
            target_type="PACK",
            target_id=pack.id,
            metadata={"slug": pack.slug, "version": pack.version},
        )
        return Response({"pack": _serialize_pack(pack)}, status=status.HTTP_201_CREATED)


class PackBuilderDetailView(APIView):
    permission_classes = [IsAuthenticated, IsPlatformAdmin]

    def get(self, request, pack_id: int):
        return Response({"pack": _serialize_pack(builder.get_pack_by_id(pack_id))})

    def patch(self, request, pack_id: int):
        data = request_data(request)

        name = None
        if "name" in data:
            name = coerce_str(data.get("name"), field="name", max_length=255)
        description = None
        if "description" in data:
            description = coerce_str(data.get("description"), field="description", required=False) or ""
        config = None
        if "config" in data:
            config = coerce_object(data.get("config"), field="config")

        pack = builder.update_pack(pack_id, name=name, description=description, config=config)
        log_action(
            request.user,
            "PACK_BUILDER_UPDATE",
            target_type="PACK",
            target_id=pack.id,
            metadata={"slug": pack.slug, "version": pack.version, "fields": sorted(k for k in data if k in {"name", "description", "config"})},
        )
        return Response({"pack": _serialize_pack(pack)})

    def delete(self, request, pack_id: int):
        pack = builder.delete_pack(pack_id)
        log_action(
            request.user,
            "PACK_BUILDER_DELETE",
            target_type="PACK",
            target_id=pack_id,
            metadata={"slug": pack.slug, "version": pack.version},
        )
        return Response(status=status.HTTP_204_NO_CONTENT)


class PackBuilderPublishView(APIView):
    permission_classes = [IsAuthenticated, IsPlatformAdmin]

    def post(self, request, pack_id: int):
        pack = builder.publish_pack(pack_id)
        log_action(
            request.user,
            "PACK_BUILDER_PUBLISH",
            target_type="PACK",
            target_id=pack.id,
            metadata={"slug": pack.slug, "version": pack.version},
        )
        return Response({"pack": _serialize_pack(pack)})


class PackBuilderBySlugView(APIView):
    permission_classes = [IsAuthenticated, IsPlatformAdmin]

    def get(self, request, slug: str):
        return Response({"pack": _serialize_pack(builder.get_pack_by_slug(slug))})


class PackBuilderVersionsView(APIView):
    permission_classes = [IsAuthenticated, IsPlatformAdmin]

    def get(self, request, slug: str):
        versions = builder.get_pack_versions(slug)
        return Response({"slug": slug, "count": len(versions), "items": [version_summary(v) for v in versions]})


class PackBuilderNewVersionView(APIView):
    permission_classes = [IsAuthenticated, IsPlatformAdmin]

    def post(self, request, slug: str):
        pack = builder.create_new_version(slug)
        log_action(
            request.user,
            "PACK_BUILDER_NEW_VERSION",
            target_type="PACK",
            target_id=pack.id,
            metadata={"slug": pack.slug, "version": pack.version},
        )
        return Response({"pack": _serialize_pack(pack)}, status=status.HTTP_201_CREATED)
