from __future__ import annotations

from django.contrib import admin

from .models import AgentConfig, PackTenantPin, VerticalPackVersion


@admin.register(VerticalPackVersion)
class VerticalPackVersionAdmin(admin.ModelAdmin):
    list_display = (
        "slug",
        "version",
        "name",
        "is_published",
        "rollout_stage",
        "rollout_percent",
        "rollout_started_at",
        "rolled_back_at",
        "updated_at",
    )
    list_filter = ("rollout_stage", "is_published", "slug")
    search_fields = ("slug", "name", "description")
    ordering = ("slug", "-version")
    # Stage changes go through the console so they are validated and audited.
    readonly_fields = (
        "is_published",
        "published_at",
        "rollout_stage",
        "rollout_percent",
        "rollout_started_at",
        "rollout_completed_at",
        "rollout_paused_at",
        "rolled_back_at",
        "rolled_back_reason",
        "created_at",
        "updated_at",
    )


@admin.register(PackTenantPin)
class PackTenantPinAdmin(admin.ModelAdmin):
    list_display = ("business", "pack_slug", "pinned_version", "pinned_by", "created_at")
    list_select_related = ("business", "pinned_by")
    list_filter = ("pack_slug",)
    search_fields = ("business__name", "business__slug", "pack_slug", "reason")


@admin.register(AgentConfig)
class AgentConfigAdmin(admin.ModelAdmin):
    list_display = ("business", "agent_type", "is_enabled", "autonomy_level", "updated_at")
    list_select_related = ("business",)
    list_filter = ("agent_type", "is_enabled", "autonomy_level")
    search_fields = ("business__name", "business__slug", "agent_type")
