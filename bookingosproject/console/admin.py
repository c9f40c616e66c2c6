from __future__ import annotations

from django.contrib import admin

from .models import PlatformAuditLog, PlatformSetting, SupportCase, SupportCaseNote


@admin.register(PlatformAuditLog)
class PlatformAuditLogAdmin(admin.ModelAdmin):
    list_display = ("created_at", "action", "actor_email", "target_type", "target_id")
    list_filter = ("action", "target_type")
    search_fields = ("actor_email", "action", "target_id", "reason")
    date_hierarchy = "created_at"
    readonly_fields = ("actor", "actor_email", "action", "target_type", "target_id", "reason", "metadata", "created_at")

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False


class SupportCaseNoteInline(admin.TabularInline):
    model = SupportCaseNote
    extra = 0
    fields = ("author_name", "content", "created_at")
    readonly_fields = ("created_at",)


@admin.register(SupportCase)
class SupportCaseAdmin(admin.ModelAdmin):
    list_display = ("subject", "business_name", "status", "priority", "category", "created_at")
    list_filter = ("status", "priority", "category")
    search_fields = ("subject", "business_name", "description")
    ordering = ("-created_at",)
    inlines = [SupportCaseNoteInline]


@admin.register(PlatformSetting)
class PlatformSettingAdmin(admin.ModelAdmin):
    list_display = ("key", "value", "updated_by", "updated_at")
    search_fields = ("key",)
