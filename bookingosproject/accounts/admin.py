from django.contrib import admin
from .models import Business, Membership


def archive_businesses(modeladmin, request, queryset):
    queryset.update(is_archived=True)
archive_businesses.short_description = "Archive selected businesses"


def mark_setup_incomplete(modeladmin, request, queryset):
    count = queryset.update(setup_complete=False)
    modeladmin.message_user(request, f"Reopened the setup wizard for {count} businesses.")
mark_setup_incomplete.short_description = "Reopen setup wizard for selected businesses"


class MembershipInline(admin.TabularInline):
    model = Membership
    extra = 0
    fields = ("user", "role", "is_active", "created_at")
    readonly_fields = ("created_at",)


@admin.register(Business)
class OrganizationAdmin(admin.ModelAdmin):
    list_display = ("name", "slug", "owner", "vertical_pack", "setup_complete", "is_archived", "created_at")
    search_fields = ("name", "slug", "owner__username")
    ordering = ("-created_at",)
    list_filter = ("vertical_pack", "setup_complete", "is_archived")
    actions = [archive_businesses, mark_setup_incomplete]
    inlines = [MembershipInline]


@admin.register(Membership)
class MembershipAdmin(admin.ModelAdmin):
    list_display = ("user", "organization", "role", "is_active", "created_at")
    list_filter = ("role", "is_active")
    search_fields = ("user__username", "organization__name")
