from __future__ import annotations

from django.contrib import admin

from .models import Service


@admin.register(Service)
class ServiceAdmin(admin.ModelAdmin):
	list_display = ("name", "organization", "category", "kind", "duration", "price", "is_active")
	list_select_related = ("organization",)
	list_filter = ("kind", "is_active")
	search_fields = ("name", "slug", "organization__name", "organization__slug")
	ordering = ("organization", "name")
