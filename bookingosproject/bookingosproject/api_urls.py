from __future__ import annotations

from django.urls import path
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from .api_views import HealthView, MeView
from .api_audit import AuditActionTypesView, AuditLogListView
from .api_pack_builder import (
    PackBuilderBySlugView,
    PackBuilderDetailView,
    PackBuilderListCreateView,
    PackBuilderNewVersionView,
    PackBuilderPublishView,
    PackBuilderVersionsView,
)
from .api_packs_console import (
    PackDetailView,
    PackPauseView,
    PackPinDetailView,
    PackPinsView,
    PackResumeView,
    PackRollbackView,
    PackRolloutView,
    PackVersionsView,
    PacksRegistryView,
)
from .api_platform_settings import PlatformSettingDetailView, PlatformSettingResetView, PlatformSettingsView
from .api_skills import SkillAdoptionView, SkillPlatformOverrideView, SkillsCatalogView
from .api_support import SupportCaseDetailView, SupportCaseNotesView, SupportCasesView
from .api_tenant_pack import BusinessPackView, SetupApplyPackView

urlpatterns = [
    path("health/", HealthView.as_view(), name="api_health"),
    path("me/", MeView.as_view(), name="api_me"),
    path("auth/token/", TokenObtainPairView.as_view(), name="token_obtain_pair"),
    path("auth/token/refresh/", TokenRefreshView.as_view(), name="token_refresh"),

    path("business/pack/", BusinessPackView.as_view(), name="api_business_pack"),
    path("setup/apply-pack/", SetupApplyPackView.as_view(), name="api_setup_apply_pack"),

    path("admin/pack-builder/", PackBuilderListCreateView.as_view(), name="api_pack_builder"),
    path("admin/pack-builder/<int:pack_id>/", PackBuilderDetailView.as_view(), name="api_pack_builder_detail"),
    path("admin/pack-builder/<int:pack_id>/publish/", PackBuilderPublishView.as_view(), name="api_pack_builder_publish"),
    path("admin/pack-builder/slug/<slug:slug>/", PackBuilderBySlugView.as_view(), name="api_pack_builder_by_slug"),
    path(
        "admin/pack-builder/slug/<slug:slug>/versions/",
        PackBuilderVersionsView.as_view(),
        name="api_pack_builder_versions",
    ),
    path(
        "admin/pack-builder/slug/<slug:slug>/new-version/",
        PackBuilderNewVersionView.as_view(),
        name="api_pack_builder_new_version",
    ),

    path("admin/packs-console/registry/", PacksRegistryView.as_view(), name="api_packs_registry"),
    path("admin/packs-console/<slug:slug>/detail/", PackDetailView.as_view(), name="api_pack_detail"),
    path("admin/packs-console/<slug:slug>/versions/", PackVersionsView.as_view(), name="api_pack_versions"),
    path(
        "admin/packs-console/<slug:slug>/versions/<int:version>/rollout/",
        PackRolloutView.as_view(),
        name="api_pack_rollout",
    ),
    path(
        "admin/packs-console/<slug:slug>/versions/<int:version>/pause/",
        PackPauseView.as_view(),
        name="api_pack_pause",
    ),
    path(
        "admin/packs-console/<slug:slug>/versions/<int:version>/resume/",
        PackResumeView.as_view(),
        name="api_pack_resume",
    ),
    path(
        "admin/packs-console/<slug:slug>/versions/<int:version>/rollback/",
        PackRollbackView.as_view(),
        name="api_pack_rollback",
    ),
    path("admin/packs-console/<slug:slug>/pins/", PackPinsView.as_view(), name="api_pack_pins"),
    path(
        "admin/packs-console/<slug:slug>/pins/<int:business_id>/",
        PackPinDetailView.as_view(),
        name="api_pack_pin_detail",
    ),

    path("admin/skills-console/catalog/", SkillsCatalogView.as_view(), name="api_skills_catalog"),
    path("admin/skills-console/<str:agent_type>/adoption/", SkillAdoptionView.as_view(), name="api_skill_adoption"),
    path(
        "admin/skills-console/<str:agent_type>/platform-override/",
        SkillPlatformOverrideView.as_view(),
        name="api_skill_platform_override",
    ),

    path("admin/support-cases/", SupportCasesView.as_view(), name="api_support_cases"),
    path("admin/support-cases/<int:case_id>/", SupportCaseDetailView.as_view(), name="api_support_case_detail"),
    path("admin/support-cases/<int:case_id>/notes/", SupportCaseNotesView.as_view(), name="api_support_case_notes"),

    path("admin/platform-settings/", PlatformSettingsView.as_view(), name="api_platform_settings"),
    path("admin/platform-settings/<str:key>/", PlatformSettingDetailView.as_view(), name="api_platform_setting_detail"),
    path(
        "admin/platform-settings/<str:key>/reset/",
        PlatformSettingResetView.as_view(),
        name="api_platform_setting_reset",
    ),

    path("admin/audit/", AuditLogListView.as_view(), name="api_audit"),
    path("admin/audit/action-types/", AuditActionTypesView.as_view(), name="api_audit_action_types"),
]
