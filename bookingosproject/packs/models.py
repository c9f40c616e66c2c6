from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from accounts.models import Business


class VerticalPackVersion(models.Model):
    """One immutable-once-published version of a vertical pack.

    Lifecycle: draft -> published -> rolling_out <-> paused -> completed.
    Any version that reached rolling_out, paused or completed can be
    rolled back; rolled_back is terminal.
    """

    STAGE_DRAFT = 'draft'
    STAGE_PUBLISHED = 'published'
    STAGE_ROLLING_OUT = 'rolling_out'
    STAGE_PAUSED = 'paused'
    STAGE_COMPLETED = 'completed'
    STAGE_ROLLED_BACK = 'rolled_back'
    STAGE_CHOICES = (
        (STAGE_DRAFT, 'Draft'),
        (STAGE_PUBLISHED, 'Published'),
        (STAGE_ROLLING_OUT, 'Rolling out'),
        (STAGE_PAUSED, 'Paused'),
        (STAGE_COMPLETED, 'Completed'),
        (STAGE_ROLLED_BACK, 'Rolled back'),
    )

    slug = models.SlugField(max_length=64)
    version = models.PositiveIntegerField(default=1)
    name = models.CharField(max_length=120)
    description = models.TextField(blank=True, null=True)
    config = models.JSONField(default=dict, blank=True)

    is_published = models.BooleanField(default=False)
    published_at = models.DateTimeField(null=True, blank=True)

    rollout_stage = models.CharField(max_length=20, choices=STAGE_CHOICES, default=STAGE_DRAFT)
    rollout_percent = models.PositiveSmallIntegerField(
        default=0, validators=[MinValueValidator(0), MaxValueValidator(100)]
    )
    rollout_started_at = models.DateTimeField(null=True, blank=True)
    rollout_completed_at = models.DateTimeField(null=True, blank=True)
    rollout_paused_at = models.DateTimeField(null=True, blank=True)
    rolled_back_at = models.DateTimeField(null=True, blank=True)
    rolled_back_reason = models.TextField(blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["slug", "-version"]
        constraints = [
            models.UniqueConstraint(fields=["slug", "version"], name="unique_pack_slug_version"),
        ]

    def __str__(self):
        return f"{self.slug} v{self.version} ({self.rollout_stage})"


class PackTenantPin(models.Model):
    """Binds one business to a specific version of a pack, overriding the rollout."""

    business = models.ForeignKey(Business, on_delete=models.CASCADE, related_name="pack_pins")
    pack_slug = models.SlugField(max_length=64)
    pinned_version = models.PositiveIntegerField()
    reason = models.TextField(blank=True)
    pinned_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="pack_pins"
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(fields=["business", "pack_slug"], name="unique_pin_business_pack"),
        ]

    def __str__(self):
        return f"{self.business} pinned to {self.pack_slug} v{self.pinned_version}"


class AgentConfig(models.Model):
    """Per-business enablement of one agent skill from the pack's catalogue."""

    AUTONOMY_CHOICES = (
        ('SUGGEST', 'Suggest'),
        ('ASSIST', 'Assist'),
        ('AUTO', 'Auto'),
    )

    business = models.ForeignKey(Business, on_delete=models.CASCADE, related_name="agent_configs")
    agent_type = models.CharField(max_length=40)
    is_enabled = models.BooleanField(default=False)
    autonomy_level = models.CharField(max_length=20, choices=AUTONOMY_CHOICES, default='SUGGEST')
    config = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(fields=["business", "agent_type"], name="unique_agent_config_business_type"),
        ]

    def __str__(self):
        state = "on" if self.is_enabled else "off"
        return f"{self.agent_type} for {self.business} ({state})"
