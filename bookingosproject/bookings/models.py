from django.db import models
from accounts.models import Business as Organization


class Service(models.Model):
    KIND_CONSULT = 'CONSULT'
    KIND_TREATMENT = 'TREATMENT'
    KIND_OTHER = 'OTHER'
    KIND_CHOICES = (
        (KIND_CONSULT, 'Consultation'),
        (KIND_TREATMENT, 'Treatment'),
        (KIND_OTHER, 'Other'),
    )

    organization = models.ForeignKey(
        Organization, on_delete=models.CASCADE, related_name="services"
    )

    name = models.CharField(max_length=120)
    slug = models.SlugField(unique=True)

    description = models.TextField(blank=True)

    duration = models.PositiveIntegerField(help_text="Duration in minutes")
    price = models.DecimalField(max_digits=8, decimal_places=2, default=0)

    # Grouping label shown in the booking portal (e.g. "Sales", "Service").
    category = models.CharField(max_length=80, blank=True)
    kind = models.CharField(max_length=20, choices=KIND_CHOICES, default=KIND_OTHER)

    is_active = models.BooleanField(default=True)

    def __str__(self):
        return f"{self.name} ({self.organization.name})"

    class Meta:
        indexes = [
            models.Index(fields=["organization", "is_active"], name="service_org_active_idx"),
        ]
