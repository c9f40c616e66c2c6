"""Built-in vertical pack definitions and the agent-skill catalogue.

These are the code-defined starting points for each vertical. The
``seed_packs`` management command stores them as version 1 rows, and
``packs.rollout.resolve_pack_for_business`` falls back to them when a
business has no pinned or rolled-out version.

Config keys are camelCase because the config JSON is handed to the web
client unchanged.
"""
from __future__ import annotations

import copy
from typing import Any

from rest_framework.exceptions import NotFound


def default_pack_config() -> dict[str, Any]:
    return {
        "labels": {"customer": "Customer", "booking": "Booking", "service": "Service"},
        "intakeFields": [],
        "defaultServices": [],
        "defaultTemplates": [],
        "defaultAutomations": [],
        "kanbanEnabled": False,
        "kanbanStatuses": [],
    }


_COMMON_TEMPLATES = [
    {
        "name": "Booking Confirmation",
        "category": "CONFIRMATION",
        "body": "Your {{serviceName}} appointment has been booked for {{date}} at {{time}} at {{businessName}}. See you then!",
        "variables": ["serviceName", "date", "time", "businessName"],
    },
    {
        "name": "24h Reminder",
        "category": "REMINDER",
        "body": "Hi {{customerName}}! Reminder: your {{serviceName}} is tomorrow at {{time}} at {{businessName}}. Reply YES to confirm.",
        "variables": ["customerName", "serviceName", "time", "businessName"],
    },
    {
        "name": "Cancellation Confirmation",
        "category": "CANCELLATION",
        "body": "Hi {{customerName}}, your {{serviceName}} on {{date}} at {{time}} at {{businessName}} has been cancelled. Contact us to rebook.",
        "variables": ["customerName", "serviceName", "date", "time", "businessName"],
    },
    {
        "name": "Reschedule Link",
        "category": "RESCHEDULE_LINK",
        "body": "Hi {{customerName}}, need to reschedule your {{serviceName}} on {{date}} at {{time}}? Use this link: {{rescheduleLink}}",
        "variables": ["customerName", "serviceName", "date", "time", "rescheduleLink"],
    },
    {
        "name": "Cancel Link",
        "category": "CANCEL_LINK",
        "body": "Hi {{customerName}}, need to cancel your {{serviceName}} on {{date}} at {{time}}? Use this link: {{cancelLink}}",
        "variables": ["customerName", "serviceName", "date", "time", "cancelLink"],
    },
]

_GENERAL_PACK = {
    "name": "general",
    "displayName": "General",
    "description": "Default configuration for any appointment-based business",
    "labels": {"customer": "Customer", "booking": "Booking", "service": "Service"},
    "intakeFields": [],
    "defaultServices": [],
    "defaultTemplates": _COMMON_TEMPLATES,
    "defaultAutomations": [],
    "kanbanEnabled": False,
    "kanbanStatuses": [],
}

_AESTHETIC_PACK = {
    "name": "aesthetic",
    "displayName": "Aesthetic Clinic",
    "description": "Medical aesthetics and skin clinics",
    "labels": {"customer": "Patient", "booking": "Appointment", "service": "Treatment"},
    "intakeFields": [
        {"key": "isMedicalFlagged", "type": "boolean", "label": "Medical Flag"},
        {"key": "allergies", "type": "text", "label": "Allergies"},
        {"key": "concernArea", "type": "text", "label": "Concern Area"},
        {"key": "desiredTreatment", "type": "text", "label": "Desired Treatment"},
        {
            "key": "budget",
            "type": "select",
            "label": "Budget",
            "options": ["Under $250", "$250-$500", "$500-$1000", "$1000+"],
        },
        {"key": "preferredProvider", "type": "text", "label": "Preferred Provider"},
        {"key": "contraindications", "type": "text", "label": "Contraindications"},
    ],
    "defaultServices": [
        {"name": "Consultation", "durationMins": 30, "price": 0, "category": "Consultation", "kind": "CONSULT"},
        {"name": "Botox", "durationMins": 30, "price": 350, "category": "Injectables", "kind": "TREATMENT"},
        {"name": "Dermal Filler", "durationMins": 45, "price": 600, "category": "Injectables", "kind": "TREATMENT"},
        {"name": "Chemical Peel", "durationMins": 60, "price": 200, "category": "Skin", "kind": "TREATMENT"},
    ],
    "defaultTemplates": _COMMON_TEMPLATES
    + [
        {
            "name": "Treatment Aftercare",
            "category": "FOLLOW_UP",
            "body": "Hi {{customerName}}, thank you for visiting {{businessName}}. Here are your aftercare instructions for {{serviceName}}: {{aftercareLink}}",
            "variables": ["customerName", "businessName", "serviceName", "aftercareLink"],
        },
    ],
    "defaultAutomations": [],
    "kanbanEnabled": False,
    "kanbanStatuses": [],
}

_DEALERSHIP_PACK = {
    "name": "dealership",
    "displayName": "Dealership",
    "description": "Car dealerships with sales and service departments",
    "labels": {"customer": "Client", "booking": "Appointment", "service": "Service"},
    "intakeFields": [
        {"key": "make", "type": "text", "label": "Make", "required": True},
        {"key": "model", "type": "text", "label": "Model", "required": True},
        {"key": "year", "type": "number", "label": "Year"},
        {"key": "vin", "type": "text", "label": "VIN"},
        {"key": "mileage", "type": "number", "label": "Mileage"},
        {
            "key": "interestType",
            "type": "select",
            "label": "Interest Type",
            "options": ["New", "Used", "Trade-in", "Service"],
        },
    ],
    "defaultServices": [
        {"name": "Test Drive", "durationMins": 30, "price": 0, "category": "Sales", "kind": "CONSULT"},
        {"name": "Routine Maintenance", "durationMins": 60, "price": 150, "category": "Service", "kind": "TREATMENT"},
        {"name": "Brake Service", "durationMins": 90, "price": 250, "category": "Service", "kind": "TREATMENT"},
        {"name": "Oil Change", "durationMins": 30, "price": 60, "category": "Service", "kind": "TREATMENT"},
        {"name": "Diagnostic Check", "durationMins": 45, "price": 80, "category": "Service", "kind": "CONSULT"},
    ],
    "defaultTemplates": [
        {
            "name": "Car Ready for Pickup",
            "category": "CUSTOM",
            "body": "Hi {{customerName}}, your vehicle is ready for pickup at {{businessName}}! Please bring your service receipt. We look forward to seeing you.",
            "variables": ["customerName", "businessName"],
        },
        {
            "name": "Service Status Update",
            "category": "CUSTOM",
            "body": "Hi {{customerName}}, here is an update on your vehicle at {{businessName}}: {{statusMessage}}. If you have questions, reply to this message.",
            "variables": ["customerName", "businessName", "statusMessage"],
        },
        {
            "name": "Quote Approval Request",
            "category": "CUSTOM",
            "body": "Hi {{customerName}}, we have prepared a service quote for your vehicle at {{businessName}}. Total: ${{totalAmount}}. Please review and approve here: {{approvalLink}}",
            "variables": ["customerName", "businessName", "totalAmount", "approvalLink"],
        },
        {
            "name": "6-Month Maintenance Nudge",
            "category": "FOLLOW_UP",
            "body": "Hi {{customerName}}, it's been 6 months since your last service at {{businessName}}. Time for a maintenance check? Book your appointment: {{bookingLink}}",
            "variables": ["customerName", "businessName", "bookingLink"],
        },
        {
            "name": "Test Drive Confirmation",
            "category": "CONFIRMATION",
            "body": "Your test drive has been booked for {{date}} at {{time}} at {{businessName}}. Please bring a valid driver's license. See you soon!",
            "variables": ["date", "time", "businessName"],
        },
    ]
    + _COMMON_TEMPLATES,
    "defaultAutomations": [],
    "kanbanEnabled": True,
    "kanbanStatuses": ["CHECKED_IN", "DIAGNOSING", "AWAITING_APPROVAL", "IN_PROGRESS", "READY_FOR_PICKUP"],
}

_PACKS = {
    "general": _GENERAL_PACK,
    "aesthetic": _AESTHETIC_PACK,
    "dealership": _DEALERSHIP_PACK,
}


def get_pack(name: str) -> dict[str, Any]:
    pack = _PACKS.get(name)
    if pack is None:
        raise NotFound(f'Vertical pack "{name}" not found')
    return copy.deepcopy(pack)


def get_all_packs() -> list[str]:
    return list(_PACKS.keys())


def pack_config_from_definition(name: str) -> dict[str, Any]:
    """Strip the identity keys so the rest can be stored as a version's config."""
    pack = get_pack(name)
    for key in ("name", "displayName", "description"):
        pack.pop(key, None)
    return pack


def _skill(agent_type, name, description, category, default_enabled):
    return {
        "agent_type": agent_type,
        "name": name,
        "description": description,
        "category": category,
        "default_enabled": default_enabled,
    }


PACK_SKILLS: dict[str, list[dict[str, Any]]] = {
    "aesthetic": [
        _skill("WAITLIST", "Waitlist Matching", "Automatically matches waitlisted patients with available appointment slots", "proactive", True),
        _skill("RETENTION", "Patient Retention", "Detects patients who are overdue for their regular treatments and suggests follow-up", "proactive", True),
        _skill("DATA_HYGIENE", "Duplicate Detection", "Identifies potential duplicate patient records for review and merge", "maintenance", False),
        _skill("SCHEDULING_OPTIMIZER", "Schedule Optimization", "Finds gaps in provider schedules and suggests fill opportunities", "proactive", True),
        _skill("QUOTE_FOLLOWUP", "Quote Follow-up", "Tracks pending treatment quotes and suggests follow-up when stalled", "reactive", True),
    ],
    "dealership": [
        _skill("WAITLIST", "Service Waitlist", "Matches customers on the service waitlist with available bay slots", "proactive", True),
        _skill("RETENTION", "Service Retention", "Identifies vehicles overdue for regular service based on customer visit patterns", "proactive", True),
        _skill("DATA_HYGIENE", "Customer Dedup", "Finds duplicate customer records across sales and service databases", "maintenance", True),
        _skill("SCHEDULING_OPTIMIZER", "Bay Optimization", "Optimizes service bay utilization by identifying scheduling gaps", "proactive", True),
        _skill("QUOTE_FOLLOWUP", "Estimate Follow-up", "Tracks pending repair estimates and follows up with customers", "reactive", True),
    ],
    "general": [
        _skill("WAITLIST", "Waitlist Matching", "Matches waitlisted customers with available slots", "proactive", True),
        _skill("RETENTION", "Customer Retention", "Detects customers who may be overdue for their next visit", "proactive", False),
        _skill("DATA_HYGIENE", "Duplicate Detection", "Identifies potential duplicate customer records", "maintenance", False),
        _skill("SCHEDULING_OPTIMIZER", "Schedule Optimization", "Finds gaps in staff schedules and suggests fill opportunities", "proactive", False),
        _skill("QUOTE_FOLLOWUP", "Quote Follow-up", "Tracks pending quotes and suggests follow-up", "reactive", False),
    ],
}


def skills_for_pack(slug: str) -> list[dict[str, Any]]:
    return PACK_SKILLS.get(slug) or PACK_SKILLS["general"]


def find_skill(agent_type: str) -> dict[str, Any] | None:
    for skills in PACK_SKILLS.values():
        for skill in skills:
            if skill["agent_type"] == agent_type:
                return skill
    return None
