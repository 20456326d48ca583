"""
safelink.models - Data model module

Contains the Contact, Page and form draft representations.
"""

from safelink.models.contact import (
    EDITABLE_FIELDS,
    REQUIRED_FIELDS,
    Contact,
    FormDraft,
    Page,
    PendingPhoto,
)

__all__ = [
    "Contact",
    "Page",
    "FormDraft",
    "PendingPhoto",
    "EDITABLE_FIELDS",
    "REQUIRED_FIELDS",
]
