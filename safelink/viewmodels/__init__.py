"""
safelink.viewmodels - Screen state module

Contains the list and detail view-models driven by the composition root.
"""

from safelink.viewmodels.detail_view import (
    ContactDetailViewModel,
    SubmitEvent,
    ValidationError,
)
from safelink.viewmodels.list_view import ContactListViewModel, ListState, PageLink

__all__ = [
    "ContactDetailViewModel",
    "ContactListViewModel",
    "ListState",
    "PageLink",
    "SubmitEvent",
    "ValidationError",
]
