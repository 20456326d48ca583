"""
View-model for the contact detail and edit screen.

Loads one contact, applies field edits (formatting phone numbers as they are
typed), submits the edited contact and replaces its photo.
"""

import logging
import time
from collections.abc import Callable
from dataclasses import replace
from typing import Optional

from safelink.api.contact_api import ContactAPI, ContactAPIError
from safelink.models.contact import EDITABLE_FIELDS, Contact, PendingPhoto
from safelink.utils.phone import format_phone

# Route the detail screen returns to after a successful save
LIST_PATH = "/contacts"

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    """Raised when required form fields are missing."""

    def __init__(self, missing_fields: list[str]):
        self.missing_fields = list(missing_fields)
        super().__init__(f"Missing required fields: {', '.join(self.missing_fields)}")


class SubmitEvent:
    """
    Form submission event.

    Handlers call prevent_default() to stop the default submit behaviour
    (for a browser form, a full page reload).
    """

    def __init__(self) -> None:
        self.default_prevented = False

    def prevent_default(self) -> None:
        self.default_prevented = True


def epoch_millis() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


class ContactDetailViewModel:
    """
    State and commands for a single contact's detail screen.

    The composition root supplies the update_contact and update_image
    callbacks so that saving and photo uploads share its notifications.

    Attributes:
        api: Contact service client, used to (re)load the contact
        contact_id: Id of the contact shown on this screen
        contact: Editable copy of the contact, as sent back to the service
        photo_version: Epoch millis of the last photo replacement, if any
        error: Last error raised while loading, validating or saving
        navigate_to: Path to navigate to after a successful save, if any
    """

    def __init__(
        self,
        api: ContactAPI,
        contact_id: str,
        update_contact: Callable[[Contact], Contact],
        update_image: Callable[[str, PendingPhoto], str],
        now_ms: Callable[[], int] = epoch_millis,
    ):
        self.api = api
        self.contact_id = contact_id
        self.update_contact = update_contact
        self.update_image = update_image
        self.now_ms = now_ms
        self.contact = Contact(id=contact_id)
        self.photo_version: Optional[int] = None
        self.loaded = False
        self.error: Optional[Exception] = None
        self.navigate_to: Optional[str] = None

    @property
    def display_contact(self) -> Contact:
        """
        The contact as it should be rendered.

        After a photo replacement the photo URL carries an ``updated_at``
        query so the old image is not served from cache. The canonical
        ``contact`` keeps the service's URL.
        """
        if self.photo_version is None:
            return self.contact
        return self.contact.with_photo_cache_buster(self.photo_version)

    def fetch(self) -> bool:
        """
        Load the contact from the service.

        Returns:
            True if the contact was loaded
        """
        try:
            self.contact = self.api.get_by_id(self.contact_id)
        except ContactAPIError as e:
            logger.error(f"Failed to fetch contact {self.contact_id}: {e}")
            self.error = e
            return False

        self.loaded = True
        self.error = None
        return True

    def change(self, field_name: str, raw_value: str) -> None:
        """
        Apply an edit to one field.

        Phone numbers are formatted as they are stored; all other fields are
        kept verbatim.

        Raises:
            ValueError: If field_name is not an editable field
        """
        if field_name not in EDITABLE_FIELDS:
            raise ValueError(f"Unknown or read-only field: {field_name}")

        value = format_phone(raw_value) if field_name == "phone" else raw_value
        self.contact = replace(self.contact, **{field_name: value})

    def validate(self) -> list[str]:
        """Return the required fields that are still empty."""
        return self.contact.missing_fields()

    def on_update(self, event: SubmitEvent) -> bool:
        """
        Submit the edited contact.

        Prevents the event's default behaviour, saves through update_contact,
        reloads the canonical contact and asks to return to the list. On any
        failure the edited fields stay in place so the user can retry.

        Returns:
            True if the contact was saved
        """
        event.prevent_default()
        self.navigate_to = None
        self.error = None

        missing = self.validate()
        if missing:
            self.error = ValidationError(missing)
            logger.warning(str(self.error))
            return False

        try:
            self.update_contact(self.contact)
        except ContactAPIError as e:
            self.error = e
            return False

        self.fetch()
        self.navigate_to = LIST_PATH
        return True

    def update_photo(self, photo: PendingPhoto) -> bool:
        """
        Replace the contact's photo.

        The URL reported by the upload becomes the contact's photo URL, so a
        later save keeps the new photo. display_contact additionally stamps a
        fresh ``updated_at`` query on it.

        Returns:
            True if the photo was uploaded
        """
        try:
            photo_url = self.update_image(self.contact_id, photo)
        except ContactAPIError as e:
            logger.error(f"Failed to update photo for {self.contact_id}: {e}")
            self.error = e
            return False

        if photo_url:
            self.contact = replace(self.contact, photo_url=photo_url)
        self.photo_version = self.now_ms()
        return True
