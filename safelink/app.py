"""
Composition root for the contacts client.

ContactApp wires the contact service client, the notification sink and the
view-models together, and owns the screen-level state:
- The list view-model and its fetch-on-mount
- The creation form draft and modal visibility
- The current route (contact list or a single contact)
"""

import logging
from dataclasses import dataclass
from typing import Optional

from safelink.api.contact_api import ContactAPI, ContactAPIError
from safelink.models.contact import Contact, FormDraft, PendingPhoto
from safelink.notifications import MemoryNotifier, Notifier
from safelink.viewmodels.detail_view import (
    LIST_PATH,
    ContactDetailViewModel,
    SubmitEvent,
    ValidationError,
)
from safelink.viewmodels.list_view import ContactListViewModel

logger = logging.getLogger(__name__)


class PartialCreateError(Exception):
    """Raised when a contact was created but its photo upload failed."""

    def __init__(self, contact: Contact, cause: Exception):
        self.contact = contact
        self.cause = cause
        super().__init__(
            f"Contact {contact.name} was created (id {contact.id}) "
            f"but its photo could not be uploaded: {cause}"
        )


@dataclass(frozen=True)
class Route:
    """A screen location: the contact list or one contact's detail."""

    contact_id: Optional[str] = None

    @classmethod
    def list(cls) -> "Route":
        return cls()

    @classmethod
    def detail(cls, contact_id: str) -> "Route":
        return cls(contact_id=contact_id)

    @classmethod
    def parse(cls, path: str) -> "Route":
        """
        Parse a path such as ``/contacts/abc``.

        ``/`` and any unknown path resolve to the contact list.
        """
        parts = [part for part in (path or "").split("/") if part]
        if len(parts) == 2 and parts[0] == LIST_PATH.strip("/"):
            return cls.detail(parts[1])
        return cls.list()

    @property
    def is_detail(self) -> bool:
        return self.contact_id is not None

    @property
    def path(self) -> str:
        if self.contact_id is None:
            return LIST_PATH
        return f"{LIST_PATH}/{self.contact_id}"


class ContactApp:
    """
    Top-level application state and callbacks.

    Attributes:
        api: Contact service client shared by every screen
        notifier: Sink for user-facing messages
        contacts: List view-model for the contacts screen
        draft: Creation form being filled in
        modal_open: Whether the creation form is shown
        route: Current screen
        detail: View-model of the open detail screen, if any
        create_error: Failure of the last creation attempt, if any

    Usage:
        app = ContactApp(ContactAPI(), ConsoleNotifier())
        app.mount()

        app.toggle_modal(True)
        app.draft.name = "Ann Lee"
        ...
        app.handle_new_contact(SubmitEvent())
    """

    def __init__(
        self,
        api: ContactAPI,
        notifier: Optional[Notifier] = None,
        page_size: Optional[int] = None,
    ):
        self.api = api
        self.notifier = notifier if notifier is not None else MemoryNotifier()
        self.page_size = page_size or api.default_page_size
        self.contacts = ContactListViewModel(api, page_size=self.page_size)
        self.draft = FormDraft()
        self.modal_open = False
        self.route = Route.list()
        self.detail: Optional[ContactDetailViewModel] = None
        self.create_error: Optional[Exception] = None

    @property
    def header_count(self) -> int:
        """Total number of contacts, shown in the header."""
        return self.contacts.total_elements

    @property
    def current_page(self) -> int:
        return self.contacts.current_page

    def mount(self) -> bool:
        """Fetch the first page of contacts."""
        return self.get_all_contacts(0)

    def get_all_contacts(self, page: int = 0, size: Optional[int] = None) -> bool:
        """
        Load a page of contacts into the list view-model.

        Args:
            page: Zero-based page index
            size: Page size override for this and later requests

        Returns:
            True if the page was loaded
        """
        if size is not None:
            self.contacts.page_size = size

        if self.contacts.load(page):
            return True

        if self.contacts.error is not None:
            self.notifier.error(f"Could not load contacts: {self.contacts.error}")
        else:
            self.notifier.warning(f"Page {page + 1} does not exist")
        return False

    def toggle_modal(self, show: bool) -> None:
        self.modal_open = show
        logger.debug(f"Creation modal {'opened' if show else 'closed'}")

    def navigate(self, path: str) -> Route:
        """
        Switch screens.

        Opening a detail route builds and loads a fresh detail view-model;
        returning to the list drops it.
        """
        self.route = Route.parse(path)

        if self.route.is_detail:
            self.open_detail(self.route.contact_id)
        else:
            self.detail = None

        return self.route

    def open_detail(self, contact_id: str) -> ContactDetailViewModel:
        self.route = Route.detail(contact_id)
        self.detail = ContactDetailViewModel(
            self.api,
            contact_id,
            update_contact=self.update_contact,
            update_image=self.update_image,
        )
        if not self.detail.fetch():
            self.notifier.error(f"Could not load contact: {self.detail.error}")
        return self.detail

    def submit_detail(self, event: SubmitEvent) -> bool:
        """
        Submit the open detail screen and follow its navigation request.

        Returns:
            True if the contact was saved
        """
        if self.detail is None:
            raise RuntimeError("No contact detail screen is open")

        saved = self.detail.on_update(event)
        if isinstance(self.detail.error, ValidationError):
            self.notifier.warning(str(self.detail.error))

        if saved and self.detail.navigate_to:
            self.navigate(self.detail.navigate_to)
            self.contacts.reload()
        return saved

    def handle_new_contact(self, event: SubmitEvent) -> Optional[Contact]:
        """
        Create a contact from the form draft.

        Saves the fields first, then uploads the pending photo under the new
        id. The two calls are not atomic: if the upload fails the contact
        stays on the server without its photo and the failure is reported.

        Returns:
            The created contact, or None if nothing was created
        """
        event.prevent_default()
        self.create_error = None

        missing = self.draft.to_contact().missing_fields()
        if missing:
            self.create_error = ValidationError(missing)
            logger.warning(str(self.create_error))
            self.notifier.warning(str(self.create_error))
            return None

        try:
            created = self.api.save(self.draft.to_contact())
        except ContactAPIError as e:
            self.create_error = e
            logger.error(f"Failed to create contact: {e}")
            self.notifier.error(f"Could not create contact: {e}")
            return None

        photo = self.draft.pending_photo
        if photo is not None:
            try:
                self.api.upload_photo(
                    created.id, photo.data, photo.file_name, photo.content_type
                )
            except ContactAPIError as e:
                # The contact exists now; a retry belongs on its detail screen
                partial = PartialCreateError(created, e)
                self.create_error = partial
                logger.error(str(partial))
                self.notifier.error(str(partial))
                self._close_form()
                return created

        self.notifier.success(f"Contact {created.name} created")
        self._close_form()
        return created

    def _close_form(self) -> None:
        self.draft.reset()
        self.toggle_modal(False)
        self.contacts.reload()

    def update_contact(self, contact: Contact) -> Contact:
        """
        Save an edited contact.

        Raises:
            ContactAPIError: Re-raised after notifying so the caller keeps
                its edited state
        """
        try:
            saved = self.api.save(contact)
        except ContactAPIError as e:
            self.notifier.error(f"Could not update contact: {e}")
            raise

        self.notifier.success(f"Contact {saved.name} updated")
        return saved

    def update_image(self, contact_id: str, photo: PendingPhoto) -> str:
        """
        Upload a replacement photo for a contact.

        Raises:
            ContactAPIError: Re-raised after notifying
        """
        try:
            photo_url = self.api.upload_photo(
                contact_id, photo.data, photo.file_name, photo.content_type
            )
        except ContactAPIError as e:
            self.notifier.error(f"Could not update photo: {e}")
            raise

        self.notifier.success("Photo updated")
        return photo_url

    def delete_contact(self, contact_id: str) -> bool:
        """
        Delete a contact and refresh the list.

        Returns:
            True if the contact is gone
        """
        try:
            self.api.delete(contact_id)
        except ContactAPIError as e:
            self.notifier.error(f"Could not delete contact: {e}")
            return False

        self.notifier.success("Contact deleted")
        if self.route.contact_id == contact_id:
            self.navigate(LIST_PATH)
        self.contacts.reload()
        return True
