"""
Tests for the contact detail view-model.

Covers loading, field edits, submission and photo replacement.
"""

from unittest.mock import MagicMock

import pytest

from safelink.api.contact_api import NotFoundError, ServerError
from safelink.models.contact import Contact, PendingPhoto
from safelink.viewmodels.detail_view import (
    LIST_PATH,
    ContactDetailViewModel,
    SubmitEvent,
    ValidationError,
)

STORED = Contact(
    id="c1",
    name="Ann Lee",
    email="ann@example.com",
    title="Engineer",
    phone="(123)456-7890",
    address="1 Main St",
    status="Active",
    photo_url="http://localhost:8080/contacts/image/c1.png",
)

PHOTO = PendingPhoto("me.png", b"image-bytes", "image/png")


@pytest.fixture
def api():
    api = MagicMock()
    api.get_by_id.return_value = STORED
    return api


@pytest.fixture
def update_contact():
    return MagicMock(side_effect=lambda contact: contact)


@pytest.fixture
def update_image():
    return MagicMock(return_value="http://localhost:8080/contacts/image/c1.png")


@pytest.fixture
def detail(api, update_contact, update_image):
    view = ContactDetailViewModel(
        api,
        "c1",
        update_contact=update_contact,
        update_image=update_image,
        now_ms=lambda: 1700000000000,
    )
    view.fetch()
    return view


class TestFetch:
    """Tests for loading the contact."""

    def test_fetch_loads_contact(self, detail, api):
        """Test that fetch stores the service's contact."""
        api.get_by_id.assert_called_once_with("c1")
        assert detail.loaded is True
        assert detail.contact == STORED
        assert detail.error is None

    def test_fetch_failure(self, api, update_contact, update_image):
        """Test that a missing contact leaves the view unloaded."""
        api.get_by_id.side_effect = NotFoundError("Contact not found: c9", 404)
        view = ContactDetailViewModel(api, "c9", update_contact, update_image)

        assert view.fetch() is False

        assert view.loaded is False
        assert isinstance(view.error, NotFoundError)
        assert view.contact == Contact(id="c9")


class TestChange:
    """Tests for field edits."""

    def test_change_sets_field(self, detail):
        """Test that an edit replaces one field."""
        detail.change("title", "Manager")

        assert detail.contact.title == "Manager"
        assert detail.contact.name == "Ann Lee"

    def test_change_formats_phone(self, detail):
        """Test that ten-digit phone numbers are formatted."""
        detail.change("phone", "1234567890")

        assert detail.contact.phone == "(123)456-7890"

    def test_change_keeps_partial_phone(self, detail):
        """Test that other phone inputs are stored verbatim."""
        detail.change("phone", "12345")

        assert detail.contact.phone == "12345"

    @pytest.mark.parametrize("field_name", ["id", "photo_url", "nickname"])
    def test_change_rejects_read_only_fields(self, detail, field_name):
        """Test that id, photo and unknown fields cannot be edited."""
        with pytest.raises(ValueError):
            detail.change(field_name, "x")


class TestOnUpdate:
    """Tests for submitting the edited contact."""

    def test_submit_saves_refetches_and_navigates(self, detail, api, update_contact):
        """Test the full successful submission flow."""
        event = SubmitEvent()
        detail.change("title", "Manager")

        assert detail.on_update(event) is True

        assert event.default_prevented is True
        update_contact.assert_called_once()
        assert update_contact.call_args[0][0].title == "Manager"
        assert api.get_by_id.call_count == 2
        assert detail.navigate_to == LIST_PATH

    def test_submit_sends_service_photo_url(self, detail, update_contact):
        """Test that a replaced photo does not leak its display URL on save."""
        detail.update_photo(PHOTO)

        detail.on_update(SubmitEvent())

        sent = update_contact.call_args[0][0]
        assert sent.photo_url == STORED.photo_url

    def test_submit_after_upload_sends_new_photo_url(
        self, detail, update_image, update_contact
    ):
        """Test that a save after an upload stores the URL the upload returned."""
        update_image.return_value = "http://localhost:8080/contacts/image/c1.jpg"
        detail.update_photo(PendingPhoto("me.jpg", b"image-bytes", "image/jpeg"))

        detail.on_update(SubmitEvent())

        sent = update_contact.call_args[0][0]
        assert sent.photo_url == "http://localhost:8080/contacts/image/c1.jpg"

    def test_missing_fields_block_submission(self, detail, update_contact):
        """Test that empty required fields stop the save."""
        event = SubmitEvent()
        detail.change("email", "")

        assert detail.on_update(event) is False

        assert event.default_prevented is True
        update_contact.assert_not_called()
        assert isinstance(detail.error, ValidationError)
        assert detail.error.missing_fields == ["email"]
        assert detail.navigate_to is None

    def test_failed_save_keeps_edits(self, detail, api, update_contact):
        """Test that a rejected save leaves the edited fields for a retry."""
        update_contact.side_effect = ServerError("rejected", 400)
        detail.change("title", "Manager")

        assert detail.on_update(SubmitEvent()) is False

        assert detail.contact.title == "Manager"
        assert isinstance(detail.error, ServerError)
        assert detail.navigate_to is None
        assert api.get_by_id.call_count == 1


class TestUpdatePhoto:
    """Tests for photo replacement."""

    def test_update_photo_uploads(self, detail, update_image):
        """Test that the photo is handed to the upload callback."""
        assert detail.update_photo(PHOTO) is True

        update_image.assert_called_once_with("c1", PHOTO)

    def test_display_contact_is_cache_busted(self, detail):
        """Test that the displayed photo URL changes after a replacement."""
        assert detail.display_contact.photo_url == STORED.photo_url

        detail.update_photo(PHOTO)

        assert detail.display_contact.photo_url == (
            f"{STORED.photo_url}?updated_at=1700000000000"
        )
        assert detail.contact.photo_url == STORED.photo_url

    def test_upload_replaces_photo_url(self, detail, update_image):
        """Test that the returned URL becomes the contact's photo URL."""
        update_image.return_value = "http://localhost:8080/contacts/image/c1.jpg"

        detail.update_photo(PHOTO)

        assert detail.contact.photo_url == (
            "http://localhost:8080/contacts/image/c1.jpg"
        )
        assert detail.display_contact.photo_url == (
            "http://localhost:8080/contacts/image/c1.jpg?updated_at=1700000000000"
        )

    def test_empty_upload_response_keeps_photo_url(self, detail, update_image):
        """Test that an upload returning no URL keeps the stored one."""
        update_image.return_value = ""

        assert detail.update_photo(PHOTO) is True

        assert detail.contact.photo_url == STORED.photo_url
        assert detail.photo_version == 1700000000000

    def test_failed_upload_keeps_photo(self, detail, update_image):
        """Test that a failed upload does not change the displayed URL."""
        update_image.side_effect = ServerError("too large", 413)

        assert detail.update_photo(PHOTO) is False

        assert detail.photo_version is None
        assert detail.display_contact.photo_url == STORED.photo_url
        assert isinstance(detail.error, ServerError)


class TestValidationError:
    """Tests for ValidationError."""

    def test_message_lists_fields(self):
        """Test that the message names the missing fields."""
        error = ValidationError(["name", "phone"])

        assert str(error) == "Missing required fields: name, phone"
        assert error.missing_fields == ["name", "phone"]
