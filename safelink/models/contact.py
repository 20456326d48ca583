"""
Contact data model for the SafeLink contacts API.

Provides the Contact, Page and FormDraft representations with methods for:
- Converting to/from the contact service's JSON format
- Building cache-busted photo URLs for display
- Resetting the creation form between submissions
"""

from dataclasses import dataclass, field, fields, replace
from typing import Any, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from safelink.utils.phone import format_phone

# Query parameter appended to photo URLs so a replaced photo is re-fetched
PHOTO_CACHE_BUSTER = "updated_at"

# Fields the user may edit on a contact, in form order
EDITABLE_FIELDS = ("name", "email", "phone", "address", "title", "status")

# Fields the form requires before submission
REQUIRED_FIELDS = EDITABLE_FIELDS

# Older revisions of the service named the classifier field "relationship"
LEGACY_STATUS_KEY = "relationship"


@dataclass
class Contact:
    """
    A contact as held by the remote contact service.

    Attributes:
        id: Server-assigned identifier, None until the contact is created
        name: Full name of the contact
        email: Email address
        title: Job title
        phone: Phone number, pre-formatted as (XXX)XXX-XXXX for 10 digits
        address: Postal address
        status: Free-text relationship/status classifier
        photo_url: Path to the contact's photo as served by the API

    Usage:
        contact = Contact.from_api_response({"id": "c1", "name": "Ann"})
        payload = contact.to_api_format()
    """

    id: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    title: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    status: Optional[str] = None
    photo_url: Optional[str] = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "Contact":
        """
        Create a Contact from a contact service JSON object.

        Args:
            data: Dictionary decoded from the API response

        Returns:
            Contact instance populated from the response

        Example API response structure::

            {
                'id': '8a1f...',
                'name': 'Ann Lee',
                'email': 'ann@example.com',
                'title': 'Engineer',
                'phone': '(123)456-7890',
                'address': '1 Main St',
                'status': 'Active',
                'photoUrl': 'http://localhost:8080/contacts/image/8a1f.png'
            }
        """
        status = data.get("status")
        if status is None:
            status = data.get(LEGACY_STATUS_KEY)

        return cls(
            id=data.get("id"),
            name=data.get("name"),
            email=data.get("email"),
            title=data.get("title"),
            phone=data.get("phone"),
            address=data.get("address"),
            status=status,
            photo_url=data.get("photoUrl"),
        )

    def to_api_format(self) -> dict[str, Any]:
        """
        Convert the Contact to the JSON body accepted by ``POST /contacts``.

        Returns:
            Dictionary in the contact service's format

        Note:
            ``id`` is omitted when unset so the server treats the body as a
            create; with an ``id`` the same endpoint performs an update.
        """
        payload: dict[str, Any] = {}
        if self.id:
            payload["id"] = self.id

        payload.update(
            {
                "name": self.name,
                "email": self.email,
                "title": self.title,
                "phone": self.phone,
                "address": self.address,
                "status": self.status,
                "photoUrl": self.photo_url,
            }
        )
        return payload

    def with_photo_cache_buster(self, timestamp_ms: int) -> "Contact":
        """
        Return a copy whose photo URL forces the image to be re-fetched.

        Any previous ``updated_at`` parameter is replaced rather than stacked.
        The receiver is left untouched.

        Args:
            timestamp_ms: Epoch milliseconds to stamp on the URL

        Returns:
            New Contact with the rewritten photo_url
        """
        if not self.photo_url:
            return replace(self)

        parts = urlsplit(self.photo_url)
        query = [
            (key, value)
            for key, value in parse_qsl(parts.query, keep_blank_values=True)
            if key != PHOTO_CACHE_BUSTER
        ]
        query.append((PHOTO_CACHE_BUSTER, str(timestamp_ms)))

        photo_url = urlunsplit(parts._replace(query=urlencode(query)))
        return replace(self, photo_url=photo_url)

    def missing_fields(self) -> list[str]:
        """Return the required fields that are empty, in form order."""
        return [
            name for name in REQUIRED_FIELDS if not (getattr(self, name) or "").strip()
        ]


@dataclass
class Page:
    """
    A window of contacts returned by ``GET /contacts``.

    Attributes:
        content: Contacts on this page, in server order
        total_pages: Number of pages available
        total_elements: Number of contacts across all pages
        number: Page index reported by the server
        size: Requested page size
    """

    content: list[Contact] = field(default_factory=list)
    total_pages: int = 0
    total_elements: int = 0
    number: int = 0
    size: int = 0

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "Page":
        """
        Create a Page from a paginated API response.

        Unknown keys such as ``pageable`` or ``sort`` are ignored.
        """
        items = data.get("content") or []
        content = [Contact.from_api_response(item) for item in items]

        return cls(
            content=content,
            total_pages=max(int(data.get("totalPages") or 0), 0),
            total_elements=max(int(data.get("totalElements") or 0), 0),
            number=int(data.get("number") or 0),
            size=int(data.get("size") or 0),
        )

    @classmethod
    def empty(cls) -> "Page":
        return cls()


@dataclass
class PendingPhoto:
    """A photo file chosen by the user but not yet uploaded."""

    file_name: str
    data: bytes
    content_type: str = "application/octet-stream"


@dataclass
class FormDraft:
    """
    Transient contact being filled in on the creation form.

    Same attributes as Contact minus ``id`` and ``photo_url``, plus the
    photo file waiting to be uploaded once the contact exists.
    """

    name: str = ""
    email: str = ""
    title: str = ""
    phone: str = ""
    address: str = ""
    status: str = ""
    pending_photo: Optional[PendingPhoto] = None

    def change(self, field_name: str, raw_value: str) -> None:
        """Set one form field, formatting phone numbers as they are typed."""
        if field_name not in EDITABLE_FIELDS:
            raise ValueError(f"Unknown form field: {field_name}")

        value = format_phone(raw_value) if field_name == "phone" else raw_value
        setattr(self, field_name, value)

    def reset(self) -> None:
        """Restore empty values and drop the pending photo."""
        for f in fields(self):
            setattr(self, f.name, None if f.name == "pending_photo" else "")

    def to_contact(self) -> Contact:
        return Contact(
            name=self.name,
            email=self.email,
            title=self.title,
            phone=self.phone,
            address=self.address,
            status=self.status,
        )
