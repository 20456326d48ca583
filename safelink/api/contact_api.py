"""
REST client for the SafeLink contact service.

Provides a thin interface over the ``<base>/contacts`` resource for:
- Listing contacts one page at a time
- Fetching, saving (create or update) and deleting single contacts
- Uploading a contact's photo as a multipart form

Failures are raised once and never retried; callers decide how to surface
them to the user.
"""

import logging
from collections.abc import Callable
from typing import Any, Optional, TypeVar

import requests
from requests.exceptions import RequestException

from safelink.models.contact import Contact, Page

# Default service location used by the development backend
DEFAULT_BASE_URL = "http://localhost:8080"

# Path of the contacts resource under the base URL
CONTACTS_PATH = "/contacts"

# Default number of contacts per page when listing
DEFAULT_PAGE_SIZE = 10

# HTTP timeout in seconds
DEFAULT_TIMEOUT = 30.0

T = TypeVar("T")

logger = logging.getLogger(__name__)


class ContactAPIError(Exception):
    """Raised when a contact service operation fails."""

    pass


class NetworkError(ContactAPIError):
    """Raised when a request never reached the contact service."""

    pass


class ServerError(ContactAPIError):
    """Raised when the contact service answers with a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(ServerError):
    """Raised when a contact id does not exist."""

    pass


class ContactAPI:
    """
    Client for the contact service REST API.

    Attributes:
        base_url: Service root, e.g. "http://localhost:8080"
        session: requests session used for every call
        timeout: Per-request timeout in seconds
        default_page_size: Page size used when list_page() gets none

    Usage:
        api = ContactAPI("http://localhost:8080")

        page = api.list_page(0)
        contact = api.get_by_id(page.content[0].id)

        contact.title = "Manager"
        saved = api.save(contact)

        api.upload_photo(saved.id, photo_bytes, "me.png")
        api.delete(saved.id)
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
        default_page_size: int = DEFAULT_PAGE_SIZE,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        self.default_page_size = default_page_size

    @property
    def contacts_url(self) -> str:
        """Full URL of the contacts resource."""
        return f"{self.base_url}{CONTACTS_PATH}"

    def _request(
        self, method: str, url: str, operation_name: str, **kwargs: Any
    ) -> requests.Response:
        """
        Send a request and translate failures into ContactAPIError subclasses.

        Args:
            method: HTTP method
            url: Absolute request URL
            operation_name: Name for logging purposes
            **kwargs: Passed through to ``session.request``

        Returns:
            The successful response

        Raises:
            NetworkError: If the request could not be delivered
            ServerError: If the service answered with a non-2xx status
        """
        logger.debug(f"{operation_name}: {method} {url}")

        try:
            response = self.session.request(
                method, url, timeout=self.timeout, **kwargs
            )
        except RequestException as e:
            logger.error(f"{operation_name} could not reach {url}: {e}")
            raise NetworkError(f"{operation_name} failed: {e}") from e

        if not 200 <= response.status_code < 300:
            logger.error(f"{operation_name} failed with status {response.status_code}")
            raise ServerError(
                f"{operation_name} failed with status {response.status_code}",
                status_code=response.status_code,
            )

        return response

    @staticmethod
    def _parse(
        response: requests.Response,
        operation_name: str,
        parser: Callable[[Any], T],
    ) -> T:
        """
        Decode a JSON body and convert it with parser.

        Raises:
            ServerError: If the body is not JSON or does not have the
                expected shape
        """
        try:
            data = response.json()
        except ValueError as e:
            raise ServerError(
                f"{operation_name} returned an invalid JSON body",
                status_code=response.status_code,
            ) from e

        try:
            return parser(data)
        except (AttributeError, TypeError, ValueError) as e:
            logger.error(f"{operation_name} returned an unexpected body: {e}")
            raise ServerError(
                f"{operation_name} returned an invalid body: {e}",
                status_code=response.status_code,
            ) from e

    def list_page(self, page: int = 0, size: Optional[int] = None) -> Page:
        """
        Fetch one page of contacts.

        Args:
            page: Zero-based page index
            size: Contacts per page (default: default_page_size)

        Returns:
            Page with the contacts and pagination totals

        Raises:
            ValueError: If page is negative or size is not positive
            NetworkError: If the service is unreachable
            ServerError: If the service rejects the request
        """
        effective_size = size if size is not None else self.default_page_size

        if isinstance(page, bool) or not isinstance(page, int) or page < 0:
            raise ValueError(f"page must be a non-negative integer, got {page!r}")
        if (
            isinstance(effective_size, bool)
            or not isinstance(effective_size, int)
            or effective_size < 1
        ):
            raise ValueError(
                f"size must be a positive integer, got {effective_size!r}"
            )

        response = self._request(
            "GET",
            self.contacts_url,
            "list_page",
            params={"page": page, "size": effective_size},
        )
        result = self._parse(response, "list_page", Page.from_api_response)
        result.size = result.size or effective_size

        logger.debug(
            f"Listed page {page} ({len(result.content)} contacts, "
            f"{result.total_pages} pages)"
        )
        return result

    def get_by_id(self, contact_id: str) -> Contact:
        """
        Get a single contact.

        Args:
            contact_id: Identifier of the contact

        Returns:
            Contact object

        Raises:
            NotFoundError: If no contact has this id
            ContactAPIError: If the request fails otherwise
        """
        if not contact_id:
            raise ValueError("contact_id is required")

        try:
            response = self._request(
                "GET", f"{self.contacts_url}/{contact_id}", f"get_by_id({contact_id})"
            )
        except ServerError as e:
            if e.status_code == 404:
                raise NotFoundError(f"Contact not found: {contact_id}", 404) from e
            raise

        return self._parse(response, "get_by_id", Contact.from_api_response)

    def save(self, contact: Contact) -> Contact:
        """
        Create or update a contact.

        The service creates a contact when the body carries no ``id`` and
        updates the existing one otherwise.

        Args:
            contact: Contact to persist

        Returns:
            The persisted Contact, including its id on create

        Raises:
            ContactAPIError: If the request fails
        """
        action = "Updating" if contact.id else "Creating"
        logger.debug(f"{action} contact: {contact.name}")

        response = self._request(
            "POST", self.contacts_url, "save", json=contact.to_api_format()
        )
        saved = self._parse(response, "save", Contact.from_api_response)

        logger.info(f"Saved contact: {saved.id}")
        return saved

    def upload_photo(
        self,
        contact_id: str,
        file_bytes: bytes,
        file_name: str,
        content_type: Optional[str] = None,
    ) -> str:
        """
        Upload a new photo for a persisted contact.

        Args:
            contact_id: Id of the contact that owns the photo
            file_bytes: Raw image data
            file_name: File name sent with the multipart part
            content_type: MIME type of the image, if known

        Returns:
            Photo URL reported by the service

        Raises:
            ValueError: If contact_id or file_bytes is missing
            ContactAPIError: If the upload fails
        """
        if not contact_id:
            raise ValueError("contact_id is required; save the contact first")
        if not file_bytes:
            raise ValueError("file_bytes is required")

        logger.debug(f"Uploading photo for contact: {contact_id}")

        file_part = (
            (file_name, file_bytes, content_type)
            if content_type
            else (file_name, file_bytes)
        )
        response = self._request(
            "PUT",
            f"{self.contacts_url}/photo",
            f"upload_photo({contact_id})",
            files={"file": file_part},
            data={"id": contact_id},
        )

        logger.info(f"Uploaded photo for contact: {contact_id}")
        return response.text.strip()

    def delete(self, contact_id: str) -> None:
        """
        Delete a contact.

        A 404 is treated as success so repeated deletes are harmless.

        Args:
            contact_id: Id of the contact to delete

        Raises:
            ContactAPIError: If deletion fails for any other reason
        """
        if not contact_id:
            raise ValueError("contact_id is required")

        try:
            self._request(
                "DELETE", f"{self.contacts_url}/{contact_id}", f"delete({contact_id})"
            )
        except ServerError as e:
            if e.status_code == 404:
                logger.debug(f"Contact already deleted: {contact_id}")
                return
            raise

        logger.info(f"Deleted contact: {contact_id}")
