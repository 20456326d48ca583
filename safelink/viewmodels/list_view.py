"""
View-model for the paginated contact list.

Holds the currently loaded page, the page index and the search text, and
derives what the list screen shows from them:
- The visible rows (client-side name filter on the loaded page only)
- The pagination bar (previous/next state and one link per page)
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from safelink.api.contact_api import DEFAULT_PAGE_SIZE, ContactAPI, ContactAPIError
from safelink.models.contact import Contact, Page

logger = logging.getLogger(__name__)


class ListState(Enum):
    """Loading state of the list screen."""

    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass(frozen=True)
class PageLink:
    """
    One numbered link in the pagination bar.

    The target page is stored on the link when it is built, so clicking a
    link always requests that page whatever the view-model's current page
    has become since.
    """

    page: int
    active: bool
    on_click: Callable[[int], bool]

    @property
    def label(self) -> str:
        return str(self.page + 1)

    def click(self) -> bool:
        return self.on_click(self.page)


class ContactListViewModel:
    """
    State and commands for the contact list screen.

    Attributes:
        api: Contact service client
        page_size: Contacts requested per page
        state: Current ListState
        page: Last successfully loaded Page
        current_page: Index of the loaded page
        search_text: Client-side name filter
        error: Error from the last failed load, if any

    Usage:
        view = ContactListViewModel(api)
        view.load()
        view.set_search("ann")
        for contact in view.visible_contacts():
            ...
        if view.next_enabled:
            view.next()
    """

    def __init__(self, api: ContactAPI, page_size: int = DEFAULT_PAGE_SIZE):
        self.api = api
        self.page_size = page_size
        self.state = ListState.IDLE
        self.page = Page.empty()
        self.current_page = 0
        self.search_text = ""
        self.error: Optional[ContactAPIError] = None

    @property
    def total_pages(self) -> int:
        return self.page.total_pages

    @property
    def total_elements(self) -> int:
        return self.page.total_elements

    def is_valid_page(self, page: int) -> bool:
        """
        Check whether a page index may be requested.

        Until a page count is known any non-negative index is accepted.
        """
        if isinstance(page, bool) or not isinstance(page, int) or page < 0:
            return False
        return self.total_pages == 0 or page < self.total_pages

    def load(self, page: int = 0, step_back: bool = False) -> bool:
        """
        Load a page of contacts.

        The page count reported with the response is checked as well, so a
        page beyond the end is never committed even on the first load.

        Args:
            page: Zero-based page index
            step_back: Load the last page instead when the requested one is
                beyond the end

        Returns:
            True if a page was loaded, False if it was rejected or failed
        """
        if not self.is_valid_page(page):
            logger.warning(
                f"Ignoring request for page {page} "
                f"(valid range 0..{max(self.total_pages - 1, 0)})"
            )
            return False

        previous_state = self.state
        self.state = ListState.LOADING
        self.error = None

        try:
            result = self.api.list_page(page, self.page_size)
        except ContactAPIError as e:
            logger.error(f"Failed to load page {page}: {e}")
            self.state = ListState.FAILED
            self.error = e
            return False

        last_page = max(result.total_pages - 1, 0)
        if page > last_page:
            if step_back:
                logger.info(f"Page {page} no longer exists, loading page {last_page}")
                return self.load(last_page)
            logger.warning(f"Page {page} does not exist (last page is {last_page})")
            self.state = previous_state
            return False

        self.page = result
        self.current_page = page
        self.state = ListState.LOADED
        logger.debug(f"Loaded page {page} of {result.total_pages}")
        return True

    def reload(self) -> bool:
        """Load the current page again, stepping back if it no longer exists."""
        return self.load(self.current_page, step_back=True)

    def set_search(self, text: str) -> None:
        self.search_text = text or ""

    def visible_contacts(self) -> list[Contact]:
        """
        Contacts on the loaded page whose name contains the search text.

        Matching is a case-insensitive substring test, spaces included, and
        only covers the loaded page.
        """
        needle = self.search_text.casefold()
        if not needle:
            return list(self.page.content)

        return [
            contact
            for contact in self.page.content
            if contact.name and needle in contact.name.casefold()
        ]

    @property
    def is_empty(self) -> bool:
        """True when a page was loaded and it holds no contacts."""
        return self.state is ListState.LOADED and not self.page.content

    @property
    def show_pagination(self) -> bool:
        return bool(self.page.content) and self.total_pages > 1

    @property
    def previous_enabled(self) -> bool:
        return self.current_page > 0

    @property
    def next_enabled(self) -> bool:
        return self.current_page < self.total_pages - 1

    def previous(self) -> bool:
        if not self.previous_enabled:
            return False
        return self.load(self.current_page - 1)

    def next(self) -> bool:
        if not self.next_enabled:
            return False
        return self.load(self.current_page + 1)

    def page_links(self) -> list[PageLink]:
        """Build one link per page, each bound to its own page index."""
        return [
            PageLink(page=page, active=page == self.current_page, on_click=self.load)
            for page in range(self.total_pages)
        ]
