"""
Tests for the contact list view-model.

The contact service client is replaced by a MagicMock so every page request
can be inspected.
"""

from unittest.mock import MagicMock

import pytest

from safelink.api.contact_api import NetworkError, ServerError
from safelink.models.contact import Contact, Page
from safelink.viewmodels.list_view import ContactListViewModel, ListState, PageLink


def make_page(names, total_pages=1, total_elements=None, number=0):
    content = [Contact(id=f"id-{i}", name=name) for i, name in enumerate(names)]
    return Page(
        content=content,
        total_pages=total_pages,
        total_elements=len(content) if total_elements is None else total_elements,
        number=number,
        size=10,
    )


@pytest.fixture
def api():
    api = MagicMock()
    api.list_page.side_effect = lambda page, size=None: make_page(
        [f"Contact {page}-{i}" for i in range(3)],
        total_pages=3,
        total_elements=25,
        number=page,
    )
    return api


@pytest.fixture
def view(api):
    return ContactListViewModel(api, page_size=10)


class TestLoad:
    """Tests for loading pages."""

    def test_initial_state(self, view):
        """Test that a new view-model is idle with an empty page."""
        assert view.state is ListState.IDLE
        assert view.current_page == 0
        assert view.total_elements == 0
        assert view.visible_contacts() == []

    def test_load_first_page(self, view, api):
        """Test loading page 0."""
        assert view.load(0) is True

        api.list_page.assert_called_once_with(0, 10)
        assert view.state is ListState.LOADED
        assert view.current_page == 0
        assert view.total_pages == 3
        assert view.total_elements == 25

    def test_load_failure_keeps_previous_page(self, view, api):
        """Test that a failed load keeps the last good page visible."""
        view.load(0)
        previous = view.page
        api.list_page.side_effect = NetworkError("unreachable")

        assert view.load(1) is False

        assert view.state is ListState.FAILED
        assert isinstance(view.error, NetworkError)
        assert view.page is previous
        assert view.current_page == 0

    def test_successful_load_clears_error(self, view, api):
        """Test that the error is cleared after a later success."""
        api.list_page.side_effect = [ServerError("boom", 500), make_page(["Ann"])]

        view.load(0)
        view.load(0)

        assert view.error is None
        assert view.state is ListState.LOADED

    def test_out_of_range_page_makes_no_request(self, view, api):
        """Test that pages beyond the known count are rejected locally."""
        view.load(0)
        api.list_page.reset_mock()

        assert view.load(3) is False
        assert view.load(-1) is False

        api.list_page.assert_not_called()
        assert view.current_page == 0

    def test_any_page_allowed_before_count_known(self, view, api):
        """Test that the first request may target any non-negative page."""
        assert view.load(2) is True

        api.list_page.assert_called_once_with(2, 10)

    @pytest.mark.parametrize("page", [1.0, "1", True, None])
    def test_non_integer_page_rejected(self, view, api, page):
        """Test that non-integer indexes are rejected."""
        assert view.load(page) is False

        api.list_page.assert_not_called()

    def test_page_beyond_server_count_not_committed(self, view, api):
        """Test that a first load past the server's last page is rejected."""
        api.list_page.side_effect = None
        api.list_page.return_value = make_page(["Ann"], total_pages=2, number=4)

        assert view.load(4) is False

        api.list_page.assert_called_once_with(4, 10)
        assert view.state is ListState.IDLE
        assert view.current_page == 0
        assert view.total_pages == 0
        assert view.error is None

    def test_page_beyond_server_count_keeps_loaded_page(self, view, api):
        """Test that a rejected page leaves the current page in place."""
        view.load(1)
        previous = view.page
        api.list_page.side_effect = lambda page, size=None: make_page(
            [], total_pages=1, number=page
        )

        assert view.load(2) is False

        assert view.state is ListState.LOADED
        assert view.page is previous
        assert view.current_page == 1

    def test_step_back_loads_last_page(self, view, api):
        """Test that step_back falls back to the server's last page."""
        api.list_page.side_effect = lambda page, size=None: make_page(
            ["Ann"], total_pages=2, number=page
        )

        assert view.load(4, step_back=True) is True

        assert api.list_page.call_args_list[-1][0] == (1, 10)
        assert view.current_page == 1

    def test_same_page_twice_is_idempotent(self, view):
        """Test that reading a page twice gives the same rows."""
        view.load(1)
        first = view.visible_contacts()
        view.load(1)

        assert view.visible_contacts() == first


class TestReload:
    """Tests for reload."""

    def test_reload_requests_current_page(self, view, api):
        """Test that reload fetches the current page again."""
        view.load(2)
        api.list_page.reset_mock()

        assert view.reload() is True

        api.list_page.assert_called_once_with(2, 10)

    def test_reload_steps_back_when_page_disappears(self, view, api):
        """Test that reload moves to the last page if the current one is gone."""
        view.load(2)
        api.list_page.side_effect = lambda page, size=None: make_page(
            [] if page >= 2 else ["Ann"], total_pages=2, number=page
        )

        assert view.reload() is True

        assert view.current_page == 1
        assert [c.name for c in view.visible_contacts()] == ["Ann"]


class TestSearch:
    """Tests for the client-side name filter."""

    @pytest.fixture
    def loaded(self, api):
        api.list_page.side_effect = None
        api.list_page.return_value = make_page(["Ann", "Bob", "Annie"])
        view = ContactListViewModel(api)
        view.load(0)
        return view

    def test_empty_search_shows_all(self, loaded):
        """Test that no search text shows every contact on the page."""
        assert [c.name for c in loaded.visible_contacts()] == ["Ann", "Bob", "Annie"]

    def test_substring_match_preserves_order(self, loaded):
        """Test that matching contacts keep their server order."""
        loaded.set_search("ann")

        assert [c.name for c in loaded.visible_contacts()] == ["Ann", "Annie"]

    def test_search_is_case_insensitive(self, loaded):
        """Test that matching ignores case."""
        loaded.set_search("BOB")

        assert [c.name for c in loaded.visible_contacts()] == ["Bob"]

    def test_search_text_is_not_trimmed(self, loaded):
        """Test that surrounding spaces are part of the search text."""
        loaded.set_search("ann ")

        assert loaded.visible_contacts() == []

    def test_search_does_not_refetch(self, loaded, api):
        """Test that searching filters the loaded page only."""
        api.list_page.reset_mock()

        loaded.set_search("zed")

        assert loaded.visible_contacts() == []
        api.list_page.assert_not_called()

    def test_contacts_without_name_never_match(self, api):
        """Test that nameless contacts are hidden by a non-empty search."""
        api.list_page.side_effect = None
        api.list_page.return_value = Page(
            content=[Contact(id="1"), Contact(id="2", name="Ann")], total_pages=1
        )
        view = ContactListViewModel(api)
        view.load(0)

        view.set_search("a")

        assert [c.id for c in view.visible_contacts()] == ["2"]

    def test_search_survives_page_change(self, view):
        """Test that the search text applies to the next page too."""
        view.load(0)
        view.set_search("1-0")

        view.next()

        assert [c.name for c in view.visible_contacts()] == ["Contact 1-0"]


class TestPagination:
    """Tests for previous/next and page links."""

    def test_first_page_disables_previous(self, view):
        """Test that previous is disabled on the first page."""
        view.load(0)

        assert view.previous_enabled is False
        assert view.next_enabled is True

    def test_last_page_disables_next(self, view):
        """Test that next is disabled on the last page."""
        view.load(2)

        assert view.previous_enabled is True
        assert view.next_enabled is False

    def test_previous_on_first_page_is_noop(self, view, api):
        """Test that previous does nothing on the first page."""
        view.load(0)
        api.list_page.reset_mock()

        assert view.previous() is False

        api.list_page.assert_not_called()

    def test_next_on_last_page_is_noop(self, view, api):
        """Test that next does nothing on the last page."""
        view.load(2)
        api.list_page.reset_mock()

        assert view.next() is False

        api.list_page.assert_not_called()

    def test_next_and_previous_move_one_page(self, view):
        """Test stepping forward then back."""
        view.load(0)

        view.next()
        assert view.current_page == 1

        view.previous()
        assert view.current_page == 0

    def test_pagination_hidden_for_single_page(self, api):
        """Test that one page of results shows no pagination bar."""
        api.list_page.side_effect = None
        api.list_page.return_value = make_page(["Ann"], total_pages=1)
        view = ContactListViewModel(api)
        view.load(0)

        assert view.show_pagination is False

    def test_pagination_hidden_when_empty(self, api):
        """Test that an empty page shows the empty state instead of pagination."""
        api.list_page.side_effect = None
        api.list_page.return_value = make_page([], total_pages=0)
        view = ContactListViewModel(api)
        view.load(0)

        assert view.is_empty is True
        assert view.show_pagination is False

    def test_page_links(self, view):
        """Test that one link is built per page with the current one active."""
        view.load(1)

        links = view.page_links()

        assert [link.label for link in links] == ["1", "2", "3"]
        assert [link.active for link in links] == [False, True, False]

    def test_page_link_keeps_its_own_page(self, view, api):
        """Test that each link requests its own page, not the latest one."""
        view.load(0)
        links = view.page_links()
        view.load(2)
        api.list_page.reset_mock()

        links[1].click()

        api.list_page.assert_called_once_with(1, 10)
        assert view.current_page == 1

    def test_page_link_is_immutable(self):
        """Test that a link's target page cannot be reassigned."""
        link = PageLink(page=0, active=True, on_click=lambda page: True)

        with pytest.raises(AttributeError):
            link.page = 5
