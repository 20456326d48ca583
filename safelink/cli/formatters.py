"""CLI output formatting functions.

This module renders the contact list, the pagination bar and a single
contact's details for the terminal.
"""

from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from safelink.models.contact import Contact
    from safelink.viewmodels.list_view import ContactListViewModel

# Message shown when the loaded page has no contacts
EMPTY_LIST_MESSAGE = "No Contacts. Add a New Contact."

# Labels of the detail screen, in display order
DETAIL_FIELDS = (
    ("Name", "name"),
    ("Email", "email"),
    ("Phone", "phone"),
    ("Address", "address"),
    ("Title", "title"),
    ("Status", "status"),
    ("Photo", "photo_url"),
)


def format_pagination(view: "ContactListViewModel") -> str:
    """
    Render the pagination bar as text.

    Disabled arrows are dimmed and the active page is bracketed, e.g.
    ``« 1 [2] 3 »``.

    Args:
        view: List view-model to render

    Returns:
        The pagination bar, or an empty string when it is hidden
    """
    if not view.show_pagination:
        return ""

    previous = click.style("«", dim=not view.previous_enabled)
    following = click.style("»", dim=not view.next_enabled)

    links = [
        click.style(f"[{link.label}]", bold=True) if link.active else link.label
        for link in view.page_links()
    ]
    return " ".join([previous, *links, following])


def format_contact_row(contact: "Contact") -> str:
    """Render one contact as a single list line."""
    name = contact.name or "(no name)"
    parts = [click.style(name, bold=True)]
    if contact.title:
        parts.append(contact.title)
    if contact.email:
        parts.append(contact.email)
    if contact.phone:
        parts.append(contact.phone)
    if contact.status:
        parts.append(f"[{contact.status}]")

    return f"{contact.id or '-':<12} " + " | ".join(parts)


def show_contact_list(view: "ContactListViewModel") -> None:
    """
    Display the list screen: header count, visible rows and pagination.

    Args:
        view: Loaded list view-model
    """
    click.echo(f"Contact List ({view.total_elements})")
    if view.search_text:
        click.echo(f"Search: {view.search_text}")
    click.echo()

    if view.is_empty:
        click.echo(EMPTY_LIST_MESSAGE)
        return

    visible = view.visible_contacts()
    if not visible:
        click.echo(f"No contacts on this page match '{view.search_text}'.")

    for contact in visible:
        click.echo(format_contact_row(contact))

    pagination = format_pagination(view)
    if pagination:
        click.echo()
        click.echo(pagination)


def show_contact_detail(contact: "Contact") -> None:
    """
    Display every field of a single contact.

    Args:
        contact: Contact to display
    """
    click.echo(f"=== {contact.name or '(no name)'} ===\n")
    click.echo(f"{'Id':<8} {contact.id or '-'}")
    for label, attribute in DETAIL_FIELDS:
        value = getattr(contact, attribute) or "-"
        click.echo(f"{label:<8} {value}")
