"""
Command-line interface for safelink.

Provides CLI commands to browse, search, create, edit and delete contacts
held by a SafeLink contact service.

Usage:
    # Show help
    safelink --help

    # Browse and search
    safelink list
    safelink list --page 2 --search ann

    # Inspect and edit one contact
    safelink show 4f1c2a
    safelink update 4f1c2a --title Manager --photo avatar.png

    # Create a contact with a photo
    safelink create --name "Ann Lee" --email ann@example.com \\
        --phone 1234567890 --address "1 Main St" --title Engineer \\
        --status Active --photo avatar.png
"""

import sys
from pathlib import Path

import click

from safelink import __version__
from safelink.api.contact_api import ContactAPI
from safelink.app import ContactApp
from safelink.cli.formatters import show_contact_detail, show_contact_list
from safelink.config.generator import save_config_file
from safelink.config.loader import ConfigError, ConfigLoader, Settings
from safelink.notifications import ConsoleNotifier
from safelink.photo import PhotoError, load_photo
from safelink.utils import DEFAULT_CONFIG_DIR, resolve_config_dir
from safelink.utils.logging import cleanup_old_logs, get_logger, setup_logging
from safelink.viewmodels.detail_view import SubmitEvent

# Default configuration file
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.yaml"

# Options shared by the create and update commands, in form order
FIELD_OPTIONS = ("name", "email", "phone", "address", "title", "status")


def get_config_dir(config_dir: str | None) -> Path:
    """Get the configuration directory path."""
    return resolve_config_dir(config_dir)


def get_config_file(config_file: str | None, config_dir: Path) -> Path:
    """Get the configuration file path."""
    if config_file:
        return Path(config_file)
    return config_dir / "config.yaml"


def build_app(ctx: click.Context) -> ContactApp:
    """Create the composition root from the effective settings."""
    settings: Settings = ctx.obj["settings"]
    api = ContactAPI(
        base_url=settings.base_url,
        timeout=settings.request_timeout,
        default_page_size=settings.page_size,
    )
    notifier = ConsoleNotifier(duration_ms=settings.notification_duration_ms)
    return ContactApp(api, notifier, page_size=settings.page_size)


def field_options(func):  # type: ignore[no-untyped-def]
    """Attach one --<field> option per editable contact field."""
    for field_name in reversed(FIELD_OPTIONS):
        func = click.option(
            f"--{field_name}", default=None, help=f"Contact {field_name}."
        )(func)
    return func


@click.group()
@click.version_option(version=__version__, prog_name="safelink")
@click.option(
    "--verbose", "-v", is_flag=True, help="Enable verbose output with detailed logging."
)
@click.option(
    "--config-dir",
    "-c",
    type=click.Path(exists=False, file_okay=False, dir_okay=True),
    envvar="SAFELINK_CONFIG_DIR",
    help="Configuration directory path (default: ~/.safelink).",
)
@click.option(
    "--config-file",
    "-f",
    type=click.Path(exists=False, file_okay=True, dir_okay=False),
    envvar="SAFELINK_CONFIG_FILE",
    help="Configuration file path (default: ~/.safelink/config.yaml).",
)
@click.option(
    "--base-url",
    envvar="SAFELINK_BASE_URL",
    help="Contact service root URL (default: http://localhost:8080).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    config_dir: str | None,
    config_file: str | None,
    base_url: str | None,
) -> None:
    """
    SafeLink contact manager.

    Lists, searches, creates, updates and deletes contacts stored by a
    SafeLink contact service.
    """
    ctx.ensure_object(dict)

    resolved_config_dir = get_config_dir(config_dir)
    resolved_config_file = get_config_file(config_file, resolved_config_dir)

    ctx.obj["config_dir"] = resolved_config_dir
    ctx.obj["config_file"] = resolved_config_file

    config = {}
    try:
        loader = ConfigLoader(config_dir=resolved_config_dir)
        config = loader.load_from_file(resolved_config_file)
        if config:
            loader.validate(config)
    except ConfigError as e:
        # Keep working with defaults when the file is broken
        click.echo(
            click.style(f"Warning: Configuration error: {e}", fg="yellow"), err=True
        )
        config = {}

    ctx.obj["config"] = config

    settings = Settings.from_config(config)
    if base_url:
        settings.base_url = base_url
    settings.verbose = verbose or settings.verbose
    ctx.obj["settings"] = settings
    ctx.obj["verbose"] = settings.verbose

    setup_logging(verbose=settings.verbose, log_dir=settings.log_dir)
    if settings.log_retention_count > 0:
        cleanup_old_logs(
            log_dir=settings.log_dir, keep_count=settings.log_retention_count
        )


# =============================================================================
# List Command
# =============================================================================


@cli.command("list")
@click.option(
    "--page", "-p", type=click.IntRange(min=1), default=1, help="Page to show."
)
@click.option(
    "--size", "-s", type=click.IntRange(min=1), default=None, help="Contacts per page."
)
@click.option("--search", "-q", default="", help="Only show names containing TEXT.")
@click.pass_context
def list_command(ctx: click.Context, page: int, size: int | None, search: str) -> None:
    """
    List one page of contacts.

    The search filter is applied to the fetched page only.

    Examples:

        safelink list

        safelink list --page 3 --size 12

        safelink list --search ann
    """
    app = build_app(ctx)

    if not app.get_all_contacts(page - 1, size):
        sys.exit(1)

    app.contacts.set_search(search)
    show_contact_list(app.contacts)


# =============================================================================
# Show Command
# =============================================================================


@cli.command("show")
@click.argument("contact_id")
@click.pass_context
def show_command(ctx: click.Context, contact_id: str) -> None:
    """
    Show the details of one contact.

    Example:

        safelink show 4f1c2a
    """
    app = build_app(ctx)
    app.navigate(f"/contacts/{contact_id}")

    if app.detail is None or not app.detail.loaded:
        sys.exit(1)

    show_contact_detail(app.detail.display_contact)


# =============================================================================
# Create Command
# =============================================================================


@cli.command("create")
@field_options
@click.option(
    "--photo",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Profile photo (JPG, GIF, or PNG, max 10MB).",
)
@click.pass_context
def create_command(
    ctx: click.Context, photo: Path | None, **fields: str | None
) -> None:
    """
    Create a new contact.

    All fields are required. A phone number with exactly ten digits is
    stored as (XXX)XXX-XXXX.

    Example:

        safelink create --name "Ann Lee" --email ann@example.com
            --phone 1234567890 --address "1 Main St" --title Engineer
            --status Active --photo avatar.png
    """
    logger = get_logger(__name__)
    app = build_app(ctx)

    app.toggle_modal(True)
    for field_name, value in fields.items():
        if value is not None:
            app.draft.change(field_name, value)

    if photo is not None:
        try:
            app.draft.pending_photo = load_photo(photo)
        except PhotoError as e:
            logger.error(f"Rejected photo {photo}: {e}")
            app.notifier.error(str(e))
            sys.exit(1)

    created = app.handle_new_contact(SubmitEvent())
    if created is None:
        sys.exit(1)

    click.echo(f"Id: {created.id}")
    if app.create_error is not None:
        sys.exit(1)


# =============================================================================
# Update Command
# =============================================================================


@cli.command("update")
@click.argument("contact_id")
@field_options
@click.option(
    "--photo",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Replace the profile photo (JPG, GIF, or PNG, max 10MB).",
)
@click.pass_context
def update_command(
    ctx: click.Context, contact_id: str, photo: Path | None, **fields: str | None
) -> None:
    """
    Update fields and/or the photo of an existing contact.

    Only the given fields change; the rest keep their current values.

    Examples:

        safelink update 4f1c2a --title Manager

        safelink update 4f1c2a --photo avatar.png
    """
    changes = {name: value for name, value in fields.items() if value is not None}
    if not changes and photo is None:
        raise click.UsageError("Nothing to update. Pass a field option or --photo.")

    app = build_app(ctx)
    detail = app.open_detail(contact_id)
    if not detail.loaded:
        sys.exit(1)

    if photo is not None:
        try:
            pending = load_photo(photo)
        except PhotoError as e:
            app.notifier.error(str(e))
            sys.exit(1)
        if not detail.update_photo(pending):
            sys.exit(1)

    if changes:
        for field_name, value in changes.items():
            detail.change(field_name, value)
        if not app.submit_detail(SubmitEvent()):
            sys.exit(1)


# =============================================================================
# Photo Command
# =============================================================================


@cli.command("photo")
@click.argument("contact_id")
@click.argument(
    "photo_path", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
@click.pass_context
def photo_command(ctx: click.Context, contact_id: str, photo_path: Path) -> None:
    """
    Replace the profile photo of a contact.

    Example:

        safelink photo 4f1c2a avatar.png
    """
    app = build_app(ctx)

    try:
        pending = load_photo(photo_path)
    except PhotoError as e:
        app.notifier.error(str(e))
        sys.exit(1)

    detail = app.open_detail(contact_id)
    if not detail.loaded or not detail.update_photo(pending):
        sys.exit(1)

    click.echo(f"Photo: {detail.display_contact.photo_url}")


# =============================================================================
# Delete Command
# =============================================================================


@cli.command("delete")
@click.argument("contact_id")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation.")
@click.pass_context
def delete_command(ctx: click.Context, contact_id: str, yes: bool) -> None:
    """
    Delete a contact.

    Deleting a contact that no longer exists is not an error.

    Example:

        safelink delete 4f1c2a --yes
    """
    if not yes:
        click.confirm(f"Delete contact {contact_id}?", abort=True)

    app = build_app(ctx)
    if not app.delete_contact(contact_id):
        sys.exit(1)


# =============================================================================
# Init-Config Command
# =============================================================================


@cli.command("init-config")
@click.option(
    "--force",
    "-f",
    is_flag=True,
    help="Overwrite existing configuration file if it exists.",
)
@click.pass_context
def init_config_command(ctx: click.Context, force: bool) -> None:
    """
    Generate a default configuration file.

    Creates a configuration file with all available options documented
    and commented out.

    Examples:

        safelink init-config

        safelink init-config --force
    """
    logger = get_logger(__name__)
    config_file = ctx.obj["config_file"]

    click.echo(f"Creating configuration file: {config_file}")

    success, error = save_config_file(config_file, overwrite=force)

    if success:
        click.echo(click.style("Configuration file created successfully!", fg="green"))
        click.echo(f"\nLocation: {config_file}")
        logger.info(f"Created configuration file: {config_file}")
    else:
        click.echo(click.style(f"Error: {error}", fg="red"), err=True)
        logger.error(f"Failed to create configuration file: {error}")
        sys.exit(1)
