"""calsync CLI."""

import json
import logging
import sys
from pathlib import Path

import click

from .adapters.credential_store import CredentialStore
from .config import load_config
from .core.events import CalendarEvent, CreationStatus
from .errors import CalsyncError
from .workflows import EventSyncWorkflow

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _fail(e: Exception) -> None:
    click.echo(f"Error: {e}", err=True)
    sys.exit(1)


def load_event_file(path: Path) -> CalendarEvent:
    """Read a candidate event from a JSON file in Google Calendar's event shape."""
    try:
        data = json.loads(path.read_text())
    except (OSError, ValueError) as e:
        raise click.BadParameter(f"cannot read {path}: {e}", param_hint="EVENT_FILE") from e
    if not isinstance(data, dict):
        raise click.BadParameter(f"{path} must hold a JSON object", param_hint="EVENT_FILE")
    try:
        return CalendarEvent.from_api(data)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise click.BadParameter(f"malformed event in {path}: {e!r}", param_hint="EVENT_FILE") from e


@click.group()
@click.version_option()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """calsync - Google Calendar sync."""
    if debug:
        logging.basicConfig(format=LOG_FORMAT, level=logging.DEBUG)


@main.command()
@click.option("--force", is_flag=True, help="Discard the saved token and authorize again")
def auth(force: bool):
    """Authorize with Google Calendar."""
    config = load_config()
    store = CredentialStore(config.credential_config())
    try:
        if force and store.clear():
            click.echo(f"Removed {store.token_path}")
        store.resolve()
    except CalsyncError as e:
        _fail(e)
    click.echo(f"✓ Authorized, token at {store.token_path}")


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def events(as_json: bool):
    """List upcoming events."""
    config = load_config()
    store = CredentialStore(config.credential_config())
    workflow = EventSyncWorkflow(calendar_id=config.calendar_id)
    try:
        upcoming = workflow.list_upcoming(store.resolve())
    except CalsyncError as e:
        _fail(e)

    if as_json:
        click.echo(json.dumps([e.as_json() for e in upcoming], indent=2))
        return

    if not upcoming:
        click.echo("No upcoming events found.")
        return

    for event in upcoming:
        start = event.start.date_time or event.start.date
        loc = f" @ {event.location}" if event.location else ""
        click.echo(f"{start} - {event.summary}{loc}")


@main.command()
@click.argument("event_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def create(event_file: Path, as_json: bool):
    """Create the event in EVENT_FILE unless it already exists."""
    candidate = load_event_file(event_file)
    config = load_config()
    store = CredentialStore(config.credential_config())
    workflow = EventSyncWorkflow(calendar_id=config.calendar_id)
    try:
        result = workflow.create_if_absent(store.resolve(), candidate)
    except CalsyncError as e:
        _fail(e)

    if as_json:
        click.echo(
            json.dumps(
                {
                    "status": result.status.value,
                    "html_link": result.html_link,
                    "duplicate_of": result.duplicate.id if result.duplicate else None,
                },
                indent=2,
            )
        )
    elif result.status is CreationStatus.SKIPPED:
        click.echo(f"Event already exists: {result.duplicate.summary}")
    else:
        click.echo(f"Event created: {result.html_link}")


@main.command()
@click.option("--host", default=None, help="Interface to bind (default from config)")
@click.option("--port", type=int, default=None, help="Port to listen on (default from config)")
def serve(host: str | None, port: int | None):
    """Run the HTTP server."""
    from .server import run

    logging.basicConfig(format=LOG_FORMAT, level=logging.INFO)
    run(load_config(), host=host, port=port)


if __name__ == "__main__":
    main()
