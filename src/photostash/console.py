"""Rich-based collaborators for the terminal front end."""

from __future__ import annotations

from typing import Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.status import Status
from rich.table import Table

from photostash.gallery.collaborators import Severity
from photostash.gallery.display import file_type_label, format_file_size, format_upload_date
from photostash.gallery.selection import PhotoDetails
from photostash.store.models import PhotoRecord

_SEVERITY_STYLES = {"success": "green", "error": "red"}


class RichNotifier:
    """Print notifications to the console, coloured by severity."""

    def __init__(self, console: Console, *, quiet: bool = False) -> None:
        """Initialize the notifier.

        Args:
            console: Console receiving the messages.
            quiet: Suppress success messages and keep errors.
        """
        self._console = console
        self._quiet = quiet

    def notify(self, message: str, severity: Severity = "success") -> None:
        """Print ``message`` in the colour for ``severity``.

        Args:
            message: Text shown to the user; markup characters are escaped.
            severity: ``success`` or ``error``.
        """
        if self._quiet and severity == "success":
            return
        style = _SEVERITY_STYLES.get(severity, "white")
        self._console.print(f"[{style}]{escape(message)}[/{style}]")


def build_photo_table(photos: Sequence[PhotoRecord]) -> Table:
    """Return a table listing ``photos`` in collection order."""
    table = Table(title=f"Photos ({len(photos)})")
    table.add_column("#", justify="right")
    table.add_column("Name")
    table.add_column("Type")
    table.add_column("Size", justify="right")
    table.add_column("Uploaded")
    table.add_column("ID", style="dim")
    for index, record in enumerate(photos):
        table.add_row(
            str(index),
            escape(record.name),
            file_type_label(record.content_type),
            format_file_size(record.size),
            format_upload_date(record.upload_date),
            record.id,
        )
    return table


class TableRenderer:
    """Keep the latest collection snapshot and print it on request."""

    def __init__(self, console: Console) -> None:
        """Initialize the renderer.

        Args:
            console: Console used for the table and the busy spinner.
        """
        self._console = console
        self._photos: tuple[PhotoRecord, ...] = ()
        self._status: Optional[Status] = None

    @property
    def count(self) -> int:
        """Return the number of photos in the latest snapshot."""
        return len(self._photos)

    def render(self, photos: Sequence[PhotoRecord], count: int) -> None:
        """Remember ``photos`` as the snapshot printed by :meth:`print_table`.

        Args:
            photos: Records in collection order.
            count: Number of records, as shown in the gallery header.
        """
        self._photos = tuple(photos)

    def loading(self, active: bool) -> None:
        """Start or stop the spinner shown while photos are encoded.

        Args:
            active: True to show the spinner, False to remove it.
        """
        if active and self._status is None:
            self._status = self._console.status("Encoding photos...")
            self._status.start()
        elif not active and self._status is not None:
            self._status.stop()
            self._status = None

    def print_table(self) -> None:
        """Print the snapshot as a table, or a hint when the gallery is empty."""
        if not self._photos:
            self._console.print("[yellow]No photos yet. Add some with `photostash add`.[/yellow]")
            return
        self._console.print(build_photo_table(self._photos))


class DetailsViewer:
    """Print the fields of the inspected photo."""

    def __init__(self, console: Console) -> None:
        """Initialize the viewer.

        Args:
            console: Console receiving the details table.
        """
        self._console = console

    def show(self, details: PhotoDetails) -> None:
        """Print ``details`` as a two-column table.

        Args:
            details: Formatted fields of the selected photo.
        """
        table = Table(show_header=False, title=escape(details.name))
        table.add_column("Field", style="bold")
        table.add_column("Value")
        table.add_row("Index", str(details.index))
        table.add_row("ID", details.id)
        table.add_row("Size", details.size_label)
        table.add_row("Type", details.type_label)
        table.add_row("Uploaded", details.uploaded_label)
        self._console.print(table)

    def close(self) -> None:
        """Do nothing; printed details stay in the terminal scrollback."""
        return None


__all__ = ["RichNotifier", "TableRenderer", "DetailsViewer", "build_photo_table"]
