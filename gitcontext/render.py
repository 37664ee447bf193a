"""
Rendering functions for gitcontext output.

This module handles all pretty-printing and table formatting.
The reader returns data, this module makes it human-readable.
"""

from rich.table import Table
from rich.console import Console
from rich import box
from rich.markup import escape
from typing import Any, Optional

from .generator import GitContext

console = Console()


def _format_value(value: Any) -> str:
    """Format a field value for table display."""
    if value is None:
        return '[dim]-[/dim]'
    if isinstance(value, bool):
        return 'Yes' if value else 'No'
    if isinstance(value, (list, tuple)):
        return escape(', '.join(str(v) for v in value)) if value else '[dim]-[/dim]'
    if hasattr(value, 'isoformat'):
        return value.isoformat()
    return escape(str(value).rstrip('\n'))


def render_context_table(context: GitContext, title: Optional[str] = None) -> None:
    """
    Render the published fields as a two-column table.

    Args:
        context: Snapshot to display
        title: Optional table title
    """
    table = Table(
        title=title,
        box=box.ROUNDED,
        show_header=True,
        header_style="bold magenta"
    )

    table.add_column("Field", style="cyan")
    table.add_column("Value")

    table.add_row("Hash", _format_value(context.hash))
    table.add_row("Author", _format_value(context.author))
    table.add_row("Date", _format_value(context.date))
    table.add_row("IsDetached", _format_value(context.is_detached))
    table.add_row("Branch", _format_value(context.branch))
    table.add_row("Tags", _format_value(context.tags))
    table.add_row("Parents", _format_value(context.parents))
    table.add_row("Message", _format_value(context.message))

    console.print(table)
