"""Terminal UI utilities using Rich library for formatted output.

This module provides a unified interface for terminal output, using the
theme palette for consistent styling.
"""

from typing import Any, Dict, Optional, Sequence

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm
from rich.table import Table
from rich.text import Text

from config import Config
from utils.theme import Theme, set_theme

set_theme(Config.TUI_THEME)

# Global console instance with theme support
console = Console(theme=Theme.get_rich_theme())


def _get_colors():
    """Get current theme colors."""
    return Theme.get_colors()


def print_config(config: Dict[str, Any]) -> None:
    """Print configuration in a formatted table.

    Args:
        config: Dictionary of configuration key-value pairs
    """
    colors = _get_colors()
    table = Table(show_header=False, box=box.SIMPLE, border_style=colors.text_muted, padding=(0, 2))
    table.add_column("Key", style=f"{colors.primary} bold")
    table.add_column("Value", style=colors.success)

    for key, value in config.items():
        table.add_row(key, str(value))

    console.print(table)


def _format_tags(tags: Sequence[str], limit: Optional[int] = None) -> Text:
    colors = _get_colors()
    shown = list(tags[:limit]) if limit is not None else list(tags)
    text = Text(" ".join(f"#{tag}" for tag in shown), style=colors.tag_accent)
    if limit is not None and len(tags) > limit:
        text.append(f" +{len(tags) - limit}", style=colors.text_muted)
    return text


def print_skill_table(skills: Sequence[Any], total: int) -> None:
    """Print the skill listing.

    Args:
        skills: Skills to show (already filtered)
        total: Number of skills before filtering
    """
    colors = _get_colors()
    console.print(
        f"[bold {colors.primary}]Skills ({len(skills)}/{total})[/bold {colors.primary}]"
    )
    if not skills:
        return

    table = Table(
        show_header=True,
        header_style=f"bold {colors.primary}",
        box=box.ROUNDED,
        border_style=colors.text_muted,
        padding=(0, 1),
    )
    table.add_column("Command", style=f"{colors.primary} bold", no_wrap=True)
    table.add_column("Description", style=colors.text_secondary)
    table.add_column("Tags")

    for skill in skills:
        table.add_row(skill.display_name, skill.description, _format_tags(skill.tags, limit=3))

    console.print(table)


def print_skill_detail(skill: Any, preview_lines: Optional[int] = None) -> None:
    """Print one skill with a preview of its body.

    Args:
        skill: The skill to show
        preview_lines: Number of body lines to show (uses config default if None)
    """
    colors = _get_colors()
    max_lines = preview_lines if preview_lines is not None else Config.TUI_PREVIEW_LINES

    header = Text(skill.display_name, style=f"bold {colors.primary}")
    parts = [header]
    if skill.description:
        parts.append(Text(skill.description, style=colors.text_secondary))
    if skill.argument_hint:
        parts.append(Text(f"→ {skill.argument_hint}", style=colors.secondary))
    if skill.tags:
        parts.append(_format_tags(skill.tags))
    console.print(Text("\n").join(parts))

    body_lines = skill.body.split("\n")
    preview = "\n".join(body_lines[:max_lines])
    if len(body_lines) > max_lines:
        preview += f"\n... ({len(body_lines) - max_lines} more lines)"

    console.print(
        Panel(
            Text(preview),
            title=f"[{colors.text_secondary}]{skill.path}[/{colors.text_secondary}]",
            title_align="left",
            border_style=colors.text_muted,
            box=box.ROUNDED,
            padding=(0, 1),
        )
    )


def print_sync_log(lines: Sequence[str]) -> None:
    """Print the log lines of a push or pull."""
    colors = _get_colors()
    for line in lines:
        console.print(Text(line, style=colors.git_accent))


def confirm(question: str, default: bool = False) -> bool:
    """Ask a yes/no question on the console."""
    return Confirm.ask(question, default=default, console=console)


def print_error(message: str, title: str = "Error") -> None:
    """Print an error message.

    Args:
        message: Error message
        title: Error title (default: "Error")
    """
    colors = _get_colors()
    console.print(
        Panel(
            Text(message, style=colors.error),
            title=f"[bold {colors.error}]{title}[/bold {colors.error}]",
            border_style=colors.error,
            box=box.ROUNDED,
        )
    )


def print_warning(message: str) -> None:
    """Print a warning message.

    Args:
        message: Warning message
    """
    colors = _get_colors()
    console.print(Text(message, style=colors.warning))


def print_success(message: str) -> None:
    """Print a success message.

    Args:
        message: Success message
    """
    colors = _get_colors()
    console.print(Text(f"✓ {message}", style=colors.success))


def print_info(message: str) -> None:
    """Print an info message.

    Args:
        message: Info message
    """
    colors = _get_colors()
    console.print(Text(f"ℹ {message}", style=colors.primary))


def print_log_location(log_file: str) -> None:
    """Print log file location.

    Args:
        log_file: Path to log file
    """
    colors = _get_colors()
    console.print()
    console.print(Text(f"Detailed logs: {log_file}", style=colors.text_muted))
