"""Color themes for terminal output with dark and light mode support."""

from dataclasses import dataclass
from typing import Dict

from rich.style import Style
from rich.theme import Theme as RichTheme


@dataclass
class ThemeColors:
    """Color palette for a terminal theme."""

    primary: str  # Skill names, headers
    secondary: str  # Argument hints
    success: str
    warning: str
    error: str

    text_primary: str
    text_secondary: str  # Descriptions
    text_muted: str  # Borders, dividers

    tag_accent: str  # Tag chips
    git_accent: str  # Raw git output


DARK_THEME = ThemeColors(
    primary="#00D9FF",  # Bright cyan
    secondary="#A78BFA",  # Soft purple
    success="#10B981",  # Emerald green
    warning="#F59E0B",  # Amber
    error="#EF4444",  # Red
    text_primary="#F0F6FC",  # Bright white
    text_secondary="#8B949E",  # Gray
    text_muted="#484F58",  # Dark gray
    tag_accent="#F78166",  # Orange
    git_accent="#A371F7",  # Purple
)

LIGHT_THEME = ThemeColors(
    primary="#0969DA",  # Blue
    secondary="#8250DF",  # Purple
    success="#1A7F37",  # Green
    warning="#9A6700",  # Amber
    error="#CF222E",  # Red
    text_primary="#1F2328",  # Near black
    text_secondary="#57606A",  # Medium gray
    text_muted="#8C959F",  # Light gray
    tag_accent="#BC4C00",  # Orange
    git_accent="#8250DF",  # Purple
)


class Theme:
    """Theme manager."""

    _current_theme: str = "dark"
    _themes: Dict[str, ThemeColors] = {
        "dark": DARK_THEME,
        "light": LIGHT_THEME,
    }

    @classmethod
    def get_colors(cls) -> ThemeColors:
        """Get the current theme colors."""
        return cls._themes[cls._current_theme]

    @classmethod
    def set_theme(cls, name: str) -> None:
        """Set the current theme.

        Args:
            name: Theme name ('dark' or 'light')

        Raises:
            ValueError: If theme name is invalid
        """
        if name not in cls._themes:
            raise ValueError(f"Unknown theme: {name}. Available: {list(cls._themes.keys())}")
        cls._current_theme = name

    @classmethod
    def get_theme_name(cls) -> str:
        return cls._current_theme

    @classmethod
    def get_rich_theme(cls) -> RichTheme:
        """Get a Rich Theme object for the current theme."""
        colors = cls.get_colors()
        return RichTheme(
            {
                "primary": Style(color=colors.primary),
                "secondary": Style(color=colors.secondary),
                "success": Style(color=colors.success),
                "warning": Style(color=colors.warning),
                "error": Style(color=colors.error),
                "text": Style(color=colors.text_primary),
                "text.secondary": Style(color=colors.text_secondary),
                "text.muted": Style(color=colors.text_muted),
                "tag": Style(color=colors.tag_accent),
                "git": Style(color=colors.git_accent),
            }
        )


def set_theme(name: str) -> None:
    """Set the current theme (convenience function)."""
    Theme.set_theme(name)
