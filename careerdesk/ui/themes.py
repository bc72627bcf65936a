"""
CareerDesk Themes — Named style bundles applied uniformly to one table.

Each theme maps to header background, header text, border, row hover and
the primary accent used for icons, spinners and call-to-action buttons.
Unknown theme names are rejected at the boundary.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Union

from careerdesk.engine.errors import CareerDeskValidationError


class Palette:
    """Design system colors."""
    PRIMARY_BLUE = "#1A237E"
    GOLD = "#B8860B"
    ACCENT_RED = "#D32F2F"
    ACCENT_GREEN = "#388E3C"
    WHITE = "#FFFFFF"
    BLACK = "#222222"


class Theme(str, Enum):
    DEFAULT = "default"
    PRIMARY = "primary"
    SECONDARY = "secondary"
    SUCCESS = "success"
    WARNING = "warning"
    DANGER = "danger"

    @classmethod
    def parse(cls, value: Union["Theme", str]) -> "Theme":
        """Accept a Theme or its name; raise on anything else."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise CareerDeskValidationError(
                f"Unknown theme '{value}'",
                field="theme",
                value=value,
                allowed=[t.value for t in cls],
            ) from None


@dataclass(frozen=True)
class ThemeStyles:
    header_bg: str
    header_text: str
    border: str
    hover: str
    primary: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "header_bg": self.header_bg,
            "header_text": self.header_text,
            "border": self.border,
            "hover": self.hover,
            "primary": self.primary,
        }


def _tinted(color: str) -> ThemeStyles:
    return ThemeStyles(
        header_bg=f"bg-[{color}]/10",
        header_text=f"text-[{color}]",
        border=f"border-[{color}]/20",
        hover=f"hover:bg-[{color}]/5",
        primary=color,
    )


_THEME_STYLES: Dict[Theme, ThemeStyles] = {
    Theme.DEFAULT: ThemeStyles(
        header_bg="bg-gray-50",
        header_text="text-gray-900",
        border="border-gray-200",
        hover="hover:bg-gray-50",
        primary=Palette.PRIMARY_BLUE,
    ),
    Theme.PRIMARY: _tinted(Palette.PRIMARY_BLUE),
    Theme.SECONDARY: _tinted(Palette.GOLD),
    Theme.SUCCESS: _tinted(Palette.ACCENT_GREEN),
    Theme.WARNING: _tinted(Palette.GOLD),
    Theme.DANGER: _tinted(Palette.ACCENT_RED),
}

_THEME_BADGE_CLASSES: Dict[Theme, str] = {
    Theme.DEFAULT: "bg-gray-100 text-gray-800",
    Theme.PRIMARY: f"bg-[{Palette.PRIMARY_BLUE}]/10 text-[{Palette.PRIMARY_BLUE}]",
    Theme.SECONDARY: f"bg-[{Palette.GOLD}]/10 text-[{Palette.GOLD}]",
    Theme.SUCCESS: f"bg-[{Palette.ACCENT_GREEN}]/10 text-[{Palette.ACCENT_GREEN}]",
    Theme.WARNING: f"bg-[{Palette.GOLD}]/10 text-[{Palette.GOLD}]",
    Theme.DANGER: f"bg-[{Palette.ACCENT_RED}]/10 text-[{Palette.ACCENT_RED}]",
}

# Radix color scheme used by the Reflex renderer for each theme
_THEME_COLOR_SCHEMES: Dict[Theme, str] = {
    Theme.DEFAULT: "gray",
    Theme.PRIMARY: "indigo",
    Theme.SECONDARY: "amber",
    Theme.SUCCESS: "grass",
    Theme.WARNING: "amber",
    Theme.DANGER: "red",
}


def theme_styles(theme: Union[Theme, str]) -> ThemeStyles:
    """Resolve the style bundle for a theme."""
    return _THEME_STYLES[Theme.parse(theme)]


def theme_badge_class(theme: Union[Theme, str]) -> str:
    return _THEME_BADGE_CLASSES[Theme.parse(theme)]


def theme_color_scheme(theme: Union[Theme, str]) -> str:
    return _THEME_COLOR_SCHEMES[Theme.parse(theme)]
