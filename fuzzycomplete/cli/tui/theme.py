"""Visual theme for the autocomplete widget.

The theme carries the same styling keys as the browser widget it mirrors.
A terminal cannot show pixel heights, fonts, shadows or margins, so those
keys are kept for parity and only the colors and the border make it into
Textual CSS.
"""

from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Mapping

from textual.color import Color, ColorParseError

from fuzzycomplete.matching import InvalidOptionError


class Palette:
    """Monokai Pro colors for dark terminals."""

    SURFACE = "#141a26"
    BOOST = "#1a2233"
    FOREGROUND = "#f0f2f5"
    MUTED = "#555c65"
    CYAN = "#78DCE8"

    @classmethod
    def rgba(cls, hex_color: str, alpha: float) -> str:
        """Convert hex to an rgba() string."""
        r = int(hex_color[1:3], 16)
        g = int(hex_color[3:5], 16)
        b = int(hex_color[5:7], 16)
        return f"rgba({r}, {g}, {b}, {alpha})"


@dataclass(frozen=True)
class AutocompleteTheme:
    """Styling of the input, the dropdown and the icons."""

    height: str = "44px"
    border: str = "1px solid #dfe1e5"
    border_radius: str = "24px"
    background_color: str = "white"
    box_shadow: str = "rgba(32, 33, 36, 0.28) 0px 1px 6px 0px"
    hover_background_color: str = "#eee"
    color: str = "#212121"
    font_size: str = "16px"
    font_family: str = "Arial"
    icon_color: str = "grey"
    line_color: str = "rgb(232, 234, 237)"
    placeholder_color: str = "grey"
    z_index: int = 0
    clear_icon_margin: str = "3px 14px 0 0"
    search_icon_margin: str = "0 0 0 16px"

    # camelCase keys accepted by merge(), matching the browser widget's styling prop
    _CAMEL = {
        "borderRadius": "border_radius",
        "backgroundColor": "background_color",
        "boxShadow": "box_shadow",
        "hoverBackgroundColor": "hover_background_color",
        "fontSize": "font_size",
        "fontFamily": "font_family",
        "iconColor": "icon_color",
        "lineColor": "line_color",
        "placeholderColor": "placeholder_color",
        "zIndex": "z_index",
        "clearIconMargin": "clear_icon_margin",
        "searchIconMargin": "search_icon_margin",
    }

    def merge(self, styling: Mapping[str, Any] | None) -> "AutocompleteTheme":
        """Return this theme with ``styling`` overrides applied."""
        if not styling:
            return self
        known = {f.name for f in fields(self)}
        changes = {}
        for key, value in styling.items():
            name = self._CAMEL.get(key, key)
            if name not in known:
                raise InvalidOptionError("styling", key, "unknown theme key")
            changes[name] = value
        return replace(self, **changes)

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)

    @property
    def border_color(self) -> str:
        """Color part of the CSS ``border`` shorthand."""
        parts = self.border.replace(", ", ",").split()
        return parts[-1] if parts else self.line_color

    @property
    def border_style(self) -> str:
        if "none" in self.border.split():
            return "none"
        radius = self.border_radius.strip().rstrip("px%") or "0"
        try:
            rounded = float(radius) > 0
        except ValueError:
            rounded = False
        return "round" if rounded else "solid"

    def to_css(self, selector: str = "SearchAutocomplete") -> str:
        """Render the terminal-visible parts of the theme as Textual CSS."""
        css = f"""
    {selector} {{
        height: auto;
        background: {self.background_color};
        color: {self.color};
        border: {self.border_style} {self.border_color};
    }}

    {selector}:focus-within {{
        border: {self.border_style} {self.icon_color};
    }}

    {selector} .search-row {{
        height: auto;
    }}

    {selector} Input {{
        width: 1fr;
        border: none;
        background: {self.background_color};
        color: {self.color};
    }}

    {selector} Input > .input--placeholder {{
        color: {self.placeholder_color};
    }}

    {selector} .search-icon, {selector} .clear-icon {{
        width: 3;
        color: {self.icon_color};
        content-align: center middle;
    }}

    {selector} .clear-icon {{
        display: none;
    }}

    {selector} .clear-icon.visible {{
        display: block;
    }}

    {selector} OptionList {{
        max-height: 12;
        background: {self.background_color};
        color: {self.color};
        border: none;
        border-top: solid {self.line_color};
        display: none;
    }}

    {selector} OptionList.visible {{
        display: block;
        height: auto;
    }}

    {selector} OptionList > .option-list--option-hover {{
        background: {self.hover_background_color};
    }}

    {selector} .no-results {{
        color: {self.placeholder_color};
        padding: 0 1;
        display: none;
    }}

    {selector} .no-results.visible {{
        display: block;
    }}
    """
        return css

    def validate(self) -> None:
        """Check that every color the terminal renders can be parsed."""
        for name in (
            "background_color",
            "hover_background_color",
            "color",
            "icon_color",
            "line_color",
            "placeholder_color",
        ):
            value = getattr(self, name)
            try:
                Color.parse(value)
            except ColorParseError as e:
                raise InvalidOptionError(name, value, str(e)) from e
        try:
            Color.parse(self.border_color)
        except ColorParseError as e:
            raise InvalidOptionError("border", self.border, str(e)) from e


DEFAULT_THEME = AutocompleteTheme()

MONOKAI_THEME = AutocompleteTheme(
    border=f"1px solid {Palette.MUTED}",
    background_color=Palette.SURFACE,
    box_shadow=f"{Palette.rgba(Palette.CYAN, 0.28)} 0px 1px 6px 0px",
    hover_background_color=Palette.BOOST,
    color=Palette.FOREGROUND,
    icon_color=Palette.CYAN,
    line_color=Palette.MUTED,
    placeholder_color=Palette.MUTED,
)

THEMES = {
    "default": DEFAULT_THEME,
    "monokai": MONOKAI_THEME,
}
