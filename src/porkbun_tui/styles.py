"""
Styled text for views

Views render to Line objects: a row of (text, style) segments. Style names
are plain strings; only the terminal frontend knows what they look like.
"""

from dataclasses import dataclass, field
from typing import Optional

TITLE = "title"
STATUS_BAR = "status_bar"
HELP = "help"
HELP_KEY = "help_key"
TABLE_HEADER = "table_header"
SELECTED = "selected"
LABEL = "label"
VALUE = "value"
SEARCH = "search"
ERROR = "error"
SUCCESS = "success"
SPINNER = "spinner"
ON = "on"
OFF = "off"

EXPIRED = "expired"
CRITICAL = "critical"
WARNING = "warning"
SOON = "soon"
HEALTHY = "healthy"


def expiration_style(days_until: int) -> str:
    """Style for a domain given the days left before it expires."""
    if days_until < 0:
        return EXPIRED
    if days_until < 7:
        return CRITICAL
    if days_until < 30:
        return WARNING
    if days_until < 90:
        return SOON
    return HEALTHY


def flag_style(value: bool) -> str:
    return ON if value else OFF


def yes_no(value: bool) -> str:
    return "Yes" if value else "No"


def truncate(text: str, width: int) -> str:
    if len(text) <= width:
        return text
    return text[:width - 3] + "..."


@dataclass
class Line:
    """One row of styled output."""
    segments: list[tuple[str, str]] = field(default_factory=list)

    @classmethod
    def of(cls, text: str = "", style: str = "") -> "Line":
        return cls([(text, style)] if text else [])

    def add(self, text: str, style: str = "") -> "Line":
        if text:
            self.segments.append((text, style))
        return self

    def extend(self, other: "Line") -> "Line":
        self.segments.extend(other.segments)
        return self

    def restyle(self, style: str) -> "Line":
        """Same text, one style throughout (used for the cursor row)."""
        return Line([(text, style) for text, _ in self.segments])

    def clip(self, width: int) -> "Line":
        out, used = Line(), 0
        for text, style in self.segments:
            if used >= width:
                break
            piece = text[:width - used]
            out.add(piece, style)
            used += len(piece)
        return out

    @property
    def plain(self) -> str:
        return "".join(text for text, _ in self.segments)

    def __len__(self) -> int:
        return len(self.plain)

    def __str__(self) -> str:
        return self.plain


def plain(lines: list[Line]) -> str:
    """Render lines without styling (tests and logs)."""
    return "\n".join(line.plain for line in lines)


def help_line(items: list[tuple[str, str]], style: Optional[str] = None) -> Line:
    """'key desc  key desc' footer from (key, description) pairs."""
    line = Line()
    for i, (key, desc) in enumerate(items):
        if i:
            line.add("  ")
        line.add(key, style or HELP_KEY)
        line.add(f" {desc}")
    return line
