#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Instruction Payloads

Immutable value types carried by instructions. The stream never inspects
them; they are only stored, compared and serialized. Measuring, decoding
and laying them out is the renderer's job.

Version: 1.0.0
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, TYPE_CHECKING

from config.constants import DEFAULT_LINE_WIDTH, DEFAULT_TEXT_COLOR
from config.settings import normalize_hex_color

if TYPE_CHECKING:
    from .instructions import Instruction


def _mapping(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    """Nested object field; a missing key decodes as empty, null is rejected"""
    if key not in data:
        return {}
    value = data[key]
    if not isinstance(value, dict):
        raise TypeError(f"'{key}' must be an object, got {type(value).__name__}")
    return value


def _sequence(data: Dict[str, Any], key: str) -> List[Any]:
    """Nested array field; a missing key decodes as empty, null is rejected"""
    if key not in data:
        return []
    value = data[key]
    if not isinstance(value, list):
        raise TypeError(f"'{key}' must be an array, got {type(value).__name__}")
    return value


# ============================================================================
# Typography
# ============================================================================

@dataclass(frozen=True)
class Font:
    """Font reference"""
    family: str
    size_pt: float
    bold: bool = False
    italic: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "family": self.family,
            "size_pt": self.size_pt,
            "bold": self.bold,
            "italic": self.italic,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Font':
        return cls(
            family=data["family"],
            size_pt=data["size_pt"],
            bold=data.get("bold", False),
            italic=data.get("italic", False),
        )

    def __str__(self) -> str:
        style = " ".join(s for s, on in (("bold", self.bold), ("italic", self.italic)) if on)
        return f"{self.family} {self.size_pt:g}pt" + (f" {style}" if style else "")


@dataclass(frozen=True)
class Color:
    """Color reference as a 6-digit hex string (without #)

    Raises:
        ValueError: hex is not 6 hex digits
    """
    hex: str = DEFAULT_TEXT_COLOR

    def __post_init__(self):
        object.__setattr__(self, "hex", normalize_hex_color(self.hex))

    def to_dict(self) -> Dict[str, Any]:
        return {"hex": self.hex}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Color':
        return cls(hex=data.get("hex", DEFAULT_TEXT_COLOR))

    def __str__(self) -> str:
        return f"#{self.hex}"


@dataclass(frozen=True)
class TextRun:
    """A run of pre-styled text. Missing font/color means renderer default."""
    text: str
    font: Optional[Font] = None
    color: Optional[Color] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "font": self.font.to_dict() if self.font else None,
            "color": self.color.to_dict() if self.color else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TextRun':
        return cls(
            text=data.get("text") or "",
            font=Font.from_dict(data["font"]) if data.get("font") is not None else None,
            color=Color.from_dict(data["color"]) if data.get("color") is not None else None,
        )


@dataclass(frozen=True)
class RichText:
    """Attributed string: styled independently of container font/color state"""
    runs: Tuple[TextRun, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "runs", tuple(self.runs))

    @classmethod
    def plain(cls, text: str) -> 'RichText':
        """Single unstyled run"""
        return cls(runs=(TextRun(text=text),))

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)

    def to_dict(self) -> Dict[str, Any]:
        return {"runs": [run.to_dict() for run in self.runs]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RichText':
        return cls(runs=tuple(TextRun.from_dict(r) for r in _sequence(data, "runs")))


# ============================================================================
# Lines and images
# ============================================================================

class LineType(Enum):
    """Stroke pattern of a line separator"""
    NONE = "none"
    FULL = "full"
    DASHED = "dashed"
    DOTTED = "dotted"


@dataclass(frozen=True)
class LineStyle:
    """Line style descriptor"""
    type: LineType = LineType.FULL
    color: Color = field(default_factory=Color)
    width: float = DEFAULT_LINE_WIDTH
    radius: Optional[float] = None  # Corner radius, only meaningful for boxes

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "color": self.color.to_dict(),
            "width": self.width,
            "radius": self.radius,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LineStyle':
        return cls(
            type=LineType(data.get("type", "full")),
            color=Color.from_dict(_mapping(data, "color")),
            width=data.get("width", DEFAULT_LINE_WIDTH),
            radius=data.get("radius"),
        )


class ImageSizeFit(Enum):
    """Which dimension is preserved when an image is constrained"""
    WIDTH = "width"
    HEIGHT = "height"
    WIDTH_HEIGHT = "width_height"


@dataclass(frozen=True)
class ImageRef:
    """
    Reference to an image. The image itself is never decoded here.

    width/height of None means natural size.
    """
    source: str  # Path, URL or asset key
    caption: Optional[str] = None
    width: Optional[float] = None
    height: Optional[float] = None
    size_fit: ImageSizeFit = ImageSizeFit.WIDTH
    quality: float = 0.85  # JPEG compression quality hint (0-1)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source,
            "caption": self.caption,
            "width": self.width,
            "height": self.height,
            "size_fit": self.size_fit.value,
            "quality": self.quality,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ImageRef':
        return cls(
            source=data["source"],
            caption=data.get("caption"),
            width=data.get("width"),
            height=data.get("height"),
            size_fit=ImageSizeFit(data.get("size_fit", "width")),
            quality=data.get("quality", 0.85),
        )


# ============================================================================
# Pre-built blocks (tables, lists, sections)
# ============================================================================

@dataclass(frozen=True)
class TableData:
    """Pre-built table. Cell layout is the renderer's concern."""
    rows: Tuple[Tuple[str, ...], ...] = ()
    column_widths: Optional[Tuple[float, ...]] = None  # Relative widths (0-1)
    header_rows: int = 0

    def __post_init__(self):
        object.__setattr__(self, "rows", tuple(tuple(row) for row in self.rows))
        if self.column_widths is not None:
            object.__setattr__(self, "column_widths", tuple(self.column_widths))

    @property
    def size(self) -> Tuple[int, int]:
        """(rows, columns)"""
        return len(self.rows), max((len(r) for r in self.rows), default=0)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rows": [list(row) for row in self.rows],
            "column_widths": list(self.column_widths) if self.column_widths is not None else None,
            "header_rows": self.header_rows,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TableData':
        widths = data.get("column_widths")
        return cls(
            rows=tuple(tuple(row) for row in _sequence(data, "rows")),
            column_widths=tuple(widths) if widths is not None else None,
            header_rows=data.get("header_rows", 0),
        )


class ListSymbol(Enum):
    """Bullet style of a list level"""
    NONE = "none"
    INHERIT = "inherit"  # Use the parent level's symbol
    DOT = "dot"
    DASH = "dash"
    NUMBERED = "numbered"


@dataclass(frozen=True)
class ListItem:
    """List entry with optional nested items"""
    content: str
    children: Tuple['ListItem', ...] = ()
    symbol: ListSymbol = ListSymbol.INHERIT

    def __post_init__(self):
        object.__setattr__(self, "children", tuple(self.children))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "content": self.content,
            "children": [c.to_dict() for c in self.children],
            "symbol": self.symbol.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ListItem':
        return cls(
            content=data.get("content", ""),
            children=tuple(cls.from_dict(c) for c in _sequence(data, "children")),
            symbol=ListSymbol(data.get("symbol", "inherit")),
        )


@dataclass(frozen=True)
class ListData:
    """Pre-built list"""
    items: Tuple[ListItem, ...] = ()
    symbol: ListSymbol = ListSymbol.DOT

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(self.items))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "items": [i.to_dict() for i in self.items],
            "symbol": self.symbol.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ListData':
        return cls(
            items=tuple(ListItem.from_dict(i) for i in _sequence(data, "items")),
            symbol=ListSymbol(data.get("symbol", "dot")),
        )


@dataclass(frozen=True)
class SectionColumn:
    """
    One column of a section with its own nested instructions.

    Nested instructions follow the same column toggle rule as the stream.

    Raises:
        InvalidColumnCount: a nested enabling toggle has fewer than two columns
    """
    width: float  # Relative width (0-1)
    instructions: Tuple['Instruction', ...] = ()

    def __post_init__(self):
        from .validation import check_column_toggle
        object.__setattr__(self, "instructions", tuple(self.instructions))
        for instruction in self.instructions:
            check_column_toggle(instruction)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "width": self.width,
            "instructions": [i.to_dict() for i in self.instructions],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SectionColumn':
        from .instructions import instruction_from_dict
        return cls(
            width=data["width"],
            instructions=tuple(instruction_from_dict(i) for i in _sequence(data, "instructions")),
        )


@dataclass(frozen=True)
class SectionData:
    """Named sub-document laid out in side-by-side columns"""
    columns: Tuple[SectionColumn, ...] = ()
    name: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "columns", tuple(self.columns))

    @property
    def total_width(self) -> float:
        return sum(c.width for c in self.columns)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "columns": [c.to_dict() for c in self.columns],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SectionData':
        return cls(
            name=data.get("name"),
            columns=tuple(SectionColumn.from_dict(c) for c in _sequence(data, "columns")),
        )
