#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Layout Instructions

The closed set of instruction kinds a builder can append to a stream.

Two families:
- Content instructions produce output (text, images, lines, tables...).
- Modifier instructions change how later content in the same container is
  interpreted (font, text color, indentation, offset, column sections).

Every variant is a frozen dataclass tagged with a class-level InstructionKind,
and INSTRUCTION_TYPES maps each kind to exactly one class, so a consumer can
dispatch exhaustively on `instruction.kind`.

Version: 1.0.0
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, Tuple, Type

from config.constants import DEFAULT_IMAGE_ROW_SPACING, DEFAULT_TEXT_LINE_SPACING

from .errors import InvalidColumnCount, StreamDecodeError
from .payloads import (
    Color,
    Font,
    ImageRef,
    LineStyle,
    ListData,
    RichText,
    SectionData,
    TableData,
    _mapping,
    _sequence,
)


# ============================================================================
# Instruction kinds
# ============================================================================

class InstructionKind(Enum):
    """Tag of every instruction variant"""
    # Content
    SPACE = "space"
    LINE_SEPARATOR = "line_separator"
    IMAGE = "image"
    IMAGE_ROW = "image_row"
    SIMPLE_TEXT = "simple_text"
    ATTRIBUTED_TEXT = "attributed_text"
    TABLE = "table"
    LIST = "list"
    SECTION = "section"
    PAGE_BREAK = "page_break"

    # Modifiers
    FONT = "font"
    TEXT_COLOR = "text_color"
    INDENTATION = "indentation"
    OFFSET = "offset"
    COLUMN_SECTION = "column_section"


MODIFIER_KINDS = frozenset({
    InstructionKind.FONT,
    InstructionKind.TEXT_COLOR,
    InstructionKind.INDENTATION,
    InstructionKind.OFFSET,
    InstructionKind.COLUMN_SECTION,
})

# Always filed under the primary content container, whatever the caller passed
PINNED_KINDS = frozenset({
    InstructionKind.SECTION,
    InstructionKind.PAGE_BREAK,
})


# ============================================================================
# Base class
# ============================================================================

@dataclass(frozen=True)
class Instruction:
    """Base class for all instructions"""
    kind: ClassVar[InstructionKind]

    @property
    def is_modifier(self) -> bool:
        return self.kind in MODIFIER_KINDS

    @property
    def is_content(self) -> bool:
        return self.kind not in MODIFIER_KINDS

    @property
    def is_pinned(self) -> bool:
        return self.kind in PINNED_KINDS

    def to_dict(self) -> Dict[str, Any]:
        data = {"kind": self.kind.value}
        data.update(self._payload_dict())
        return data

    def _payload_dict(self) -> Dict[str, Any]:
        return {}

    @classmethod
    def _from_payload(cls, data: Dict[str, Any]) -> 'Instruction':
        return cls()


# ============================================================================
# Content instructions
# ============================================================================

@dataclass(frozen=True)
class Space(Instruction):
    """Vertical gap in points"""
    kind: ClassVar[InstructionKind] = InstructionKind.SPACE
    space: float

    def _payload_dict(self) -> Dict[str, Any]:
        return {"space": self.space}

    @classmethod
    def _from_payload(cls, data: Dict[str, Any]) -> 'Space':
        return cls(space=data["space"])


@dataclass(frozen=True)
class LineSeparator(Instruction):
    """Horizontal rule from the left to the right indentation"""
    kind: ClassVar[InstructionKind] = InstructionKind.LINE_SEPARATOR
    style: LineStyle

    def _payload_dict(self) -> Dict[str, Any]:
        return {"style": self.style.to_dict()}

    @classmethod
    def _from_payload(cls, data: Dict[str, Any]) -> 'LineSeparator':
        return cls(style=LineStyle.from_dict(_mapping(data, "style")))


@dataclass(frozen=True)
class ImageBlock(Instruction):
    """Single image"""
    kind: ClassVar[InstructionKind] = InstructionKind.IMAGE
    image: ImageRef

    def _payload_dict(self) -> Dict[str, Any]:
        return {"image": self.image.to_dict()}

    @classmethod
    def _from_payload(cls, data: Dict[str, Any]) -> 'ImageBlock':
        return cls(image=ImageRef.from_dict(data["image"]))


@dataclass(frozen=True)
class ImageRow(Instruction):
    """Images left to right, filling the available width"""
    kind: ClassVar[InstructionKind] = InstructionKind.IMAGE_ROW
    images: Tuple[ImageRef, ...]
    spacing: float = DEFAULT_IMAGE_ROW_SPACING

    def __post_init__(self):
        object.__setattr__(self, "images", tuple(self.images))

    def _payload_dict(self) -> Dict[str, Any]:
        return {
            "images": [img.to_dict() for img in self.images],
            "spacing": self.spacing,
        }

    @classmethod
    def _from_payload(cls, data: Dict[str, Any]) -> 'ImageRow':
        return cls(
            images=tuple(ImageRef.from_dict(i) for i in _sequence(data, "images")),
            spacing=data.get("spacing", DEFAULT_IMAGE_ROW_SPACING),
        )


@dataclass(frozen=True)
class SimpleText(Instruction):
    """Plain text, styled by the container's current font and text color"""
    kind: ClassVar[InstructionKind] = InstructionKind.SIMPLE_TEXT
    text: str
    line_spacing: float = DEFAULT_TEXT_LINE_SPACING

    def _payload_dict(self) -> Dict[str, Any]:
        return {"text": self.text, "line_spacing": self.line_spacing}

    @classmethod
    def _from_payload(cls, data: Dict[str, Any]) -> 'SimpleText':
        text = data.get("text", "")
        if not isinstance(text, str):
            raise TypeError(f"'text' must be a string, got {type(text).__name__}")
        return cls(
            text=text,
            line_spacing=data.get("line_spacing", DEFAULT_TEXT_LINE_SPACING),
        )


@dataclass(frozen=True)
class AttributedText(Instruction):
    """Pre-styled text; ignores the container's font and text color"""
    kind: ClassVar[InstructionKind] = InstructionKind.ATTRIBUTED_TEXT
    text: RichText

    def _payload_dict(self) -> Dict[str, Any]:
        return {"text": self.text.to_dict()}

    @classmethod
    def _from_payload(cls, data: Dict[str, Any]) -> 'AttributedText':
        return cls(text=RichText.from_dict(_mapping(data, "text")))


@dataclass(frozen=True)
class TableBlock(Instruction):
    """Embedded table"""
    kind: ClassVar[InstructionKind] = InstructionKind.TABLE
    table: TableData

    def _payload_dict(self) -> Dict[str, Any]:
        return {"table": self.table.to_dict()}

    @classmethod
    def _from_payload(cls, data: Dict[str, Any]) -> 'TableBlock':
        return cls(table=TableData.from_dict(_mapping(data, "table")))


@dataclass(frozen=True)
class ListBlock(Instruction):
    """Embedded list"""
    kind: ClassVar[InstructionKind] = InstructionKind.LIST
    items: ListData

    def _payload_dict(self) -> Dict[str, Any]:
        return {"items": self.items.to_dict()}

    @classmethod
    def _from_payload(cls, data: Dict[str, Any]) -> 'ListBlock':
        return cls(items=ListData.from_dict(_mapping(data, "items")))


@dataclass(frozen=True)
class SectionBlock(Instruction):
    """Embedded multi-column sub-document (pinned to the primary container)"""
    kind: ClassVar[InstructionKind] = InstructionKind.SECTION
    section: SectionData

    def _payload_dict(self) -> Dict[str, Any]:
        return {"section": self.section.to_dict()}

    @classmethod
    def _from_payload(cls, data: Dict[str, Any]) -> 'SectionBlock':
        return cls(section=SectionData.from_dict(_mapping(data, "section")))


@dataclass(frozen=True)
class PageBreak(Instruction):
    """Forces a new page (pinned to the primary container)"""
    kind: ClassVar[InstructionKind] = InstructionKind.PAGE_BREAK


# ============================================================================
# Modifier instructions
# ============================================================================

@dataclass(frozen=True)
class FontChange(Instruction):
    """Font for subsequent SimpleText in the same container"""
    kind: ClassVar[InstructionKind] = InstructionKind.FONT
    font: Font

    def _payload_dict(self) -> Dict[str, Any]:
        return {"font": self.font.to_dict()}

    @classmethod
    def _from_payload(cls, data: Dict[str, Any]) -> 'FontChange':
        return cls(font=Font.from_dict(data["font"]))


@dataclass(frozen=True)
class TextColorChange(Instruction):
    """Text color for subsequent SimpleText in the same container"""
    kind: ClassVar[InstructionKind] = InstructionKind.TEXT_COLOR
    color: Color

    def _payload_dict(self) -> Dict[str, Any]:
        return {"color": self.color.to_dict()}

    @classmethod
    def _from_payload(cls, data: Dict[str, Any]) -> 'TextColorChange':
        return cls(color=Color.from_dict(_mapping(data, "color")))


@dataclass(frozen=True)
class IndentationChange(Instruction):
    """Left (left=True) or right margin for subsequent content"""
    kind: ClassVar[InstructionKind] = InstructionKind.INDENTATION
    indentation: float
    left: bool = True

    def _payload_dict(self) -> Dict[str, Any]:
        return {"indentation": self.indentation, "left": self.left}

    @classmethod
    def _from_payload(cls, data: Dict[str, Any]) -> 'IndentationChange':
        return cls(indentation=data["indentation"], left=data.get("left", True))


@dataclass(frozen=True)
class OffsetChange(Instruction):
    """Absolute cursor position, measured from the top"""
    kind: ClassVar[InstructionKind] = InstructionKind.OFFSET
    offset: float

    def _payload_dict(self) -> Dict[str, Any]:
        return {"offset": self.offset}

    @classmethod
    def _from_payload(cls, data: Dict[str, Any]) -> 'OffsetChange':
        return cls(offset=data["offset"])


@dataclass(frozen=True)
class ColumnSectionToggle(Instruction):
    """
    Opens (enabled=True) or closes (enabled=False) a column wrap section.

    An enabling toggle needs columns > 1; the stream rejects anything else.
    Closing toggles carry columns=0.
    """
    kind: ClassVar[InstructionKind] = InstructionKind.COLUMN_SECTION
    columns: int
    enabled: bool = True

    def _payload_dict(self) -> Dict[str, Any]:
        return {"columns": self.columns, "enabled": self.enabled}

    @classmethod
    def _from_payload(cls, data: Dict[str, Any]) -> 'ColumnSectionToggle':
        return cls(columns=data.get("columns", 0), enabled=data.get("enabled", True))


# ============================================================================
# Registry
# ============================================================================

INSTRUCTION_TYPES: Dict[InstructionKind, Type[Instruction]] = {
    InstructionKind.SPACE: Space,
    InstructionKind.LINE_SEPARATOR: LineSeparator,
    InstructionKind.IMAGE: ImageBlock,
    InstructionKind.IMAGE_ROW: ImageRow,
    InstructionKind.SIMPLE_TEXT: SimpleText,
    InstructionKind.ATTRIBUTED_TEXT: AttributedText,
    InstructionKind.TABLE: TableBlock,
    InstructionKind.LIST: ListBlock,
    InstructionKind.SECTION: SectionBlock,
    InstructionKind.PAGE_BREAK: PageBreak,
    InstructionKind.FONT: FontChange,
    InstructionKind.TEXT_COLOR: TextColorChange,
    InstructionKind.INDENTATION: IndentationChange,
    InstructionKind.OFFSET: OffsetChange,
    InstructionKind.COLUMN_SECTION: ColumnSectionToggle,
}


def instruction_from_dict(data: Dict[str, Any]) -> Instruction:
    """
    Rebuild an instruction from its to_dict() form.

    Raises:
        StreamDecodeError: unknown kind or malformed payload
        InvalidColumnCount: a nested section holds an invalid column toggle
    """
    try:
        kind = InstructionKind(data["kind"])
    except (KeyError, ValueError, TypeError, AttributeError) as e:
        raise StreamDecodeError(f"Unknown instruction kind in {data!r}") from e

    try:
        return INSTRUCTION_TYPES[kind]._from_payload(data)
    except InvalidColumnCount:
        raise
    except (KeyError, ValueError, TypeError, AttributeError) as e:
        raise StreamDecodeError(f"Malformed {kind.value} instruction: {e}") from e
