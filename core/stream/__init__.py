#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Instruction Stream Module

Builder-facing intermediate representation of a document: an ordered,
append-only stream of layout instructions, each scoped to a container.

Usage:
    from core.stream import DocumentBuilder, Container, Font

    builder = DocumentBuilder()
    builder.add_text("Title", container=Container.HEADER_CENTER)
    builder.set_font(Font("Helvetica-Bold", 14.0, bold=True))
    builder.add_text("Body")
    builder.create_new_page()

    stream = builder.finish()
    json_str = stream.to_json()

Version: 1.0.0
"""

from .containers import Container, PRIMARY_CONTAINER
from .errors import (
    StreamError,
    InvalidColumnCount,
    StreamDecodeError,
    StreamValidationError,
)
from .payloads import (
    Font,
    Color,
    TextRun,
    RichText,
    LineType,
    LineStyle,
    ImageSizeFit,
    ImageRef,
    TableData,
    ListSymbol,
    ListItem,
    ListData,
    SectionColumn,
    SectionData,
)
from .instructions import (
    InstructionKind,
    Instruction,
    Space,
    LineSeparator,
    ImageBlock,
    ImageRow,
    SimpleText,
    AttributedText,
    TableBlock,
    ListBlock,
    SectionBlock,
    PageBreak,
    FontChange,
    TextColorChange,
    IndentationChange,
    OffsetChange,
    ColumnSectionToggle,
    INSTRUCTION_TYPES,
    MODIFIER_KINDS,
    PINNED_KINDS,
    instruction_from_dict,
)
from .stream import InstructionStream, StreamEntry, StreamMetadata
from .validation import StreamValidator, check_column_toggle
from .builder import DocumentBuilder

__all__ = [
    # Containers
    "Container",
    "PRIMARY_CONTAINER",

    # Errors
    "StreamError",
    "InvalidColumnCount",
    "StreamDecodeError",
    "StreamValidationError",

    # Payloads
    "Font",
    "Color",
    "TextRun",
    "RichText",
    "LineType",
    "LineStyle",
    "ImageSizeFit",
    "ImageRef",
    "TableData",
    "ListSymbol",
    "ListItem",
    "ListData",
    "SectionColumn",
    "SectionData",

    # Instructions
    "InstructionKind",
    "Instruction",
    "Space",
    "LineSeparator",
    "ImageBlock",
    "ImageRow",
    "SimpleText",
    "AttributedText",
    "TableBlock",
    "ListBlock",
    "SectionBlock",
    "PageBreak",
    "FontChange",
    "TextColorChange",
    "IndentationChange",
    "OffsetChange",
    "ColumnSectionToggle",
    "INSTRUCTION_TYPES",
    "MODIFIER_KINDS",
    "PINNED_KINDS",
    "instruction_from_dict",

    # Stream
    "InstructionStream",
    "StreamEntry",
    "StreamMetadata",

    # Validation
    "StreamValidator",
    "check_column_toggle",

    # Builder
    "DocumentBuilder",
]

__version__ = "1.0.0"
