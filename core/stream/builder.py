#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Document Builder - convenience API over an InstructionStream

Every method builds one instruction and appends it to the stream. When the
caller omits the container, CONTENT_LEFT is used.

Flow:
    builder calls → DocumentBuilder → InstructionStream → layout pass

Notes:
- Shorthands (add_text, add_attributed_text with a str) build the richer
  payload and forward to the canonical method of the same family.
- reset_font() / reset_text_color() append the session default value;
  there is no "unset" state downstream.
- add_section() and create_new_page() always target CONTENT_LEFT.
- enable_columns() raises InvalidColumnCount for fewer than two columns.
"""

from typing import Optional, Sequence, Union
import logging

from config.settings import Settings, settings as default_settings

from .containers import Container, PRIMARY_CONTAINER
from .instructions import (
    AttributedText,
    ColumnSectionToggle,
    FontChange,
    ImageBlock,
    ImageRow,
    IndentationChange,
    LineSeparator,
    ListBlock,
    OffsetChange,
    PageBreak,
    SectionBlock,
    SimpleText,
    Space,
    TableBlock,
    TextColorChange,
)
from .payloads import (
    Color,
    Font,
    ImageRef,
    LineStyle,
    ListData,
    RichText,
    SectionData,
    TableData,
)
from .stream import InstructionStream

logger = logging.getLogger(__name__)


class DocumentBuilder:
    """
    Builds the instruction stream of one document session.

    Usage:
        builder = DocumentBuilder()
        builder.add_text("Hello")
        builder.set_font(Font("Helvetica-Bold", 14.0, bold=True))
        builder.add_text("Bold")
        builder.reset_font()
        builder.enable_columns(3)
        builder.add_image(ImageRef("cover.png"))
        builder.disable_columns()

        stream = builder.finish()
    """

    def __init__(self, settings: Optional[Settings] = None):
        """
        Args:
            settings: Session defaults (uses the global settings if None)
        """
        self.settings = settings if settings is not None else default_settings
        self.stream = InstructionStream()

    @property
    def defaults(self) -> dict:
        """Values the session starts at and the reset operations append"""
        return {
            "font": self.settings.default_font(),
            "text_color": self.settings.default_color(),
            "image_row_spacing": self.settings.image_row_spacing,
            "text_line_spacing": self.settings.text_line_spacing,
            "line_style": self.default_line_style(),
        }

    def default_line_style(self) -> LineStyle:
        return LineStyle(width=self.settings.line_style_width)

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def add_space(self, space: float, container: Container = PRIMARY_CONTAINER) -> None:
        """
        Add an empty vertical space between the previous and the next element.

        Args:
            space: Distance in points
            container: Target container
        """
        self.stream.append(container, Space(space=space))

    def add_line_separator(
        self,
        style: Optional[LineStyle] = None,
        container: Container = PRIMARY_CONTAINER,
    ) -> None:
        """
        Add a horizontal line from the left to the right indentation.

        Args:
            style: Line style (default: thin full black line)
            container: Target container
        """
        self.stream.append(container, LineSeparator(style=style or self.default_line_style()))

    # ------------------------------------------------------------------
    # Images
    # ------------------------------------------------------------------

    def add_image(self, image: ImageRef, container: Container = PRIMARY_CONTAINER) -> None:
        self.stream.append(container, ImageBlock(image=image))

    def add_images_in_row(
        self,
        images: Sequence[ImageRef],
        spacing: Optional[float] = None,
        container: Container = PRIMARY_CONTAINER,
    ) -> None:
        """
        Add a row of images filling the width between the indentations.

        Args:
            images: Images, from left to right
            spacing: Horizontal distance between images (default from settings)
            container: Target container
        """
        if spacing is None:
            spacing = self.settings.image_row_spacing
        self.stream.append(container, ImageRow(images=tuple(images), spacing=spacing))

    # ------------------------------------------------------------------
    # Text
    # ------------------------------------------------------------------

    def add_text(
        self,
        text: str,
        line_spacing: Optional[float] = None,
        container: Container = PRIMARY_CONTAINER,
    ) -> None:
        """Shorthand for add_text_object(SimpleText(text, line_spacing))"""
        if line_spacing is None:
            line_spacing = self.settings.text_line_spacing
        self.add_text_object(SimpleText(text=text, line_spacing=line_spacing), container)

    def add_text_object(self, text: SimpleText, container: Container = PRIMARY_CONTAINER) -> None:
        """Add plain text, styled by the container's current font and color"""
        self.stream.append(container, text)

    def add_attributed_text(
        self,
        text: Union[str, RichText],
        container: Container = PRIMARY_CONTAINER,
    ) -> None:
        """Shorthand for add_attributed_text_object(AttributedText(...))"""
        if isinstance(text, str):
            text = RichText.plain(text)
        self.add_attributed_text_object(AttributedText(text=text), container)

    def add_attributed_text_object(
        self,
        text: AttributedText,
        container: Container = PRIMARY_CONTAINER,
    ) -> None:
        """Add pre-styled text; container font/color do not apply"""
        self.stream.append(container, text)

    def set_font(self, font: Font, container: Container = PRIMARY_CONTAINER) -> None:
        """Font used by subsequent SimpleText in the container"""
        self.stream.append(container, FontChange(font=font))

    def reset_font(self, container: Container = PRIMARY_CONTAINER) -> None:
        """Append the default font (system font at system size)"""
        self.stream.append(container, FontChange(font=self.settings.default_font()))

    def set_text_color(self, color: Color, container: Container = PRIMARY_CONTAINER) -> None:
        """Text color used by subsequent SimpleText in the container"""
        self.stream.append(container, TextColorChange(color=color))

    def reset_text_color(self, container: Container = PRIMARY_CONTAINER) -> None:
        """Append the default text color (black)"""
        self.stream.append(container, TextColorChange(color=self.settings.default_color()))

    # ------------------------------------------------------------------
    # Tables, lists, sections
    # ------------------------------------------------------------------

    def add_table(self, table: TableData, container: Container = PRIMARY_CONTAINER) -> None:
        self.stream.append(container, TableBlock(table=table))

    def add_list(self, items: ListData, container: Container = PRIMARY_CONTAINER) -> None:
        self.stream.append(container, ListBlock(items=items))

    def add_section(self, section: SectionData, container: Optional[Container] = None) -> None:
        """
        Add a section. Always filed under CONTENT_LEFT; `container` is accepted
        for signature symmetry and ignored.
        """
        self.stream.append(container or PRIMARY_CONTAINER, SectionBlock(section=section))

    # ------------------------------------------------------------------
    # Indentation and offset
    # ------------------------------------------------------------------

    def set_indentation(
        self,
        indent: float,
        left: bool,
        container: Container = PRIMARY_CONTAINER,
    ) -> None:
        """
        Change the indentation of a container.

        Args:
            indent: Points from the side
            left: True sets the left indentation, False the right one
            container: Target container
        """
        self.stream.append(container, IndentationChange(indentation=indent, left=left))

    def set_absolute_offset(self, offset: float, container: Container = PRIMARY_CONTAINER) -> None:
        """Move the container cursor to `offset` points from the top"""
        self.stream.append(container, OffsetChange(offset=offset))

    def create_new_page(self, container: Optional[Container] = None) -> None:
        """Start a new page. Always filed under CONTENT_LEFT."""
        self.stream.append(container or PRIMARY_CONTAINER, PageBreak())

    # ------------------------------------------------------------------
    # Column wrapping
    # ------------------------------------------------------------------

    def enable_columns(self, columns: int, container: Container = PRIMARY_CONTAINER) -> None:
        """
        Start a column section with automatic wrapping.

        Raises:
            InvalidColumnCount: if columns <= 1 (nothing is appended)
        """
        self.stream.append(container, ColumnSectionToggle(columns=columns, enabled=True))

    def disable_columns(self, container: Container = PRIMARY_CONTAINER) -> None:
        """Finish a column section. Balancing is left to the layout pass."""
        self.stream.append(container, ColumnSectionToggle(columns=0, enabled=False))

    # ------------------------------------------------------------------
    # Hand-off
    # ------------------------------------------------------------------

    def finish(self) -> InstructionStream:
        """Return the stream for the layout pass"""
        logger.info(f"Built instruction stream: {len(self.stream)} entries, "
                    f"{len(self.stream.containers())} containers, "
                    f"kinds={self.stream.get_statistics()}")
        return self.stream
