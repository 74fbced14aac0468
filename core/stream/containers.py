#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Layout Containers

The fixed set of named regions an instruction can target. Each container
keeps its own ordered sub-stream and its own modifier state during replay.
"""

from enum import Enum


class Container(Enum):
    """Named layout regions (3x3 grid of header/content/footer by alignment)"""
    HEADER_LEFT = "header_left"
    HEADER_CENTER = "header_center"
    HEADER_RIGHT = "header_right"
    CONTENT_LEFT = "content_left"
    CONTENT_CENTER = "content_center"
    CONTENT_RIGHT = "content_right"
    FOOTER_LEFT = "footer_left"
    FOOTER_CENTER = "footer_center"
    FOOTER_RIGHT = "footer_right"

    @property
    def region(self) -> str:
        """header, content or footer"""
        return self.value.split("_", 1)[0]

    @property
    def alignment(self) -> str:
        """left, center or right"""
        return self.value.split("_", 1)[1]

    @property
    def is_header(self) -> bool:
        return self.region == "header"

    @property
    def is_content(self) -> bool:
        return self.region == "content"

    @property
    def is_footer(self) -> bool:
        return self.region == "footer"


# Target of every append when the caller gives no container, and the
# container Section and PageBreak are always filed under.
PRIMARY_CONTAINER = Container.CONTENT_LEFT
