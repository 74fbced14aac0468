#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Stream Validation

Two levels:
- check_column_toggle(): the one precondition enforced at append time.
- StreamValidator: hand-off diagnostics for sequences that are malformed but
  still well defined for the layout pass (unbalanced column toggles, empty
  image rows, negative distances...). These are reported, never rejected
  on append.

Version: 1.0.0
"""

from typing import Dict, List, TYPE_CHECKING
import logging

from config.constants import MIN_COLUMN_COUNT

from .errors import InvalidColumnCount, StreamValidationError
from .instructions import (
    ColumnSectionToggle,
    ImageRow,
    IndentationChange,
    Instruction,
    OffsetChange,
    SectionBlock,
    Space,
)

if TYPE_CHECKING:
    from .containers import Container
    from .stream import InstructionStream

logger = logging.getLogger(__name__)


def check_column_toggle(instruction: Instruction) -> None:
    """
    Reject an enabling column toggle with fewer than two columns.

    Raises:
        InvalidColumnCount: if the precondition does not hold
    """
    if (isinstance(instruction, ColumnSectionToggle)
            and instruction.enabled
            and instruction.columns < MIN_COLUMN_COUNT):
        raise InvalidColumnCount(instruction.columns)


class StreamValidator:
    """
    Reports suspicious instruction sequences before hand-off.

    Usage:
        validator = StreamValidator()

        # Collect diagnostics
        warnings = validator.validate(stream)

        # Fail on any diagnostic
        StreamValidator(strict=True).validate_or_raise(stream)
    """

    def __init__(self, strict: bool = False):
        """
        Initialize validator.

        Args:
            strict: If True, validate_or_raise() raises on any diagnostic
        """
        self.strict = strict

    def validate(self, stream: 'InstructionStream') -> List[str]:
        """
        Validate a stream.

        Args:
            stream: Stream to inspect

        Returns:
            List of diagnostics (empty if none)
        """
        errors: List[str] = []
        open_columns: Dict['Container', int] = {}

        for index, entry in enumerate(stream):
            instruction = entry.instruction
            where = f"#{index} ({entry.container.value})"

            if isinstance(instruction, ColumnSectionToggle):
                if instruction.enabled:
                    open_columns[entry.container] = instruction.columns
                elif entry.container in open_columns:
                    del open_columns[entry.container]
                else:
                    errors.append(f"{where}: column section disabled without a matching enable")

            elif isinstance(instruction, ImageRow):
                if not instruction.images:
                    errors.append(f"{where}: image row has no images")
                if instruction.spacing < 0:
                    errors.append(f"{where}: negative image row spacing {instruction.spacing}")

            elif isinstance(instruction, Space) and instruction.space < 0:
                errors.append(f"{where}: negative space {instruction.space}")

            elif isinstance(instruction, IndentationChange) and instruction.indentation < 0:
                side = "left" if instruction.left else "right"
                errors.append(f"{where}: negative {side} indentation {instruction.indentation}")

            elif isinstance(instruction, OffsetChange) and instruction.offset < 0:
                errors.append(f"{where}: negative absolute offset {instruction.offset}")

            elif isinstance(instruction, SectionBlock):
                section = instruction.section
                if not section.columns:
                    errors.append(f"{where}: section has no columns")
                elif section.total_width > 1.0 + 1e-9:
                    errors.append(f"{where}: section column widths sum to {section.total_width:.3f} (> 1.0)")

        for container, columns in open_columns.items():
            errors.append(
                f"{container.value}: {columns}-column section still open at end of stream "
                f"(closed implicitly)"
            )

        for error in errors:
            logger.warning(f"Stream diagnostic: {error}")
        if not errors:
            logger.debug(f"Stream validated: {len(stream)} entries")

        return errors

    def validate_or_raise(self, stream: 'InstructionStream') -> List[str]:
        """
        Validate and raise in strict mode.

        Raises:
            StreamValidationError: strict mode and diagnostics were found
        """
        errors = self.validate(stream)

        if errors and self.strict:
            raise StreamValidationError(errors)

        return errors
