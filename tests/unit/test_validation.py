"""
Unit tests for core/stream/validation.py - column check and stream diagnostics
"""
import logging

import pytest
from core.stream import (
    ColumnSectionToggle,
    Container,
    ImageRef,
    InvalidColumnCount,
    SectionColumn,
    SectionData,
    SimpleText,
    StreamValidationError,
    StreamValidator,
    check_column_toggle,
)


class TestCheckColumnToggle:
    """The append-time precondition."""

    @pytest.mark.parametrize("columns", [-1, 0, 1])
    def test_rejects(self, columns):
        with pytest.raises(InvalidColumnCount):
            check_column_toggle(ColumnSectionToggle(columns=columns))

    def test_accepts_two(self):
        check_column_toggle(ColumnSectionToggle(columns=2))

    def test_disable_not_checked(self):
        check_column_toggle(ColumnSectionToggle(columns=0, enabled=False))

    def test_other_instructions_ignored(self):
        check_column_toggle(SimpleText("x"))


class TestStreamValidator:
    """Hand-off diagnostics."""

    @pytest.fixture
    def validator(self):
        return StreamValidator()

    def test_clean_stream(self, validator, builder, sample_image):
        builder.add_text("a")
        builder.enable_columns(2)
        builder.add_image(sample_image)
        builder.disable_columns()
        assert validator.validate(builder.stream) == []

    def test_unmatched_disable(self, validator, builder):
        builder.disable_columns(container=Container.HEADER_LEFT)
        errors = validator.validate(builder.stream)
        assert errors == ["#0 (header_left): column section disabled without a matching enable"]

    def test_open_section(self, validator, builder):
        builder.enable_columns(3)
        errors = validator.validate(builder.stream)
        assert len(errors) == 1
        assert "3-column section still open" in errors[0]

    def test_balance_is_per_container(self, validator, builder):
        builder.enable_columns(2, container=Container.CONTENT_LEFT)
        builder.disable_columns(container=Container.CONTENT_RIGHT)
        errors = validator.validate(builder.stream)
        assert len(errors) == 2

    def test_empty_image_row(self, validator, builder):
        builder.add_images_in_row([])
        assert validator.validate(builder.stream) == ["#0 (content_left): image row has no images"]

    def test_negative_values(self, validator, builder):
        builder.add_space(-1.0)
        builder.set_indentation(-5.0, left=False)
        builder.set_absolute_offset(-10.0)
        builder.add_images_in_row([ImageRef("a.png")], spacing=-2.0)
        errors = validator.validate(builder.stream)
        assert len(errors) == 4
        assert "negative right indentation" in errors[1]

    def test_section_widths(self, validator, builder):
        builder.add_section(SectionData(columns=[SectionColumn(0.6), SectionColumn(0.6)]))
        builder.add_section(SectionData())
        errors = validator.validate(builder.stream)
        assert "sum to 1.200" in errors[0]
        assert "section has no columns" in errors[1]

    def test_diagnostics_are_logged(self, validator, builder, caplog):
        builder.disable_columns()
        with caplog.at_level(logging.WARNING):
            validator.validate(builder.stream)
        assert "Stream diagnostic" in caplog.text

    def test_validation_never_mutates(self, validator, builder):
        builder.disable_columns()
        validator.validate(builder.stream)
        assert len(builder.stream) == 1

    def test_strict_raises(self, builder):
        builder.disable_columns()
        with pytest.raises(StreamValidationError) as exc_info:
            StreamValidator(strict=True).validate_or_raise(builder.stream)
        assert len(exc_info.value.errors) == 1

    def test_non_strict_returns(self, builder):
        builder.disable_columns()
        assert len(StreamValidator().validate_or_raise(builder.stream)) == 1
