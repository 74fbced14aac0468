"""
Unit tests for core/stream/builder.py - DocumentBuilder facade
"""
import pytest
from config.settings import Settings
from core.layout import StreamReplayer
from core.stream import (
    AttributedText,
    Color,
    ColumnSectionToggle,
    Container,
    DocumentBuilder,
    Font,
    FontChange,
    ImageBlock,
    ImageRef,
    ImageRow,
    IndentationChange,
    InstructionKind,
    InvalidColumnCount,
    LineSeparator,
    LineStyle,
    LineType,
    ListBlock,
    ListData,
    ListItem,
    OffsetChange,
    PageBreak,
    RichText,
    SectionBlock,
    SectionColumn,
    SectionData,
    SimpleText,
    Space,
    TableBlock,
    TableData,
    TextColorChange,
    TextRun,
)


def kinds(builder):
    return [e.instruction.kind for e in builder.stream]


class TestAppendContract:
    """Every call appends exactly one entry, in call order."""

    def test_each_operation_appends_one(self, builder, bold_font, red, sample_image):
        calls = [
            lambda: builder.add_space(10.0),
            lambda: builder.add_line_separator(),
            lambda: builder.add_image(sample_image),
            lambda: builder.add_images_in_row([sample_image, sample_image]),
            lambda: builder.add_text("plain"),
            lambda: builder.add_attributed_text("styled"),
            lambda: builder.set_font(bold_font),
            lambda: builder.reset_font(),
            lambda: builder.set_text_color(red),
            lambda: builder.reset_text_color(),
            lambda: builder.add_table(TableData(rows=[["a"]])),
            lambda: builder.add_list(ListData(items=[ListItem("one")])),
            lambda: builder.add_section(SectionData(columns=[SectionColumn(1.0)])),
            lambda: builder.set_indentation(20.0, left=True),
            lambda: builder.set_absolute_offset(50.0),
            lambda: builder.create_new_page(),
            lambda: builder.enable_columns(2),
            lambda: builder.disable_columns(),
        ]
        for n, call in enumerate(calls, start=1):
            assert call() is None
            assert len(builder.stream) == n

        assert kinds(builder) == [
            InstructionKind.SPACE,
            InstructionKind.LINE_SEPARATOR,
            InstructionKind.IMAGE,
            InstructionKind.IMAGE_ROW,
            InstructionKind.SIMPLE_TEXT,
            InstructionKind.ATTRIBUTED_TEXT,
            InstructionKind.FONT,
            InstructionKind.FONT,
            InstructionKind.TEXT_COLOR,
            InstructionKind.TEXT_COLOR,
            InstructionKind.TABLE,
            InstructionKind.LIST,
            InstructionKind.SECTION,
            InstructionKind.INDENTATION,
            InstructionKind.OFFSET,
            InstructionKind.PAGE_BREAK,
            InstructionKind.COLUMN_SECTION,
            InstructionKind.COLUMN_SECTION,
        ]

    def test_rejected_calls_do_not_count(self, builder):
        builder.add_text("a")
        for columns in (0, 1, -3):
            with pytest.raises(InvalidColumnCount):
                builder.enable_columns(columns)
        builder.add_text("b")
        assert len(builder.stream) == 2
        assert [e.instruction.text for e in builder.stream] == ["a", "b"]

    def test_default_container(self, builder):
        builder.add_space(5.0)
        builder.set_font(Font("Times", 10.0))
        assert all(e.container is Container.CONTENT_LEFT for e in builder.stream)

    def test_explicit_container(self, builder, red):
        builder.add_text("page 1", container=Container.FOOTER_CENTER)
        builder.set_text_color(red, container=Container.HEADER_RIGHT)
        assert builder.stream[0].container is Container.FOOTER_CENTER
        assert builder.stream[1].container is Container.HEADER_RIGHT


class TestPinnedContainers:
    """Section and PageBreak always go to CONTENT_LEFT."""

    def test_section_ignores_container(self, builder):
        builder.add_text("header", container=Container.HEADER_LEFT)
        builder.add_section(SectionData(), container=Container.HEADER_LEFT)
        assert builder.stream[1].container is Container.CONTENT_LEFT
        assert isinstance(builder.stream[1].instruction, SectionBlock)

    def test_new_page_ignores_container(self, builder):
        builder.add_text("footer", container=Container.FOOTER_RIGHT)
        builder.create_new_page(container=Container.FOOTER_RIGHT)
        builder.create_new_page()
        assert builder.stream[1].container is Container.CONTENT_LEFT
        assert builder.stream[2].container is Container.CONTENT_LEFT
        assert builder.stream[2].instruction == PageBreak()


class TestColumns:
    """enable_columns / disable_columns."""

    @pytest.mark.parametrize("columns", [0, 1])
    def test_enable_rejects_small_counts(self, builder, columns):
        with pytest.raises(InvalidColumnCount):
            builder.enable_columns(columns)
        assert len(builder.stream) == 0

    @pytest.mark.parametrize("columns", [2, 3, 12])
    def test_enable_accepts(self, builder, columns):
        builder.enable_columns(columns)
        assert builder.stream[0].instruction == ColumnSectionToggle(columns=columns, enabled=True)

    def test_invalid_column_count_is_value_error(self, builder):
        with pytest.raises(ValueError, match="more than one column"):
            builder.enable_columns(1)

    def test_disable_always_succeeds(self, builder):
        builder.disable_columns()
        builder.disable_columns(container=Container.FOOTER_LEFT)
        assert builder.stream[0].instruction == ColumnSectionToggle(columns=0, enabled=False)
        assert builder.stream[1].container is Container.FOOTER_LEFT

    def test_enable_image_disable(self, builder, sample_image):
        builder.enable_columns(3)
        builder.add_image(sample_image)
        builder.disable_columns()
        assert len(builder.stream) == 3

    def test_section_with_invalid_nested_toggle(self, builder):
        with pytest.raises(InvalidColumnCount):
            builder.add_section(SectionData(columns=[SectionColumn(1.0, [ColumnSectionToggle(columns=1)])]))
        assert len(builder.stream) == 0


class TestShorthands:
    """Shorthands build the richer payload."""

    def test_add_text_defaults(self, builder):
        builder.add_text("hello")
        assert builder.stream[0].instruction == SimpleText("hello", line_spacing=1.0)

    def test_add_text_line_spacing(self, builder):
        builder.add_text("hello", line_spacing=2.0)
        assert builder.stream[0].instruction.line_spacing == 2.0

    def test_add_text_object(self, builder):
        text = SimpleText("object", line_spacing=1.4)
        builder.add_text_object(text, container=Container.CONTENT_CENTER)
        assert builder.stream[0].instruction is text

    def test_add_attributed_text_from_str(self, builder):
        builder.add_attributed_text("hello")
        assert builder.stream[0].instruction == AttributedText(text=RichText.plain("hello"))

    def test_add_attributed_text_rich(self, builder, bold_font):
        rich = RichText(runs=[TextRun("bold", font=bold_font)])
        builder.add_attributed_text(rich)
        assert builder.stream[0].instruction.text is rich

    def test_image_row_default_spacing(self, builder, sample_image):
        builder.add_images_in_row([sample_image])
        assert builder.stream[0].instruction == ImageRow(images=(sample_image,), spacing=5.0)

    def test_image_row_custom_spacing(self, builder, sample_image):
        builder.add_images_in_row((sample_image,), spacing=0.0)
        assert builder.stream[0].instruction.spacing == 0.0

    def test_line_separator_default_style(self, builder):
        builder.add_line_separator()
        assert builder.stream[0].instruction == LineSeparator(style=LineStyle(width=0.25))

    def test_line_separator_custom_style(self, builder):
        style = LineStyle(type=LineType.DOTTED, width=2.0)
        builder.add_line_separator(style)
        assert builder.stream[0].instruction.style is style

    def test_payload_instructions(self, builder, sample_image):
        table = TableData(rows=[["a", "b"]])
        items = ListData(items=[ListItem("x")])
        builder.add_table(table)
        builder.add_list(items)
        builder.add_image(sample_image)
        builder.set_indentation(12.0, left=False)
        builder.set_absolute_offset(200.0)
        builder.add_space(7.5)
        assert [e.instruction for e in builder.stream] == [
            TableBlock(table=table),
            ListBlock(items=items),
            ImageBlock(image=sample_image),
            IndentationChange(indentation=12.0, left=False),
            OffsetChange(offset=200.0),
            Space(space=7.5),
        ]


class TestResets:
    """Resets append the documented default values."""

    def test_reset_font_appends_default(self, builder, default_font):
        builder.reset_font()
        assert builder.stream[0].instruction == FontChange(font=default_font)

    def test_reset_text_color_appends_black(self, builder):
        builder.reset_text_color(container=Container.FOOTER_CENTER)
        entry = builder.stream[0]
        assert entry.instruction == TextColorChange(color=Color("000000"))
        assert entry.container is Container.FOOTER_CENTER

    def test_reset_follows_settings(self):
        custom = Settings(default_font_family="Arial", default_font_size=11.0, default_text_color="333333")
        builder = DocumentBuilder(settings=custom)
        builder.reset_font()
        builder.reset_text_color()
        assert builder.stream[0].instruction.font == Font("Arial", 11.0)
        assert builder.stream[1].instruction.color == Color("333333")

    def test_defaults_property(self, builder, default_font):
        defaults = builder.defaults
        assert defaults["font"] == default_font
        assert defaults["text_color"] == Color("000000")
        assert defaults["image_row_spacing"] == 5.0
        assert defaults["text_line_spacing"] == 1.0


class TestScenarios:
    """End-to-end builder + replay scenarios."""

    def test_font_scenario(self, builder, test_settings, bold_font, default_font):
        builder.add_text("A")
        builder.set_font(bold_font)
        builder.add_text("B")
        builder.reset_font()
        builder.add_text("C")

        stream = builder.finish()
        assert len(stream) == 5

        result = StreamReplayer(test_settings).replay(stream)
        fonts = {r.instruction.text: r.effective_font
                 for r in result.entries if isinstance(r.instruction, SimpleText)}
        assert fonts == {"A": default_font, "B": bold_font, "C": default_font}

    def test_set_font_twice_not_deduplicated(self, builder, test_settings, bold_font):
        builder.set_font(bold_font)
        once = StreamReplayer(test_settings).replay(builder.stream).final_states[Container.CONTENT_LEFT]
        builder.set_font(bold_font)
        twice = StreamReplayer(test_settings).replay(builder.stream).final_states[Container.CONTENT_LEFT]

        assert len(builder.stream) == 2
        assert once == twice

    def test_finish_returns_stream(self, builder):
        builder.add_text("x")
        assert builder.finish() is builder.stream
