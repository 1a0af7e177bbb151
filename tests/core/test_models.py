"""
Unit tests for question paper models and block parsing.
"""

import pytest

from qpaper_pdf.core.models import (
    BlankBlock,
    DiagramBlock,
    FormulaBlock,
    ImageBlock,
    ListBlock,
    PaperHeader,
    Question,
    QuestionPaper,
    SubQuestion,
    TableBlock,
    TextBlock,
    parse_block,
    parse_blocks,
)
from qpaper_pdf.core.models.blocks import display_text


class TestDisplayText:
    """Tests for JSON scalar → display text conversion."""

    def test_display_text_when_whole_float_then_drops_fraction(self):
        assert display_text(5.0) == "5"

    def test_display_text_when_fraction_then_keeps_it(self):
        assert display_text(2.5) == "2.5"

    def test_display_text_when_none_then_empty(self):
        assert display_text(None) == ""

    def test_display_text_when_padded_string_then_stripped(self):
        assert display_text("  ক  ") == "ক"


class TestParseBlock:
    """Tests for typed block construction."""

    def test_parse_block_when_text_then_text_block(self):
        block = parse_block({"type": "text", "content": {"text": "2+2=?"}})
        assert block == TextBlock(text="2+2=?")

    def test_parse_block_when_unknown_type_then_none(self):
        assert parse_block({"type": "video", "content": {"url": "x"}}) is None

    def test_parse_block_when_not_an_object_then_none(self):
        assert parse_block("text") is None

    def test_parse_block_when_text_missing_then_none(self):
        assert parse_block({"type": "text", "content": {}}) is None

    def test_parse_block_when_content_missing_then_formula_skipped(self):
        assert parse_block({"type": "formula"}) is None

    def test_parse_block_when_formula_then_keeps_source_verbatim(self):
        block = parse_block({"type": "formula", "content": {"latex": r"\frac{a}{b}"}})
        assert block == FormulaBlock(latex=r"\frac{a}{b}")

    def test_parse_block_when_image_without_url_then_none(self):
        assert parse_block({"type": "image", "content": {"caption": "x"}}) is None

    def test_parse_block_when_image_sizes_are_strings_then_converted(self):
        block = parse_block({
            "type": "image",
            "content": {"url": "a.png", "width": "100", "height": 50.0, "caption": "Fig 1"},
        })
        assert block == ImageBlock(url="a.png", width=100, height=50, caption="Fig 1")

    def test_parse_block_when_image_size_invalid_then_none(self):
        block = parse_block({"type": "image", "content": {"url": "a.png", "width": "wide"}})
        assert block.width is None

    @pytest.mark.parametrize("raw", ["1e999", "inf", "-Infinity", "nan", float("inf"), 10 ** 400])
    def test_parse_block_when_image_size_not_finite_then_none(self, raw):
        block = parse_block({"type": "image", "content": {"url": "a.png", "width": raw, "height": raw}})
        assert (block.width, block.height) == (None, None)

    @pytest.mark.parametrize("raw", [-100, "-5", 0, -0.5])
    def test_parse_block_when_image_size_not_positive_then_none(self, raw):
        block = parse_block({"type": "image", "content": {"url": "a.png", "width": raw, "height": raw}})
        assert (block.width, block.height) == (None, None)

    def test_parse_block_when_table_then_cells_become_strings(self):
        block = parse_block({
            "type": "table",
            "content": {"headers": ["x", "y"], "data": [[1, 2.0], "bad row", [None, "z"]]},
        })
        assert isinstance(block, TableBlock)
        assert block.headers == ("x", "y")
        assert block.rows == (("1", "2"), ("", "z"))

    def test_table_column_count_when_no_headers_then_uses_first_row(self):
        block = TableBlock(headers=(), rows=(("a", "b", "c"),))
        assert block.column_count == 3
        assert block.has_header_row is False

    def test_table_has_header_row_when_all_headers_blank_then_false(self):
        block = TableBlock(headers=("", ""), rows=(("a", "b"),))
        assert block.has_header_row is False

    def test_parse_block_when_diagram_without_description_then_blank(self):
        assert parse_block({"type": "diagram", "content": {}}) == DiagramBlock(description="")

    def test_parse_block_when_list_then_items_tuple(self):
        block = parse_block({"type": "list", "content": {"items": ["a", "", "b"]}})
        assert block == ListBlock(items=("a", "", "b"))

    @pytest.mark.parametrize("raw, expected", [
        (None, 1),
        (3, 3),
        ("2", 2),
        (0, 1),
        (-4, 1),
        ("1e999", 1),
        (float("inf"), 1),
        (10 ** 400, 1),
    ])
    def test_parse_block_when_blank_then_lines_at_least_one(self, raw, expected):
        content = {} if raw is None else {"lines": raw}
        block = parse_block({"type": "blank", "content": content})
        assert block == BlankBlock(lines=expected)

    def test_parse_blocks_when_mixed_then_keeps_order_and_drops_unknown(self):
        blocks = parse_blocks([
            {"type": "text", "content": {"text": "first"}},
            {"type": "hologram", "content": {}},
            {"type": "blank", "content": {"lines": 2}},
        ])
        assert blocks == (TextBlock("first"), BlankBlock(2))

    def test_parse_blocks_when_not_a_list_then_empty(self):
        assert parse_blocks(None) == ()
        assert parse_blocks({"type": "text"}) == ()


class TestPaperHeader:
    """Tests for header defaults and aliases."""

    def test_from_dict_when_school_name_then_used_as_board_name(self):
        header = PaperHeader.from_dict({"schoolName": "Ideal School"})
        assert header.board_name == "Ideal School"

    def test_title_when_exam_type_known_then_localised(self):
        header = PaperHeader.from_dict({"examType": "half-yearly"})
        assert header.title == "অর্ধ-বার্ষিক পরীক্ষা"

    def test_title_when_exam_type_unknown_then_raw(self):
        assert PaperHeader.from_dict({"examType": "weekly"}).title == "weekly"

    def test_title_when_exam_title_given_then_preferred(self):
        header = PaperHeader.from_dict({"examTitle": "SSC 2026", "examType": "annual"})
        assert header.title == "SSC 2026"

    def test_duration_label_when_only_minutes_then_formatted(self):
        header = PaperHeader.from_dict({"timeMinutes": 90})
        assert header.duration_label == "90 মিনিট"

    def test_from_dict_when_none_then_all_blank(self):
        header = PaperHeader.from_dict(None)
        assert header == PaperHeader()
        assert header.title == ""
        assert header.duration_label == ""


class TestQuestion:
    """Tests for question and sub-question construction."""

    def test_from_dict_when_number_missing_then_uses_position(self):
        question = Question.from_dict({"blocks": []}, position=3)
        assert question.number == "3"

    def test_from_dict_when_marks_numeric_then_display_text(self):
        question = Question.from_dict({"number": 1, "marks": 10.0})
        assert question.marks == "10"

    def test_from_dict_when_sub_questions_then_parsed_in_order(self):
        question = Question.from_dict({
            "number": "২",
            "subQuestions": [
                {"label": "ক", "marks": 2},
                "junk",
                {"label": "খ", "blocks": [{"type": "text", "content": {"text": "t"}}]},
            ],
        })
        assert question.sub_questions == (
            SubQuestion(label="ক", marks="2"),
            SubQuestion(label="খ", blocks=(TextBlock("t"),)),
        )


class TestQuestionPaper:
    """Tests for root document construction."""

    def test_from_dict_when_setup_key_then_header_read(self, minimal_paper):
        paper = QuestionPaper.from_dict(minimal_paper)
        assert paper.header.subject == "Math"
        assert paper.question_count == 1
        assert paper.questions[0].blocks == (TextBlock("2+2=?"),)

    def test_from_dict_when_header_and_setup_then_header_wins(self):
        paper = QuestionPaper.from_dict({
            "header": {"subject": "Physics"},
            "setup": {"subject": "Math"},
            "questions": [],
        })
        assert paper.header.subject == "Physics"

    def test_from_dict_when_block_numbers_overflow_then_paper_still_built(self):
        # Arrange
        data = {
            "setup": {},
            "questions": [{"blocks": [
                {"type": "blank", "content": {"lines": "1e999"}},
                {"type": "image", "content": {"url": "a.png", "width": "1e999"}},
            ]}],
        }

        # Act
        paper = QuestionPaper.from_dict(data)

        # Assert
        assert paper.questions[0].blocks == (BlankBlock(1), ImageBlock(url="a.png"))

    def test_from_dict_when_questions_contain_non_objects_then_skipped(self):
        paper = QuestionPaper.from_dict({"header": {}, "questions": [None, {"number": 7}]})
        assert [q.number for q in paper.questions] == ["7"]

    def test_models_are_immutable(self):
        paper = QuestionPaper.from_dict({"header": {}, "questions": []})
        with pytest.raises(AttributeError):
            paper.questions = ()
