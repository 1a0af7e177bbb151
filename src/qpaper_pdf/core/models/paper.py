"""
Module: paper

Purpose:
    Provides the QuestionPaper tree - header metadata plus ordered questions
    and sub-questions. Immutable, built once from JSON by `from_dict()` with
    every optional field defaulted to blank.

Key Classes:
    - PaperHeader: Board/school, exam, class, subject, marks, duration
    - SubQuestion: Labelled part ("ক", "খ", ...) of a question
    - Question: Numbered question with blocks and sub-questions
    - QuestionPaper: Root document

Dependencies:
    - dataclasses (std)
    - .blocks: ContentBlock parsing

Used By:
    - core.validation: Root document checks
    - renderer.layout / renderer.assembler: Rendering
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from .blocks import ContentBlock, display_text, parse_blocks


# Exam type slugs used by the front-end form, with their printed labels
EXAM_TYPE_LABELS: dict[str, str] = {
    "class-test": "শ্রেণি পরীক্ষা",
    "half-yearly": "অর্ধ-বার্ষিক পরীক্ষা",
    "annual": "বার্ষিক পরীক্ষা",
    "model-test": "মডেল টেস্ট",
}

MINUTES_LABEL = "মিনিট"


def _as_dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def header_section(data: dict) -> Optional[Any]:
    """Raw header section of a paper document (``header`` or ``setup``)."""
    section = data.get("header")
    return section if section is not None else data.get("setup")


def _first(data: dict, *keys: str) -> str:
    """Display text of the first key holding a non-blank value."""
    for key in keys:
        text = display_text(data.get(key))
        if text:
            return text
    return ""


@dataclass(frozen=True)
class PaperHeader:
    """
    Header metadata printed above the questions.

    Attributes:
        board_name: Board or school name (``boardName`` / ``schoolName``)
        exam_title: Free-form exam title (``examTitle``)
        exam_type: Exam type slug like "half-yearly" (``examType``)
        class_name: Class/grade (``class``)
        subject: Subject name
        total_marks: Full marks label (``totalMarks``)
        duration: Duration label
        time_minutes: Duration in minutes, used when ``duration`` is blank
        logo: Local path to a board logo image
    """

    board_name: str = ""
    exam_title: str = ""
    exam_type: str = ""
    class_name: str = ""
    subject: str = ""
    total_marks: str = ""
    duration: str = ""
    time_minutes: str = ""
    logo: str = ""

    @property
    def title(self) -> str:
        """Exam title, or the localised exam-type label when no title is given."""
        if self.exam_title:
            return self.exam_title
        return EXAM_TYPE_LABELS.get(self.exam_type, self.exam_type)

    @property
    def duration_label(self) -> str:
        if self.duration:
            return self.duration
        if self.time_minutes:
            return f"{self.time_minutes} {MINUTES_LABEL}"
        return ""

    @classmethod
    def from_dict(cls, data: Any) -> PaperHeader:
        data = _as_dict(data)
        return cls(
            board_name=_first(data, "boardName", "schoolName"),
            exam_title=_first(data, "examTitle"),
            exam_type=_first(data, "examType"),
            class_name=_first(data, "class", "className"),
            subject=_first(data, "subject"),
            total_marks=_first(data, "totalMarks"),
            duration=_first(data, "duration"),
            time_minutes=_first(data, "timeMinutes"),
            logo=_first(data, "logo"),
        )


@dataclass(frozen=True)
class SubQuestion:
    label: str
    blocks: tuple[ContentBlock, ...] = ()
    marks: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> SubQuestion:
        data = _as_dict(data)
        return cls(
            label=display_text(data.get("label")),
            blocks=parse_blocks(data.get("blocks")),
            marks=display_text(data.get("marks")),
        )


@dataclass(frozen=True)
class Question:
    """
    One numbered question.

    Attributes:
        number: Display label, possibly pre-formatted ("১", "2", "3(a)")
        marks: Marks label; empty when the question carries none
        blocks: Content blocks in rendering order
        sub_questions: Indented parts in rendering order
    """

    number: str
    marks: str = ""
    blocks: tuple[ContentBlock, ...] = ()
    sub_questions: tuple[SubQuestion, ...] = ()

    @classmethod
    def from_dict(cls, data: Any, position: int = 1) -> Question:
        """
        Build a question from JSON.

        Args:
            data: Question object
            position: 1-based position, used when ``number`` is absent
        """
        data = _as_dict(data)
        subs = data.get("subQuestions")
        return cls(
            number=display_text(data.get("number")) or str(position),
            marks=display_text(data.get("marks")),
            blocks=parse_blocks(data.get("blocks")),
            sub_questions=tuple(
                SubQuestion.from_dict(s) for s in subs if isinstance(s, dict)
            ) if isinstance(subs, list) else (),
        )


@dataclass(frozen=True)
class QuestionPaper:
    """
    Root document (immutable).

    Example:
        >>> paper = QuestionPaper.from_dict({
        ...     "setup": {"subject": "Math"},
        ...     "questions": [{"number": 1, "blocks": []}],
        ... })
        >>> paper.header.subject
        'Math'
    """

    header: PaperHeader = field(default_factory=PaperHeader)
    questions: tuple[Question, ...] = ()

    @property
    def question_count(self) -> int:
        return len(self.questions)

    @classmethod
    def from_dict(cls, data: Any) -> QuestionPaper:
        """
        Build the typed tree from JSON.

        Accepts either a ``header`` or a ``setup`` section.
        Entries in ``questions`` that are not objects are skipped.
        """
        data = _as_dict(data)
        header = header_section(data)
        raw_questions = data.get("questions")
        questions: list[Question] = []
        if isinstance(raw_questions, list):
            for index, item in enumerate(raw_questions, start=1):
                if isinstance(item, dict):
                    questions.append(Question.from_dict(item, position=index))
        return cls(header=PaperHeader.from_dict(header), questions=tuple(questions))
