"""
Core Models Package

Immutable, validated data models for question papers.

All models in this package are frozen dataclasses built once from JSON.
Optional fields are defaulted at construction so the renderer can assume
well-typed input:

| JSON | Model | Notes |
|------|-------|-------|
| root object | `QuestionPaper` | `header` or `setup` key |
| `header` / `setup` | `PaperHeader` | blank strings for absent fields |
| `questions[]` | `Question` | number defaults to position |
| `subQuestions[]` | `SubQuestion` | |
| `blocks[]` | `ContentBlock` | unknown types dropped |
"""

from .blocks import (
    BLOCK_TYPES,
    BlankBlock,
    ContentBlock,
    DiagramBlock,
    FormulaBlock,
    ImageBlock,
    ListBlock,
    TableBlock,
    TextBlock,
    parse_block,
    parse_blocks,
)
from .paper import EXAM_TYPE_LABELS, PaperHeader, Question, QuestionPaper, SubQuestion

__all__ = [
    "BLOCK_TYPES",
    "BlankBlock",
    "ContentBlock",
    "DiagramBlock",
    "FormulaBlock",
    "ImageBlock",
    "ListBlock",
    "TableBlock",
    "TextBlock",
    "parse_block",
    "parse_blocks",
    "EXAM_TYPE_LABELS",
    "PaperHeader",
    "Question",
    "QuestionPaper",
    "SubQuestion",
]
