"""
Unit tests for root document checks.
"""

import pytest

from qpaper_pdf.core.validation import InvalidPaperError, validate_paper


class TestValidatePaper:

    def test_validate_when_setup_and_questions_then_passes(self, minimal_paper):
        validate_paper(minimal_paper)

    def test_validate_when_header_key_then_passes(self):
        validate_paper({"header": {}, "questions": []})

    def test_validate_when_questions_missing_then_raises(self):
        with pytest.raises(InvalidPaperError) as exc_info:
            validate_paper({"setup": {"subject": "Math"}})
        assert exc_info.value.missing == ["questions"]

    def test_validate_when_header_missing_then_raises(self):
        with pytest.raises(InvalidPaperError) as exc_info:
            validate_paper({"questions": []})
        assert exc_info.value.missing == ["header"]

    def test_validate_when_not_an_object_then_raises(self):
        with pytest.raises(InvalidPaperError, match="JSON object"):
            validate_paper([1, 2, 3])

    def test_validate_when_questions_not_a_list_then_raises(self):
        with pytest.raises(InvalidPaperError):
            validate_paper({"header": {}, "questions": "none"})
