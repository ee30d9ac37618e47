"""Tests for the detect-then-review pipeline."""

from unittest.mock import patch

import pytest

from snippetlens_core.errors import EmptyCodeError, ReviewFailedError
from snippetlens_core.providers.anthropic import AnthropicReviewer
from snippetlens_core.providers.base import BaseReviewer
from snippetlens_core.providers.gemini import GeminiReviewer
from snippetlens_core.reviewer import ReviewResult, _get_reviewer, run_review
from snippetlens_core.sections import SectionTitle


def _config(**overrides):
    config = {
        "model": "gemini",
        "detect_chars": 1000,
        "max_code_chars": 50000,
        "guidelines": None,
        "gemini_api_key": "gem",
        "anthropic_api_key": "ant",
        "openai_api_key": None,
    }
    config.update(overrides)
    return config


class StubReviewer(BaseReviewer):
    def __init__(self, language="python", review="## Bugs: none\nLooks fine."):
        super().__init__()
        self.language = language
        self.review_text = review
        self.calls = []

    def detect_language(self, code):
        self.calls.append(("detect", code))
        return self.language

    def review(self, code, language, guidelines):
        self.calls.append(("review", code, language))
        return self.review_text

    def _call_api(self, prompt):
        raise AssertionError("not used")


class TestRunReview:
    def test_detects_then_reviews(self):
        reviewer = StubReviewer()
        result = run_review("print('hi')", _config(), reviewer=reviewer)
        assert [c[0] for c in reviewer.calls] == ["detect", "review"]
        assert reviewer.calls[1][2] == "python"
        assert result.review == "## Bugs: none\nLooks fine."
        assert result.detected_language == "python"
        assert result.model == "gemini"

    @pytest.mark.parametrize("code", ["", "   ", "\n\t\n", None])
    def test_blank_code_rejected_before_any_model_call(self, code):
        reviewer = StubReviewer()
        with pytest.raises(EmptyCodeError):
            run_review(code, _config(), reviewer=reviewer)
        assert reviewer.calls == []

    def test_oversized_code_truncated(self):
        reviewer = StubReviewer()
        run_review("x" * 20, _config(max_code_chars=5), reviewer=reviewer)
        assert reviewer.calls[0][1] == "xxxxx"

    def test_provider_failure_propagates(self):
        class _Failing(StubReviewer):
            def review(self, code, language, guidelines):
                raise ReviewFailedError()

        with pytest.raises(ReviewFailedError):
            run_review("x = 1", _config(), reviewer=_Failing())

    def test_builds_reviewer_from_config(self):
        with patch("snippetlens_core.reviewer._get_reviewer", return_value=StubReviewer()) as mock_get:
            run_review("x = 1", _config())
        mock_get.assert_called_once()


class TestReviewResult:
    def test_wire_shape(self):
        result = ReviewResult(review="text", detected_language="go", model="gemini")
        assert result.to_wire() == {"review": "text", "detectedLanguage": "go"}

    def test_sections_derived_from_review(self):
        result = ReviewResult(review="intro\n# Security: ok", detected_language="go", model="gemini")
        assert [s.title for s in result.sections()] == [SectionTitle.OVERVIEW, SectionTitle.SECURITY]

    def test_reviewed_at_is_set(self):
        result = ReviewResult(review="", detected_language="go", model="gemini")
        assert result.reviewed_at.endswith("+00:00")


class TestGetReviewer:
    def test_unknown_provider_raises(self):
        with pytest.raises(ValueError, match="Unknown model provider"):
            _get_reviewer(_config(model="llama"))

    def test_gemini_provider(self):
        with patch.object(GeminiReviewer, "__init__", return_value=None) as mock_init:
            reviewer = _get_reviewer(_config(detect_chars=200))
        assert isinstance(reviewer, GeminiReviewer)
        mock_init.assert_called_once_with(api_key="gem", detect_chars=200)

    def test_anthropic_provider(self):
        with patch.object(AnthropicReviewer, "__init__", return_value=None):
            assert isinstance(_get_reviewer(_config(model="anthropic")), AnthropicReviewer)
