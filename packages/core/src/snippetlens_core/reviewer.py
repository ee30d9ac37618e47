"""Core snippet review orchestration: detect the language, then review."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

from snippetlens_core.config import api_key_for, load_guidelines
from snippetlens_core.errors import EmptyCodeError
from snippetlens_core.providers.anthropic import AnthropicReviewer
from snippetlens_core.providers.base import BaseReviewer
from snippetlens_core.providers.gemini import GeminiReviewer
from snippetlens_core.providers.openai import OpenAIReviewer
from snippetlens_core.sections import Section, segment_review

logger = logging.getLogger(__name__)

_PROVIDERS = {
    "gemini": GeminiReviewer,
    "anthropic": AnthropicReviewer,
    "openai": OpenAIReviewer,
}


@dataclass
class ReviewResult:
    """What one detect-then-review cycle produced.

    Holds the raw review text; sections are derived on demand and never stored.
    """

    review: str
    detected_language: str
    model: str
    reviewed_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    def sections(self) -> list[Section]:
        return segment_review(self.review)

    def to_wire(self) -> dict:
        return {"review": self.review, "detectedLanguage": self.detected_language}


def _get_reviewer(config: dict) -> BaseReviewer:
    model = config["model"]
    provider = _PROVIDERS.get(model)
    if provider is None:
        raise ValueError(f"Unknown model provider: {model!r}. Choose one of: {', '.join(_PROVIDERS)}.")
    return provider(api_key=api_key_for(config), detect_chars=config.get("detect_chars", 1000))


def run_review(code: str, config: dict, reviewer: BaseReviewer | None = None) -> ReviewResult:
    """Run the two model calls for one snippet.

    Raises EmptyCodeError before any model call when the snippet is blank,
    and ReviewFailedError when the provider keeps failing.
    """
    if not code or not code.strip():
        raise EmptyCodeError()

    max_chars = config.get("max_code_chars")
    if max_chars and len(code) > max_chars:
        logger.warning("Snippet is %d chars; only the first %d are reviewed.", len(code), max_chars)
        code = code[:max_chars]

    if reviewer is None:
        reviewer = _get_reviewer(config)
    guidelines = load_guidelines(config)

    language = reviewer.detect_language(code)
    logger.info("Detected language: %s", language)

    review = reviewer.review(code, language, guidelines)
    logger.debug("Review received (%d chars)", len(review))

    return ReviewResult(review=review, detected_language=language, model=config["model"])
