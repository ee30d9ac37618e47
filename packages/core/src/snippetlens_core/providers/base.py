"""Base reviewer implementing the Template Method pattern.

All providers share the same two-step algorithm:
    detect_language() → _build_detection_prompt() → _call_with_retry() → _call_api()
    review()          → _build_review_prompt()    → _call_with_retry() → _call_api()
                                                                          ↑
                                                   only this differs per provider

Subclasses implement two things only:
  - __init__: validate and store the SDK client
  - _call_api: make one raw API call and return the text response

Prompt construction and retry logic live here so every provider behaves the
same way.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod

from snippetlens_core.errors import ReviewFailedError

logger = logging.getLogger(__name__)

_MAX_RETRIES = 3
_MAX_TOKENS = 4096
_DETECT_CHARS = 1000

UNKNOWN_LANGUAGE = "unknown"


class BaseReviewer(ABC):
    MAX_RETRIES: int = _MAX_RETRIES
    MAX_TOKENS: int = _MAX_TOKENS

    def __init__(self, detect_chars: int = _DETECT_CHARS):
        self.detect_chars = detect_chars

    # ------------------------------------------------------------------ #
    # Public interface                                                     #
    # ------------------------------------------------------------------ #

    def detect_language(self, code: str) -> str:
        """Ask the model which language the snippet is written in.

        Only the head of the snippet is sent; the reply is normalised to a
        lower-case name, with ``"unknown"`` when the model cannot tell.
        """
        raw = self._call_with_retry(self._build_detection_prompt(code))
        language = raw.strip().lower()
        return language or UNKNOWN_LANGUAGE

    def review(self, code: str, language: str, guidelines: str) -> str:
        """Return the model's free-text review of the snippet."""
        return self._call_with_retry(self._build_review_prompt(code, language, guidelines))

    # ------------------------------------------------------------------ #
    # Abstract — implement in each provider                               #
    # ------------------------------------------------------------------ #

    @abstractmethod
    def _call_api(self, prompt: str) -> str:
        """Make a single API call and return the raw text response.

        It should raise on failure — _call_with_retry handles retries and logging.
        """

    # ------------------------------------------------------------------ #
    # Shared implementations                                               #
    # ------------------------------------------------------------------ #

    def _call_with_retry(self, prompt: str) -> str:
        """Retry _call_api up to MAX_RETRIES times with exponential backoff.

        Raises ReviewFailedError once every attempt has failed.
        """
        for attempt in range(self.MAX_RETRIES):
            try:
                text = self._call_api(prompt)
                if text is None:
                    raise ValueError("empty response from model")
                return text
            except Exception as e:
                if attempt == self.MAX_RETRIES - 1:
                    logger.error(
                        "%s API failed after %d attempts: %s",
                        self.__class__.__name__,
                        self.MAX_RETRIES,
                        e,
                    )
                    raise ReviewFailedError() from e
                delay = 2**attempt
                logger.warning(
                    "%s API error (attempt %d/%d): %s. Retrying in %ds...",
                    self.__class__.__name__,
                    attempt + 1,
                    self.MAX_RETRIES,
                    e,
                    delay,
                )
                time.sleep(delay)
        raise ReviewFailedError()

    def _build_detection_prompt(self, code: str) -> str:
        return f"""Analyze the following code snippet and identify the programming language.
Only respond with the name of the language in lowercase (e.g., javascript, python, java, etc.).
If uncertain, respond with "{UNKNOWN_LANGUAGE}".

Code:
```
{code[: self.detect_chars]}
```"""

    def _build_review_prompt(self, code: str, language: str, guidelines: str) -> str:
        """Build the review prompt around the detected language and checklist.

        The section headings the model is asked for line up with the trigger
        keywords the segmenter looks for, which is what makes the
        collapsible sections work.
        """
        known = language and language != UNKNOWN_LANGUAGE
        specialty = language if known else "programming"
        fence_tag = language if known else ""
        return f"""You are an expert code reviewer specializing in {specialty}.
Review the following code for:
{guidelines.strip()}

Format your review with clear headings and include code examples where appropriate.
If you're suggesting changes, show both the original code and your improved version.
Make review as concise as possible while still being thorough.

Here's the code to review:

```{fence_tag}
{code}
```"""
