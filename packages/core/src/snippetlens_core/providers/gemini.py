from __future__ import annotations

from snippetlens_core.providers.base import BaseReviewer


class GeminiReviewer(BaseReviewer):
    MODEL = "gemini-2.0-flash"
    TEMPERATURE = 0.3

    def __init__(self, api_key: str, **kwargs):
        super().__init__(**kwargs)
        try:
            from google import genai
        except ImportError:
            raise ImportError(
                "The 'google-genai' package is required for this provider. "
                "Install it with: pip install google-genai"
            )
        self.client = genai.Client(api_key=api_key)

    def _call_api(self, prompt: str) -> str:
        from google.genai import types

        response = self.client.models.generate_content(
            model=self.MODEL,
            contents=prompt,
            config=types.GenerateContentConfig(
                temperature=self.TEMPERATURE,
                max_output_tokens=self.MAX_TOKENS,
            ),
        )
        return response.text
