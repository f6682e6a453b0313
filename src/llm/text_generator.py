"""
Generative text client shared by every AI feature of the dashboard.

Supported LLM providers (auto-detected by API key):
  1. Gemini Flash  — GEMINI_API_KEY   (free tier available, cheapest)
  2. GPT-4o mini   — OPENAI_API_KEY
  3. Claude Haiku  — ANTHROPIC_API_KEY
  4. No LLM        — every AI feature degrades to its fallback value

The client is built once by the app and handed to each feature;
nothing here runs at import time.
"""

from typing import Optional

PROVIDERS = ('gemini', 'openai', 'anthropic')

DEFAULT_MODELS = {
    'gemini': 'gemini-2.0-flash',
    'openai': 'gpt-4o-mini',
    'anthropic': 'claude-haiku-4-5-20251001',
}

MAX_OUTPUT_TOKENS = 1024


def detect_provider(settings) -> str:
    """Return which LLM provider to use based on available API keys."""
    if settings.llm_provider:
        return settings.llm_provider
    if settings.gemini_api_key:
        return 'gemini'
    if settings.openai_api_key:
        return 'openai'
    if settings.anthropic_api_key:
        return 'anthropic'
    return 'none'


class TextGenerator:
    """
    Single-shot prompt → text calls against the configured provider.

    `generate()` raises whatever the SDK raises; callers decide how to degrade.
    """

    def __init__(self, provider: str = 'none', api_key: str = '', model: Optional[str] = None):
        if provider != 'none' and provider not in PROVIDERS:
            raise ValueError(
                f"Unknown LLM provider '{provider}'.\n"
                f"Use one of: {', '.join(PROVIDERS)}"
            )
        self.provider = provider
        self.api_key = api_key
        self.model = model or DEFAULT_MODELS.get(provider, '')

    @classmethod
    def from_settings(cls, settings) -> 'TextGenerator':
        provider = detect_provider(settings)
        keys = {
            'gemini': settings.gemini_api_key,
            'openai': settings.openai_api_key,
            'anthropic': settings.anthropic_api_key,
        }
        generator = cls(provider, keys.get(provider, ''), settings.llm_model)
        print(f"  LLM provider: {generator.provider}")
        return generator

    @property
    def configured(self) -> bool:
        return self.provider != 'none' and bool(self.api_key)

    def generate(self, prompt: str, json_output: bool = True) -> str:
        if not self.configured:
            raise RuntimeError("No LLM API key configured")

        if self.provider == 'gemini':
            return self._generate_with_gemini(prompt, json_output)
        if self.provider == 'openai':
            return self._generate_with_openai(prompt)
        return self._generate_with_anthropic(prompt)

    # ------------------------------------------------------------------
    # Provider implementations
    # ------------------------------------------------------------------

    def _generate_with_gemini(self, prompt: str, json_output: bool) -> str:
        from google import genai
        from google.genai import types

        client = genai.Client(api_key=self.api_key)
        config = types.GenerateContentConfig(
            response_mime_type='application/json' if json_output else 'text/plain',
        )
        response = client.models.generate_content(
            model=self.model,
            contents=prompt,
            config=config,
        )
        return response.text or ''

    def _generate_with_openai(self, prompt: str) -> str:
        from openai import OpenAI

        client = OpenAI(api_key=self.api_key)
        response = client.chat.completions.create(
            model=self.model,
            max_tokens=MAX_OUTPUT_TOKENS,
            messages=[{"role": "user", "content": prompt}],
        )
        return response.choices[0].message.content or ''

    def _generate_with_anthropic(self, prompt: str) -> str:
        from anthropic import Anthropic

        client = Anthropic(api_key=self.api_key)
        response = client.messages.create(
            model=self.model,
            max_tokens=MAX_OUTPUT_TOKENS,
            messages=[{"role": "user", "content": prompt}],
        )
        return response.content[0].text
