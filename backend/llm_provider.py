"""
Wolfi Practice - Completion Providers
=====================================
One interface for every hosted completion service:

    generate(system_prompt, user_prompt, image=None, temperature=0.2, json_mode=False)

Providers:
  1. OpenAI (gpt-4o-mini)      — default for exercise generation
  2. Gemini 2.0 Flash          — default for handwritten answer grading
  3. Claude (Anthropic)        — alternative for both

Set in .env:
  OPENAI_API_KEY=...
  GEMINI_API_KEY=...
  ANTHROPIC_API_KEY=...
  EXERCISE_LLM_PROVIDER=openai     (openai | gemini | claude)
  EVALUATION_LLM_PROVIDER=gemini   (openai | gemini | claude)
"""

import os
import base64
import logging
import time
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImagePayload:
    mime_type: str
    data: bytes

    @property
    def base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    @property
    def data_uri(self) -> str:
        return f"data:{self.mime_type};base64,{self.base64}"


@dataclass
class LLMResponse:
    text: str
    provider: str
    model: str
    prompt_tokens: int = 0
    completion_tokens: int = 0
    latency_ms: float = 0.0


def _has_key(api_key: str, placeholder: str) -> bool:
    return bool(api_key) and api_key.strip() not in ("", placeholder)


# ─────────────────────────────────────────────────────────────────────────────
# OpenAI Provider
# ─────────────────────────────────────────────────────────────────────────────

class OpenAIProvider:
    name = "openai"
    DEFAULT_MODEL = "gpt-4o-mini"

    def __init__(self, api_key: str, model: Optional[str] = None):
        self.api_key = api_key
        self.model = model or os.getenv("OPENAI_MODEL", self.DEFAULT_MODEL)
        self._client = None

    def _get_client(self):
        if self._client is None:
            from openai import OpenAI
            self._client = OpenAI(api_key=self.api_key)
            logger.info("OpenAI client ready: %s", self.model)
        return self._client

    def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        image: Optional[ImagePayload] = None,
        temperature: float = 0.2,
        json_mode: bool = False,
    ) -> LLMResponse:
        start = time.time()
        client = self._get_client()

        if image is not None:
            user_content = [
                {"type": "text", "text": user_prompt},
                {"type": "image_url", "image_url": {"url": image.data_uri}},
            ]
        else:
            user_content = user_prompt

        kwargs = {}
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        resp = client.chat.completions.create(
            model=self.model,
            temperature=temperature,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_content},
            ],
            **kwargs,
        )
        text = resp.choices[0].message.content or ""
        latency = (time.time() - start) * 1000
        return LLMResponse(
            text=text,
            provider=self.name,
            model=self.model,
            prompt_tokens=resp.usage.prompt_tokens if resp.usage else 0,
            completion_tokens=resp.usage.completion_tokens if resp.usage else 0,
            latency_ms=round(latency, 2),
        )

    def is_available(self) -> bool:
        return _has_key(self.api_key, "your_openai_api_key_here")


# ─────────────────────────────────────────────────────────────────────────────
# Gemini Provider
# ─────────────────────────────────────────────────────────────────────────────

class GeminiProvider:
    name = "gemini"
    DEFAULT_MODEL = "gemini-2.0-flash"

    def __init__(self, api_key: str, model: Optional[str] = None):
        self.api_key = api_key
        self.model = model or os.getenv("GEMINI_MODEL", self.DEFAULT_MODEL)
        self._configured = False

    def _get_model(self, system_prompt: str):
        import google.generativeai as genai
        if not self._configured:
            genai.configure(api_key=self.api_key)
            self._configured = True
            logger.info("Gemini client ready: %s", self.model)
        # system_instruction is bound to the model object, so one per call
        return genai.GenerativeModel(model_name=self.model, system_instruction=system_prompt)

    def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        image: Optional[ImagePayload] = None,
        temperature: float = 0.2,
        json_mode: bool = False,
    ) -> LLMResponse:
        start = time.time()
        model = self._get_model(system_prompt)

        parts = [user_prompt]
        if image is not None:
            parts.append({"mime_type": image.mime_type, "data": image.data})

        generation_config = {"temperature": temperature}
        if json_mode:
            generation_config["response_mime_type"] = "application/json"

        response = model.generate_content(parts, generation_config=generation_config)
        text = response.text if hasattr(response, "text") else str(response)
        latency = (time.time() - start) * 1000
        return LLMResponse(text=text or "", provider=self.name, model=self.model, latency_ms=round(latency, 2))

    def is_available(self) -> bool:
        return _has_key(self.api_key, "your_gemini_api_key_here")


# ─────────────────────────────────────────────────────────────────────────────
# Claude Provider (Anthropic)
# ─────────────────────────────────────────────────────────────────────────────

class ClaudeProvider:
    name = "claude"
    DEFAULT_MODEL = "claude-haiku-4-5-20251001"

    def __init__(self, api_key: str, model: Optional[str] = None):
        self.api_key = api_key
        self.model = model or os.getenv("CLAUDE_MODEL", self.DEFAULT_MODEL)
        self._client = None

    def _get_client(self):
        if self._client is None:
            import anthropic
            self._client = anthropic.Anthropic(api_key=self.api_key)
            logger.info("Claude client ready: %s", self.model)
        return self._client

    def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        image: Optional[ImagePayload] = None,
        temperature: float = 0.2,
        json_mode: bool = False,
    ) -> LLMResponse:
        start = time.time()
        client = self._get_client()

        content = []
        if image is not None:
            content.append({
                "type": "image",
                "source": {"type": "base64", "media_type": image.mime_type, "data": image.base64},
            })
        content.append({"type": "text", "text": user_prompt})

        message = client.messages.create(
            model=self.model,
            max_tokens=1024,
            temperature=temperature,
            system=system_prompt,
            messages=[{"role": "user", "content": content}],
        )

        text = "".join(block.text for block in message.content if getattr(block, "type", "") == "text")
        latency = (time.time() - start) * 1000
        return LLMResponse(
            text=text,
            provider=self.name,
            model=self.model,
            prompt_tokens=message.usage.input_tokens,
            completion_tokens=message.usage.output_tokens,
            latency_ms=round(latency, 2),
        )

    def is_available(self) -> bool:
        return _has_key(self.api_key, "your_anthropic_api_key_here")


# ─────────────────────────────────────────────────────────────────────────────
# Provider selection
# ─────────────────────────────────────────────────────────────────────────────

PROVIDERS = {
    "openai": (OpenAIProvider, "OPENAI_API_KEY"),
    "gemini": (GeminiProvider, "GEMINI_API_KEY"),
    "claude": (ClaudeProvider, "ANTHROPIC_API_KEY"),
}


def get_provider(name: str):
    """Build the named provider with its credential taken from the environment."""
    key = (name or "").strip().lower()
    if key not in PROVIDERS:
        raise ValueError(f"Unknown LLM provider '{name}'. Use one of: {', '.join(sorted(PROVIDERS))}")
    provider_cls, env_var = PROVIDERS[key]
    return provider_cls(os.getenv(env_var, ""))


def provider_from_env(env_var: str, default: str):
    """Read a provider name from ``env_var`` (falling back to ``default``) and build it."""
    try:
        provider = get_provider(os.getenv(env_var, default))
    except ValueError as e:
        logger.error("%s; using %s", e, default)
        provider = get_provider(default)
    if not provider.is_available():
        logger.warning("%s=%s has no credential configured; requests will use fallbacks.",
                       env_var, provider.name)
    return provider
