"""
OpenAI chat LLM client.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from openai import OpenAI

from docbot.config import settings

DEFAULT_LLM_MODEL = settings.llm_model_name
DEFAULT_TEMPERATURE = 0.0


class LLMClient:
    def __init__(
        self,
        model: str = DEFAULT_LLM_MODEL,
        temperature: float = DEFAULT_TEMPERATURE,
        max_tokens: int | None = None,
        client: OpenAI | None = None,
    ) -> None:
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        api_key = settings.openai_api_key.get_secret_value() if settings.openai_api_key else None
        self.client = client or OpenAI(api_key=api_key)

    def chat(
        self,
        messages: List[Dict[str, Any]],
        system_prompt: str | None = None,
        response_format: Optional[Dict[str, Any]] = None,
    ) -> str:
        if system_prompt:
            messages = [{"role": "system", "content": system_prompt}, *messages]

        kwargs: Dict[str, Any] = {
            "model": self.model,
            "temperature": self.temperature,
            "messages": messages,
        }
        if self.max_tokens:
            kwargs["max_tokens"] = self.max_tokens
        if response_format:
            kwargs["response_format"] = response_format

        response = self.client.chat.completions.create(**kwargs)
        return response.choices[0].message.content or ""


__all__ = ["LLMClient", "DEFAULT_LLM_MODEL", "DEFAULT_TEMPERATURE"]
