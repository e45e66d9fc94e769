from __future__ import annotations

import logging

import httpx

from combiner.infrastructure.resilient_http import CircuitOpenError, post_json_with_retry


logger = logging.getLogger(__name__)


class GenerativeServiceError(RuntimeError):
    pass


class GenerativeTextClient:
    """Chat-completions client for an OpenAI-compatible endpoint (Groq by default)."""

    BASE_URL = "https://api.groq.com/openai/v1"
    WORD_MODEL = "llama-3.3-70b-versatile"
    LOOKUP_MODEL = "llama-3.1-8b-instant"

    def __init__(
        self,
        api_key: str,
        base_url: str = BASE_URL,
        word_model: str = WORD_MODEL,
        lookup_model: str = LOOKUP_MODEL,
        timeout: float = 8.0,
        retries: int = 0,
        backoff_seconds: float = 0.2,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.word_model = word_model
        self.lookup_model = lookup_model
        self._retries = retries
        self._backoff_seconds = backoff_seconds
        self._headers = {
            "Authorization": f"Bearer {api_key}",
            "Accept": "application/json",
        }
        self.client = http_client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def complete(
        self,
        *,
        system: str,
        prompt: str,
        temperature: float,
        max_tokens: int | None = None,
        model: str | None = None,
    ) -> str:
        payload = {
            "model": model or self.word_model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
            "temperature": float(temperature),
            "top_p": 1,
            "stream": False,
        }
        if max_tokens is not None:
            payload["max_tokens"] = int(max_tokens)

        try:
            body = await post_json_with_retry(
                self.client,
                "/chat/completions",
                payload=payload,
                headers=self._headers,
                retries=self._retries,
                backoff_seconds=self._backoff_seconds,
            )
        except (httpx.HTTPError, CircuitOpenError, ValueError) as exc:
            raise GenerativeServiceError(f"Chat completion request failed: {exc}") from exc

        choices = body.get("choices")
        if not isinstance(choices, list) or not choices:
            raise GenerativeServiceError("Chat completion returned no choices")
        message = choices[0].get("message") if isinstance(choices[0], dict) else None
        content = message.get("content") if isinstance(message, dict) else None
        if not isinstance(content, str) or not content.strip():
            raise GenerativeServiceError("Chat completion returned empty content")
        logger.debug("Chat completion received", extra={"model": payload["model"], "chars": len(content)})
        return content.strip()

    async def close(self) -> None:
        await self.client.aclose()
