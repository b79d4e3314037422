"""Language Model Service client (OpenAI-compatible chat completions).

``LanguageModelClient.complete_json`` sends one system instruction plus one
or more documents and returns the reply parsed as a JSON object.

Failures are split in two:

* ``ModelTransportError`` -- the provider could not be reached or answered
  with 429/5xx.  These are retried with exponential backoff up to
  ``max_retries`` times, each attempt bounded by ``timeout_seconds``.
* ``ModelResponseError`` -- the provider answered, but the content is not a
  JSON object.  Never retried.

Callers decide what a failure means; both profile extraction and fit scoring
absorb them.
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from collections.abc import Sequence
from typing import Any

import httpx

from hiring_intake.core.config import LanguageModelConfig
from hiring_intake.core.errors import ModelResponseError, ModelTransportError

logger = logging.getLogger(__name__)

_RETRYABLE_STATUS = {408, 429}


def strip_code_fences(content: str) -> str:
    """Remove a surrounding Markdown code block, if the model added one."""
    clean = content.strip()
    if clean.startswith("```"):
        lines = clean.split("\n")
        lines = [line for line in lines if not line.strip().startswith("```")]
        clean = "\n".join(lines)
    return clean.strip()


def parse_json_object(content: str) -> dict[str, Any]:
    """Parse model output into a dict or raise ``ModelResponseError``."""
    try:
        parsed = json.loads(strip_code_fences(content))
    except (json.JSONDecodeError, TypeError) as exc:
        raise ModelResponseError(f"Model output is not valid JSON: {exc}") from exc
    if not isinstance(parsed, dict):
        raise ModelResponseError(
            f"Model output is JSON {type(parsed).__name__}, expected an object"
        )
    return parsed


class LanguageModelClient:
    """Async chat-completions client built from an explicit config."""

    def __init__(
        self,
        config: LanguageModelConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return self.config.is_configured

    def _build_messages(
        self, system_instruction: str, documents: Sequence[str]
    ) -> list[dict[str, str]]:
        return [
            {"role": "system", "content": system_instruction},
            {"role": "user", "content": "\n\n---\n\n".join(documents)},
        ]

    async def _post_once(self, payload: dict[str, Any]) -> str:
        url = f"{self.config.base_url}/chat/completions"
        async with httpx.AsyncClient(
            timeout=self.config.timeout_seconds, transport=self._transport
        ) as client:
            response = await client.post(
                url,
                headers={
                    "Authorization": f"Bearer {self.config.api_key}",
                    "Content-Type": "application/json",
                },
                json=payload,
            )
            response.raise_for_status()
            try:
                data = response.json()
                return data["choices"][0]["message"]["content"] or ""
            except (json.JSONDecodeError, KeyError, IndexError, TypeError) as exc:
                raise ModelResponseError(
                    f"Unexpected chat completion envelope: {type(exc).__name__}: {exc}"
                ) from exc

    async def _attempt(self, payload: dict[str, Any]) -> str:
        """One bounded call, with transport failures classified."""
        try:
            return await asyncio.wait_for(
                self._post_once(payload), timeout=self.config.timeout_seconds
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
            raise ModelTransportError(
                f"Model call timed out after {self.config.timeout_seconds}s",
                retryable=True,
            ) from exc
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise ModelTransportError(
                f"Model provider returned HTTP {status}",
                retryable=status >= 500 or status in _RETRYABLE_STATUS,
            ) from exc
        except httpx.TransportError as exc:
            raise ModelTransportError(
                f"Model provider unreachable: {type(exc).__name__}: {exc}",
                retryable=True,
            ) from exc

    async def complete(
        self,
        system_instruction: str,
        documents: Sequence[str],
        *,
        temperature: float = 0.2,
        max_tokens: int = 1500,
        purpose: str = "completion",
    ) -> str:
        """Return the raw reply content of one chat completion."""
        if not self.is_configured:
            raise ModelTransportError("Language model API key is not configured")

        payload = {
            "model": self.config.model,
            "messages": self._build_messages(system_instruction, documents),
            "temperature": temperature,
            "max_tokens": max_tokens,
        }

        attempts = self.config.max_retries + 1
        start = time.time()
        for attempt in range(1, attempts + 1):
            try:
                content = await self._attempt(payload)
            except ModelTransportError as exc:
                if not exc.retryable or attempt >= attempts:
                    logger.error(
                        "llm_call_failed",
                        extra={
                            "purpose": purpose,
                            "model": self.config.model,
                            "attempts": attempt,
                            "error_message": str(exc),
                        },
                    )
                    raise
                delay = self.config.retry_base_delay_seconds * (2 ** (attempt - 1))
                logger.warning(
                    "llm_call_retry",
                    extra={
                        "purpose": purpose,
                        "attempt": attempt,
                        "delay_seconds": delay,
                        "error_message": str(exc),
                    },
                )
                await asyncio.sleep(delay)
                continue

            logger.info(
                "llm_call_complete",
                extra={
                    "purpose": purpose,
                    "model": self.config.model,
                    "attempts": attempt,
                    "duration_ms": int((time.time() - start) * 1000),
                },
            )
            return content

        # unreachable: the loop returns or raises
        raise ModelTransportError("Model call exhausted retries")

    async def complete_json(
        self,
        system_instruction: str,
        documents: Sequence[str],
        **kwargs: Any,
    ) -> dict[str, Any]:
        """Like ``complete`` but parse the reply as a JSON object."""
        content = await self.complete(system_instruction, documents, **kwargs)
        return parse_json_object(content)
