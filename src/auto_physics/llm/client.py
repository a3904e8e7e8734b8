# src/auto_physics/llm/client.py

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Iterable, List, Optional

import httpx
import openai
from openai import OpenAI

from ..core.ports import ChatMessage

logger = logging.getLogger(__name__)

BAD_MODEL_COOLDOWN_SECONDS = 3600.0


def _is_auth_error(exc: Exception) -> bool:
    if isinstance(exc, (openai.AuthenticationError, openai.PermissionDeniedError)):
        return True
    return exc.__class__.__name__ in {"UnauthorizedError"}


def _is_rate_limit_error(exc: Exception) -> bool:
    if isinstance(exc, openai.RateLimitError):
        return True
    return exc.__class__.__name__ in {"TooManyRequestsError"}


def _is_connection_error(exc: Exception) -> bool:
    if isinstance(exc, (openai.APIConnectionError, httpx.TimeoutException)):
        return True
    return isinstance(exc, TimeoutError)


def _is_not_found_error(exc: Exception) -> bool:
    return isinstance(exc, openai.NotFoundError)


def friendly_llm_error_message(err: Exception) -> str:
    msg = str(err).strip() or "LLM error."
    if "LLM API key is not set" in msg:
        return "LLM is not configured (missing API key). Set AUTOPHYS_LLM_API_KEY in .env (see config.example.py)."
    if "LLM model list is empty" in msg:
        return "LLM is not configured (no models). Set AUTOPHYS_LLM_MODELS in .env (see config.example.py)."
    if "LLM base URL is not set" in msg:
        return "LLM is not configured (missing base URL). Set AUTOPHYS_LLM_BASE_URL in .env (see config.example.py)."
    return msg


def _close_stream(stream: Any) -> None:
    close = getattr(stream, "close", None)
    if callable(close):
        try:
            close()
        except Exception:
            logger.debug("LLM: stream close failed", exc_info=True)


class OpenAICompatibleLLMClient:
    """
    LLMClient implementation on top of the openai SDK.

    Works with any OpenAI-compatible endpoint (OpenRouter by default).
    Raises RuntimeError at construction time when the API key or base URL is missing,
    so callers can fall back to OfflineLLMClient.
    """

    def __init__(self, settings) -> None:
        api_key = getattr(settings, "llm_api_key", None)
        base_url = getattr(settings, "llm_base_url", "") or ""

        if not api_key or not str(api_key).strip():
            raise RuntimeError("LLM API key is not set. Set AUTOPHYS_LLM_API_KEY in your .env.")
        if not base_url.strip():
            raise RuntimeError("LLM base URL is not set. Set AUTOPHYS_LLM_BASE_URL in your .env.")

        self.models: List[str] = [m.strip() for m in (getattr(settings, "llm_models", []) or []) if m.strip()]
        self.headers: Dict[str, str] = dict(getattr(settings, "extra_headers", {}) or {})
        self.temperature = float(getattr(settings, "temperature", 0.65))
        self.top_p = float(getattr(settings, "top_p", 1.0))
        self.max_output_tokens = int(getattr(settings, "max_output_tokens", 16384))

        self.first_token_timeout = float(getattr(settings, "llm_first_token_timeout_seconds", 45.0))
        connect_s = float(getattr(settings, "llm_connect_timeout_seconds", 5.0))
        read_s = max(float(getattr(settings, "llm_read_timeout_seconds", 60.0)), self.first_token_timeout)
        self._timeout = httpx.Timeout(connect=connect_s, read=read_s, write=10.0, pool=connect_s)
        # Retries disabled: falling back to the next model is faster.
        self._client = OpenAI(
            base_url=str(base_url),
            api_key=str(api_key),
            timeout=self._timeout,
            max_retries=0,
        )
        self._bad_models: dict[str, float] = {}  # model -> retry_at (monotonic)

    def stream_chat(self, messages: list[ChatMessage], system_prompt: str) -> Iterable[str]:
        """
        Stream the response in text chunks.

        - Tries models in configured order.
        - No first content token within the first-token timeout -> next model.
        - 404 (model not available) -> cool the model down, next model.
        - Rate limit / network issues -> next model.
        - Auth issues -> fail fast.
        """
        if not self.models:
            raise RuntimeError("LLM model list is empty. Set AUTOPHYS_LLM_MODELS in your .env.")

        first_token_timeout = self.first_token_timeout
        last_error: Optional[Exception] = None
        now = time.monotonic()

        for model in self.models:
            retry_at = self._bad_models.get(model)
            if retry_at is not None and retry_at > now:
                continue

            logger.info("LLM: trying model=%s (first_token_timeout=%.1fs)", model, first_token_timeout)
            t0 = time.monotonic()
            deadline = t0 + first_token_timeout

            stream = None
            used_any = False
            timed_out = False

            try:
                stream = self._client.chat.completions.create(
                    model=model,
                    stream=True,
                    extra_headers=self.headers or None,
                    messages=[{"role": "system", "content": system_prompt}, *messages],
                    temperature=self.temperature,
                    top_p=self.top_p,
                    max_tokens=self.max_output_tokens,
                    timeout=self._timeout,
                )

                for chunk in stream:
                    if not used_any and time.monotonic() > deadline:
                        last_error = TimeoutError(f"First token timeout on model: {model}")
                        timed_out = True
                        logger.info("LLM: first token timeout on model=%s -> trying next", model)
                        break

                    if not chunk.choices:
                        continue
                    delta = getattr(chunk.choices[0], "delta", None)
                    content = getattr(delta, "content", None) if delta is not None else None

                    if content:
                        if not used_any:
                            logger.info("LLM: first token from model=%s (%.2fs)", model, time.monotonic() - t0)
                        used_any = True
                        yield content

                if used_any:
                    logger.debug("LLM: completed with model=%s", model)
                    return

                if not timed_out:
                    last_error = RuntimeError(f"Model returned no content: {model}")

            except Exception as e:
                last_error = e

                if _is_auth_error(e):
                    raise RuntimeError("LLM authentication failed. Check AUTOPHYS_LLM_API_KEY.") from e

                if _is_not_found_error(e):
                    self._bad_models[model] = time.monotonic() + BAD_MODEL_COOLDOWN_SECONDS
                    logger.info("LLM: model not available (404): %s", model)
                elif _is_rate_limit_error(e):
                    logger.info("LLM: rate-limited on model=%s, trying next", model)
                elif _is_connection_error(e):
                    logger.info("LLM: network/timeout error on model=%s, trying next", model)
                else:
                    logger.info("LLM: error on model=%s (%s), trying next", model, e.__class__.__name__)

            finally:
                if stream is not None:
                    _close_stream(stream)

        if last_error is not None:
            if _is_rate_limit_error(last_error):
                raise RuntimeError("LLM is rate-limited. Try again later.") from last_error
            if _is_connection_error(last_error):
                raise RuntimeError("LLM network/timeout error. Try again later or change models.") from last_error
            raise RuntimeError("All LLM models failed.") from last_error

        raise RuntimeError("All LLM models failed.")
