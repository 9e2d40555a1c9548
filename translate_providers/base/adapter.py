"""Base translation adapter contract.

Purpose
-------
Every provider adapter implements two capabilities:

- ``translate(request) -> TranslationResponse``: one blocking round trip.
- ``translate_stream(request, token=None) -> Iterator[StreamChunk]``: a lazy,
  finite, non-restartable, pull-driven generator. No upstream bytes are read
  while the consumer is not pulling.

``BaseAdapter`` implements both as template methods. Subclasses supply the
provider-specific parts (``_translate_once`` and ``_stream_chunks``) while the
base class owns the cross-cutting rules:

- configuration is validated once, at construction;
- exactly one terminal chunk is yielded, always last;
- the cancellation token is checked at every chunk boundary and closes the
  in-flight upstream response when it fires;
- ``httpx`` transport failures become ``UpstreamHTTPError`` (or
  ``AbortError`` when they were caused by cancellation);
- start/end/error events are logged with a shared ``LogContext``.

External dependencies
---------------------
- ``httpx`` (pooled client from :mod:`translate_providers.base.http`).

Adapters keep no per-call state on the instance, so one adapter may serve
concurrent requests.
"""
from __future__ import annotations

import time
import uuid
from abc import ABC, abstractmethod
from contextlib import ExitStack, closing, contextmanager
from typing import Any, Dict, Iterator, Mapping, Optional

import httpx

from .cancellation import AbortError, CancellationToken
from .errors import (
    ConfigValidationError,
    ErrorCode,
    ProviderError,
    UpstreamFormatError,
    UpstreamHTTPError,
    classify_exception,
    code_for_status,
)
from .http import get_httpx_client
from .logging import LogContext, get_logger, normalized_log_event
from .models import AdapterConfig, StreamChunk, TranslationRequest, TranslationResponse
from .streaming.metrics import StreamMetrics, finalize_stream
from .streaming.pacing import ChunkPacing, RandomPacing
from .timeouts import get_timeout_config
from ..config.defaults import (
    DEFAULT_TARGET_LANGUAGE,
    TRANSLATION_SYSTEM_ROLE_TEMPLATE,
    TRANSLATION_SYSTEM_TEMPLATE,
)

_RETRYABLE = frozenset({ErrorCode.RATE_LIMIT, ErrorCode.TRANSIENT, ErrorCode.UNAVAILABLE, ErrorCode.TIMEOUT})


def build_translation_prompt(
    text: str,
    system_message: Optional[str] = None,
    target_language: Optional[str] = None,
) -> str:
    """Return the instruction (default template unless given) followed by ``text``."""
    lang = target_language or DEFAULT_TARGET_LANGUAGE
    instruction = system_message or TRANSLATION_SYSTEM_TEMPLATE.format(lang=lang)
    return f"{instruction}\n\n{text}"


def _error_message_from_body(body: Any) -> Optional[str]:
    """Pull ``error.message`` out of an OpenAI- or Google-style error body."""
    if isinstance(body, list) and body:
        body = body[0]
    if not isinstance(body, Mapping):
        return None
    err = body.get("error")
    if isinstance(err, Mapping) and isinstance(err.get("message"), str):
        return err["message"]
    if isinstance(err, str):
        return err
    return None


class BaseAdapter(ABC):
    """Common behaviour of every provider adapter."""

    provider_name: str = "base"
    error_label: str = "Provider"

    def __init__(
        self,
        config: AdapterConfig,
        *,
        client: Optional[httpx.Client] = None,
        pacing: Optional[ChunkPacing] = None,
        logger=None,
    ) -> None:
        self.config = config
        self._client = client
        self._pacing = pacing
        self._logger = logger or get_logger(f"translate_providers.{self.provider_name}")
        self.validate_config()

    # ------------------------------------------------------------------ contract
    def validate_config(self) -> None:
        """Raise ``ConfigValidationError`` when the key or base URL is empty."""
        if not self.config.api_key:
            raise ConfigValidationError("API key is required")
        if not self.config.base_url:
            raise ConfigValidationError("Base URL is required")

    @staticmethod
    def build_translation_prompt(
        text: str,
        system_message: Optional[str] = None,
        target_language: Optional[str] = None,
    ) -> str:
        return build_translation_prompt(text, system_message, target_language)

    @staticmethod
    def system_instruction(request: TranslationRequest) -> str:
        """System role message for chat-completions style payloads."""
        lang = request.target_language or DEFAULT_TARGET_LANGUAGE
        return request.system_message or TRANSLATION_SYSTEM_ROLE_TEMPLATE.format(lang=lang)

    def translate(self, request: TranslationRequest) -> TranslationResponse:
        """Single blocking round trip returning the full translation."""
        ctx = self._log_context(request)
        t0 = time.perf_counter()
        normalized_log_event(
            self._logger, "translate.start", ctx, phase="start", emitted=None, tokens=None, **request.to_dict()
        )
        try:
            response = self._translate_once(request, ctx)
        except (httpx.HTTPError, httpx.StreamError) as exc:
            err = self._transport_error(exc, ctx.model)
            self._log_failure("translate.error", ctx, err)
            raise err from exc
        except ProviderError as exc:
            self._log_failure("translate.error", ctx, exc)
            raise
        normalized_log_event(
            self._logger,
            "translate.end",
            ctx,
            phase="finalize",
            emitted=bool(response.content),
            tokens=response.usage,
            duration_ms=(time.perf_counter() - t0) * 1000.0,
            chars=len(response.content),
        )
        return response

    def translate_stream(
        self,
        request: TranslationRequest,
        token: Optional[CancellationToken] = None,
    ) -> Iterator[StreamChunk]:
        """Yield delta chunks then exactly one terminal chunk.

        Raises:
            UpstreamHTTPError: non-2xx status or transport failure.
            AbortError: ``token`` was cancelled.
        """
        ctx = self._log_context(request)
        metrics = StreamMetrics()
        completed = False
        error: Optional[BaseException] = None
        normalized_log_event(
            self._logger, "stream.start", ctx, phase="start", emitted=None, tokens=None, **request.to_dict()
        )
        try:
            if token is not None:
                token.raise_if_cancelled()
            with closing(self._stream_chunks(request, token, ctx, metrics)) as chunks:
                for chunk in chunks:
                    if token is not None:
                        token.raise_if_cancelled()
                    if chunk.is_complete:
                        completed = True
                        metrics.usage = chunk.usage
                        yield chunk
                        return
                    if not chunk.content:
                        continue
                    metrics.record_delta(chunk.content)
                    yield chunk
            if token is not None:
                token.raise_if_cancelled()
            completed = True
            yield StreamChunk.terminal()
        except AbortError:
            raise
        except (httpx.HTTPError, httpx.StreamError) as exc:
            if token is not None and token.cancelled:
                raise AbortError(token.reason or "operation cancelled") from exc
            error = self._transport_error(exc, ctx.model)
            raise error from exc
        except Exception as exc:
            error = exc
            raise
        finally:
            finalize_stream(
                logger=self._logger,
                ctx=ctx,
                metrics=metrics,
                error=error,
                error_code=classify_exception(error).value if isinstance(error, Exception) else None,
                cancelled=error is None and not completed,
            )

    # --------------------------------------------------------- subclass hooks
    @abstractmethod
    def _translate_once(self, request: TranslationRequest, ctx: LogContext) -> TranslationResponse:
        """Perform the one-shot call and decode the response."""

    @abstractmethod
    def _stream_chunks(
        self,
        request: TranslationRequest,
        token: Optional[CancellationToken],
        ctx: LogContext,
        metrics: StreamMetrics,
    ) -> Iterator[StreamChunk]:
        """Provider-specific stream; may omit the terminal chunk at EOF."""

    # ----------------------------------------------------------------- helpers
    @property
    def pacing(self) -> ChunkPacing:
        return self._pacing or RandomPacing()

    def _http(self, purpose: str) -> httpx.Client:
        return self._client or get_httpx_client(f"{self.provider_name}.{purpose}")

    def _log_context(self, request: TranslationRequest) -> LogContext:
        return LogContext(
            provider=self.provider_name,
            model=request.model or self.config.model,
            request_id=uuid.uuid4().hex[:12],
        )

    def _resolve_model(self, request: TranslationRequest) -> str:
        return request.model or self.config.model

    def _resolve_max_tokens(self, request: TranslationRequest) -> int:
        return request.max_tokens or self.config.max_tokens

    def _resolve_temperature(self, request: TranslationRequest) -> float:
        return request.temperature if request.temperature is not None else self.config.temperature

    def _post_json(self, url: str, payload: Dict[str, Any], headers: Mapping[str, str], model: str) -> Dict[str, Any]:
        """POST ``payload`` and return the decoded JSON object body."""
        resp = self._http("chat").post(
            url,
            json=payload,
            headers=dict(headers),
            timeout=get_timeout_config().as_httpx(streaming=False),
        )
        if resp.status_code >= 400:
            raise self._http_error(resp, model)
        try:
            body = resp.json()
        except ValueError as exc:
            raise UpstreamFormatError(
                code=ErrorCode.BAD_RESPONSE,
                message=f"{self.error_label} API returned a non-JSON body",
                provider=self.provider_name,
                model=model,
                raw=exc,
            ) from exc
        if not isinstance(body, dict):
            raise self._format_error("response body is not a JSON object", model)
        return body

    @contextmanager
    def _open_stream(
        self,
        url: str,
        payload: Dict[str, Any],
        headers: Mapping[str, str],
        *,
        model: str,
        token: Optional[CancellationToken],
    ) -> Iterator[httpx.Response]:
        """Open a streaming POST; the response closes on exit or on cancel."""
        with ExitStack() as stack:
            resp = stack.enter_context(
                self._http("stream").stream(
                    "POST",
                    url,
                    json=payload,
                    headers=dict(headers),
                    timeout=get_timeout_config().as_httpx(streaming=True),
                )
            )
            if token is not None:
                stack.callback(token.register(resp.close))
            if resp.status_code >= 400:
                resp.read()
                raise self._http_error(resp, model)
            yield resp

    def _http_error(self, resp: httpx.Response, model: str) -> UpstreamHTTPError:
        try:
            detail = _error_message_from_body(resp.json())
        except ValueError:
            detail = None
        code = code_for_status(resp.status_code)
        return UpstreamHTTPError(
            code=code,
            message=f"{self.error_label} API error: {resp.status_code} - {detail or 'Unknown error'}",
            provider=self.provider_name,
            model=model,
            retryable=code in _RETRYABLE,
            status_code=resp.status_code,
        )

    def _format_error(self, detail: str, model: Optional[str]) -> UpstreamFormatError:
        return UpstreamFormatError(
            code=ErrorCode.BAD_RESPONSE,
            message=f"{self.error_label} API returned an unexpected response: {detail}",
            provider=self.provider_name,
            model=model,
        )

    def _transport_error(self, exc: Exception, model: Optional[str]) -> UpstreamHTTPError:
        code = classify_exception(exc)
        return UpstreamHTTPError(
            code=code,
            message=f"{self.error_label} API request failed: {exc.__class__.__name__}: {exc}",
            provider=self.provider_name,
            model=model,
            retryable=code in _RETRYABLE,
            raw=exc,
        )

    def _log_failure(self, event: str, ctx: LogContext, exc: ProviderError) -> None:
        normalized_log_event(
            self._logger,
            event,
            ctx,
            phase="finalize",
            emitted=False,
            tokens=None,
            error_code=exc.code.value,
            error=exc.message,
        )


__all__ = ["BaseAdapter", "build_translation_prompt"]
