from __future__ import annotations
from typing import Dict, Optional
import time
import logging

from openai import OpenAI
from openai import APIError, APIStatusError, APITimeoutError

from .base import ModelProvider, ChatRequest, ModelResponse, ModelError, ModelTimeout, UpstreamError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.openai.com/v1"


class OpenAIProvider(ModelProvider):
    def __init__(self, api_key: str, model: str, base_url: Optional[str] = None, default_headers: Optional[Dict[str, str]] = None, **kwargs):
        # max_retries=0: one upstream attempt per rewrite, the caller resubmits by hand
        self.client = OpenAI(
            base_url=base_url,
            api_key=api_key,
            default_headers=default_headers or {},
            max_retries=0,
            **kwargs
        )
        self.model = model
        self.base_url = base_url

    def chat(self, req: ChatRequest) -> ModelResponse:
        params = dict(req.params or {})
        completion_params = {
            "model": req.model,
            "messages": req.messages,
            **params
        }

        t0 = time.perf_counter()
        try:
            response = self.client.chat.completions.create(**completion_params)
        except APITimeoutError as e:
            raise ModelTimeout(f"OpenAI timeout: {e}") from e
        except APIStatusError as e:
            # relay the upstream body untouched
            logger.warning("OpenAI returned status %s", e.status_code)
            raise UpstreamError(e.status_code, e.response.text) from e
        except APIError as e:
            raise ModelError(f"OpenAI API error: {e}") from e

        dt = time.perf_counter() - t0

        # only the first choice is used, extra candidates are ignored
        try:
            choice = response.choices[0]
            content = choice.message.content or ""
        except (IndexError, AttributeError, TypeError) as e:
            raise ModelError(f"Invalid response structure from OpenAI API: {e}") from e

        meta = {
            "provider": "openai",
            "model": getattr(response, 'model', req.model),
            "latency": dt,
            "base_url": self.base_url or DEFAULT_BASE_URL,
            "finish_reason": getattr(choice, 'finish_reason', None),
        }
        if getattr(response, 'usage', None):
            meta["usage"] = response.usage.model_dump()
        if getattr(response, 'id', None):
            meta["id"] = response.id

        logger.debug("OpenAI completion %s finished in %.2fs", meta.get("id"), dt)
        return ModelResponse(content=content, raw=response, meta=meta)

