"""
Async client for the rewrite proxy.

Plays the browser's part: builds the prompt from the scenario and options,
refuses a blank scenario without touching the network, posts the prompt to
``/api/rewrite`` and hands back the trimmed text. Cancelling the token
aborts the outbound HTTP request; the server keeps running its upstream call
regardless.
"""

from __future__ import annotations
import asyncio
import logging
from typing import Optional

import httpx

from src.pipeline.rewrite.prompt_builder import PromptBuilder
from src.pipeline.rewrite.types import RewriteOptions, RewriteResult
from src.utils.cancel import CancelToken

logger = logging.getLogger(__name__)


class RewriteFailed(RuntimeError):
    """The proxy answered with a non-success status; the message is its body."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class RewriteCancelled(RuntimeError): ...


class RewriteClient:
    def __init__(self, base_url: str = "http://localhost:8000", builder: Optional[PromptBuilder] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url
        self.builder = builder or PromptBuilder()
        self.transport = transport

    async def rewrite(self, scenario: str, options: Optional[RewriteOptions] = None, cancel: Optional[CancelToken] = None) -> RewriteResult:
        request = self.builder.prepare(scenario, options or RewriteOptions())
        if cancel is not None and cancel.cancelled:
            raise RewriteCancelled("Rewrite cancelled before it was sent")

        send = asyncio.ensure_future(self._post(request.prompt))
        if cancel is None:
            return await send

        waiter = asyncio.ensure_future(cancel.wait())
        try:
            await asyncio.wait({send, waiter}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            send.cancel()
            raise
        finally:
            waiter.cancel()

        if send.done():
            return send.result()

        send.cancel()
        try:
            await send
        except asyncio.CancelledError:
            pass
        logger.info("Rewrite cancelled by caller")
        raise RewriteCancelled("Rewrite cancelled")

    async def _post(self, prompt: str) -> RewriteResult:
        async with httpx.AsyncClient(base_url=self.base_url, transport=self.transport, timeout=None) as client:
            response = await client.post("/api/rewrite", json={"prompt": prompt})
        if response.is_error:
            raise RewriteFailed(response.text or "Something went wrong.", response.status_code)
        return RewriteResult(text=response.text.strip())
