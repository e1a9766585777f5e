"""
Rewrite proxy endpoint.

Every outcome, including unexpected exceptions, leaves this handler as a
plain-text response: 200 with the rewritten text, 400 for a missing prompt,
500 for everything else.
"""

import json
import logging
from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse
from starlette.concurrency import run_in_threadpool
from pydantic import ValidationError

from ..models.rewrite import RewritePayload
from ..dependencies.services import get_rewrite_proxy
from src.pipeline.rewrite.proxy import RewriteProxy
from src.pipeline.rewrite.types import RewriteError, MissingPromptError

logger = logging.getLogger(__name__)

router = APIRouter()


def _read_payload(body: bytes) -> RewritePayload:
    data = json.loads(body)  # malformed JSON falls through to the generic 500
    try:
        return RewritePayload.model_validate(data)
    except ValidationError as e:
        raise MissingPromptError() from e


@router.post(
    "/rewrite",
    response_class=PlainTextResponse,
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": RewritePayload.model_json_schema()}},
        }
    },
)
async def rewrite(request: Request, proxy: RewriteProxy = Depends(get_rewrite_proxy)):
    """
    Forward a prompt to the completion service and relay the rewritten text.

    The upstream call blocks a worker thread until it finishes; a client that
    disconnects early does not cancel it.
    """
    try:
        payload = _read_payload(await request.body())
        result = await run_in_threadpool(proxy.rewrite, payload.prompt)
    except RewriteError as e:
        return PlainTextResponse(e.message, status_code=e.status_code)
    except Exception as e:
        logger.exception("Rewrite failed")
        return PlainTextResponse(str(e) or "Server error", status_code=500)

    return PlainTextResponse(result.text, status_code=200)
