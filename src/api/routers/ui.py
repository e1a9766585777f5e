"""
Server-rendered rewrite form.

The page keeps the whole form state in its fields: selected goals travel as
ordered hidden inputs, and a goal button posts back with ``toggle`` set so
the page re-renders with that goal added or removed. Pressing the rewrite
button builds the prompt and runs it through the same proxy as
``POST /api/rewrite``.
"""

import logging
from pathlib import Path
from typing import List, Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from starlette.concurrency import run_in_threadpool

from ..dependencies.services import get_prompt_builder, get_rewrite_proxy
from src.pipeline.rewrite.prompt_builder import PromptBuilder
from src.pipeline.rewrite.proxy import RewriteProxy
from src.pipeline.rewrite.types import (
    Tone, Length, GOAL_CHOICES, RewriteOptions, EmptyScenarioError, RewriteError,
)

logger = logging.getLogger(__name__)

router = APIRouter()
templates = Jinja2Templates(directory=str(Path(__file__).parents[1] / "templates"))


def _render(request: Request, scenario: str, options: RewriteOptions, output: str = "", error: Optional[str] = None):
    return templates.TemplateResponse(request, "index.html", {
        "scenario": scenario,
        "options": options,
        "tones": [t.value for t in Tone],
        "lengths": [l.value for l in Length],
        "goal_choices": GOAL_CHOICES,
        "output": output,
        "error": error,
    })


@router.get("/", response_class=HTMLResponse)
async def show_form(request: Request):
    return _render(request, "", RewriteOptions())


@router.post("/", response_class=HTMLResponse)
async def submit_form(
    request: Request,
    scenario: str = Form(""),
    tone: str = Form(Tone.PROFESSIONAL.value),
    length: str = Form(Length.MEDIUM.value),
    goals: List[str] = Form(default=[]),
    toggle: Optional[str] = Form(None),
    builder: PromptBuilder = Depends(get_prompt_builder),
    proxy: RewriteProxy = Depends(get_rewrite_proxy),
):
    # Form() would swap a cleared field for its default; audience must stay verbatim
    form = await request.form()
    audience = form.get("audience", "General")

    try:
        options = RewriteOptions.from_form(tone, length, audience, goals)
    except ValueError as e:
        return _render(request, scenario, RewriteOptions(audience=audience, goals=list(goals)), error=str(e))

    if toggle:
        options.toggle_goal(toggle)
        return _render(request, scenario, options)

    try:
        rewrite_request = builder.prepare(scenario, options)
        result = await run_in_threadpool(proxy.rewrite, rewrite_request.prompt)
    except EmptyScenarioError as e:
        return _render(request, scenario, options, error=str(e))
    except RewriteError as e:
        return _render(request, scenario, options, error=e.message)
    except Exception as e:
        logger.exception("Form rewrite failed")
        return _render(request, scenario, options, error=str(e) or "Something went wrong.")

    return _render(request, scenario, options, output=result.text)
