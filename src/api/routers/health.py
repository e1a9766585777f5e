"""
Health check endpoints for monitoring and diagnostics.
"""

import time
from fastapi import APIRouter, Depends

from .. import API_VERSION
from ..models.common import HealthStatus
from ..dependencies.services import get_model_manager
from src.models.manager import ModelManager

router = APIRouter()

# Track server start time for uptime calculation
_server_start_time = time.time()

@router.get("/", response_model=HealthStatus)
async def health_check(model_manager: ModelManager = Depends(get_model_manager)):
    """
    Basic health check endpoint.

    Reports whether the config and prompts loaded and whether the upstream
    credential is present. The upstream service itself is not contacted.
    """
    uptime = time.time() - _server_start_time
    dependencies = {}

    try:
        task_cfg = model_manager.task_config("rewrite")
        dependencies["config"] = f"✅ Loaded (model {task_cfg.model})"
    except ValueError as e:
        dependencies["config"] = f"❌ Error: {str(e)}"

    try:
        builder = model_manager.prompt_builder()
        builder.prompts.load_prompt(builder.prompt_ref)
        dependencies["prompts"] = "✅ Available"
    except (FileNotFoundError, ValueError) as e:
        dependencies["prompts"] = f"❌ Error: {str(e)}"

    env_var = model_manager.api_key_env("rewrite")
    if model_manager.credential("rewrite"):
        dependencies["credential"] = f"✅ {env_var} set"
    else:
        dependencies["credential"] = f"⚠️ {env_var} missing"

    return HealthStatus(
        status="healthy",
        version=API_VERSION,
        uptime=uptime,
        dependencies=dependencies
    )

@router.get("/ready")
async def readiness_check(model_manager: ModelManager = Depends(get_model_manager)):
    """
    Readiness probe for container deployments.

    Ready only once a credential is available; without one every rewrite
    would fail with a 500.
    """
    env_var = model_manager.api_key_env("rewrite")
    if not model_manager.credential("rewrite"):
        return {"ready": False, "reason": f"Missing {env_var}"}

    return {"ready": True, "message": "Service ready to handle requests"}
