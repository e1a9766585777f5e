"""
Per-request dependencies.

Nothing here is shared between requests except the ModelManager loaded at
startup; the proxy and its credential are rebuilt for every call.
"""

from fastapi import Depends

from src.models.manager import ModelManager
from src.pipeline.rewrite.prompt_builder import PromptBuilder
from src.pipeline.rewrite.proxy import RewriteProxy


def get_model_manager() -> ModelManager:
    """FastAPI dependency to get the model manager from app state."""
    from ..main import app_state
    return app_state["model_manager"]


def get_rewrite_proxy(model_manager: ModelManager = Depends(get_model_manager)) -> RewriteProxy:
    """Proxy bound to the credential present in the environment right now."""
    return model_manager.rewrite_proxy("rewrite")


def get_prompt_builder(model_manager: ModelManager = Depends(get_model_manager)) -> PromptBuilder:
    return model_manager.prompt_builder()
