"""
Rewrite proxy: forwards one prompt to the upstream chat-completion service.

The proxy holds no state between calls. Its configuration (credential,
model, temperature, system instruction) is fixed at construction, and the
upstream call goes through a narrow ``send`` interface so tests can swap in
a fake client.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from src.models.providers.base import UpstreamError
from src.models.providers.openai_sdk import OpenAIProvider
from .types import RewriteResult, RewriteError, MissingPromptError, MissingCredentialError

logger = logging.getLogger(__name__)

SYSTEM_INSTRUCTION = "You improve user writing concisely and professionally."
DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_TEMPERATURE = 0.4


class CompletionClient(Protocol):
    def send(self, prompt: str, system_instruction: str, temperature: float) -> str: ...


@dataclass(frozen=True)
class ProxyConfig:
    api_key: Optional[str]
    model: str = DEFAULT_MODEL
    temperature: float = DEFAULT_TEMPERATURE
    system_instruction: str = SYSTEM_INSTRUCTION
    base_url: Optional[str] = None
    api_key_env: str = "OPENAI_API_KEY"


def openai_client_factory(config: ProxyConfig) -> CompletionClient:
    return OpenAIProvider(api_key=config.api_key, model=config.model, base_url=config.base_url)


class RewriteProxy:
    def __init__(self, config: ProxyConfig, client_factory: Callable[[ProxyConfig], CompletionClient] = openai_client_factory):
        self.config = config
        self.client_factory = client_factory

    def rewrite(self, prompt: Optional[str]) -> RewriteResult:
        """
        Send ``prompt`` upstream and return the trimmed text of the first choice.

        Raises MissingPromptError (400) for an absent or empty prompt and
        MissingCredentialError (500) when no credential is configured; in both
        cases the upstream service is never contacted. A non-success upstream
        status becomes a RewriteError carrying the upstream body verbatim.
        """
        if not isinstance(prompt, str) or not prompt:
            raise MissingPromptError()
        if not self.config.api_key:
            raise MissingCredentialError(self.config.api_key_env)

        client = self.client_factory(self.config)
        try:
            text = client.send(prompt, self.config.system_instruction, self.config.temperature)
        except UpstreamError as e:
            logger.warning("Upstream rejected rewrite with status %s", e.status_code)
            raise RewriteError(e.body, status_code=500) from e

        return RewriteResult(text=text.strip())
