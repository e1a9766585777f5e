import logging
from typing import Optional

from src.models.prompts import PromptManager
from .types import RewriteOptions, RewriteRequest, EmptyScenarioError

logger = logging.getLogger(__name__)

COMPOSE_PROMPT_REF = "rewrite/compose@v1"


class PromptBuilder:
    def __init__(self, prompts: Optional[PromptManager] = None, prompt_ref: str = COMPOSE_PROMPT_REF):
        self.prompts = prompts or PromptManager()
        self.prompt_ref = prompt_ref

    def build(self, raw_text: str, options: RewriteOptions) -> str:
        """
        Render the rewrite instruction for the given scenario and options.

        Only the scenario is trimmed; tone, audience, length and goals are
        embedded exactly as given. Same inputs always give the same string.
        """
        return self.prompts.render(self.prompt_ref, {
            "text": raw_text.strip(),
            "tone": options.tone.value,
            "audience": options.audience,
            "length": options.length.value,
            "goals": list(options.goals),
        })

    def prepare(self, raw_text: str, options: RewriteOptions) -> RewriteRequest:
        """Build a request, refusing a blank scenario before anything is sent."""
        if not raw_text.strip():
            raise EmptyScenarioError()
        prompt = self.build(raw_text, options)
        logger.debug("Built %s prompt (%d chars)", self.prompt_ref, len(prompt))
        return RewriteRequest(prompt=prompt)
