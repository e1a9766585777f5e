from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Any, List

#unified model errors
class ModelError(RuntimeError): ...
class ModelTimeout(ModelError): ...

class UpstreamError(ModelError):
    """Upstream answered with a non-success status; body is kept verbatim."""

    def __init__(self, status_code: int, body: str):
        super().__init__(body)
        self.status_code = status_code
        self.body = body

@dataclass(frozen=True)
class ChatRequest:
    model: str
    messages: List[Dict[str, Any]]
    params: Dict[str, Any] | None = None

@dataclass(frozen=True)
class ModelResponse:
    content: str
    raw: Any #provider-native response obj
    meta: Dict[str, Any] #latency, token counts, model, finish_reason, etc.

class ModelProvider(ABC):
    model: str

    @abstractmethod
    def chat(self, req: ChatRequest) -> ModelResponse:
        raise NotImplementedError

    def send(self, prompt: str, system_instruction: str, temperature: float) -> str:
        """Single-shot completion: one system message, one user message, first choice's text."""
        messages = [
            {"role": "system", "content": system_instruction},
            {"role": "user", "content": prompt},
        ]
        response = self.chat(ChatRequest(model=self.model, messages=messages, params={"temperature": temperature}))
        return response.content
