from __future__ import annotations
from typing import Optional, Dict, Any, Union
from pathlib import Path
from dataclasses import dataclass
from enum import Enum
import os
import yaml
import logging

from .prompts import PromptManager, DEFAULT_PROMPTS_DIR
from src.pipeline.rewrite.prompt_builder import PromptBuilder
from src.pipeline.rewrite.proxy import RewriteProxy, ProxyConfig, SYSTEM_INSTRUCTION, DEFAULT_TEMPERATURE

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parents[1] / "config" / "config.yaml"


class Provider(Enum):
    OPENAI = "openai"


@dataclass(frozen=True)
class TaskConfig:
    provider: str
    model: str
    params: Dict[str, Any]
    system_prompt: str


class ModelManager:
    def __init__(self, config_path: Union[Path, str] = DEFAULT_CONFIG_PATH, prompts_dir: Optional[Path] = None, environ: Optional[Dict[str, str]] = None):
        self.config_path = Path(config_path)
        self.config = self._load_config()
        self.prompts = PromptManager(prompts_dir or DEFAULT_PROMPTS_DIR)
        # credentials are looked up on every call, never cached
        self._environ = os.environ if environ is None else environ

    def _load_config(self) -> Dict:
        if not self.config_path.exists():
            raise FileNotFoundError(f"Config not found: {self.config_path}")
        with open(self.config_path) as f:
            config = yaml.safe_load(f) or {}

        if 'providers' not in config:
            raise ValueError("Config missing 'providers'")
        if 'tasks' not in config:
            raise ValueError("Config missing 'tasks'")

        for provider_name, provider_cfg in config['providers'].items():
            provider_type = (provider_cfg or {}).get('type')
            if provider_type not in {p.value for p in Provider}:
                raise ValueError(f"Unknown provider type: {provider_type}")

        for task_name, task_cfg in config['tasks'].items():
            if 'provider' not in task_cfg:
                raise ValueError(f"Task '{task_name}' missing provider")
            if 'model' not in task_cfg:
                raise ValueError(f"Task '{task_name}' missing model")
            if task_cfg['provider'] not in config['providers']:
                raise ValueError(f"Task '{task_name}' references unknown provider '{task_cfg['provider']}'")

        return config

    def task_config(self, task: str) -> TaskConfig:
        if task not in self.config["tasks"]:
            raise ValueError(f"Unknown task: {task}")
        task_cfg = self.config["tasks"][task]
        return TaskConfig(
            provider=task_cfg["provider"],
            model=task_cfg["model"],
            params=dict(task_cfg.get("params") or {}),
            system_prompt=task_cfg.get("system_prompt", SYSTEM_INSTRUCTION),
        )

    def _provider_settings(self, provider_name: str) -> Dict[str, Any]:
        return dict(self.config["providers"][provider_name].get("settings") or {})

    def api_key_env(self, task: str) -> str:
        settings = self._provider_settings(self.task_config(task).provider)
        return settings.get("api_key_env", "OPENAI_API_KEY")

    def credential(self, task: str) -> Optional[str]:
        """Read the task's credential from the environment at call time."""
        return self._environ.get(self.api_key_env(task)) or None

    def proxy_config(self, task: str = "rewrite") -> ProxyConfig:
        task_cfg = self.task_config(task)
        settings = self._provider_settings(task_cfg.provider)
        return ProxyConfig(
            api_key=self.credential(task),
            model=task_cfg.model,
            temperature=float(task_cfg.params.get("temperature", DEFAULT_TEMPERATURE)),
            system_instruction=task_cfg.system_prompt,
            base_url=settings.get("base_url"),
            api_key_env=settings.get("api_key_env", "OPENAI_API_KEY"),
        )

    def rewrite_proxy(self, task: str = "rewrite") -> RewriteProxy:
        return RewriteProxy(self.proxy_config(task))

    def prompt_builder(self) -> PromptBuilder:
        return PromptBuilder(self.prompts)
