"""Runtime wiring helper for CLI and API applications."""

import os
from dataclasses import dataclass, field
from pathlib import Path

from .actions import Assistant
from .adapters.openai_client import OpenAIResponsesClient
from .adapters.yaml_settings import YamlSettingsStore
from .config import GlossaConfig, Settings, load_config
from .core.ports import CompletionClient
from .prompts.loader import ensure_default_prompts, load_developer_prompt, migrate_prompt_folders

API_KEY_ENV = "OPENAI_API_KEY"


@dataclass
class Runtime:
    """Container for all wired components."""
    config: GlossaConfig
    settings_store: YamlSettingsStore
    settings: Settings
    client: CompletionClient
    system_prompt: str
    used_fallback_prompt: bool = False
    assistant: Assistant = field(init=False)

    def __post_init__(self) -> None:
        self.assistant = self._make_assistant()

    def _make_assistant(self) -> Assistant:
        return Assistant(
            self.client,
            self.settings,
            system_prompt=self.system_prompt,
            context_before=self.config.context.before,
            context_after=self.config.context.after,
        )

    def reload_system_prompt(self) -> bool:
        """
        Re-read the active prompt file. Returns True when the default
        prompt had to be used instead.
        """
        loaded = load_developer_prompt(
            self.config.workspace.prompts,
            self.settings.response_language,
            self.settings.system_prompt_file,
        )
        self.system_prompt = loaded.content
        self.used_fallback_prompt = loaded.used_fallback
        self.assistant = self._make_assistant()
        return loaded.used_fallback


def build_runtime(
    workspace_path: Path | None = None,
    config_path: Path | None = None,
    client: CompletionClient | None = None,
) -> Runtime:
    """Build and wire all components for a workspace."""
    config = load_config(config_path=config_path, workspace_path=workspace_path)

    store = YamlSettingsStore(config.workspace.settings)
    settings = store.load()
    if not settings.api_key:
        settings.api_key = os.environ.get(API_KEY_ENV, "")

    prompts = config.workspace.prompts
    migrate_prompt_folders(prompts)
    ensure_default_prompts(prompts)
    loaded = load_developer_prompt(prompts, settings.response_language, settings.system_prompt_file)

    if client is None:
        client = OpenAIResponsesClient(settings, url=config.api.url, timeout=config.api.timeout)

    return Runtime(
        config=config,
        settings_store=store,
        settings=settings,
        client=client,
        system_prompt=loaded.content,
        used_fallback_prompt=loaded.used_fallback,
    )
