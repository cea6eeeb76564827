"""Configuration loader for glossa.toml, and the user settings record."""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore

from .core.context import LINES_AFTER, LINES_BEFORE
from .prompts.loader import DEFAULT_PROMPT_FILE

CONFIG_FILENAME = "glossa.toml"
DEFAULT_API_URL = "https://api.openai.com/v1/responses"

MODELS = ("gpt-5.2", "gpt-5-mini")
REASONING_EFFORTS = ("none", "low", "medium", "high")
RESPONSE_LANGUAGES = ("en", "es", "fr", "zh", "ja")
TRANSLATE_LANGUAGES = ("English", "Spanish", "French", "Chinese", "Japanese")


@dataclass
class WorkspaceConfig:
    """Where documents, settings and prompt files live."""
    root: Path
    settings: Path
    prompts: Path


@dataclass
class ApiConfig:
    """Completion endpoint configuration."""
    url: str = DEFAULT_API_URL
    timeout: float = 60.0


@dataclass
class ContextConfig:
    """Surrounding-context window sizes, in lines."""
    before: int = LINES_BEFORE
    after: int = LINES_AFTER


@dataclass
class LogConfig:
    level: str = "WARNING"


@dataclass
class GlossaConfig:
    """Complete glossa configuration."""
    workspace: WorkspaceConfig
    api: ApiConfig
    context: ContextConfig
    log: LogConfig


@dataclass
class Settings:
    """User settings persisted by a SettingsStore."""
    api_key: str = ""
    model: str = "gpt-5.2"
    reasoning_effort: str = "none"
    web_search_enabled: bool = False
    response_language: str = "en"
    translate_language: str = "Chinese"
    system_prompt_file: str = DEFAULT_PROMPT_FILE

    def validate(self) -> None:
        """Raise ValueError for out-of-range choices."""
        choices = {
            "model": MODELS,
            "reasoning_effort": REASONING_EFFORTS,
            "response_language": RESPONSE_LANGUAGES,
            "translate_language": TRANSLATE_LANGUAGES,
        }
        for name, allowed in choices.items():
            value = getattr(self, name)
            if value not in allowed:
                raise ValueError(f"Invalid {name}: {value!r} (expected one of {', '.join(allowed)})")


SETTING_NAMES: tuple[str, ...] = tuple(f.name for f in fields(Settings))


def settings_from_mapping(data: dict[str, Any]) -> Settings:
    """Merge stored values over the defaults; unknown keys are ignored."""
    known = {k: v for k, v in data.items() if k in SETTING_NAMES}
    settings = Settings(**known)
    settings.validate()
    return settings


def load_config(config_path: Path | None = None, workspace_path: Path | None = None) -> GlossaConfig:
    """
    Load configuration from glossa.toml.

    Search order:
    1. config_path (if provided)
    2. cwd/glossa.toml
    3. workspace_path/glossa.toml

    Args:
        config_path: Explicit path to config file
        workspace_path: Workspace root for fallback search

    Returns:
        GlossaConfig with resolved settings
    """
    toml_data: dict[str, Any] = {}

    search_paths = []
    if config_path:
        search_paths.append(config_path)
    search_paths.append(Path.cwd() / CONFIG_FILENAME)
    if workspace_path:
        search_paths.append(workspace_path / CONFIG_FILENAME)

    for path in search_paths:
        if path.exists():
            with open(path, "rb") as f:
                toml_data = tomllib.load(f)
            break

    ws_data = toml_data.get("workspace", {})
    root = Path(ws_data.get("root", workspace_path or Path(".")))
    workspace = WorkspaceConfig(
        root=root,
        settings=Path(ws_data.get("settings", root / ".glossa" / "settings.yaml")),
        prompts=Path(ws_data.get("prompts", root / ".glossa" / "prompts")),
    )

    api_data = toml_data.get("api", {})
    api = ApiConfig(
        url=api_data.get("url", DEFAULT_API_URL),
        timeout=float(api_data.get("timeout", 60.0)),
    )

    ctx_data = toml_data.get("context", {})
    context = ContextConfig(
        before=int(ctx_data.get("before", LINES_BEFORE)),
        after=int(ctx_data.get("after", LINES_AFTER)),
    )

    log_data = toml_data.get("log", {})
    log = LogConfig(level=str(log_data.get("level", "WARNING")).upper())

    return GlossaConfig(workspace=workspace, api=api, context=context, log=log)
