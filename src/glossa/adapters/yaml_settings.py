import io
import logging
from dataclasses import asdict
from pathlib import Path

import yaml

from ..config import Settings, settings_from_mapping
from ..core.ports import SettingsStore
from ..prompts.loader import migrate_prompt_filename

logger = logging.getLogger(__name__)


class YamlSettingsStore(SettingsStore):
    """Settings kept as a flat YAML mapping in one file."""

    def __init__(self, path: Path):
        self.path = path

    def load(self) -> Settings:
        data = {}
        if self.path.exists():
            data = yaml.safe_load(io.StringIO(self.path.read_text(encoding="utf-8"))) or {}
            if not isinstance(data, dict):
                raise ValueError(f"Settings file {self.path} must hold a mapping")

        settings = settings_from_mapping(data)

        migrated = migrate_prompt_filename(settings.system_prompt_file)
        if migrated != settings.system_prompt_file:
            logger.info("Migrating system prompt file %r -> %r", settings.system_prompt_file, migrated)
            settings.system_prompt_file = migrated
            self.save(settings)
        return settings

    def save(self, settings: Settings) -> None:
        settings.validate()
        buf = io.StringIO()
        yaml.safe_dump(asdict(settings), buf, sort_keys=False, allow_unicode=True)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(buf.getvalue(), encoding="utf-8")
