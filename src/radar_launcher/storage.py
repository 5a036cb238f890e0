import os
import json
import dataclasses
from typing import Any, Dict, Type, TypeVar

from radar_launcher.utils import get_resource_path, atomic_write_text
from radar_launcher.models import (
    JsonResource,
    Config,
    LootFilterManager,
    Watchlist,
    AIFactionManager,
    Resources,
)


R = TypeVar("R", bound=JsonResource)


class ConfigRegistry:
    """Loads each persisted resource, falling back to a fresh default on any failure."""

    def __init__(self, app_root: str, logger):
        self.app_root = app_root
        self.logger = logger

    def path_for(self, kind: Type[JsonResource]) -> str:
        return get_resource_path(self.app_root, kind.FILE_NAME)

    def load_or_default(self, kind: Type[R]) -> R:
        path = self.path_for(kind)
        if not os.path.exists(path):
            self.logger.info("%s not found at %s, using defaults", kind.__name__, path)
            return kind()
        ok, instance = kind.try_load(path)
        if not ok or instance is None:
            self.logger.warning("Could not load %s from %s, using defaults", kind.__name__, path)
            return kind()
        self.logger.info("Loaded %s from %s", kind.__name__, path)
        return instance

    def load_all(self) -> Resources:
        return Resources(
            config=self.load_or_default(Config),
            loot_filters=self.load_or_default(LootFilterManager),
            watchlist=self.load_or_default(Watchlist),
            ai_factions=self.load_or_default(AIFactionManager),
        )

    def save(self, resource: JsonResource) -> str:
        path = self.path_for(type(resource))
        content = json.dumps(resource.to_dict(), ensure_ascii=False, indent=2)
        atomic_write_text(path, content)
        self.logger.info("Saved %s to %s", type(resource).__name__, path)
        return path

    def save_config_changes(self, current: Config, changes: Dict[str, Any]) -> Config:
        """Persist an edited copy of ``current``; the loaded instance is left untouched."""
        updated = dataclasses.replace(current, **changes)
        updated.validate()
        self.save(updated)
        return updated
