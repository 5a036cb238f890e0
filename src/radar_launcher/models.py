from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, asdict
from typing import List, Optional, Dict, Any, NamedTuple, Tuple

from radar_launcher.diagnostics import DiagnosticLog


class JsonResource(ABC):
    """Base for resources persisted as a single JSON object.

    Subclasses set ``FILE_NAME`` and implement ``from_dict``, which raises
    ``TypeError``/``ValueError``/``KeyError`` when the data does not fit the schema.
    """

    FILE_NAME = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    @abstractmethod
    def from_dict(cls, data: Dict[str, Any]):
        ...

    @classmethod
    def try_load(cls, path: str) -> Tuple[bool, Optional["JsonResource"]]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise TypeError(f"Expected a JSON object in {path}")
            return True, cls.from_dict(data)
        except (OSError, ValueError, TypeError, KeyError, RecursionError):
            # RecursionError: json gives up on deeply nested input
            return False, None


@dataclass
class Config(JsonResource):
    FILE_NAME = "config.json"

    logging: bool = False
    ui_scale: int = 100
    font_size: int = 13
    max_distance: int = 325
    show_loot: bool = True

    def validate(self) -> None:
        for name in ("logging", "show_loot"):
            if not isinstance(getattr(self, name), bool):
                raise ValueError(f"{name} must be true or false")
        if not isinstance(self.ui_scale, int) or not 50 <= self.ui_scale <= 200:
            raise ValueError("ui_scale must be an integer between 50 and 200")
        if not isinstance(self.font_size, int) or self.font_size <= 0:
            raise ValueError("font_size must be an integer > 0")
        if not isinstance(self.max_distance, int) or self.max_distance <= 0:
            raise ValueError("max_distance must be an integer > 0")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        config = cls(**data)
        config.validate()
        return config


@dataclass
class LootFilter:
    name: str
    enabled: bool = True
    color: str = "#FFFFFF"
    items: List[str] = field(default_factory=list)

    def validate(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("Loot filter name is required")
        if not isinstance(self.items, list) or not all(isinstance(i, str) for i in self.items):
            raise ValueError("Loot filter items must be a list of item ids")


@dataclass
class LootFilterManager(JsonResource):
    FILE_NAME = "loot_filters.json"

    selected: str = "Default"
    filters: List[LootFilter] = field(default_factory=lambda: [LootFilter(name="Default")])

    def validate(self) -> None:
        for f in self.filters:
            f.validate()
        names = [f.name for f in self.filters]
        if len(set(names)) != len(names):
            raise ValueError("Loot filter names must be unique")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LootFilterManager":
        filters = [LootFilter(**f) for f in data.get("filters", [])]
        manager = cls(selected=data.get("selected", "Default"), filters=filters)
        manager.validate()
        return manager


@dataclass
class WatchlistEntry:
    account_id: str
    tag: str = ""
    is_streamer: bool = False

    def validate(self) -> None:
        if not isinstance(self.account_id, str) or not self.account_id.strip():
            raise ValueError("Watchlist account_id is required")
        if not isinstance(self.tag, str):
            raise ValueError("Watchlist tag must be a string")
        if not isinstance(self.is_streamer, bool):
            raise ValueError("is_streamer must be true or false")


@dataclass
class Watchlist(JsonResource):
    FILE_NAME = "watchlist.json"

    profiles: Dict[str, List[WatchlistEntry]] = field(default_factory=lambda: {"Default": []})

    def entry_count(self) -> int:
        return sum(len(entries) for entries in self.profiles.values())

    def validate(self) -> None:
        for entries in self.profiles.values():
            if not isinstance(entries, list):
                raise ValueError("Watchlist profile must be a list of entries")
            for entry in entries:
                entry.validate()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Watchlist":
        profiles_raw = data["profiles"]
        if not isinstance(profiles_raw, dict):
            raise TypeError("profiles must be an object")
        profiles = {
            str(name): [WatchlistEntry(**e) for e in entries]
            for name, entries in profiles_raw.items()
        }
        watchlist = cls(profiles=profiles)
        watchlist.validate()
        return watchlist


@dataclass
class AIFaction:
    name: str
    names: List[str] = field(default_factory=list)

    def validate(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("Faction name is required")
        if not isinstance(self.names, list) or not all(isinstance(n, str) for n in self.names):
            raise ValueError("Faction names must be a list of strings")


@dataclass
class AIFactionManager(JsonResource):
    FILE_NAME = "ai_factions.json"

    factions: List[AIFaction] = field(default_factory=list)

    def faction_for(self, npc_name: str) -> Optional[str]:
        for faction in self.factions:
            if npc_name in faction.names:
                return faction.name
        return None

    def validate(self) -> None:
        for faction in self.factions:
            faction.validate()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AIFactionManager":
        factions = [AIFaction(**f) for f in data["factions"]]
        manager = cls(factions=factions)
        manager.validate()
        return manager


RESOURCE_KINDS = (Config, LootFilterManager, Watchlist, AIFactionManager)


class Resources(NamedTuple):
    config: Config
    loot_filters: LootFilterManager
    watchlist: Watchlist
    ai_factions: AIFactionManager


@dataclass(frozen=True)
class AppContext:
    """Process-wide state built once at startup and handed to every consumer."""

    app_root: str
    config: Config
    loot_filters: LootFilterManager
    watchlist: Watchlist
    ai_factions: AIFactionManager
    log: DiagnosticLog

    @property
    def logging_enabled(self) -> bool:
        return self.config.logging
