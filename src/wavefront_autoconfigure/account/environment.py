"""Layered configuration the bootstrap reads from and injects into."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from ..common.settings import AutoconfigureSettings


@dataclass(frozen=True)
class PropertySource:
    """Named, read-only set of configuration properties."""

    name: str
    properties: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))

    def get(self, key: str) -> Optional[str]:
        return self.properties.get(key)


class ConfigurationContext:
    """Ordered property sources; earlier sources take precedence.

    Sources can only be appended at the lowest precedence. Existing sources are
    never replaced or removed, so a value set by the operator always wins over
    one added later.
    """

    def __init__(self, sources: Optional[list[PropertySource]] = None) -> None:
        self._sources: list[PropertySource] = []
        for source in sources or []:
            self.add_last(source)

    @classmethod
    def from_settings(cls, settings: AutoconfigureSettings, name: str = "environment") -> "ConfigurationContext":
        return cls([PropertySource(name, settings.as_properties())])

    @classmethod
    def from_mapping(cls, properties: Mapping[str, str], name: str = "environment") -> "ConfigurationContext":
        return cls([PropertySource(name, properties)])

    def get_property(self, key: str, default: Optional[str] = None) -> Optional[str]:
        for source in self._sources:
            value = source.get(key)
            if value is not None:
                return value
        return default

    def contains(self, key: str) -> bool:
        return self.get_property(key) is not None

    def add_last(self, source: PropertySource) -> None:
        if any(existing.name == source.name for existing in self._sources):
            raise ValueError(f"Property source '{source.name}' is already registered")
        self._sources.append(source)

    def get_source(self, name: str) -> Optional[PropertySource]:
        for source in self._sources:
            if source.name == name:
                return source
        return None

    @property
    def source_names(self) -> list[str]:
        return [source.name for source in self._sources]
