"""Component metadata: identity, dependencies, symbols and usage statistics."""

from __future__ import annotations

import os
import time
from dataclasses import dataclass, field
from typing import Any, Iterable

from . import jsonlite

__all__ = [
    "MetadataError",
    "Dependency",
    "ComponentMetadata",
    "generate_metadata_template",
]

_TEMPLATE_VERSION = "0.1.0"
_TEMPLATE_DESCRIPTION = "Auto-generated metadata template"


class MetadataError(Exception):
    """Raised when metadata cannot be read or written."""


@dataclass
class Dependency:
    """A component that another component relies on."""

    id: str | None
    version: str | None = None
    optional: bool = False


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _string_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _symbol_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item if isinstance(item, str) else "" for item in value]


@dataclass
class ComponentMetadata:
    """Describes one component and tracks how often it is used."""

    id: str | None = None
    version: str | None = None
    description: str | None = None
    dependencies: list[Dependency] = field(default_factory=list)
    exported_symbols: list[str] = field(default_factory=list)
    imported_symbols: list[str] = field(default_factory=list)
    memory_footprint: int = 0
    avg_load_time_ms: float = 0.0
    last_used: int = 0
    usage_count: int = 0
    loaded: bool = False

    @classmethod
    def load(cls, metadata_path: str | os.PathLike[str]) -> ComponentMetadata:
        """Read metadata from a JSON file; usage statistics start afresh."""
        try:
            root = jsonlite.parse_file(metadata_path)
        except (OSError, UnicodeDecodeError, jsonlite.JsonParseError) as exc:
            raise MetadataError(
                f"Could not parse metadata file: {os.fspath(metadata_path)}"
            ) from exc
        if not isinstance(root, dict):
            root = {}

        metadata = cls(
            id=_string_or_none(root.get("id")),
            version=_string_or_none(root.get("version")),
            description=_string_or_none(root.get("description")),
        )

        deps = root.get("dependencies")
        if isinstance(deps, list):
            for entry in deps:
                if not isinstance(entry, dict):
                    continue
                optional = entry.get("optional")
                metadata.dependencies.append(
                    Dependency(
                        id=_string_or_none(entry.get("id")),
                        version=_string_or_none(entry.get("version")),
                        optional=optional if isinstance(optional, bool) else False,
                    )
                )

        metadata.exported_symbols = _symbol_list(root.get("exported_symbols"))
        metadata.imported_symbols = _symbol_list(root.get("imported_symbols"))

        footprint = root.get("memory_footprint")
        if _is_number(footprint):
            metadata.memory_footprint = int(footprint)
        load_time = root.get("avg_load_time_ms")
        if _is_number(load_time):
            metadata.avg_load_time_ms = float(load_time)
        return metadata

    def to_json(self) -> dict[str, Any]:
        """Return the metadata as a JSON-ready dictionary."""
        root: dict[str, Any] = {}
        if self.id is not None:
            root["id"] = self.id
        if self.version is not None:
            root["version"] = self.version
        if self.description is not None:
            root["description"] = self.description

        deps: list[dict[str, Any]] = []
        for dep in self.dependencies:
            entry: dict[str, Any] = {}
            if dep.id is not None:
                entry["id"] = dep.id
            if dep.version is not None:
                entry["version"] = dep.version
            entry["optional"] = dep.optional
            deps.append(entry)
        root["dependencies"] = deps

        root["exported_symbols"] = [s for s in self.exported_symbols if s is not None]
        root["imported_symbols"] = [s for s in self.imported_symbols if s is not None]
        root["memory_footprint"] = self.memory_footprint
        root["avg_load_time_ms"] = self.avg_load_time_ms
        root["usage_count"] = self.usage_count
        root["last_used"] = self.last_used
        return root

    def save(self, output_path: str | os.PathLike[str]) -> None:
        """Write the metadata to a file as indented JSON."""
        try:
            jsonlite.write_file(self.to_json(), output_path, pretty=True)
        except OSError as exc:
            raise MetadataError(
                f"Could not write metadata to: {os.fspath(output_path)}"
            ) from exc

    def add_dependency(
        self, dep_id: str, dep_version: str | None = None, optional: bool = False
    ) -> Dependency:
        """Record a dependency on another component and return it."""
        dependency = Dependency(dep_id, dep_version, optional)
        self.dependencies.append(dependency)
        return dependency

    def add_exported_symbol(self, symbol: str) -> None:
        """Record a symbol this component provides."""
        self.exported_symbols.append(symbol)

    def add_imported_symbol(self, symbol: str) -> None:
        """Record a symbol this component needs."""
        self.imported_symbols.append(symbol)

    def track_usage(self) -> None:
        """Count one more use and stamp the current time."""
        self.usage_count += 1
        self.last_used = int(time.time())

    def recently_used(self, seconds_threshold: float) -> bool:
        """Tell whether the last use lies less than the threshold in the past."""
        return int(time.time()) - self.last_used < seconds_threshold

    def _first_missing(
        self, available_components: Iterable[ComponentMetadata | None]
    ) -> Dependency | None:
        available = [c for c in available_components if c is not None]
        for dep in self.dependencies:
            if dep.optional:
                continue
            if not any(self._satisfies(dep, comp) for comp in available):
                return dep
        return None

    @staticmethod
    def _satisfies(dep: Dependency, comp: ComponentMetadata) -> bool:
        if comp.id is None or comp.id != dep.id:
            return False
        if dep.version is not None and comp.version is not None:
            return dep.version == comp.version
        return True

    def missing_dependency(
        self, available_components: Iterable[ComponentMetadata | None]
    ) -> str | None:
        """Return the id of the first required dependency not available, or None."""
        dep = self._first_missing(available_components)
        return dep.id if dep is not None else None

    def check_dependencies(
        self, available_components: Iterable[ComponentMetadata | None]
    ) -> bool:
        """Tell whether every required dependency is among the components."""
        return self._first_missing(available_components) is None


def generate_metadata_template(
    component_id: str, output_path: str | os.PathLike[str]
) -> None:
    """Write a starter metadata file for a component."""
    root = {
        "id": component_id,
        "version": _TEMPLATE_VERSION,
        "description": _TEMPLATE_DESCRIPTION,
        "dependencies": [],
        "exported_symbols": [],
        "imported_symbols": [],
        "memory_footprint": 0,
        "avg_load_time_ms": 0.0,
    }
    try:
        jsonlite.write_file(root, output_path, pretty=True)
    except OSError as exc:
        raise MetadataError(
            f"Could not write metadata to: {os.fspath(output_path)}"
        ) from exc
    print(f"Generated metadata template at: {os.fspath(output_path)}")