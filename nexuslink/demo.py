"""Walk-through of the symbol registry, lazy loading and component metadata."""

from __future__ import annotations

import argparse
import os
from typing import Sequence

from .metadata import ComponentMetadata, MetadataError
from .symbols import SymbolRegistry, SymbolType

__all__ = [
    "Environment",
    "setup_environment",
    "demo_metadata",
    "demo_dependency_resolution",
    "demo_symbol_tracking",
    "main",
]

_COLD_SYMBOL = "cold_function"
_COLD_COMPONENT = "cold_component"
_METADATA_FILE = "cold_component.json"


class Environment:
    """A symbol registry together with a lazily loaded "cold" function."""

    def __init__(self, registry: SymbolRegistry | None = None) -> None:
        self.registry = registry if registry is not None else SymbolRegistry()
        self._cold_loaded = False

    def _load_cold_function(self) -> None:
        if not self._cold_loaded:
            print("Loading cold function implementation...")
            self._cold_loaded = True

    @staticmethod
    def _cold_function_impl(x: int) -> None:
        print(f"Lazy-loaded function called with {x}")

    def cold_function(self, x: int) -> None:
        """Load the cold implementation on first use, count the call, run it."""
        self._load_cold_function()
        if self.registry is not None:
            symbol = self.registry.imported.find(_COLD_SYMBOL)
            if symbol is not None:
                symbol.ref_count += 1
        self._cold_function_impl(x)

    def close(self) -> None:
        """Drop the registry."""
        self.registry = None
        print("NexusLink environment cleaned up")

    def __enter__(self) -> Environment:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def setup_environment() -> Environment:
    """Create a registry holding a global printer and the cold-function import."""
    env = Environment()
    registry = env.registry
    registry.global_.add("printf", print, SymbolType.FUNCTION, "libc")
    registry.imported.add(_COLD_SYMBOL, None, SymbolType.FUNCTION, _COLD_COMPONENT)
    print("NexusLink environment initialized")
    print(
        "Symbol tables created with capacities: "
        f"global={registry.global_.capacity}, "
        f"imported={registry.imported.capacity}, "
        f"exported={registry.exported.capacity}"
    )
    return env


def demo_metadata(directory: str | os.PathLike[str] = ".") -> ComponentMetadata | None:
    """Save metadata for the cold component, load it back and return the copy."""
    print("\n=== Metadata System Demonstration ===")
    metadata = ComponentMetadata(
        _COLD_COMPONENT,
        "0.1.0",
        "Demonstration of lazy-loaded cold function component",
    )
    metadata.add_dependency("libc", "2.31", False)
    metadata.add_dependency("libmath", "1.0", True)
    metadata.add_exported_symbol(_COLD_SYMBOL)
    metadata.add_imported_symbol("printf")
    metadata.memory_footprint = 2048
    metadata.avg_load_time_ms = 1.5

    path = os.path.join(os.fspath(directory), _METADATA_FILE)
    print("Creating metadata file...")
    try:
        metadata.save(path)
        print(f"Successfully saved metadata to {_METADATA_FILE}")
    except MetadataError:
        print("Failed to save metadata")

    metadata.track_usage()
    print(f"Component usage count: {metadata.usage_count}")

    print("\nLoading metadata from file...")
    try:
        loaded = ComponentMetadata.load(path)
    except MetadataError:
        print("Failed to load metadata")
        print("=== End of Metadata Demonstration ===\n")
        return None

    print(f"Loaded metadata for component: {loaded.id} (version {loaded.version})")
    print(f"Description: {loaded.description}")
    print(f"Exported symbols: {len(loaded.exported_symbols)}")
    print("Dependencies:")
    for dep in loaded.dependencies:
        kind = "optional" if dep.optional else "required"
        print(f"  - {dep.id} (version {dep.version}, {kind})")

    loaded.track_usage()
    print(f"Component usage count: {loaded.usage_count}")
    if loaded.recently_used(60):
        print("Component was used recently (within last minute)")
    print("=== End of Metadata Demonstration ===\n")
    return loaded


def demo_dependency_resolution() -> str | None:
    """Check an application's dependencies; return the first missing one."""
    print("\n=== Dependency Resolution Demonstration ===")
    components = [
        ComponentMetadata("libc", "2.31", "C standard library"),
        ComponentMetadata("libui", "1.0", "UI library"),
        ComponentMetadata("libnet", "0.9", "Networking library"),
    ]
    app = ComponentMetadata("myapp", "1.0", "Application with dependencies")
    app.add_dependency("libc", "2.31", False)
    app.add_dependency("libui", "1.0", False)
    app.add_dependency("libdb", "1.2", False)
    app.add_dependency("libopt", "0.5", True)

    missing = app.missing_dependency(components)
    if missing is None:
        print("All required dependencies are satisfied")
    else:
        print(f"Missing dependency: {missing}")
    print("=== End of Dependency Resolution Demonstration ===\n")
    return missing


def demo_symbol_tracking(registry: SymbolRegistry) -> list[str]:
    """Simulate calls to exported symbols; return the names still unused."""
    print("\n=== Symbol Tracking Demonstration ===")
    exported = registry.exported
    exported.add("init_module", 0x1234, SymbolType.FUNCTION, "main_component")
    exported.add("cleanup_module", 0x5678, SymbolType.FUNCTION, "main_component")

    for name, calls in (("init_module", 5), ("cleanup_module", 2)):
        symbol = exported.find(name)
        if symbol is not None:
            symbol.ref_count += calls
            print(
                f"Symbol '{symbol.name}' from component '{symbol.component_id}' "
                f"has been used {symbol.ref_count} times"
            )

    unused = [symbol.name for symbol in exported if symbol.ref_count == 0]
    for name in unused:
        print(f"Symbol '{name}' is unused and could be pruned")

    total = len(exported)
    percent = len(unused) * 100 // total if total else 0
    print(f"Found {len(unused)} unused symbols out of {total} total ({percent}%)")
    print("=== End of Symbol Tracking Demonstration ===\n")
    return unused


def main(argv: Sequence[str] | None = None) -> int:
    """Run the lazy-loading demonstration."""
    parser = argparse.ArgumentParser(
        prog="nexuslink", description="NexusLink lazy-loading demonstration."
    )
    parser.parse_args(argv)

    print("NexusLink POC Demo")
    with setup_environment() as env:
        env.cold_function(42)
        env.cold_function(1337)
        symbol = env.registry.imported.find(_COLD_SYMBOL)
        if symbol is not None:
            print(f"Cold function has been called {symbol.ref_count} times")
    return 0