"""Three-tier symbol tables: global, imported and exported symbols."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass, field
from typing import Any, Iterator

__all__ = ["SymbolType", "Symbol", "SymbolTable", "SymbolRegistry"]

_GLOBAL_CAPACITY = 64
_IMPORTED_CAPACITY = 128
_EXPORTED_CAPACITY = 128


class SymbolType(enum.Enum):
    """Kind of entity a symbol names."""

    FUNCTION = 0
    VARIABLE = 1
    TYPE = 2


@dataclass
class Symbol:
    """A named address provided by a component, with a usage counter."""

    name: str
    address: Any
    type: SymbolType
    component_id: str
    ref_count: int = 0


class SymbolTable:
    """An ordered collection of symbols looked up by name."""

    def __init__(self, initial_capacity: int = 16) -> None:
        self._symbols: list[Symbol] = []
        self.capacity = max(1, initial_capacity)

    def __len__(self) -> int:
        return len(self._symbols)

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self._symbols)

    def add(
        self, name: str, address: Any, type: SymbolType, component_id: str
    ) -> Symbol:
        """Append a new symbol with a zero reference count and return it."""
        if len(self._symbols) >= self.capacity:
            self.capacity *= 2
        symbol = Symbol(name, address, type, component_id)
        self._symbols.append(symbol)
        return symbol

    def find(self, name: str) -> Symbol | None:
        """Return the first symbol with this name, or None."""
        return next((s for s in self._symbols if s.name == name), None)

    def remove(self, name: str) -> bool:
        """Remove the first symbol with this name; the last symbol takes its place."""
        for position, symbol in enumerate(self._symbols):
            if symbol.name == name:
                last = self._symbols.pop()
                if position < len(self._symbols):
                    self._symbols[position] = last
                return True
        return False

    def update_address(self, name: str, new_address: Any) -> bool:
        """Change the address of the named symbol; report whether it exists."""
        symbol = self.find(name)
        if symbol is None:
            return False
        symbol.address = new_address
        return True

    def copy_symbols(self, src: SymbolTable, component_filter: str | None = None) -> None:
        """Copy symbols from another table, optionally only one component's."""
        for symbol in list(src):
            if component_filter is not None and symbol.component_id != component_filter:
                continue
            self.add(symbol.name, symbol.address, symbol.type, symbol.component_id)
            # The count lands on the first symbol of that name in this table.
            target = self.find(symbol.name)
            if target is not None:
                target.ref_count = symbol.ref_count

    def component_symbols(self, component_id: str) -> list[Symbol]:
        """Return the symbols provided by one component, in table order."""
        return [s for s in self._symbols if s.component_id == component_id]

    def stats(self, table_name: str) -> str:
        """Describe the table: size, capacity, counts by type, most used symbol."""
        counts = {kind: 0 for kind in SymbolType}
        for symbol in self._symbols:
            counts[symbol.type] += 1
        lines = [
            f"Symbol Table: {table_name}",
            f"  Total symbols: {len(self._symbols)}",
            f"  Capacity: {self.capacity}",
            f"  Functions: {counts[SymbolType.FUNCTION]}",
            f"  Variables: {counts[SymbolType.VARIABLE]}",
            f"  Types: {counts[SymbolType.TYPE]}",
        ]
        most_used: Symbol | None = None
        for symbol in self._symbols:
            best = most_used.ref_count if most_used else 0
            if symbol.ref_count > best:
                most_used = symbol
        if most_used is not None:
            lines.append(
                f"  Most referenced symbol: {most_used.name} "
                f"({most_used.ref_count} references)"
            )
        return "\n".join(lines) + "\n"


@dataclass
class SymbolRegistry:
    """Global, imported and exported tables; lookups prefer exported symbols."""

    global_: SymbolTable = field(default_factory=lambda: SymbolTable(_GLOBAL_CAPACITY))
    imported: SymbolTable = field(default_factory=lambda: SymbolTable(_IMPORTED_CAPACITY))
    exported: SymbolTable = field(default_factory=lambda: SymbolTable(_EXPORTED_CAPACITY))

    def _tables_by_priority(self) -> tuple[SymbolTable, SymbolTable, SymbolTable]:
        return self.exported, self.imported, self.global_

    def resolve(self, name: str) -> Any:
        """Return the address of the named symbol, counting the use, or None."""
        for table in self._tables_by_priority():
            symbol = table.find(name)
            if symbol is not None:
                symbol.ref_count += 1
                return symbol.address
        return None

    def track_usage(self, symbol_name: str, using_component: str) -> None:
        """Report that a component uses a symbol."""
        print(f"[SYMBOL USAGE] Component '{using_component}' is using symbol '{symbol_name}'")

    def lookup_with_type(
        self, name: str, expected_type: SymbolType, using_component: str
    ) -> Any:
        """Resolve a symbol only where it has the expected type."""
        for table in self._tables_by_priority():
            symbol = table.find(name)
            if symbol is not None and symbol.type == expected_type:
                symbol.ref_count += 1
                self.track_usage(name, using_component)
                return symbol.address
        return None

    def context_aware_resolve(self, name: str, context: str, using_component: str) -> Any:
        """Resolve a symbol on behalf of a component within a named context."""
        print(
            f"[CONTEXT RESOLUTION] Resolving '{name}' in context '{context}' "
            f"for component '{using_component}'"
        )
        return self.resolve(name)

    def dependency_graph(self) -> str:
        """Render component dependencies through imported symbols as DOT."""
        components: dict[str, None] = {}
        for table in (self.global_, self.imported, self.exported):
            for symbol in table:
                components.setdefault(symbol.component_id, None)
        lines = [
            "digraph SymbolDependencies {",
            "  rankdir=LR;",
            "  node [shape=box, style=filled, fillcolor=lightblue];",
            "",
        ]
        lines.extend(f'  "{c}" [label="{c}"];' for c in components)
        lines.append("")
        for imported in self.imported:
            provider = self.exported.find(imported.name)
            if provider is not None:
                lines.append(
                    f'  "{imported.component_id}" -> "{provider.component_id}" '
                    f'[label="{imported.name}"];'
                )
        lines.append("}")
        return "\n".join(lines) + "\n"

    def write_dependency_graph(self, output_file: str | os.PathLike[str]) -> None:
        """Write the DOT dependency graph to a file."""
        with open(output_file, "w", encoding="utf-8") as handle:
            handle.write(self.dependency_graph())
        print(f"Symbol dependency graph written to {os.fspath(output_file)}")