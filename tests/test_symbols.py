import pytest

from nexuslink.symbols import Symbol, SymbolRegistry, SymbolTable, SymbolType


@pytest.fixture
def registry():
    return SymbolRegistry()


def test_add_and_find():
    table = SymbolTable()
    table.add("init_module", 0x1234, SymbolType.FUNCTION, "main_component")
    found = table.find("init_module")
    assert found == Symbol("init_module", 0x1234, SymbolType.FUNCTION, "main_component", 0)
    assert len(table) == 1


def test_find_missing_returns_none():
    table = SymbolTable()
    table.add("a", 1, SymbolType.VARIABLE, "c")
    assert table.find("b") is None


def test_remove_moves_last_into_place():
    table = SymbolTable()
    for name in ("a", "b", "c"):
        table.add(name, None, SymbolType.FUNCTION, "comp")
    assert table.remove("a") is True
    assert [s.name for s in table] == ["c", "b"]


def test_remove_last_and_missing():
    table = SymbolTable()
    table.add("a", None, SymbolType.FUNCTION, "comp")
    table.add("b", None, SymbolType.FUNCTION, "comp")
    assert table.remove("b") is True
    assert [s.name for s in table] == ["a"]
    assert table.remove("zzz") is False
    assert len(table) == 1


def test_update_address():
    table = SymbolTable()
    table.add("f", 1, SymbolType.FUNCTION, "comp")
    assert table.update_address("f", 99) is True
    assert table.find("f").address == 99
    assert table.update_address("g", 5) is False


def test_capacity_grows_when_full():
    table = SymbolTable(initial_capacity=1)
    table.add("a", None, SymbolType.TYPE, "comp")
    assert table.capacity == 1
    table.add("b", None, SymbolType.TYPE, "comp")
    assert table.capacity >= len(table)
    assert table.capacity == 2


def test_copy_symbols_with_filter_keeps_ref_counts():
    src = SymbolTable()
    first = src.add("x", 10, SymbolType.FUNCTION, "alpha")
    first.ref_count = 7
    src.add("y", 20, SymbolType.VARIABLE, "beta")
    dest = SymbolTable()
    dest.copy_symbols(src, "alpha")
    assert [s.name for s in dest] == ["x"]
    assert dest.find("x").ref_count == 7
    assert dest.find("x").address == 10


def test_copy_symbols_without_filter_copies_all():
    src = SymbolTable()
    src.add("x", 10, SymbolType.FUNCTION, "alpha")
    src.add("y", 20, SymbolType.VARIABLE, "beta")
    dest = SymbolTable()
    dest.copy_symbols(src, None)
    assert [(s.name, s.component_id) for s in dest] == [("x", "alpha"), ("y", "beta")]


def test_component_symbols():
    table = SymbolTable()
    table.add("a", None, SymbolType.FUNCTION, "one")
    table.add("b", None, SymbolType.FUNCTION, "two")
    table.add("c", None, SymbolType.FUNCTION, "one")
    assert [s.name for s in table.component_symbols("one")] == ["a", "c"]
    assert table.component_symbols("none") == []


def test_stats_reports_types_and_most_used():
    table = SymbolTable(initial_capacity=4)
    table.add("f", None, SymbolType.FUNCTION, "c").ref_count = 2
    table.add("v", None, SymbolType.VARIABLE, "c").ref_count = 5
    table.add("t", None, SymbolType.TYPE, "c")
    report = table.stats("exported")
    assert "Symbol Table: exported" in report
    assert "  Total symbols: 3" in report
    assert "  Functions: 1" in report
    assert "  Most referenced symbol: v (5 references)" in report


def test_stats_without_references_omits_most_used():
    table = SymbolTable()
    table.add("f", None, SymbolType.FUNCTION, "c")
    assert "Most referenced" not in table.stats("t")


def test_registry_default_capacities(registry):
    assert registry.global_.capacity == 64
    assert registry.imported.capacity == 128
    assert registry.exported.capacity == 128


def test_resolve_prefers_exported(registry):
    registry.global_.add("f", "global", SymbolType.FUNCTION, "libc")
    registry.exported.add("f", "exported", SymbolType.FUNCTION, "main")
    assert registry.resolve("f") == "exported"
    assert registry.exported.find("f").ref_count == 1
    assert registry.global_.find("f").ref_count == 0


def test_resolve_falls_back_and_missing(registry):
    registry.global_.add("printf", "addr", SymbolType.FUNCTION, "libc")
    assert registry.resolve("printf") == "addr"
    assert registry.resolve("nothing") is None


def test_lookup_with_type_skips_mismatch(registry, capsys):
    registry.exported.add("s", "var", SymbolType.VARIABLE, "a")
    registry.global_.add("s", "func", SymbolType.FUNCTION, "b")
    result = registry.lookup_with_type("s", SymbolType.FUNCTION, "user")
    assert result == "func"
    assert registry.exported.find("s").ref_count == 0
    assert registry.global_.find("s").ref_count == 1
    assert "[SYMBOL USAGE] Component 'user' is using symbol 's'" in capsys.readouterr().out


def test_lookup_with_type_not_found(registry):
    registry.exported.add("s", "var", SymbolType.VARIABLE, "a")
    assert registry.lookup_with_type("s", SymbolType.TYPE, "user") is None


def test_context_aware_resolve(registry, capsys):
    registry.imported.add("g", "addr", SymbolType.FUNCTION, "comp")
    assert registry.context_aware_resolve("g", "ctx", "user") == "addr"
    out = capsys.readouterr().out
    assert "[CONTEXT RESOLUTION] Resolving 'g' in context 'ctx' for component 'user'" in out
    assert registry.imported.find("g").ref_count == 1


def test_dependency_graph(registry):
    registry.global_.add("printf", None, SymbolType.FUNCTION, "libc")
    registry.imported.add("cold_function", None, SymbolType.FUNCTION, "app")
    registry.exported.add("cold_function", None, SymbolType.FUNCTION, "cold_component")
    graph = registry.dependency_graph()
    assert graph.startswith("digraph SymbolDependencies {\n  rankdir=LR;\n")
    assert '  "libc" [label="libc"];' in graph
    assert '  "app" -> "cold_component" [label="cold_function"];' in graph
    assert graph.index('"libc" [') < graph.index('"app" [') < graph.index('"cold_component" [')
    assert graph.endswith("}\n")


def test_write_dependency_graph(registry, tmp_path, capsys):
    registry.exported.add("f", None, SymbolType.FUNCTION, "comp")
    target = tmp_path / "graph.dot"
    registry.write_dependency_graph(target)
    assert target.read_text(encoding="utf-8") == registry.dependency_graph()
    assert "Symbol dependency graph written to" in capsys.readouterr().out


def test_write_dependency_graph_bad_path(registry, tmp_path):
    with pytest.raises(OSError):
        registry.write_dependency_graph(tmp_path / "missing" / "graph.dot")