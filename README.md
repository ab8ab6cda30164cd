# nexuslink

This package keeps track of the parts that make up a component-based program.
It records which symbols each component provides and uses, and which components depend on which.
It can also save that information as JSON.

## Install

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## What is inside

### `nexuslink.jsonlite`

A small JSON reader and writer that works with plain Python values.

- `parse(text)` reads a JSON document. It raises `JsonParseError` when the input is malformed. `JsonParseError` is a `ValueError` and carries a `position`.
- `parse_file(path)` reads and parses a UTF-8 file.
- The reader is lenient in two ways:
  - A backslash followed by any character yields that character. `\n`, `\r` and `\t` are the exceptions and yield their usual control characters.
  - When an object repeats a key, the first occurrence wins.
- `dumps(value, pretty=False)` serialises a value. With `pretty` set, it indents by two spaces.
- Integral numbers in the 32-bit signed range are written without a fractional part. Other numbers use `%g` formatting.
- `write_file(value, path, pretty=False)` writes the output of `dumps` to a file.

### `nexuslink.symbols`

A registry of symbols kept in three tiers.

- A `SymbolTable` holds `Symbol` entries in order. Each entry has:
  - a name
  - an address (any Python object)
  - a `SymbolType`: `FUNCTION`, `VARIABLE` or `TYPE`
  - a providing component
  - a reference count
- `SymbolTable` supports `add`, `find`, `remove`, `update_address`, `copy_symbols`, `component_symbols`, `stats`, `len()` and iteration.
  - `remove` moves the last symbol into the freed place.
- `SymbolRegistry` has three tables: `global_`, `imported` and `exported`.
  - `resolve(name)` looks in `exported`, then `imported`, then `global_`. It increments the reference count of the symbol it finds and returns that symbol's address. If no symbol is found, it returns `None`.
  - `lookup_with_type(name, expected_type, using_component)` matches only symbols of the expected type, and reports the use through `track_usage`.
  - `context_aware_resolve(name, context, using_component)` prints the request, then calls `resolve`.
  - `dependency_graph()` renders the components as Graphviz DOT text. It draws an edge from each imported symbol's component to the component that exports a symbol of the same name.
  - `write_dependency_graph(path)` writes the DOT text to a file.

### `nexuslink.metadata`

Describes a component.

- `ComponentMetadata` is a dataclass that holds:
  - id, version and description
  - a list of `Dependency` entries, each with id, version and optional flag
  - exported and imported symbol names
  - `memory_footprint` and `avg_load_time_ms`
  - `usage_count` and `last_used`
- `ComponentMetadata.load(path)` reads a metadata file. If the file cannot be read or parsed, it raises `MetadataError`. Usage counters start at zero.
- `save(path)` writes indented JSON, using the dictionary that `to_json()` returns. If writing fails, it raises `MetadataError`.
- `add_dependency`, `add_exported_symbol` and `add_imported_symbol` extend the lists.
- `track_usage()` adds one to the usage count and records the current time.
- `recently_used(seconds)` tells whether the last recorded use lies less than `seconds` in the past.
- `check_dependencies(available)` tells whether every required dependency is among the available components.
  - Optional dependencies are skipped.
  - A version must match exactly when both sides state one.
- `missing_dependency(available)` returns the id of the first required dependency that is not satisfied, or `None` if there is none.
- `generate_metadata_template(component_id, output_path)` writes a starter file with version `0.1.0` and empty lists.

### `nexuslink.demo`

A walkthrough that ties the modules above together.

- `setup_environment()` returns an `Environment`. Its registry holds a global `printf` symbol and an imported `cold_function` symbol. The `Environment` works as a context manager, and `close()` drops the registry.
- `Environment.cold_function(x)` prints a loading message on first use. On each call it adds one to the imported symbol's reference count and prints its argument.
- `demo_metadata(directory=".")` does the following:
  1. Saves `cold_component.json` in `directory`.
  2. Loads the file back.
  3. Returns the loaded `ComponentMetadata`, or `None` if loading failed.
- `demo_dependency_resolution()` checks a sample application's dependencies and returns the first missing one, `"libdb"`.
- `demo_symbol_tracking(registry)` adds two exported symbols, simulates calls to them, and returns the names of any exported symbols that are still unused.

## Example

```python
from nexuslink.metadata import ComponentMetadata
from nexuslink.symbols import SymbolRegistry, SymbolType

registry = SymbolRegistry()
registry.exported.add("init_module", 0x1234, SymbolType.FUNCTION, "main_component")
assert registry.resolve("init_module") == 0x1234

app = ComponentMetadata("myapp", "1.0", "Application")
app.add_dependency("libc", "2.31", False)
libc = ComponentMetadata("libc", "2.31", "C standard library")
assert app.check_dependencies([libc])
```

## Command

```
nexuslink-demo
```

The command does the following:

1. Sets up the environment.
2. Calls `cold_function` twice.
3. Prints how many times it was called.
4. Cleans up.

The command takes no options besides `--help`. To run the metadata, dependency and symbol-tracking walkthroughs, call their functions from Python.

## What it does not do

Symbol addresses are ordinary Python objects. The "lazily loaded" function is an in-process stand-in: nothing opens, loads or unloads shared libraries. Dependency checks compare versions by exact string equality, not by version ranges.