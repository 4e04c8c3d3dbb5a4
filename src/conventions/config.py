"""Loading conventions from configuration files.

Conventions can be declared in TOML or YAML instead of code:

    [[conventions]]
    match = "derived_from"                      # or "type"
    target = "myapp.services:IService"
    contract_type = "myapp.services:IService"   # optional
    contract_name = "service.{name}"            # optional template
    metadata = { lifetime = "shared" }          # optional

``contract_name`` is formatted per matched type with ``{name}``,
``{qualname}`` and ``{module}``. Files are searched in:

1. conventions.toml
2. pyproject.toml [tool.conventions] section

YAML files (``.yaml`` / ``.yml``) need PyYAML: pip install conventions[yaml]
"""

from __future__ import annotations

import importlib
import tomllib
from pathlib import Path
from typing import Any

from .errors import ConventionConfigError, MissingDependencyError, ReferenceResolutionError
from .logging import ConventionLogger, get_logger
from .registry import ConventionBuilder

logger = get_logger("config")

MATCH_KINDS = ("type", "derived_from")


def resolve_reference(reference: str) -> Any:
    """Import the object named by a ``package.module:Attr`` reference."""
    module_name, sep, attr_path = reference.partition(":")
    if not sep or not module_name or not attr_path:
        raise ReferenceResolutionError(reference, "expected 'module:attribute'")

    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise ReferenceResolutionError(reference, str(e)) from e

    for attr in attr_path.split("."):
        try:
            obj = getattr(obj, attr)
        except AttributeError as e:
            raise ReferenceResolutionError(reference, f"no attribute '{attr}'") from e
    return obj


def load_conventions(path: Path, builder: ConventionBuilder | None = None) -> ConventionBuilder:
    """Load conventions from a TOML or YAML file.

    Args:
        path: Convention file
        builder: Registry to append to (default: a new one)

    Returns:
        The registry holding the loaded conventions
    """
    path = Path(path)
    if builder is None:
        builder = ConventionBuilder()

    if path.suffix in (".yaml", ".yml"):
        data = _read_yaml(path)
    else:
        try:
            data = tomllib.loads(path.read_text())
        except tomllib.TOMLDecodeError as e:
            raise ConventionConfigError(f"Invalid TOML: {e}", path=path) from e

    return _register_all(data.get("conventions", []), builder, path)


def load_conventions_from_config(
    directory: Path, builder: ConventionBuilder | None = None
) -> ConventionBuilder:
    """Load conventions from the project files in ``directory``.

    Looks for conventions in:
    1. conventions.toml
    2. pyproject.toml [tool.conventions] section
    """
    directory = Path(directory).resolve()
    if builder is None:
        builder = ConventionBuilder()

    conventions_toml = directory / "conventions.toml"
    if conventions_toml.exists():
        load_conventions(conventions_toml, builder)

    pyproject = directory / "pyproject.toml"
    if pyproject.exists():
        try:
            data = tomllib.loads(pyproject.read_text())
        except tomllib.TOMLDecodeError as e:
            raise ConventionConfigError(f"Invalid TOML: {e}", path=pyproject) from e
        section = data.get("tool", {}).get("conventions", {})
        _register_all(section.get("conventions", []), builder, pyproject)

    return builder


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        import yaml
    except ImportError as e:
        raise MissingDependencyError("pyyaml", "YAML convention files") from e

    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ConventionConfigError(f"Invalid YAML: {e}", path=path) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConventionConfigError("Top level must be a mapping", path=path)
    return data


def _register_all(entries: Any, builder: ConventionBuilder, path: Path) -> ConventionBuilder:
    if not isinstance(entries, list):
        raise ConventionConfigError("'conventions' must be a list of tables", path=path)

    log = logger.with_operation("load").with_context(path=str(path))
    for index, entry in enumerate(entries):
        _register_entry(entry, builder, path, index, log)
    log.info("Loaded conventions", entries=len(entries), registered=len(builder))
    return builder


def _register_entry(
    entry: Any, builder: ConventionBuilder, path: Path, index: int, log: ConventionLogger
) -> None:
    """Register one convention entry.

    Supported fields:
        match: "type" or "derived_from" (default)
        target: module:attr reference to the matched type (required)
        contract_type: module:attr reference
        contract_name: name template with {name}, {qualname}, {module}
        metadata: table of literal metadata values, order kept
    """
    if not isinstance(entry, dict) or "target" not in entry:
        log.warning("Skipping convention without target", index=index)
        return

    match = entry.get("match", "derived_from")
    if match not in MATCH_KINDS:
        raise ConventionConfigError(
            f"Unknown match kind '{match}' (expected one of {', '.join(MATCH_KINDS)})",
            path=path,
            index=index,
        )

    metadata = entry.get("metadata", {})
    if not isinstance(metadata, dict):
        raise ConventionConfigError("'metadata' must be a table", path=path, index=index)

    target = resolve_reference(entry["target"])
    contract_type = (
        resolve_reference(entry["contract_type"]) if "contract_type" in entry else None
    )
    contract_name = entry.get("contract_name")

    def configure(export: Any) -> None:
        if contract_type is not None:
            export.as_contract_type(contract_type)
        if contract_name is not None:
            export.as_contract_name(_name_template(contract_name))
        for name, value in metadata.items():
            export.add_metadata(name, value)

    part = builder.for_type(target) if match == "type" else builder.for_types_derived_from(target)
    part.export(configure)
    log.debug("Loaded convention", index=index, match=match)


def _name_template(template: str) -> Any:
    def render(part_type: Any) -> str:
        return template.format(
            name=getattr(part_type, "__name__", str(part_type)),
            qualname=getattr(part_type, "__qualname__", str(part_type)),
            module=getattr(part_type, "__module__", ""),
        )

    return render
