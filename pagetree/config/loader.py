"""Load build configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .models import BuildConfig, BuildConfigError

_PATH_KEYS = {
    "source": "source_dir",
    "output": "output_dir",
    "templates": "templates_dir",
}
_VALUE_KEYS = ("template", "converter", "converter_timeout", "pygments_style")


def load_build_config(
    path: Path | None = None, **overrides: typ.Any
) -> BuildConfig:
    """Build a :class:`BuildConfig` from an optional YAML file and overrides.

    Parameters
    ----------
    path : Path, optional
        YAML file with any of the keys ``source``, ``output``, ``templates``,
        ``template``, ``converter``, ``converter_timeout`` and
        ``pygments_style``. Relative directories resolve against the file's
        own directory.
    **overrides
        :class:`BuildConfig` field values; ``None`` means "not given".
        Explicit values win over the file, the file wins over defaults.

    Returns
    -------
    BuildConfig
        Unvalidated configuration; call :meth:`BuildConfig.validate` before
        building.

    Raises
    ------
    FileNotFoundError
        If ``path`` is given but does not exist.
    BuildConfigError
        If the file cannot be read or parsed as YAML, is not a mapping,
        contains unknown keys, or an override names an unknown field.

    Examples
    --------
    >>> from pathlib import Path
    >>> config = load_build_config(None, source_dir=Path("docs"))
    >>> config.output_dir
    PosixPath('output')
    """
    values: dict[str, typ.Any] = {}
    if path is not None:
        values.update(_read_file(path))

    known = set(BuildConfig.__dataclass_fields__)
    for key, value in overrides.items():
        if key not in known:
            msg = f"Unknown build setting '{key}'."
            raise BuildConfigError(msg)
        if value is not None:
            values[key] = value
    return BuildConfig(**values)


def _read_file(path: Path) -> dict[str, typ.Any]:
    """Parse the YAML file at ``path`` into BuildConfig keyword arguments."""
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        with path.open("r", encoding="utf-8") as handle:
            loaded = loader.load(handle) or {}
    except YAMLError as exc:
        detail = " ".join(str(exc).split())
        msg = f"Invalid YAML in configuration file '{path}': {detail}"
        raise BuildConfigError(msg) from exc
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"Cannot read configuration file '{path}': {exc}"
        raise BuildConfigError(msg) from exc
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise BuildConfigError(msg)

    unknown = sorted(set(loaded) - set(_PATH_KEYS) - set(_VALUE_KEYS))
    if unknown:
        msg = f"Unknown keys in '{path}': {', '.join(map(str, unknown))}."
        raise BuildConfigError(msg)

    base_dir = path.parent
    values: dict[str, typ.Any] = {}
    for key, field in _PATH_KEYS.items():
        raw = loaded.get(key)
        if raw is not None:
            values[field] = base_dir / Path(str(raw)).expanduser()
    for key in _VALUE_KEYS:
        if loaded.get(key) is not None:
            values[key] = loaded[key]
    if "converter_timeout" in values:
        values["converter_timeout"] = _parse_timeout(values["converter_timeout"])
    return values


def _parse_timeout(value: object) -> float:
    match value:
        case bool():
            pass
        case int() | float():
            return float(value)
        case str() as text:
            try:
                return float(text.strip())
            except ValueError:
                pass
        case _:
            pass
    msg = f"converter_timeout must be a number, got {value!r}."
    raise BuildConfigError(msg)


__all__ = ["load_build_config"]
