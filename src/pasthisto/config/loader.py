from __future__ import annotations

import logging
from dataclasses import dataclass, field, is_dataclass, fields
from pathlib import Path
import typing as t

try:
    import tomllib  # py>=3.11
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore

"""TOML configuration loader (``pasthisto.toml``)."""

if t.TYPE_CHECKING:  # pragma: no cover - typing only
    from pasthisto.io.decoder import DecodeOptions

CONFIG_FILENAME = "pasthisto.toml"

# -----------------
# Dataclass schema
# -----------------

@dataclass
class DecodeSection:
    # CentrallyBin centers must be finite unless disabled
    finite_centers: bool = True

@dataclass
class CheckSection:
    pattern: str = "*.json"
    fail_fast: bool = False

@dataclass
class LoggingSection:
    level: str | None = None
    log_file: str | None = None

@dataclass
class Config:
    project_root: Path
    decode: DecodeSection = field(default_factory=DecodeSection)
    check: CheckSection = field(default_factory=CheckSection)
    logging: LoggingSection = field(default_factory=LoggingSection)

    def decode_options(self) -> "DecodeOptions":
        from pasthisto.io.decoder import DecodeOptions

        return DecodeOptions(finite_centers=self.decode.finite_centers)


# -----------------
# Helpers
# -----------------

def _load_toml(path: Path) -> dict:
    with path.open("rb") as f:
        return tomllib.load(f)


def _deep_merge(base: dict, override: dict) -> dict:
    out = dict(base)
    for k, v in override.items():
        if k in out and isinstance(out[k], dict) and isinstance(v, dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def _merge_into_dataclass(section, payload: dict):
    """Recursively merge a dict into a (possibly nested) dataclass instance."""
    for k, v in payload.items():
        if not hasattr(section, k):
            continue
        current = getattr(section, k)
        if is_dataclass(current) and isinstance(v, dict):
            _merge_into_dataclass(current, v)
        else:
            if v is not None:
                setattr(section, k, v)


# (section, key) -> accepted value type; None is only kept for unset keys
_FIELD_TYPES: dict[tuple[str, str], type] = {
    ("decode", "finite_centers"): bool,
    ("check", "pattern"): str,
    ("check", "fail_fast"): bool,
    ("logging", "level"): str,
    ("logging", "log_file"): str,
}


def _check_types(cfg: "Config") -> None:
    """Raise ValueError for a setting whose TOML value has the wrong type."""
    for (section_name, key), expected in _FIELD_TYPES.items():
        val = getattr(getattr(cfg, section_name), key)
        if val is None and section_name == "logging":
            continue
        if not isinstance(val, expected):
            raise ValueError(
                f"[config] {section_name}.{key} must be a {expected.__name__}, got {type(val).__name__} {val!r}"
            )


def _flatten_dataclass(obj, prefix: str = ""):
    """Yield (key_path, value) for leaf attributes of nested dataclasses.

    Dataclass field order is preserved to keep dumps stable across runs.
    """
    if is_dataclass(obj):
        for f in fields(obj):  # preserve declaration order
            val = getattr(obj, f.name)
            key = f"{prefix}.{f.name}" if prefix else f.name
            if is_dataclass(val):
                yield from _flatten_dataclass(val, key)
            else:
                yield key, val
    else:
        yield prefix or "value", obj


def dump_config(cfg: "Config", log_fn=print, header: bool = True):
    """Log all config settings (flattened) with a stable ordering.

    Format: [config] section.key = value
    """
    if header:
        log_fn("[config] -- begin full config dump --")
    for key, val in _flatten_dataclass(cfg):
        log_fn(f"[config] {key} = {val}")
    if header:
        log_fn("[config] -- end full config dump --")


# -----------------
# Loader
# -----------------

def load_config(
    project_root: t.Union[str, Path],
    config_path: t.Union[str, Path, None] = None,
) -> Config:
    """Build a :class:`Config` from ``<root>/pasthisto.toml`` and ``config_path``.

    Later files win; missing files are skipped and yield defaults. An explicit
    ``config_path`` that does not exist is an error.
    """
    root = Path(project_root).resolve()
    provided = Path(config_path).resolve() if config_path else None
    if provided is not None and not provided.is_file():
        raise FileNotFoundError(f"config file not found: {provided}")

    tomls: list[Path] = []
    project_toml = root / CONFIG_FILENAME
    if project_toml.is_file():
        tomls.append(project_toml)
    if provided is not None and provided not in tomls:
        tomls.append(provided)

    logger = logging.getLogger(__name__)

    data: dict = {}
    for p in tomls:
        logger.debug("[config] merging %s", p)
        data = _deep_merge(data, _load_toml(p))

    cfg = Config(project_root=root)
    for section_name in ("decode", "check", "logging"):
        payload = data.get(section_name, {})
        section = getattr(cfg, section_name)
        if isinstance(payload, dict):
            _merge_into_dataclass(section, payload)
        else:
            logger.warning(f"[config] ignoring non-table section '{section_name}'")
    _check_types(cfg)
    return cfg


__all__ = [
    "CONFIG_FILENAME",
    "Config",
    "DecodeSection",
    "CheckSection",
    "LoggingSection",
    "load_config",
    "dump_config",
]
