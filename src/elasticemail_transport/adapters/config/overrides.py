"""Parse and apply ``--set SECTION.KEY=VALUE`` CLI overrides to Config."""

from __future__ import annotations

from dataclasses import dataclass
from typing import cast

import orjson
from lib_layered_config import Config

CoercedValue = str | int | float | bool | None | list[object] | dict[str, object]
"""Union of types that :func:`coerce_value` can produce."""

#: Settings whose value is always taken literally. An API key made of digits,
#: or a sender spelled ``null``, must not turn into a number or ``None``.
TEXT_SETTINGS: frozenset[tuple[str, ...]] = frozenset(
    {
        ("elasticemail", "api_key"),
        ("elasticemail", "base_url"),
        ("elasticemail", "from_address"),
    }
)


@dataclass(frozen=True, slots=True)
class ConfigOverride:
    """A single parsed configuration override."""

    section: str
    key_path: tuple[str, ...]
    value: CoercedValue


def parse_override(raw: str) -> ConfigOverride:
    """Split a ``SECTION.KEY[.SUBKEY...]=VALUE`` string into a ConfigOverride.

    The first dot separates the top-level section from the key path.
    The first ``=`` separates the full dotted path from the value.
    Values are coerced via :func:`coerce_value`, except for the
    :data:`TEXT_SETTINGS`, which keep the raw string.

    Raises:
        ValueError: If the string lacks ``=``, has no dot in the key, or has
            empty section/key components.

    Examples:
        >>> override = parse_override("elasticemail.timeout=12.5")
        >>> override.section, override.key_path, override.value
        ('elasticemail', ('timeout',), 12.5)

        >>> parse_override("elasticemail.api_key=1234567890").value
        '1234567890'

        >>> parse_override("lib_log_rich.payload_limits.max_chars=8192").key_path
        ('payload_limits', 'max_chars')
    """
    if "=" not in raw:
        raise ValueError(f"Invalid override {raw!r}: must contain '='")

    path_part, value_str = raw.split("=", maxsplit=1)
    if "." not in path_part:
        raise ValueError(f"Invalid override {raw!r}: key must contain at least one dot (SECTION.KEY)")

    section, *keys = path_part.split(".")
    if not section:
        raise ValueError(f"Invalid override {raw!r}: section name is empty")
    if not all(keys):
        raise ValueError(f"Invalid override {raw!r}: key path contains empty component")

    key_path = tuple(keys)
    value = value_str if (section, *key_path) in TEXT_SETTINGS else coerce_value(value_str)
    return ConfigOverride(section=section, key_path=key_path, value=value)


def coerce_value(raw: str) -> CoercedValue:
    """Coerce a raw string value using JSON parsing with string fallback.

    Attempts ``orjson.loads`` first (handling booleans, numbers, null, arrays,
    objects). Falls back to the raw string if JSON parsing fails.

    Examples:
        >>> coerce_value("30")
        30
        >>> coerce_value("false")
        False
        >>> coerce_value('["ops@example.com"]')
        ['ops@example.com']
        >>> coerce_value("noreply@example.com")
        'noreply@example.com'
        >>> coerce_value("")
        ''
    """
    if raw == "":
        return ""
    try:
        return orjson.loads(raw)
    except (orjson.JSONDecodeError, ValueError):
        return raw


def _nest_override(target: dict[str, dict[str, object]], override: ConfigOverride) -> None:
    """Build a nested override dict from a parsed ConfigOverride.

    Creates intermediate dicts as needed. The resulting dict structure
    is passed to ``Config.with_overrides()`` for merge.

    Raises:
        TypeError: When an intermediate key already holds a non-table value.

    Example:
        >>> tree: dict[str, dict[str, object]] = {}
        >>> _nest_override(tree, ConfigOverride(section="elasticemail", key_path=("api_key",), value="k"))
        >>> tree
        {'elasticemail': {'api_key': 'k'}}
    """
    node: dict[str, object] = target.setdefault(override.section, {})
    for part in override.key_path[:-1]:
        existing = node.setdefault(part, {})
        if not isinstance(existing, dict):
            raise TypeError(f"Expected dict at key {part!r}, got {type(existing).__name__}")
        node = cast("dict[str, object]", existing)
    node[override.key_path[-1]] = override.value


def apply_overrides(config: Config, raw_overrides: tuple[str, ...]) -> Config:
    """Deep-merge CLI overrides into a Config instance.

    Returns the original Config if ``raw_overrides`` is empty.

    Raises:
        ValueError: If any override string is malformed.

    Examples:
        >>> cfg = Config({"elasticemail": {"timeout": 30.0}}, {})
        >>> apply_overrides(cfg, ("elasticemail.timeout=5",))["elasticemail"]["timeout"]
        5
        >>> apply_overrides(cfg, ()) is cfg
        True
    """
    if not raw_overrides:
        return config

    overrides: dict[str, dict[str, object]] = {}
    for raw in raw_overrides:
        _nest_override(overrides, parse_override(raw))
    return config.with_overrides(overrides)


__all__ = [
    "TEXT_SETTINGS",
    "CoercedValue",
    "ConfigOverride",
    "apply_overrides",
    "coerce_value",
    "parse_override",
]
