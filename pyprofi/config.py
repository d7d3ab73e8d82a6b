"""Configuration for profiling sessions.

A ``ProfilerConfig`` can be built directly or loaded from YAML::

    hook_frequency: 0
    sort_method: count
    report_path: reports/ProFi.txt
    clock: wall
    merge_truncated_titles: false

YAML input is validated against the packaged schema
``pyprofi/schemas/config.json``.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from importlib import resources
from typing import Any, Dict

import jsonschema
import yaml

from pyprofi.types import ClockKind, SortMethod
from pyprofi.utils.yaml_utils import normalize_yaml_dict_keys

_RECOGNIZED_KEYS = {
    "hook_frequency",
    "sort_method",
    "report_path",
    "clock",
    "merge_truncated_titles",
}


@dataclass
class ProfilerConfig:
    """Session configuration; survives ``Profiler.reset``."""

    # Deliver every Nth call event; 0 delivers every event
    hook_frequency: int = 0

    sort_method: SortMethod = SortMethod.DURATION

    report_path: str = "ProFi.txt"

    # CPU time matches the classic os.clock-style measurement
    clock: ClockKind = ClockKind.CPU

    # Key reports by their truncated display title
    merge_truncated_titles: bool = False

    def __post_init__(self) -> None:
        self.sort_method = SortMethod.coerce(self.sort_method)
        self.clock = ClockKind.coerce(self.clock)
        if (
            isinstance(self.hook_frequency, bool)
            or not isinstance(self.hook_frequency, int)
            or self.hook_frequency < 0
        ):
            raise ValueError(
                f"hook_frequency must be a non-negative integer, got {self.hook_frequency!r}"
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ProfilerConfig:
        """Build a config from a mapping, rejecting unknown keys."""
        extra = set(data) - _RECOGNIZED_KEYS
        if extra:
            raise ValueError(
                f"Unrecognized key(s) in profiler config: {', '.join(sorted(extra))}. "
                f"Allowed keys are {sorted(_RECOGNIZED_KEYS)}"
            )
        return cls(**data)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> ProfilerConfig:
        return cls.from_dict(load_config_yaml(yaml_str))

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["sort_method"] = self.sort_method.name.lower()
        data["clock"] = self.clock.name.lower()
        return data


def load_config_yaml(yaml_str: str) -> Dict[str, Any]:
    """Load and validate a profiler config YAML string.

    Returns:
        Mapping of config keys to raw values; an empty document yields ``{}``.

    Raises:
        ValueError: If the document is not a mapping or fails validation.
    """
    data = yaml.safe_load(yaml_str)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("The provided YAML must map to a dictionary at top-level.")
    data = normalize_yaml_dict_keys(data)

    with (
        resources.files("pyprofi.schemas")
        .joinpath("config.json")
        .open("r", encoding="utf-8")
    ) as f:
        schema_data = json.load(f)

    try:
        jsonschema.validate(data, schema_data)
    except jsonschema.ValidationError as exc:
        where = ".".join(str(p) for p in exc.absolute_path) or "<root>"
        raise ValueError(f"Invalid profiler config at {where}: {exc.message}") from None

    return data


#: Configuration used when a Profiler is created without one.
DEFAULT_CONFIG = ProfilerConfig()
