"""Utilities for handling YAML parsing quirks."""

from typing import Any, Dict, TypeVar

V = TypeVar("V")


def normalize_yaml_dict_keys(data: Dict[Any, V]) -> Dict[str, V]:
    """Return a copy of ``data`` whose keys are all strings.

    YAML 1.1 turns keys such as ``yes``/``no``/``on``/``off`` into booleans
    and bare numbers into ints. Converting every key with ``str`` keeps the
    result predictable, so an accidental ``on:`` key shows up as ``"True"``
    in validation errors instead of slipping through as a bool.

    Examples:
        >>> normalize_yaml_dict_keys({True: 1, "clock": "cpu", 3: "x"})
        {'True': 1, 'clock': 'cpu', '3': 'x'}
    """
    return {str(key): value for key, value in data.items()}
