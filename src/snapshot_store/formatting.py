"""
Default value-to-text formatter used to compare inline snapshots.
"""
from __future__ import annotations

import pprint
from collections.abc import Callable
from typing import Any

import numpy as np

Formatter = Callable[[Any], str]


def pretty_format(value: Any) -> str:
    """Render a value as stable, comparable text."""
    if isinstance(value, np.ndarray):
        return np.array2string(value, threshold=value.size + 1, separator=", ")
    if isinstance(value, np.generic):
        return repr(value.item())
    if isinstance(value, (dict, list, tuple, set, frozenset)):
        return pprint.pformat(value, sort_dicts=True)
    return repr(value)


def string_or_pretty_format(value: Any, formatter: Formatter = pretty_format) -> str:
    """Strings are compared as-is; everything else goes through ``formatter``."""
    if isinstance(value, str):
        return value
    return formatter(value)
