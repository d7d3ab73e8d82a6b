"""Function identity derived from call-site metadata.

A ``CallSite`` holds whatever the interpreter could tell us about a function
at the moment of a call or return event; any field may be missing. ``resolve``
applies the documented defaults and yields a hashable ``FunctionIdentity``
used as the report registry key and as the report's display title.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from types import CodeType
from typing import Any, List, Optional

#: Name used when the function has no usable name.
DEFAULT_NAME = "anonymous"

#: Source used for natively implemented (builtin) functions.
DEFAULT_SOURCE = "C_FUNC"

#: Definition line used when none is available.
DEFAULT_LINE = 0

#: ``source : name : line`` with source and name capped at 50 and 40 characters.
FORMAT_TITLE = "%-50.50s: %-40.40s: %-20s"

#: Width of the FILE column.
SOURCE_WIDTH = 50

_ELLIPSIS = "..."


def format_title(source: str, name: str, line: int) -> str:
    """Format identity fields into the fixed-width report title."""
    return FORMAT_TITLE % (source, name, "%04d" % line)


def _display_roots() -> List[str]:
    roots = [os.getcwd()] + [p for p in sys.path if isinstance(p, str) and p]
    result = []
    for root in roots:
        root = os.path.abspath(root)
        # a filesystem root would make every path relative
        if os.path.dirname(root) != root:
            result.append(root)
    return result


def short_source(source: str, width: int = SOURCE_WIDTH) -> str:
    """Shorten a source file name for the FILE column.

    Absolute paths are made relative to the deepest containing directory
    among the working directory and ``sys.path`` entries. Whatever is still
    longer than ``width`` keeps its tail behind a leading ``...``, so the
    file name itself stays visible.
    """
    if os.path.isabs(source):
        best = ""
        for root in _display_roots():
            if len(root) > len(best) and source.startswith(os.path.join(root, "")):
                best = root
        if best:
            source = os.path.relpath(source, best)
    if len(source) > width:
        source = _ELLIPSIS + source[len(source) - (width - len(_ELLIPSIS)) :]
    return source


@dataclass(frozen=True)
class FunctionIdentity:
    """Resolved identity of a profiled function.

    Attributes:
        source: File the function was defined in, or ``DEFAULT_SOURCE``.
        name: Qualified function name, or ``DEFAULT_NAME``.
        line: First line of the definition, or ``DEFAULT_LINE``.
    """

    source: str
    name: str
    line: int

    @property
    def title(self) -> str:
        """Fixed-width display title with the source shortened for display."""
        return format_title(short_source(self.source), self.name, self.line)


@dataclass(frozen=True)
class CallSite:
    """Raw call-site metadata for one call or return event.

    Attributes:
        source: Defining file name, if known.
        name: Function name, if known.
        line: Definition line, if known.
        native: True for builtins and other C-implemented callables.
    """

    source: Optional[str] = None
    name: Optional[str] = None
    line: Optional[int] = None
    native: bool = False

    @classmethod
    def from_code(cls, code: CodeType) -> CallSite:
        """Build a call site from a Python code object."""
        return cls(
            source=code.co_filename,
            name=getattr(code, "co_qualname", code.co_name),
            line=code.co_firstlineno,
        )

    @classmethod
    def from_builtin(cls, func: Any) -> CallSite:
        """Build a call site from a builtin function or method.

        Module-level functions outside ``builtins`` are qualified with their
        module, so ``math.sqrt`` and ``cmath.sqrt`` stay distinct.
        """
        name = getattr(func, "__qualname__", None) or getattr(func, "__name__", None)
        module = getattr(func, "__module__", None)
        if isinstance(name, str) and isinstance(module, str) and module != "builtins":
            name = f"{module}.{name}"
        return cls(name=name, native=True)

    def resolve(self) -> FunctionIdentity:
        """Apply defaults to missing or malformed fields."""
        source = self.source if isinstance(self.source, str) and self.source else None
        name = self.name if isinstance(self.name, str) and self.name else None
        line = self.line
        if isinstance(line, bool) or not isinstance(line, int) or line < 0:
            line = DEFAULT_LINE
        return FunctionIdentity(
            source=source or DEFAULT_SOURCE,
            name=name or DEFAULT_NAME,
            line=line,
        )
