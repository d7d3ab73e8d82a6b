"""Delivery of function call and return events from the interpreter.

``SysProfileInstrumentation`` installs a ``sys.setprofile`` handler on the
current thread and forwards each call/return event to two callbacks as a
``CallSite``. Python functions and builtins are both reported; frames that
belong to the pyprofi package itself are skipped so the profiler does not
appear in its own report.
"""

from __future__ import annotations

import os
import sys
from types import CodeType, FrameType
from typing import Any, Callable, Dict, List, Optional, Protocol, Tuple

from pyprofi.profiling.identity import CallSite

EventCallback = Callable[[CallSite], None]

#: Directory of the installed pyprofi package; frames from here are not reported.
PACKAGE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

_CALL_EVENTS = frozenset(("call", "c_call"))
_RETURN_EVENTS = frozenset(("return", "c_return", "c_exception"))


class Instrumentation(Protocol):
    """Source of call/return notifications used by ``Profiler``."""

    @property
    def installed(self) -> bool: ...

    def install(
        self, on_call: EventCallback, on_return: EventCallback, frequency: int = 0
    ) -> None: ...

    def remove(self) -> None: ...


class SysProfileInstrumentation:
    """``sys.setprofile``-based instrumentation for the calling thread.

    Sampling: with ``frequency`` 0 or 1 every call is delivered; with N > 1
    only every Nth call event is delivered. The return of a skipped call is
    skipped too, so delivered events always pair up. A return with no
    recorded call (the handler was installed mid-call) is delivered as-is.
    """

    def __init__(self, skip_dirs: Optional[List[str]] = None):
        """Initialize the instrumentation.

        Args:
            skip_dirs: Directories whose code is never reported. Defaults to
                the pyprofi package directory.
        """
        dirs = skip_dirs if skip_dirs is not None else [PACKAGE_DIR]
        self._skip_prefixes = tuple(os.path.join(d, "") for d in dirs)
        self._installed = False
        self._previous: Any = None
        # code objects compare by body, so sites are cached by object id;
        # the entry holds the code object so the id is not reused meanwhile
        self._sites: Dict[int, Tuple[CodeType, Optional[CallSite]]] = {}

    @property
    def installed(self) -> bool:
        return self._installed

    def install(
        self, on_call: EventCallback, on_return: EventCallback, frequency: int = 0
    ) -> None:
        """Start delivering events to ``on_call`` and ``on_return``.

        Installing again replaces the previous callbacks.
        """
        if self._installed:
            self.remove()
        self._previous = sys.getprofile()
        handler = self._make_handler(on_call, on_return, frequency)
        self._installed = True
        sys.setprofile(handler)

    def remove(self) -> None:
        """Stop delivering events and restore the previous profile function.

        Cached call sites are dropped with the handler.
        """
        if not self._installed:
            return
        sys.setprofile(self._previous)
        self._previous = None
        self._installed = False
        self._sites.clear()

    def _site_for_code(self, code: CodeType) -> Optional[CallSite]:
        entry = self._sites.get(id(code))
        if entry is not None and entry[0] is code:
            return entry[1]
        site = None
        if not code.co_filename.startswith(self._skip_prefixes):
            site = CallSite.from_code(code)
        self._sites[id(code)] = (code, site)
        return site

    def _make_handler(
        self, on_call: EventCallback, on_return: EventCallback, frequency: int
    ) -> Callable[[FrameType, str, Any], None]:
        site_for_code = self._site_for_code
        every = max(int(frequency), 1)
        sampled: List[bool] = []
        seen = 0

        def handler(frame: FrameType, event: str, arg: Any) -> None:
            nonlocal seen
            if event in _CALL_EVENTS:
                owner = site_for_code(frame.f_code)
                if owner is None:
                    return
                site = owner if event == "call" else CallSite.from_builtin(arg)
                seen += 1
                take = every == 1 or (seen - 1) % every == 0
                sampled.append(take)
                if take:
                    on_call(site)
            elif event in _RETURN_EVENTS:
                owner = site_for_code(frame.f_code)
                if owner is None:
                    return
                site = owner if event == "return" else CallSite.from_builtin(arg)
                if not sampled or sampled.pop():
                    on_return(site)

        return handler
