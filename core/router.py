# core/router.py
"""
Section navigation as an explicit view lifecycle.

    IDLE ──select──▶ OPENING ──opened()──▶ SHOWN
    SHOWN ──select──▶ CLOSING ──closed()──▶ OPENING ──opened()──▶ SHOWN

closed() and opened() are the exit/enter completion callbacks; the app calls
them once the intermediate frame has been rendered. Nothing is visible
outside SHOWN, so every switch renders a no-section frame first, including a
re-selection of the section already on screen.
"""

from __future__ import annotations
from enum import Enum
from typing import List, MutableMapping, Optional

from core.models import Section


class Phase(str, Enum):
    IDLE = "idle"
    CLOSING = "closing"
    OPENING = "opening"
    SHOWN = "shown"


class RouterError(RuntimeError):
    pass


class SectionRouter:
    def __init__(self):
        self.phase = Phase.IDLE
        self.current: Optional[Section] = None
        self.pending: Optional[Section] = None
        self.frames: List[Optional[Section]] = []  # what each completed transition left on screen

    @property
    def visible(self) -> Optional[Section]:
        return self.current if self.phase is Phase.SHOWN else None

    def select(self, section: Section | str) -> None:
        self.pending = Section(section)
        if self.phase is Phase.IDLE:
            self.phase = Phase.OPENING
        elif self.phase is Phase.SHOWN:
            self.phase = Phase.CLOSING
        # CLOSING / OPENING: only the target changes

    def closed(self) -> Optional[Section]:
        """Exit transition finished; returns the section that was torn down."""
        if self.phase is not Phase.CLOSING:
            raise RouterError(f"closed() called while {self.phase.value}")
        unmounted, self.current = self.current, None
        self.phase = Phase.OPENING
        self.frames.append(None)
        return unmounted

    def opened(self) -> Section:
        """Enter transition finished; returns the section that is now mounted."""
        if self.phase is not Phase.OPENING or self.pending is None:
            raise RouterError(f"opened() called while {self.phase.value}")
        self.current, self.pending = self.pending, None
        self.phase = Phase.SHOWN
        self.frames.append(self.current)
        return self.current


def view_key(section: Section | str, name: str) -> str:
    """Session key for state that belongs to one view's lifetime."""
    return f"{Section(section).value}__{name}"


def discard_view_state(state: MutableMapping, section: Optional[Section | str]) -> int:
    """Drop a view's dialogs and draft fields when it unmounts."""
    if section is None:
        return 0
    prefix = f"{Section(section).value}__"
    doomed = [k for k in list(state.keys()) if isinstance(k, str) and k.startswith(prefix)]
    for k in doomed:
        del state[k]
    return len(doomed)
