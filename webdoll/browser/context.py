from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, TypeAlias

WindowHandle: TypeAlias = str


@dataclass(frozen=True)
class BrowsingContext:
    """
    Position of the session inside the browsing context tree.

    ``window`` is the handle of the selected top-level context; ``frames``
    is the stack of frames entered below it, outermost first. Two equal
    values address the same document, which is what element handles rely on
    to detect that they are used outside the context they were found in.
    """

    window: Optional[WindowHandle]
    frames: tuple[str, ...] = field(default=())

    @property
    def depth(self) -> int:
        """Stack depth; 1 for a top-level context."""
        return len(self.frames) + 1

    @property
    def is_top_level(self) -> bool:
        return not self.frames

    def enter(self, frame: str) -> BrowsingContext:
        return BrowsingContext(self.window, self.frames + (frame,))

    def parent(self) -> BrowsingContext:
        if self.is_top_level:
            return self
        return BrowsingContext(self.window, self.frames[:-1])

    def top_level(self) -> BrowsingContext:
        return BrowsingContext(self.window)

    def __str__(self):
        return ' > '.join([self.window or '<unknown window>', *self.frames])
