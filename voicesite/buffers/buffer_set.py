"""Mutable session buffers that publish change events to subscribers."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping

from voicesite.buffers.defaults import DEFAULT_MARKUP, DEFAULT_SCRIPT, DEFAULT_STYLE
from voicesite.buffers.models import BufferChange, BufferContents, BufferKind

logger = logging.getLogger(__name__)

BufferListener = Callable[[BufferChange], None]


class BufferSet:
    """The markup, style and script buffers owned by one session.

    Every mutation that actually changes content notifies subscribers once,
    after all requested buffers have been written. Writes that leave a buffer
    byte-identical are not reported.
    """

    def __init__(
        self,
        markup: str = DEFAULT_MARKUP,
        style: str = DEFAULT_STYLE,
        script: str = DEFAULT_SCRIPT,
    ) -> None:
        self._content: dict[BufferKind, str] = {
            BufferKind.markup: markup,
            BufferKind.style: style,
            BufferKind.script: script,
        }
        self._listeners: list[BufferListener] = []

    @property
    def markup(self) -> str:
        return self._content[BufferKind.markup]

    @property
    def style(self) -> str:
        return self._content[BufferKind.style]

    @property
    def script(self) -> str:
        return self._content[BufferKind.script]

    def get(self, kind: BufferKind) -> str:
        return self._content[kind]

    def snapshot(self) -> BufferContents:
        """Return a frozen copy of the current contents."""
        return BufferContents(markup=self.markup, style=self.style, script=self.script)

    def set(self, kind: BufferKind, text: str) -> bool:
        """Replace one buffer. Returns True if its content changed."""
        return bool(self.replace({kind: text}))

    def replace(self, updates: Mapping[BufferKind, str]) -> frozenset[BufferKind]:
        """Whole-field replace of the given buffers; others are untouched.

        Returns the kinds whose content changed.
        """
        changed = set()
        for kind, text in updates.items():
            kind = BufferKind(kind)
            if self._content[kind] != text:
                self._content[kind] = text
                changed.add(kind)
        if changed:
            self._emit(BufferChange(kinds=frozenset(changed)))
        return frozenset(changed)

    def load(self, contents: BufferContents) -> frozenset[BufferKind]:
        """Replace all three buffers from a frozen copy."""
        return self.replace({kind: contents.get(kind) for kind in BufferKind})

    # -- publish / subscribe -------------------------------------------------

    def subscribe(self, listener: BufferListener) -> Callable[[], None]:
        """Register a change listener. Returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _emit(self, change: BufferChange) -> None:
        for listener in list(self._listeners):
            try:
                listener(change)
            except Exception:
                logger.exception("Buffer listener failed for %s", sorted(change.kinds))
