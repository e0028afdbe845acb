"""
Input events and the subscription hub that delivers them
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional

# Action names
ACTION_CONFIRM = "confirm"        # start / restart / next stage
ACTION_TOGGLE_PAUSE = "toggle_pause"
ACTION_START = "start"
ACTION_PAUSE = "pause"
ACTION_RESUME = "resume"
ACTION_NEXT_STAGE = "next_stage"

ACTIONS = (
    ACTION_CONFIRM,
    ACTION_TOGGLE_PAUSE,
    ACTION_START,
    ACTION_PAUSE,
    ACTION_RESUME,
    ACTION_NEXT_STAGE,
)


@dataclass(frozen=True)
class InputEvent:
    """
    kind == "direction": name is "left"/"right", pressed tells press vs release
    kind == "action":    name is one of ACTIONS
    """
    kind: str
    name: str
    pressed: bool = True

    @classmethod
    def direction(cls, name: str, pressed: bool) -> "InputEvent":
        return cls("direction", name, pressed)

    @classmethod
    def action(cls, name: str) -> "InputEvent":
        return cls("action", name)


class Subscription:
    """Handle returned by InputSource.subscribe(); unsubscribe() is idempotent"""

    def __init__(self, source: "InputSource", handler: Callable[[InputEvent], None]):
        self._source: Optional[InputSource] = source
        self._handler = handler

    @property
    def active(self) -> bool:
        return self._source is not None

    def unsubscribe(self):
        if self._source is None:
            return
        self._source._remove(self._handler)
        self._source = None


class InputSource:
    """Fan-out of input events to subscribed handlers"""

    def __init__(self):
        self._handlers: List[Callable[[InputEvent], None]] = []

    def subscribe(self, handler: Callable[[InputEvent], None]) -> Subscription:
        self._handlers.append(handler)
        return Subscription(self, handler)

    def _remove(self, handler):
        if handler in self._handlers:
            self._handlers.remove(handler)

    @property
    def subscriber_count(self) -> int:
        return len(self._handlers)

    def emit(self, event: InputEvent):
        for handler in list(self._handlers):
            handler(event)

    def press(self, direction: str):
        self.emit(InputEvent.direction(direction, True))

    def release(self, direction: str):
        self.emit(InputEvent.direction(direction, False))

    def trigger(self, action: str):
        self.emit(InputEvent.action(action))
