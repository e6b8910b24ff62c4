from __future__ import annotations

import logging
from collections import deque
from typing import Deque, List, Optional, Union

from .core import Action, FallingBlockGame, Lock, Outcome

logger = logging.getLogger(__name__)


class GravityClock:
    """Turns elapsed milliseconds into whole gravity pulses."""

    def __init__(self, interval_ms: int = 300) -> None:
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        self.interval_ms = interval_ms
        self.elapsed_ms = 0

    def update(self, dt_ms: int) -> int:
        self.elapsed_ms += max(0, int(dt_ms))
        pulses, self.elapsed_ms = divmod(self.elapsed_ms, self.interval_ms)
        return pulses

    def reset(self) -> None:
        self.elapsed_ms = 0


class Tick:
    """Queue marker for one gravity pulse."""

    def __repr__(self) -> str:
        return "Tick()"


TICK = Tick()

Event = Union[Action, Tick]


class GameLoop:
    """Single FIFO queue feeding commands and gravity pulses to one game.

    Every event is applied to whatever state the game holds when the event
    is dequeued, so a lock and the following spawn always finish before the
    next command is looked at.
    """

    def __init__(self, game: FallingBlockGame, clock: Optional[GravityClock] = None) -> None:
        self.game = game
        self.clock = clock or GravityClock(game.config.gravity_ms)
        self.queue: Deque[Event] = deque()

    def push(self, action: Action) -> None:
        self.queue.append(action)

    def update(self, dt_ms: int) -> List[Outcome]:
        """Enqueue due gravity pulses behind pending commands, then drain."""
        for _ in range(self.clock.update(dt_ms)):
            self.queue.append(TICK)
        return self.drain()

    def drain(self) -> List[Outcome]:
        outcomes: List[Outcome] = []
        while self.queue:
            event = self.queue.popleft()
            if isinstance(event, Tick):
                outcome = self.game.tick()
                if isinstance(outcome, Lock):
                    logger.debug("Gravity lock, next piece spawned")
                outcomes.append(outcome)
            else:
                self.game.step(event)
        return outcomes

    def reset(self) -> None:
        self.queue.clear()
        self.clock.reset()
        self.game.reset()
