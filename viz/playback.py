"""
Playback — Paces a precomputed trace one step per tick.

The automaton computes the full trace eagerly; a PlaybackSession only
moves a cursor over it. A PlaybackController hands out sessions with an
increasing generation number, and starting a new one cancels the old one
so its remaining frames are dropped rather than queued.
"""

import os
import sys
import time
from dataclasses import dataclass
from typing import Callable, Optional

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from identifier_dfa import SimulationResult, State, TraceStep, run
from name_analyzer import Recommendation, analyze
from presets import DEFAULT_SPEED_MS, validate_speed


@dataclass(frozen=True)
class PlaybackFrame:
    """What the display should show after `position` steps."""
    generation: int
    position: int
    total: int
    step: Optional[TraceStep]
    current_state: State
    done: bool

    @property
    def accepted(self) -> Optional[bool]:
        """Verdict, known only once the whole trace has been shown."""
        if not self.done:
            return None
        return self.current_state is State.ACCEPT


class PlaybackSession:
    """Cursor over one SimulationResult."""

    def __init__(self, result: SimulationResult, generation: int = 0,
                 description: str = ""):
        self.result = result
        self.generation = generation
        self.description = description or ""
        self.cursor = 0
        self.cancelled = False

    @property
    def total(self) -> int:
        return len(self.result.trace)

    @property
    def done(self) -> bool:
        return self.cursor >= self.total

    def frame(self) -> PlaybackFrame:
        """The frame for the current cursor position."""
        partial = self.result.prefix(self.cursor)
        return PlaybackFrame(
            generation=self.generation,
            position=self.cursor,
            total=self.total,
            step=partial.trace[-1] if partial.trace else None,
            current_state=partial.final_state,
            done=self.done,
        )

    def advance(self) -> PlaybackFrame | None:
        """Reveal the next step. Returns None once cancelled."""
        if self.cancelled:
            return None
        if not self.done:
            self.cursor += 1
        return self.frame()

    def seek(self, position: int) -> PlaybackFrame | None:
        if self.cancelled:
            return None
        self.cursor = max(0, min(position, self.total))
        return self.frame()

    def cancel(self):
        self.cancelled = True

    def recommendation(self) -> Recommendation | None:
        """Analyzer output, available after an accepted run has been fully shown."""
        if not self.done or not self.result.accepted:
            return None
        return analyze(self.result.input_str, self.description)

    def to_dict(self) -> dict:
        return {
            "generation": self.generation,
            "input": self.result.input_str,
            "description": self.description,
            "cursor": self.cursor,
            "total": self.total,
            "done": self.done,
        }


class PlaybackController:
    """Issues playback sessions. Only the newest generation is live."""

    def __init__(self, speed_ms: int = DEFAULT_SPEED_MS):
        self.speed_ms = validate_speed(speed_ms)
        self._generation = 0
        self._session: PlaybackSession | None = None

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def current(self) -> PlaybackSession | None:
        return self._session

    def set_speed(self, speed_ms: int):
        self.speed_ms = validate_speed(speed_ms)

    def start(self, input_str: str, description: str = "") -> PlaybackSession:
        """Cancel any in-flight session and begin a new one."""
        self.cancel()
        self._generation += 1
        self._session = PlaybackSession(
            run(input_str), generation=self._generation, description=description
        )
        return self._session

    def cancel(self):
        if self._session is not None:
            self._session.cancel()
        self._session = None

    def is_current(self, generation: int) -> bool:
        return self._session is not None and self._session.generation == generation


def play(
    session: PlaybackSession,
    on_frame: Callable[[PlaybackFrame], None],
    interval_ms: int = DEFAULT_SPEED_MS,
    sleep: Callable[[float], None] = time.sleep,
) -> PlaybackFrame | None:
    """
    Blocking playback driver.

    Emits the initial frame, then sleeps interval_ms between steps. Stops
    as soon as the session is cancelled; the last emitted frame is returned.
    """
    last = None
    if session.cancelled:
        return last
    last = session.frame()
    on_frame(last)
    while not session.done:
        sleep(interval_ms / 1000.0)
        frame = session.advance()
        if frame is None:
            break
        last = frame
        on_frame(frame)
    return last
