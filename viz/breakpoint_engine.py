"""
Breakpoint Engine — Conditional breakpoints for trace replay.

Define conditions (state entered, category fired, character class seen) and
the engine scans a trace to find the steps where they trigger. Steps are
dicts in TraceStep.to_dict() form; logged transition events work as well.
"""

import os
import sys
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Optional

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from identifier_dfa import classify_char


class ConditionType(str, Enum):
    """Supported breakpoint condition types."""
    STATE_CHANGED = "state_changed"       # from_state != to_state
    ENTERED_STATE = "entered_state"       # to_state == target, from another state
    CATEGORY_IS = "category_is"           # category == target
    CHAR_CLASS_IS = "char_class_is"       # class(character) == target


@dataclass
class Breakpoint:
    """A single breakpoint condition."""
    id: str
    condition: ConditionType
    target: Optional[str] = None
    enabled: bool = True

    def to_dict(self) -> dict:
        d = asdict(self)
        d["condition"] = self.condition.value
        return d

    @staticmethod
    def from_dict(d: dict) -> "Breakpoint":
        return Breakpoint(
            id=d["id"],
            condition=ConditionType(d["condition"]),
            target=d.get("target"),
            enabled=d.get("enabled", True),
        )


@dataclass
class BreakpointHit:
    """Records a breakpoint firing at a specific step."""
    breakpoint_id: str
    step: int
    message: str


class BreakpointEngine:
    """Evaluates breakpoints against trace steps."""

    def __init__(self):
        self.breakpoints: dict[str, Breakpoint] = {}
        self._next_id = 0

    def add_breakpoint(
        self,
        condition: ConditionType,
        target: str | None = None,
        bp_id: str | None = None,
    ) -> Breakpoint:
        """Add a new breakpoint. Returns the created Breakpoint."""
        if bp_id is None:
            bp_id = f"bp_{self._next_id}"
            self._next_id += 1
        bp = Breakpoint(id=bp_id, condition=condition, target=target)
        self.breakpoints[bp_id] = bp
        return bp

    def remove_breakpoint(self, bp_id: str) -> bool:
        """Remove a breakpoint by ID. Returns True if removed."""
        if bp_id in self.breakpoints:
            del self.breakpoints[bp_id]
            return True
        return False

    def toggle_breakpoint(self, bp_id: str) -> bool:
        """Toggle a breakpoint's enabled state. Returns new state."""
        if bp_id in self.breakpoints:
            self.breakpoints[bp_id].enabled = not self.breakpoints[bp_id].enabled
            return self.breakpoints[bp_id].enabled
        return False

    def clear_all(self):
        """Remove all breakpoints."""
        self.breakpoints.clear()
        self._next_id = 0

    def evaluate_step(self, step: dict) -> list[BreakpointHit]:
        """Check all enabled breakpoints against a single step."""
        hits = []
        for bp in self.breakpoints.values():
            if not bp.enabled:
                continue
            hit = self._check_breakpoint(bp, step)
            if hit is not None:
                hits.append(hit)
        return hits

    def _check_breakpoint(self, bp: Breakpoint, step: dict) -> BreakpointHit | None:
        idx = step.get("index", 0)
        ch = step.get("character")
        src = step.get("from_state")
        dst = step.get("to_state")
        category = step.get("category")

        if bp.condition == ConditionType.STATE_CHANGED:
            if src and dst and src != dst:
                return BreakpointHit(bp.id, idx, f"State changed: {src} → {dst} on {ch!r}")
        elif bp.condition == ConditionType.ENTERED_STATE:
            if dst == bp.target and src != bp.target:
                return BreakpointHit(bp.id, idx, f"Entered {dst} on {ch!r}")
        elif bp.condition == ConditionType.CATEGORY_IS:
            if category == bp.target:
                return BreakpointHit(bp.id, idx, f"{category} on {ch!r}")
        elif bp.condition == ConditionType.CHAR_CLASS_IS:
            if ch is not None and classify_char(ch).value == bp.target:
                return BreakpointHit(bp.id, idx, f"{bp.target} character {ch!r}")
        return None

    def find_next_breakpoint(
        self, steps: list[dict], from_step: int = 0
    ) -> BreakpointHit | None:
        """Scan forward from from_step; first hit or None."""
        for i in range(max(from_step, 0), len(steps)):
            hits = self.evaluate_step(steps[i])
            if hits:
                return hits[0]
        return None

    def find_all_breakpoints(self, steps: list[dict]) -> list[BreakpointHit]:
        """Scan all steps and return all breakpoint hits."""
        all_hits = []
        for step in steps:
            all_hits.extend(self.evaluate_step(step))
        return all_hits

    def get_breakpoint_summary(self) -> list[dict]:
        """Get a summary of all breakpoints for display."""
        return [bp.to_dict() for bp in self.breakpoints.values()]
