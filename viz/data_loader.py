"""
data_loader.py — Loads automaton JSONL logs into structured Python objects
for replay in the visualization app.
"""

import json
import os
import sys
from collections import Counter

import numpy as np

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from identifier_dfa import SimulationResult, State, TraceStep

_STATE_INDEX = {State.START.value: 0, State.ACCEPT.value: 1, State.REJECT.value: 2}


class SimulationData:
    """Parsed simulation log — provides step-by-step access for the UI."""

    def __init__(self, steps: list[dict]):
        self.steps = steps
        self.num_steps = len(steps)

    # -- Access helpers -------------------------------------------------------

    def get_step(self, idx: int) -> dict:
        """Get a step by index (0-based)."""
        if 0 <= idx < self.num_steps:
            return self.steps[idx]
        return {}

    def get_run_ids(self) -> list[int]:
        return sorted({step.get("run", 0) for step in self.steps})

    def get_run(self, run_id: int) -> list[dict]:
        """All logged events belonging to one run, in order."""
        return [s for s in self.steps if s.get("run", 0) == run_id]

    def get_inputs(self) -> list[str]:
        """Input string of each run, in run order."""
        return [s.get("input", "") for s in self.steps if s.get("phase") == "init"]

    def get_dfa_path(self, run_id: int | None = None) -> list[dict]:
        """Extract the state path: list of {step, state, symbol, category}."""
        steps = self.steps if run_id is None else self.get_run(run_id)
        path = []
        for step in steps:
            if step.get("phase") not in ("init", "transition"):
                continue
            path.append({
                "step": step.get("step", 0),
                "state": step.get("dfa_state"),
                "symbol": step.get("character"),
                "category": step.get("category"),
            })
        return path

    def get_trace(self, run_id: int) -> list[TraceStep]:
        """Rebuild the TraceStep records of a run."""
        return [
            TraceStep.from_dict(s) for s in self.get_run(run_id)
            if s.get("phase") == "transition"
        ]

    def get_result(self, run_id: int) -> SimulationResult:
        """Rebuild the SimulationResult of a run from its log events."""
        events = self.get_run(run_id)
        if not events:
            raise KeyError(f"No run {run_id} in log")
        trace = tuple(self.get_trace(run_id))
        final = trace[-1].to_state if trace else State.START
        return SimulationResult(input_str=events[0].get("input", ""),
                                trace=trace, final_state=final)

    def get_verdict(self, run_id: int) -> bool | None:
        for s in self.get_run(run_id):
            if s.get("phase") == "verdict":
                return s.get("accepted")
        return None

    def get_recommendation(self, run_id: int) -> dict:
        for s in self.get_run(run_id):
            if s.get("phase") == "recommendation":
                return s.get("recommendation", {})
        return {}

    def get_state_series(self, run_id: int) -> np.ndarray:
        """State index (0=q0, 1=q1, 2=qR) after each init/transition event."""
        return np.array(
            [_STATE_INDEX[p["state"]] for p in self.get_dfa_path(run_id)],
            dtype=np.int64,
        )

    def get_category_counts(self) -> dict[str, int]:
        return dict(Counter(
            s.get("category") for s in self.steps if s.get("phase") == "transition"
        ))

    # -- Narrative -----------------------------------------------------------

    def generate_thought(self, step_idx: int) -> str:
        """Generate a human-readable narrative for a given step."""
        step = self.get_step(step_idx)
        if not step:
            return "No data for this step."

        phase = step.get("phase", "unknown")
        lines = [f"Step {step.get('step', '?')} (run {step.get('run', 0)}, input {step.get('input', '')!r})", ""]

        if phase == "init":
            lines.append("PHASE: Initialization")
            lines.append(f"Starting state: {step.get('dfa_state')}")
        elif phase == "transition":
            lines.append("PHASE: Transition")
            lines.append(
                f"INPUT: '{step.get('character')}' at index {step.get('index')} "
                f"({step.get('char_class')})"
            )
            lines.append(
                f"TRANSITION: {step.get('from_state')} → {step.get('to_state')} "
                f"[{step.get('category')}]"
            )
        elif phase == "verdict":
            verdict = "ACCEPTED" if step.get("accepted") else "REJECTED"
            lines.append(f"PHASE: Verdict — {verdict}")
        elif phase == "recommendation":
            rec = step.get("recommendation", {})
            lines.append(f"PHASE: Recommendation — {rec.get('label')} ({rec.get('score')}/5)")
            for p in rec.get("positives", []):
                lines.append(f"  + {p}")
            for s in rec.get("suggestions", []):
                lines.append(f"  → {s}")

        lines.append("")
        lines.append(f"RESULT: Current state = {step.get('dfa_state')}")
        return "\n".join(lines)


def load_simulation(path: str) -> SimulationData:
    """Load a JSONL simulation log file."""
    steps = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line:
                steps.append(json.loads(line))
    return SimulationData(steps)
