"""
SimulationLogger — Captures per-step automaton state for replay.

Each run is logged as an "init" step, one "transition" step per consumed
character, a "verdict" step, and optionally a "recommendation" step.
Everything is written to a single JSONL file.
"""

import json
import os
from collections import Counter
from dataclasses import dataclass, field, asdict
from typing import Optional

from identifier_dfa import SimulationResult, State, TraceStep, classify_char


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------

@dataclass
class StepLog:
    """One logged event."""
    step: int
    run: int
    phase: str = "transition"
    input: str = ""

    # Current automaton state after this event
    dfa_state: Optional[str] = None

    # Transition-specific
    index: Optional[int] = None
    character: Optional[str] = None
    char_class: Optional[str] = None
    from_state: Optional[str] = None
    to_state: Optional[str] = None
    category: Optional[str] = None

    # Verdict / recommendation
    accepted: Optional[bool] = None
    recommendation: dict = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------

class SimulationLogger:
    """Captures automaton runs and writes them to JSONL."""

    def __init__(self, log_dir: str = "logs"):
        self.log_dir = log_dir
        self.log_path = os.path.join(log_dir, "simulation_log.jsonl")
        self.steps: list[StepLog] = []
        self._step_counter = 0
        self._run_counter = -1

    # -- Step logging --------------------------------------------------------

    def log_init(self, input_str: str) -> StepLog:
        """Open a new run at q0."""
        self._run_counter += 1
        return self._append(StepLog(
            step=self._step_counter,
            run=self._run_counter,
            phase="init",
            input=input_str,
            dfa_state=State.START.value,
        ))

    def log_transition(self, input_str: str, trace_step: TraceStep) -> StepLog:
        """Record one consumed character."""
        return self._append(StepLog(
            step=self._step_counter,
            run=self._run_counter,
            phase="transition",
            input=input_str,
            dfa_state=trace_step.to_state.value,
            index=trace_step.index,
            character=trace_step.character,
            char_class=classify_char(trace_step.character).value,
            from_state=trace_step.from_state.value,
            to_state=trace_step.to_state.value,
            category=trace_step.category.value,
        ))

    def log_verdict(self, result: SimulationResult) -> StepLog:
        return self._append(StepLog(
            step=self._step_counter,
            run=self._run_counter,
            phase="verdict",
            input=result.input_str,
            dfa_state=result.final_state.value,
            accepted=result.accepted,
        ))

    def log_recommendation(self, input_str: str, recommendation) -> StepLog:
        return self._append(StepLog(
            step=self._step_counter,
            run=self._run_counter,
            phase="recommendation",
            input=input_str,
            dfa_state=State.ACCEPT.value,
            accepted=True,
            recommendation=recommendation.to_dict(),
        ))

    def record_result(self, result: SimulationResult) -> list[StepLog]:
        """Log a complete run: init, every transition, verdict."""
        logged = [self.log_init(result.input_str)]
        for s in result.trace:
            logged.append(self.log_transition(result.input_str, s))
        logged.append(self.log_verdict(result))
        return logged

    def _append(self, step: StepLog) -> StepLog:
        self.steps.append(step)
        self._step_counter += 1
        return step

    def clear(self):
        self.steps.clear()
        self._step_counter = 0
        self._run_counter = -1

    # -- Summary -------------------------------------------------------------

    def category_counts(self) -> dict[str, int]:
        """How often each transition category fired across all runs."""
        return dict(Counter(s.category for s in self.steps if s.phase == "transition"))

    @property
    def num_runs(self) -> int:
        return self._run_counter + 1

    # -- Serialization -------------------------------------------------------

    def _serialize_step(self, step: StepLog) -> dict:
        """Convert a StepLog to a JSON-serializable dict."""
        return asdict(step)

    def save(self) -> str:
        """Write all steps to JSONL file. Returns the path written."""
        os.makedirs(self.log_dir, exist_ok=True)
        with open(self.log_path, "w", encoding="utf-8") as f:
            for step in self.steps:
                line = json.dumps(self._serialize_step(step), separators=(",", ":"))
                f.write(line + "\n")
        return self.log_path

    def load(self, path: str | None = None) -> list[dict]:
        """Load a JSONL log file and return list of step dicts."""
        p = path or self.log_path
        rows = []
        with open(p, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if line:
                    rows.append(json.loads(line))
        return rows
