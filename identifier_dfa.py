"""
IdentifierDFA — A deterministic finite automaton that recognizes identifiers.

States:
  q0 (start)  — nothing consumed yet
  q1 (accept) — a valid identifier so far
  qR (reject) — absorbing, every character loops back here

Characters are bucketed into classes (letter, digit, underscore, other)
before lookup so the transition table stays small and total.
"""

import string
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

import numpy as np


class State(str, Enum):
    """The three automaton states."""
    START = "q0"
    ACCEPT = "q1"
    REJECT = "qR"

    @property
    def label(self) -> str:
        return _STATE_LABELS[self]


_STATE_LABELS = {
    State.START: "Start",
    State.ACCEPT: "Accept",
    State.REJECT: "Reject",
}


class CharClass(str, Enum):
    """Input alphabet after bucketing."""
    LETTER = "letter"
    DIGIT = "digit"
    UNDERSCORE = "underscore"
    OTHER = "other"


class RuleCategory(str, Enum):
    """Why a transition fired. Used for labeling only."""
    VALID_START = "valid-start"
    VALID_CONTINUATION = "valid-continuation"
    INVALID_START = "invalid-start"
    INVALID_CONTINUATION = "invalid-continuation"
    ALREADY_REJECTED = "already-rejected"

    @property
    def reason(self) -> str:
        return _CATEGORY_REASONS[self]


_CATEGORY_REASONS = {
    RuleCategory.VALID_START: "Valid first character (letter or underscore)",
    RuleCategory.VALID_CONTINUATION: "Valid continuation (letter, digit, or underscore)",
    RuleCategory.INVALID_START: "Invalid first character (must be letter or underscore)",
    RuleCategory.INVALID_CONTINUATION: "Invalid character (only letters, digits, underscores allowed)",
    RuleCategory.ALREADY_REJECTED: "Already rejected, character ignored",
}

_LETTERS = frozenset(string.ascii_letters)
_DIGITS = frozenset(string.digits)


def classify_char(ch: str) -> CharClass:
    """Bucket a single character. Anything outside ASCII [A-Za-z0-9_] is OTHER."""
    if ch in _LETTERS:
        return CharClass.LETTER
    if ch in _DIGITS:
        return CharClass.DIGIT
    if ch == "_":
        return CharClass.UNDERSCORE
    return CharClass.OTHER


# ── Transition table ────────────────────────────────────────────────────────

def _build_table():
    table = {}
    for cc in CharClass:
        if cc in (CharClass.LETTER, CharClass.UNDERSCORE):
            table[(State.START, cc)] = (State.ACCEPT, RuleCategory.VALID_START)
        else:
            table[(State.START, cc)] = (State.REJECT, RuleCategory.INVALID_START)

        if cc is CharClass.OTHER:
            table[(State.ACCEPT, cc)] = (State.REJECT, RuleCategory.INVALID_CONTINUATION)
        else:
            table[(State.ACCEPT, cc)] = (State.ACCEPT, RuleCategory.VALID_CONTINUATION)

        table[(State.REJECT, cc)] = (State.REJECT, RuleCategory.ALREADY_REJECTED)
    return MappingProxyType(table)


# (state, char class) -> (next state, category); read-only after import
TRANSITION_TABLE = _build_table()


# ── Value objects ───────────────────────────────────────────────────────────

@dataclass(frozen=True)
class TraceStep:
    """One consumed character."""
    index: int
    character: str
    from_state: State
    to_state: State
    category: RuleCategory

    @property
    def reason(self) -> str:
        return self.category.reason

    @property
    def transition(self) -> str:
        return f"({self.from_state.value}, {self.character!r}) → {self.to_state.value}"

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "character": self.character,
            "from_state": self.from_state.value,
            "to_state": self.to_state.value,
            "category": self.category.value,
        }

    @staticmethod
    def from_dict(d: dict) -> "TraceStep":
        return TraceStep(
            index=int(d["index"]),
            character=d["character"],
            from_state=State(d["from_state"]),
            to_state=State(d["to_state"]),
            category=RuleCategory(d["category"]),
        )


@dataclass(frozen=True)
class SimulationResult:
    """Full trace plus verdict for one input string."""
    input_str: str
    trace: tuple = field(default_factory=tuple)
    final_state: State = State.START

    @property
    def accepted(self) -> bool:
        return self.final_state is State.ACCEPT

    def prefix(self, n: int) -> "SimulationResult":
        """Partial result after the first n steps, derived by slicing the trace."""
        n = max(0, min(n, len(self.trace)))
        steps = self.trace[:n]
        final = steps[-1].to_state if steps else State.START
        return SimulationResult(input_str=self.input_str[:n], trace=steps, final_state=final)

    def state_path(self) -> list:
        """Visited states, starting with q0."""
        return [State.START] + [s.to_state for s in self.trace]

    def first_rejection(self) -> TraceStep | None:
        """The step that moved the automaton into qR, if any."""
        for s in self.trace:
            if s.to_state is State.REJECT:
                return s
        return None

    def to_dict(self) -> dict:
        return {
            "input": self.input_str,
            "trace": [s.to_dict() for s in self.trace],
            "final_state": self.final_state.value,
            "accepted": self.accepted,
        }


# ── Automaton ───────────────────────────────────────────────────────────────

class IdentifierDFA:
    """
    Executes the identifier automaton against input strings.

    Holds no per-run state: every call to run() builds a fresh
    SimulationResult, so a single instance can be shared freely.
    """

    states = (State.START, State.ACCEPT, State.REJECT)
    alphabet = tuple(CharClass)
    start_state = State.START
    accept_states = frozenset({State.ACCEPT})

    def __init__(self, table=TRANSITION_TABLE):
        self.transitions = table

    def step(self, state: State, ch: str) -> tuple[State, RuleCategory]:
        """Apply the transition rule to one character."""
        return self.transitions[(state, classify_char(ch))]

    def run(self, input_str: str) -> SimulationResult:
        """Consume the whole string and return the trace and verdict."""
        state = self.start_state
        trace = []
        for i, ch in enumerate(input_str):
            next_state, category = self.step(state, ch)
            trace.append(TraceStep(
                index=i,
                character=ch,
                from_state=state,
                to_state=next_state,
                category=category,
            ))
            state = next_state
        return SimulationResult(input_str=input_str, trace=tuple(trace), final_state=state)

    def is_accepted(self, input_str: str) -> bool:
        return self.run(input_str).accepted

    def transition_matrix(self) -> np.ndarray:
        """Target-state indices as a (states × char classes) integer matrix."""
        index = {s: i for i, s in enumerate(self.states)}
        m = np.zeros((len(self.states), len(self.alphabet)), dtype=np.int64)
        for i, s in enumerate(self.states):
            for j, cc in enumerate(self.alphabet):
                m[i, j] = index[self.transitions[(s, cc)][0]]
        return m


_default_dfa = IdentifierDFA()


def run(input_str: str) -> SimulationResult:
    return _default_dfa.run(input_str)


run_validation = run
