"""
Presets & configuration for the identifier validator front-ends.

Animation speed only paces playback in the display layer; the automaton
never sees it.
"""

from dataclasses import dataclass, field

from identifier_dfa import SimulationResult, run
from name_analyzer import Recommendation, analyze


DEFAULT_SPEED_MS = 500
MIN_SPEED_MS = 100
MAX_SPEED_MS = 1000
SPEED_STEP_MS = 100

DEFAULT_LOG_DIR = "logs"


@dataclass(frozen=True)
class ExamplePreset:
    """A named demonstration input."""
    name: str
    description: str
    expected_valid: bool

    def run(self) -> SimulationResult:
        return run(self.name)

    def recommend(self) -> Recommendation | None:
        result = self.run()
        if not result.accepted:
            return None
        return analyze(self.name, self.description)

    def matches_expectation(self) -> bool:
        return self.run().accepted == self.expected_valid

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "expected_valid": self.expected_valid,
        }


EXAMPLE_PRESETS = (
    ExamplePreset("myVariable", "A variable to store user data", True),
    ExamplePreset("_counter", "A counter for iterations", True),
    ExamplePreset("x123", "X-coordinate position", True),
    ExamplePreset("123abc", "ID number with prefix", False),
    ExamplePreset("my-var", "My special variable", False),
    ExamplePreset("$price", "Price of an item", False),
)


def get_preset(name: str) -> ExamplePreset:
    for p in EXAMPLE_PRESETS:
        if p.name == name:
            return p
    raise KeyError(f"Unknown preset '{name}'")


@dataclass
class ValidatorConfig:
    """Display-layer settings."""
    speed_ms: int = DEFAULT_SPEED_MS
    log_dir: str = DEFAULT_LOG_DIR
    presets: tuple = field(default_factory=lambda: EXAMPLE_PRESETS)

    def __post_init__(self):
        self.speed_ms = validate_speed(self.speed_ms)

    @property
    def interval_seconds(self) -> float:
        return self.speed_ms / 1000.0

    @staticmethod
    def from_dict(d: dict) -> "ValidatorConfig":
        return ValidatorConfig(
            speed_ms=d.get("speed_ms", DEFAULT_SPEED_MS),
            log_dir=d.get("log_dir", DEFAULT_LOG_DIR),
        )


def validate_speed(speed_ms) -> int:
    """Coerce to int and check the allowed pacing range."""
    try:
        value = int(speed_ms)
    except (TypeError, ValueError):
        raise ValueError(f"Animation speed must be a number, got {speed_ms!r}")
    if not MIN_SPEED_MS <= value <= MAX_SPEED_MS:
        raise ValueError(
            f"Animation speed {value}ms outside {MIN_SPEED_MS}-{MAX_SPEED_MS}ms"
        )
    return value
