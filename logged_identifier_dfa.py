"""
LoggedIdentifierDFA — IdentifierDFA subclass that records every run
through a SimulationLogger for later replay.
"""

from identifier_dfa import IdentifierDFA, SimulationResult
from name_analyzer import Recommendation, analyze
from simulation_logger import SimulationLogger


class LoggedIdentifierDFA(IdentifierDFA):
    """IdentifierDFA with automatic per-step logging via SimulationLogger."""

    def __init__(self, log_dir="logs"):
        super().__init__()
        self.logger = SimulationLogger(log_dir=log_dir)

    def run(self, input_str: str) -> SimulationResult:
        """Runs the automaton and logs init, each transition, and the verdict."""
        result = super().run(input_str)
        self.logger.record_result(result)
        return result

    def run_with_recommendation(
        self, input_str: str, description: str | None = None
    ) -> tuple[SimulationResult, Recommendation | None]:
        """Run, then analyze the name if it was accepted. Both are logged."""
        result = self.run(input_str)
        recommendation = None
        if result.accepted:
            recommendation = analyze(input_str, description)
            if recommendation is not None:
                self.logger.log_recommendation(input_str, recommendation)
        return result, recommendation

    def save_log(self) -> str:
        """Write the JSONL log to disk and return its path."""
        return self.logger.save()
