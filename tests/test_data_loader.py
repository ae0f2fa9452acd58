"""Tests for viz/data_loader.py."""

import json
import os
import tempfile
import numpy as np
import pytest

# Add parent dir to path for imports
import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from identifier_dfa import State, run
from logged_identifier_dfa import LoggedIdentifierDFA
from viz.data_loader import SimulationData, load_simulation


def _make_log_file(steps: list[dict]) -> str:
    """Write steps to a temp JSONL file and return the path."""
    tmpdir = tempfile.mkdtemp()
    path = os.path.join(tmpdir, "simulation_log.jsonl")
    with open(path, "w") as f:
        for step in steps:
            f.write(json.dumps(step) + "\n")
    return path


def _logged_steps() -> list[dict]:
    """Two runs: 'a1' accepted with a recommendation, 'a-' rejected."""
    log_dir = tempfile.mkdtemp()
    dfa = LoggedIdentifierDFA(log_dir=log_dir)
    dfa.run_with_recommendation("a1", "first value")
    dfa.run("a-")
    return dfa.logger.load(dfa.save_log())


SAMPLE_STEPS = [
    {"step": 0, "run": 0, "phase": "init", "input": "a", "dfa_state": "q0",
     "index": None, "character": None, "char_class": None, "from_state": None,
     "to_state": None, "category": None, "accepted": None, "recommendation": {}},
    {"step": 1, "run": 0, "phase": "transition", "input": "a", "dfa_state": "q1",
     "index": 0, "character": "a", "char_class": "letter", "from_state": "q0",
     "to_state": "q1", "category": "valid-start", "accepted": None,
     "recommendation": {}},
    {"step": 2, "run": 0, "phase": "verdict", "input": "a", "dfa_state": "q1",
     "index": None, "character": None, "char_class": None, "from_state": None,
     "to_state": None, "category": None, "accepted": True, "recommendation": {}},
]


class TestLoadSimulation:
    def test_load_basic(self):
        path = _make_log_file(SAMPLE_STEPS)
        data = load_simulation(path)
        assert data.num_steps == 3

    def test_load_empty_file(self):
        path = _make_log_file([])
        data = load_simulation(path)
        assert data.num_steps == 0

    def test_load_malformed(self):
        tmpdir = tempfile.mkdtemp()
        path = os.path.join(tmpdir, "bad.jsonl")
        with open(path, "w") as f:
            f.write("{not json}\n")
        with pytest.raises(json.JSONDecodeError):
            load_simulation(path)


class TestSimulationData:
    def test_get_step(self):
        data = SimulationData(SAMPLE_STEPS)
        assert data.get_step(0)["dfa_state"] == "q0"

    def test_get_step_out_of_bounds(self):
        data = SimulationData(SAMPLE_STEPS)
        assert data.get_step(999) == {}
        assert data.get_step(-1) == {}

    def test_get_dfa_path(self):
        data = SimulationData(SAMPLE_STEPS)
        path = data.get_dfa_path()
        assert len(path) == 2
        assert path[0]["state"] == "q0"
        assert path[1]["state"] == "q1"
        assert path[1]["symbol"] == "a"
        assert path[1]["category"] == "valid-start"

    def test_runs(self):
        data = SimulationData(_logged_steps())
        assert data.get_run_ids() == [0, 1]
        assert data.get_inputs() == ["a1", "a-"]

    def test_get_result_round_trip(self):
        data = SimulationData(_logged_steps())
        assert data.get_result(0) == run("a1")
        assert data.get_result(1) == run("a-")

    def test_get_result_unknown_run(self):
        data = SimulationData(SAMPLE_STEPS)
        with pytest.raises(KeyError):
            data.get_result(7)

    def test_verdict_and_recommendation(self):
        data = SimulationData(_logged_steps())
        assert data.get_verdict(0) is True
        assert data.get_verdict(1) is False
        assert data.get_recommendation(0)["score"] >= 0
        assert data.get_recommendation(1) == {}

    def test_state_series(self):
        data = SimulationData(_logged_steps())
        assert np.array_equal(data.get_state_series(1), np.array([0, 1, 2]))

    def test_category_counts(self):
        data = SimulationData(_logged_steps())
        counts = data.get_category_counts()
        assert counts["valid-start"] == 2
        assert counts["invalid-continuation"] == 1

    def test_category_counts_match_logger(self):
        dfa = LoggedIdentifierDFA(log_dir=tempfile.mkdtemp())
        dfa.run("a-b")
        dfa.run("_x1")
        data = SimulationData(dfa.logger.load(dfa.save_log()))
        assert data.get_category_counts() == dfa.logger.category_counts()

    def test_get_trace(self):
        data = SimulationData(_logged_steps())
        trace = data.get_trace(1)
        assert trace[-1].to_state is State.REJECT


class TestNarrative:
    def test_init_thought(self):
        data = SimulationData(SAMPLE_STEPS)
        thought = data.generate_thought(0)
        assert "Initialization" in thought
        assert "q0" in thought

    def test_transition_thought(self):
        data = SimulationData(SAMPLE_STEPS)
        thought = data.generate_thought(1)
        assert "Transition" in thought
        assert "'a'" in thought
        assert "q0 → q1" in thought
        assert "valid-start" in thought

    def test_verdict_thought(self):
        data = SimulationData(SAMPLE_STEPS)
        assert "ACCEPTED" in data.generate_thought(2)

    def test_recommendation_thought(self):
        steps = _logged_steps()
        idx = next(i for i, s in enumerate(steps) if s["phase"] == "recommendation")
        thought = SimulationData(steps).generate_thought(idx)
        assert "Recommendation" in thought

    def test_empty_step(self):
        data = SimulationData([])
        assert data.generate_thought(0) == "No data for this step."
