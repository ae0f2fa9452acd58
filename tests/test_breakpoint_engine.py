"""Tests for viz/breakpoint_engine.py — covers all condition types,
breakpoint lifecycle, scanning, and serialization."""

import os
import sys
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from identifier_dfa import run
from viz.breakpoint_engine import (
    BreakpointEngine, Breakpoint, BreakpointHit, ConditionType,
)


# ── Sample data ────────────────────────────────────────────────────────────

STEPS = [s.to_dict() for s in run("ab-c1").trace]
# a: q0→q1, b: q1→q1, -: q1→qR, c: qR→qR, 1: qR→qR


class TestLifecycle:
    def test_add_generates_ids(self):
        engine = BreakpointEngine()
        a = engine.add_breakpoint(ConditionType.STATE_CHANGED)
        b = engine.add_breakpoint(ConditionType.STATE_CHANGED)
        assert a.id == "bp_0"
        assert b.id == "bp_1"

    def test_custom_id(self):
        engine = BreakpointEngine()
        bp = engine.add_breakpoint(ConditionType.ENTERED_STATE, target="qR", bp_id="rej")
        assert engine.breakpoints["rej"] is bp

    def test_remove(self):
        engine = BreakpointEngine()
        bp = engine.add_breakpoint(ConditionType.STATE_CHANGED)
        assert engine.remove_breakpoint(bp.id) is True
        assert engine.remove_breakpoint(bp.id) is False

    def test_toggle(self):
        engine = BreakpointEngine()
        bp = engine.add_breakpoint(ConditionType.STATE_CHANGED)
        assert engine.toggle_breakpoint(bp.id) is False
        assert engine.find_all_breakpoints(STEPS) == []
        assert engine.toggle_breakpoint(bp.id) is True
        assert engine.toggle_breakpoint("missing") is False

    def test_clear_all(self):
        engine = BreakpointEngine()
        engine.add_breakpoint(ConditionType.STATE_CHANGED)
        engine.clear_all()
        assert engine.breakpoints == {}
        assert engine.add_breakpoint(ConditionType.STATE_CHANGED).id == "bp_0"


class TestConditions:
    def test_state_changed(self):
        engine = BreakpointEngine()
        engine.add_breakpoint(ConditionType.STATE_CHANGED)
        hits = engine.find_all_breakpoints(STEPS)
        assert [h.step for h in hits] == [0, 2]
        assert "q1 → qR" in hits[1].message

    def test_entered_reject_fires_once(self):
        engine = BreakpointEngine()
        engine.add_breakpoint(ConditionType.ENTERED_STATE, target="qR")
        hits = engine.find_all_breakpoints(STEPS)
        assert [h.step for h in hits] == [2]

    def test_category(self):
        engine = BreakpointEngine()
        engine.add_breakpoint(ConditionType.CATEGORY_IS, target="already-rejected")
        assert [h.step for h in engine.find_all_breakpoints(STEPS)] == [3, 4]

    def test_char_class(self):
        engine = BreakpointEngine()
        engine.add_breakpoint(ConditionType.CHAR_CLASS_IS, target="digit")
        hits = engine.find_all_breakpoints(STEPS)
        assert [h.step for h in hits] == [4]
        assert "'1'" in hits[0].message

    def test_invalid_start(self):
        engine = BreakpointEngine()
        engine.add_breakpoint(ConditionType.CATEGORY_IS, target="invalid-start")
        steps = [s.to_dict() for s in run("9x").trace]
        assert engine.find_next_breakpoint(steps).step == 0


class TestScanning:
    def test_find_next(self):
        engine = BreakpointEngine()
        engine.add_breakpoint(ConditionType.STATE_CHANGED)
        assert engine.find_next_breakpoint(STEPS).step == 0
        assert engine.find_next_breakpoint(STEPS, from_step=1).step == 2
        assert engine.find_next_breakpoint(STEPS, from_step=3) is None

    def test_valid_trace_has_no_rejection(self):
        engine = BreakpointEngine()
        engine.add_breakpoint(ConditionType.ENTERED_STATE, target="qR")
        steps = [s.to_dict() for s in run("valid_name").trace]
        assert engine.find_next_breakpoint(steps) is None

    def test_hit_type(self):
        engine = BreakpointEngine()
        engine.add_breakpoint(ConditionType.STATE_CHANGED)
        assert isinstance(engine.evaluate_step(STEPS[0])[0], BreakpointHit)


class TestSerialization:
    def test_round_trip(self):
        bp = Breakpoint(id="x", condition=ConditionType.CATEGORY_IS, target="valid-start")
        d = bp.to_dict()
        assert d["condition"] == "category_is"
        assert Breakpoint.from_dict(d) == bp

    def test_summary(self):
        engine = BreakpointEngine()
        engine.add_breakpoint(ConditionType.ENTERED_STATE, target="qR")
        summary = engine.get_breakpoint_summary()
        assert summary[0]["target"] == "qR"
        assert summary[0]["enabled"] is True
