"""Tests for viz/playback.py — stepping, cancellation, and the
blocking playback driver."""

import os
import sys
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from identifier_dfa import State, run
from name_analyzer import Label
from viz.playback import PlaybackController, PlaybackFrame, PlaybackSession, play


class TestSession:
    def test_initial_frame(self):
        session = PlaybackSession(run("ab"))
        frame = session.frame()
        assert frame.position == 0
        assert frame.step is None
        assert frame.current_state is State.START
        assert frame.done is False
        assert frame.accepted is None

    def test_advance_to_end(self):
        session = PlaybackSession(run("a-"))
        f1 = session.advance()
        assert f1.position == 1
        assert f1.step.character == "a"
        assert f1.current_state is State.ACCEPT
        f2 = session.advance()
        assert f2.done
        assert f2.current_state is State.REJECT
        assert f2.accepted is False
        # stays at the end
        assert session.advance().position == 2

    def test_steps_match_trace(self):
        result = run("x_1")
        session = PlaybackSession(result)
        shown = [session.advance().step for _ in range(len(result.trace))]
        assert tuple(shown) == result.trace

    def test_empty_input_done_immediately(self):
        session = PlaybackSession(run(""))
        assert session.done
        assert session.frame().accepted is False

    def test_seek(self):
        session = PlaybackSession(run("abc"))
        assert session.seek(2).position == 2
        assert session.seek(-4).position == 0
        assert session.seek(99).done

    def test_cancel(self):
        session = PlaybackSession(run("abc"))
        session.cancel()
        assert session.advance() is None
        assert session.seek(1) is None

    def test_recommendation_after_done(self):
        session = PlaybackSession(run("_counter"), description="A counter for iterations")
        assert session.recommendation() is None
        session.seek(session.total)
        assert session.recommendation().label is Label.GOOD

    def test_no_recommendation_when_rejected(self):
        session = PlaybackSession(run("my-var"), description="My special variable")
        session.seek(session.total)
        assert session.recommendation() is None

    def test_to_dict(self):
        session = PlaybackSession(run("ab"), generation=3, description="d")
        session.advance()
        assert session.to_dict() == {
            "generation": 3, "input": "ab", "description": "d",
            "cursor": 1, "total": 2, "done": False,
        }


class TestController:
    def test_generations_increase(self):
        ctl = PlaybackController()
        a = ctl.start("abc")
        b = ctl.start("xyz")
        assert b.generation == a.generation + 1
        assert ctl.current is b

    def test_new_request_cancels_previous(self):
        ctl = PlaybackController()
        old = ctl.start("abcdef")
        old.advance()
        ctl.start("other")
        assert old.cancelled
        assert old.advance() is None
        assert not ctl.is_current(old.generation)

    def test_cancel(self):
        ctl = PlaybackController()
        s = ctl.start("abc")
        ctl.cancel()
        assert ctl.current is None
        assert s.cancelled
        assert not ctl.is_current(s.generation)

    def test_speed(self):
        ctl = PlaybackController(speed_ms=200)
        assert ctl.speed_ms == 200
        ctl.set_speed(900)
        assert ctl.speed_ms == 900
        with pytest.raises(ValueError):
            ctl.set_speed(5)

    def test_description_carried(self):
        ctl = PlaybackController()
        assert ctl.start("n", "desc").description == "desc"


class TestPlay:
    def test_emits_every_frame(self):
        frames, sleeps = [], []
        session = PlaybackSession(run("abc"))
        last = play(session, frames.append, interval_ms=250, sleep=sleeps.append)
        assert [f.position for f in frames] == [0, 1, 2, 3]
        assert sleeps == [0.25, 0.25, 0.25]
        assert last.done and last.accepted

    def test_empty_input(self):
        frames, sleeps = [], []
        last = play(PlaybackSession(run("")), frames.append, sleep=sleeps.append)
        assert len(frames) == 1
        assert sleeps == []
        assert last.accepted is False

    def test_cancel_mid_playback(self):
        ctl = PlaybackController()
        session = ctl.start("abcdef")
        frames = []

        def on_frame(frame):
            frames.append(frame)
            if frame.position == 2:
                ctl.start("interrupt")

        last = play(session, on_frame, interval_ms=100, sleep=lambda s: None)
        assert [f.position for f in frames] == [0, 1, 2]
        assert last.position == 2
        assert not last.done

    def test_already_cancelled(self):
        session = PlaybackSession(run("abc"))
        session.cancel()
        frames = []
        assert play(session, frames.append, sleep=lambda s: None) is None
        assert frames == []

    def test_frame_type(self):
        frames = []
        play(PlaybackSession(run("a")), frames.append, sleep=lambda s: None)
        assert all(isinstance(f, PlaybackFrame) for f in frames)
