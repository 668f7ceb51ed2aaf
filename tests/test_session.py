"""Tests for typetutor.core.session – the typing state machine."""

from __future__ import annotations

import random
from typing import Optional

import pytest
from conftest import FirstChoiceRandom, ManualTime, StubCorpus

from typetutor.core.clock import SessionClock
from typetutor.core.errors import ConfigurationError
from typetutor.core.generator import TripletGenerator
from typetutor.core.options import SessionOptions
from typetutor.core.session import GameSession, InputResult, SlotState, TypedCharacter, join_rows
from typetutor.core.stats import evaluate

ALPHA_ROW = " ".join(["alpha"] * 15)


def make_session(
    corpus: StubCorpus,
    manual_time: ManualTime,
    time_mode: str = "15s",
    word_mode: str = "Words",
    rng: Optional[random.Random] = None,
) -> GameSession:
    generator = TripletGenerator(corpus, rng if rng is not None else FirstChoiceRandom())
    return GameSession(generator, SessionOptions(word_mode, "Eng", time_mode), SessionClock(source=manual_time))


def type_text(session: GameSession, text: str) -> list[InputResult]:
    return [session.process_typed(ch) for ch in text]


# ---------------------------------------------------------------------------
# InputResult factories
# ---------------------------------------------------------------------------

class TestInputResult:
    def test_stopped(self):
        r = InputResult.stopped()
        assert r.index == -1
        assert r.game_stopped is True
        assert r.backspace is False
        assert r.typed_char == "\0"

    def test_noop_backspace(self):
        r = InputResult.noop_backspace()
        assert r.index == -1
        assert r.backspace is True
        assert r.game_stopped is False


# ---------------------------------------------------------------------------
# Fresh session
# ---------------------------------------------------------------------------

class TestFreshSession:
    def test_first_triplet_loaded(self, stub_corpus: StubCorpus, manual_time: ManualTime):
        s = make_session(stub_corpus, manual_time)
        assert s.triplet_index == 0
        assert len(s.triplets) == 4
        assert s.target_text == f"{ALPHA_ROW} {ALPHA_ROW} {ALPHA_ROW}"
        assert s.cursor_index == 0
        assert s.correct_count == 0
        assert s.wrong_count == 0
        assert s.typed_log == []

    def test_slots_pending(self, stub_corpus: StubCorpus, manual_time: ManualTime):
        s = make_session(stub_corpus, manual_time)
        assert s.shown == list(s.target_text)
        assert set(s.states) == {SlotState.PENDING}

    def test_clock_not_started_until_typing(self, stub_corpus: StubCorpus, manual_time: ManualTime):
        s = make_session(stub_corpus, manual_time)
        manual_time.advance(100)
        assert s.remaining_seconds() == 15
        assert s.is_running()
        assert s.typing_stats().wpm == 0.0

    def test_join_rows(self):
        assert join_rows(["ab", "c", "de"]) == "ab c de"


# ---------------------------------------------------------------------------
# process_typed
# ---------------------------------------------------------------------------

class TestProcessTyped:
    def test_correct_character(self, stub_corpus: StubCorpus, manual_time: ManualTime):
        s = make_session(stub_corpus, manual_time)
        r = s.process_typed("a")
        assert r == InputResult(index=0, typed_char="a", expected_char="a", correct=True)
        assert s.cursor_index == 1
        assert s.correct_count == 1
        assert s.states[0] is SlotState.CORRECT
        assert s.typed_log == [TypedCharacter("a", True)]

    def test_wrong_character_shows_typed(self, stub_corpus: StubCorpus, manual_time: ManualTime):
        s = make_session(stub_corpus, manual_time)
        r = s.process_typed("z")
        assert r.correct is False
        assert r.expected_char == "a"
        assert s.wrong_count == 1
        assert s.shown[0] == "z"
        assert s.states[0] is SlotState.WRONG

    def test_case_sensitive(self, stub_corpus: StubCorpus, manual_time: ManualTime):
        s = make_session(stub_corpus, manual_time)
        assert s.process_typed("A").correct is False

    def test_space_compared_literally(self, stub_corpus: StubCorpus, manual_time: ManualTime):
        s = make_session(stub_corpus, manual_time)
        type_text(s, "alpha")
        assert s.process_typed(" ").correct is True
        assert s.process_typed(" ").correct is False

    def test_control_character_counts_as_wrong(self, stub_corpus: StubCorpus, manual_time: ManualTime):
        s = make_session(stub_corpus, manual_time)
        r = s.process_typed("\t")
        assert r.correct is False
        assert s.wrong_count == 1

    @pytest.mark.parametrize("value", ["", "ab"])
    def test_rejects_non_single_character(self, stub_corpus: StubCorpus, manual_time: ManualTime, value):
        s = make_session(stub_corpus, manual_time)
        with pytest.raises(ValueError):
            s.process_typed(value)

    def test_first_keystroke_starts_clock(self, stub_corpus: StubCorpus, manual_time: ManualTime):
        s = make_session(stub_corpus, manual_time)
        s.process_typed("a")
        manual_time.advance(3)
        assert s.remaining_seconds() == 12


# ---------------------------------------------------------------------------
# process_backspace
# ---------------------------------------------------------------------------

class TestProcessBackspace:
    def test_at_start_is_noop(self, stub_corpus: StubCorpus, manual_time: ManualTime):
        s = make_session(stub_corpus, manual_time)
        assert s.process_backspace() == InputResult.noop_backspace()
        assert s.cursor_index == 0

    def test_undo_wrong_keeps_wrong_count(self, manual_time: ManualTime):
        s = make_session(StubCorpus(words=["ab"]), manual_time)
        assert s.target_text.startswith("ab")
        type_text(s, "xy")
        s.process_backspace()
        s.process_backspace()
        assert s.cursor_index == 0
        assert s.correct_count == 0
        assert s.wrong_count == 2
        assert s.shown[:2] == ["a", "b"]
        assert s.states[:2] == [SlotState.PENDING, SlotState.PENDING]

    def test_undo_correct_decrements_correct(self, stub_corpus: StubCorpus, manual_time: ManualTime):
        s = make_session(stub_corpus, manual_time)
        type_text(s, "al")
        r = s.process_backspace()
        assert r == InputResult(index=1, expected_char="l", backspace=True)
        assert s.correct_count == 1
        assert s.cursor_index == 1

    def test_type_then_undo_all_restores_slots(self, stub_corpus: StubCorpus, manual_time: ManualTime):
        s = make_session(stub_corpus, manual_time)
        text = "alpxa alXha"
        type_text(s, text)
        for _ in text:
            s.process_backspace()
        assert s.cursor_index == 0
        assert s.shown == list(s.target_text)
        assert set(s.states) == {SlotState.PENDING}
        assert s.correct_count == 0
        assert s.wrong_count == 2

    def test_noop_after_stop(self, stub_corpus: StubCorpus, manual_time: ManualTime):
        s = make_session(stub_corpus, manual_time)
        type_text(s, "alp")
        manual_time.advance(20)
        assert s.process_backspace() == InputResult.noop_backspace()
        assert s.cursor_index == 3


# ---------------------------------------------------------------------------
# Timer expiry
# ---------------------------------------------------------------------------

class TestTimerExpiry:
    def test_expiry_mid_triplet(self, stub_corpus: StubCorpus, manual_time: ManualTime):
        s = make_session(stub_corpus, manual_time, time_mode="15s")
        s.process_typed("a")
        manual_time.advance(16)
        assert s.remaining_seconds() == 0
        assert s.is_running() is False
        assert s.process_typed("x") == InputResult.stopped()
        assert s.correct_count == 1

    def test_stopped_stays_stopped(self, stub_corpus: StubCorpus, manual_time: ManualTime):
        s = make_session(stub_corpus, manual_time)
        s.process_typed("a")
        manual_time.advance(15)
        assert not s.is_running()
        assert s.process_typed("l").game_stopped
        assert not s.snapshot().running

    def test_wpm_uses_capped_elapsed(self, stub_corpus: StubCorpus, manual_time: ManualTime):
        s = make_session(stub_corpus, manual_time)
        type_text(s, "alpha")
        manual_time.advance(60)
        assert s.typing_stats().wpm == pytest.approx((5 / 5) / (15 / 60))


# ---------------------------------------------------------------------------
# Triplet advance and exhaustion
# ---------------------------------------------------------------------------

class TestTripletAdvance:
    def test_advance_on_final_character(self, stub_corpus: StubCorpus, manual_time: ManualTime):
        s = make_session(stub_corpus, manual_time, time_mode="60s", rng=random.Random(1))
        triplets = s.triplets
        assert len(triplets) == 7
        target0 = s.target_text
        results = type_text(s, target0)
        assert results[-1].triplet_advanced is True
        assert not any(r.triplet_advanced for r in results[:-1])
        assert s.cursor_index == 0
        assert s.triplet_index == 1
        assert s.correct_count == len(target0)
        assert s.snapshot().rows == tuple(triplets[1])
        assert s.target_text == join_rows(triplets[1])

    def test_counters_preserved(self, stub_corpus: StubCorpus, manual_time: ManualTime):
        s = make_session(stub_corpus, manual_time)
        target = s.target_text
        type_text(s, "zz" + target[2:])
        assert s.triplet_index == 1
        assert s.correct_count == len(target) - 2
        assert s.wrong_count == 2
        assert s.typed_log == []
        assert set(s.states) == {SlotState.PENDING}

    def test_backspace_cannot_cross_triplets(self, stub_corpus: StubCorpus, manual_time: ManualTime):
        s = make_session(stub_corpus, manual_time)
        type_text(s, s.target_text)
        assert s.process_backspace() == InputResult.noop_backspace()

    def test_advance_triplet_direct(self, stub_corpus: StubCorpus, manual_time: ManualTime):
        s = make_session(stub_corpus, manual_time)
        type_text(s, "al")
        assert s.advance_triplet() is True
        assert s.correct_count == 2
        assert s.cursor_index == 0
        for _ in range(2):
            assert s.advance_triplet() is True
        assert s.advance_triplet() is False
        assert s.triplet_index == 3

    def test_exhaustion_stops_on_last_character(self, stub_corpus: StubCorpus, manual_time: ManualTime):
        s = make_session(stub_corpus, manual_time)
        for _ in range(3):
            type_text(s, s.target_text)
        last = type_text(s, s.target_text)
        assert last[-1].triplet_advanced is False
        assert last[-1].game_stopped is False
        assert s.is_running() is False
        assert s.cursor_index == len(s.target_text)
        assert s.process_typed("a") == InputResult.stopped()
        assert s.correct_count == 4 * len(s.target_text)

    def test_empty_quotes_stop_immediately(self, manual_time: ManualTime):
        s = make_session(StubCorpus(quotes=[]), manual_time, word_mode="Quotes")
        assert s.target_text == ""
        assert s.snapshot().rows == ("", "", "")
        assert s.process_typed("a") == InputResult.stopped()
        assert not s.is_running()

    def test_empty_words_leave_row_separators(self, manual_time: ManualTime):
        s = make_session(StubCorpus(words=[]), manual_time)
        assert s.target_text == "  "
        assert s.process_typed(" ").correct


# ---------------------------------------------------------------------------
# reset
# ---------------------------------------------------------------------------

class TestReset:
    def test_reset_leaves_stopped_state(self, stub_corpus: StubCorpus, manual_time: ManualTime):
        s = make_session(stub_corpus, manual_time)
        type_text(s, "alxx")
        manual_time.advance(30)
        assert not s.is_running()
        s.reset()
        assert s.is_running()
        assert s.remaining_seconds() == 15
        assert (s.cursor_index, s.correct_count, s.wrong_count) == (0, 0, 0)
        assert s.triplet_index == 0
        assert not s.clock.started

    def test_reset_twice_same_structure(self, stub_corpus: StubCorpus, manual_time: ManualTime):
        s = make_session(stub_corpus, manual_time)
        s.reset()
        first = s.snapshot()
        s.reset()
        assert s.snapshot() == first

    def test_reset_with_new_options(self, stub_corpus: StubCorpus, manual_time: ManualTime):
        s = make_session(stub_corpus, manual_time)
        s.reset(SessionOptions("Quotes", "Eng", "30s"))
        assert s.options.word_mode == "Quotes"
        assert len(s.triplets) == 5
        assert s.remaining_seconds() == 30

    def test_failed_reset_keeps_previous_session(self, stub_corpus: StubCorpus, manual_time: ManualTime):
        s = make_session(stub_corpus, manual_time)
        type_text(s, "al")
        with pytest.raises(ConfigurationError):
            s.reset(SessionOptions("Words", "Eng", "45s"))
        assert s.options.time_mode == "15s"
        assert s.cursor_index == 2
        assert s.correct_count == 2


# ---------------------------------------------------------------------------
# Snapshot
# ---------------------------------------------------------------------------

class TestSnapshot:
    def test_contents(self, stub_corpus: StubCorpus, manual_time: ManualTime):
        s = make_session(stub_corpus, manual_time)
        type_text(s, "aX")
        snap = s.snapshot()
        assert snap.rows == (ALPHA_ROW, ALPHA_ROW, ALPHA_ROW)
        assert snap.target_text == s.target_text
        assert snap.shown[:3] == ("a", "X", "p")
        assert snap.states[:3] == (SlotState.CORRECT, SlotState.WRONG, SlotState.PENDING)
        assert snap.cursor == 2
        assert snap.running is True
        assert snap.remaining_seconds == 15

    def test_snapshot_is_immutable_copy(self, stub_corpus: StubCorpus, manual_time: ManualTime):
        s = make_session(stub_corpus, manual_time)
        snap = s.snapshot()
        s.process_typed("z")
        assert snap.shown[0] == "a"
        assert snap.cursor == 0


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------

class TestScenarios:
    def test_perfect_short_run(self, stub_corpus: StubCorpus, manual_time: ManualTime):
        s = make_session(stub_corpus, manual_time, time_mode="15s")
        assert s.target_text == " ".join([ALPHA_ROW] * 3)
        typed = s.target_text[:100]
        type_text(s, typed)
        manual_time.advance(5)
        stats = s.typing_stats()
        assert stats.correct_count == len(typed)
        assert stats.wrong_count == 0
        assert stats.wpm == pytest.approx((len(typed) / 5) / (5 / 60))
        report = evaluate(stats)
        assert report.accuracy == 100.0
        assert report.rank == "legend"


# ---------------------------------------------------------------------------
# Invariants over random input
# ---------------------------------------------------------------------------

class TestRandomInputInvariants:
    @pytest.mark.parametrize("seed", range(8))
    def test_counters_and_slots(self, stub_corpus: StubCorpus, manual_time: ManualTime, seed: int):
        s = make_session(stub_corpus, manual_time, time_mode="120s", rng=random.Random(seed))
        ops = random.Random(1000 + seed)
        for _ in range(600):
            if ops.random() < 0.25:
                s.process_backspace()
            else:
                expected = s.target_text[s.cursor_index] if s.cursor_index < len(s.target_text) else "a"
                s.process_typed(expected if ops.random() < 0.8 else "#")
            if ops.random() < 0.05:
                manual_time.advance(0.5)

            assert 0 <= s.cursor_index <= len(s.target_text)
            assert len(s.typed_log) == s.cursor_index
            states = s.states
            shown = s.shown
            for i in range(len(s.target_text)):
                if i < s.cursor_index:
                    assert states[i] in (SlotState.CORRECT, SlotState.WRONG)
                else:
                    assert states[i] is SlotState.PENDING
                    assert shown[i] == s.target_text[i]

    @pytest.mark.parametrize("seed", range(4))
    def test_no_backspace_means_equality(self, stub_corpus: StubCorpus, manual_time: ManualTime, seed: int):
        s = make_session(stub_corpus, manual_time, rng=random.Random(seed))
        ops = random.Random(seed)
        target_len = len(s.target_text)
        for _ in range(target_len - 1):
            s.process_typed(ops.choice("alphbet #"))
            assert s.correct_count + s.wrong_count == s.cursor_index

    @pytest.mark.parametrize("seed", range(4))
    def test_backspace_means_surplus(self, stub_corpus: StubCorpus, manual_time: ManualTime, seed: int):
        s = make_session(stub_corpus, manual_time, rng=random.Random(seed))
        ops = random.Random(seed)
        for _ in range(40):
            s.process_typed(ops.choice("alphbet #"))
        s.process_backspace()
        assert s.correct_count + s.wrong_count >= s.cursor_index
        s.process_typed("#")
        s.process_backspace()
        assert s.correct_count + s.wrong_count > s.cursor_index
