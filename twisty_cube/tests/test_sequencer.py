import unittest

from twisty_cube.app.sequencer import MoveSequencer
from twisty_cube.app.timer import SessionTimer
from twisty_cube.core import CLOCKWISE, COUNTERCLOCKWISE, initialize
from twisty_cube.core.pieces import AXIS_INDEX, FACE_LAYER
from twisty_cube.logic.catalog import ALGORITHMS, THEMES
from twisty_cube.logic.moves import inverse_sequence
from twisty_cube.tests.fakes import FakeScheduler, ensure_app

PALETTE = THEMES["classic"]
SETTLE = 500
STEP = 600


def setUpModule():
    ensure_app()


class SequencerTestCase(unittest.TestCase):
    animated = True

    def setUp(self):
        self.scheduler = FakeScheduler()
        self.timer = SessionTimer(self.scheduler, clock=self.scheduler.clock)
        self.seq = MoveSequencer(
            initialize(3, PALETTE),
            self.scheduler,
            self.timer,
            settle_ms=SETTLE if self.animated else 0,
            step_ms=STEP,
        )
        self.solved = self.seq.store.to_hashable()


class TestApplyMove(SequencerTestCase):
    def test_records_history_and_count(self):
        applied = []
        self.seq.move_applied.connect(applied.append)

        self.assertTrue(self.seq.apply_move("R", CLOCKWISE))
        self.assertEqual(self.seq.history, ("R",))
        self.assertEqual(self.seq.move_count, 1)
        self.assertEqual(applied, ["R"])
        self.assertNotEqual(self.seq.store.to_hashable(), self.solved)

    def test_counterclockwise_notation(self):
        self.seq.apply_move("U", COUNTERCLOCKWISE)
        self.assertEqual(self.seq.history, ("U'",))

    def test_second_move_while_rotating_is_dropped(self):
        self.assertTrue(self.seq.apply_move("U", CLOCKWISE))
        self.assertTrue(self.seq.rotating)
        state = self.seq.store.to_hashable()
        history = self.seq.history

        self.assertFalse(self.seq.apply_move("R", CLOCKWISE))

        self.assertEqual(self.seq.store.to_hashable(), state)
        self.assertEqual(self.seq.history, history)
        self.assertEqual(self.seq.move_count, 1)

    def test_latch_released_after_settle(self):
        self.seq.apply_move("U", CLOCKWISE)
        self.scheduler.advance(SETTLE - 1)
        self.assertTrue(self.seq.rotating)
        self.scheduler.advance(1)
        self.assertFalse(self.seq.rotating)
        self.assertTrue(self.seq.apply_move("R", CLOCKWISE))
        self.assertEqual(self.seq.history, ("U", "R"))

    def test_invalid_face_is_ignored(self):
        self.assertFalse(self.seq.apply_move("X", CLOCKWISE))
        self.assertFalse(self.seq.apply_move("R", "diagonal"))
        self.assertEqual(self.seq.history, ())
        self.assertFalse(self.seq.rotating)
        self.assertEqual(self.seq.store.to_hashable(), self.solved)

    def test_first_move_starts_timer(self):
        self.assertFalse(self.timer.running)
        self.seq.apply_move("F", CLOCKWISE)
        self.assertTrue(self.timer.running)

    def test_timer_not_restarted_after_first_move(self):
        self.seq.apply_move("F", CLOCKWISE)
        self.timer.pause()
        self.scheduler.advance(SETTLE)
        self.seq.apply_move("R", CLOCKWISE)
        self.assertFalse(self.timer.running)

    def test_load_clears_everything(self):
        self.seq.apply_move("F", CLOCKWISE)
        self.seq.play_algorithm("R U")
        self.seq.load(initialize(2, PALETTE))

        self.assertEqual(self.seq.history, ())
        self.assertEqual(self.seq.move_count, 0)
        self.assertFalse(self.seq.rotating)
        self.assertFalse(self.seq.playing)
        self.assertEqual(len(self.seq.store), 8)
        self.assertEqual(self.scheduler.pending_one_shot(), 0)


class TestUndo(SequencerTestCase):
    def test_undo_restores_state_history_and_count(self):
        self.seq.apply_move("R", CLOCKWISE)
        self.scheduler.advance(SETTLE)

        self.assertTrue(self.seq.undo())

        self.assertEqual(self.seq.store.to_hashable(), self.solved)
        self.assertEqual(self.seq.history, ())
        self.assertEqual(self.seq.move_count, 0)

    def test_undo_only_removes_last_move(self):
        self.seq.apply_move("R", CLOCKWISE)
        self.scheduler.advance(SETTLE)
        after_r = self.seq.store.to_hashable()
        self.seq.apply_move("U", COUNTERCLOCKWISE)
        self.scheduler.advance(SETTLE)

        self.assertTrue(self.seq.undo())

        self.assertEqual(self.seq.history, ("R",))
        self.assertEqual(self.seq.move_count, 1)
        self.assertEqual(self.seq.store.to_hashable(), after_r)

    def test_undo_takes_the_latch(self):
        self.seq.apply_move("R", CLOCKWISE)
        self.scheduler.advance(SETTLE)
        self.seq.undo()
        self.assertTrue(self.seq.rotating)
        self.assertFalse(self.seq.apply_move("U", CLOCKWISE))

    def test_undo_empty_history_is_noop(self):
        self.assertFalse(self.seq.undo())
        self.assertEqual(self.seq.move_count, 0)
        self.assertEqual(self.seq.store.to_hashable(), self.solved)

    def test_undo_while_rotating_is_noop(self):
        self.seq.apply_move("R", CLOCKWISE)
        state = self.seq.store.to_hashable()
        self.assertFalse(self.seq.undo())
        self.assertEqual(self.seq.store.to_hashable(), state)
        self.assertEqual(self.seq.history, ("R",))


class TestPlayback(SequencerTestCase):
    def test_moves_are_spaced_by_step(self):
        finished = []
        self.seq.playback_finished.connect(lambda: finished.append(True))

        self.assertEqual(self.seq.play_algorithm("R U R' U'"), 4)
        self.assertTrue(self.seq.playing)

        self.scheduler.advance(0)
        self.assertEqual(self.seq.history, ("R",))
        self.scheduler.advance(STEP - 1)
        self.assertEqual(self.seq.history, ("R",))
        self.scheduler.advance(1)
        self.assertEqual(self.seq.history, ("R", "U"))

        self.scheduler.advance(STEP * 2)
        self.assertEqual(self.seq.history, ("R", "U", "R'", "U'"))
        self.assertFalse(self.seq.playing)
        self.assertEqual(finished, [True])

    def test_stop_playback_revokes_pending_steps(self):
        self.seq.play_algorithm("R U R' U'")
        self.scheduler.advance(0)

        self.assertTrue(self.seq.stop_playback())
        self.scheduler.advance(10 * STEP)

        self.assertEqual(self.seq.history, ("R",))
        self.assertEqual(self.scheduler.pending_one_shot(), 0)

    def test_second_algorithm_is_queued_after_the_first(self):
        self.seq.play_algorithm("R U")
        self.scheduler.advance(0)
        self.seq.play_algorithm("F")
        self.scheduler.advance(10 * STEP)
        self.assertEqual(self.seq.history, ("R", "U", "F"))

    def test_invalid_tokens_are_skipped(self):
        self.assertEqual(self.seq.play_algorithm("R Q U"), 2)
        self.scheduler.advance(10 * STEP)
        self.assertEqual(self.seq.history, ("R", "U"))

    def test_sequence_then_inverse_restores_solved(self):
        seq = "R U R' U'"
        self.seq.play_algorithm(seq)
        self.seq.play_algorithm(inverse_sequence(seq))
        self.scheduler.advance(20 * STEP)

        self.assertEqual(self.seq.store.to_hashable(), self.solved)
        self.assertEqual(len(self.seq.history), 8)

    def test_user_move_during_playback_delays_the_next_step(self):
        self.seq.play_algorithm("R U")
        self.scheduler.advance(SETTLE)
        self.assertTrue(self.seq.apply_move("F", CLOCKWISE))
        self.scheduler.advance(STEP - SETTLE)
        self.assertEqual(self.seq.history, ("R", "F"))
        self.assertTrue(self.seq.playing)

        self.scheduler.advance(SETTLE)
        self.assertEqual(self.seq.history, ("R", "F", "U"))
        self.assertFalse(self.seq.playing)

    def test_algorithm_started_after_previous_playback_keeps_first_move(self):
        self.seq.play_algorithm("R")
        self.scheduler.advance(0)
        self.assertFalse(self.seq.playing)
        self.assertTrue(self.seq.rotating)

        self.seq.play_algorithm("U R'")
        self.scheduler.advance(10 * STEP)
        self.assertEqual(self.seq.history, ("R", "U", "R'"))

    def test_algorithm_started_right_after_user_move_waits_for_settle(self):
        self.assertTrue(self.seq.apply_move("F", CLOCKWISE))
        self.seq.play_algorithm("R U")

        self.scheduler.advance(SETTLE - 1)
        self.assertEqual(self.seq.history, ("F",))
        self.scheduler.advance(1)
        self.assertEqual(self.seq.history, ("F", "R"))

        self.scheduler.advance(10 * STEP)
        self.assertEqual(self.seq.history, ("F", "R", "U"))

    def test_chaining_on_playback_finished_restores_solved(self):
        seq = "R U R' U'"
        chained = []

        def play_inverse():
            if not chained:
                chained.append(True)
                self.seq.play_algorithm(inverse_sequence(seq))

        self.seq.playback_finished.connect(play_inverse)
        self.seq.play_algorithm(seq)
        self.scheduler.advance(20 * STEP)

        self.assertEqual(len(self.seq.history), 8)
        self.assertEqual(self.seq.store.to_hashable(), self.solved)

    def test_stop_playback_while_waiting_for_latch(self):
        self.seq.apply_move("F", CLOCKWISE)
        self.seq.play_algorithm("R U")
        self.scheduler.advance(0)

        self.assertTrue(self.seq.stop_playback())
        self.scheduler.advance(10 * STEP)
        self.assertEqual(self.seq.history, ("F",))

    def test_unhashable_face_is_ignored(self):
        self.assertFalse(self.seq.apply_move(["R"], CLOCKWISE))
        self.assertFalse(self.seq.apply_move("R", ["clockwise"]))
        self.assertEqual(self.seq.history, ())
        self.assertEqual(self.seq.store.to_hashable(), self.solved)

    def test_empty_algorithm_finishes_immediately(self):
        finished = []
        self.seq.playback_finished.connect(lambda: finished.append(True))
        self.assertEqual(self.seq.play_algorithm(""), 0)
        self.assertEqual(finished, [True])


class TestInstantPlayback(SequencerTestCase):
    animated = False

    def test_no_latch(self):
        self.assertTrue(self.seq.apply_move("R", CLOCKWISE))
        self.assertFalse(self.seq.rotating)
        self.assertTrue(self.seq.apply_move("U", CLOCKWISE))

    def test_algorithm_applies_synchronously(self):
        self.assertEqual(self.seq.play_algorithm("R U R' U'"), 4)
        self.assertEqual(self.seq.history, ("R", "U", "R'", "U'"))
        self.assertFalse(self.seq.playing)

    def test_white_cross_touches_only_its_layers(self):
        before = self.seq.store.snapshot()
        alg = ALGORITHMS["white_cross"]

        self.seq.play_algorithm(alg)

        layers = [FACE_LAYER[f] for f in ("F", "R", "U")]
        changed = 0
        for old, new in zip(before, self.seq.store.pieces):
            in_layers = any(old.position[AXIS_INDEX[axis]] == sign for axis, sign in layers)
            if not in_layers:
                self.assertEqual(old, new)
            elif old != new:
                changed += 1
        self.assertGreater(changed, 0)

        self.seq.play_algorithm(inverse_sequence(alg))
        self.assertEqual(self.seq.store.snapshot(), before)

    def test_undo_instant(self):
        self.seq.apply_move("L", COUNTERCLOCKWISE)
        self.assertTrue(self.seq.undo())
        self.assertEqual(self.seq.store.to_hashable(), self.solved)
        self.assertEqual(self.seq.move_count, 0)


if __name__ == "__main__":
    unittest.main()
