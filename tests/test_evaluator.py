import random
import unittest

from mazecore.maze.evaluator import LevelEvaluator, LevelRun, moves_for_path
from mazecore.maze.generator import generate_level, solve_level
from mazecore.maze.grid import Dir, Pos
from mazecore.maze.level import GeneratedLevel, LevelMode

from maze_test_utils import corridor


def corridor_level(width, start, exit_pos, mode, key_pos=None, checkpoints=None):
    return GeneratedLevel(
        maze=corridor(width),
        start=Pos(start, 0),
        exit=Pos(exit_pos, 0),
        opt_len=abs(exit_pos - start),
        mode=mode,
        key_pos=Pos(key_pos, 0) if key_pos is not None else None,
        checkpoints=[Pos(x, 0) for x in (checkpoints or [])],
    )


class LevelRunTests(unittest.TestCase):
    def test_blocked_move_keeps_position(self) -> None:
        run = LevelRun(corridor_level(5, 0, 4, LevelMode.BASE))
        self.assertFalse(run.move(Dir.N))
        self.assertFalse(run.move("W"))
        self.assertEqual(run.player, Pos(0, 0))
        self.assertEqual(run.blocked_moves, 2)
        self.assertEqual(run.moves, [])

    def test_base_level_is_won_on_the_exit(self) -> None:
        run = LevelRun(corridor_level(3, 0, 2, LevelMode.BASE))
        self.assertTrue(run.exit_unlocked)
        run.move("E")
        self.assertFalse(run.won)
        run.move("E")
        self.assertTrue(run.won)
        self.assertFalse(run.move("W"))

    def test_exit_stays_locked_without_the_key(self) -> None:
        run = LevelRun(corridor_level(5, 0, 2, LevelMode.KEY, key_pos=4))
        self.assertEqual(run.next_target, Pos(4, 0))
        run.move("E")
        run.move("E")
        self.assertEqual(run.player, Pos(2, 0))
        self.assertFalse(run.won)
        run.move("E")
        run.move("E")
        self.assertTrue(run.has_key)
        self.assertEqual(run.next_target, Pos(2, 0))
        run.move("W")
        run.move("W")
        self.assertTrue(run.won)

    def test_checkpoints_count_only_in_order(self) -> None:
        run = LevelRun(corridor_level(6, 0, 5, LevelMode.SEQUENCE, checkpoints=[4, 2]))
        run.move("E")
        run.move("E")
        self.assertEqual(run.seq_index, 0)
        run.move("E")
        run.move("E")
        self.assertEqual(run.seq_index, 1)
        run.move("E")
        self.assertEqual(run.player, Pos(5, 0))
        self.assertFalse(run.won)
        for _ in range(3):
            run.move("W")
        self.assertEqual(run.seq_index, 2)
        self.assertTrue(run.exit_unlocked)
        for _ in range(3):
            run.move("E")
        self.assertTrue(run.won)
        self.assertEqual(len(run.moves), 11)

    def test_string_mode_still_locks_the_exit(self) -> None:
        level = GeneratedLevel(
            maze=corridor(5),
            start=Pos(0, 0),
            exit=Pos(2, 0),
            opt_len=2,
            mode="KEY",
            key_pos=Pos(4, 0),
        )
        self.assertIs(level.mode, LevelMode.KEY)
        self.assertEqual(level.to_dict(include_maze=False)["mode"], "KEY")
        run = LevelRun(level)
        run.move("E")
        run.move("E")
        self.assertFalse(run.won)
        self.assertFalse(run.exit_unlocked)

    def test_unknown_mode_string_raises(self) -> None:
        with self.assertRaises(ValueError):
            GeneratedLevel(corridor(2), Pos(0, 0), Pos(1, 0), 1, "MAZE")

    def test_reset_returns_to_start(self) -> None:
        run = LevelRun(corridor_level(5, 0, 2, LevelMode.KEY, key_pos=1))
        run.move("E")
        self.assertTrue(run.has_key)
        run.reset()
        self.assertEqual(run.player, Pos(0, 0))
        self.assertFalse(run.has_key)
        self.assertEqual(run.moves, [])


class LevelEvaluatorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.evaluator = LevelEvaluator()

    def test_optimal_route_scores_full_efficiency(self) -> None:
        for mode in LevelMode:
            with self.subTest(mode=mode):
                level = generate_level(9, 9, mode, rng=random.Random(7))
                route = solve_level(level)
                result = self.evaluator.evaluate(level, moves_for_path(route.path))
                self.assertTrue(result.completed, result.message)
                self.assertEqual(result.steps, route.dist)
                self.assertEqual(result.optimal_steps, route.dist)
                self.assertAlmostEqual(result.efficiency, 1.0)
                self.assertEqual(result.blocked_moves, 0)
                self.assertEqual(result.final_position, level.exit)

    def test_missing_key_is_reported(self) -> None:
        level = corridor_level(5, 0, 2, LevelMode.KEY, key_pos=4)
        result = self.evaluator.evaluate(level, ["E", "E"])
        self.assertFalse(result.completed)
        self.assertFalse(result.has_key)
        self.assertIn("key", result.message)
        self.assertIsNone(result.efficiency)
        self.assertEqual(result.optimal_steps, 6)

    def test_partial_sequence_is_reported(self) -> None:
        level = corridor_level(6, 0, 5, LevelMode.SEQUENCE, checkpoints=[4, 2])
        result = self.evaluator.evaluate(level, ["E"] * 5)
        self.assertFalse(result.completed)
        self.assertEqual(result.checkpoints_reached, 1)
        self.assertIn("1 of 2", result.message)

    def test_detour_lowers_efficiency(self) -> None:
        level = corridor_level(4, 1, 3, LevelMode.BASE)
        result = self.evaluator.evaluate(level, ["W", "E", "E", "E"])
        self.assertTrue(result.completed)
        self.assertEqual(result.steps, 4)
        self.assertAlmostEqual(result.efficiency, 0.5)
        self.assertEqual(result.path[0], Pos(1, 0))
        self.assertEqual(result.path[-1], Pos(3, 0))

    def test_moves_after_the_win_are_ignored(self) -> None:
        level = corridor_level(3, 0, 1, LevelMode.BASE)
        result = self.evaluator.evaluate(level, ["E", "E", "W"])
        self.assertTrue(result.completed)
        self.assertEqual(result.steps, 1)

    def test_result_dict(self) -> None:
        level = corridor_level(3, 0, 2, LevelMode.BASE)
        payload = self.evaluator.evaluate(level, ["E", "N", "E"]).to_dict()
        self.assertEqual(payload["mode"], "BASE")
        self.assertTrue(payload["completed"])
        self.assertEqual(payload["blocked_moves"], 1)
        self.assertEqual(payload["final_position"], {"x": 2, "y": 0})

    def test_evaluate_many(self) -> None:
        level = corridor_level(3, 0, 2, LevelMode.BASE)
        results = self.evaluator.evaluate_many([(level, ["E", "E"]), (level, ["E"])])
        self.assertEqual([r.completed for r in results], [True, False])

    def test_invalid_direction_raises(self) -> None:
        with self.assertRaises(ValueError):
            self.evaluator.evaluate(corridor_level(3, 0, 2, LevelMode.BASE), ["E", "up"])


class MovesForPathTests(unittest.TestCase):
    def test_translates_adjacent_cells(self) -> None:
        path = [Pos(0, 0), Pos(1, 0), Pos(1, 1), Pos(0, 1), Pos(0, 0)]
        self.assertEqual(moves_for_path(path), [Dir.E, Dir.S, Dir.W, Dir.N])

    def test_rejects_jumps(self) -> None:
        with self.assertRaises(ValueError):
            moves_for_path([Pos(0, 0), Pos(2, 0)])


if __name__ == "__main__":
    unittest.main()
