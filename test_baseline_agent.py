import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from unittest import mock

import numpy as np

from slide2048.agents.baseline import RandomBaselineAgent, evaluate, play_game
from slide2048.game.game_2048 import Game2048
from slide2048.game.moves import Direction
from slide2048 import play


class TestRandomBaselineAgent(unittest.TestCase):

    def test_chooses_only_valid_moves(self):
        game = Game2048(seed=0)
        game.board = np.array([
            [2, 0, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0]
        ])
        agent = RandomBaselineAgent(seed=0)
        for _ in range(10):
            self.assertIn(agent.choose_action(game), [Direction.RIGHT, Direction.DOWN])

    def test_no_action_when_game_over(self):
        game = Game2048(seed=0)
        game.board = np.array([
            [2, 4, 2, 4],
            [4, 2, 4, 2],
            [2, 4, 2, 4],
            [4, 2, 4, 2]
        ])
        self.assertIsNone(RandomBaselineAgent(seed=0).choose_action(game))

    def test_play_game_runs_to_the_end(self):
        game = Game2048(seed=3)
        stats = play_game(RandomBaselineAgent(seed=3), game=game)
        self.assertTrue(game.is_game_over() or game.is_won())
        self.assertEqual(stats["score"], game.current_score())
        self.assertGreater(stats["steps"], 0)

    def test_play_game_respects_step_cap(self):
        stats = play_game(RandomBaselineAgent(seed=1), game=Game2048(seed=1), max_steps=5)
        self.assertEqual(stats["steps"], 5)

    def test_evaluate_is_reproducible(self):
        first = evaluate(RandomBaselineAgent(seed=7), n_games=2, seed=7, show_progress=False)
        second = evaluate(RandomBaselineAgent(seed=7), n_games=2, seed=7, show_progress=False)
        self.assertEqual(first, second)
        self.assertGreater(first["best_score"], 0)
        self.assertTrue(0.0 <= first["win_rate"] <= 1.0)


class TestTerminalShell(unittest.TestCase):

    def setUp(self):
        self.game = Game2048(seed=0)

    def test_quit(self):
        running, messages = play.handle_command(self.game, "q")
        self.assertFalse(running)

    def test_invalid_input(self):
        running, messages = play.handle_command(self.game, "x")
        self.assertTrue(running)
        self.assertIn("Invalid input", messages[0])

    def test_restart(self):
        self.game.board = np.array([
            [2, 2, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0]
        ])
        play.handle_command(self.game, "a")
        self.assertEqual(self.game.current_score(), 4)

        running, _ = play.handle_command(self.game, "r")
        self.assertTrue(running)
        self.assertEqual(self.game.current_score(), 0)

    def test_blocked_move_message(self):
        self.game.board = np.array([
            [2, 4, 0, 0],
            [4, 0, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0]
        ])
        _, messages = play.handle_command(self.game, "a")
        self.assertIn("Invalid move. Try another direction.", messages)

    def test_game_over_announced(self):
        self.game.board = np.array([
            [2, 4, 2, 4],
            [4, 2, 4, 2],
            [2, 4, 2, 4],
            [4, 2, 4, 2]
        ])
        _, messages = play.handle_command(self.game, "w")
        self.assertIn("Game over", messages[0])

    def test_main_loop_saves_high_score(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "high_score.json")
            commands = iter(["a", "d", "w", "s"] * 5 + ["q"])
            output = io.StringIO()
            with mock.patch("builtins.input", lambda _: next(commands)), redirect_stdout(output):
                play.main(["--seed", "0", "--high-score-file", path])

            self.assertIn("Welcome to 2048!", output.getvalue())
            self.assertIn("Best score:", output.getvalue())


if __name__ == "__main__":
    unittest.main()
