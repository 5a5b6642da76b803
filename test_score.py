import json
import os
import tempfile
import unittest
from unittest import mock

import numpy as np

from slide2048.game.game_2048 import Game2048
from slide2048.game.score import JsonHighScoreStore, MemoryHighScoreStore, ScoreTracker


class TestScoreTracker(unittest.TestCase):

    def test_high_score_follows_current(self):
        tracker = ScoreTracker()
        tracker.add_score(4)
        tracker.add_score(8)
        self.assertEqual(tracker.current_score(), 12)
        self.assertEqual(tracker.high_score(), 12)

    def test_high_score_never_decreases_on_reset(self):
        tracker = ScoreTracker(MemoryHighScoreStore(100))
        tracker.add_score(40)
        tracker.reset()
        self.assertEqual(tracker.current_score(), 0)
        self.assertEqual(tracker.high_score(), 100)

    def test_high_score_saved_when_beaten(self):
        store = MemoryHighScoreStore(10)
        tracker = ScoreTracker(store)
        tracker.add_score(8)
        self.assertEqual(store.high_score, 10)
        tracker.add_score(8)
        self.assertEqual(store.high_score, 16)

    def test_override(self):
        store = MemoryHighScoreStore(500)
        tracker = ScoreTracker(store)
        tracker.override_high_score(0)
        self.assertEqual(tracker.high_score(), 0)
        self.assertEqual(store.high_score, 0)

    def test_shared_store_never_goes_down(self):
        store = MemoryHighScoreStore()
        older = Game2048(seed=0, store=store)
        newer = Game2048(seed=1, store=store)

        newer.board = np.array([
            [64, 64, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0]
        ])
        newer.move('left')
        self.assertEqual(store.high_score, 128)

        older.board = np.array([
            [2, 2, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0]
        ])
        older.move('left')
        self.assertEqual(older.current_score(), 4)
        self.assertEqual(store.high_score, 128, "A lower score must not overwrite the shared high score")
        self.assertEqual(older.high_score(), 128)

    def test_restart_picks_up_shared_high_score(self):
        store = MemoryHighScoreStore()
        tracker = ScoreTracker(store)
        store.save_high_score(300)
        tracker.reset()
        self.assertEqual(tracker.high_score(), 300)


class TestJsonHighScoreStore(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmp.name, "nested", "high_score.json")

    def tearDown(self):
        self.tmp.cleanup()

    def test_missing_file_loads_zero(self):
        self.assertEqual(JsonHighScoreStore(self.path).load_high_score(), 0)

    def test_save_then_load(self):
        JsonHighScoreStore(self.path).save_high_score(2048)
        with open(self.path, encoding="utf-8") as handle:
            self.assertEqual(json.load(handle), {"high_score": 2048})
        self.assertEqual(JsonHighScoreStore(self.path).load_high_score(), 2048)

    def test_save_replaces_file_whole(self):
        store = JsonHighScoreStore(self.path)
        store.save_high_score(256)
        store.save_high_score(512)
        self.assertEqual(store.load_high_score(), 512)
        self.assertEqual(os.listdir(os.path.dirname(self.path)), ["high_score.json"])

    def test_failed_save_keeps_previous_score(self):
        store = JsonHighScoreStore(self.path)
        store.save_high_score(256)

        with mock.patch("slide2048.game.score.json.dump", side_effect=OSError("disk full")):
            with self.assertRaises(OSError):
                store.save_high_score(512)

        self.assertEqual(store.load_high_score(), 256)
        self.assertEqual(os.listdir(os.path.dirname(self.path)), ["high_score.json"])

    def test_corrupt_file_loads_zero(self):
        os.makedirs(os.path.dirname(self.path))
        with open(self.path, "w", encoding="utf-8") as handle:
            handle.write("{not json")
        self.assertEqual(JsonHighScoreStore(self.path).load_high_score(), 0)

    def test_high_score_survives_sessions(self):
        store = JsonHighScoreStore(self.path)
        game = Game2048(seed=0, store=store)
        game.board = np.array([
            [2, 2, 4, 4],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0]
        ])
        game.move('left')

        next_game = Game2048(seed=1, store=JsonHighScoreStore(self.path))
        self.assertEqual(next_game.current_score(), 0)
        self.assertEqual(next_game.high_score(), 12)


if __name__ == "__main__":
    unittest.main()
