import json
import unittest

from app import app as flask_app  # noqa: E402
import app as app_mod             # noqa: E402


class FakeClock:
    def __init__(self, t=0.0):
        self.t = t

    def __call__(self):
        return self.t

    def advance(self, seconds):
        self.t += seconds


class TestFlaskAPI(unittest.TestCase):
    def setUp(self):
        # Monkeypatch the session clock so movement timing is deterministic
        self._orig_clock = app_mod.app_clock
        self.clock = FakeClock()
        app_mod.app_clock = self.clock
        self.client = flask_app.test_client()

    def tearDown(self):
        app_mod.app_clock = self._orig_clock

    def _post(self, path, payload):
        return self.client.post(path, data=json.dumps(payload), content_type="application/json")

    def _new(self, **payload):
        r = self._post("/api/new", payload)
        self.assertEqual(r.status_code, 200)
        data = r.get_json()
        self.assertTrue(data["ok"])
        return data["sessionId"], data["state"]

    def test_given_index_when_requested_then_reports_configuration(self):
        r = self.client.get("/")
        self.assertEqual(r.status_code, 200)
        d = r.get_json()
        self.assertTrue(d["ok"])
        self.assertEqual(d["name"], "egghunt")
        self.assertIn("boardSize", d)

    def test_given_new_game_when_posted_then_returns_fresh_state(self):
        sid, state = self._new(seed=3, boardSize=10, itemCount=5)
        self.assertTrue(sid)
        self.assertEqual(state["avatar"], [0, 0])
        self.assertEqual(len(state["items"]), 5)
        self.assertNotIn([0, 0], state["items"])
        self.assertEqual(state["score"], 0)
        self.assertFalse(state["gameOver"])
        self.assertIsNone(state["duration"])

    def test_given_full_small_board_when_walking_every_cell_then_game_won_with_duration(self):
        sid, state = self._new(seed=1, boardSize=2, itemCount=3)
        self.assertEqual(len(state["items"]), 3)

        r = self._post("/api/press", {"sessionId": sid, "direction": "ArrowRight"})
        d = r.get_json()
        self.assertEqual(d["state"]["avatar"], [1, 0])
        self.assertEqual(d["state"]["score"], 1)
        self._post("/api/release", {"sessionId": sid, "direction": "ArrowRight"})

        self._post("/api/press", {"sessionId": sid, "direction": "ArrowDown"})
        self.clock.advance(0.125)
        d = self._post("/api/state", {"sessionId": sid}).get_json()
        self.assertEqual(d["state"]["avatar"], [1, 1])
        self.assertEqual(d["state"]["score"], 2)
        # Pad-style release carries no direction
        self._post("/api/release", {"sessionId": sid})

        self._post("/api/press", {"sessionId": sid, "direction": "ArrowLeft"})
        self.clock.advance(0.125)
        d = self._post("/api/state", {"sessionId": sid}).get_json()
        state = d["state"]
        self.assertEqual(state["avatar"], [0, 1])
        self.assertEqual(state["score"], 3)
        self.assertEqual(state["items"], [])
        self.assertTrue(state["gameOver"])
        self.assertAlmostEqual(state["duration"], 0.25)

    def test_given_unknown_direction_when_pressed_then_ignored(self):
        sid, _ = self._new(seed=2)
        r = self._post("/api/press", {"sessionId": sid, "direction": "Enter"})
        self.assertEqual(r.status_code, 200)
        d = r.get_json()
        self.assertIsNone(d["state"]["heldDirection"])
        self.assertEqual(d["state"]["avatar"], [0, 0])

    def test_given_restart_when_posted_then_state_reset(self):
        sid, _ = self._new(seed=4)
        self._post("/api/press", {"sessionId": sid, "direction": "ArrowDown"})
        self.clock.advance(0.5)
        moved = self._post("/api/state", {"sessionId": sid}).get_json()["state"]
        self.assertNotEqual(moved["avatar"], [0, 0])
        r = self._post("/api/restart", {"sessionId": sid, "seed": 8})
        self.assertEqual(r.status_code, 200)
        state = r.get_json()["state"]
        self.assertEqual(state["avatar"], [0, 0])
        self.assertEqual(state["score"], 0)
        self.assertFalse(state["gameOver"])
        self.assertIsNone(state["heldDirection"])
        self.assertEqual(len(state["items"]), state["itemCount"])

    def test_given_session_when_board_requested_then_plain_text_grid(self):
        sid, state = self._new(seed=5, boardSize=3, itemCount=2)
        r = self._post("/api/board", {"sessionId": sid})
        self.assertEqual(r.status_code, 200)
        self.assertIn("text/plain", r.headers.get("Content-Type", ""))
        lines = r.get_data(as_text=True).splitlines()
        self.assertEqual(len(lines), 3)
        self.assertTrue(lines[0].startswith("B"))

    def test_given_bad_requests_when_posted_then_errors(self):
        r = self._post("/api/state", {})
        self.assertEqual(r.status_code, 400)
        self.assertFalse(r.get_json()["ok"])

        r = self._post("/api/state", {"sessionId": "nope"})
        self.assertEqual(r.status_code, 404)

        r = self._post("/api/new", {"boardSize": 2, "itemCount": 4})
        self.assertEqual(r.status_code, 400)
        self.assertIn("item count", r.get_json()["error"])

        r = self._post("/api/new", {"boardSize": "big"})
        self.assertEqual(r.status_code, 400)

    def test_given_session_limit_env_when_loaded_then_parsed_or_configuration_error(self):
        self.assertEqual(app_mod.load_max_sessions({}), 256)
        self.assertEqual(app_mod.load_max_sessions({"EGGHUNT_MAX_SESSIONS": "8"}), 8)
        with self.assertRaises(app_mod.ConfigurationError) as ctx:
            app_mod.load_max_sessions({"EGGHUNT_MAX_SESSIONS": "lots"})
        self.assertIn("EGGHUNT_MAX_SESSIONS", str(ctx.exception))
        with self.assertRaises(app_mod.ConfigurationError):
            app_mod.load_max_sessions({"EGGHUNT_MAX_SESSIONS": "0"})

    def test_given_ended_session_when_used_then_not_found(self):
        sid, _ = self._new(seed=6)
        r = self._post("/api/end", {"sessionId": sid})
        self.assertEqual(r.status_code, 200)
        r = self._post("/api/press", {"sessionId": sid, "direction": "ArrowUp"})
        self.assertEqual(r.status_code, 404)


if __name__ == "__main__":
    unittest.main(verbosity=2)
