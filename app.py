from __future__ import annotations

import logging
import os
import sys
import threading
import time
import uuid
from typing import Any, Dict, Mapping, Optional, Tuple

from flask import Flask, Response, jsonify, request

# Ensure package imports work when executed directly from repo root or as module
if __package__ in (None, ""):
    sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

try:
    from .game import (  # type: ignore
        ConfigurationError,
        GameSession,
        load_config,
    )
    from .egghunt_core.config import env_flag, env_number  # type: ignore
    from .egghunt_core.log import configure_logging  # type: ignore
except ImportError:
    from game import (  # type: ignore
        ConfigurationError,
        GameSession,
        load_config,
    )
    from egghunt_core.config import env_flag, env_number  # type: ignore
    from egghunt_core.log import configure_logging  # type: ignore

logger = logging.getLogger(__name__)


def load_max_sessions(environ: Optional[Mapping[str, str]] = None) -> int:
    env = os.environ if environ is None else environ
    limit = env_number(env, "EGGHUNT_MAX_SESSIONS", int, 256)
    if limit <= 0:
        raise ConfigurationError(f"EGGHUNT_MAX_SESSIONS must be positive, got {limit}")
    return limit


CONFIG = load_config()
MAX_SESSIONS = load_max_sessions()

# Clock used for new sessions; tests swap it for a fake.
app_clock = time.monotonic

app = Flask(__name__)


class _Entry:
    __slots__ = ("session", "lock")

    def __init__(self, session: GameSession) -> None:
        self.session = session
        self.lock = threading.Lock()


_sessions: Dict[str, _Entry] = {}
_sessions_lock = threading.Lock()


def _error(msg: str, status: int) -> Tuple[Any, int]:
    return jsonify({"ok": False, "error": msg}), status


def _body() -> Dict[str, Any]:
    body = request.get_json(force=True, silent=True)
    return body if isinstance(body, dict) else {}


def _opt_int(body: Dict[str, Any], key: str) -> Optional[int]:
    val = body.get(key)
    if val is None:
        return None
    return int(val)


def _lookup(body: Dict[str, Any]) -> Tuple[Optional[_Entry], Optional[Tuple[Any, int]]]:
    sid = body.get("sessionId")
    if not isinstance(sid, str) or not sid:
        return None, _error("sessionId required", 400)
    with _sessions_lock:
        entry = _sessions.get(sid)
    if entry is None:
        return None, _error("unknown session", 404)
    return entry, None


def _state_json(session: GameSession) -> Dict[str, Any]:
    return session.snapshot().to_dict()


def _register(session: GameSession) -> str:
    sid = uuid.uuid4().hex
    with _sessions_lock:
        if len(_sessions) >= MAX_SESSIONS:
            # Evict the oldest session (dicts keep insertion order).
            old_sid = next(iter(_sessions))
            _sessions.pop(old_sid).session.close()
            logger.info("Evicted session %s", old_sid)
        _sessions[sid] = _Entry(session)
    return sid


# ---------- Routes ----------

@app.get("/")
def index() -> Any:
    return jsonify({
        "ok": True,
        "name": "egghunt",
        "boardSize": CONFIG.board_size,
        "itemCount": CONFIG.item_count,
    })


@app.post("/api/new")
def api_new() -> Any:
    body = _body()
    try:
        config = CONFIG.with_overrides(
            board_size=_opt_int(body, "boardSize"),
            item_count=_opt_int(body, "itemCount"),
        )
        session = GameSession(config, clock=app_clock, rng=_opt_int(body, "seed"))
    except ConfigurationError as e:
        return _error(str(e), 400)
    except (TypeError, ValueError) as e:
        return _error(f"bad request: {e}", 400)
    sid = _register(session)
    logger.info("New session %s (%dx%d, %d items)", sid, config.board_size, config.board_size, config.item_count)
    return jsonify({"ok": True, "sessionId": sid, "state": _state_json(session)})


@app.post("/api/press")
def api_press() -> Any:
    body = _body()
    entry, err = _lookup(body)
    if err:
        return err
    with entry.lock:
        direction = body.get("direction")
        entry.session.press(direction if isinstance(direction, str) else None)
        entry.session.pump()
        return jsonify({"ok": True, "state": _state_json(entry.session)})


@app.post("/api/release")
def api_release() -> Any:
    body = _body()
    entry, err = _lookup(body)
    if err:
        return err
    with entry.lock:
        entry.session.pump()
        direction = body.get("direction")
        entry.session.release(direction if isinstance(direction, str) else None)
        return jsonify({"ok": True, "state": _state_json(entry.session)})


@app.post("/api/state")
def api_state() -> Any:
    body = _body()
    entry, err = _lookup(body)
    if err:
        return err
    with entry.lock:
        entry.session.pump()
        return jsonify({"ok": True, "state": _state_json(entry.session)})


@app.post("/api/restart")
def api_restart() -> Any:
    body = _body()
    entry, err = _lookup(body)
    if err:
        return err
    try:
        seed = _opt_int(body, "seed")
    except (TypeError, ValueError) as e:
        return _error(f"bad request: {e}", 400)
    with entry.lock:
        entry.session.restart(seed=seed)
        return jsonify({"ok": True, "state": _state_json(entry.session)})


@app.post("/api/board")
def api_board() -> Any:
    body = _body()
    entry, err = _lookup(body)
    if err:
        return err
    with entry.lock:
        entry.session.pump()
        text = entry.session.engine.pretty()
    return Response(text + "\n", mimetype="text/plain")


@app.post("/api/end")
def api_end() -> Any:
    body = _body()
    entry, err = _lookup(body)
    if err:
        return err
    with _sessions_lock:
        _sessions.pop(body["sessionId"], None)
    with entry.lock:
        entry.session.close()
    return jsonify({"ok": True})


if __name__ == "__main__":
    configure_logging()
    debug = env_flag("FLASK_DEBUG", os.getenv("DEBUG", "0"))
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
