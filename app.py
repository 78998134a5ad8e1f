from __future__ import annotations

import logging
import os
import sys
import threading
import uuid
from typing import Any, Dict, List, Optional, Tuple

from flask import Flask, jsonify, request

# Ensure package imports work when executed directly from repo root or as module
if __package__ in (None, ""):
    sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

from colorwars_core.config import configure_logging
from game import (
    CascadeLimitExceeded,
    Cell,
    ChainBoard,
    ChainState,
    FloodBoard,
    FloodState,
    GameController,
    GameState,
    Mode,
    Player,
    Settings,
    Territories,
    Variant,
    evaluate_terminal,
    legal_moves,
    parse_move,
    select_bot_move,
    stats,
)

logger = logging.getLogger(__name__)

SETTINGS = Settings.from_env()

app = Flask(__name__)

# Live games, keyed by id. In-memory only: games do not survive a restart.
_GAMES: Dict[str, GameController] = {}
_GAMES_LOCK = threading.Lock()


class GameNotFound(KeyError):
    pass


def _coords_json(coords) -> List[List[int]]:
    return [[int(r), int(c)] for (r, c) in sorted(coords)]


def _moves_json(moves) -> List[Any]:
    return [list(m) if isinstance(m, tuple) else int(m) for m in moves]


def state_to_json(s: GameState) -> Dict[str, Any]:
    if isinstance(s, ChainState):
        b = s.board
        return {
            "variant": Variant.CHAIN.value,
            "size": b.size,
            "cells": [
                [{"owner": b.at(r, c).owner.value if b.at(r, c).owner else None, "count": b.at(r, c).count}
                 for c in range(b.size)]
                for r in range(b.size)
            ],
            "turn": s.turn.value,
            "movesPlayed": s.moves_played,
            "seedTotal": s.seed_total,
        }
    t = s.territories
    return {
        "variant": Variant.FLOOD.value,
        "size": s.board.size,
        "palette": s.board.palette,
        "board": s.board.rows(),
        "p1Territory": _coords_json(t.p1),
        "p2Territory": _coords_json(t.p2),
        "p1Color": t.p1_color,
        "p2Color": t.p2_color,
        "turn": s.turn.value,
        "movesPlayed": s.moves_played,
    }


def _check_chain_board(board: ChainBoard, moves_played: int) -> None:
    """Rejects cell layouts no sequence of moves can produce."""
    settled = moves_played <= 0 or (board.owned(Player.P1) > 0 and board.owned(Player.P2) > 0)
    for coord in board.coords():
        cell = board.at(*coord)
        if cell.count < 0:
            raise ValueError(f"negative orb count at {coord}")
        if cell.owner is None and cell.count:
            raise ValueError(f"unowned cell {coord} holds orbs")
        # Only a cascade cut short by an elimination leaves cells at capacity.
        if settled and cell.count >= board.capacity(coord):
            raise ValueError(f"cell {coord} holds {cell.count} orbs, capacity is {board.capacity(coord)}")


def json_to_state(obj: Dict[str, Any]) -> GameState:
    variant = Variant(obj.get("variant", Variant.CHAIN.value))
    turn = Player(obj.get("turn", Player.P1.value))
    moves_played = int(obj.get("movesPlayed", 0))
    if variant is Variant.CHAIN:
        rows = [
            [Cell(Player(cell["owner"]) if cell.get("owner") else None, int(cell.get("count", 0))) for cell in row]
            for row in obj["cells"]
        ]
        board = ChainBoard.from_rows(rows)
        _check_chain_board(board, moves_played)
        return ChainState(board=board, turn=turn, moves_played=moves_played,
                          seed_total=int(obj.get("seedTotal", board.total_orbs() - moves_played)))
    rows = obj["board"]
    size = len(rows)
    grid = tuple(int(x) for row in rows for x in row)
    if len(grid) != size * size:
        raise ValueError("board must be square")
    fboard = FloodBoard(size=size, palette=int(obj["palette"]), grid=grid)
    if any(not 0 <= x < fboard.palette for x in grid):
        raise ValueError("board color outside the palette")
    territories = Territories(
        p1=frozenset((int(r), int(c)) for r, c in obj["p1Territory"]),
        p2=frozenset((int(r), int(c)) for r, c in obj["p2Territory"]),
        p1_color=int(obj["p1Color"]),
        p2_color=int(obj["p2Color"]),
    )
    return FloodState(board=fboard, territories=territories, turn=turn, moves_played=moves_played)


def _snapshot(game_id: str, ctl: GameController) -> Dict[str, Any]:
    return {
        "ok": True,
        "gameId": game_id,
        "generation": ctl.generation,
        "mode": ctl.mode.value,
        "state": state_to_json(ctl.state),
        "legalMoves": _moves_json(ctl.legal_moves()),
        "stats": stats(ctl.state),
        "result": ctl.result.value if ctl.result else None,
        "botToMove": ctl.is_bot_turn(),
    }


def _lookup(body: Dict[str, Any]) -> Tuple[str, GameController]:
    game_id = str(body.get("gameId", ""))
    with _GAMES_LOCK:
        ctl = _GAMES.get(game_id)
    if ctl is None:
        raise GameNotFound(game_id)
    return game_id, ctl


def _opt_int(body: Dict[str, Any], key: str) -> Optional[int]:
    value = body.get(key)
    return None if value is None else int(value)


@app.errorhandler(GameNotFound)
def _game_not_found(e: GameNotFound) -> Any:
    return jsonify({"ok": False, "error": f"unknown game {e.args[0]!r}"}), 404


@app.errorhandler(CascadeLimitExceeded)
def _cascade_limit(e: CascadeLimitExceeded) -> Any:
    logger.warning("cascade_limit error=%s", e)
    return jsonify({"ok": False, "error": str(e)}), 422


@app.errorhandler(ValueError)
def _bad_request(e: ValueError) -> Any:
    return jsonify({"ok": False, "error": str(e)}), 400


# ---------- Game API ----------

@app.post("/api/new")
def api_new() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    ctl = GameController(
        variant=body.get("variant", Variant.CHAIN.value),
        size=_opt_int(body, "size"),
        seed=_opt_int(body, "seed"),
        palette=_opt_int(body, "palette"),
        mode=body.get("mode", Mode.BOT.value),
        settings=SETTINGS,
    )
    game_id = uuid.uuid4().hex
    with _GAMES_LOCK:
        _GAMES[game_id] = ctl
    logger.info("game_created id=%s variant=%s mode=%s", game_id, ctl.variant.value, ctl.mode.value)
    return jsonify(_snapshot(game_id, ctl))


@app.post("/api/state")
def api_state() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    game_id, ctl = _lookup(body)
    return jsonify(_snapshot(game_id, ctl))


@app.post("/api/reset")
def api_reset() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    game_id, ctl = _lookup(body)
    ctl.reset(variant=body.get("variant"), size=_opt_int(body, "size"), seed=_opt_int(body, "seed"),
              palette=_opt_int(body, "palette"))
    return jsonify(_snapshot(game_id, ctl))


@app.post("/api/move")
def api_move() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    game_id, ctl = _lookup(body)
    if "move" not in body:
        return jsonify({"ok": False, "error": "move required"}), 400
    try:
        move = parse_move(ctl.state, body["move"])
    except (TypeError, ValueError) as e:
        return jsonify({"ok": False, "error": f"bad move: {e}"}), 400
    if not ctl.play(move):
        return jsonify({"ok": False, "error": "Illegal move", "legalMoves": _moves_json(ctl.legal_moves())}), 400
    return jsonify(_snapshot(game_id, ctl))


@app.post("/api/ai")
def api_ai() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    game_id, ctl = _lookup(body)
    seen = _opt_int(body, "generation")
    if seen is not None and seen != ctl.generation:
        return jsonify({"ok": False, "error": "stale generation", "generation": ctl.generation}), 409
    ticket = ctl.plan_bot_move()
    if ticket is None:
        return jsonify({"ok": False, "error": "No AI move available", "generation": ctl.generation}), 409
    if not ctl.commit(ticket):
        return jsonify({"ok": False, "error": "stale generation", "generation": ctl.generation}), 409
    snap = _snapshot(game_id, ctl)
    snap["move"] = _moves_json([ticket.move])[0]
    return jsonify(snap)


@app.post("/api/evaluate")
def api_evaluate() -> Any:
    """Stateless helper: legal moves, result and the bot's pick for a posted state."""
    body = request.get_json(force=True, silent=True) or {}
    s_in = body.get("state")
    if not isinstance(s_in, dict):
        return jsonify({"ok": False, "error": "state required"}), 400
    try:
        state = json_to_state(s_in)
    except (KeyError, TypeError, ValueError) as e:
        return jsonify({"ok": False, "error": f"bad state: {e}"}), 400
    result = evaluate_terminal(state)
    moves = legal_moves(state) if result is None else []
    bot = select_bot_move(state, max_explosions=SETTINGS.max_explosions) if moves else None
    return jsonify({
        "ok": True,
        "result": result.value if result else None,
        "legalMoves": _moves_json(moves),
        "botMove": _moves_json([bot])[0] if bot is not None else None,
        "stats": stats(state),
    })


# Entrypoint for "python app.py"
if __name__ == "__main__":
    configure_logging(SETTINGS)
    app.run(host="0.0.0.0", port=SETTINGS.port, debug=SETTINGS.debug)
