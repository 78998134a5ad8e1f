#!/usr/bin/env python3
"""
Bot-vs-bot self-play with invariant checks.

Plays N games per variant with the greedy bot on both sides and verifies,
after every move:
  * chain: total orbs == seed orbs + moves played; empty cells hold no orbs
  * flood: territories are disjoint, every owned cell shows its owner's color,
    and the mover's territory never shrinks
Prints a JSON summary with result counts, game lengths and any violations.

Usage:
  python tools/selfplay.py                 # 20 games per variant
  python tools/selfplay.py 100 --size 7    # 100 games, 7x7 boards
"""
from __future__ import annotations

import argparse
import json
import os
import random
import sys
from typing import Dict, List, Optional

HERE = os.path.dirname(os.path.abspath(__file__))
ROOT = os.path.dirname(HERE)
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import game  # noqa: E402


def _check_chain(state: game.ChainState) -> List[str]:
    problems: List[str] = []
    expected = state.seed_total + state.moves_played
    if state.board.total_orbs() != expected:
        problems.append(f"orbs {state.board.total_orbs()} != {expected}")
    for cell in state.board.cells:
        if cell.owner is None and cell.count != 0:
            problems.append("unowned cell holds orbs")
            break
    return problems


def _check_flood(before: game.FloodState, after: game.FloodState, mover: game.Player) -> List[str]:
    problems: List[str] = []
    t = after.territories
    if t.p1 & t.p2:
        problems.append("territories overlap")
    for player in game.Player:
        color = t.color_of(player)
        if any(after.board.at(*coord) != color for coord in t.of(player)):
            problems.append(f"{player.value} territory not uniformly colored")
    if len(after.territory(mover)) < len(before.territory(mover)):
        problems.append(f"{mover.value} territory shrank")
    return problems


def play_one(variant: game.Variant, size: Optional[int], seed: int, max_moves: int) -> Dict[str, object]:
    state = game.new_game(variant, size=size, seed=seed)
    violations: List[str] = []
    result = None
    while state.moves_played < max_moves:
        mover = state.turn
        move = game.select_bot_move(state)
        nxt, accepted = game.apply_move(state, move)
        if not accepted:
            violations.append(f"bot move {move!r} rejected")
            break
        if isinstance(nxt, game.ChainState):
            violations.extend(_check_chain(nxt))
        else:
            violations.extend(_check_flood(state, nxt, mover))
        state = nxt
        result = game.evaluate_terminal(state)
        if result is not None:
            break
    return {
        "seed": seed,
        "result": result.value if result else None,
        "moves": state.moves_played,
        "violations": violations,
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="Greedy bot self-play invariant check")
    parser.add_argument("games", nargs="?", type=int, default=20)
    parser.add_argument("--size", type=int, default=None)
    parser.add_argument("--max-moves", type=int, default=2000)
    parser.add_argument("--seed", type=int, default=0)
    args = parser.parse_args()

    rng = random.Random(args.seed)
    summary: Dict[str, object] = {}
    for variant in game.Variant:
        results: Dict[str, int] = {}
        lengths: List[int] = []
        bad: List[Dict[str, object]] = []
        for _ in range(args.games):
            rec = play_one(variant, args.size, rng.randrange(1_000_000), args.max_moves)
            key = rec["result"] or "unfinished"
            results[key] = results.get(key, 0) + 1
            lengths.append(int(rec["moves"]))
            if rec["violations"]:
                bad.append(rec)
        summary[variant.value] = {
            "games": args.games,
            "results": results,
            "moves": {
                "min": min(lengths) if lengths else None,
                "avg": (sum(lengths) / len(lengths)) if lengths else None,
                "max": max(lengths) if lengths else None,
            },
            "violations": bad[:10],
        }
    print(json.dumps(summary, indent=2))
    if any(summary[v.value]["violations"] for v in game.Variant):
        sys.exit(1)


if __name__ == "__main__":
    main()
