from __future__ import annotations

import argparse
import logging
import threading
from typing import List, Optional

from .board import Result
from .config import Settings, configure_logging
from .controller import GameController, Mode
from .moves import Move, parse_move
from .state import ChainState, FloodState, GameState, Variant
from .winner import stats

logger = logging.getLogger(__name__)


def render(state: GameState) -> str:
    if isinstance(state, ChainState):
        return state.board.pretty()
    assert isinstance(state, FloodState)
    return state.board.pretty(state.territories.p1, state.territories.p2)


def describe_result(result: Result, mode: Mode) -> str:
    if result is Result.DRAW:
        return "It's a draw!"
    if result is Result.P2 and mode is Mode.BOT:
        return "Bot wins!"
    return f"Player {result.value[1]} wins!"


def _summary(state: GameState) -> str:
    parts = []
    for side, info in stats(state).items():
        extra = f"{info['orbs']} orbs" if 'orbs' in info else f"color {info['color']}"
        parts.append(f"{side}: {info['cells']} cells, {extra}")
    return " | ".join(parts)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Color Wars: chain reaction and color flood against a greedy bot')
    parser.add_argument('--variant', choices=[v.value for v in Variant], default=Variant.CHAIN.value,
                        help='Game to play')
    parser.add_argument('--size', type=int, default=None, help='Board size (NxN)')
    parser.add_argument('--seed', type=int, default=None, help='RNG seed for flood colors')
    parser.add_argument('--palette', type=int, default=None, help='Number of flood colors')
    parser.add_argument('--mode', choices=[m.value for m in Mode], default=Mode.BOT.value,
                        help='Play against the bot or hot-seat')
    parser.add_argument('--bot-delay', type=float, default=None, help='Seconds before the bot moves')
    return parser


def prompt_human_move(state: GameState, moves: List[Move]) -> Move:
    label = 'r,c or r c' if isinstance(state, ChainState) else 'a color index'
    print(f'{state.turn.value} legal moves:', moves)
    while True:
        text = input(f'Enter your move as {label}: ').strip()
        try:
            move = parse_move(state, text)
        except (TypeError, ValueError):
            print('Could not parse. Try again.')
            continue
        if move in moves:
            return move
        print('Illegal move. Try again.')


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    settings = Settings.from_env()
    configure_logging(settings)
    logger.debug("cli_start variant=%s mode=%s size=%s seed=%s", args.variant, args.mode, args.size, args.seed)

    controller = GameController(
        variant=args.variant,
        size=args.size,
        seed=args.seed,
        palette=args.palette,
        mode=args.mode,
        settings=settings,
    )
    print('Initial board:')
    print(render(controller.state))

    while controller.result is None:
        if controller.is_bot_turn():
            done = threading.Event()
            ticket = controller.schedule_bot_move(delay=args.bot_delay, on_done=lambda _applied: done.set())
            if ticket is None:
                break
            done.wait()
            print(f'Bot plays {ticket.move}')
        else:
            move = prompt_human_move(controller.state, controller.legal_moves())
            controller.play(move)
        print(render(controller.state))
        print(_summary(controller.state))

    if controller.result is not None:
        print(describe_result(controller.result, controller.mode))


if __name__ == '__main__':
    main()
