from __future__ import annotations

# Facade module that re-exports Color Wars core functionality.
# The Flask app, the tools and the tests import from here.
# Single-responsibility modules live under colorwars_core/*.

# Prefer the relative import when loaded as part of a package, then the installed package.
try:
    from .colorwars_core.board import (  # type: ignore
        Cell,
        ChainBoard,
        Coord,
        FloodBoard,
        Player,
        Result,
        Territories,
    )
    from .colorwars_core.state import ChainState, FloodState, GameState, Variant  # type: ignore
    from .colorwars_core.config import Settings  # type: ignore
    from .colorwars_core.deal import (  # type: ignore
        chain_seed_coords,
        deal_chain_board,
        deal_flood_board,
        new_game,
    )
    from .colorwars_core.chain import (  # type: ignore
        CascadeLimitExceeded,
        apply_chain_move,
        chain_legal_moves,
    )
    from .colorwars_core.flood import expand_territory, legal_colors  # type: ignore
    from .colorwars_core.moves import Move, apply_move, legal_moves, parse_move  # type: ignore
    from .colorwars_core.winner import (  # type: ignore
        chain_result,
        evaluate_terminal,
        flood_result,
        stats,
    )
    from .colorwars_core.ai import chain_score, flood_gain, select_bot_move  # type: ignore
    from .colorwars_core.controller import BotTicket, GameController, Mode  # type: ignore
except ImportError:
    from colorwars_core.board import (  # type: ignore
        Cell,
        ChainBoard,
        Coord,
        FloodBoard,
        Player,
        Result,
        Territories,
    )
    from colorwars_core.state import ChainState, FloodState, GameState, Variant  # type: ignore
    from colorwars_core.config import Settings  # type: ignore
    from colorwars_core.deal import (  # type: ignore
        chain_seed_coords,
        deal_chain_board,
        deal_flood_board,
        new_game,
    )
    from colorwars_core.chain import (  # type: ignore
        CascadeLimitExceeded,
        apply_chain_move,
        chain_legal_moves,
    )
    from colorwars_core.flood import expand_territory, legal_colors  # type: ignore
    from colorwars_core.moves import Move, apply_move, legal_moves, parse_move  # type: ignore
    from colorwars_core.winner import (  # type: ignore
        chain_result,
        evaluate_terminal,
        flood_result,
        stats,
    )
    from colorwars_core.ai import chain_score, flood_gain, select_bot_move  # type: ignore
    from colorwars_core.controller import BotTicket, GameController, Mode  # type: ignore


def main() -> None:
    # CLI driver delegated to colorwars_core.cli
    try:
        from .colorwars_core.cli import main as _main  # type: ignore
    except ImportError:
        from colorwars_core.cli import main as _main  # type: ignore
    _main()


if __name__ == '__main__':
    main()
