import unittest

from game import (
    Cell,
    ChainBoard,
    ChainState,
    FloodBoard,
    FloodState,
    Player,
    Result,
    Territories,
    chain_result,
    chain_score,
    evaluate_terminal,
    flood_result,
    new_game,
    select_bot_move,
    stats,
)

E = Cell()


class TestWinDetector(unittest.TestCase):
    def test_given_p1_owning_every_cell_when_evaluating_then_p1_wins(self):
        board = ChainBoard.from_rows([[Cell(Player.P1, 1)] * 3 for _ in range(3)])
        state = ChainState(board=board, turn=Player.P2, moves_played=5)
        self.assertEqual(evaluate_terminal(state), Result.P1)
        self.assertEqual(evaluate_terminal(state, 5), evaluate_terminal(state, 5))
        self.assertEqual(chain_result(board, 1), Result.P1)

    def test_given_no_moves_played_when_evaluating_chain_then_in_progress(self):
        board = ChainBoard.from_rows([[Cell(Player.P2, 1)] * 3 for _ in range(3)])
        self.assertIsNone(chain_result(board, 0))
        self.assertIsNone(evaluate_terminal(ChainState(board=board)))
        self.assertEqual(evaluate_terminal(ChainState(board=board), moves_played=2), Result.P2)

    def test_given_both_players_on_board_when_evaluating_chain_then_in_progress(self):
        board = ChainBoard.empty(3).replace({(0, 0): Cell(Player.P1, 1), (2, 2): Cell(Player.P2, 2)})
        self.assertIsNone(chain_result(board, 7))
        self.assertIsNone(chain_result(ChainBoard.empty(3), 3))

    def test_given_two_by_two_split_evenly_when_evaluating_flood_then_draw(self):
        board = FloodBoard(size=2, palette=3, grid=(0, 0, 1, 1))
        terr = Territories(frozenset([(0, 0), (0, 1)]), frozenset([(1, 0), (1, 1)]), 0, 1)
        self.assertEqual(flood_result(board, terr), Result.DRAW)
        self.assertEqual(evaluate_terminal(FloodState(board=board, territories=terr)), Result.DRAW)

    def test_given_three_versus_one_when_evaluating_flood_then_larger_wins(self):
        board = FloodBoard(size=2, palette=3, grid=(0, 0, 0, 1))
        terr = Territories(frozenset([(0, 0), (0, 1), (1, 0)]), frozenset([(1, 1)]), 0, 1)
        self.assertEqual(flood_result(board, terr), Result.P1)
        terr2 = Territories(frozenset([(0, 0)]), frozenset([(0, 1), (1, 0), (1, 1)]), 0, 1)
        self.assertEqual(flood_result(board, terr2), Result.P2)

    def test_given_unclaimed_cells_when_evaluating_flood_then_in_progress(self):
        board = FloodBoard(size=2, palette=3, grid=(0, 2, 0, 1))
        terr = Territories(frozenset([(0, 0), (1, 0)]), frozenset([(1, 1)]), 0, 1)
        self.assertIsNone(flood_result(board, terr))

    def test_given_states_when_summarising_then_cells_and_orbs_or_colors(self):
        chain = new_game("chain", size=5)
        self.assertEqual(stats(chain), {"P1": {"cells": 1, "orbs": 3}, "P2": {"cells": 1, "orbs": 3}})
        flood = new_game("flood", size=4, seed=9, palette=3)
        s = stats(flood)
        self.assertEqual(s["P1"]["cells"], 1)
        self.assertEqual(s["P2"]["color"], flood.territories.p2_color)


class TestBotMoveSelector(unittest.TestCase):
    def test_given_capture_available_when_bot_picks_then_takes_it(self):
        board = ChainBoard.from_rows([
            [E, E, E],
            [E, E, Cell(Player.P1, 1)],
            [E, Cell(Player.P1, 1), Cell(Player.P2, 1)],
        ])
        state = ChainState(board=board, turn=Player.P2, moves_played=3)
        self.assertEqual(select_bot_move(state), (2, 2))
        self.assertEqual(select_bot_move(state.with_turn(Player.P1), Player.P2), (2, 2))
        self.assertEqual(chain_score(state, Player.P2), -1)

    def test_given_all_moves_tied_when_bot_picks_then_first_in_row_major_order(self):
        state = new_game("chain", size=5)
        self.assertEqual(select_bot_move(state), (0, 0))
        self.assertEqual(select_bot_move(state.with_turn(Player.P2)), (0, 0))

    def test_given_same_state_when_picking_twice_then_same_move(self):
        for variant, seed in (("chain", None), ("flood", 5), ("flood", 17)):
            state = new_game(variant, size=6, seed=seed)
            self.assertEqual(select_bot_move(state), select_bot_move(state))

    def test_given_flood_choices_when_bot_picks_then_largest_gain(self):
        rows = [
            [0, 1, 1, 2],
            [1, 1, 2, 2],
            [0, 2, 0, 1],
            [2, 0, 1, 2],
        ]
        board = FloodBoard(size=4, palette=4, grid=tuple(c for r in rows for c in r))
        terr = Territories(frozenset([(0, 0)]), frozenset([(3, 3)]), 0, 2)
        state = FloodState(board=board, territories=terr)
        self.assertEqual(select_bot_move(state), 1)
        # P2: color 1 absorbs (3,2) and (2,3); color 3 gains nothing
        self.assertEqual(select_bot_move(state, Player.P2), 1)

    def test_given_no_gain_anywhere_when_bot_picks_flood_then_lowest_color(self):
        rows = [
            [0, 2, 0, 0],
            [2, 0, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 2],
        ]
        board = FloodBoard(size=4, palette=5, grid=tuple(c for r in rows for c in r))
        terr = Territories(frozenset([(0, 0)]), frozenset([(3, 3)]), 0, 2)
        state = FloodState(board=board, territories=terr)
        self.assertEqual(select_bot_move(state), 1)

    def test_given_bot_lookahead_when_scoring_then_live_state_untouched(self):
        state = new_game("flood", size=5, seed=2)
        snapshot = (state.board, state.territories, state.turn, state.moves_played)
        select_bot_move(state)
        self.assertEqual((state.board, state.territories, state.turn, state.moves_played), snapshot)


if __name__ == '__main__':
    unittest.main(verbosity=2)
