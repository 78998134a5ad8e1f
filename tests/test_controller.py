import threading
import unittest

from game import (
    BotTicket,
    Cell,
    ChainBoard,
    ChainState,
    GameController,
    Mode,
    Player,
    Result,
    Settings,
    Variant,
)


class TestGameController(unittest.TestCase):
    def setUp(self):
        self.ctl = GameController(variant="chain", size=5, settings=Settings(bot_delay_ms=0))

    def test_given_new_controller_when_created_then_p1_to_move_at_first_generation(self):
        self.assertEqual(self.ctl.variant, Variant.CHAIN)
        self.assertEqual(self.ctl.mode, Mode.BOT)
        self.assertEqual(self.ctl.state.turn, Player.P1)
        self.assertEqual(self.ctl.generation, 1)
        self.assertIsNone(self.ctl.result)
        self.assertFalse(self.ctl.is_bot_turn())
        self.assertIsNone(self.ctl.plan_bot_move())

    def test_given_human_move_when_played_then_generation_bumps_and_bot_turn(self):
        self.assertTrue(self.ctl.play((0, 0)))
        self.assertEqual(self.ctl.generation, 2)
        self.assertTrue(self.ctl.is_bot_turn())
        # human cannot move for the bot
        self.assertFalse(self.ctl.play((0, 1)))
        self.assertEqual(self.ctl.generation, 2)

    def test_given_illegal_human_move_when_played_then_refused_without_new_generation(self):
        self.assertFalse(self.ctl.play((2, 3)))  # P2's seed
        self.assertEqual(self.ctl.generation, 1)
        self.assertEqual(self.ctl.state.moves_played, 0)

    def test_given_fresh_ticket_when_committed_then_bot_move_applied(self):
        self.ctl.play((0, 0))
        ticket = self.ctl.plan_bot_move()
        self.assertIsInstance(ticket, BotTicket)
        self.assertEqual(ticket.generation, 2)
        self.assertEqual(ticket.player, Player.P2)
        self.assertTrue(self.ctl.commit(ticket))
        self.assertEqual(self.ctl.state.turn, Player.P1)
        self.assertEqual(self.ctl.state.moves_played, 2)
        # the same ticket cannot be applied twice
        self.assertFalse(self.ctl.commit(ticket))

    def test_given_reset_after_planning_when_committing_then_ticket_discarded(self):
        self.ctl.play((0, 0))
        ticket = self.ctl.plan_bot_move()
        fresh = self.ctl.reset()
        self.assertFalse(self.ctl.commit(ticket))
        self.assertIs(self.ctl.state, fresh)
        self.assertEqual(self.ctl.state.moves_played, 0)
        self.assertEqual(self.ctl.generation, 3)

    def test_given_scheduled_bot_move_when_timer_fires_then_applied_and_callback_told(self):
        self.ctl.play((0, 0))
        done = threading.Event()
        applied = []

        def on_done(ok):
            applied.append(ok)
            done.set()

        ticket = self.ctl.schedule_bot_move(delay=0.0, on_done=on_done)
        self.assertIsNotNone(ticket)
        self.assertTrue(done.wait(5))
        self.assertEqual(applied, [True])
        self.assertEqual(self.ctl.state.turn, Player.P1)

    def test_given_scheduled_bot_move_when_reset_first_then_never_applied(self):
        self.ctl.play((0, 0))
        fired = threading.Event()
        ticket = self.ctl.schedule_bot_move(delay=30.0, on_done=lambda ok: fired.set())
        self.ctl.reset()
        self.assertFalse(fired.wait(0.1))
        self.assertFalse(self.ctl.commit(ticket))
        self.assertEqual(self.ctl.state.moves_played, 0)

    def test_given_human_mode_when_both_sides_move_then_no_bot_turns(self):
        ctl = GameController(variant="flood", size=4, seed=3, palette=4, mode="human")
        self.assertFalse(ctl.is_bot_turn())
        self.assertTrue(ctl.play(ctl.legal_moves()[0]))
        self.assertEqual(ctl.state.turn, Player.P2)
        self.assertFalse(ctl.is_bot_turn())
        self.assertTrue(ctl.play(ctl.legal_moves()[0]))
        self.assertIsNone(ctl.schedule_bot_move())

    def test_given_winning_move_when_played_then_result_set_and_game_frozen(self):
        ctl = GameController(variant="chain", size=5, mode="human")
        e = Cell()
        board = ChainBoard.from_rows([
            [Cell(Player.P1, 1), Cell(Player.P2, 2), e, e, e],
            [e, e, e, e, e],
            [e, e, e, e, e],
            [e, e, e, e, e],
            [e, e, e, e, e],
        ])
        ctl.state = ChainState(board=board, turn=Player.P1, moves_played=4)
        self.assertTrue(ctl.play((0, 0)))
        self.assertEqual(ctl.result, Result.P1)
        self.assertEqual(ctl.legal_moves(), [])
        self.assertFalse(ctl.play((4, 4)))

    def test_given_reset_with_new_variant_when_called_then_defaults_for_that_variant(self):
        self.ctl.reset(variant="flood", seed=1)
        self.assertEqual(self.ctl.variant, Variant.FLOOD)
        self.assertEqual(self.ctl.state.board.size, 10)
        self.ctl.reset(size=6)
        self.assertEqual(self.ctl.state.board.size, 6)
        self.ctl.reset()
        self.assertEqual(self.ctl.state.board.size, 6)

    def test_given_rejected_reset_when_called_then_live_game_and_settings_untouched(self):
        self.ctl.play((0, 0))
        ticket = self.ctl.plan_bot_move()
        live = self.ctl.state
        with self.assertRaises(ValueError):
            self.ctl.reset(size=3)
        with self.assertRaises(ValueError):
            self.ctl.reset(variant="flood", size=2)
        self.assertEqual(self.ctl.variant, Variant.CHAIN)
        self.assertIs(self.ctl.state, live)
        self.assertEqual(self.ctl.generation, 2)
        # the pending bot move is still valid
        self.assertTrue(self.ctl.commit(ticket))
        # a plain reset afterwards uses the last good size
        self.assertEqual(self.ctl.reset().board.size, 5)
        self.assertEqual(self.ctl.generation, 4)


if __name__ == '__main__':
    unittest.main(verbosity=2)
