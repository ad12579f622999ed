import random
import threading

import numpy as np
import pytest

from gravity4.session import GameSession, GameSettings
from gravity4.utils import AITier, GameMode, GravityMode, Player


@pytest.fixture
def ai_session():
    settings = GameSettings.from_labels(difficulty="easy", game_mode="ai", ai_level="medium")
    return GameSession(settings, rng=random.Random(7))


@pytest.fixture
def pvp_session():
    settings = GameSettings.from_labels(difficulty="easy", game_mode="human",
                                        name_one="Ada", name_two="")
    return GameSession(settings, rng=random.Random(7))


class TestSettings:
    def test_from_labels(self):
        settings = GameSettings.from_labels(difficulty="hard", mode="inverse",
                                            game_mode="ai", ai_level="hard",
                                            name_one="Ada")
        assert settings.gravity_mode == GravityMode.REVERSING
        assert settings.game_mode == GameMode.HUMAN_VS_AI
        assert settings.ai_tier == AITier.HARD
        assert settings.normalized().name_two == "AI"

    def test_unknown_labels_fall_back_to_defaults(self):
        settings = GameSettings.from_labels(difficulty=None, mode="sideways",
                                            game_mode="robot", ai_level="insane")
        assert settings == GameSettings()

    def test_normalized_keeps_human_names(self):
        settings = GameSettings(game_mode=GameMode.HUMAN_VS_HUMAN)
        assert settings.normalized().name_two == ""


class TestSessionLifecycle:
    @pytest.mark.parametrize("difficulty, shape, prefill", [
        ("easy", (6, 7), 0),
        ("normal", (7, 8), 0),
        ("hard", (8, 10), 7),
        ("unknown", (6, 7), 0),
    ])
    def test_board_follows_difficulty_preset(self, difficulty, shape, prefill):
        session = GameSession(GameSettings(difficulty=difficulty), rng=random.Random(0))
        assert session.state.board.grid.shape == shape
        assert np.count_nonzero(session.state.board.grid) == prefill
        assert session.state.turn_count == 0

    def test_configure_only_rebuilds_on_change(self, ai_session):
        state = ai_session.state
        same = GameSettings.from_labels(difficulty="easy", game_mode="ai", ai_level="medium")
        assert not ai_session.configure(same)
        assert ai_session.state is state

        harder = same._replace(ai_tier=AITier.HARD)
        assert ai_session.configure(harder)
        assert ai_session.state is not state
        assert ai_session.state.ai_tier == AITier.HARD

    def test_rematch_keeps_settings(self, ai_session):
        ai_session.play(3)
        ai_session.rematch()
        assert ai_session.state.turn_count == 0
        assert ai_session.settings.ai_tier == AITier.MEDIUM

    def test_reset_restores_defaults(self, ai_session):
        ai_session.reset()
        assert ai_session.settings == GameSettings()
        assert ai_session.state.game_mode == GameMode.HUMAN_VS_HUMAN


class TestSessionPlay:
    def test_human_then_ai(self, ai_session):
        assert not ai_session.ai_pending
        assert ai_session.play(3)
        assert ai_session.ai_pending

        # the human cannot move for the AI
        assert not ai_session.play(4)
        assert ai_session.state.turn_count == 1

        column = ai_session.ai_move()
        assert column is not None
        assert ai_session.state.turn_count == 2
        assert not ai_session.ai_pending

    def test_ai_move_is_noop_on_human_turn(self, ai_session):
        assert ai_session.ai_move() is None
        assert ai_session.state.turn_count == 0

    def test_two_humans_alternate(self, pvp_session):
        assert pvp_session.play(0)
        assert pvp_session.play(0)
        assert pvp_session.ai_move() is None
        assert pvp_session.state.turn_count == 2

    def test_invalid_column_is_ignored(self, pvp_session):
        assert not pvp_session.play(7)
        assert not pvp_session.play(-1)
        assert pvp_session.state.turn_count == 0

    def test_concurrent_callers_never_interleave(self, ai_session):
        mover = random.Random(3)
        columns = [mover.randrange(7) for _ in range(300)]
        start = threading.Barrier(2)

        def human():
            start.wait()
            for col in columns:
                ai_session.play(col)

        def computer():
            start.wait()
            for _ in range(300):
                ai_session.ai_move()

        threads = [threading.Thread(target=human), threading.Thread(target=computer)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        grid = ai_session.state.board.grid
        ones = np.count_nonzero(grid == Player.ONE.value)
        twos = np.count_nonzero(grid == Player.TWO.value)
        assert ones - twos in (0, 1)
        assert ai_session.state.turn_count == ones + twos


class TestSessionView:
    def test_end_messages(self, pvp_session, ai_session):
        assert pvp_session.end_message() is None

        for col in (0, 1, 0, 1, 0, 1, 0):
            pvp_session.play(col)
        assert pvp_session.end_message() == "Ada wins!"

        ai_session.state.winner = Player.TWO
        ai_session.state.game_over = True
        assert ai_session.end_message() == "The AI wins!"

        ai_session.state.winner = None
        assert ai_session.end_message() == "Draw!"

    def test_unnamed_players_get_default_labels(self):
        session = GameSession(GameSettings(), rng=random.Random(0))
        for col in (1, 0, 1, 0, 1, 0, 2, 0):
            session.play(col)
        assert session.state.winner == Player.TWO
        assert session.end_message() == "Player 2 wins!"

    def test_snapshot(self, ai_session):
        ai_session.play(2)
        view = ai_session.snapshot()

        assert view['rows'] == 6 and view['cols'] == 7
        assert view['board'][5][2] == Player.ONE.value
        assert view['current_player'] == Player.TWO.value
        assert view['last_move'] == (5, 2)
        assert view['gravity'] == "DOWN"
        assert view['ai_pending'] is True
        assert view['winning_line'] == []
        assert view['end_message'] is None
        assert view['names'] == ["Player 1", "AI"]
        assert view['legal_moves'] == list(range(7))
        assert isinstance(view['ai_delay_ms'], int)

    def test_snapshot_reports_winning_line(self, pvp_session):
        for col in (0, 6, 1, 6, 2, 6, 3):
            pvp_session.play(col)
        view = pvp_session.snapshot()
        assert view['game_over']
        assert view['winner'] == Player.ONE.value
        assert view['winning_line'] == [(5, 0), (5, 1), (5, 2), (5, 3)]
