import numpy as np
import pytest

from game import (
    RPS_PAYOFF,
    RPS_REWARDS,
    RPSAction,
    clamp_action,
    payoff_matrix_from_rewards,
)


def test_reward_table():
    np.testing.assert_array_equal(
        RPS_REWARDS, [[0.0, 1.0, -1.0], [-1.0, 0.0, 1.0], [1.0, -1.0, 0.0]]
    )


def test_payoff_matrix_is_row_player_view():
    assert RPS_PAYOFF[RPSAction.PAPER, RPSAction.ROCK] == 1.0
    assert RPS_PAYOFF[RPSAction.ROCK, RPSAction.PAPER] == -1.0
    assert RPS_PAYOFF[RPSAction.ROCK, RPSAction.SCISSORS] == 1.0
    np.testing.assert_array_equal(RPS_PAYOFF, -RPS_PAYOFF.T)
    np.testing.assert_array_equal(np.diag(RPS_PAYOFF), np.zeros(3))


def test_constants_are_immutable():
    with pytest.raises(ValueError):
        RPS_REWARDS[0, 0] = 5.0
    with pytest.raises(ValueError):
        RPS_PAYOFF[0, 0] = 5.0
    with pytest.raises(ValueError):
        RPSAction.ROCK.to_reward()[0] = 5.0


def test_payoff_matrix_from_rewards_requires_square():
    with pytest.raises(AssertionError):
        payoff_matrix_from_rewards(np.zeros((2, 3)))


@pytest.mark.parametrize(
    "i, expected",
    [(-5, 0), (0, 0), (1, 1), (2, 2), (3, 2), (99, 2)],
)
def test_clamp_action(i, expected):
    assert clamp_action(i, 3) == expected


def test_from_index_clamps():
    assert RPSAction.from_index(-1) is RPSAction.ROCK
    assert RPSAction.from_index(1) is RPSAction.PAPER
    assert RPSAction.from_index(10) is RPSAction.SCISSORS


def test_to_reward_rows():
    np.testing.assert_array_equal(RPSAction.ROCK.to_reward(), [0.0, 1.0, -1.0])
    np.testing.assert_array_equal(RPSAction.PAPER.to_reward(), [-1.0, 0.0, 1.0])
    np.testing.assert_array_equal(RPSAction.SCISSORS.to_reward(), [1.0, -1.0, 0.0])
