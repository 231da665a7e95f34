"""
Unit tests for participant ranking and bracket order.
"""
import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from knockout.errors import InvalidBracketSizeError
from knockout.seeding import (
    get_round_name,
    calculate_bracket_size,
    calculate_byes,
    sort_participants,
    rank_participants,
    build_seed_order,
)
from conftest import make_participant


class TestBracketHelpers:
    """Tests for bracket helper functions."""

    def test_get_round_name_final(self):
        assert get_round_name(2) == "Final"

    def test_get_round_name_semi_final(self):
        assert get_round_name(4) == "Semi Final"

    def test_get_round_name_quarter_final(self):
        assert get_round_name(8) == "Quarter Final"

    def test_get_round_name_round_of_16(self):
        assert get_round_name(16) == "Round of 16"

    def test_get_round_name_larger(self):
        """Larger rounds are named by slot count."""
        assert get_round_name(32) == "Round of 32"
        assert get_round_name(64) == "Round of 64"

    def test_calculate_bracket_size_exact_power(self):
        assert calculate_bracket_size(2) == 2
        assert calculate_bracket_size(8) == 8
        assert calculate_bracket_size(16) == 16

    def test_calculate_bracket_size_not_power(self):
        """Test bracket size rounds up to next power of 2."""
        assert calculate_bracket_size(3) == 4
        assert calculate_bracket_size(5) == 8
        assert calculate_bracket_size(6) == 8
        assert calculate_bracket_size(9) == 16

    def test_calculate_bracket_size_zero(self):
        assert calculate_bracket_size(0) == 0

    def test_calculate_byes(self):
        assert calculate_byes(8) == 0
        assert calculate_byes(6) == 2
        assert calculate_byes(5) == 3
        assert calculate_byes(12) == 4


class TestSeedOrder:
    """Tests for the standard bracket order."""

    def test_seed_order_1(self):
        assert build_seed_order(1) == [1]

    def test_seed_order_2(self):
        assert build_seed_order(2) == [1, 2]

    def test_seed_order_4(self):
        # 1v4, 2v3 and winners meet in final
        assert build_seed_order(4) == [1, 4, 2, 3]

    def test_seed_order_8(self):
        assert build_seed_order(8) == [1, 8, 4, 5, 2, 7, 3, 6]

    @pytest.mark.parametrize('size', [1, 2, 4, 8, 16, 32, 64])
    def test_seed_order_is_permutation(self, size):
        assert sorted(build_seed_order(size)) == list(range(1, size + 1))

    @pytest.mark.parametrize('size', [2, 4, 8, 16, 32])
    def test_first_round_pairs_sum_to_size_plus_one(self, size):
        order = build_seed_order(size)
        for i in range(0, size, 2):
            assert order[i] + order[i + 1] == size + 1

    @pytest.mark.parametrize('size', [4, 8, 16, 32])
    def test_top_two_seeds_in_opposite_halves(self, size):
        """Seeds 1 and 2 can only meet in the final."""
        order = build_seed_order(size)
        half = size // 2
        assert 1 in order[:half]
        assert 2 in order[half:]

    @pytest.mark.parametrize('size', [0, -4, 3, 6, 12, 100])
    def test_invalid_size_raises(self, size):
        with pytest.raises(InvalidBracketSizeError, match='Invalid bracket size'):
            build_seed_order(size)

    def test_non_integer_size_raises(self):
        with pytest.raises(InvalidBracketSizeError):
            build_seed_order(4.0)


class TestRankParticipants:
    """Tests for multi-key participant ranking."""

    def test_league_position_first(self):
        """A league winner outranks a runner-up with more points."""
        winner = make_participant('W', 1, 30, 5, 20, 'L1')
        runner_up = make_participant('R', 2, 50, 20, 40, 'L2')
        ranked = rank_participants([runner_up, winner])
        assert [p.team_id for p in ranked] == ['team-W', 'team-R']

    def test_points_then_goal_difference_then_scored(self):
        a = make_participant('A', 1, 50, 10, 30, 'L1')
        b = make_participant('B', 1, 50, 10, 35, 'L2')
        c = make_participant('C', 1, 50, 12, 20, 'L3')
        d = make_participant('D', 1, 55, 0, 10, 'L4')
        ranked = rank_participants([a, b, c, d])
        assert [p.team_id for p in ranked] == ['team-D', 'team-C', 'team-B', 'team-A']

    def test_name_breaks_full_ties(self):
        zeta = make_participant('Z', 1, 50, 10, 30, 'L1', name='zeta')
        alpha = make_participant('A', 1, 50, 10, 30, 'L2', name='Alpha')
        beta = make_participant('B', 1, 50, 10, 30, 'L3', name='beta')
        ranked = rank_participants([zeta, beta, alpha])
        assert [p.team_name for p in ranked] == ['Alpha', 'beta', 'zeta']

    def test_seeds_are_one_to_n(self, six_participants):
        ranked = rank_participants(reversed(six_participants))
        assert [p.seed for p in ranked] == [1, 2, 3, 4, 5, 6]
        assert [p.team_id for p in ranked] == [p.team_id for p in six_participants]

    def test_input_not_mutated(self, six_participants):
        rank_participants(six_participants)
        assert all(p.seed is None for p in six_participants)

    def test_empty_input(self):
        assert rank_participants([]) == []

    def test_sort_does_not_assign_seeds(self, six_participants):
        ordered = sort_participants(reversed(six_participants))
        assert [p.team_id for p in ordered] == [p.team_id for p in six_participants]
        assert all(p.seed is None for p in ordered)
