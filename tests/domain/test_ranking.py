"""Tests for great_escape.domain.ranking."""

from __future__ import annotations

import pytest

from great_escape.domain.ranking import rank_players, turn_order


@pytest.mark.parametrize("player_count", [2, 3])
def test_turn_order_is_permutation_with_self_first(player_count: int) -> None:
    for self_id in range(player_count):
        orders = [turn_order(pid, self_id, player_count) for pid in range(player_count)]
        assert orders[self_id] == 0
        assert sorted(orders) == list(range(player_count))


def test_turn_order_wraps_around() -> None:
    assert turn_order(0, 2, 3) == 1
    assert turn_order(1, 2, 3) == 2


class TestRankPlayers:
    def test_smaller_distance_ranks_first(self) -> None:
        ranking = rank_players([5, 3, None], self_id=0)
        assert [p.player_id for p in ranking.players] == [1, 0, 2]
        assert ranking.leader is not None and ranking.leader.player_id == 1
        assert [p.player_id for p in ranking.ahead_of_self()] == [1]

    def test_ties_go_to_earlier_turn_order(self) -> None:
        ranking = rank_players([4, 4, 4], self_id=1)
        assert [p.player_id for p in ranking.players] == [1, 2, 0]
        assert ranking.ahead_of_self() == []

    def test_dead_players_sort_last_and_are_skipped(self) -> None:
        ranking = rank_players([None, 7, 2], self_id=1)
        assert ranking.players[-1].player_id == 0
        assert not ranking.players[-1].alive
        last = ranking.last_alive
        assert last is not None and last.player_id == 1
        assert [p.player_id for p in ranking.alive()] == [2, 1]

    def test_ranks_are_positions(self) -> None:
        ranking = rank_players([1, 9], self_id=1)
        assert [p.rank for p in ranking.players] == [0, 1]
        assert ranking.me.order == 0
        assert ranking.by_id(0).order == 1

    def test_self_ranked_first_has_nobody_ahead(self) -> None:
        ranking = rank_players([2, 6, 3], self_id=0)
        assert ranking.ahead_of_self() == []

    def test_invalid_self_id(self) -> None:
        with pytest.raises(ValueError):
            rank_players([1, 2], self_id=2)
