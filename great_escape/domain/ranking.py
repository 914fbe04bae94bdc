"""Turn order and tactical rank of the players from their goal distances."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

__all__ = ["RankedPlayer", "Ranking", "rank_players", "turn_order"]


def turn_order(player_id: int, self_id: int, player_count: int) -> int:
    """Position of *player_id* in the turn sequence starting at *self_id* (0)."""
    return (player_id - self_id) % player_count


@dataclass(frozen=True)
class RankedPlayer:
    player_id: int
    distance: int | None
    order: int
    rank: int

    @property
    def alive(self) -> bool:
        return self.distance is not None


@dataclass(frozen=True)
class Ranking:
    """Players sorted best-first; dead players trail in turn order."""

    self_id: int
    players: tuple[RankedPlayer, ...]

    def by_id(self, player_id: int) -> RankedPlayer:
        for player in self.players:
            if player.player_id == player_id:
                return player
        raise KeyError(player_id)

    @property
    def me(self) -> RankedPlayer:
        return self.by_id(self.self_id)

    def alive(self) -> list[RankedPlayer]:
        return [player for player in self.players if player.alive]

    @property
    def leader(self) -> RankedPlayer | None:
        """Best-ranked alive player, or ``None`` when nobody is alive."""
        alive = self.alive()
        return alive[0] if alive else None

    @property
    def last_alive(self) -> RankedPlayer | None:
        alive = self.alive()
        return alive[-1] if alive else None

    def ahead_of_self(self) -> list[RankedPlayer]:
        """Alive players ranked strictly ahead of the acting player."""
        my_rank = self.me.rank
        return [player for player in self.alive() if player.rank < my_rank]


def rank_players(distances: Sequence[int | None], self_id: int) -> Ranking:
    """Rank players by (distance, turn order); ``None`` marks a dead player.

    Smaller distance wins and equal distances go to whoever moves first
    from the acting player's point of view.
    """
    count = len(distances)
    if not 0 <= self_id < count:
        raise ValueError("self_id must index into distances")

    def sort_key(player_id: int) -> tuple[int, int, int]:
        distance = distances[player_id]
        order = turn_order(player_id, self_id, count)
        if distance is None:
            return (1, 0, order)
        return (0, distance, order)

    ranked = tuple(
        RankedPlayer(
            player_id=player_id,
            distance=distances[player_id],
            order=turn_order(player_id, self_id, count),
            rank=rank,
        )
        for rank, player_id in enumerate(sorted(range(count), key=sort_key))
    )
    return Ranking(self_id=self_id, players=ranked)
