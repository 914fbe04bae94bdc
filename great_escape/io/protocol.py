"""Line protocol of the game engine: turn input parsing and action output.

Session header: ``width height playerCount myId``. Each turn: one
``x y wallsLeft`` line per player (``-1 -1`` once eliminated), a wall
count, then ``x y O`` per wall with ``O`` in ``{H, V}``. Each answer is a
direction token or ``x y O``, optionally followed by a message.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from great_escape.config.constants import MAX_PLAYERS
from great_escape.domain.board import BoardSnapshot, PlayerState
from great_escape.domain.grid import Coord, Direction, Grid, Orientation, Wall
from great_escape.engine.policy import Action, MoveAction, PlaceWallAction
from great_escape.errors import ProtocolError

__all__ = [
    "GameHeader",
    "format_action",
    "format_header",
    "format_snapshot",
    "parse_action",
    "parse_header",
    "parse_player_line",
    "parse_wall_line",
    "read_snapshot",
]


@dataclass(frozen=True)
class GameHeader:
    """Session constants sent once before the first turn."""

    width: int
    height: int
    player_count: int
    my_id: int

    @property
    def grid(self) -> Grid:
        return Grid(self.width, self.height)


def _ints(line: str, count: int, label: str) -> list[int]:
    tokens = line.split()
    if len(tokens) != count:
        raise ProtocolError(f"{label} expects {count} integers, got {line!r}")
    try:
        return [int(token) for token in tokens]
    except ValueError as exc:
        raise ProtocolError(f"{label} must contain integers, got {line!r}") from exc


def _parse_orientation(raw: str) -> Orientation:
    try:
        return Orientation(raw)
    except ValueError as exc:
        valid = ", ".join(o.value for o in Orientation)
        raise ProtocolError(f"orientation must be one of {valid}, got {raw!r}") from exc


def parse_header(line: str) -> GameHeader:
    width, height, player_count, my_id = _ints(line, 4, "header")
    if width < 2 or height < 2:
        raise ProtocolError("board must be at least 2x2")
    if not 2 <= player_count <= MAX_PLAYERS:
        raise ProtocolError(f"player count must be in [2, {MAX_PLAYERS}]")
    if not 0 <= my_id < player_count:
        raise ProtocolError("my id must be smaller than the player count")
    return GameHeader(width=width, height=height, player_count=player_count, my_id=my_id)


def parse_player_line(line: str, player_id: int, grid: Grid) -> PlayerState:
    """Parse ``x y wallsLeft``; any negative coordinate marks an eliminated player."""
    x, y, walls_left = _ints(line, 3, f"player {player_id}")
    if x < 0 or y < 0:
        return PlayerState(player_id=player_id, position=None, walls_left=walls_left)
    position = Coord(x, y)
    if not grid.contains(position):
        raise ProtocolError(f"player {player_id} position {position} is off the board")
    return PlayerState(player_id=player_id, position=position, walls_left=walls_left)


def parse_wall_line(line: str) -> Wall:
    tokens = line.split()
    if len(tokens) != 3:
        raise ProtocolError(f"wall expects 'x y O', got {line!r}")
    x, y = _ints(" ".join(tokens[:2]), 2, "wall")
    return Wall(Coord(x, y), _parse_orientation(tokens[2]))


def _next_line(lines: Iterator[str], what: str) -> str:
    try:
        return next(lines)
    except StopIteration as exc:
        raise ProtocolError(f"input ended while reading {what}") from exc


def read_snapshot(lines: Iterator[str], header: GameHeader) -> BoardSnapshot:
    """Read one turn from *lines*.

    Raises :exc:`EOFError` when the input is exhausted before the turn
    starts and :exc:`ProtocolError` when it ends part-way through.
    """
    grid = header.grid
    try:
        first = next(lines)
    except StopIteration as exc:
        raise EOFError("no more turns") from exc

    players = [parse_player_line(first, 0, grid)]
    for player_id in range(1, header.player_count):
        players.append(parse_player_line(_next_line(lines, f"player {player_id}"), player_id, grid))

    (wall_count,) = _ints(_next_line(lines, "wall count"), 1, "wall count")
    if wall_count < 0:
        raise ProtocolError("wall count must be >= 0")
    walls = tuple(parse_wall_line(_next_line(lines, f"wall {i}")) for i in range(wall_count))

    return BoardSnapshot(grid=grid, my_id=header.my_id, players=tuple(players), walls=walls)


def format_action(action: Action, message: str = "") -> str:
    if isinstance(action, MoveAction):
        text = action.direction.name
    elif isinstance(action, PlaceWallAction):
        text = str(action.wall)
    else:
        raise TypeError(f"unsupported action type: {type(action).__name__}")
    return f"{text} {message}" if message else text


def format_header(header: GameHeader) -> str:
    return f"{header.width} {header.height} {header.player_count} {header.my_id}"


def format_snapshot(snapshot: BoardSnapshot) -> list[str]:
    """Render *snapshot* as the turn lines the engine would send."""
    lines = []
    for player in snapshot.players:
        if player.position is None:
            lines.append(f"-1 -1 {player.walls_left}")
        else:
            lines.append(f"{player.position.x} {player.position.y} {player.walls_left}")
    lines.append(str(len(snapshot.walls)))
    lines.extend(str(wall) for wall in snapshot.walls)
    return lines


def parse_action(line: str) -> Action:
    """Parse an answer line back into an action; trailing message tokens are ignored."""
    tokens = line.split()
    if not tokens:
        raise ProtocolError("empty action line")
    head = tokens[0].upper()
    if head in Direction.__members__:
        direction = Direction[head]
        if direction is Direction.NONE:
            raise ProtocolError("NONE is not a valid move")
        return MoveAction(direction)
    if len(tokens) < 3:
        raise ProtocolError(f"unknown action {line!r}")
    return PlaceWallAction(parse_wall_line(" ".join(tokens[:3])))
