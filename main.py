from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable

import config
from maze import CellKind, Direction, Grid, Point, generate_maze, random_dimension
from pathfinding import shortest_path

logger = logging.getLogger(__name__)


class KeyCode(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    W = "w"
    A = "a"
    S = "s"
    D = "d"
    OTHER = "other"


_KEY_DIRECTIONS: dict[KeyCode, Direction] = {
    KeyCode.UP: Direction.N,
    KeyCode.W: Direction.N,
    KeyCode.DOWN: Direction.S,
    KeyCode.S: Direction.S,
    KeyCode.LEFT: Direction.W,
    KeyCode.A: Direction.W,
    KeyCode.RIGHT: Direction.E,
    KeyCode.D: Direction.E,
}


@dataclass(frozen=True)
class KeyEvent:
    """
    Abstract key press delivered by the host.
    """

    key_code: KeyCode = KeyCode.OTHER
    key_char: str | None = None

    @classmethod
    def typed(cls, ch: str) -> "KeyEvent":
        """Build the event a host would send for a printable key."""
        try:
            code = KeyCode(ch.lower())
        except ValueError:
            code = KeyCode.OTHER
        return cls(key_code=code, key_char=ch)


class StepOutcome(Enum):
    IDLE = "idle"
    MOVED = "moved"
    RESET = "reset"
    WON = "won"


@dataclass(frozen=True)
class StepResult:
    outcome: StepOutcome
    needs_repaint: bool = False


@dataclass(frozen=True)
class Snapshot:
    """
    Read-only projection of the game handed to the renderer.
    """

    rows: int
    cols: int
    cells: tuple[tuple[CellKind, ...], ...]
    player: Point
    exit: Point
    overlay: tuple[Point, ...] | None = None


class InputBuffer:
    """Collects typed alphanumerics and reports when the trigger word is completed."""

    def __init__(self, trigger: str = config.TRIGGER_WORD):
        self.trigger = trigger.lower()
        self._chars: list[str] = []

    @property
    def contents(self) -> str:
        return "".join(self._chars)

    def clear(self) -> None:
        self._chars.clear()

    def feed(self, ch: str | None) -> bool:
        if ch and len(ch) == 1 and ch.isascii() and ch.isalnum():
            self._chars.append(ch.lower())
        if self.contents == self.trigger:
            self.clear()
            return True
        if len(self._chars) > len(self.trigger):
            self.clear()
        return False


class GameState:
    def __init__(
        self,
        *,
        rng: random.Random | None = None,
        dimensions: Callable[[random.Random], int] = random_dimension,
    ):
        self.rng = rng if rng is not None else random.Random()
        self._dimensions = dimensions
        self.visible = False
        self.input_buffer = InputBuffer()
        self.first_maze = True
        self.reset()

    def reset(self) -> None:
        size = self._dimensions(self.rng)
        # The very first maze is accepted without the solvability check.
        grid = generate_maze(size, self.rng, validate=not self.first_maze)
        self.load_grid(grid)
        self.first_maze = False

    def load_grid(self, grid: Grid) -> None:
        """Install grid as the current maze and put the player back on its entrance."""
        path = shortest_path(grid, grid.entrance, grid.exit)
        self.grid = grid
        self.player = grid.entrance
        self.exit = grid.exit
        self.shortest_path = path
        self._path_cells = frozenset(path)

    def on_path(self, pos: Point) -> bool:
        return pos in self._path_cells

    def try_move(self, direction: Direction) -> bool:
        target = self.player.moved(direction)
        if not self.grid.is_open(target):
            return False
        self.player = target
        return True

    def toggle_visibility(self) -> None:
        self.visible = not self.visible


class GameEngine:
    def __init__(
        self,
        *,
        seed: int | None = None,
        rng: random.Random | None = None,
        dimensions: Callable[[random.Random], int] = random_dimension,
    ):
        if rng is not None and seed is not None:
            raise ValueError("Pass either seed or rng, not both")
        if rng is None:
            rng = random.Random(seed)
        self._state = GameState(rng=rng, dimensions=dimensions)

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def visible(self) -> bool:
        return self._state.visible

    def reset(self) -> StepResult:
        self._state.reset()
        return StepResult(StepOutcome.RESET, needs_repaint=True)

    def handle_key(self, event: KeyEvent) -> StepResult:
        state = self._state

        if state.input_buffer.feed(event.key_char):
            state.toggle_visibility()
            logger.info("Shortest path is now %s", "visible" if state.visible else "hidden")
            return StepResult(StepOutcome.IDLE, needs_repaint=True)

        direction = _KEY_DIRECTIONS.get(event.key_code)
        if direction is None:
            return StepResult(StepOutcome.IDLE)

        if not state.try_move(direction):
            return StepResult(StepOutcome.IDLE)

        pos = state.player
        if pos == state.exit:
            logger.info("Exit reached at (%d, %d)", pos.row, pos.col)
            return StepResult(StepOutcome.WON, needs_repaint=True)

        if state.on_path(pos):
            logger.debug("Player is on the optimal path at (%d, %d)", pos.row, pos.col)
            return StepResult(StepOutcome.MOVED, needs_repaint=True)

        logger.info("Player moved off the optimal path at (%d, %d)", pos.row, pos.col)
        return self.reset()

    def snapshot(self) -> Snapshot:
        state = self._state
        return Snapshot(
            rows=state.grid.rows,
            cols=state.grid.cols,
            cells=state.grid.rows_view(),
            player=state.player,
            exit=state.exit,
            overlay=tuple(state.shortest_path) if state.visible else None,
        )


def cell_size_for(dim: int, window: int = config.WINDOW_SIZE) -> int:
    return window // dim


def color_for(snapshot: Snapshot, pos: Point) -> str:
    # Paint order: cell, overlay, player, exit on top.
    if pos == snapshot.exit:
        return config.EXIT_COLOR
    if pos == snapshot.player:
        return config.PLAYER_COLOR
    if snapshot.overlay is not None and pos in snapshot.overlay:
        return config.PATH_COLOR
    if snapshot.cells[pos.row][pos.col] is CellKind.WALL:
        return config.WALL_COLOR
    return config.OPEN_COLOR


def render_text(snapshot: Snapshot) -> str:
    overlay = set(snapshot.overlay or ())
    lines = []
    for r, row in enumerate(snapshot.cells):
        chars = []
        for c, kind in enumerate(row):
            pos = Point(r, c)
            if pos == snapshot.exit:
                chars.append("X")
            elif pos == snapshot.player:
                chars.append("@")
            elif pos in overlay:
                chars.append(".")
            elif kind is CellKind.WALL:
                chars.append("#")
            else:
                chars.append(" ")
        lines.append("".join(chars))
    return "\n".join(lines)
