from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Iterator

import config

logger = logging.getLogger(__name__)


class MazeError(Exception):
    """Base class for every error raised by the maze core."""


class InvalidDimensions(MazeError, ValueError):
    pass


class OutOfBounds(MazeError, IndexError):
    pass


class NoPath(MazeError, LookupError):
    pass


class GenerationExhausted(MazeError, RuntimeError):
    pass


class Direction(Enum):
    # Declaration order is the neighbour exploration order: E, S, W, N.
    E = (0, 1)
    S = (1, 0)
    W = (0, -1)
    N = (-1, 0)

    @property
    def delta(self) -> tuple[int, int]:
        return self.value


@dataclass(frozen=True)
class Point:
    row: int
    col: int

    def moved(self, direction: Direction, steps: int = 1) -> "Point":
        dr, dc = direction.delta
        return Point(row=self.row + dr * steps, col=self.col + dc * steps)


class CellKind(Enum):
    WALL = "wall"
    OPEN = "open"


def validate_dimensions(rows: int, cols: int) -> None:
    if rows != cols:
        raise InvalidDimensions(f"Maze must be square, got {rows}x{cols}")
    if rows % 2 == 0:
        raise InvalidDimensions(f"Maze dimension must be odd, got {rows}")
    if not config.MIN_DIMENSION <= rows <= config.MAX_DIMENSION:
        raise InvalidDimensions(
            f"Maze dimension must be within [{config.MIN_DIMENSION}, {config.MAX_DIMENSION}], got {rows}"
        )


class Grid:
    """
    Rectangular matrix of cell kinds, all WALL on construction.

    Reads outside the grid report WALL so callers can probe neighbours
    without bounds checks; writes outside the grid raise OutOfBounds.
    """

    def __init__(self, rows: int, cols: int):
        validate_dimensions(rows, cols)
        self.rows = rows
        self.cols = cols
        self._cells: list[list[CellKind]] = [[CellKind.WALL] * cols for _ in range(rows)]

    @property
    def entrance(self) -> Point:
        return Point(1, 1)

    @property
    def exit(self) -> Point:
        return Point(self.rows - 2, self.cols - 2)

    def in_bounds(self, pos: Point) -> bool:
        return 0 <= pos.row < self.rows and 0 <= pos.col < self.cols

    def kind(self, pos: Point) -> CellKind:
        if not self.in_bounds(pos):
            return CellKind.WALL
        return self._cells[pos.row][pos.col]

    def is_open(self, pos: Point) -> bool:
        return self.kind(pos) is CellKind.OPEN

    def set(self, pos: Point, kind: CellKind) -> None:
        if not self.in_bounds(pos):
            raise OutOfBounds(f"Out of bounds position: {pos}")
        self._cells[pos.row][pos.col] = kind

    def fill(self, kind: CellKind = CellKind.WALL) -> None:
        for row in self._cells:
            row[:] = [kind] * self.cols

    def open_neighbors(self, pos: Point) -> Iterator[Point]:
        """Yield the OPEN 4-neighbours of pos in E, S, W, N order."""
        for direction in Direction:
            nxt = pos.moved(direction)
            if self.is_open(nxt):
                yield nxt

    def open_cells(self) -> Iterator[Point]:
        for r, row in enumerate(self._cells):
            for c, kind in enumerate(row):
                if kind is CellKind.OPEN:
                    yield Point(r, c)

    def rows_view(self) -> tuple[tuple[CellKind, ...], ...]:
        return tuple(tuple(row) for row in self._cells)


def random_dimension(rng: random.Random) -> int:
    """Draw a square maze dimension: a fair coin picks the small or the full range."""
    lucky = rng.choice((True, False))
    upper = config.LUCKY_MAX_DIMENSION if lucky else config.MAX_DIMENSION
    value = rng.randint(config.MIN_DIMENSION, upper)
    if value % 2 == 0:
        value += 1
    logger.info("New maze size: %dx%d", value, value)
    return value


def carve_maze(grid: Grid, rng: random.Random) -> None:
    """Carve a perfect maze into grid with an iterative randomized backtracker.

    Cells two steps apart on the odd-coordinate lattice are linked by opening
    the wall cell between them.
    """
    grid.fill(CellKind.WALL)
    start = grid.entrance
    grid.set(start, CellKind.OPEN)
    stack: list[Point] = [start]
    while stack:
        current = stack.pop()
        candidates: list[Point] = []
        for direction in Direction:
            nxt = current.moved(direction, steps=2)
            if 1 <= nxt.row <= grid.rows - 2 and 1 <= nxt.col <= grid.cols - 2 and not grid.is_open(nxt):
                candidates.append(nxt)
        if not candidates:
            continue
        stack.append(current)
        chosen = rng.choice(candidates)
        grid.set(chosen, CellKind.OPEN)
        grid.set(Point((current.row + chosen.row) // 2, (current.col + chosen.col) // 2), CellKind.OPEN)
        stack.append(chosen)


def is_solvable(grid: Grid) -> bool:
    """Depth-first reachability from the entrance to the exit over OPEN cells."""
    start, goal = grid.entrance, grid.exit
    if not grid.is_open(start):
        return False
    seen = {start}
    stack = [start]
    while stack:
        cur = stack.pop()
        if cur == goal:
            return True
        for nxt in grid.open_neighbors(cur):
            if nxt not in seen:
                seen.add(nxt)
                stack.append(nxt)
    return False


def generate_maze(
    size: int,
    rng: random.Random,
    *,
    validate: bool = True,
    max_attempts: int = config.MAX_GENERATION_ATTEMPTS,
) -> Grid:
    """
    Build a size x size maze.

    With validate=False the first carved maze is returned as is. Otherwise
    mazes are re-carved until one connects the entrance to the exit, giving up
    with GenerationExhausted after max_attempts.
    """
    grid = Grid(size, size)
    for attempt in range(1, max_attempts + 1):
        logger.debug("Carving %dx%d maze (attempt %d)", size, size, attempt)
        carve_maze(grid, rng)
        if not validate or is_solvable(grid):
            return grid
        logger.warning("Maze %dx%d failed validation on attempt %d", size, size, attempt)
    raise GenerationExhausted(f"No solvable {size}x{size} maze after {max_attempts} attempts")
