from __future__ import annotations

import heapq
import math
from collections import deque
from dataclasses import dataclass, field

from maze import Grid, NoPath, Point


@dataclass(order=True, frozen=True)
class _FrontierEntry:
    distance: int
    # Insertion counter keeps equal-distance entries in discovery order.
    seq: int
    point: Point = field(compare=False)


def shortest_path(grid: Grid, src: Point, dst: Point) -> list[Point]:
    """
    Return the minimum-length list of 4-adjacent OPEN cells from src to dst,
    both inclusive.

    Uniform-cost search with unit edges. Neighbours are explored E, S, W, N and
    the first predecessor to reach a cell keeps it, so equal-length routes are
    resolved the same way on every call. Raises NoPath when dst is unreachable.
    """
    if not grid.is_open(src) or not grid.is_open(dst):
        raise NoPath(f"Endpoints must be open cells: {src} -> {dst}")

    distances: dict[Point, int] = {src: 0}
    prev: dict[Point, Point] = {}
    frontier = [_FrontierEntry(0, 0, src)]
    seq = 1
    while frontier:
        entry = heapq.heappop(frontier)
        current = entry.point
        if entry.distance > distances.get(current, math.inf):
            continue
        if current == dst:
            break
        for neighbor in grid.open_neighbors(current):
            new_dist = entry.distance + 1
            if new_dist < distances.get(neighbor, math.inf):
                distances[neighbor] = new_dist
                prev[neighbor] = current
                heapq.heappush(frontier, _FrontierEntry(new_dist, seq, neighbor))
                seq += 1

    if dst not in distances:
        raise NoPath(f"No path from {src} to {dst}")

    path = [dst]
    while path[-1] != src:
        path.append(prev[path[-1]])
    path.reverse()
    return path


def bfs_distance(grid: Grid, src: Point, dst: Point) -> int | None:
    """Number of steps between src and dst over OPEN cells, or None if unreachable."""
    if not grid.is_open(src):
        return None
    q = deque([src])
    dist = {src: 0}
    while q:
        cur = q.popleft()
        if cur == dst:
            return dist[cur]
        for nxt in grid.open_neighbors(cur):
            if nxt not in dist:
                dist[nxt] = dist[cur] + 1
                q.append(nxt)
    return None
