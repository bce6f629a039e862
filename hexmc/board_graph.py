import numpy as np

from .config import PLAYER_A, PLAYER_B

# (row, col) offsets of the six hex neighbours: left, right, up, down, up-right, down-left.
HEX_DIRECTIONS = ((0, -1), (0, 1), (-1, 0), (1, 0), (-1, 1), (1, -1))


class Graph (object):
    """
    Undirected graph over the vertices '0 .. num_vertex-1'.

    Attributes
    ----------
    num_vertex : int
        Number of vertices.
    neighbor_lists : list[list[int]]
        For every vertex the adjacent vertices, in insertion order.
    """
    def __init__ (self, num_vertex):
        self.num_vertex = num_vertex
        self.neighbor_lists = [[] for _ in range(num_vertex)]
        self._edges = set()
    def V (self):
        return self.num_vertex
    def E (self):
        return len(self._edges)
    def adjacent (self, x, y):
        return (min(x, y), max(x, y)) in self._edges
    def add_edge (self, x, y):
        """
        Adds the undirected edge x-y. Self loops and edges already present are ignored.
        Returns True if the edge was inserted.
        """
        if x == y or self.adjacent(x, y):
            return False
        self._edges.add((min(x, y), max(x, y)))
        self.neighbor_lists[x].append(y)
        self.neighbor_lists[y].append(x)
        return True
    def neighbors (self, x):
        return self.neighbor_lists[x]


class HexBoard (object):
    """
    The hex grid of a 'size*size' board: cell indexing, neighbourhood and the four borders.

    Player '1' connects the left column to the right column, player '-1' the top row to the bottom row.
    The adjacency is built once in the constructor and never changes afterwards.
    """
    def __init__ (self, size):
        self.size = size
        self.num_vertex = size * size
        self.graph = Graph(self.num_vertex)
        n = size
        self.left = range(0, n * n, n)
        self.right = range(n - 1, n * n, n)
        self.top = range(0, n)
        self.bottom = range(n * (n - 1), n * n)
        self._start = {PLAYER_A: self.left, PLAYER_B: self.top}
        self._opposite = {PLAYER_A: self._mask(self.right), PLAYER_B: self._mask(self.bottom)}
        self.build()
    def _mask (self, border):
        mask = np.zeros(self.num_vertex, dtype=bool)
        mask[list(border)] = True
        mask.flags.writeable = False
        return mask
    def index (self, row, col):
        return row * self.size + col
    def coordinates (self, index):
        return divmod(index, self.size)
    def contains (self, row, col):
        return 0 <= row < self.size and 0 <= col < self.size
    def neighbors_of (self, row, col):
        """
        Cell indices adjacent to (row, col). Offsets are clamped to the board, so a
        neighbour falling off an edge collapses onto the cell itself or onto a cell
        already in the set; both are dropped by construction.
        """
        last = self.size - 1
        u = self.index(row, col)
        result = set()
        for dr, dc in HEX_DIRECTIONS:
            v = self.index(min(max(row + dr, 0), last), min(max(col + dc, 0), last))
            if v != u:
                result.add(v)
        return result
    def build (self):
        for row in range(self.size):
            for col in range(self.size):
                u = self.index(row, col)
                for v in sorted(self.neighbors_of(row, col)):
                    self.graph.add_edge(u, v)
        return self.graph
    def neighbors (self, index):
        return self.graph.neighbors(index)
    def start_border (self, player):
        return self._start[player]
    def opposite_mask (self, player):
        """Read-only boolean array, True on the border 'player' has to reach."""
        return self._opposite[player]
