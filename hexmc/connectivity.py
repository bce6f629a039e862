from collections import deque

import numpy as np


class SearchScratch (object):
    """
    Reusable buffers for one breadth first search: a visited array and the frontier queue.

    The owner of the scratch (a game, or one Monte Carlo worker) passes it to every
    search it runs; 'reset' clears it in place so nothing is reallocated per call.
    """
    def __init__ (self, num_vertex):
        self.visited = np.zeros(num_vertex, dtype=bool)
        self.queue = deque()
    def reset (self):
        self.visited.fill(False)
        self.queue.clear()


def connects_borders (board, player, start_border, opposite_mask, ownership, scratch):
    """
    Multi-source BFS over the cells owned by 'player', seeded with every owned cell of 'start_border'.
    Returns True as soon as an owned cell flagged in 'opposite_mask' is reached.
    """
    scratch.reset()
    visited = scratch.visited
    queue = scratch.queue
    for src in start_border:
        if ownership[src] != player:
            continue
        if opposite_mask[src]:
            return True
        if not visited[src]:
            visited[src] = True
            queue.append(src)
    while queue:
        u = queue.popleft()
        for v in board.neighbors(u):
            if visited[v] or ownership[v] != player:
                continue
            if opposite_mask[v]:
                return True
            visited[v] = True
            queue.append(v)
    return False


class ConnectivityChecker (object):
    """Decides whether a player's stones join their start border to their opposite border."""
    def __init__ (self, board):
        self.board = board
    def new_scratch (self):
        return SearchScratch(self.board.num_vertex)
    def connects (self, player, ownership, scratch=None):
        """
        'ownership' is a flat sequence of owner values indexed like the board.
        Without a scratch a fresh one is allocated; hot loops should pass their own.
        """
        if scratch is None:
            scratch = self.new_scratch()
        return connects_borders(self.board, player, self.board.start_border(player),
                                self.board.opposite_mask(player), ownership, scratch)
