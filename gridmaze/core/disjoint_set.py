from array import array

class DisjointSet:
    """
    Union-find over a flat arena of nodes, addressed by integer index.
    Path compression in find(), union by rank in union().

    The generator builds one arena per run and throws it away afterwards,
    so cells never hold references to nodes from an earlier regeneration.
    """

    __slots__ = ('parent', 'rank')

    def __init__(self, size: int = 0):
        # 'q' so indices work for any grid Grid.MAX_CELLS allows
        self.parent = array('q', range(size))
        # Rank is bounded by log2(size), one byte is plenty
        self.rank = array('B', [0]) * size

    def __len__(self) -> int:
        return len(self.parent)

    def make_set(self) -> int:
        """Adds a new singleton set and returns its index."""
        idx = len(self.parent)
        self.parent.append(idx)
        self.rank.append(0)
        return idx

    def find(self, x: int) -> int:
        parent = self.parent
        root = x
        while parent[root] != root:
            root = parent[root]

        # Point every node on the path straight at the root
        while parent[x] != root:
            parent[x], x = root, parent[x]
        return root

    def union(self, x: int, y: int) -> int:
        """
        Merges the sets containing x and y and returns the new root.
        Merging a set with itself does nothing.
        """
        x = self.find(x)
        y = self.find(y)
        if x == y:
            return x
        if self.rank[x] > self.rank[y]:
            self.parent[y] = x
            return x
        self.parent[x] = y
        if self.rank[x] == self.rank[y]:
            self.rank[y] += 1
        return y

    def connected(self, x: int, y: int) -> bool:
        return self.find(x) == self.find(y)
