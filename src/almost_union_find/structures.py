"""Disjoint-set structure with element relocation."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple


class ElementOutOfRangeError(IndexError):
    """Raised when an element id falls outside ``[1, size]``."""

    def __init__(self, element: int, size: int) -> None:
        super().__init__(f"element {element} is out of range [1, {size}]")
        self.element = element
        self.size = size


class InvariantViolationError(RuntimeError):
    """Raised by :meth:`AlmostDisjointSet.check_invariants`."""


@dataclass(eq=False)
class AlmostDisjointSet:
    """Union-find over elements ``1..size`` that also supports moving one element.

    Elements are never linked directly. Each element points at a virtual node
    (its proxy) and the forest is built over virtual nodes. Moving an element
    gives it a fresh singleton node which is then unioned into the target set,
    so the old tree is left untouched apart from its root aggregates.
    """

    size: int
    values: Optional[Sequence[int]] = None
    set_count: int = field(init=False)

    def __post_init__(self) -> None:
        if self.size < 0:
            raise ValueError("size must be non-negative")
        values = [0] * self.size if self.values is None else [int(v) for v in self.values]
        if len(values) != self.size:
            raise ValueError(f"expected {self.size} values, got {len(values)}")
        self.values = tuple(values)
        self.proxy = list(range(self.size))
        self.parent = list(range(self.size))
        self.rank = [0] * self.size
        self.count = [1] * self.size
        self.total = list(values)
        self.set_count = self.size

    @property
    def virtual_node_count(self) -> int:
        return len(self.parent)

    def value(self, element: int) -> int:
        self._check(element)
        return self.values[element - 1]

    def find_root(self, node: int) -> int:
        root = node
        while self.parent[root] != root:
            root = self.parent[root]
        while node != root:
            next_node = self.parent[node]
            self.parent[node] = root
            node = next_node
        return root

    def union(self, left: int, right: int) -> None:
        self._check(left, right)
        root_left = self._root_of(left)
        root_right = self._root_of(right)
        if root_left == root_right:
            return
        self._link(root_left, root_right)
        self.set_count -= 1

    def move(self, element: int, target: int) -> None:
        """Move ``element`` into the set that currently holds ``target``."""

        self._check(element, target)
        old_root = self._root_of(element)
        new_root = self._root_of(target)
        if old_root == new_root:
            return

        value = self.values[element - 1]
        self.count[old_root] -= 1
        self.total[old_root] -= value
        if self.count[old_root] == 0:
            self.set_count -= 1

        node = self._new_node(count=1, total=value)
        self.proxy[element - 1] = node
        self._link(new_root, node)

    def same_set(self, left: int, right: int) -> bool:
        self._check(left, right)
        return self._root_of(left) == self._root_of(right)

    def set_size(self, element: int) -> int:
        self._check(element)
        return self.count[self._root_of(element)]

    def set_sum(self, element: int) -> int:
        self._check(element)
        return self.total[self._root_of(element)]

    def set_stats(self, element: int) -> Tuple[int, int]:
        self._check(element)
        root = self._root_of(element)
        return self.count[root], self.total[root]

    def groups(self) -> Dict[int, List[int]]:
        """Return a mapping of root node to the elements of that set."""

        result: Dict[int, List[int]] = defaultdict(list)
        for element in range(1, self.size + 1):
            result[self._root_of(element)].append(element)
        return dict(result)

    def compact(self) -> None:
        """Rebuild the forest with one virtual node per element.

        Dead nodes left behind by moves are dropped. Set membership and the
        aggregates are unchanged; root ids are not preserved.
        """

        members = list(self.groups().values())
        self.proxy = [0] * self.size
        self.parent = []
        self.rank = []
        self.count = []
        self.total = []
        for elements in members:
            root = len(self.parent)
            for element in elements:
                self.proxy[element - 1] = len(self.parent)
                self.parent.append(root)
                self.rank.append(0)
                self.count.append(0)
                self.total.append(0)
            self.rank[root] = 1 if len(elements) > 1 else 0
            self.count[root] = len(elements)
            self.total[root] = sum(self.values[e - 1] for e in elements)

    def check_invariants(self) -> None:
        nodes = len(self.parent)
        if len(self.proxy) != self.size:
            raise InvariantViolationError("proxy table does not cover every element")
        for node in range(nodes):
            seen = set()
            current = node
            while self.parent[current] != current:
                if current in seen:
                    raise InvariantViolationError(f"cycle through virtual node {node}")
                seen.add(current)
                current = self.parent[current]

        counts: Dict[int, int] = defaultdict(int)
        sums: Dict[int, int] = defaultdict(int)
        for element in range(1, self.size + 1):
            node = self.proxy[element - 1]
            if not 0 <= node < nodes:
                raise InvariantViolationError(f"element {element} maps to unknown node {node}")
            root = self.find_root(node)
            counts[root] += 1
            sums[root] += self.values[element - 1]

        for node in range(nodes):
            if self.parent[node] != node:
                continue
            if self.count[node] != counts.get(node, 0) or self.total[node] != sums.get(node, 0):
                raise InvariantViolationError(
                    f"root {node} reports ({self.count[node]}, {self.total[node]}), "
                    f"members give ({counts.get(node, 0)}, {sums.get(node, 0)})"
                )
        if self.set_count != len(counts):
            raise InvariantViolationError(f"set_count is {self.set_count}, found {len(counts)} sets")

    def _check(self, *elements: int) -> None:
        for element in elements:
            if not 1 <= element <= self.size:
                raise ElementOutOfRangeError(element, self.size)

    def _root_of(self, element: int) -> int:
        return self.find_root(self.proxy[element - 1])

    def _new_node(self, count: int, total: int) -> int:
        node = len(self.parent)
        self.parent.append(node)
        self.rank.append(0)
        self.count.append(count)
        self.total.append(total)
        return node

    def _link(self, root_left: int, root_right: int) -> None:
        # Equal ranks keep the left root.
        if self.rank[root_left] < self.rank[root_right]:
            root_left, root_right = root_right, root_left
        self.parent[root_right] = root_left
        if self.rank[root_left] == self.rank[root_right]:
            self.rank[root_left] += 1
        self.count[root_left] += self.count[root_right]
        self.total[root_left] += self.total[root_right]
