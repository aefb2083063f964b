"""Module declarations and evaluation ordering."""

from __future__ import annotations

import heapq
from dataclasses import dataclass, field

from buildwire.exceptions import ConfigurationError, CyclicDependencyError


@dataclass(slots=True)
class ModuleGraph:
    """Explicit depends-on graph between modules.

    An edge ``A -> B`` means A's configuration may only be evaluated once B's
    is final. Ties in the computed order are broken by declaration order.
    """

    _index: dict[str, int] = field(default_factory=dict)
    _depends_on: dict[str, list[str]] = field(default_factory=dict)

    def declare_module(self, name: str) -> None:
        if not name or not name.strip():
            msg = "Module name must not be empty"
            raise ConfigurationError(msg)
        if name in self._index:
            return
        self._index[name] = len(self._index)
        self._depends_on[name] = []

    def declare_depends_on(self, module: str, dependency: str) -> None:
        for name in (module, dependency):
            if name not in self._index:
                msg = f"Module '{name}' is not declared"
                raise ConfigurationError(msg)
        edges = self._depends_on[module]
        if dependency not in edges:
            edges.append(dependency)

    def declare_all_depend_on(self, target: str) -> None:
        """Make every other declared module depend on ``target``."""

        if target not in self._index:
            msg = f"Module '{target}' is not declared"
            raise ConfigurationError(msg)
        for name in self._index:
            if name != target:
                self.declare_depends_on(name, target)

    @property
    def modules(self) -> tuple[str, ...]:
        return tuple(self._index)

    def dependencies_of(self, module: str) -> tuple[str, ...]:
        try:
            return tuple(self._depends_on[module])
        except KeyError as exc:
            msg = f"Module '{module}' is not declared"
            raise ConfigurationError(msg) from exc

    def compute_order(self) -> tuple[str, ...]:
        remaining = {name: len(deps) for name, deps in self._depends_on.items()}
        dependents: dict[str, list[str]] = {name: [] for name in self._index}
        for name, deps in self._depends_on.items():
            for dependency in deps:
                dependents[dependency].append(name)

        heap = [(self._index[name], name) for name, count in remaining.items() if count == 0]
        heapq.heapify(heap)
        order: list[str] = []
        while heap:
            _, name = heapq.heappop(heap)
            order.append(name)
            for dependent in dependents[name]:
                remaining[dependent] -= 1
                if remaining[dependent] == 0:
                    heapq.heappush(heap, (self._index[dependent], dependent))

        if len(order) != len(self._index):
            done = set(order)
            raise CyclicDependencyError(self._find_cycle([n for n in self._index if n not in done]))
        return tuple(order)

    def compute_levels(self) -> tuple[tuple[str, ...], ...]:
        """Group modules into batches with no ordering constraint among them."""

        depth: dict[str, int] = {}
        for name in self.compute_order():
            deps = self._depends_on[name]
            depth[name] = 1 + max(depth[dep] for dep in deps) if deps else 0
        levels: list[list[str]] = [[] for _ in range(max(depth.values(), default=-1) + 1)]
        for name in self._index:
            levels[depth[name]].append(name)
        return tuple(tuple(level) for level in levels)

    def _find_cycle(self, unresolved: list[str]) -> list[str]:
        # Every unresolved module still waits on another unresolved module.
        pending = set(unresolved)
        path: list[str] = []
        current = unresolved[0]
        while current not in path:
            path.append(current)
            current = next(dep for dep in self._depends_on[current] if dep in pending)
        return path[path.index(current) :]


__all__ = ["ModuleGraph"]
