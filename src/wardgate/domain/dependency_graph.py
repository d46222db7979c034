"""Permission dependency graph - adjacency keyed by slug."""

from collections.abc import Iterable

from wardgate.domain.entities import PermissionDependency


class DependencyGraph:
    """Immutable snapshot of depends-on edges.

    Edges point from a permission to the permissions it requires. All traversal
    is iterative; the graph is assumed acyclic because cyclic edges are
    rejected at write time.
    """

    def __init__(self, edges: Iterable[PermissionDependency] = ()) -> None:
        self._requires: dict[str, set[str]] = {}
        self._required_by: dict[str, set[str]] = {}
        for edge in edges:
            self._requires.setdefault(edge.permission, set()).add(edge.depends_on)
            self._required_by.setdefault(edge.depends_on, set()).add(edge.permission)
        self._closures: dict[str, frozenset[str]] = {}

    def __contains__(self, edge: tuple[str, str]) -> bool:
        permission, depends_on = edge
        return depends_on in self._requires.get(permission, ())

    def edges(self) -> list[PermissionDependency]:
        return [
            PermissionDependency(permission=p, depends_on=d)
            for p, deps in sorted(self._requires.items())
            for d in sorted(deps)
        ]

    def direct_dependencies(self, slug: str) -> frozenset[str]:
        return frozenset(self._requires.get(slug, ()))

    def dependents_of(self, slug: str) -> frozenset[str]:
        """Permissions that directly depend on ``slug``."""
        return frozenset(self._required_by.get(slug, ()))

    def closure(self, slug: str) -> frozenset[str]:
        """Everything ``slug`` transitively depends on, excluding ``slug`` itself."""
        cached = self._closures.get(slug)
        if cached is not None:
            return cached
        seen: set[str] = set()
        stack = list(self._requires.get(slug, ()))
        while stack:
            current = stack.pop()
            if current in seen:
                continue
            seen.add(current)
            stack.extend(self._requires.get(current, set()) - seen)
        seen.discard(slug)
        result = frozenset(seen)
        self._closures[slug] = result
        return result

    def path(self, src: str, dst: str) -> list[str] | None:
        """Depends-on path from ``src`` to ``dst`` (inclusive), or None."""
        if src == dst:
            return [src]
        parents: dict[str, str] = {}
        stack = [src]
        visited = {src}
        while stack:
            current = stack.pop()
            for nxt in sorted(self._requires.get(current, ())):
                if nxt in visited:
                    continue
                parents[nxt] = current
                if nxt == dst:
                    path = [dst]
                    while path[-1] != src:
                        path.append(parents[path[-1]])
                    return list(reversed(path))
                visited.add(nxt)
                stack.append(nxt)
        return None

    def reaches(self, src: str, dst: str) -> bool:
        return self.path(src, dst) is not None

    def cycle_if_added(self, permission: str, depends_on: str) -> list[str] | None:
        """Cycle that edge ``permission -> depends_on`` would close, or None."""
        back = self.path(depends_on, permission)
        if back is None:
            return None
        return [permission, *back]

    def missing_dependencies(self, slugs: Iterable[str]) -> dict[str, list[str]]:
        """For each slug, the closure members absent from ``slugs``."""
        held = set(slugs)
        missing: dict[str, list[str]] = {}
        for slug in sorted(held):
            absent = sorted(self.closure(slug) - held)
            if absent:
                missing[slug] = absent
        return missing
