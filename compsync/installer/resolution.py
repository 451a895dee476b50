"""Component dependency resolution."""

from collections.abc import Mapping, Sequence


def resolve_dependencies(
    name: str, requires: Mapping[str, Sequence[str]]
) -> list[str]:
    """Return the install order for ``name``.

    Every component required (directly or transitively) by ``name`` comes
    before the components that require it, each appears once, and ``name``
    is last. Diamond dependencies are emitted a single time.

    A component that is already on the current path is treated as resolved,
    so cyclic tables terminate; the order produced for them is unspecified.

    Args:
        name: Component requested by the user
        requires: Table of component -> components it needs

    Returns:
        Ordered list of component names
    """
    order: list[str] = []
    visiting: set[str] = set()

    def visit(current: str) -> None:
        if current in order or current in visiting:
            return
        visiting.add(current)
        for dep in requires.get(current, ()):
            visit(dep)
        visiting.discard(current)
        order.append(current)

    visit(name)
    return order


__all__ = [
    "resolve_dependencies",
]
