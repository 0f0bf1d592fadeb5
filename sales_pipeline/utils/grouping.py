"""Generic grouping helper for building extra report slices."""

from collections.abc import Callable, Hashable, Iterable


def group_by[T, K: Hashable](items: Iterable[T], key_fn: Callable[[T], K]) -> dict[K, list[T]]:
    """Group ``items`` by ``key_fn``.

    Keys appear in first-seen order and each group keeps the input order.
    """
    groups: dict[K, list[T]] = {}
    for item in items:
        groups.setdefault(key_fn(item), []).append(item)
    return groups
