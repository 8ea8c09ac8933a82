from typing import Any

# Type aliases for better clarity
DocumentData = dict[str, Any]
FilterSpec = dict[str, Any]
SortSpec = list[tuple[str, int]]
IndexKeys = tuple[tuple[str, int | str], ...]


def merge_filters(
    base: FilterSpec | None = None,
    override: FilterSpec | None = None,
    **kwargs: Any
) -> FilterSpec:
    """Merge multiple filter dictionaries with proper precedence.

    Args:
        base: Base filter dict
        override: Override filter dict (takes precedence over base)
        **kwargs: Additional filters (highest precedence)

    Returns:
        Merged filter dictionary
    """
    return {**(base or {}), **(override or {}), **kwargs}
