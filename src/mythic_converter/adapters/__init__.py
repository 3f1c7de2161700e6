"""
Source schema adapters.

Currently supports:
- MMOItems type files
- ItemsAdder content files
"""

from .base import SchemaAdapter
from .itemsadder import ItemsAdderAdapter
from .mmoitems import MMOItemsAdapter

ADAPTERS: dict[str, type[SchemaAdapter]] = {
    MMOItemsAdapter.name: MMOItemsAdapter,
    ItemsAdderAdapter.name: ItemsAdderAdapter,
}


def get_adapter(name: str) -> SchemaAdapter:
    """Create an adapter by name (``mmoitems`` or ``itemsadder``)."""
    try:
        return ADAPTERS[name.lower()]()
    except KeyError:
        raise ValueError(f"Unknown source schema '{name}'; expected one of {', '.join(ADAPTERS)}") from None


__all__ = [
    "ADAPTERS",
    "ItemsAdderAdapter",
    "MMOItemsAdapter",
    "SchemaAdapter",
    "get_adapter",
]
