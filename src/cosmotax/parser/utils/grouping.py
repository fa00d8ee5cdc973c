"""Reconstruct repeated records from flattened event attribute lists.

Events that describe N parallel records (N transfer legs, N contract actions)
are encoded as one attribute list with a repeating key cycle, e.g.
``recipient, sender, amount, recipient, sender, amount``.
"""

from cosmotax.parser.utils.types import Attribute


def group_attributes(attributes: list[Attribute]) -> list[list[Attribute]]:
    """Slice ``attributes`` into records, starting a new one whenever the record's first key repeats."""
    groups: list[list[Attribute]] = []
    size = len(attributes)
    start = 0
    while start < size:
        start_key = attributes[start].key
        end = size
        for j in range(start + 1, size):
            if attributes[j].key == start_key:
                end = j
                break
        groups.append(attributes[start:end])
        start = end
    return groups


def value_of(attributes: list[Attribute], key: str, default: str | None = None) -> str | None:
    """Value of the first attribute named ``key``."""
    for attr in attributes:
        if attr.key == key:
            return attr.value
    return default


def values_of(attributes: list[Attribute], key: str) -> list[str]:
    return [attr.value for attr in attributes if attr.key == key]
