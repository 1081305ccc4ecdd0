"""
Ordering of shared-types files.

Files holding only shared types are emitted before the rest of the corpus,
fewest imports first. This is a heuristic, not a topological sort: two files
with the same import count that depend on each other, or an import cycle,
are not put in dependency order.
"""

from dataclasses import dataclass
from typing import Dict, List

from .core.schema import ApiFile

TYPES_SUFFIX = "_types.api.json"


@dataclass
class ImportsFile:
    """An API file together with the path it was loaded from."""

    name: str
    file: ApiFile

    @property
    def import_count(self) -> int:
        return len(self.file.imports)


def select_type_files(api_files: Dict[str, ApiFile],
                      suffix: str = TYPES_SUFFIX) -> List[ImportsFile]:
    """Collect the types-only files, in load order."""
    return [
        ImportsFile(name=name, file=api_file)
        for name, api_file in api_files.items()
        if name.endswith(suffix)
    ]


def order_type_files(entries: List[ImportsFile]) -> List[ImportsFile]:
    """
    Order entries by ascending import count.

    Merge sort split at the midpoint; on equal counts the entry from the left
    half goes first, so the relative load order of ties is kept.

    Args:
        entries: Types files in load order

    Returns:
        New list in generation order
    """
    if len(entries) <= 1:
        return list(entries)

    mid = len(entries) // 2
    left = order_type_files(entries[:mid])
    right = order_type_files(entries[mid:])
    return _merge(left, right)


def _merge(left: List[ImportsFile], right: List[ImportsFile]) -> List[ImportsFile]:
    merged = []
    i = j = 0
    while i < len(left) and j < len(right):
        if left[i].import_count <= right[j].import_count:
            merged.append(left[i])
            i += 1
        else:
            merged.append(right[j])
            j += 1
    merged.extend(left[i:])
    merged.extend(right[j:])
    return merged
