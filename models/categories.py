"""User-defined clothing categories.

Categories started life as a fixed set of slots and later became free-form
strings the user can extend. The registry keeps them as interned strings in
insertion order and is the single place membership is checked.
"""

from __future__ import annotations

import sys
from typing import Iterable, Iterator, List

from studio_app.errors import InputValidationError

DEFAULT_CATEGORIES: List[str] = ["Hats", "Tops", "Bottoms", "Shoes", "Accessories", "Bags", "Other"]


def normalize_category(value: str) -> str:
    """Trim and intern a category name; blank names are rejected."""

    name = str(value or "").strip()
    if not name:
        raise InputValidationError("Please enter a category name.", title="Missing Category Name")
    return sys.intern(name)


class CategoryRegistry:
    """Ordered, mutable set of category names."""

    def __init__(self, names: Iterable[str] | None = None) -> None:
        self._names: List[str] = []
        for name in DEFAULT_CATEGORIES if names is None else names:
            self.add(name)

    def add(self, name: str) -> str:
        key = normalize_category(name)
        if key not in self._names:
            self._names.append(key)
        return key

    def ensure(self, name: str) -> str:
        """Return the registered name, registering it first when new."""

        return self.add(name)

    def validate(self, name: str) -> str:
        key = normalize_category(name)
        if key not in self._names:
            raise InputValidationError(
                f"Unknown category '{key}'. Allowed: {self._names}", title="Unknown Category"
            )
        return key

    def names(self) -> List[str]:
        return list(self._names)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.strip() in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._names))

    def __len__(self) -> int:
        return len(self._names)


__all__ = ["DEFAULT_CATEGORIES", "CategoryRegistry", "normalize_category"]
