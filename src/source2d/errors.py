from __future__ import annotations


class SeedingError(Exception):
    """Base class for failures of the dualization/seeding operations."""


class SeedIndexError(SeedingError, IndexError):
    """Seed index does not address an element of the collection."""

    def __init__(self, index: int, length: int) -> None:
        super().__init__(f"seed index {index} out of range for collection of length {length}")
        self.index = index
        self.length = length


class ScalarTypeMismatch(SeedingError, TypeError):
    """Target scalar type is unusable or inconsistent with the collection's scalars."""
