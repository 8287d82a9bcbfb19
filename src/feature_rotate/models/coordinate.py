"""Coordinate value type for the planar map frame."""
from dataclasses import dataclass


@dataclass(frozen=True)
class Coordinate:
    """2D map coordinate.

    Immutable (x, y) pair in the map's planar reference frame. Supports
    tuple unpacking and indexing so it can be used anywhere a plain
    ``(x, y)`` pair is expected.
    """
    x: float
    y: float

    def __iter__(self):
        """Allow tuple unpacking: x, y = coordinate"""
        return iter((self.x, self.y))

    def __getitem__(self, index):
        return (self.x, self.y)[index]

    def __len__(self):
        return 2

    @classmethod
    def of(cls, value) -> 'Coordinate':
        """Coerce a Coordinate or any (x, y) sequence into a Coordinate."""
        if isinstance(value, Coordinate):
            return value
        x, y = value
        return cls(float(x), float(y))
