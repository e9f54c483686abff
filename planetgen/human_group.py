"""Groups of people living on the planet."""

from __future__ import annotations

from dataclasses import dataclass

_U32_MAX = 2**32 - 1


@dataclass
class HumanGroup:
    """A group of humans with an identifier and a head count."""

    id: int
    population: int

    def __post_init__(self) -> None:
        for field_name in ("id", "population"):
            value = getattr(self, field_name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"{field_name} must be an integer, got {value!r}")
            if not 0 <= value <= _U32_MAX:
                raise ValueError(f"{field_name} must be within 0..{_U32_MAX}, got {value}")