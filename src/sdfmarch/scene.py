from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from sdfmarch.protocols import SDF

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sdfmarch.vector import Vector3


@dataclass(frozen=True, slots=True)
class Scene(SDF):
    """Complete scene definition.

    The scene field is the minimum over all top-level shapes. A scene is
    built once and shared read-only by every ray of a frame.
    """

    shapes: tuple[SDF, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "shapes", tuple(self.shapes))
        if not self.shapes:
            msg = "Scene needs at least one shape"
            raise ValueError(msg)

    @classmethod
    def of(cls, *shapes: SDF) -> Scene:
        return cls(shapes=shapes)

    def sdf(self, p: Vector3) -> float:
        return min(shape.sdf(p) for shape in self.shapes)

    def __iter__(self) -> Iterator[SDF]:
        return iter(self.shapes)

    def __len__(self) -> int:
        return len(self.shapes)
