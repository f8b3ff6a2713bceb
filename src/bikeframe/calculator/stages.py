"""
Immutable snapshots of the solver pipeline.

Each stage of the calculation returns a new snapshot instead of mutating a
shared point map. Solvers that must run after leveling accept only a
``LeveledSkeleton``, so calling them on pre-leveled points is a type error
rather than a silent misplacement.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from ..io.loaders import FrameMember
from ..vectors import Vec3


def freeze(mapping: Mapping) -> Mapping:
    """Read-only copy of a mapping."""
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class _Stage:
    points: Mapping[str, Vec3]
    sizes: Mapping[str, float]

    def __post_init__(self):
        object.__setattr__(self, 'points', freeze(self.points))
        object.__setattr__(self, 'sizes', freeze(self.sizes))


@dataclass(frozen=True)
class PrimarySkeleton(_Stage):
    """Main frame points before axles, drivetrain and leveling."""
    frame_members: Mapping[str, FrameMember] = field(default_factory=dict)
    fork_length: float = 0.0   # Effective fork length (F_mode applied)
    stay_length: float = 0.0   # Effective chainstay length (S_mode applied)

    def __post_init__(self):
        super().__post_init__()
        object.__setattr__(self, 'frame_members', freeze(self.frame_members))


@dataclass(frozen=True)
class AxleSkeleton(_Stage):
    """Primary skeleton plus the three axle reference points."""


@dataclass(frozen=True)
class DrivetrainSkeleton(_Stage):
    """Axle skeleton plus both bottom-bracket stacks and the driver centre."""


@dataclass(frozen=True)
class GearedSkeleton(_Stage):
    """Drivetrain skeleton plus chain tangent points and gear sizes."""


@dataclass(frozen=True)
class WheelbaseLeveledSkeleton(_Stage):
    """Geared skeleton rotated so both axles share the same height."""
    wheelbase_rotation: float = 0.0


@dataclass(frozen=True)
class LeveledSkeleton(_Stage):
    """Fully leveled skeleton: the wheels' common tangent lies on y = 0."""
    wheelbase_rotation: float = 0.0
    wheel_tangent_rotation: float = 0.0

    @property
    def total_rotation(self) -> float:
        return self.wheelbase_rotation + self.wheel_tangent_rotation
