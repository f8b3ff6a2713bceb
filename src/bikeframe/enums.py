"""Type-safe enums for the bicycle frame calculator."""

from enum import Enum


class WheelPosition(Enum):
    """Which wheel a spoke pattern or placement refers to"""
    FRONT = "front"
    REAR = "rear"


class SpokeColor(Enum):
    """Spoke family; red spokes start on even hub holes, yellow on odd"""
    RED = "red"
    YELLOW = "yellow"


class DriveSide(Enum):
    """Side of the bike carrying the sprocket and chain"""
    RIGHT = "right"  # Conventional right-hand drive
    LEFT = "left"    # Mirrored (isRHD); drivetrain z is negated


class ChainLinkKind(Enum):
    """Chain link style used by renderers"""
    HALF = "half"      # Simplified half-link chain
    FULL_A = "full_a"  # Full chain, outer plate
    FULL_B = "full_b"  # Full chain, inner plate
