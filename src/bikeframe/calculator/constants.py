"""
Constants for bicycle frame geometry calculations.

This module centralizes the static tables and numerical constants used by the
solvers, validation and output modules. Internal units are centimetres and
radians unless a name says otherwise (_DEG).

Constants are grouped by category:
- Frame members: tube references and static shape parameters
- Spoke lacing: hole counts and the rim-index convention tables
- Drivetrain: chain and tooth placement
- Numerical tolerances
- Presets: named starting points for parameter files
"""

from math import pi
from typing import Dict, Tuple

# =============================================================================
# Frame members
# =============================================================================

# Each main tube is defined by two point references into the geometry point
# set plus the static shape parameters renderers need (diameters in cm).
FRAME_MEMBERS: Dict[str, Dict] = {
    "topTube": {
        "point_refs": ("B_end", "A_end"),
        "params": {"diameter": 3.1},
        "type": "tube",
    },
    "downTube": {
        "point_refs": ("B_start", "F_end"),
        "params": {"diameter": 3.5, "offset": 3.5},
        "type": "tube",
    },
    "seatTube": {
        "point_refs": ("B_start", "B_end"),
        "params": {"diameter": 2.8, "extension": 2.0},
        "type": "tube",
    },
    "headTube": {
        "point_refs": ("F_end", "P_end"),
        "params": {"diameter": 1.45, "extension": 5.5},
        "type": "tube",
    },
    "bottomBracket": {
        "point_refs": ("B_start", "midAxel"),
        "params": {"diameter": 1.8},
        "type": "tube",
    },
}

# =============================================================================
# Spoke lacing
# =============================================================================

SPOKES_PER_FLANGE: int = 18       # Holes per hub flange (and per rim ring)
SPOKE_CROSS_COUNT: int = 3        # 3-cross lacing
SPOKES_PER_FAMILY_SIDE: int = 9   # Red (or yellow) spokes per flange

# Angular shift between the right and left rings
SPOKE_RING_PHASE: float = pi / SPOKES_PER_FLANGE

# Rim hole sequences the lacing walks through. Red spokes land on the
# odd-numbered rim holes, yellow spokes on the even-numbered ones, starting
# opposite the first hub hole.
EVEN_RIM_INDICES: Tuple[int, ...] = (9, 11, 13, 15, 17, 1, 3, 5, 7)
ODD_RIM_INDICES: Tuple[int, ...] = (10, 12, 14, 16, 0, 2, 4, 6, 8)

# =============================================================================
# Drivetrain
# =============================================================================

# Radial offset from the pitch circle to a rendered tooth centre
TOOTH_RADIAL_OFFSET: float = -0.5

# Perpendicular offset of links on the straight chain runs
CHAIN_RUN_OFFSET: float = -0.07

# Tolerance when deciding whether a link angle lies on an arc
CHAIN_ARC_TOLERANCE: float = 1e-6

# Extra iterations allowed when walking teeth around an arc
CHAIN_ARC_ITERATION_MARGIN: int = 20

# =============================================================================
# Handlebar
# =============================================================================

# Bars narrower than this have no grip section
HANDLEBAR_MIN_WIDTH: float = 0.002

# Position of the bend between bar centre and grip (fraction along z)
HANDLEBAR_CORNER_FRACTION: float = 0.35

# Position of the crossbar between the corner and the grip end
HANDLEBAR_CROSSBAR_FRACTION: float = 0.8

# =============================================================================
# Numerical tolerances
# =============================================================================

# Denominators smaller than this are treated as zero
DEGENERATE_EPSILON: float = 1e-9


# Ground tangent points must land within this distance of y = 0
GROUND_TOLERANCE: float = 1e-9

# =============================================================================
# Validation thresholds
# =============================================================================

# Smallest sprocket / driver tooth count the UI offers
MIN_RECOMMENDED_TEETH: int = 7

# =============================================================================
# Presets
# =============================================================================

# Default bike of the interactive editor (cm / degrees). Fork and chainstay
# lengths are constrained to the wheel sizes (F_mode / S_mode).
DEFAULT_PARAMETERS: Dict[str, object] = {
    "A_length": 53.34,
    "B_length": 22.86,
    "B_angle": 15.0,
    "B_drop": 4.0,
    "H_length": 9.017,
    "D_angle": -15.0,
    "Z_length": 5.125,
    "Z_angle": 0.0,
    "T_length": 2.0,
    "F_length": 12.0,
    "F_mode": True,
    "F_const": 5.0,
    "S_length": 33.02,
    "S_mode": True,
    "S_const": 5.5,
    "R1_size": 20.32,
    "T1_size": 5.08,
    "R2_size": 20.32,
    "T2_size": 5.08,
}

PRESETS: Dict[str, Dict[str, object]] = {
    "default": DEFAULT_PARAMETERS,
}


def get_preset(name: str) -> Dict[str, object]:
    """Return a copy of a named parameter preset."""
    try:
        return dict(PRESETS[name])
    except KeyError:
        raise ValueError(
            f"Unknown preset '{name}'. Available: {', '.join(sorted(PRESETS))}"
        ) from None
