"""
Bicycle Frame Calculator - Validation Rules

Checks a parameter set before solving. Errors describe frames that cannot be
built (an inverse-trig argument out of range, a zero-length member, circles
with no common tangent); warnings and infos describe frames that solve but
deserve a second look.

The solver runs these same checks and raises InvalidConfigurationError on
any error, so callers never see NaN coordinates.
"""

from dataclasses import dataclass, field
from enum import Enum
from math import cos, radians
from typing import List, Mapping, Optional, Tuple, Union, Any

from ..io.loaders import FrameParameters, parse_parameters
from .constants import DEGENERATE_EPSILON, MIN_RECOMMENDED_TEETH
from .drivetrain import gear_radius
from .skeleton import (
    calculate_primary_skeleton,
    effective_fork_length,
    effective_stay_length,
    fork_length_fields,
    stay_length_fields,
)

ParameterInput = Union[FrameParameters, Mapping[str, Any]]


class Severity(Enum):
    """Validation message severity"""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class ValidationMessage:
    """A single validation finding"""
    severity: Severity
    code: str
    message: str
    suggestion: Optional[str] = None
    fields: Tuple[str, ...] = ()


@dataclass
class ValidationResult:
    """Complete validation result"""
    valid: bool  # True if no errors
    messages: List[ValidationMessage] = field(default_factory=list)

    @property
    def errors(self) -> List[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.ERROR]

    @property
    def warnings(self) -> List[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.WARNING]

    @property
    def infos(self) -> List[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.INFO]

    @property
    def error_fields(self) -> Tuple[str, ...]:
        """Parameter names involved in any error, in first-seen order."""
        seen = []
        for m in self.errors:
            for name in m.fields:
                if name not in seen:
                    seen.append(name)
        return tuple(seen)


def validate_parameters(params: ParameterInput) -> ValidationResult:
    """
    Validate a frame parameter set.

    Args:
        params: FrameParameters or a (flat or grouped) mapping

    Returns:
        ValidationResult with all findings

    Raises:
        MissingParameterError: If a mapping lacks required parameters
        InvalidConfigurationError: If a mapping has malformed values
    """
    params = parse_parameters(params)
    messages: List[ValidationMessage] = []

    # Frame closure checks first; the wheel check needs a solvable frame
    messages.extend(_validate_chainstay(params))
    messages.extend(_validate_top_tube(params))
    messages.extend(_validate_head_tube(params))
    messages.extend(_validate_gear_tangent(params))

    if not any(m.severity == Severity.ERROR for m in messages):
        messages.extend(_validate_wheels(params))

    messages.extend(_validate_hubs(params))
    messages.extend(_validate_teeth(params))
    messages.extend(_validate_modes(params))

    has_errors = any(m.severity == Severity.ERROR for m in messages)

    return ValidationResult(
        valid=not has_errors,
        messages=messages
    )


def _validate_chainstay(params: FrameParameters) -> List[ValidationMessage]:
    """The chainstay must reach from the bottom bracket down to the axle line."""
    messages = []
    stay = effective_stay_length(params)
    fields = ("B_drop",) + stay_length_fields(params)

    if stay < DEGENERATE_EPSILON:
        messages.append(ValidationMessage(
            severity=Severity.ERROR,
            code="STAY_LENGTH_ZERO",
            message="Chainstay length is zero",
            suggestion="Set a positive S_length (or S_const with S_mode)",
            fields=stay_length_fields(params),
        ))
    elif abs(params.B_drop) > stay:
        messages.append(ValidationMessage(
            severity=Severity.ERROR,
            code="CHAINSTAY_TOO_SHORT",
            message=(
                f"{stay_length_fields(params)[0]} too short for B_drop: chainstay "
                f"{stay:.2f} cannot span a drop of {abs(params.B_drop):.2f}"
            ),
            suggestion="Lengthen the chainstay or reduce B_drop",
            fields=fields,
        ))

    return messages


def _validate_top_tube(params: FrameParameters) -> List[ValidationMessage]:
    """The top tube must reach the head tube top height."""
    messages = []

    if params.A_length < DEGENERATE_EPSILON:
        messages.append(ValidationMessage(
            severity=Severity.ERROR,
            code="TOP_TUBE_ZERO",
            message="Top tube length is zero",
            suggestion="Set a positive A_length",
            fields=("A_length",),
        ))
        return messages

    d_angle = radians(params.D_angle)
    b_angle = radians(params.B_angle)
    head_top_y = (effective_fork_length(params) + params.H_length) * cos(d_angle)
    seat_top_y = params.B_length * cos(b_angle) + params.B_drop
    rise = head_top_y - seat_top_y

    if abs(rise) > params.A_length:
        messages.append(ValidationMessage(
            severity=Severity.ERROR,
            code="TOP_TUBE_UNREACHABLE",
            message=(
                f"A_length ({params.A_length:.2f}) too short for the {abs(rise):.2f} height "
                f"difference between seat tube top and head tube top"
            ),
            suggestion="Lengthen A_length, or adjust B_length, H_length or the fork length",
            fields=("A_length", "B_length", "B_angle", "B_drop", "H_length", "D_angle")
            + fork_length_fields(params),
        ))

    return messages


def _validate_head_tube(params: FrameParameters) -> List[ValidationMessage]:
    """The head tube axis must cross the ground line."""
    messages = []
    if abs(cos(radians(params.D_angle))) < DEGENERATE_EPSILON:
        messages.append(ValidationMessage(
            severity=Severity.ERROR,
            code="HEAD_TUBE_HORIZONTAL",
            message=f"D_angle {params.D_angle:.1f}° makes the head tube horizontal",
            suggestion="Use a head tube angle between -90° and 90°",
            fields=("D_angle",),
        ))
    return messages


def _validate_gear_tangent(params: FrameParameters) -> List[ValidationMessage]:
    """Sprocket and driver must not contain each other."""
    messages = []
    stay = effective_stay_length(params)
    if stay < DEGENERATE_EPSILON or abs(params.B_drop) > stay:
        return messages  # Reported by the chainstay check

    # The chainstay runs centre to centre, so its length is the gear distance
    difference = abs(
        gear_radius(params.D_width, params.D2_count) - gear_radius(params.D_width, params.D1_count)
    )
    if difference > stay:
        messages.append(ValidationMessage(
            severity=Severity.ERROR,
            code="GEAR_TANGENT_UNDEFINED",
            message=(
                f"Sprocket/driver radius difference ({difference:.2f}) exceeds the "
                f"chainstay length ({stay:.2f}); no chain line exists"
            ),
            suggestion="Reduce D2_count, increase D1_count, or lengthen the chainstay",
            fields=("D_width", "D1_count", "D2_count") + stay_length_fields(params),
        ))
    return messages


def _validate_wheels(params: FrameParameters) -> List[ValidationMessage]:
    """Both wheels need a common ground tangent; overlap is only a warning."""
    messages = []
    primary = calculate_primary_skeleton(params)
    w1 = primary.sizes["W1_size"]
    w2 = primary.sizes["W2_size"]
    wheelbase = primary.points["T_end"].distance_to(primary.points["S_end"])
    fields = ("R1_size", "T1_size", "R2_size", "T2_size", "D_angle", "T_length")

    if wheelbase < DEGENERATE_EPSILON or abs(w2 - w1) > wheelbase:
        messages.append(ValidationMessage(
            severity=Severity.ERROR,
            code="WHEEL_TANGENT_UNDEFINED",
            message=(
                f"Wheelbase {wheelbase:.2f} is smaller than the wheel size difference "
                f"{abs(w2 - w1):.2f}; the wheels have no common ground line"
            ),
            suggestion="Lengthen the wheelbase or use closer wheel sizes",
            fields=fields,
        ))
    elif wheelbase < w1 + w2:
        messages.append(ValidationMessage(
            severity=Severity.WARNING,
            code="WHEELS_OVERLAP",
            message=f"Wheels overlap: wheelbase {wheelbase:.2f} < {w1 + w2:.2f}",
            suggestion="Lengthen the chainstay or top tube, or use smaller wheels",
            fields=fields,
        ))

    return messages


def _validate_hubs(params: FrameParameters) -> List[ValidationMessage]:
    messages = []
    for label, hub_radius, rim_radius, fields in (
        ("Front", params.hub_radius_F, params.R1_size, ("hub_radius_F", "R1_size")),
        ("Rear", params.hub_radius_R, params.R2_size, ("hub_radius_R", "R2_size")),
    ):
        if hub_radius >= rim_radius:
            messages.append(ValidationMessage(
                severity=Severity.WARNING,
                code="HUB_EXCEEDS_RIM",
                message=f"{label} hub radius {hub_radius:.2f} is not inside the rim ({rim_radius:.2f})",
                suggestion="Spokes will point inward; check hub and rim sizes",
                fields=fields,
            ))
    return messages


def _validate_teeth(params: FrameParameters) -> List[ValidationMessage]:
    messages = []
    for label, count, name in (
        ("Sprocket", params.D2_count, "D2_count"),
        ("Driver", params.D1_count, "D1_count"),
    ):
        if count < MIN_RECOMMENDED_TEETH:
            messages.append(ValidationMessage(
                severity=Severity.WARNING,
                code="FEW_TEETH",
                message=f"{label} has only {count} teeth",
                suggestion=f"Use at least {MIN_RECOMMENDED_TEETH} teeth",
                fields=(name,),
            ))
    return messages


def _validate_modes(params: FrameParameters) -> List[ValidationMessage]:
    messages = []
    if params.F_mode:
        messages.append(ValidationMessage(
            severity=Severity.INFO,
            code="CONSTRAINED_FORK",
            message=(
                f"Fork length derived from front wheel: {effective_fork_length(params):.2f} "
                f"(F_length ignored)"
            ),
            fields=("F_mode",),
        ))
    if params.S_mode:
        messages.append(ValidationMessage(
            severity=Severity.INFO,
            code="CONSTRAINED_STAY",
            message=(
                f"Chainstay length derived from rear wheel: {effective_stay_length(params):.2f} "
                f"(S_length ignored)"
            ),
            fields=("S_mode",),
        ))
    return messages
