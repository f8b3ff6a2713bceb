"""Output formatters for solved bicycle geometry.

Converts BikeGeometry models to JSON, Markdown and a short text summary.

Uses Pydantic's model_dump(mode='json', by_alias=True) for serialization, so
geometry keys are the camelCase names renderers read; points become
``{"x": ..., "y": ..., "z": ...}`` objects.
"""

import json
from math import degrees
from typing import List, Optional, TYPE_CHECKING

from ..io import BikeGeometry
from ..io.schema import SCHEMA_VERSION
from .drivetrain import drive_side

if TYPE_CHECKING:
    from .chain import ChainLink
    from .validation import ValidationResult

# Points shown in the markdown report, in frame order
KEY_POINTS = (
    "B_start", "B_end", "A_end", "F_end", "D_end", "T_end", "S_end",
    "Z_end", "P_end", "R_end", "barH", "Bw_end", "Bg_end",
)


def _model_to_dict(model) -> dict:
    """Convert Pydantic model to dict with JSON-compatible types and camelCase keys."""
    return model.model_dump(mode='json', by_alias=True)


def _messages_to_list(validation: "ValidationResult") -> list:
    return [
        {
            'severity': m.severity.value,
            'code': m.code,
            'message': m.message,
            'suggestion': m.suggestion,
            'fields': list(m.fields),
        }
        for m in validation.messages
    ]


def chain_to_list(links: List["ChainLink"]) -> list:
    """Chain links as JSON-compatible dicts."""
    return [
        {
            'position': {'x': link.position.x, 'y': link.position.y, 'z': link.position.z},
            'angle': link.angle,
            'kind': link.kind.value,
        }
        for link in links
    ]


def to_json(
    geometry: BikeGeometry,
    validation: Optional["ValidationResult"] = None,
    indent: int = 2,
    chain: Optional[List["ChainLink"]] = None,
) -> str:
    """Convert BikeGeometry to JSON string.

    Args:
        geometry: Solved geometry from calculate_geometry()
        validation: Optional validation results to include in output
        indent: JSON indentation level (default: 2)
        chain: Optional chain path to include

    Returns:
        JSON string with schema version, geometry and optional extras
    """
    data = _model_to_dict(geometry)
    data['schema_version'] = SCHEMA_VERSION

    if validation is not None:
        data['validation'] = {
            'valid': validation.valid,
            'messages': _messages_to_list(validation),
        }

    if chain is not None:
        data['chain_path'] = chain_to_list(chain)

    return json.dumps(data, indent=indent)


def to_markdown(
    geometry: BikeGeometry,
    validation: Optional["ValidationResult"] = None,
) -> str:
    """Convert BikeGeometry to a markdown report.

    Args:
        geometry: Solved geometry
        validation: Optional validation results to include

    Returns:
        Markdown report string
    """
    params = geometry.params
    sizes = geometry.sizes
    rotations = geometry.rotations
    wheelbase = geometry.points["T_end"].distance_to(geometry.points["S_end"])

    md = "# Bicycle Frame Geometry\n\n"

    md += "## Frame\n\n"
    md += "| Parameter | Value |\n"
    md += "|-----------|-------|\n"
    md += f"| Top Tube (A) | {params.A_length:.2f} cm |\n"
    md += f"| Seat Tube (B) | {params.B_length:.2f} cm @ {params.B_angle:.1f}° |\n"
    md += f"| Head Tube (H) | {params.H_length:.2f} cm @ {params.D_angle:.1f}° |\n"
    md += f"| BB Drop | {params.B_drop:.2f} cm |\n"
    md += f"| BB Height | {sizes['bbHeight']:.2f} cm |\n"
    md += f"| Wheelbase | {wheelbase:.2f} cm |\n"
    md += f"| Fork Mode | {'constrained' if params.F_mode else 'explicit'} |\n"
    md += f"| Chainstay Mode | {'constrained' if params.S_mode else 'explicit'} |\n\n"

    md += "## Wheels\n\n"
    md += "| Wheel | Rim Radius | Outer Radius |\n"
    md += "|-------|------------|--------------|\n"
    md += f"| Front | {sizes['R1_size']:.2f} cm | {sizes['W1_size']:.2f} cm |\n"
    md += f"| Rear | {sizes['R2_size']:.2f} cm | {sizes['W2_size']:.2f} cm |\n\n"

    md += "## Drivetrain\n\n"
    md += "| Parameter | Value |\n"
    md += "|-----------|-------|\n"
    md += f"| Sprocket | {params.D2_count} teeth, r = {sizes['D2_size']:.3f} cm |\n"
    md += f"| Driver | {params.D1_count} teeth, r = {sizes['D1_size']:.3f} cm |\n"
    md += f"| Gear Ratio | {params.D2_count / params.D1_count:.2f}:1 |\n"
    md += f"| Crank Length | {params.CrankLength:.2f} cm |\n"
    md += f"| Drive Side | {drive_side(params).value} |\n\n"

    md += "## Leveling\n\n"
    md += "| Rotation | Radians | Degrees |\n"
    md += "|----------|---------|---------|\n"
    md += f"| Wheelbase | {rotations.wheelbase:.6f} | {degrees(rotations.wheelbase):.3f}° |\n"
    md += f"| Wheel Tangent | {rotations.wheel_tangent:.6f} | {degrees(rotations.wheel_tangent):.3f}° |\n"
    md += f"| Total | {rotations.total:.6f} | {degrees(rotations.total):.3f}° |\n\n"

    md += "## Key Points\n\n"
    md += "| Point | X | Y | Z |\n"
    md += "|-------|---|---|---|\n"
    for name in KEY_POINTS:
        p = geometry.points.get(name)
        if p is not None:
            md += f"| {name} | {p.x:.3f} | {p.y:.3f} | {p.z:.3f} |\n"
    md += "\n"

    if validation:
        md += "## Validation\n\n"
        md += f"**Status**: {'✓ Valid' if validation.valid else '✗ Invalid'}\n\n"

        if validation.errors:
            md += "### Errors\n\n"
            for msg in validation.errors:
                md += f"- **{msg.code}**: {msg.message}\n"
                if msg.suggestion:
                    md += f"  - *Suggestion*: {msg.suggestion}\n"
            md += "\n"

        if validation.warnings:
            md += "### Warnings\n\n"
            for msg in validation.warnings:
                md += f"- **{msg.code}**: {msg.message}\n"
                if msg.suggestion:
                    md += f"  - *Suggestion*: {msg.suggestion}\n"
            md += "\n"

        if validation.infos:
            md += "### Information\n\n"
            for msg in validation.infos:
                md += f"- {msg.message}\n"
            md += "\n"

    md += "## Notes\n\n"
    md += "- All dimensions in centimetres unless otherwise noted\n"
    md += "- Ground line is y = 0; the frame plane is z = 0\n"
    md += "- Wheel-attached hardware must be rotated by the total leveling rotation\n\n"

    md += "---\n"
    md += "*Generated by Bikeframe Calculator*\n"

    return md


def to_summary(geometry: BikeGeometry) -> str:
    """Convert BikeGeometry to a short text summary."""
    params = geometry.params
    sizes = geometry.sizes
    wheelbase = geometry.points["T_end"].distance_to(geometry.points["S_end"])

    lines = [
        "═══ Bicycle Frame Geometry ═══",
        f"Wheelbase: {wheelbase:.2f} cm",
        f"BB height: {sizes['bbHeight']:.2f} cm",
        f"Wheels: front {sizes['W1_size']:.2f} cm, rear {sizes['W2_size']:.2f} cm",
        f"Gearing: {params.D2_count}/{params.D1_count} ({params.D2_count / params.D1_count:.2f}:1)",
        f"Leveling: {degrees(geometry.rotations.total):.3f}°",
    ]
    return "\n".join(lines)
