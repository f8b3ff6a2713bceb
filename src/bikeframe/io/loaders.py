"""
JSON input/output for bicycle frame parameters and geometry.

Parameters are read from flat or grouped JSON files (the grouped layout
mirrors the folders of the interactive editor). Geometry records are written
for rendering collaborators.

Uses Pydantic for validation: required fields, non-negative lengths, finite
numbers, and rejection of NaN/infinity.
"""

import json
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_serializer, field_validator
from pydantic.alias_generators import to_camel

from ..enums import SpokeColor
from ..errors import InvalidConfigurationError, MissingParameterError
from ..vectors import Vec3
from .schema import SCHEMA_VERSION, flatten_parameter_groups


class FrameParameters(BaseModel):
    """
    All inputs of the geometry solver.

    Lengths are centimetres, angles are degrees. The primary frame geometry
    has no defaults; everything else defaults to the interactive editor's
    values.
    """
    model_config = ConfigDict(extra='ignore', frozen=True, allow_inf_nan=False)

    # Primary frame geometry (required)
    A_length: float = Field(ge=0)  # Top tube
    B_length: float = Field(ge=0)  # Seat tube
    B_angle: float                 # Seat tube angle from vertical (deg)
    B_drop: float                  # Bottom bracket drop below the axle line
    H_length: float = Field(ge=0)  # Head tube
    D_angle: float                 # Head tube angle from vertical (deg)
    F_length: float = Field(ge=0)  # Fork (ignored when F_mode)
    S_length: float = Field(ge=0)  # Chainstay (ignored when S_mode)
    T_length: float = Field(ge=0)  # Dropout
    R1_size: float = Field(ge=0)   # Front rim radius
    T1_size: float = Field(ge=0)   # Front tire depth
    R2_size: float = Field(ge=0)   # Rear rim radius
    T2_size: float = Field(ge=0)   # Rear tire depth

    # Seat post
    Z_length: float = Field(default=5.125, ge=0)
    Z_angle: float = 0.0

    # Wheel-constrained fork / chainstay
    F_mode: bool = False
    F_const: float = Field(default=5.0, ge=0)
    S_mode: bool = False
    S_const: float = Field(default=5.5, ge=0)

    # Head tube top extension
    P_length: float = Field(default=3.5, ge=0)

    # Bottom bracket stacks
    BB_BaseHeight: float = Field(default=1.0, ge=0)
    BB_SpacerWidth: float = Field(default=0.2, ge=0)
    BB_SpacerCount: int = Field(default=2, ge=0)
    BB_BaseHeight_NonD: float = Field(default=1.0, ge=0)
    BB_SpacerWidth_NonD: float = Field(default=0.2, ge=0)
    BB_SpacerCount_NonD: int = Field(default=2, ge=0)

    # Drivetrain
    CrankLength: float = Field(default=17.0, ge=0)
    CrankOffset: float = 0.8
    CrankAttachDistance: float = Field(default=1.7, ge=0)
    CrankAttachDistance_NonD: float = Field(default=1.4, ge=0)
    SpktAttachDistance: float = Field(default=0.3, ge=0)
    DrvAttachDistance: float = -1.5
    D_width: float = Field(default=1.3, ge=0)  # Chain pitch
    D2_count: int = Field(default=25, ge=1)    # Sprocket teeth
    D1_count: int = Field(default=9, ge=1)     # Driver teeth
    chainFullEnabled: bool = False
    leftFootForward: bool = True
    isRHD: bool = False
    sprocketGuardEnabled: bool = False

    # Axle half-widths
    frontAxel_Z: float = 5.6
    midAxel_Z: float = 3.81
    rearAxel_Z: float = 5.7

    # Headset and stem
    HS_BaseHeight: float = Field(default=1.0, ge=0)
    HS_SpacerWidth: float = Field(default=0.3, ge=0)
    HS_SpacerCount: int = Field(default=1, ge=0)
    HS_StemCenter: float = Field(default=0.001, ge=0)
    L_length: float = Field(default=4.3, ge=0)  # Stem reach
    R_length: float = Field(default=2.5, ge=0)  # Stem rise

    # Handlebar (angles in degrees)
    B_height: float = Field(default=22.86, ge=0)
    B_width: float = Field(default=35.56, ge=0)
    Bg_width: float = Field(default=19.05, ge=0)
    upsweep: float = 1.0
    backsweep: float = 12.0
    B_rotation: float = 0.0
    isFourPiece: bool = False
    hasGripFlange: bool = False
    barEndEnabled: bool = True

    # Hubs and spokes
    hub_radius_F: float = Field(default=2.2, ge=0)
    hub_offset_F: float = Field(default=4.8, ge=0)
    rim_offset_F: float = Field(default=0.0, ge=0)
    hub_red_offset_F: float = 0.0
    hub_yellow_offset_F: float = 0.3
    hub_radius_R: float = Field(default=2.5, ge=0)
    hub_offset_R: float = Field(default=5.1, ge=0)
    rim_offset_R: float = Field(default=0.0, ge=0)
    hub_red_offset_R: float = 0.0
    hub_yellow_offset_R: float = 0.6

    # Fork detail
    moveD_end: float = Field(default=1.7, ge=0)
    forkElbowPosition: float = Field(default=3.2, ge=0)
    forkBase_distance: float = Field(default=1.7, ge=0)
    forkElbow_offset: float = 0.0

    # Bottom chainstay
    chainstayElbowPosition: float = Field(default=7.0, ge=0)
    chainstayEndInset: float = Field(default=4.2, ge=0)
    chainstayEndOffset: float = 0.9
    chainstayElbow_offset: float = -0.8
    B_startOffset: float = 0.8
    chainstayNeckPos: float = Field(default=2.7, ge=0)
    chainstayNeckOffset: float = 1.0
    chainstayPitchOffset: float = 1.0  # degrees

    # Top (seat) stay
    chainstayElbowPosition_T: float = Field(default=9.3, ge=0)
    chainstayEndInset_T: float = Field(default=4.1, ge=0)
    chainstayEndOffset_T: float = 1.0
    chainstayElbow_offset_T: float = -0.9
    B_startOffset_T: float = 0.9
    chainstayNeckPos_T: float = Field(default=0.3, ge=0)
    chainstayNeckOffset_T: float = 0.3

    # Accessories (rendering toggles, echoed to renderers)
    hubGuardEnabled_L: bool = False
    hubGuardEnabled_R: bool = False
    rearHubGuardEnabled_L: bool = False
    rearHubGuardEnabled_R: bool = False
    frontPegEnabled_L: bool = False
    frontPegEnabled_R: bool = False
    rearPegEnabled_L: bool = False
    rearPegEnabled_R: bool = False


# =============================================================================
# Geometry record
# =============================================================================

def _read_only(mapping: Mapping) -> Mapping:
    return MappingProxyType(dict(mapping))


class _RenderedModel(BaseModel):
    """
    Base for records handed to renderers.

    Attributes are snake_case; JSON keys are camelCase, the names the
    JavaScript renderer reads (``frameMembers``, ``wheelTangent``).
    """
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class FrameMember(_RenderedModel):
    """A tube resolved against a point set."""
    model_config = ConfigDict(extra='ignore')

    name: str
    type: str = "tube"
    start_ref: str
    end_ref: str
    start: Optional[Vec3] = None  # None when the reference is not yet computed
    end: Optional[Vec3] = None
    params: Mapping[str, float] = Field(default_factory=dict, validate_default=True)

    @field_validator('params')
    @classmethod
    def _freeze(cls, value):
        return _read_only(value)

    @field_serializer('params', mode='wrap')
    def _thaw(self, value, handler):
        return handler(dict(value))


class Spoke(_RenderedModel):
    """One spoke from a hub hole to a rim hole (wheel-local coordinates)."""

    start: Vec3
    end: Vec3
    hub_index: int
    rim_index: int


class SpokeSet(_RenderedModel):
    red: Tuple[Spoke, ...] = ()
    yellow: Tuple[Spoke, ...] = ()

    def of(self, color: SpokeColor) -> Tuple[Spoke, ...]:
        return self.red if color == SpokeColor.RED else self.yellow


class SpokeRings(_RenderedModel):
    """Hub flange and rim hole positions, 18 per ring."""

    hub_points_right: Tuple[Vec3, ...]
    hub_points_left: Tuple[Vec3, ...]
    rim_points_right: Tuple[Vec3, ...]
    rim_points_left: Tuple[Vec3, ...]


class SpokePattern(_RenderedModel):
    """Hole positions and lacing for one wheel, in its local frame."""

    points: SpokeRings
    spokes: SpokeSet

    @property
    def spoke_count(self) -> int:
        return len(self.spokes.red) + len(self.spokes.yellow)


class SpokePatterns(_RenderedModel):
    front: SpokePattern
    rear: SpokePattern


class Rotations(_RenderedModel):
    """
    Leveling rotations (radians).

    Renderers must rotate any wheel-attached hardware by ``total`` so that
    it stays phased with the leveled frame.
    """

    wheelbase: float
    wheel_tangent: float
    total: float


class HandlebarRotations(_RenderedModel):
    user_rotation: float
    stem_alignment: float
    total_local: float


class BikeGeometry(_RenderedModel):
    """
    Complete solved geometry, the single record handed to renderers.

    The point, size and frame member mappings are read-only views, so every
    consumer sees the record exactly as the solver built it.
    """
    model_config = ConfigDict(extra='ignore')

    points: Mapping[str, Vec3]
    sizes: Mapping[str, float]
    rotations: Rotations
    frame_members: Mapping[str, FrameMember]
    spoke_patterns: SpokePatterns
    handlebar_rotations: HandlebarRotations
    params: FrameParameters

    @field_validator('points', 'sizes', 'frame_members')
    @classmethod
    def _freeze(cls, value):
        return _read_only(value)

    @field_serializer('points', 'sizes', 'frame_members', mode='wrap')
    def _thaw(self, value, handler):
        return handler(dict(value))


# =============================================================================
# Parameter parsing
# =============================================================================

def parse_parameters(data: Union[FrameParameters, Mapping[str, Any]]) -> FrameParameters:
    """
    Build FrameParameters from a mapping, raising the calculator's errors.

    Accepts flat mappings or the grouped editor layout. Pydantic's
    ValidationError is translated: absent required fields become
    MissingParameterError, anything else InvalidConfigurationError.

    Raises:
        MissingParameterError: If required parameters are absent
        InvalidConfigurationError: If a value is malformed or out of range
    """
    if isinstance(data, FrameParameters):
        return data

    flat = flatten_parameter_groups(data)
    try:
        return FrameParameters.model_validate(flat)
    except ValidationError as e:
        missing = [str(err['loc'][0]) for err in e.errors() if err['type'] == 'missing']
        if missing:
            raise MissingParameterError(missing) from e
        fields = [str(err['loc'][0]) for err in e.errors() if err['loc']]
        details = "; ".join(f"{err['loc'][0]}: {err['msg']}" for err in e.errors() if err['loc'])
        raise InvalidConfigurationError(f"Invalid parameter value(s): {details}", fields) from e


def read_parameters_json(filepath: Union[str, Path]) -> Dict[str, Any]:
    """
    Read a parameter file into a flat dict without validating it.

    Used when the file only overrides a preset.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the file is not a JSON object
    """
    filepath = Path(filepath)

    if not filepath.exists():
        raise FileNotFoundError(f"Parameter file not found: {filepath}")

    with open(filepath, 'r') as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError("Invalid parameter JSON - expected an object at the top level")

    # Some exports wrap the parameters
    if 'params' in data and isinstance(data['params'], dict):
        data = data['params']

    return flatten_parameter_groups(data)


def load_parameters_json(filepath: Union[str, Path]) -> FrameParameters:
    """
    Load frame parameters from a JSON file.

    Args:
        filepath: Path to a flat or grouped parameter file

    Returns:
        Validated FrameParameters

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the file is not a JSON object
        MissingParameterError: If required parameters are absent
        InvalidConfigurationError: If a value is malformed or out of range
    """
    return parse_parameters(read_parameters_json(filepath))


def save_parameters_json(params: FrameParameters, filepath: Union[str, Path]) -> None:
    """Save parameters as a flat JSON object with a schema version."""
    data = params.model_dump(mode='json')
    data['schema_version'] = SCHEMA_VERSION

    with open(Path(filepath), 'w') as f:
        json.dump(data, f, indent=2)


def save_geometry_json(geometry: BikeGeometry, filepath: Union[str, Path]) -> None:
    """Save a solved geometry record to JSON."""
    data = geometry.model_dump(mode='json', by_alias=True)
    data['schema_version'] = SCHEMA_VERSION

    with open(Path(filepath), 'w') as f:
        json.dump(data, f, indent=2)
