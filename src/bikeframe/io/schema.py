"""
JSON layout and validation helpers for parameter files.

Parameter files come in two shapes:

- flat: ``{"A_length": 53.34, "B_length": 22.86, ...}``
- grouped: the folder layout of the interactive editor, e.g.
  ``{"frameGeometry": {"A_length": 53.34, ...}, "fork": {...}}``

Grouped files may also carry editor metadata per parameter
(``{"A_length": {"value": 53.34, "unit": "inch"}}``); only ``value`` is kept.

Note: the full JSON schemas are generated from the Pydantic models via
scripts/generate_schemas.py. This module provides runtime helpers.
"""

from typing import Any, Dict, List, Mapping, Tuple

SCHEMA_VERSION = "1.0"

# Folder layout of the interactive editor
PARAMETER_GROUPS: Dict[str, Tuple[str, ...]] = {
    "frameGeometry": (
        "A_length", "B_length", "B_angle", "B_drop", "H_length", "D_angle",
        "Z_length", "Z_angle",
    ),
    "fork": ("T_length", "F_length", "F_mode", "F_const"),
    "chainstay": ("S_length", "S_mode", "S_const"),
    "wheels": (
        "R1_size", "T1_size", "R2_size", "T2_size",
        "hubGuardEnabled_L", "hubGuardEnabled_R",
        "rearHubGuardEnabled_L", "rearHubGuardEnabled_R",
        "frontPegEnabled_L", "frontPegEnabled_R",
        "rearPegEnabled_L", "rearPegEnabled_R",
        "sprocketGuardEnabled",
    ),
    "drivetrain": (
        "BB_BaseHeight", "BB_SpacerWidth", "BB_SpacerCount",
        "BB_BaseHeight_NonD", "BB_SpacerWidth_NonD", "BB_SpacerCount_NonD",
        "CrankLength", "D2_count", "D1_count",
        "chainFullEnabled", "leftFootForward", "isRHD",
    ),
    "stemHeadset": (
        "HS_BaseHeight", "HS_SpacerWidth", "HS_SpacerCount", "L_length", "R_length",
    ),
    "handlebar": (
        "B_height", "B_width", "Bg_width", "upsweep", "backsweep", "B_rotation",
        "isFourPiece", "hasGripFlange", "barEndEnabled",
    ),
    "development": (
        "hub_radius_F", "hub_offset_F", "rim_offset_F", "hub_red_offset_F", "hub_yellow_offset_F",
        "hub_radius_R", "hub_offset_R", "rim_offset_R", "hub_red_offset_R", "hub_yellow_offset_R",
        "frontAxel_Z", "midAxel_Z", "rearAxel_Z",
        "D_width", "SpktAttachDistance", "CrankAttachDistance", "CrankAttachDistance_NonD",
        "CrankOffset", "DrvAttachDistance", "P_length", "HS_StemCenter",
    ),
    "developmentFork": (
        "moveD_end", "forkElbowPosition", "forkBase_distance", "forkElbow_offset",
    ),
    "developmentChainstay": (
        "chainstayElbowPosition", "chainstayEndInset", "chainstayEndOffset",
        "chainstayElbow_offset", "B_startOffset", "chainstayNeckPos",
        "chainstayNeckOffset", "chainstayPitchOffset",
        "chainstayElbowPosition_T", "chainstayEndInset_T", "chainstayEndOffset_T",
        "chainstayElbow_offset_T", "B_startOffset_T", "chainstayNeckPos_T",
        "chainstayNeckOffset_T",
    ),
}

REQUIRED_PARAMETERS: Tuple[str, ...] = (
    "A_length", "B_length", "B_angle", "B_drop", "H_length", "D_angle",
    "F_length", "S_length", "T_length", "R1_size", "T1_size", "R2_size", "T2_size",
)

KNOWN_PARAMETERS = frozenset(name for names in PARAMETER_GROUPS.values() for name in names)

# Non-parameter keys that may appear in exported files
_METADATA_KEYS = frozenset({"schema_version", "preset", "name", "description"})


def _unwrap(value: Any) -> Any:
    """Reduce editor metadata ``{"value": x, ...}`` to ``x``."""
    if isinstance(value, Mapping) and "value" in value:
        return value["value"]
    return value


def flatten_parameter_groups(data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Flatten a grouped parameter mapping.

    Flat keys pass through unchanged; keys that name an editor folder are
    expanded. A flat key wins over the same key inside a group.
    """
    flat: Dict[str, Any] = {}
    for key, value in data.items():
        if key in PARAMETER_GROUPS and isinstance(value, Mapping):
            for name, item in value.items():
                flat.setdefault(name, _unwrap(item))

    for key, value in data.items():
        if key in PARAMETER_GROUPS and isinstance(value, Mapping):
            continue
        flat[key] = _unwrap(value)
    return flat


def validate_json_schema(data: Dict) -> Dict[str, Any]:
    """
    Validate parameter JSON data against the file layout.

    Checks structure only (required keys present, unknown keys reported);
    value ranges are checked by the Pydantic model.

    Args:
        data: Parsed JSON data (flat or grouped)

    Returns:
        {
            "valid": bool,
            "errors": List[str],
            "warnings": List[str],
            "schema_version": str
        }

    Example:
        >>> result = validate_json_schema({"A_length": 53.34})
        >>> result["valid"]
        False
    """
    errors: List[str] = []
    warnings: List[str] = []

    schema_version = data.get("schema_version", "unknown")
    if schema_version == "unknown":
        warnings.append("Missing 'schema_version' field (assuming current format)")
    elif schema_version != SCHEMA_VERSION:
        warnings.append(f"Schema version {schema_version} != current {SCHEMA_VERSION}")

    body = data.get("params", data) if isinstance(data.get("params"), Mapping) else data
    flat = flatten_parameter_groups(body)

    for name in REQUIRED_PARAMETERS:
        if name not in flat:
            errors.append(f"Missing required parameter: '{name}'")

    for name in sorted(flat):
        if name in _METADATA_KEYS or name in KNOWN_PARAMETERS:
            continue
        warnings.append(f"Unknown parameter '{name}' will be ignored")

    for name in REQUIRED_PARAMETERS:
        value = flat.get(name)
        if value is not None and (isinstance(value, bool) or not isinstance(value, (int, float))):
            errors.append(f"Parameter '{name}' must be a number, got {type(value).__name__}")

    return {
        "valid": len(errors) == 0,
        "errors": errors,
        "warnings": warnings,
        "schema_version": schema_version,
    }
