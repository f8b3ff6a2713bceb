"""
JavaScript-Python bridge for Pyodide.

Provides a single entry point for the browser renderer. Inputs are validated
via Pydantic models before processing; errors are returned in the output
rather than raised.

Usage from JavaScript:
    pyodide.globals.set('input_json', JSON.stringify(inputs));
    const result = await pyodide.runPythonAsync(`
        from bikeframe.calculator.js_bridge import calculate
        calculate(input_json)
    `);
    const output = JSON.parse(result);
    const geometry = JSON.parse(output.geometry_json);
"""

import json
from typing import Any, Dict, List, Optional

from typing_extensions import TypedDict
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..errors import GeometryError
from ..io.loaders import parse_parameters
from ..io.schema import flatten_parameter_groups
from .chain import calculate_chain_path, chain_link_counts
from .constants import get_preset
from .core import calculate_geometry
from .output import to_json, to_markdown, to_summary
from .validation import validate_parameters


class ValidationMessageDict(TypedDict, total=False):
    """Type for validation message dictionaries sent to JavaScript."""
    severity: str  # "error", "warning", "info"
    code: str  # e.g., "CHAINSTAY_TOO_SHORT"
    message: str
    suggestion: Optional[str]
    fields: List[str]


# ============================================================================
# Input Models
# ============================================================================

class CalculatorInputs(BaseModel):
    """
    Everything the editor sends to Python.

    ``params`` may be flat or grouped by editor folder. When ``preset`` is
    set, its values are used as a base and ``params`` override them.
    """
    model_config = ConfigDict(extra='ignore')

    params: Dict[str, Any] = Field(default_factory=dict)
    preset: Optional[str] = None
    include_chain: bool = False

    @field_validator('preset', mode='before')
    @classmethod
    def normalize_preset(cls, v):
        if isinstance(v, str):
            v = v.strip().lower()
            return v or None
        return v


# ============================================================================
# Output Models
# ============================================================================

class CalculatorOutput(BaseModel):
    """Output from calculate() - matches what JS expects."""
    model_config = ConfigDict(extra='ignore')

    success: bool
    error: Optional[str] = None
    error_fields: List[str] = Field(default_factory=list)

    # Geometry (JSON string for JS to parse)
    geometry_json: Optional[str] = None

    # Display formats
    summary: Optional[str] = None
    markdown: Optional[str] = None

    # Validation
    valid: bool = True
    messages: List[ValidationMessageDict] = Field(default_factory=list)

    # Chain link counts by kind, when the chain was requested
    chain_links: Optional[Dict[str, int]] = None


# ============================================================================
# Main Entry Point
# ============================================================================

def calculate(input_json: str) -> str:
    """
    Single entry point for all calculator operations from JavaScript.

    Args:
        input_json: JSON string with CalculatorInputs structure

    Returns:
        JSON string with CalculatorOutput structure
    """
    try:
        data = json.loads(input_json)
        inputs = CalculatorInputs.model_validate(data)

        raw = get_preset(inputs.preset) if inputs.preset else {}
        raw.update(flatten_parameter_groups(inputs.params))
        params = parse_parameters(raw)

        validation = validate_parameters(params)
        messages = [
            {
                'severity': m.severity.value,
                'message': m.message,
                'code': m.code,
                'suggestion': m.suggestion,
                'fields': list(m.fields),
            }
            for m in validation.messages
        ]

        if not validation.valid:
            return CalculatorOutput(
                success=False,
                error="; ".join(m.message for m in validation.errors),
                error_fields=list(validation.error_fields),
                valid=False,
                messages=messages,
            ).model_dump_json()

        geometry = calculate_geometry(params)
        chain = calculate_chain_path(geometry) if inputs.include_chain else None

        output = CalculatorOutput(
            success=True,
            geometry_json=to_json(geometry, chain=chain),
            summary=to_summary(geometry),
            markdown=to_markdown(geometry, validation),
            valid=validation.valid,
            messages=messages,
            chain_links=chain_link_counts(chain) if chain is not None else None,
        )
        return output.model_dump_json()

    except json.JSONDecodeError as e:
        return CalculatorOutput(
            success=False,
            error=f"Invalid JSON: {e}"
        ).model_dump_json()

    except GeometryError as e:
        return CalculatorOutput(
            success=False,
            error=str(e),
            error_fields=list(e.fields),
        ).model_dump_json()

    except Exception as e:
        return CalculatorOutput(
            success=False,
            error=str(e)
        ).model_dump_json()
