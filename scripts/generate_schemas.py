#!/usr/bin/env python3
"""
Generate JSON Schemas from the Pydantic models.

The models in bikeframe.io.loaders are the source of truth; the schemas
written here are for editors and other consumers of parameter and
geometry files.

Usage:
    python scripts/generate_schemas.py
"""

import json
from pathlib import Path

from pydantic import __version__ as PYDANTIC_VERSION

from bikeframe.enums import ChainLinkKind, DriveSide, SpokeColor, WheelPosition
from bikeframe.io import SCHEMA_VERSION
from bikeframe.io.loaders import BikeGeometry, FrameParameters, SpokePatterns

SCHEMA_DIALECT = "https://json-schema.org/draft/2020-12/schema"


def get_model_schema(model_class, title: str, description: str) -> dict:
    """JSON schema for a model, keyed by the camelCase names written to files."""
    schema = model_class.model_json_schema(by_alias=True)
    schema["$schema"] = SCHEMA_DIALECT
    schema["title"] = title
    schema["description"] = description
    return schema


def write_schema(output_dir: Path, name: str, schema: dict) -> None:
    path = output_dir / f"{name}-v{SCHEMA_VERSION}.json"
    with open(path, "w") as f:
        json.dump(schema, f, indent=2)
    print(f"  Generated: {path}")


def main():
    output_dir = Path(__file__).parent.parent / "schemas"
    output_dir.mkdir(exist_ok=True)

    print("Generating JSON schemas from Pydantic models...")
    print(f"  Pydantic version: {PYDANTIC_VERSION}")

    write_schema(output_dir, "frame-parameters", get_model_schema(
        FrameParameters, "FrameParameters", "Flat bicycle frame parameter set (cm, degrees)",
    ))
    write_schema(output_dir, "bike-geometry", get_model_schema(
        BikeGeometry, "BikeGeometry", "Solved bicycle geometry from the calculator",
    ))
    write_schema(output_dir, "spoke-patterns", get_model_schema(
        SpokePatterns, "SpokePatterns", "Front and rear spoke hole pairings",
    ))

    enums = {
        "WheelPosition": (WheelPosition, "Wheel a spoke pattern refers to"),
        "SpokeColor": (SpokeColor, "Spoke family"),
        "DriveSide": (DriveSide, "Side carrying the sprocket and chain"),
        "ChainLinkKind": (ChainLinkKind, "Chain link style"),
    }
    write_schema(output_dir, "enums", {
        "$schema": SCHEMA_DIALECT,
        "title": "BikeframeEnums",
        "description": "Enum definitions for bikeframe types",
        "definitions": {
            name: {"type": "string", "enum": [e.value for e in enum], "description": text}
            for name, (enum, text) in enums.items()
        },
    })

    print(f"\nAll schemas written to: {output_dir}/")


if __name__ == "__main__":
    main()
