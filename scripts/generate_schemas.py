"""Generate JSON schemas from Pydantic models and save to schemas/ directory."""

import json
from pathlib import Path
from typing import Optional

from unitprint.kernel.details import BuildDetails
from unitprint.kernel.record import CompilationRecord
from unitprint.kernel.summary import UnitSummary

MODELS = {
    "compilation_record.schema.json": CompilationRecord,
    "build_details.schema.json": BuildDetails,
    "unit_summary.schema.json": UnitSummary,
}


def generate_schemas(schemas_dir: Optional[Path] = None) -> list:
    """Generate JSON schemas for all models and return the written paths."""
    if schemas_dir is None:
        schemas_dir = Path(__file__).parent.parent / "schemas"
    schemas_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for filename, model in MODELS.items():
        schema_path = schemas_dir / filename
        with open(schema_path, 'w', encoding='utf-8') as f:
            json.dump(model.model_json_schema(), f, indent=2, ensure_ascii=False, sort_keys=True)
        print(f"Generated: {schema_path}")
        written.append(schema_path)

    print("\nSchema generation complete!")
    return written


if __name__ == "__main__":
    generate_schemas()
