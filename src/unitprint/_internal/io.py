"""Record I/O helpers (internal)."""

from pathlib import Path
from typing import Union

from unitprint.kernel.record import CompilationRecord


def load_record_from_path(path: Union[str, Path]) -> CompilationRecord:
    """Load a compilation record from a JSON file path.

    Raises:
        FileNotFoundError: If the file does not exist
        pydantic.ValidationError: If the file is not a valid record
    """
    record_path = Path(path)
    if not record_path.is_file():
        raise FileNotFoundError(f"Record file not found: {record_path}")
    return CompilationRecord.from_json_bytes(record_path.read_bytes())
