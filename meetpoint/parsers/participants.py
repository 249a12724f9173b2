"""
Participant file parser: read participant names, coordinates and weights from .json or .csv files.
"""

import csv
import json
from pathlib import Path
from typing import Any, Iterator

from pydantic import ValidationError

from meetpoint.analysis.types import Participant
from meetpoint.utils.validate import ParticipantRecord


class ParticipantFileError(ValueError):
    """
    Raised when a participant file cannot be read or a row is invalid.
    """


def parse_participants(file_path: str | Path) -> Iterator[ParticipantRecord]:
    """
    Read a participant file and return a generator of ParticipantRecord.

    Supported formats:
      - .json: a list of {name, lat, lng, weight} objects, or {"participants": [...]}
      - .csv: header row with name, lat, lng and optional weight columns
    """
    path = Path(file_path)
    suffix = path.suffix.lower()
    if suffix == ".json":
        return _gen_json(path)
    if suffix == ".csv":
        return _gen_csv(path)
    raise ParticipantFileError(f"unsupported participant file type: {path.name}")


def load_participants(file_path: str | Path) -> list[Participant]:
    """
    Read a participant file into domain Participants, in file order.
    """
    return [rec.to_participant() for rec in parse_participants(file_path)]


def _validate(row: dict[str, Any], where: str) -> ParticipantRecord:
    try:
        return ParticipantRecord.model_validate(row)
    except ValidationError as e:
        raise ParticipantFileError(f"{where}: {e}") from e


def _gen_json(path: Path) -> Iterator[ParticipantRecord]:
    """
    JSON array (or object with a "participants" array) → ParticipantRecord
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except ValueError as e:
        raise ParticipantFileError(f"{path.name}: invalid JSON: {e}") from e

    if isinstance(data, dict):
        data = data.get("participants")
    if not isinstance(data, list):
        raise ParticipantFileError(f"{path.name}: expected a list of participants")

    for i, row in enumerate(data, start=1):
        if not isinstance(row, dict):
            raise ParticipantFileError(f"{path.name} entry {i}: expected an object")
        yield _validate(row, f"{path.name} entry {i}")


def _gen_csv(path: Path) -> Iterator[ParticipantRecord]:
    """
    CSV rows with name, lat, lng[, weight] → ParticipantRecord
    """
    with open(path, newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        reader.fieldnames = [name.strip().lower() for name in reader.fieldnames or []]
        missing = {"lat", "lng"} - set(reader.fieldnames)
        if missing:
            raise ParticipantFileError(
                f"{path.name}: missing column(s) {', '.join(sorted(missing))}"
            )
        # header is line 1
        for line_no, row in enumerate(reader, start=2):
            # blank optional cells mean "use the default"
            cleaned = {
                k: v.strip()
                for k, v in row.items()
                if k and isinstance(v, str) and v.strip()
            }
            yield _validate(cleaned, f"{path.name} line {line_no}")
