"""
Load chart records from JSON or YAML files.

The dataset provider is normally an external collaborator; this loader
exists for the command line script and for fixtures.
"""

import json
import logging
from pathlib import Path
from typing import Any, TypeVar

import yaml
from pydantic import ValidationError

from statcharts.data.schemas import BaseSchema
from statcharts.exceptions import DataLoadError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseSchema)


def _read_rows(path: Path) -> Any:
    """Parse a JSON or YAML document."""
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        return json.loads(text)
    return yaml.safe_load(text)


def load_records(path: Path | str, model: type[ModelT]) -> list[ModelT]:
    """Load a list of records from a JSON or YAML file.

    The document may either be a list of rows or a mapping with a
    ``records`` key holding that list.

    Args:
        path: Path to a ``.json``, ``.yaml`` or ``.yml`` file
        model: Record model to validate every row against

    Returns:
        Records in file order

    Raises:
        DataLoadError: If the file is missing, unparsable, or a row is invalid
    """
    path = Path(path)

    if not path.exists():
        raise DataLoadError(f"Record file not found: {path}", path=str(path))

    try:
        data = _read_rows(path)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise DataLoadError(f"Could not parse {path}: {e}", path=str(path)) from e

    if isinstance(data, dict):
        data = data.get("records")
    if data is None:
        return []
    if not isinstance(data, list):
        raise DataLoadError(
            f"Expected a list of records in {path}, got {type(data).__name__}",
            path=str(path),
        )

    records: list[ModelT] = []
    for i, row in enumerate(data):
        try:
            records.append(model.model_validate(row))
        except ValidationError as e:
            raise DataLoadError(
                f"Invalid record at row {i} of {path}",
                path=str(path),
                row=i,
                context={"errors": e.errors(include_url=False)},
            ) from e

    logger.debug(f"Loaded {len(records)} {model.__name__} rows from {path}")
    return records
