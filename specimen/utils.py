"""File I/O helpers shared by config and state storage."""

import json
import logging
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

T = TypeVar('T', bound=BaseModel)
logger = logging.getLogger('specimen.utils')


def load_json(path: Path | str, schema: type[T] | None = None) -> Any | T:
    """
    Read a JSON file, optionally validating it against a Pydantic model.

    Args:
        path: File to read
        schema: Pydantic model the top-level object must satisfy

    Returns:
        Parsed JSON, or a ``schema`` instance when one is given

    Raises:
        FileNotFoundError: If the file doesn't exist
        json.JSONDecodeError: If the file isn't valid JSON
        ValueError: If schema validation fails
    """
    path = Path(path)
    logger.debug(f'Loading JSON from: {path}')

    if not path.exists():
        raise FileNotFoundError(f'File not found: {path}')

    try:
        with open(path, encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f'Invalid JSON in {path}: {e.msg} at position {e.pos}')
        raise

    if schema is None:
        return data

    try:
        return schema.model_validate(data)
    except ValidationError as e:
        logger.error(f'Schema validation failed for {path}: {e}')
        raise ValueError(f'Schema validation failed for {path}:\n{e}') from e


def save_json(path: Path | str, data: Any, indent: int = 2) -> None:
    """
    Write data (plain JSON types or a Pydantic model) to a JSON file.

    Parent directories are created as needed. The file is written to a
    temporary sibling first and then moved into place.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    json_data = data.model_dump() if isinstance(data, BaseModel) else data

    tmp_path = path.with_suffix(path.suffix + '.tmp')
    try:
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump(json_data, f, indent=indent, ensure_ascii=False)
    except (TypeError, OSError) as e:
        logger.error(f'Failed to write {path}: {e}')
        tmp_path.unlink(missing_ok=True)
        raise
    tmp_path.replace(path)
    logger.debug(f'Saved JSON to: {path}')
