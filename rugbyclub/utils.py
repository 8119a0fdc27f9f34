"""Utility functions for file I/O, rounding, and common operations."""

import json
import logging
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

T = TypeVar('T', bound=BaseModel)
logger = logging.getLogger('rugbyclub.utils')


def round_half_up(value: float | int | Decimal, places: int = 1) -> float:
    """
    Round a number to a fixed number of decimal places, halves away from zero.

    Every percentage and per-match average in the package goes through this
    helper so results are identical regardless of float formatting.

    Args:
        value: Number to round
        places: Decimal places to keep (0 rounds to a whole number)

    Returns:
        Rounded value as a float

    Example:
        round_half_up(87.25)     # 87.3
        round_half_up(72.5, 0)   # 73.0
    """
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    quantum = Decimal(1).scaleb(-places)
    return float(value.quantize(quantum, rounding=ROUND_HALF_UP))


def ratio(
    numerator: int | float,
    denominator: int | float,
    scale: int = 1,
    places: int = 1,
) -> float:
    """
    Compute numerator / denominator * scale, rounded half-up.

    A zero denominator yields 0.0 instead of raising.

    Args:
        numerator: Dividend
        denominator: Divisor
        scale: Multiplier applied before rounding (100 for percentages)
        places: Decimal places to keep

    Returns:
        Rounded quotient, or 0.0 when denominator is 0

    Example:
        ratio(17, 20, scale=100)   # 85.0
        ratio(35, 40, scale=100)   # 87.5
    """
    if not denominator:
        return 0.0
    value = Decimal(str(numerator)) * scale / Decimal(str(denominator))
    return round_half_up(value, places)


def load_json(
    path: Path | str,
    schema: type[T] | None = None,
) -> Any | T:
    """
    Load JSON file with optional schema validation.

    Args:
        path: Path to JSON file (str or Path object)
        schema: Optional Pydantic model to validate against

    Returns:
        Parsed JSON (validated if schema provided)

    Raises:
        FileNotFoundError: If file doesn't exist
        json.JSONDecodeError: If JSON is malformed
        ValueError: If schema validation fails

    Example:
        # Without validation:
        rows = load_json('data/match_stats.json')

        # With validation:
        from rugbyclub.schemas import ClubConfig
        config = load_json('data/club_config.json', schema=ClubConfig)
    """
    path = Path(path)

    logger.debug(f'Loading JSON from: {path}')

    if not path.exists():
        logger.error(f'File not found: {path}')
        raise FileNotFoundError(f'File not found: {path}')

    try:
        with open(path, encoding='utf-8') as f:
            data = json.load(f)
        logger.debug(f'Successfully loaded JSON from: {path}')
    except json.JSONDecodeError as e:
        logger.error(f'Invalid JSON in {path}: {e.msg} at position {e.pos}')
        raise json.JSONDecodeError(f'Invalid JSON in {path}: {e.msg}', e.doc, e.pos) from e

    if schema:
        try:
            validated = schema.model_validate(data)
            logger.debug(f'Schema validation passed for: {path}')
            return validated
        except ValidationError as e:
            logger.error(f'Schema validation failed for {path}: {e}')
            raise ValueError(f'Schema validation failed for {path}:\n{e}') from e

    return data


def save_json(
    path: Path | str,
    data: Any,
    indent: int = 2,
    create_dirs: bool = True,
) -> None:
    """
    Save data as JSON file.

    Args:
        path: Path to write to (str or Path object)
        data: Data to serialize (must be JSON-serializable or Pydantic model)
        indent: Indentation level (default: 2 spaces)
        create_dirs: Create parent directories if they don't exist (default: True)

    Raises:
        TypeError: If data is not JSON-serializable
        OSError: If file cannot be written
    """
    path = Path(path)

    logger.debug(f'Saving JSON to: {path}')

    if create_dirs:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f'Failed to create directory {path.parent}: {e}')
            raise

    json_data = data.model_dump() if isinstance(data, BaseModel) else data

    try:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(json_data, f, indent=indent, ensure_ascii=False)
        logger.debug(f'Successfully saved JSON to: {path}')
    except TypeError as e:
        logger.error(f'Data is not JSON-serializable: {e}')
        raise TypeError(f'Data is not JSON-serializable: {e}') from e
    except OSError as e:
        logger.error(f'Failed to write file {path}: {e}')
        raise

