"""
Grid I/O Module - Validation and JSON conversion at the solver boundary.

Grids arrive as JSON-style arrays of arrays of digits. Anything that is
not a rectangular matrix of integers 0-9 is rejected with a
GridValidationError naming the offending position; nothing is coerced.
"""

import json
import logging
from pathlib import Path
from typing import Any, List, Sequence, Union

import numpy as np

from .solver import Grid, Solution, Step

logger = logging.getLogger(__name__)

MIN_VALUE = 0
MAX_VALUE = 9


class GridValidationError(ValueError):
    """Raised when input cannot be interpreted as a puzzle grid."""


def _parse_value(value: Any, row: int, col: int) -> int:
    """Validate one cell, returning it as an int."""
    # bool is an int subclass; true/false are not digits
    if isinstance(value, (bool, np.bool_)):
        raise GridValidationError(
            f"Failed to parse grid: cell ({row}, {col}) is a boolean, expected an integer"
        )
    if isinstance(value, (int, np.integer)):
        number = int(value)
    elif isinstance(value, (float, np.floating)) and float(value).is_integer():
        # JSON producers often write 5 as 5.0
        number = int(value)
    else:
        raise GridValidationError(
            f"Failed to parse grid: cell ({row}, {col}) has non-integer value {value!r}"
        )

    if not MIN_VALUE <= number <= MAX_VALUE:
        raise GridValidationError(
            f"Failed to parse grid: cell ({row}, {col}) value {number} "
            f"outside {MIN_VALUE}..{MAX_VALUE}"
        )
    return number


def parse_grid(raw: Any) -> Grid:
    """
    Validate a matrix of digits and build a Grid.

    Args:
        raw: List (or tuple, or 2D numpy array) of rows of integers 0-9;
            rows may themselves be numpy arrays

    Returns:
        Grid instance

    Raises:
        GridValidationError: If raw is not a rectangular matrix of values
            in range
    """
    if isinstance(raw, Grid):
        return raw.copy()
    if isinstance(raw, np.ndarray):
        raw = raw.tolist()
    if isinstance(raw, (str, bytes)) or not isinstance(raw, Sequence):
        raise GridValidationError(
            f"Failed to parse grid: expected an array of rows, got {type(raw).__name__}"
        )

    rows: List[List[int]] = []
    width = None
    for r, raw_row in enumerate(raw):
        if isinstance(raw_row, np.ndarray):
            raw_row = raw_row.tolist()
        if isinstance(raw_row, (str, bytes)) or not isinstance(raw_row, Sequence):
            raise GridValidationError(
                f"Failed to parse grid: row {r} is {type(raw_row).__name__}, expected an array"
            )
        if width is None:
            width = len(raw_row)
        elif len(raw_row) != width:
            raise GridValidationError(
                f"Failed to parse grid: row {r} has {len(raw_row)} cells, expected {width}"
            )
        rows.append([_parse_value(value, r, c) for c, value in enumerate(raw_row)])

    if not rows:
        return Grid.empty(0, 0)
    return Grid.from_rows(rows)


def parse_grid_json(text: str) -> Grid:
    """
    Parse a JSON array-of-arrays into a Grid.

    Raises:
        GridValidationError: If text is not JSON or not a valid grid
    """
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        raise GridValidationError(f"Failed to parse grid: invalid JSON ({e})") from e
    return parse_grid(raw)


def load_grid(path: Union[str, Path]) -> Grid:
    """
    Load a grid from a JSON file.

    Args:
        path: File holding a JSON array of rows

    Returns:
        Grid instance

    Raises:
        GridValidationError: If the contents are not a valid grid
        OSError: If the file cannot be read
    """
    path = Path(path)
    with open(path, 'r', encoding='utf-8') as f:
        text = f.read()
    grid = parse_grid_json(text)
    logger.debug(f"Loaded {grid.rows}x{grid.cols} grid from {path}")
    return grid


def grid_to_json(grid: Grid) -> str:
    """Serialize a grid as a compact JSON array of rows."""
    return json.dumps(grid.to_list())


def steps_to_json(steps: Sequence[Step], indent: Any = None) -> str:
    """
    Serialize steps with the external field names.

    Each step becomes {"cells": [{"row", "col", "value"}], "sum", "gridAfter"}.
    """
    return json.dumps([step.to_dict() for step in steps], indent=indent)


def solution_to_json(solution: Solution, indent: Any = None) -> str:
    """Serialize a solution with its summary figures."""
    return json.dumps(solution.to_dict(), indent=indent)


def create_empty_grid(rows: int, cols: int) -> List[List[int]]:
    """Create a rows x cols matrix of zeros for editing."""
    return [[0] * cols for _ in range(rows)]

