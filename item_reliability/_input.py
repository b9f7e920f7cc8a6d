"""
Input boundary for reliability calculations.

Every public operation accepts "a table of item scores" in whatever shape the
caller has at hand. This module resolves that input exactly once into an
explicit kind and a float ``DataFrame`` copy, so the estimators never branch
on the caller's container type and never touch the caller's object.

Accepted containers:
    - pandas.DataFrame (column names are kept)
    - 2-D numpy.ndarray
    - Mapping of column name -> sequence of scores
    - Sequence of rows (list of lists / tuples)

Columns without names are labelled ``item_1`` ... ``item_M``.
"""

import enum
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Optional

import numpy as np
import pandas as pd

from ._constants import CORRELATION_MATRIX_TOLERANCE
from .exceptions import InvalidInputKindError

logger = logging.getLogger(__name__)


class InputKind(str, enum.Enum):
    """What a caller-supplied matrix represents."""

    RAW_TABLE = "raw_table"
    CORRELATION_MATRIX = "correlation_matrix"


@dataclass(frozen=True)
class ResolvedInput:
    """
    Input after boundary resolution.

    Attributes:
        kind: Whether ``frame`` holds raw item scores or correlations.
        frame: Float64 copy of the input. For correlation matrices the index
            equals the columns.
    """

    kind: InputKind
    frame: pd.DataFrame

    @property
    def n_items(self) -> int:
        """Number of items (columns)."""
        return self.frame.shape[1]

    @property
    def n_obs(self) -> int:
        """Number of rows."""
        return self.frame.shape[0]


def _default_item_names(n: int) -> list:
    return [f"item_{i + 1}" for i in range(n)]


def _to_frame(x: Any) -> pd.DataFrame:
    """Convert a supported container into a new DataFrame."""
    if isinstance(x, pd.DataFrame):
        frame = x.copy()
        if isinstance(frame.columns, pd.RangeIndex):
            frame.columns = _default_item_names(frame.shape[1])
        else:
            frame.columns = [str(c) for c in frame.columns]
        return frame

    if isinstance(x, pd.Series):
        raise InvalidInputKindError(
            "Expected a table of items, got a single series",
            context={"name": x.name},
        )

    if isinstance(x, np.ndarray):
        if x.ndim != 2:
            raise InvalidInputKindError(
                "Expected a 2-dimensional array of item scores",
                context={"ndim": x.ndim},
            )
        return pd.DataFrame(x, columns=_default_item_names(x.shape[1]))

    if isinstance(x, Mapping):
        try:
            frame = pd.DataFrame({str(k): list(v) for k, v in x.items()})
        except (TypeError, ValueError) as e:
            raise InvalidInputKindError(
                "Item mapping must map names to equal-length sequences",
                original_error=e,
            )
        return frame

    if isinstance(x, Sequence) and not isinstance(x, (str, bytes)):
        rows = list(x)
        if not rows or not all(
            isinstance(row, Sequence) and not isinstance(row, (str, bytes))
            for row in rows
        ):
            raise InvalidInputKindError(
                "Expected a sequence of rows, each a sequence of item scores"
            )
        widths = {len(row) for row in rows}
        if len(widths) != 1:
            raise InvalidInputKindError(
                "Rows have different lengths",
                context={"lengths": sorted(widths)},
            )
        return pd.DataFrame(rows, columns=_default_item_names(widths.pop()))

    raise InvalidInputKindError(
        "Unsupported input type for item scores",
        context={"type": type(x).__name__},
    )


def _coerce_numeric(frame: pd.DataFrame) -> pd.DataFrame:
    try:
        return frame.apply(pd.to_numeric).astype("float64")
    except (TypeError, ValueError) as e:
        raise InvalidInputKindError(
            "Item scores must be numeric or missing",
            context={"columns": list(frame.columns)},
            original_error=e,
        )


def is_correlation_like(
    values: np.ndarray,
    tolerance: float = CORRELATION_MATRIX_TOLERANCE,
) -> bool:
    """
    Check whether a matrix can be used as a correlation matrix.

    Requires a non-empty square matrix of finite values that is symmetric,
    has ones on the diagonal and stays within [-1, 1] (all within
    ``tolerance``).
    """
    if values.ndim != 2 or values.shape[0] != values.shape[1]:
        return False
    if values.shape[0] == 0 or not np.all(np.isfinite(values)):
        return False
    if not np.allclose(values, values.T, rtol=0.0, atol=tolerance):
        return False
    if not np.allclose(np.diag(values), 1.0, rtol=0.0, atol=tolerance):
        return False
    return bool(np.all(np.abs(values) <= 1.0 + tolerance))


def _has_matrix_labels(x: Any) -> bool:
    """A correlation matrix is either unlabelled or labelled on both axes alike."""
    if isinstance(x, np.ndarray):
        return True
    if isinstance(x, pd.DataFrame):
        # The caller's labels, before unnamed columns are renamed item_1 ...
        return [str(i) for i in x.index] == [str(c) for c in x.columns]
    return False


def resolve_input(x: Any, is_correlation: Optional[bool] = False) -> ResolvedInput:
    """
    Resolve caller input into an InputKind and a float DataFrame copy.

    Args:
        x: Item scores or a correlation matrix.
        is_correlation: True if ``x`` is known to be a correlation matrix,
            False if it is known to be raw scores, None to detect it. Only a
            square ndarray, or a DataFrame whose index matches its columns,
            that passes is_correlation_like() is detected as a correlation
            matrix.

    Returns:
        ResolvedInput with a freshly allocated frame.

    Raises:
        InvalidInputKindError: If ``x`` is not a rectangular numeric table,
            or ``is_correlation=True`` and ``x`` is not a valid correlation
            matrix.
    """
    frame = _coerce_numeric(_to_frame(x))

    if frame.shape[0] == 0 or frame.shape[1] == 0:
        raise InvalidInputKindError(
            "Item table is empty",
            context={"shape": frame.shape},
        )

    if is_correlation is False:
        return ResolvedInput(kind=InputKind.RAW_TABLE, frame=frame)

    correlation_like = is_correlation_like(frame.to_numpy())

    if is_correlation is True:
        if not correlation_like:
            raise InvalidInputKindError(
                "Matrix flagged as correlation matrix is not square, symmetric "
                "and bounded with a unit diagonal",
                context={"shape": frame.shape},
            )
    elif not (correlation_like and _has_matrix_labels(x)):
        return ResolvedInput(kind=InputKind.RAW_TABLE, frame=frame)

    frame.index = list(frame.columns)
    logger.debug(f"Using supplied {frame.shape[0]}x{frame.shape[1]} correlation matrix")
    return ResolvedInput(kind=InputKind.CORRELATION_MATRIX, frame=frame)


def drop_incomplete_rows(frame: pd.DataFrame) -> pd.DataFrame:
    """
    Row-wise deletion: keep only rows where every item is present.

    Returns a new frame; the index of the kept rows is preserved.
    """
    complete = frame.dropna(axis=0, how="any")
    dropped = frame.shape[0] - complete.shape[0]
    if dropped:
        logger.debug(f"Dropped {dropped} of {frame.shape[0]} rows with missing values")
    return complete


def validate_digits(digits: int) -> int:
    """
    Check a rounding precision.

    Raises:
        ValueError: If ``digits`` is not a non-negative integer.
    """
    if isinstance(digits, bool) or not isinstance(digits, int) or digits < 0:
        raise ValueError(f"digits must be a non-negative integer, got {digits!r}")
    return digits
