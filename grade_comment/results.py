"""Read the grading result produced by the test step.

The test step leaves two files in the results directory of the working
copy: ``score.json`` (``score``, ``passingScore``, ``pass``) and
``test-output.txt`` (raw runner output, shown verbatim).
"""

import json
import math
from decimal import Decimal
from pathlib import Path
from typing import Any

from grade_comment.models import GradeResult, ScoreRecord

RESULTS_DIR = ".hyf"
SCORE_FILE = "score.json"
OUTPUT_FILE = "test-output.txt"

DEFAULT_SCORE = "0"
DEFAULT_PASSING_SCORE = "100"


class LoadError(Exception):
    """Raised when the score or output file is missing or malformed."""

    def __init__(self, path: Path, cause: BaseException | str) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to read {path}: {cause}")


def _number_text(value: float) -> str:
    """Format a number the way JavaScript's String() does."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    if 1e-6 <= abs(value) < 1e21:
        return format(Decimal(repr(value)), "f")
    mantissa, _, exponent = repr(value).partition("e")
    sign = "-" if exponent.startswith("-") else "+"
    return f"{mantissa}e{sign}{exponent.lstrip('+-').lstrip('0') or '0'}"


def _js_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value) if abs(value) < 10**21 else _number_text(float(value))
    if isinstance(value, float):
        return _number_text(value)
    if isinstance(value, list):
        return ",".join(_js_text(v) for v in value)
    if isinstance(value, dict):
        return "[object Object]"
    return str(value)


def _as_text(value: Any, default: str) -> str:
    """Render a JSON value for display; ``None`` means absent."""
    if value is None:
        return default
    return _js_text(value)


def _is_truthy(value: Any) -> bool:
    """JSON truthiness: only false, null, 0, NaN and "" are false."""
    if isinstance(value, (dict, list)):
        return True
    if isinstance(value, float) and math.isnan(value):
        return False
    return bool(value)


def _read_text(path: Path) -> str:
    # Undecodable bytes become U+FFFD instead of failing the run
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise LoadError(path, e) from e


def load_results(
    workdir: Path | str | None = None,
    results_dir: str = RESULTS_DIR,
    score_file: str = SCORE_FILE,
    output_file: str = OUTPUT_FILE,
) -> GradeResult:
    """Load and normalize score and test output from ``workdir/results_dir``.

    Raises LoadError when either file cannot be read or the score is not a
    JSON object. Nothing is returned unless both files load.
    """
    base = (Path(workdir) if workdir is not None else Path.cwd()) / results_dir
    score_path = base / score_file
    output_path = base / output_file

    raw = _read_text(score_path)
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise LoadError(score_path, e) from e
    if not isinstance(data, dict):
        raise LoadError(score_path, f"expected a JSON object, got {type(data).__name__}")

    record = ScoreRecord.model_validate(data)
    output = _read_text(output_path)

    return GradeResult(
        score=_as_text(record.score, DEFAULT_SCORE),
        passing_score=_as_text(record.passing_score, DEFAULT_PASSING_SCORE),
        passed=_is_truthy(record.passed),
        output=output,
    )
