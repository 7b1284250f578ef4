"""Markdown body of the grade comment.

The heading line is what later runs match on to find and hide this
comment, so the template must stay stable.
"""

from grade_comment.models import GradeResult

PASS_ICON = "✅"
FAIL_ICON = "❌"
FENCE = "```"


def status_icon(passed: bool) -> str:
    return PASS_ICON if passed else FAIL_ICON


def status_text(passed: bool) -> str:
    icon = status_icon(passed)
    return f"{icon} Passed" if passed else f"{icon} Not passed"


def format_comment(result: GradeResult) -> str:
    """Render the status comment for a grade result."""
    icon = status_icon(result.passed)
    lines = [
        "## 📝 HackYourFuture auto grade",
        f"  ### Assignment Score: {result.score} / 100 {icon}",
        f"**Status:** {status_text(result.passed)}",
        f"**Minimum score to pass:** {result.passing_score}",
        "*🧪 The auto grade is experimental and still being improved*",
        "<details>",
        "<summary>Test Details</summary>",
        "",
        FENCE,
        result.output.rstrip(),
        FENCE,
        "",
        "</details>",
    ]
    return "\n".join(lines)
