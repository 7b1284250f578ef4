"""
Publish the grade comment on a PR: load results, hide the previous status
comments posted by bots, then post the new one.

Runs sequentially: every minimize call finishes before the new comment is
created, so the fresh comment is always the only visible status.
"""

import logging
import re
from pathlib import Path
from typing import Iterable, List

from grade_comment.adapters.base import GitPlatformAdapter, GitPlatformError
from grade_comment.formatter import format_comment
from grade_comment.models import Comment, InvocationContext, MinimizeOutcome
from grade_comment.results import OUTPUT_FILE, RESULTS_DIR, SCORE_FILE, LoadError, load_results

HEADER_RE = re.compile(r"##\s*Assignment\s*score", re.IGNORECASE)
MINIMIZE_CLASSIFIER = "OUTDATED"


def is_status_comment(comment: Comment) -> bool:
    """True for a bot comment carrying the assignment score heading."""
    return comment.is_bot and bool(comment.body) and bool(HEADER_RE.search(comment.body))


def find_status_comments(comments: Iterable[Comment]) -> List[Comment]:
    """Filter comments down to previous status comments, in listing order."""
    return [c for c in comments if is_status_comment(c)]


def hide_previous_comments(
    adapter: GitPlatformAdapter,
    context: InvocationContext,
    log: logging.Logger | None = None,
) -> List[MinimizeOutcome]:
    """Minimize every previous status comment on the issue.

    Listing errors propagate. A failed minimize is logged and recorded, and
    the loop moves on to the next comment.
    """
    logger = log or logging.getLogger("grade_comment.publisher")
    comments = adapter.list_issue_comments(context.repository, context.issue_number)
    matches = find_status_comments(comments)
    logger.debug(
        "Found %s previous status comment(s) among %s on #%s",
        len(matches),
        len(comments),
        context.issue_number,
    )

    outcomes: List[MinimizeOutcome] = []
    for c in matches:
        try:
            adapter.minimize_comment(c.node_id, classifier=MINIMIZE_CLASSIFIER)
        except GitPlatformError as e:
            logger.warning("Could not minimize comment %s: %s", c.id, e)
            outcomes.append(MinimizeOutcome(comment_id=c.id, node_id=c.node_id, minimized=False, error=str(e)))
            continue
        outcomes.append(MinimizeOutcome(comment_id=c.id, node_id=c.node_id, minimized=True))
    return outcomes


def publish_grade_comment(
    adapter: GitPlatformAdapter,
    context: InvocationContext,
    log: logging.Logger | None = None,
    workdir: Path | str | None = None,
    results_dir: str = RESULTS_DIR,
    score_file: str = SCORE_FILE,
    output_file: str = OUTPUT_FILE,
) -> Comment | None:
    """
    Post the grade comment for ``context`` and return it.

    1. Load score and test output; on LoadError log it and return None
       without touching the API.
    2. Format the markdown body.
    3. Hide previous status comments (best effort per comment).
    4. Create the new comment; errors here propagate to the caller.
    """
    logger = log or logging.getLogger("grade_comment.publisher")

    try:
        result = load_results(
            workdir,
            results_dir=results_dir,
            score_file=score_file,
            output_file=output_file,
        )
    except LoadError as e:
        logger.error("Failed to read/parse %s or %s: %s", score_file, output_file, e)
        return None

    body = format_comment(result)

    outcomes = hide_previous_comments(adapter, context, log=logger)
    hidden = sum(1 for o in outcomes if o.minimized)
    if outcomes:
        logger.info("Minimized %s of %s previous status comment(s)", hidden, len(outcomes))

    comment = adapter.create_comment(context.repository, context.issue_number, body)
    logger.info(
        "Posted grade comment %s on %s#%s (score %s, %s)",
        comment.id,
        context.repository,
        context.issue_number,
        result.score,
        "passed" if result.passed else "not passed",
    )
    return comment
