"""grade-comment entry point.

Reads the grade result from the working copy and posts it as a comment on
the pull request the CI job runs for. Usage: grade-comment [--dry-run].
"""

import argparse
import sys
from pathlib import Path

from grade_comment.adapters import GitHubAdapter, GitPlatformError
from grade_comment.config import load_config
from grade_comment.context import ContextError, resolve_context
from grade_comment.formatter import format_comment
from grade_comment.logging import setup_logging
from grade_comment.publisher import publish_grade_comment
from grade_comment.results import LoadError, load_results


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="grade-comment",
        description="Post the auto grade result as a PR comment, hiding older ones",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=Path("config.yaml"),
        help="Path to YAML config file (optional)",
    )
    parser.add_argument(
        "--workdir",
        "-w",
        type=Path,
        default=None,
        help="Directory containing the results directory (default: cwd)",
    )
    parser.add_argument("--repo", default=None, help="owner/repo (default: GITHUB_REPOSITORY)")
    parser.add_argument(
        "--issue",
        type=int,
        default=None,
        help="Issue or PR number (default: from GITHUB_EVENT_PATH payload)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the comment body instead of posting it",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only load and validate config, then exit",
    )
    return parser.parse_args(argv if argv is not None else sys.argv[1:])


def main(argv: list[str] | None = None) -> int:
    """Entry point: load config, resolve context, publish."""
    args = parse_args(argv)
    config = load_config(args.config)
    log = setup_logging(config.logging)

    if args.check:
        print("Config OK:", config.github.api_url, config.comment.results_dir)
        return 0

    cfg = config.comment
    if args.dry_run:
        try:
            result = load_results(
                args.workdir,
                results_dir=cfg.results_dir,
                score_file=cfg.score_file,
                output_file=cfg.output_file,
            )
        except LoadError as e:
            log.error("%s", e)
            return 0
        print(format_comment(result))
        return 0

    try:
        context = resolve_context(args.repo, args.issue)
    except (ContextError, ValueError) as e:
        log.error("Cannot determine where to comment: %s", e)
        return 1

    token = config.github_token_resolved
    if not token:
        log.error("GITHUB_TOKEN not set; cannot post comment")
        return 1

    adapter = GitHubAdapter(
        token,
        api_url=config.github.api_url,
        per_page=cfg.per_page,
        max_pages=cfg.max_pages,
    )
    try:
        publish_grade_comment(
            adapter,
            context,
            log=log,
            workdir=args.workdir,
            results_dir=cfg.results_dir,
            score_file=cfg.score_file,
            output_file=cfg.output_file,
        )
    except GitPlatformError as e:
        log.exception("Failed to publish grade comment: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
