"""
Command Line Interface for unified search.

    unified-search <query> [--engine ID] [--results N] [--json]
    unified-search task <query> [--model-class CLASS]
"""

import asyncio
import argparse
import sys
import logging
from typing import List, Optional

from .core.agent import ModelClass, research_task
from .core.dispatcher import dispatch
from .core.state import EngineId, is_error_text
from .output.formatter import IMAGE_QUERY_HINT, ResultFormatter, is_image_query
from .utils.config import Config, load_config
from .utils.logging import setup_logging

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def build_search_parser(config: Config) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="unified-search",
        description="Search the web through Brave or a search-grounded LLM",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Keyword search
  unified-search "rust async runtimes"

  # Image search with raw JSON output
  unified-search "golden gate bridge photo" --engine brave-images --json

  # Ask a search-grounded model
  unified-search "latest python release" --engine openai

  # Multi-round research report
  unified-search task "state of solid-state batteries" --model-class reasoning
        """
    )
    parser.add_argument("query", help="Search query")
    parser.add_argument("--engine", "-e", default=config.agent.default_engine,
                        choices=[engine.value for engine in EngineId],
                        help="Search engine to use")
    parser.add_argument("--results", "-n", type=int, default=config.agent.default_num_results,
                        help="Number of results to request")
    parser.add_argument("--json", "-j", action="store_true",
                        help="Print results as JSON")
    parser.add_argument("--log-level", default=config.logging.log_level.upper(),
                        choices=LOG_LEVELS, help="Logging level")
    return parser


def build_task_parser(config: Config) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="unified-search task",
        description="Run a multi-round research task across all configured engines",
    )
    parser.add_argument("query", help="Research topic")
    parser.add_argument("--model-class", "-m", default=config.agent.research_model_class,
                        choices=[model_class.value for model_class in ModelClass],
                        help="Model class driving the research agent")
    parser.add_argument("--log-level", default=config.logging.log_level.upper(),
                        choices=LOG_LEVELS, help="Logging level")
    return parser


async def search_command(args: argparse.Namespace) -> int:
    """Execute a single search and print the results."""
    if args.engine == EngineId.BRAVE.value and is_image_query(args.query):
        print(IMAGE_QUERY_HINT)

    outcome = await dispatch(args.engine, args.query, args.results)
    if not outcome.ok:
        print(f"Search failed: {outcome.message}", file=sys.stderr)
        return 1

    print(ResultFormatter().format_payload(args.query, outcome.payload, as_json=args.json))
    return 0


async def task_command(args: argparse.Namespace) -> int:
    """Execute a research task and print the report."""
    print(f"Running comprehensive research on: {args.query}")
    print(f"Using model class: {args.model_class}\n")

    report = await research_task(args.query, args.model_class)
    if is_error_text(report):
        print(f"Research task failed: {report}", file=sys.stderr)
        return 1

    print(report)
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI entry point."""
    argv = list(sys.argv[1:] if argv is None else argv)
    config = load_config()

    if argv and argv[0] == "task":
        args = build_task_parser(config).parse_args(argv[1:])
        command = task_command
        failure_label = "Research task failed"
    else:
        args = build_search_parser(config).parse_args(argv)
        command = search_command
        failure_label = "Search failed"

    setup_logging(args.log_level, log_format=config.logging.log_format, log_file=config.logging.log_file)

    try:
        exit_code = asyncio.run(command(args))
    except Exception as e:
        logger.exception("Unhandled CLI error")
        print(f"{failure_label}: {e}", file=sys.stderr)
        exit_code = 1

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
