"""Command-line entry point: ``python -m superface_agent``."""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from .agent import DEFAULT_PROMPT, run_agent
from .config import AgentConfig
from .llm_core.exceptions import ConfigurationError
from .llm_core.logger import setup_logging


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="superface-agent",
        description="Answer a prompt with OpenAI using tools hosted on the Superface hub.",
    )
    parser.add_argument("--prompt", default=DEFAULT_PROMPT, help="Prompt sent to the model.")
    parser.add_argument("--env-file", default=None, help="Path to a .env file with credentials.")
    parser.add_argument(
        "--require-tools",
        action="store_true",
        help="Abort when the tool catalog cannot be fetched instead of running without tools.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(level=logging.DEBUG if args.verbose else logging.INFO)

    overrides = {"require_tools": True} if args.require_tools else {}
    try:
        config = AgentConfig.from_env(dotenv_path=args.env_file, **overrides)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    result = asyncio.run(run_agent(config, args.prompt))
    print(f"\n\n{args.prompt}\n\n{result.content}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
