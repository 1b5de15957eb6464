#!/usr/bin/env python3
"""Orchestrator - command line entry point.

Usage:
    python orchestration_main.py "Find all TODO comments under src/"
    python orchestration_main.py            # interactive prompt

The task is routed by the orchestrator to the file agent, which works on the
current directory. Audit records are written under ``bin/messages/``.
AGENT_CONTEXT may hold a JSON object describing the calling session.
"""

import argparse
import asyncio
import json
import logging
import os
import sys
from pathlib import Path

# Add project root to sys.path for imports
project_root = Path(__file__).parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from orchestrationAgent.runtime.app import process_message
from shared.config.settings import get_settings
from shared.utils.logging_utils import setup_logging

LOGGER = logging.getLogger("orchestrationAgent.main")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Orchestrator - routes file and shell tasks to the file agent",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("task", nargs="?", help="Task to run; prompts interactively if omitted")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL (e.g. DEBUG)")
    return parser.parse_args(argv)


def load_context() -> dict:
    raw = os.environ.get("AGENT_CONTEXT")
    if not raw:
        return {"session_id": "standalone", "space": "default"}
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        LOGGER.warning("AGENT_CONTEXT is not valid JSON; ignoring it")
        return {}
    return value if isinstance(value, dict) else {}


async def main(argv=None) -> int:
    args = parse_args(argv)
    settings = get_settings()
    level_name = (args.log_level or settings.observability.log_level).upper()
    setup_logging(getattr(logging, level_name, logging.INFO), settings.observability.log_dir)

    context = load_context()
    if args.task:
        print(await process_message(args.task, settings=settings, context=context))
        return 0

    print("Orchestrator - enter a task, or /quit to exit")
    while True:
        try:
            task = input("> ").strip()
        except EOFError:
            break
        if not task:
            continue
        if task in ("/quit", "/exit"):
            break
        print(f"\n{await process_message(task, settings=settings, context=context)}\n")
    return 0


def run() -> None:
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        print("\nInterrupted")
        sys.exit(130)


if __name__ == "__main__":
    run()
