"""
Command-line entry point for the Medical Dashboard client.

    python -m medical_dashboard health
    python -m medical_dashboard analyze "fever and headache for three days"
    echo "..." | python -m medical_dashboard analyze -
"""
import argparse
import asyncio
import json
import sys
from dataclasses import replace
from typing import Optional

from .config import get_settings
from .gateway import BackendGateway
from .session import AnalysisSession
from .structured_logging import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="medical-dashboard",
        description="Analyze patient symptoms against the medical analysis backend",
    )
    parser.add_argument("--api-url", help="Backend base URL (overrides MEDICAL_API_URL)")
    parser.add_argument("--log-level", help="Logging level (overrides LOG_LEVEL)")

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("health", help="Probe the backend health endpoint")
    analyze = subparsers.add_parser("analyze", help="Submit symptom text for analysis")
    analyze.add_argument("text", help="Symptom text, or '-' to read from stdin")
    return parser


async def run(args: argparse.Namespace) -> dict:
    settings = get_settings()
    if args.api_url:
        settings = replace(settings, api_url=args.api_url.rstrip("/"))

    async with BackendGateway(settings=settings) as gateway:
        session = AnalysisSession(gateway)
        await session.start()

        if args.command == "health":
            snapshot = session.snapshot()
            return {
                "backendStatus": snapshot["backendStatus"],
                "backendStatusLabel": snapshot["backendStatusLabel"],
            }

        text = sys.stdin.read() if args.text == "-" else args.text
        session.set_input(text)
        if not await session.submit():
            print("Nothing to analyze: input is empty", file=sys.stderr)
        return session.snapshot()


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(args.log_level or settings.log_level, use_json=settings.log_json)

    output = asyncio.run(run(args))
    print(json.dumps(output, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
