"""Command-line entry point: ``python -m research "What is entropy?"``."""

from __future__ import annotations

import argparse
import asyncio
import logging

from dotenv import load_dotenv

from config.settings import Settings
from research.router import Router


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="research",
        description="Answer a research question with a Wikipedia overview and recent arXiv papers.",
    )
    parser.add_argument("question", nargs="+", help="the question to answer")
    parser.add_argument("-v", "--verbose", action="store_true", help="log pipeline details")
    args = parser.parse_args(argv)

    load_dotenv()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    settings = Settings()
    settings.validate()

    response = asyncio.run(Router(settings).process_query(" ".join(args.question)))
    print(response.content)
    return 0 if response.confidence == "high" else 1


if __name__ == "__main__":
    raise SystemExit(main())
