"""ScholarMatch application entry point."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI

from scholarmatch.api import create_app
from scholarmatch.config import LOG_PATH, Settings, ensure_data_dir, load_settings
from scholarmatch.errors import ScholarMatchError
from scholarmatch.explanations import ExplanationOrchestrator, build_explanation_provider
from scholarmatch.service import MatchingService
from scholarmatch.storage.database import get_engine, get_session_factory, init_db
from scholarmatch.storage.repository import SqlMatchingStore
from scholarmatch.storage.seed import seed_catalog

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Configure application logging."""
    ensure_data_dir()

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")

    if not any(type(h) is logging.StreamHandler for h in root_logger.handlers):
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    log_path = str(LOG_PATH.resolve())
    has_file_handler = any(
        isinstance(handler, logging.FileHandler)
        and handler.baseFilename == log_path
        for handler in root_logger.handlers
    )
    if not has_file_handler:
        file_handler = logging.FileHandler(LOG_PATH, encoding="utf-8")
        file_handler.setLevel(logging.WARNING)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)


def build_store(settings: Settings) -> SqlMatchingStore:
    """Initialize the database and return a store bound to it."""
    init_db(engine=get_engine(settings.database_url))
    return SqlMatchingStore(get_session_factory())


def build_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the HTTP application from settings (environment by default)."""
    settings = settings or load_settings()
    orchestrator = ExplanationOrchestrator(build_explanation_provider(settings))
    return create_app(build_store(settings), orchestrator)


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="scholarmatch", description="Scholarship eligibility matching")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)

    seed = sub.add_parser("seed", help="Load a YAML scholarship catalog")
    seed.add_argument("catalog", nargs="?", type=Path, default=None)

    matches = sub.add_parser("matches", help="Print a student's matches as JSON")
    matches.add_argument("student_id")

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the application."""
    load_dotenv()
    args = _parse_args(argv)
    settings = load_settings()
    configure_logging(settings.log_level)

    if args.command == "serve":
        uvicorn.run(build_app(settings), host=args.host, port=args.port)
        return 0

    store = build_store(settings)
    try:
        if args.command == "seed":
            count = seed_catalog(store, args.catalog)
            print(f"Seeded {count} scholarships")
        else:
            service = MatchingService(
                store, ExplanationOrchestrator(build_explanation_provider(settings))
            )
            response = asyncio.run(service.get_student_matches(args.student_id))
            print(response.model_dump_json(indent=2))
    except (ScholarMatchError, ValueError) as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
