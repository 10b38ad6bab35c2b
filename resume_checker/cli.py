"""CLI - command line entry point for Resume Checker."""

from __future__ import annotations

import argparse
import asyncio
import json
import mimetypes
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.syntax import Syntax

from .config import DEFAULT_CONFIG_PATH, AppConfig, load_config
from .domain.extractor import DOCX_MEDIA_TYPE
from .errors import ConfigurationError, ResumeCheckError
from .observability import CheckObserver, configure_logging
from .service import ResumeChecker

console = Console(stderr=True)

mimetypes.add_type(DOCX_MEDIA_TYPE, ".docx")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Resume Checker - ATS-style resume evaluation service")
    parser.add_argument(
        "--config",
        "-c",
        default=DEFAULT_CONFIG_PATH,
        help="Path to configuration file",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        default=False,
        help="Debug-level logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="0.0.0.0", help="Bind address (default: 0.0.0.0)")
    serve.add_argument("--port", "-p", type=int, default=None, help="Port (default: $PORT or 5000)")

    check = subparsers.add_parser("check", help="Evaluate a local resume file and print the JSON result")
    check.add_argument("file", help="Path to a PDF or DOCX resume")
    check.add_argument("--job-title", "-j", required=True, help="Target job title")

    return parser


def _load(config_path: str) -> AppConfig:
    try:
        return load_config(config_path)
    except ConfigurationError as e:
        console.print(f"Configuration error: {e.message}", style="red")
        sys.exit(1)


def run_serve(config: AppConfig, host: str, port: Optional[int]) -> None:
    import uvicorn

    from .web.app import create_app

    app = create_app(config=config)
    console.print(f"Server running on port {port or config.port}", style="green")
    uvicorn.run(app, host=host, port=port or config.port)


async def run_check(config: AppConfig, file: str, job_title: str) -> int:
    path = Path(file)
    if not path.is_file():
        console.print(f"File not found: {file}", style="red")
        return 1

    media_type, _ = mimetypes.guess_type(path.name)
    checker = ResumeChecker.from_config(config)
    try:
        result = await checker.check(path, media_type, job_title, CheckObserver(request_id="cli"))
    except ResumeCheckError as e:
        console.print(f"Resume analysis failed ({e.code}): {e.message}", style="red")
        return 1

    Console().print(Syntax(json.dumps(result, indent=2, ensure_ascii=False), "json"))
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point."""
    from dotenv import load_dotenv

    # Load environment variables from .env file
    load_dotenv()

    args = build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose)
    config = _load(args.config)

    if args.command == "serve":
        run_serve(config, args.host, args.port)
    else:
        sys.exit(asyncio.run(run_check(config, args.file, args.job_title)))


if __name__ == "__main__":
    main()
