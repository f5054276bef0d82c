"""CLI entry point for farm configuration.

This module handles command-line argument parsing, logging setup and the
check/add/remove commands that drive the farm list headlessly.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import logging.handlers
from datetime import UTC, datetime
from pathlib import Path

from rich.console import Console

from .config import FarmsConfig, load_config, save_config
from .exceptions import ConfigError
from .farm_list import FarmList
from .models import FarmEntryInit
from .views.farm_panel import render_farm_panel

logger = logging.getLogger(__name__)

PACKAGE_LOGGER = "farm_config"


class JSONFormatter(logging.Formatter):
    """JSON log lines with the emitting farm lifted to the top level."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON-formatted log line
        """
        context = dict(getattr(record, "extra_context", {}))
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
        }
        # Entry logs carry the farm's identity key; keep it greppable
        if "identity" in context:
            log_data["farm"] = context.pop("identity")
        log_data["context"] = {
            "function": record.funcName,
            "line": record.lineno,
            **context,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def _setup_logging(log_file: Path, debug: bool) -> logging.Logger:
    """Send farm_config logs to a rotating JSON file.

    Only the package logger is configured, so handlers installed by a host
    application on the root logger are left alone.

    Args:
        log_file: Path to log file
        debug: Enable debug level logging

    Returns:
        The configured package logger
    """
    log_file.parent.mkdir(parents=True, exist_ok=True)
    level = logging.DEBUG if debug else logging.INFO

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)

    for handler in package_logger.handlers[:]:
        if isinstance(handler, logging.handlers.RotatingFileHandler):
            package_logger.removeHandler(handler)
            handler.close()

    # 10MB max, 3 backups
    file_handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    file_handler.setFormatter(JSONFormatter())
    file_handler.setLevel(level)
    package_logger.addHandler(file_handler)

    logger.info(
        "Logging initialized",
        extra={"extra_context": {"log_file": str(log_file), "debug": debug}},
    )
    return package_logger


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="farm-config",
        description="Validate and edit the farm list of a farmer configuration",
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=Path("./farms.json"),
        help="Path to farms.json (default: ./farms.json)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=Path.home() / ".cache" / "farm-config" / "farm-config.log",
        help="Where to write the JSON log",
    )

    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("check", help="Validate all farms (default)")

    add_parser = subparsers.add_parser("add", help="Validate and append a farm")
    add_parser.add_argument("path", type=Path, help="Farm directory")
    add_parser.add_argument("size", help="Farm size, e.g. '2 TB'")

    remove_parser = subparsers.add_parser("remove", help="Remove a farm")
    remove_parser.add_argument("index", type=int, help="1-based farm number")

    args = parser.parse_args(argv)
    if args.command is None:
        args.command = "check"
    return args


async def _check(config: FarmsConfig, console: Console) -> int:
    farm_list = await FarmList.from_farms(config.farms)
    await farm_list.process_events()

    console.print(render_farm_panel(farm_list.entries))

    if farm_list.is_valid():
        console.print("[green]✓ All farms are valid[/green]")
        return 0

    invalid = [entry for entry in farm_list.entries if not entry.is_valid()]
    if invalid:
        console.print(f"[red]{len(invalid)} of {len(farm_list)} farm(s) invalid[/red]")
    else:
        console.print("[dim]Add a farm with: farm-config add PATH SIZE[/dim]")
    logger.info(
        "Check failed",
        extra={"extra_context": {"invalid": len(invalid), "total": len(farm_list)}},
    )
    return 1


async def _add(
    config: FarmsConfig, config_path: Path, path: Path, size: str, console: Console
) -> int:
    farm_list = await FarmList.from_farms(config.farms)
    identity = await farm_list.add(FarmEntryInit(path=path.expanduser().resolve(), size=size))
    entry = farm_list.entry(identity)

    if not entry.is_valid():
        console.print(render_farm_panel([entry]))
        if not entry.size.is_valid:
            console.print("[red]Size must be a byte quantity of at least 2 GB[/red]")
        console.print("[yellow]Farm not added - no changes made[/yellow]")
        return 1

    save_config(config_path, FarmsConfig(farms=tuple(farm_list.farms())))
    console.print(f"[green]✓ Added farm {identity.display_index + 1}[/green]")
    return 0


async def _remove(config: FarmsConfig, config_path: Path, index: int, console: Console) -> int:
    farm_list = await FarmList.from_farms(config.farms)
    if not 1 <= index <= len(farm_list):
        console.print(f"[red]Error: No farm number {index} (have {len(farm_list)})[/red]")
        return 1

    identity = farm_list.identity_at(index - 1)

    farm_list.entry(identity).request_delete()
    await farm_list.process_events()

    save_config(config_path, FarmsConfig(farms=tuple(farm_list.farms())))
    console.print(f"[green]✓ Removed farm {index}[/green]")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Exit code (0=success, 1=invalid farms or error)
    """
    args = _parse_args(argv)
    _setup_logging(args.log_file, args.debug)

    console = Console()
    config_path = args.config.expanduser().resolve()

    logger.info(
        "farm-config starting",
        extra={"extra_context": {"command": args.command, "config_path": str(config_path)}},
    )

    if config_path.exists():
        try:
            config = load_config(config_path)
        except ConfigError as err:
            console.print(f"[red]Error loading config: {err}[/red]")
            logger.error("Failed to load config", extra={"extra_context": {"error": str(err)}})
            return 1
    elif args.command == "add":
        config = FarmsConfig()
    else:
        console.print(f"[red]Error: Config file not found: {config_path}[/red]")
        console.print("Create one with: farm-config add PATH SIZE")
        return 1

    try:
        if args.command == "add":
            return asyncio.run(_add(config, config_path, args.path, args.size, console))
        if args.command == "remove":
            return asyncio.run(_remove(config, config_path, args.index, console))
        return asyncio.run(_check(config, console))
    except ConfigError as err:
        console.print(f"[red]Error: {err}[/red]")
        logger.error("Command failed", extra={"extra_context": {"error": str(err)}}, exc_info=True)
        return 1
