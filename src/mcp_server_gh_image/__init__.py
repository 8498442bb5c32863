import asyncio
from pathlib import Path

import click

from .configuration import load_config
from .logging_config import configure_logging
from .server import serve


@click.command()
@click.option("--repository", "-r", type=Path, help="Directory inside the git repository to commit to")
@click.option("-v", "--verbose", count=True)
@click.option(
    "--enable-file-logging",
    is_flag=True,
    help="Enable logging to file in logs/ directory",
)
@click.option(
    "--test-mode",
    is_flag=True,
    help="Run in test mode for CI (stays alive without immediate stdio)",
)
def main(
    repository: Path | None, verbose: int, enable_file_logging: bool, test_mode: bool
) -> None:
    """MCP GitHub Image Server - commit images and get preview URLs for PR comments"""
    config = load_config(
        repository=repository,
        verbose=verbose,
        enable_file_logging=enable_file_logging,
        test_mode=test_mode,
    )

    log_dir = None
    if config.enable_file_logging:
        log_dir = (config.repository or Path.cwd()) / "logs"
    log_file = configure_logging(config.log_level, log_dir=log_dir)
    if log_file is not None:
        click.echo(f"Debug logging enabled: {log_file}", err=True)

    asyncio.run(serve(config))


if __name__ == "__main__":
    main()
