import logging
import os
from datetime import datetime
from typing import Optional

import click
from rich.logging import RichHandler

from .constants import LANGUAGE_ENV_VAR, LOG_DIR
from .core import ContainerCreator, CreatorError
from .messages import MessageCatalog, detect_language
from .services.config_loader import ConfigLoader
from .services.dialog import UI_BACKENDS, create_dialog


def _resolve_option(cli_value, config, key, default=None):
    if cli_value is not None:
        return cli_value
    if key in config:
        return config[key]
    return default


def build_log_path(log_dir: str, now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    return os.path.join(log_dir, f"lxc_create_{now:%Y%m%d_%H%M%S}.log")


logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(rich_tracebacks=True, show_level=False, show_path=False)],
)


@click.command()
@click.option(
    "--dry-run",
    is_flag=True,
    default=None,
    help="Collect and validate all parameters, print the plan and stop before creating anything.",
)
@click.option(
    "--config",
    required=False,
    type=click.Path(),
    help="Path to a YAML configuration file. Defaults to /etc/lxc-creator.yml or .lxc-creator.yml.",
)
@click.option("--lang", "language", required=False, help="Dialog language (en, de). Defaults to $LANG.")
@click.option(
    "--ui",
    required=False,
    type=click.Choice(UI_BACKENDS),
    help="Dialog backend (default: whiptail).",
)
@click.option("--log-dir", type=click.Path(), help=f"Directory for run log files (default: {LOG_DIR}).")
@click.option(
    "--command-timeout",
    required=False,
    type=float,
    default=None,
    help="Timeout in seconds for each pct command.",
)
@click.option("--verbose", is_flag=True, default=None, help="Enable verbose logging")
def main(dry_run, config, language, ui, log_dir, command_timeout, verbose):
    """Interactively create an LXC container on this Proxmox VE host."""
    logger = logging.getLogger("lxccreator")

    config_loader = ConfigLoader()
    try:
        resolved_config = config or config_loader.find_default(os.getcwd())
        config_values = config_loader.load(resolved_config)
        if command_timeout is not None:
            config_values["command_timeout"] = command_timeout
        settings = config_loader.to_settings(config_values)
    except CreatorError as exc:
        raise click.ClickException(str(exc)) from exc

    dry_run = bool(_resolve_option(dry_run, config_values, "dry_run", default=False))
    verbose = bool(_resolve_option(verbose, config_values, "verbose", default=False))
    ui = _resolve_option(ui, config_values, "ui", default="whiptail")
    log_dir = _resolve_option(log_dir, config_values, "log_dir", default=LOG_DIR)

    try:
        language = detect_language(_resolve_option(language, config_values, "language"))
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    os.environ[LANGUAGE_ENV_VAR] = language
    messages = MessageCatalog(language)

    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.INFO)

    log_file = build_log_path(log_dir)
    try:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    except OSError as exc:
        raise click.ClickException(f"Cannot open log file {log_file}: {exc}") from exc
    file_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
    logger.addHandler(file_handler)
    logger.info("Logging to %s", log_file)

    try:
        dialog = create_dialog(ui, backtitle=messages("welcome"))
        creator = ContainerCreator(
            settings=settings,
            dialog=dialog,
            messages=messages,
            dry_run=dry_run,
        )
        exit_code = creator.run()
    except CreatorError as exc:
        raise click.ClickException(str(exc)) from exc
    finally:
        logger.removeHandler(file_handler)
        file_handler.close()

    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
