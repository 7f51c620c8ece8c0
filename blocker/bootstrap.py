"""
First-run setup: base directory and default config.env.

Two modes:
- non-interactive (default): safe for cron. Creates the base directory if
  needed but never invents a config; a missing config.env is an error that
  tells the operator what to run.
- interactive (--interactive): asks before creating anything.
"""

from pathlib import Path
from typing import Callable

from . import logger
from .config import config_path, default_config_text
from .errors import SetupError

Prompt = Callable[[str], str]


def _confirm(question: str, prompt: Prompt) -> bool:
    try:
        answer = prompt(f"{question} (y/n): ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def ensure_base_dir(base_dir: Path, interactive: bool = False, prompt: Prompt = input) -> None:
    """Create base_dir if missing (asking first in interactive mode)."""
    base_dir = Path(base_dir)
    if base_dir.is_dir():
        return
    if interactive and not _confirm(f"Folder {base_dir} does not exist. Create it?", prompt):
        raise SetupError("Aborted by user.")
    try:
        base_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise SetupError(f"Cannot create {base_dir}: {e}") from e
    logger.log_info("Created base directory", path=str(base_dir))


def write_default_config(path: Path, base_dir: Path) -> None:
    """Write the default config.env template to path."""
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(default_config_text(base_dir), encoding="utf-8")
    except OSError as e:
        raise SetupError(f"Cannot write {path}: {e}") from e
    logger.log_info("Default config created; please edit it", path=str(path))


def ensure_config(base_dir: Path, interactive: bool = False, prompt: Prompt = input) -> Path:
    """
    Make sure config.env exists under base_dir and return its path.

    Non-interactive: raise SetupError if it is missing.
    Interactive: offer to write the default template.
    """
    path = config_path(base_dir)
    if path.is_file():
        return path
    if not interactive:
        raise SetupError(
            f"{path} not found. Run with --init to create a default config, "
            f"or --interactive for guided setup."
        )
    if not _confirm(f"{path.name} not found. Create default config?", prompt):
        raise SetupError("Aborted by user.")
    write_default_config(path, base_dir)
    return path
