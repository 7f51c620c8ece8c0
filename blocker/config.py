"""
Configuration for the HTB Blocker.

Defaults live at module level so they are easy to find and tweak. The
values actually used by a run are loaded once from config.env into a
BlockerConfig and passed to every component that needs them; nothing reads
module globals at run time.

config.env is a plain KEY=VALUE file (parsed with python-dotenv):

    MT_HOST=192.168.88.1:8728
    LIST_TEMP=blocked_attackers
    WHITELIST=8.8.8.8,192.168.1.0/24
    ESCALATE_1=1
    ESCALATE_2=3
    ESCALATE_3=7
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Tuple

from dotenv import dotenv_values

from .errors import ConfigError

# ---------------------------------------------------------------------------
# PATHS
# ---------------------------------------------------------------------------
# Everything (config, state) lives under one base directory. Override with
# HTB_BLOCKER_HOME or --base-dir.
DEFAULT_BASE_DIR = Path(os.environ.get("HTB_BLOCKER_HOME", "/opt/htb_blocker"))
CONFIG_FILENAME = "config.env"
STATE_FILENAME = "state.json"

# ---------------------------------------------------------------------------
# ROUTER / LISTS
# ---------------------------------------------------------------------------
DEFAULT_ROUTEROS_PORT = 8728
DEFAULT_LIST_TEMP = "blocked_attackers"
DEFAULT_LIST_PERM = "blocked_permanent"

# ---------------------------------------------------------------------------
# BEHAVIOUR
# ---------------------------------------------------------------------------
# ESCALATE_1, ESCALATE_2, ... : hours of block per offense, in file order.
ESCALATE_KEY = re.compile(r"^ESCALATE_\d+$")

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off"}

LOG_FORMATS = ("text", "json")

# Written by --init / interactive setup when config.env does not exist yet.
DEFAULT_CONFIG_TEMPLATE = """\
# MikroTik settings
MT_HOST=192.168.88.1:8728
MT_USER=admin
MT_PASS=yourpassword

# Lists
LIST_TEMP=blocked_attackers
LIST_PERM=blocked_permanent

# Whitelist (comma separated)
WHITELIST=8.8.8.8,192.168.1.0/24

# State file
STATE_FILE={state_file}

# Escalation (hours)
ESCALATE_1=1
ESCALATE_2=3
ESCALATE_3=7

# Only log what would be blocked
DRY_RUN=false

# Save state after every address (crash safety)
CHECKPOINT=true

# text | json
LOG_FORMAT=text
"""


@dataclass(frozen=True)
class BlockerConfig:
    """Resolved configuration for one run."""

    router_host: str = ""
    router_user: str = ""
    router_password: str = ""
    list_temp: str = DEFAULT_LIST_TEMP
    list_perm: str = DEFAULT_LIST_PERM
    whitelist: Tuple[str, ...] = ()
    state_file: Path = DEFAULT_BASE_DIR / STATE_FILENAME
    escalation: Tuple[int, ...] = ()
    dry_run: bool = False
    checkpoint: bool = True
    log_format: str = "text"
    # Unknown keys are kept so typos can be reported, not silently dropped.
    extra: Dict[str, str] = field(default_factory=dict)


def config_path(base_dir: Path) -> Path:
    return Path(base_dir) / CONFIG_FILENAME


def default_config_text(base_dir: Path) -> str:
    """Default config.env contents for a base directory."""
    return DEFAULT_CONFIG_TEMPLATE.format(state_file=Path(base_dir) / STATE_FILENAME)


def _parse_bool(key: str, value: str) -> bool:
    v = value.strip().lower()
    if v in TRUE_VALUES:
        return True
    if v in FALSE_VALUES:
        return False
    raise ConfigError(f"Invalid boolean for {key}: {value!r} (expected true/false)")


def _parse_hours(key: str, value: str) -> int:
    try:
        hours = int(value.strip())
    except ValueError:
        raise ConfigError(f"Invalid hour count for {key}: {value!r}") from None
    if hours < 0:
        raise ConfigError(f"Negative hour count for {key}: {hours}")
    return hours


def parse_whitelist(value: Optional[str]) -> Tuple[str, ...]:
    """Split the comma separated WHITELIST value into trimmed entries."""
    if not value:
        return ()
    return tuple(e.strip() for e in value.split(",") if e.strip())


def load_config(path: Path, base_dir: Optional[Path] = None) -> BlockerConfig:
    """
    Load config.env into a BlockerConfig.

    Raises ConfigError if the file is missing or a value cannot be parsed.
    The escalation schedule is taken verbatim, in the order the ESCALATE_*
    keys appear in the file.
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")
    base_dir = Path(base_dir) if base_dir is not None else path.parent

    try:
        values = dotenv_values(path, interpolate=False)
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e

    def get(key: str, default: str = "") -> str:
        value = values.get(key)
        return default if value is None else value.strip()

    escalation = tuple(
        _parse_hours(key, value or "")
        for key, value in values.items()
        if ESCALATE_KEY.match(key)
    )

    log_format = get("LOG_FORMAT", "text").lower()
    if log_format not in LOG_FORMATS:
        raise ConfigError(f"Invalid LOG_FORMAT: {log_format!r} (expected text or json)")

    known = {
        "MT_HOST", "MT_USER", "MT_PASS", "LIST_TEMP", "LIST_PERM", "WHITELIST",
        "STATE_FILE", "DRY_RUN", "CHECKPOINT", "LOG_FORMAT",
    }
    extra = {
        k: (v or "") for k, v in values.items()
        if k not in known and not ESCALATE_KEY.match(k)
    }

    state_file = get("STATE_FILE")
    return BlockerConfig(
        router_host=get("MT_HOST"),
        router_user=get("MT_USER"),
        router_password=get("MT_PASS"),
        list_temp=get("LIST_TEMP", DEFAULT_LIST_TEMP) or DEFAULT_LIST_TEMP,
        list_perm=get("LIST_PERM", DEFAULT_LIST_PERM) or DEFAULT_LIST_PERM,
        whitelist=parse_whitelist(values.get("WHITELIST")),
        state_file=Path(state_file) if state_file else base_dir / STATE_FILENAME,
        escalation=escalation,
        dry_run=_parse_bool("DRY_RUN", get("DRY_RUN", "false")),
        checkpoint=_parse_bool("CHECKPOINT", get("CHECKPOINT", "true")),
        log_format=log_format,
        extra=extra,
    )
