"""
HTB Blocker - Entry point.

Orchestrates:
1. First-run setup (base directory, config.env)
2. Load config, offense state and the input CSV
3. For every address: normalize, skip whitelisted, count the offense and
   add it to the router's temporary list with an escalating timeout,
   or to the permanent list once the schedule is exhausted
4. Save state

Usage:
    python main.py attackers.csv
    python main.py attackers.csv --dry-run
    python main.py --init --base-dir ./blocker-home
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

# Add project root so we can run: python main.py
PROJECT_ROOT = Path(__file__).resolve().parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from blocker import __version__
from blocker import bootstrap
from blocker import config
from blocker import csv_input
from blocker import firewall
from blocker import logger
from blocker import whitelist
from blocker.errors import BlockerError
from blocker.planner import SyncPlanner
from blocker.state import OffenseStateStore


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="htb-blocker",
        description="Escalating MikroTik address-list blocks for attacker IPs from a CSV.",
    )
    parser.add_argument("csv", nargs="?", type=Path, help="CSV of attacker IPs (header row + IP in column one)")
    parser.add_argument(
        "--base-dir",
        type=Path,
        default=None,
        help=f"Directory holding config.env and state (default: {config.DEFAULT_BASE_DIR})",
    )
    parser.add_argument("--config", type=Path, help="Path to config.env (default: <base-dir>/config.env)")
    parser.add_argument("--init", action="store_true", help="Write a default config.env and exit")
    parser.add_argument("--interactive", action="store_true", help="Ask before creating missing files")
    parser.add_argument("--dry-run", action="store_true", default=None, help="Only log what would be blocked")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def run_blocking(args: argparse.Namespace) -> int:
    """
    Main flow: setup -> config -> state -> input -> router -> per-address pipeline -> save.

    Everything that can abort the run happens before the first offense is
    counted.
    """
    base_dir = args.base_dir if args.base_dir is not None else config.DEFAULT_BASE_DIR

    if args.init:
        path = args.config or config.config_path(base_dir)
        if path.exists():
            logger.log_warn("Config already exists; not overwriting", path=str(path))
            return 1
        bootstrap.write_default_config(path, args.base_dir if args.base_dir is not None else path.parent)
        return 0

    if args.csv is None:
        logger.log_error("No input CSV given. Usage: python main.py attackers.csv")
        return 2

    if args.config is not None:
        config_file = args.config
    else:
        bootstrap.ensure_base_dir(base_dir, interactive=args.interactive)
        existed = config.config_path(base_dir).is_file()
        config_file = bootstrap.ensure_config(base_dir, interactive=args.interactive)
        if not existed:
            # Fresh template: the router password is a placeholder.
            return 0

    # Without --base-dir, a missing STATE_FILE defaults next to config.env.
    cfg = config.load_config(config_file, base_dir=args.base_dir)
    logger.configure(fmt=cfg.log_format)
    logger.log_info("HTB Blocker started", version=__version__, config=str(config_file))
    for key in cfg.extra:
        logger.log_warn("Unknown config key ignored", key=key)
    for entry in whitelist.invalid_entries(cfg.whitelist):
        logger.log_warn("Whitelist entry is not an address or network; ignored", entry=entry)
    if not cfg.escalation:
        logger.log_warn("No ESCALATE_* values configured; every offense is a permanent block")

    store = OffenseStateStore(cfg.state_file)
    store.load()
    logger.log_info("Loaded offense state", path=str(cfg.state_file), tracked=len(store))

    addresses = csv_input.read_addresses(args.csv)
    logger.log_info("Read input CSV", path=str(args.csv), rows=len(addresses))

    applier = firewall.build_applier(cfg, dry_run=args.dry_run)
    with applier:
        planner = SyncPlanner(cfg, store, applier)
        planner.run(addresses)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return run_blocking(args)
    except BlockerError as e:
        logger.log_error(str(e), error_type=type(e).__name__)
        return 1
    except KeyboardInterrupt:
        logger.log_error("Interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
