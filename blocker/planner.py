"""
Per-address pipeline: normalize -> whitelist -> count -> escalate -> apply.

Each input row ends in exactly one of these states, each with its own log
line:

    rejected         not an IP literal; nothing counted, nothing sent
    whitelisted      protected; nothing counted, nothing sent
    timed_block      counted; added to the temporary list with a timeout
    permanent_block  counted; added to the permanent list

A failed router call is logged but does not undo the count and does not
stop the batch.
"""

from dataclasses import dataclass
from typing import Iterable

from . import logger
from .address import normalize_address
from .config import BlockerConfig
from .errors import ApplyError
from .escalation import decide
from .firewall import Applier, BlockDirective
from .state import OffenseStateStore
from .whitelist import is_whitelisted

REJECTED = "rejected"
WHITELISTED = "whitelisted"
TIMED_BLOCK = "timed_block"
PERMANENT_BLOCK = "permanent_block"


@dataclass
class RunSummary:
    """Tallies for one run."""

    rejected: int = 0
    whitelisted: int = 0
    timed: int = 0
    permanent: int = 0
    apply_failed: int = 0

    @property
    def total(self) -> int:
        return self.rejected + self.whitelisted + self.timed + self.permanent


class SyncPlanner:
    """Turns input rows into block directives for one run."""

    def __init__(self, config: BlockerConfig, store: OffenseStateStore, applier: Applier):
        self.config = config
        self.store = store
        self.applier = applier
        self.summary = RunSummary()

    def process(self, raw: str) -> str:
        """Run one input token through the pipeline; return its final state."""
        ip = normalize_address(raw)
        if not ip:
            logger.log_warn("Skipping invalid address", raw=raw)
            self.summary.rejected += 1
            return REJECTED

        if is_whitelisted(ip, self.config.whitelist):
            logger.log_info("SKIP (whitelisted)", ip=ip)
            self.summary.whitelisted += 1
            return WHITELISTED

        count = self.store.increment(ip)
        if self.config.checkpoint:
            self.store.save()
        outcome = decide(count, self.config.escalation)

        if outcome.permanent:
            directive = BlockDirective(self.config.list_perm, ip, outcome.timeout)
            logger.log_warn("Permanent block", ip=ip, attempt=outcome.attempt, list=directive.list_name)
            self.summary.permanent += 1
            state = PERMANENT_BLOCK
        else:
            directive = BlockDirective(self.config.list_temp, ip, outcome.timeout)
            logger.log_info(
                f"Temporary block: attempt {outcome.attempt}, timeout {outcome.timeout}",
                ip=ip,
                attempt=outcome.attempt,
                timeout=outcome.timeout,
                list=directive.list_name,
            )
            self.summary.timed += 1
            state = TIMED_BLOCK

        self._apply(directive)
        return state

    def _apply(self, directive: BlockDirective) -> None:
        context = {"ip": directive.address, "list": directive.list_name}
        try:
            applied = self.applier.apply(directive)
        except ApplyError as e:
            applied = False
            context["error"] = str(e)
        if not applied:
            logger.log_error("Block failed", **context)
            self.summary.apply_failed += 1

    def run(self, addresses: Iterable[str]) -> RunSummary:
        """
        Process the whole batch in order, then save state.

        Every occurrence counts: an address listed twice is escalated twice.
        """
        for raw in addresses:
            self.process(raw)
        self.store.save()
        s = self.summary
        logger.log_info(
            "Run complete",
            processed=s.total,
            timed=s.timed,
            permanent=s.permanent,
            whitelisted=s.whitelisted,
            rejected=s.rejected,
            apply_failed=s.apply_failed,
            tracked=len(self.store),
        )
        return s
