"""
Firewall response: push block directives to a MikroTik router.

This module is ISOLATED so that:
- We can run in DRY-RUN mode and never touch the router.
- Everything that talks to the device is in one place for security review.

A directive becomes one RouterOS API call:

    /ip/firewall/address-list/add =list=<list> =address=<ip> =timeout=<t>

A failed call is logged and reported back as False. It never raises during
the batch: the planner keeps going with the next address.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from librouteros import connect
from librouteros.exceptions import LibRouterosError

from . import logger
from .config import DEFAULT_ROUTEROS_PORT, BlockerConfig
from .errors import ApplyError


@dataclass(frozen=True)
class BlockDirective:
    """One address-list entry to add: (list, address, timeout)."""

    list_name: str
    address: str
    timeout: str


def split_host_port(target: str, default_port: int = DEFAULT_ROUTEROS_PORT) -> Tuple[str, int]:
    """
    Split "host:port" into (host, port).

    Accepts "192.168.88.1", "192.168.88.1:8728", "[fe80::1]:8728" and a
    bare IPv6 literal.
    """
    target = target.strip()
    if not target:
        raise ApplyError("Router host is empty (set MT_HOST)")
    if target.startswith("["):
        host, sep, rest = target[1:].partition("]")
        if not sep:
            raise ApplyError(f"Invalid router address: {target!r}")
        port = rest[1:] if rest.startswith(":") else ""
    elif target.count(":") == 1:
        host, port = target.split(":")
    else:
        host, port = target, ""
    if not port:
        return host, default_port
    try:
        return host, int(port)
    except ValueError:
        raise ApplyError(f"Invalid router port in {target!r}") from None


class Applier:
    """Base applier: open(), apply(directive) -> bool, close()."""

    def open(self) -> None:
        pass

    def apply(self, directive: BlockDirective) -> bool:
        raise NotImplementedError

    def close(self) -> None:
        pass

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class DryRunApplier(Applier):
    """Only LOG what would be blocked. The router is never contacted."""

    def apply(self, directive: BlockDirective) -> bool:
        logger.log_info(
            "[DRY-RUN] Would add address to list (router not modified)",
            ip=directive.address,
            list=directive.list_name,
            timeout=directive.timeout,
        )
        return True


class RouterOSApplier(Applier):
    """Adds address-list entries through the RouterOS API (librouteros)."""

    ADDRESS_LIST_PATH = ("ip", "firewall", "address-list")

    def __init__(self, host: str, username: str, password: str, timeout: float = 10):
        self.host, self.port = split_host_port(host)
        self.username = username
        self.password = password
        self.timeout = timeout
        self._api = None

    def open(self) -> None:
        """Connect and log in. Raises ApplyError if the router is unreachable."""
        try:
            self._api = connect(
                host=self.host,
                username=self.username,
                password=self.password,
                port=self.port,
                timeout=self.timeout,
            )
        except (LibRouterosError, OSError) as e:
            raise ApplyError(f"Cannot connect to router {self.host}:{self.port}: {e}") from e
        logger.log_info("Connected to router", host=self.host, port=self.port)

    def apply(self, directive: BlockDirective) -> bool:
        if self._api is None:
            logger.log_error("Router not connected; block not applied", ip=directive.address)
            return False
        try:
            self._api.path(*self.ADDRESS_LIST_PATH).add(
                list=directive.list_name,
                address=directive.address,
                timeout=directive.timeout,
            )
            return True
        except (LibRouterosError, OSError) as e:
            logger.log_error(
                "RouterOS address-list add failed",
                ip=directive.address,
                list=directive.list_name,
                error=str(e),
            )
            return False

    def close(self) -> None:
        if self._api is not None:
            try:
                self._api.close()
            except (LibRouterosError, OSError) as e:
                logger.log_warn("Error closing router connection", error=str(e))
            self._api = None


def build_applier(config: BlockerConfig, dry_run: Optional[bool] = None) -> Applier:
    """
    Pick the applier for this run.

    dry_run overrides config.dry_run (e.g. --dry-run on the command line).
    """
    dry_run = dry_run if dry_run is not None else config.dry_run
    if dry_run:
        return DryRunApplier()
    return RouterOSApplier(config.router_host, config.router_user, config.router_password)
