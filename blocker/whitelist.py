"""
Whitelist: addresses and networks that must NEVER be blocked.

Entries come from the WHITELIST key of config.env. Always whitelist your
own management hosts and LAN so a bad CSV cannot lock you out of the
router.
"""

import ipaddress
from typing import Iterable, List

from .address import normalize_address


def _ip_in_cidr(ip: str, cidr: str) -> bool:
    """
    Check if ip is inside cidr (e.g. 192.168.1.5 in 192.168.0.0/16).

    Host bits in the entry are ignored (192.168.1.7/24 means 192.168.1.0/24).
    Unparsable entries or addresses simply do not match.
    """
    try:
        network = ipaddress.ip_network(cidr.strip(), strict=False)
        address = ipaddress.ip_address(ip)
    except ValueError:
        return False
    # IPv4 never matches an IPv6 network and vice versa
    if address.version != network.version:
        return False
    return address in network


def is_whitelisted(ip: str, whitelist: Iterable[str]) -> bool:
    """
    Return True if ip (already canonical) is whitelisted.

    Plain entries are canonicalized and compared by exact string (so
    2001:DB8::10 matches 2001:db8::10); CIDR entries by network
    containment. The first match wins.
    """
    for entry in whitelist:
        entry = entry.strip()
        if not entry:
            continue
        if "/" in entry:
            if _ip_in_cidr(ip, entry):
                return True
        elif ip == normalize_address(entry):
            return True
    return False


def invalid_entries(whitelist: Iterable[str]) -> List[str]:
    """Entries that are neither an address nor a network; they never match."""
    bad = []
    for entry in whitelist:
        entry = entry.strip()
        if not entry:
            continue
        if "/" in entry:
            try:
                ipaddress.ip_network(entry, strict=False)
            except ValueError:
                bad.append(entry)
        elif not normalize_address(entry):
            bad.append(entry)
    return bad
