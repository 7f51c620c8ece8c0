"""
Address normalization.

Input rows come from CSV exports and are messy: quoted, sometimes with the
rest of the row still attached ("203.0.113.25,ssh,2025-01-30"). We reduce a
token to the canonical string form of the IP so the same attacker always
maps to the same state key, however it was written.
"""

import ipaddress

INVALID = ""

# surrounding quotes and whitespace
_STRIP = ' \t\r\n"'


def normalize_address(raw) -> str:
    """
    Return the canonical form of an IP token, or INVALID ("") if it is not
    an IP literal.

    Never raises: an invalid token is a normal outcome, the caller logs it
    and skips the row.
    """
    if not isinstance(raw, str):
        return INVALID
    token = raw.strip(_STRIP)
    if "," in token:
        token = token.split(",", 1)[0]
    token = token.strip(_STRIP)
    try:
        address = ipaddress.ip_address(token)
    except ValueError:
        return INVALID
    # ::ffff:a.b.c.d is the IPv4 host a.b.c.d
    if address.version == 6 and address.ipv4_mapped:
        address = address.ipv4_mapped
    return str(address)
