from __future__ import annotations

import ipaddress
from typing import Tuple


def is_valid_ip(value: str) -> bool:
    try:
        ipaddress.ip_address(value)
        return True
    except ValueError:
        return False


def is_valid_asn(value: str | int) -> bool:
    try:
        n = int(value)
        return 0 < n < 2**32
    except (TypeError, ValueError):
        return False


def parse_asn(value: str | int) -> int:
    """Parse ``61138`` or ``AS61138`` into an ASN, raising ValueError if out of range."""
    text = str(value).strip()
    if text.lower().startswith("as"):
        text = text[2:]
    if not is_valid_asn(text):
        raise ValueError(f"invalid ASN: {value!r}")
    return int(text)


def parse_prefix(value: str) -> Tuple[str, int]:
    """Split ``ip/cidr`` into its parts, checking the length fits the address family."""
    ip, sep, length = value.strip().partition("/")
    if not sep or not is_valid_ip(ip):
        raise ValueError(f"invalid prefix: {value!r}")
    try:
        cidr = int(length)
    except ValueError:
        raise ValueError(f"invalid prefix length: {value!r}") from None
    max_len = ipaddress.ip_address(ip).max_prefixlen
    if not 0 <= cidr <= max_len:
        raise ValueError(f"prefix length out of range: {value!r}")
    return ip, cidr
