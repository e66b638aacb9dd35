from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Awaitable, Callable, List, Optional

from bgpview import __version__
from bgpview.client import Client
from bgpview.errors import BGPViewError
from bgpview.reporting.console import (
    render_asn,
    render_asn_downstreams,
    render_asn_ixs,
    render_asn_peers,
    render_asn_prefixes,
    render_asn_upstreams,
    render_ip,
    render_ix,
    render_prefix,
    render_search,
)
from bgpview.types.models import Envelope
from bgpview.types.settings import Settings
from bgpview.utils.env import load_env
from bgpview.utils.logging import logger
from bgpview.utils.validation import is_valid_ip, parse_asn, parse_prefix


log = logger("cli")

ASN_VIEWS = {
    "info": (Client.get_asn, render_asn),
    "prefixes": (Client.get_asn_prefixes, render_asn_prefixes),
    "peers": (Client.get_asn_peers, render_asn_peers),
    "upstreams": (Client.get_asn_upstreams, render_asn_upstreams),
    "downstreams": (Client.get_asn_downstreams, render_asn_downstreams),
    "ixs": (Client.get_asn_ixs, render_asn_ixs),
}


def _print(s: str) -> None:
    sys.stdout.write(s)


def _make_client() -> Client:
    return Client.from_settings(Settings.from_env())


async def _run(
    what: str,
    fetch: Callable[[Client], Awaitable[Envelope]],
    render: Callable[[Envelope], str],
    *,
    output: str,
) -> int:
    async with _make_client() as client:
        try:
            env = await fetch(client)
        except BGPViewError as e:
            log["error"]("Lookup failed", target=what, error_type=type(e).__name__, error=str(e))
            return 1
    if output == "json":
        _print(env.to_json(indent=2) + "\n")
    else:
        _print(render(env))
    return 0


def _cmd_asn(value: str, view: str, output: str) -> int:
    try:
        asn = parse_asn(value)
    except ValueError:
        log["error"]("Invalid ASN provided", asn=value)
        return 2
    fetch, render = ASN_VIEWS[view]
    return asyncio.run(_run(f"AS{asn}", lambda c: fetch(c, asn), render, output=output))


def _cmd_prefix(value: str, output: str) -> int:
    try:
        ip, cidr = parse_prefix(value)
    except ValueError:
        log["error"]("Invalid prefix provided", prefix=value)
        return 2
    return asyncio.run(_run(value, lambda c: c.get_prefix(ip, cidr), render_prefix, output=output))


def _cmd_ip(ip: str, output: str) -> int:
    if not is_valid_ip(ip):
        log["error"]("Invalid IP provided", ip=ip)
        return 2
    return asyncio.run(_run(ip, lambda c: c.get_ip(ip), lambda env: render_ip(ip, env), output=output))


def _cmd_ix(value: str, output: str) -> int:
    try:
        ix_id = int(value)
    except ValueError:
        log["error"]("Invalid IX id provided", ix=value)
        return 2
    if ix_id <= 0:
        log["error"]("Invalid IX id provided", ix=value)
        return 2
    return asyncio.run(_run(f"ix {ix_id}", lambda c: c.get_ix(ix_id), render_ix, output=output))


def _cmd_search(term: str, output: str) -> int:
    term = term.strip()
    if not term:
        log["error"]("Empty search term")
        return 2
    return asyncio.run(_run(term, lambda c: c.search(term), lambda env: render_search(term, env), output=output))


def main(argv: Optional[List[str]] = None) -> None:
    # Load .env if present
    load_env()
    parser = argparse.ArgumentParser(prog="bgpview", description="BGPView ASN/prefix/IP/IX lookups")
    parser.add_argument("-o", "--format", choices=["console", "json"], default="console", help="Output format")
    parser.add_argument("-V", "--version", action="version", version=f"bgpview {__version__}")
    sub = parser.add_subparsers(dest="cmd")

    def _format_opt(p: argparse.ArgumentParser) -> None:
        p.add_argument("-o", "--format", choices=["console", "json"], default=argparse.SUPPRESS, help="Output format")

    p_asn = sub.add_parser("asn", help="Lookup an ASN (e.g. 61138 or AS61138)")
    p_asn.add_argument("asn", type=str)
    p_asn.add_argument("--view", choices=list(ASN_VIEWS), default="info", help="Which ASN resource to fetch")
    _format_opt(p_asn)

    p_prefix = sub.add_parser("prefix", help="Lookup a prefix given as ip/cidr")
    p_prefix.add_argument("prefix", type=str)
    _format_opt(p_prefix)

    p_ip = sub.add_parser("ip", help="Lookup an IP address")
    p_ip.add_argument("ip", type=str)
    _format_opt(p_ip)

    p_ix = sub.add_parser("ix", help="Lookup an internet exchange by id")
    p_ix.add_argument("ix", type=str)
    _format_opt(p_ix)

    p_search = sub.add_parser("search", help="Search ASNs and prefixes by name or description")
    p_search.add_argument("term", type=str)
    _format_opt(p_search)

    args = parser.parse_args(argv)

    if args.cmd is None:
        parser.print_help()
        raise SystemExit(2)

    match args.cmd:
        case "asn":
            code = _cmd_asn(args.asn, args.view, args.format)
        case "prefix":
            code = _cmd_prefix(args.prefix, args.format)
        case "ip":
            code = _cmd_ip(args.ip.strip(), args.format)
        case "ix":
            code = _cmd_ix(args.ix, args.format)
        case "search":
            code = _cmd_search(args.term, args.format)
        case _:
            code = 2
    raise SystemExit(code)


if __name__ == "__main__":
    main()
