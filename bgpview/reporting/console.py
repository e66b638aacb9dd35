from __future__ import annotations

from typing import Iterable, List

from bgpview.types.models import (
    ASNDownstreamsInfo,
    ASNInfo,
    ASNIxsInfo,
    ASNPeersInfo,
    ASNPrefixesInfo,
    ASNRelation,
    ASNUpstreamsInfo,
    Envelope,
    IPInfo,
    IXInfo,
    PrefixInfo,
    SearchInfo,
)


def _header(title: str) -> List[str]:
    # ASCII box to avoid encoding issues
    line = f"| {title} |"
    edge = "+" + ("-" * (len(line) - 2)) + "+"
    return [edge, line, edge, ""]


def _join(values: Iterable[str]) -> str:
    return ", ".join(v for v in values if v)


def _footer(env: Envelope) -> List[str]:
    if not env.meta.execution_time:
        return []
    return ["", f"execution_time: {env.meta.execution_time}"]


def _asn_line(asn: int, name: str, description: str, country_code: str) -> str:
    cc = f" [{country_code}]" if country_code else ""
    desc = f" - {description}" if description else ""
    return f"AS{asn} {name}{desc}{cc}"


def render_asn(env: ASNInfo) -> str:
    d = env.data
    lines = _header(f"ASN lookup for AS{d.asn}")
    lines.append(f"name: {d.name}")
    if d.description_short:
        lines.append(f"description: {d.description_short}")
    if d.country_code:
        lines.append(f"country: {d.country_code}")
    if d.website:
        lines.append(f"website: {d.website}")
    if d.looking_glass:
        lines.append(f"looking_glass: {d.looking_glass}")
    if d.traffic_estimation:
        lines.append(f"traffic_estimation: {d.traffic_estimation}")
    if d.traffic_ratio:
        lines.append(f"traffic_ratio: {d.traffic_ratio}")
    if d.email_contacts:
        lines.append(f"email_contacts: {_join(d.email_contacts)}")
    if d.abuse_contacts:
        lines.append(f"abuse_contacts: {_join(d.abuse_contacts)}")
    if d.owner_address:
        lines.append(f"owner_address: {_join(d.owner_address)}")
    alloc = d.rir_allocation
    if alloc.rir_name:
        lines.append(f"rir: {alloc.rir_name}")
    if alloc.date_allocated:
        lines.append(f"allocated: {alloc.date_allocated}")
    if d.date_updated:
        lines.append(f"updated: {d.date_updated}")
    lines.extend(_footer(env))
    return "\n".join(lines) + "\n"


def render_asn_prefixes(env: ASNPrefixesInfo) -> str:
    lines = _header("ASN prefixes")
    for label, entries in (("ipv4_prefixes", env.data.ipv4_prefixes), ("ipv6_prefixes", env.data.ipv6_prefixes)):
        lines.append(f"{label}: {len(entries)}")
        for p in entries:
            extra = _join([p.name, p.country_code])
            lines.append(f"  {p.prefix}" + (f" ({extra})" if extra else ""))
    lines.extend(_footer(env))
    return "\n".join(lines) + "\n"


def render_asn_peers(env: ASNPeersInfo) -> str:
    lines = _header("ASN peers")
    for label, entries in (("ipv4_peers", env.data.ipv4_peers), ("ipv6_peers", env.data.ipv6_peers)):
        lines.append(f"{label}: {len(entries)}")
        for p in entries:
            lines.append("  " + _asn_line(p.asn, p.name, p.description, p.country_code))
    lines.extend(_footer(env))
    return "\n".join(lines) + "\n"


def _render_relations(title: str, groups: Iterable[tuple[str, tuple[ASNRelation, ...]]]) -> List[str]:
    lines = _header(title)
    for label, entries in groups:
        lines.append(f"{label}: {len(entries)}")
        for r in entries:
            lines.append("  " + _asn_line(r.asn, r.name, r.description, r.country_code))
            for path in r.bgp_paths:
                lines.append(f"    path: {path}")
    return lines


def render_asn_upstreams(env: ASNUpstreamsInfo) -> str:
    lines = _render_relations(
        "ASN upstreams",
        (("ipv4_upstreams", env.data.ipv4_upstreams), ("ipv6_upstreams", env.data.ipv6_upstreams)),
    )
    lines.extend(_footer(env))
    return "\n".join(lines) + "\n"


def render_asn_downstreams(env: ASNDownstreamsInfo) -> str:
    lines = _render_relations(
        "ASN downstreams",
        (("ipv4_downstreams", env.data.ipv4_downstreams), ("ipv6_downstreams", env.data.ipv6_downstreams)),
    )
    lines.extend(_footer(env))
    return "\n".join(lines) + "\n"


def render_asn_ixs(env: ASNIxsInfo) -> str:
    lines = _header("ASN exchanges")
    lines.append(f"ixs: {len(env.data)}")
    for ix in env.data:
        addrs = _join([ix.ipv4_address, ix.ipv6_address])
        lines.append(f"  [{ix.ix_id}] {ix.name} ({ix.country_code}) {ix.speed} Mbps")
        if addrs:
            lines.append(f"    addresses: {addrs}")
    lines.extend(_footer(env))
    return "\n".join(lines) + "\n"


def render_prefix(env: PrefixInfo) -> str:
    d = env.data
    lines = _header(f"Prefix lookup for {d.prefix}")
    if d.name:
        lines.append(f"name: {d.name}")
    if d.description_short:
        lines.append(f"description: {d.description_short}")
    for a in d.asns:
        lines.append("origin: " + _asn_line(a.asn, a.name, a.description, a.country_code))
    cc = d.country_codes
    if cc.whois_country_code or cc.rir_allocation_country_code or cc.maxmind_country_code:
        lines.append(
            "country_codes: "
            f"whois={cc.whois_country_code or '-'} "
            f"rir={cc.rir_allocation_country_code or '-'} "
            f"maxmind={cc.maxmind_country_code or '-'}"
        )
    if d.abuse_contacts:
        lines.append(f"abuse_contacts: {_join(d.abuse_contacts)}")
    alloc = d.rir_allocation
    if alloc.prefix:
        lines.append(f"rir_allocation: {alloc.prefix} ({alloc.rir_name})")
    if d.date_updated:
        lines.append(f"updated: {d.date_updated}")
    lines.extend(_footer(env))
    return "\n".join(lines) + "\n"


def render_ip(ip: str, env: IPInfo) -> str:
    d = env.data
    lines = _header(f"IP lookup for {ip}")
    lines.append(f"prefixes: {len(d.prefixes)}")
    for p in d.prefixes:
        origins = _join(f"AS{a.asn}" for a in p.asns)
        lines.append(f"  {p.prefix} {p.name}" + (f" ({origins})" if origins else ""))
    alloc = d.rir_allocation
    if alloc.prefix:
        lines.append(f"rir_allocation: {alloc.prefix} ({alloc.rir_name}, {alloc.date_allocated})")
    if d.maxmind.country_code:
        lines.append(f"maxmind_country: {d.maxmind.country_code}")
    if d.related_prefixes:
        lines.append(f"related_prefixes: {_join(p.prefix for p in d.related_prefixes)}")
    lines.extend(_footer(env))
    return "\n".join(lines) + "\n"


def render_ix(env: IXInfo) -> str:
    d = env.data
    lines = _header(f"IX lookup for {d.name}")
    if d.name_full:
        lines.append(f"name_full: {d.name_full}")
    location = _join([d.city, d.country_code])
    if location:
        lines.append(f"location: {location}")
    if d.website:
        lines.append(f"website: {d.website}")
    if d.tech_email or d.tech_phone:
        lines.append(f"tech_contact: {_join([d.tech_email, d.tech_phone])}")
    if d.policy_email or d.policy_phone:
        lines.append(f"policy_contact: {_join([d.policy_email, d.policy_phone])}")
    lines.append(f"members: {d.members_count}")
    for m in d.members:
        lines.append(f"  {_asn_line(m.asn, m.name, m.description, m.country_code)} {m.speed} Mbps")
    lines.extend(_footer(env))
    return "\n".join(lines) + "\n"


def render_search(term: str, env: SearchInfo) -> str:
    d = env.data
    lines = _header(f"Search results for {term}")
    lines.append(f"asns: {len(d.asns)}")
    for a in d.asns:
        lines.append("  " + _asn_line(a.asn, a.name, a.description, a.country_code))
    for label, entries in (("ipv4_prefixes", d.ipv4_prefixes), ("ipv6_prefixes", d.ipv6_prefixes)):
        lines.append(f"{label}: {len(entries)}")
        for p in entries:
            lines.append(f"  {p.prefix} {p.name}" + (f" [{p.country_code}]" if p.country_code else ""))
    lines.extend(_footer(env))
    return "\n".join(lines) + "\n"
