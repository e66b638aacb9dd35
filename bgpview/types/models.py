"""Typed mirror of the BGPView response bodies.

Every payload field is optional on the wire. An absent field, or a JSON
``null`` on a typed field, decodes to the zero value of its type. Only the
opaque fields named in ``nullable_fields`` hold on to an explicit ``null``.
"""
from __future__ import annotations

from typing import Any, ClassVar, FrozenSet, Tuple, get_args

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator


class WireModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    nullable_fields: ClassVar[FrozenSet[str]] = frozenset()

    @model_validator(mode="before")
    @classmethod
    def null_as_zero(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        out = {}
        for k, v in data.items():
            if v is None and k not in cls.nullable_fields:
                continue
            if isinstance(v, list) and None in v:
                v = _fill_null_items(cls, k, v)
            out[k] = v
        return out


_SCALAR_ZERO = {str: "", int: 0, float: 0.0, bool: False}


def _fill_null_items(model: type[BaseModel], key: str, items: list) -> list:
    # null inside a sequence becomes the zero value of the element type
    field = model.model_fields.get(key)
    if field is None:
        return items
    args = get_args(field.annotation)
    if not args:
        return items
    item_type = args[0]
    if isinstance(item_type, type) and issubclass(item_type, BaseModel):
        zero: Any = {}
    elif item_type in _SCALAR_ZERO:
        zero = _SCALAR_ZERO[item_type]
    else:
        return items
    return [zero if item is None else item for item in items]


class Meta(WireModel):
    time_zone: str = ""
    api_version: int = 0
    execution_time: str = ""


class Envelope(WireModel):
    status: str = ""
    status_message: str = ""
    meta: Meta = Field(
        default_factory=Meta,
        validation_alias=AliasChoices("@meta", "meta"),
        serialization_alias="@meta",
    )

    def to_json(self, **kwargs: Any) -> str:
        """Encode back to the wire format, leaving out fields that were absent."""
        return self.model_dump_json(by_alias=True, exclude_unset=True, **kwargs)


class AllocationData(WireModel):
    rir_name: str = ""
    country_code: str = ""
    ip: str = ""
    cidr: int = 0
    prefix: str = ""
    date_allocated: str = ""


class IPAllocationData(WireModel):
    # The /ip endpoint sends the allocation length as a string.
    rir_name: str = ""
    country_code: str = ""
    ip: str = ""
    cidr: str = ""
    prefix: str = ""
    date_allocated: str = ""


class CountryCodeData(WireModel):
    whois_country_code: str = ""
    rir_allocation_country_code: str = ""
    maxmind_country_code: str = ""


class MaxMindData(WireModel):
    nullable_fields: ClassVar[FrozenSet[str]] = frozenset({"city"})

    country_code: str = ""
    city: Any = None


class ASN(WireModel):
    asn: int = 0
    name: str = ""
    description: str = ""
    country_code: str = ""


# /asn/{asn}


class ASNData(WireModel):
    asn: int = 0
    name: str = ""
    description_short: str = ""
    description_full: Tuple[str, ...] = ()
    country_code: str = ""
    website: str = ""
    email_contacts: Tuple[str, ...] = ()
    abuse_contacts: Tuple[str, ...] = ()
    looking_glass: str = ""
    traffic_estimation: str = ""
    traffic_ratio: str = ""
    owner_address: Tuple[str, ...] = ()
    rir_allocation: AllocationData = Field(default_factory=AllocationData)
    date_updated: str = ""


class ASNInfo(Envelope):
    data: ASNData = Field(default_factory=ASNData)


# /asn/{asn}/prefixes


class ASNPrefixParent(WireModel):
    prefix: str = ""
    ip: str = ""
    cidr: int = 0
    rir_name: str = ""


class ASNIPPrefix(WireModel):
    prefix: str = ""
    ip: str = ""
    cidr: int = 0
    roa_status: str = ""
    name: str = ""
    description: str = ""
    country_code: str = ""
    parent: ASNPrefixParent = Field(default_factory=ASNPrefixParent)


class ASNPrefixesData(WireModel):
    ipv4_prefixes: Tuple[ASNIPPrefix, ...] = ()
    ipv6_prefixes: Tuple[ASNIPPrefix, ...] = ()


class ASNPrefixesInfo(Envelope):
    data: ASNPrefixesData = Field(default_factory=ASNPrefixesData)


# /asn/{asn}/peers


class ASNPeer(ASN):
    pass


class ASNPeersData(WireModel):
    ipv4_peers: Tuple[ASNPeer, ...] = ()
    ipv6_peers: Tuple[ASNPeer, ...] = ()


class ASNPeersInfo(Envelope):
    data: ASNPeersData = Field(default_factory=ASNPeersData)


# /asn/{asn}/upstreams and /asn/{asn}/downstreams


class ASNRelation(ASN):
    bgp_paths: Tuple[str, ...] = ()


class ASNUpstreamsData(WireModel):
    ipv4_upstreams: Tuple[ASNRelation, ...] = ()
    ipv6_upstreams: Tuple[ASNRelation, ...] = ()


class ASNUpstreamsInfo(Envelope):
    data: ASNUpstreamsData = Field(default_factory=ASNUpstreamsData)


class ASNDownstreamsData(WireModel):
    ipv4_downstreams: Tuple[ASNRelation, ...] = ()
    ipv6_downstreams: Tuple[ASNRelation, ...] = ()


class ASNDownstreamsInfo(Envelope):
    data: ASNDownstreamsData = Field(default_factory=ASNDownstreamsData)


# /asn/{asn}/ixs


class ASNIx(WireModel):
    ix_id: int = 0
    name: str = ""
    name_full: str = ""
    country_code: str = ""
    ipv4_address: str = ""
    ipv6_address: str = ""
    speed: int = 0


class ASNIxsInfo(Envelope):
    data: Tuple[ASNIx, ...] = ()


# /prefix/{ip}/{cidr}


class PrefixData(WireModel):
    prefix: str = ""
    ip: str = ""
    cidr: int = 0
    asns: Tuple[ASN, ...] = ()
    name: str = ""
    description_short: str = ""
    description_full: Tuple[str, ...] = ()
    email_contacts: Tuple[str, ...] = ()
    abuse_contacts: Tuple[str, ...] = ()
    owner_address: Tuple[str, ...] = ()
    country_codes: CountryCodeData = Field(default_factory=CountryCodeData)
    rir_allocation: AllocationData = Field(default_factory=AllocationData)
    maxmind: MaxMindData = Field(default_factory=MaxMindData)
    date_updated: str = ""


class PrefixInfo(Envelope):
    data: PrefixData = Field(default_factory=PrefixData)


# /ip/{ip}


class IPData(WireModel):
    prefixes: Tuple[PrefixData, ...] = ()
    rir_allocation: IPAllocationData = Field(default_factory=IPAllocationData)
    maxmind: MaxMindData = Field(default_factory=MaxMindData)
    related_prefixes: Tuple[PrefixData, ...] = ()


class IPInfo(Envelope):
    data: IPData = Field(default_factory=IPData)


# /ix/{ix_id}


class IXMember(WireModel):
    asn: int = 0
    name: str = ""
    description: str = ""
    country_code: str = ""
    ipv4_address: str = ""
    ipv6_address: str = ""
    speed: int = 0


class IXData(WireModel):
    nullable_fields: ClassVar[FrozenSet[str]] = frozenset({"url_stats"})

    name: str = ""
    name_full: str = ""
    website: str = ""
    tech_email: str = ""
    tech_phone: str = ""
    policy_email: str = ""
    policy_phone: str = ""
    city: str = ""
    country_code: str = ""
    # Opaque: kept exactly as sent, including an explicit null.
    url_stats: Any = None
    members_count: int = 0
    members: Tuple[IXMember, ...] = ()

    @property
    def has_url_stats(self) -> bool:
        """True when the service sent the key at all, even as null."""
        return "url_stats" in self.model_fields_set


class IXInfo(Envelope):
    data: IXData = Field(default_factory=IXData)


# /search?query_term=


class SearchASN(WireModel):
    asn: int = 0
    name: str = ""
    description: str = ""
    country_code: str = ""
    email_contacts: Tuple[str, ...] = ()
    abuse_contacts: Tuple[str, ...] = ()
    rir_name: str = ""


class SearchPrefix(WireModel):
    prefix: str = ""
    ip: str = ""
    cidr: int = 0
    name: str = ""
    country_code: str = ""
    description: str = ""
    email_contacts: Tuple[str, ...] = ()
    abuse_contacts: Tuple[str, ...] = ()
    rir_name: str = ""
    parent_prefix: str = ""
    parent_ip: str = ""
    parent_cidr: int = 0


class SearchData(WireModel):
    asns: Tuple[SearchASN, ...] = ()
    ipv4_prefixes: Tuple[SearchPrefix, ...] = ()
    ipv6_prefixes: Tuple[SearchPrefix, ...] = ()


class SearchInfo(Envelope):
    data: SearchData = Field(default_factory=SearchData)
