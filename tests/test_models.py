from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from bgpview.types.models import (
    ASNData,
    ASNDownstreamsInfo,
    ASNInfo,
    ASNIxsInfo,
    ASNPeersInfo,
    ASNPrefixesInfo,
    ASNUpstreamsInfo,
    IPInfo,
    IXData,
    IXInfo,
    Meta,
    PrefixInfo,
    SearchInfo,
)


FIXTURE_MODELS = [
    ("asn.json", ASNInfo),
    ("asn-prefixes.json", ASNPrefixesInfo),
    ("asn-peers.json", ASNPeersInfo),
    ("asn-upstreams.json", ASNUpstreamsInfo),
    ("asn-downstreams.json", ASNDownstreamsInfo),
    ("asn-ixs.json", ASNIxsInfo),
    ("prefix.json", PrefixInfo),
    ("ip.json", IPInfo),
    ("ix.json", IXInfo),
    ("search.json", SearchInfo),
]


@pytest.mark.parametrize("fixture, model", FIXTURE_MODELS)
def test_decode_is_idempotent(fixture, model, fixture_bytes):
    decoded = model.model_validate_json(fixture_bytes(fixture))

    again = model.model_validate_json(decoded.to_json())

    assert again == decoded
    assert again.to_json() == decoded.to_json()


@pytest.mark.parametrize("fixture, model", FIXTURE_MODELS)
def test_meta_written_under_wire_key(fixture, model, fixture_bytes):
    decoded = model.model_validate_json(fixture_bytes(fixture))

    wire = json.loads(decoded.to_json())

    assert "@meta" in wire
    assert "meta" not in wire
    assert wire["@meta"]["time_zone"] == "UTC"


def test_meta_accepts_plain_key():
    env = ASNInfo.model_validate({"status": "ok", "meta": {"api_version": 1}})
    assert env.meta == Meta(api_version=1)


def test_absent_fields_decode_to_zero_values():
    env = ASNInfo.model_validate_json(b'{"status": "ok", "data": {"asn": 13335}}')

    assert env.status_message == ""
    assert env.meta == Meta(time_zone="", api_version=0, execution_time="")
    assert env.data.name == ""
    assert env.data.email_contacts == ()
    assert env.data.rir_allocation.cidr == 0
    assert env.data.rir_allocation.rir_name == ""


def test_missing_data_is_still_structurally_present():
    env = ASNPeersInfo.model_validate_json(b'{"status": "ok"}')

    assert env.data.ipv4_peers == ()
    assert env.data.ipv6_peers == ()
    assert ASNIxsInfo.model_validate_json(b"{}").data == ()


def test_null_on_typed_fields_decodes_to_zero_values():
    env = ASNInfo.model_validate_json(
        b'{"data": {"asn": 1, "name": null, "owner_address": null, "rir_allocation": null}}'
    )

    assert env.data.name == ""
    assert env.data.owner_address == ()
    assert env.data.rir_allocation.date_allocated == ""


def test_url_stats_absent_null_and_set():
    absent = IXData.model_validate({"name": "X"})
    null = IXData.model_validate({"name": "X", "url_stats": None})
    present = IXData.model_validate({"name": "X", "url_stats": "https://stats.example/ix"})

    assert absent.url_stats is None and not absent.has_url_stats
    assert null.url_stats is None and null.has_url_stats
    assert present.url_stats == "https://stats.example/ix"

    assert "url_stats" not in json.loads(absent.model_dump_json(exclude_unset=True))
    assert json.loads(null.model_dump_json(exclude_unset=True))["url_stats"] is None


def test_lists_keep_server_order_and_duplicates():
    env = ASNData.model_validate({"email_contacts": ["b@x", "a@x", "b@x"]})
    assert env.email_contacts == ("b@x", "a@x", "b@x")


def test_decoded_values_are_immutable(fixture_bytes):
    env = ASNPeersInfo.model_validate_json(fixture_bytes("asn-peers.json"))

    with pytest.raises(ValidationError):
        env.status = "error"
    with pytest.raises(ValidationError):
        env.data.ipv4_peers[0].asn = 1
    assert isinstance(env.data.ipv4_peers, tuple)


def test_cidr_types_differ_between_prefix_and_ip(fixture_bytes):
    prefix = PrefixInfo.model_validate_json(fixture_bytes("prefix.json"))
    ip = IPInfo.model_validate_json(fixture_bytes("ip.json"))

    assert isinstance(prefix.data.rir_allocation.cidr, int)
    assert isinstance(ip.data.rir_allocation.cidr, str)
    assert json.loads(ip.to_json())["data"]["rir_allocation"]["cidr"] == "29"


def test_unknown_keys_are_ignored(fixture_bytes):
    env = ASNUpstreamsInfo.model_validate_json(fixture_bytes("asn-upstreams.json"))

    assert "ipv4_graph" not in env.to_json()


def test_null_list_items_decode_to_zero_values():
    asn = ASNInfo.model_validate_json(b'{"data": {"asn": 1, "description_full": [null, "x"]}}')
    peers = ASNPeersInfo.model_validate_json(b'{"data": {"ipv4_peers": [null, {"asn": 2}]}}')
    ixs = ASNIxsInfo.model_validate_json(b'{"data": [null]}')

    assert asn.data.description_full == ("", "x")
    assert peers.data.ipv4_peers[0].asn == 0
    assert peers.data.ipv4_peers[1].asn == 2
    assert ixs.data[0].ix_id == 0
