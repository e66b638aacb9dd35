from __future__ import annotations

import json

import httpx
import pytest

from bgpview import cli
from bgpview.client import Client


@pytest.fixture
def fake_cli(monkeypatch, server):
    def _make_client() -> Client:
        return Client("http://bgpview.test", transport=httpx.MockTransport(server.handler))

    monkeypatch.setattr(cli, "_make_client", _make_client)
    return server


def _run(argv):
    with pytest.raises(SystemExit) as exc:
        cli.main(argv)
    return exc.value.code


def test_asn_console(fake_cli, capsys):
    fake_cli.serve("/asn/61138", "asn.json")

    assert _run(["asn", "AS61138"]) == 0

    out = capsys.readouterr().out
    assert "| ASN lookup for AS61138 |" in out
    assert "name: ZAPPIE-HOST-AS" in out
    assert "rir: RIPE" in out
    assert "execution_time: 24.48 ms" in out


@pytest.mark.parametrize(
    "view, path, fixture, needle",
    [
        ("prefixes", "/asn/61138/prefixes", "asn-prefixes.json", "  2404:3d80::/32 (ZAPPIEHOST-AP-20160203, NZ)"),
        ("peers", "/asn/61138/peers", "asn-peers.json", "ipv6_peers: 3"),
        ("upstreams", "/asn/61138/upstreams", "asn-upstreams.json", "    path: 6939 137409 61138"),
        ("downstreams", "/asn/61138/downstreams", "asn-downstreams.json", "ipv4_downstreams: 0"),
        ("ixs", "/asn/61138/ixs", "asn-ixs.json", "  [585] EVIX (US) 100 Mbps"),
    ],
)
def test_asn_views(fake_cli, capsys, view, path, fixture, needle):
    fake_cli.serve(path, fixture)

    assert _run(["asn", "61138", "--view", view]) == 0

    assert needle in capsys.readouterr().out


def test_json_output_is_wire_format(fake_cli, capsys):
    fake_cli.serve("/ix/492", "ix.json")

    assert _run(["-o", "json", "ix", "492"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["data"]["name"] == "MIXP.me"
    assert payload["data"]["url_stats"] is None
    assert payload["@meta"]["execution_time"] == "16.73 ms"


def test_subcommand_format_option(fake_cli, capsys):
    fake_cli.serve("/search", "search.json")

    assert _run(["search", "digitalocean", "-o", "json"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert [a["asn"] for a in payload["data"]["asns"]] == [14061, 39690]
    assert fake_cli.last.url.params["query_term"] == "digitalocean"


def test_prefix_and_ip(fake_cli, capsys):
    fake_cli.serve("/prefix/192.209.63.0/24", "prefix.json")
    fake_cli.serve("/ip/2a05:dfc7:60::", "ip.json")

    assert _run(["prefix", "192.209.63.0/24"]) == 0
    assert _run(["ip", "2a05:dfc7:60::"]) == 0

    out = capsys.readouterr().out
    assert "origin: AS1239 SPRINTLINK - Sprint [US]" in out
    assert "| IP lookup for 2a05:dfc7:60:: |" in out
    assert "rir_allocation: 2a05:dfc0::/29 (RIPE, 2015-03-03 00:00:00)" in out


@pytest.mark.parametrize(
    "argv",
    [
        ["asn", "ASfoo"],
        ["asn", "0"],
        ["prefix", "192.209.63.0"],
        ["prefix", "192.209.63.0/33"],
        ["ip", "999.1.1.1"],
        ["ix", "abc"],
        ["search", "   "],
    ],
)
def test_invalid_input_exits_2_without_request(fake_cli, capsys, argv):
    assert _run(argv) == 2

    assert fake_cli.requests == []
    record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert record["level"] == "ERROR"
    assert record["module"] == "cli"


def test_remote_error_exits_1(fake_cli, capsys):
    fake_cli.respond("/asn/61138", 500, "boom")

    assert _run(["asn", "61138"]) == 1

    record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert record["message"] == "Lookup failed"
    assert record["error_type"] == "RemoteError"
    assert record["error"] == "500: boom"


def test_no_command_prints_help(capsys):
    assert _run([]) == 2
    assert "usage: bgpview" in capsys.readouterr().out
