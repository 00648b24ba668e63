import pytest
from wgstatus.device.wireguard import parse_wireguard_dump
from wgstatus.models.config import InterfaceSectionSchema, PeerSectionSchema
from wgstatus.status.correlator import build_interface_views


NOW = 1700000030

FEED = (
    "wg0\tPRIVKEY_A\tPUBKEY_A\t51820\toff\n"
    "wg0\tPUBKEY_B\t(none)\t(none)\t10.0.0.2/32\t0\t100\t200\toff\n"
    "wg0\tPUBKEY_C\tPSK_C\t203.0.113.7:41820\t10.0.0.3/32\t1700000000\t1536\t1048576\t25\n"
    "wg1\tPRIVKEY_D\tPUBKEY_D\t51821\t0xca6c\n"
    "wg1\tPUBKEY_B\t(none)\t(none)\t0.0.0.0/0\t0\t0\t0\toff\n"
)


@pytest.fixture
def dump():
    return parse_wireguard_dump(FEED)


@pytest.fixture
def interface_sections():
    return [
        InterfaceSectionSchema(name="lan", proto="static", addresses=["192.168.1.1/24"]),
        InterfaceSectionSchema(name="wg0", proto="wireguard", addresses=["10.0.0.1/24", "fd00::1/64"], allowed_zones=["lan"]),
    ]


@pytest.fixture
def peer_sections():
    return [
        PeerSectionSchema(interface="wg0", public_key="PUBKEY_C", description="phone", allowed_ips=["10.0.0.3/32"]),
        PeerSectionSchema(interface="wg0", public_key="PUBKEY_B", description="laptop", allowed_ips=["10.0.0.2/32"]),
    ]


def test_round_trip_without_config():
    dump = parse_wireguard_dump(
        "wg0\tPRIVKEY_A\tPUBKEY_A\t51820\toff\n"
        "wg0\tPUBKEY_B\t0\t(none)\toff\t0\t100\t200\toff\n"
    )
    [view] = build_interface_views(dump, [], [])

    assert view.name == "wg0"
    assert view.public_key == "PUBKEY_A"
    assert view.listen_port == 51820
    assert view.fwmark is None
    assert view.addresses == []
    assert view.allowed_zones == []

    [peer] = view.peers
    assert peer.name == "PUBKEY_B"
    assert peer.public_key == "PUBKEY_B"
    assert peer.endpoint is None
    assert peer.persistent_keepalive is None
    assert peer.allowed_ips == []
    assert peer.transfer_rx == "100 B"
    assert peer.transfer_tx == "200 B"
    assert peer.latest_handshake == "Never"


def test_empty_config_falls_back_everywhere(dump):
    views = build_interface_views(dump, [], [], now=NOW)

    assert [v.name for v in views] == ["wg0", "wg1"]
    assert [len(v.peers) for v in views] == [2, 1]
    for view in views:
        assert view.addresses == []
        for peer in view.peers:
            assert peer.name == peer.public_key
            assert peer.allowed_ips == []


def test_config_is_joined(dump, interface_sections, peer_sections):
    wg0, wg1 = build_interface_views(dump, interface_sections, peer_sections, now=NOW)

    assert wg0.addresses == ["10.0.0.1/24", "fd00::1/64"]
    assert wg0.allowed_zones == ["lan"]
    assert [p.name for p in wg0.peers] == ["laptop", "phone"]
    assert wg0.peers[1].allowed_ips == ["10.0.0.3/32"]

    # same public key under another interface is not matched
    assert wg1.addresses == []
    assert wg1.fwmark == "0xca6c"
    assert wg1.peers[0].name == "PUBKEY_B"
    assert wg1.peers[0].allowed_ips == []


def test_derived_fields(dump):
    phone = build_interface_views(dump, [], [], now=NOW)[0].peers[1]

    assert phone.endpoint == "203.0.113.7:41820"
    assert phone.persistent_keepalive == "25s"
    assert phone.transfer_rx == "1.5 KiB"
    assert phone.transfer_tx == "1 MiB"
    assert phone.latest_handshake == "Tue, 14 Nov 2023 22:13:20 GMT (30s ago)"


def test_public_key_match_is_case_sensitive(dump):
    sections = [PeerSectionSchema(interface="wg0", public_key="pubkey_b", description="laptop")]
    views = build_interface_views(dump, [], sections, now=NOW)

    assert views[0].peers[0].name == "PUBKEY_B"


def test_duplicate_peer_sections_first_wins(dump):
    sections = [
        PeerSectionSchema(interface="wg0", public_key="PUBKEY_B", description="first", allowed_ips=["10.0.0.2/32"]),
        PeerSectionSchema(interface="wg0", public_key="PUBKEY_B", description="second", allowed_ips=["10.9.9.9/32"]),
    ]
    peer = build_interface_views(dump, [], sections, now=NOW)[0].peers[0]

    assert peer.name == "first"
    assert peer.allowed_ips == ["10.0.0.2/32"]


def test_duplicate_interface_sections_first_wins(dump):
    sections = [
        InterfaceSectionSchema(name="wg0", addresses=["10.0.0.1/24"], allowed_zones=["lan"]),
        InterfaceSectionSchema(name="wg0", addresses=["10.9.0.1/24"], allowed_zones=["wan"]),
    ]
    wg0 = build_interface_views(dump, sections, [], now=NOW)[0]

    assert wg0.addresses == ["10.0.0.1/24"]
    assert wg0.allowed_zones == ["lan"]


def test_section_without_description_uses_public_key(dump):
    sections = [PeerSectionSchema(interface="wg0", public_key="PUBKEY_B", allowed_ips=["10.0.0.2/32"])]
    peer = build_interface_views(dump, [], sections, now=NOW)[0].peers[0]

    assert peer.name == "PUBKEY_B"
    assert peer.allowed_ips == ["10.0.0.2/32"]


def test_build_is_idempotent(dump, interface_sections, peer_sections):
    first = build_interface_views(dump, interface_sections, peer_sections, now=NOW)
    second = build_interface_views(dump, interface_sections, peer_sections, now=NOW)

    assert first == second


def test_inputs_are_not_mutated(dump, interface_sections, peer_sections):
    views = build_interface_views(dump, interface_sections, peer_sections, now=NOW)
    views[0].addresses.append("192.0.2.1/32")

    assert interface_sections[1].addresses == ["10.0.0.1/24", "fd00::1/64"]
    assert len(dump["wg0"].peers) == 2
