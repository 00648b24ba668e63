from wgstatus.common.expression import keepalive_to_expression
from wgstatus.common.utils import byte_size, relative_time
from wgstatus.models.config import InterfaceSectionSchema, PeerSectionSchema
from wgstatus.models.device import InterfaceView, PeerView, WireGuardInterfaceState, WireGuardPeerRecord


def _index_interface_sections(sections: list[InterfaceSectionSchema]):
    index: dict[str, InterfaceSectionSchema] = {}
    for section in sections:
        index.setdefault(section.name, section)
    return index


def _index_peer_sections(sections: list[PeerSectionSchema]):
    # duplicated (interface, public key) pairs: first one in config order wins
    index: dict[tuple[str, str], PeerSectionSchema] = {}
    for section in sections:
        index.setdefault((section.interface, section.public_key), section)
    return index


def _build_peer_view(peer: WireGuardPeerRecord, section: PeerSectionSchema | None, now: float | None):
    return PeerView(
        name=section.description if section and section.description else peer.public_key,
        public_key=peer.public_key,
        endpoint=peer.endpoint,
        allowed_ips=list(section.allowed_ips) if section else [],
        latest_handshake=relative_time(peer.latest_handshake, now),
        transfer_rx=byte_size(peer.rx),
        transfer_tx=byte_size(peer.tx),
        persistent_keepalive=keepalive_to_expression(peer.keepalive),
    )


def build_interface_views(
    dump: dict[str, WireGuardInterfaceState],
    interface_sections: list[InterfaceSectionSchema],
    peer_sections: list[PeerSectionSchema],
    now: float | None = None,
) -> list[InterfaceView]:
    """
    Join parsed runtime state with config sections, in feed order.

    Interfaces or peers without a config section are still reported: their
    addresses, zones and allowed ips are empty and a peer is named after its
    public key.
    """
    interface_index = _index_interface_sections(interface_sections)
    peer_index = _index_peer_sections(peer_sections)

    views: list[InterfaceView] = []
    for name, state in dump.items():
        section = interface_index.get(name)
        views.append(InterfaceView(
            name=name,
            public_key=state.record.public_key,
            listen_port=state.record.listen_port,
            fwmark=state.record.fwmark,
            addresses=list(section.addresses) if section else [],
            allowed_zones=list(section.allowed_zones) if section else [],
            peers=[
                _build_peer_view(peer, peer_index.get((name, peer.public_key)), now)
                for peer in state.peers
            ],
        ))

    return views
