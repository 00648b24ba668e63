from dataclasses import dataclass, field


@dataclass(frozen=True)
class WireGuardInterfaceRecord:
    name: str
    public_key: str
    listen_port: int
    fwmark: str | None


@dataclass(frozen=True)
class WireGuardPeerRecord:
    interface: str
    public_key: str
    has_preshared_key: bool
    endpoint: str | None
    latest_handshake: int
    rx: int
    tx: int
    keepalive: int | None


@dataclass
class WireGuardInterfaceState:
    record: WireGuardInterfaceRecord
    peers: list[WireGuardPeerRecord] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.record.name


@dataclass(frozen=True)
class PeerView:
    name: str
    public_key: str
    endpoint: str | None
    allowed_ips: list[str]
    latest_handshake: str
    transfer_rx: str
    transfer_tx: str
    persistent_keepalive: str | None


@dataclass(frozen=True)
class InterfaceView:
    name: str
    public_key: str
    listen_port: int
    fwmark: str | None
    addresses: list[str]
    allowed_zones: list[str]
    peers: list[PeerView]
