import subprocess
from wgstatus.common.errors import MalformedRecordError, StatusSourceError
from wgstatus.common.expression import parse_keepalive_expression, parse_none_expression, parse_off_expression
from wgstatus.common.logger import get_logger
from wgstatus.common.utils import ns_wrap, sudo_call_output
from wgstatus.models.device import WireGuardInterfaceRecord, WireGuardInterfaceState, WireGuardPeerRecord


logger = get_logger("wireguard")

# <ifname> <private-key> <public-key> <listen-port> <fwmark>
INTERFACE_FIELD_COUNT = 5
# <ifname> <public-key> <preshared-key> <endpoint> <allowed-ips> <latest-handshake> <rx> <tx> <keepalive>
PEER_FIELD_COUNT = 9


def _parse_int(line_index: int, line: str, value: str, field_name: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise MalformedRecordError(line_index, line, f"{field_name} is not a number")


def _parse_interface_line(line_index: int, line: str, parts: list[str]):
    if len(parts) < INTERFACE_FIELD_COUNT:
        raise MalformedRecordError(line_index, line, f"interface line needs {INTERFACE_FIELD_COUNT} fields, got {len(parts)}")

    # parts[1] is the private key, it is never kept
    return WireGuardInterfaceRecord(
        name=parts[0],
        public_key=parts[2],
        listen_port=_parse_int(line_index, line, parts[3], "listen port"),
        fwmark=parse_off_expression(parts[4]),
    )


def _parse_peer_line(line_index: int, line: str, parts: list[str]):
    if len(parts) < PEER_FIELD_COUNT:
        raise MalformedRecordError(line_index, line, f"peer line needs {PEER_FIELD_COUNT} fields, got {len(parts)}")

    try:
        keepalive = parse_keepalive_expression(parts[8])
    except ValueError:
        raise MalformedRecordError(line_index, line, "persistent keepalive is neither a number nor 'off'")

    return WireGuardPeerRecord(
        interface=parts[0],
        public_key=parts[1],
        has_preshared_key=parse_none_expression(parts[2]) is not None,
        endpoint=parse_none_expression(parts[3]),
        latest_handshake=_parse_int(line_index, line, parts[5], "latest handshake"),
        rx=_parse_int(line_index, line, parts[6], "rx bytes"),
        tx=_parse_int(line_index, line, parts[7], "tx bytes"),
        keepalive=keepalive,
    )


def parse_wireguard_dump(raw: str, tolerant: bool = False) -> dict[str, WireGuardInterfaceState]:
    """
    Parse the output of `wg show all dump`.

    The first line seen for an interface name describes the interface itself,
    every later line with the same name is one of its peers. The returned dict
    keeps the order in which interfaces first appeared in the feed.

    A malformed line raises MalformedRecordError and nothing is returned. With
    tolerant=True the line is logged and skipped instead.
    """
    state_map: dict[str, WireGuardInterfaceState] = {}
    if not raw.strip():
        return state_map

    lines = raw.split('\n')
    if lines[-1] == '':
        # final line terminator
        lines.pop()

    for line_index, line in enumerate(lines):
        parts = line.split('\t')
        try:
            if not parts[0]:
                raise MalformedRecordError(line_index, line, "missing interface name")

            if parts[0] not in state_map:
                record = _parse_interface_line(line_index, line, parts)
                state_map[record.name] = WireGuardInterfaceState(record=record)
            else:
                state_map[parts[0]].peers.append(_parse_peer_line(line_index, line, parts))
        except MalformedRecordError as e:
            if not tolerant:
                raise

            logger.warning(f"skipping line: {e}")

    return state_map


def dump_all_wireguard_state(namespace: str = "") -> str:
    try:
        return sudo_call_output(ns_wrap(namespace, ["wg", "show", "all", "dump"]))
    except (subprocess.CalledProcessError, OSError) as e:
        raise StatusSourceError(f"wg show all dump failed in namespace '{namespace}': {e}") from e
