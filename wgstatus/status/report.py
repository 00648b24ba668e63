from dataclasses import asdict
from typing import Any
from wgstatus.common.logger import get_logger
from wgstatus.config.settings import Settings, settings as default_settings
from wgstatus.config.uci import load_uci_config
from wgstatus.device.wireguard import dump_all_wireguard_state, parse_wireguard_dump
from wgstatus.models.config import split_network_sections
from wgstatus.models.device import InterfaceView
from wgstatus.remote.ubus_client import UbusClient
from wgstatus.status.correlator import build_interface_views


logger = get_logger("report")


def collect_status(raw_dump: str, sections: list[dict[str, Any]], tolerant: bool = False, now: float | None = None):
    # a malformed dump raises here, before any view is built
    dump = parse_wireguard_dump(raw_dump, tolerant=tolerant)
    interface_sections, peer_sections = split_network_sections(sections)

    views = build_interface_views(dump, interface_sections, peer_sections, now=now)
    logger.info(f"collected status of {len(views)} interfaces, {sum(len(v.peers) for v in views)} peers")
    return views


def collect_local_status(settings: Settings | None = None):
    settings = settings or default_settings

    raw_dump = dump_all_wireguard_state(settings.NAMESPACE)
    sections = load_uci_config(settings.UCI_NETWORK_PATH)
    return collect_status(raw_dump, sections, tolerant=settings.TOLERANT)


def collect_remote_status(client: UbusClient | None = None, settings: Settings | None = None):
    settings = settings or default_settings
    client = client or UbusClient(settings.UBUS_URL, settings.UBUS_SESSION, settings.UBUS_TIMEOUT)

    raw_dump = client.get_wg_instances()
    sections = client.get_network_sections()
    return collect_status(raw_dump, sections, tolerant=settings.TOLERANT)


def view_to_dict(view: InterfaceView) -> dict[str, Any]:
    return asdict(view)


def views_to_dicts(views: list[InterfaceView]) -> list[dict[str, Any]]:
    return [view_to_dict(view) for view in views]
