import os
from dotenv import load_dotenv


load_dotenv()


def _getbool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    # network namespace to run `wg show all dump` in, empty for the current one
    NAMESPACE = os.getenv("WGSTATUS_NAMESPACE", "")
    UCI_NETWORK_PATH = os.getenv("WGSTATUS_UCI_NETWORK_PATH", "/etc/config/network")

    UBUS_URL = os.getenv("WGSTATUS_UBUS_URL", "http://192.168.1.1/ubus")
    UBUS_SESSION = os.getenv("WGSTATUS_UBUS_SESSION", "0" * 32)
    UBUS_TIMEOUT = float(os.getenv("WGSTATUS_UBUS_TIMEOUT", "10"))

    # skip malformed dump lines instead of failing the whole feed
    TOLERANT = _getbool("WGSTATUS_TOLERANT", "false")

    LOG_LEVEL = os.getenv("WGSTATUS_LOG_LEVEL", "INFO").upper()


settings = Settings()
