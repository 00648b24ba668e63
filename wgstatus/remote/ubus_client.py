from typing import Any
import requests
from pydantic import BaseModel, ValidationError
from wgstatus.common.errors import StatusSourceError
from wgstatus.common.logger import get_logger
from wgstatus.config.settings import settings


logger = get_logger("ubus")


class UbusErrorSchema(BaseModel):
    code: int
    message: str


class UbusResponseSchema(BaseModel):
    jsonrpc: str
    id: int
    result: list[Any] | None = None
    error: UbusErrorSchema | None = None


class WgInstancesSchema(BaseModel):
    result: str = ""


class UciValuesSchema(BaseModel):
    values: dict[str, dict[str, Any]] = {}


class UbusClient:
    def __init__(self, url: str | None = None, session: str | None = None, timeout: float | None = None):
        self.url = url or settings.UBUS_URL
        self.session = session or settings.UBUS_SESSION
        self.timeout = timeout if timeout is not None else settings.UBUS_TIMEOUT
        self.request_id = 0

    def call(self, obj: str, method: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        self.request_id += 1
        payload = {
            "jsonrpc": "2.0",
            "id": self.request_id,
            "method": "call",
            "params": [self.session, obj, method, params or {}],
        }

        try:
            r = requests.post(self.url, json=payload, timeout=self.timeout)
            r.raise_for_status()
            response = UbusResponseSchema.model_validate_json(r.content)
        except requests.RequestException as e:
            raise StatusSourceError(f"ubus call {obj}.{method} failed: {e}") from e
        except ValidationError as e:
            raise StatusSourceError(f"ubus call {obj}.{method} returned an invalid response: {e}") from e

        if response.error is not None:
            raise StatusSourceError(f"ubus call {obj}.{method} failed: {response.error.message} ({response.error.code})")
        if not response.result:
            raise StatusSourceError(f"ubus call {obj}.{method} returned an empty result")

        status = response.result[0]
        if status != 0:
            raise StatusSourceError(f"ubus call {obj}.{method} returned status {status}")

        logger.debug(f"ubus call {obj}.{method} ok")
        return response.result[1] if len(response.result) > 1 else {}

    def get_wg_instances(self) -> str:
        data = self.call("status.wireguard", "get_wg_instances")
        return WgInstancesSchema.model_validate(data).result

    def get_network_sections(self) -> list[dict[str, Any]]:
        data = self.call("uci", "get", {"config": "network"})
        values = UciValuesSchema.model_validate(data).values
        return sorted(values.values(), key=lambda section: section.get(".index", 0))
