"""REST clients for the controller's JSON endpoints."""

import json
from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from ..core.logging import get_logger
from ..exceptions import BackendError
from ..models import DeviceModel, SwitchModel

log = get_logger("backend")

SWITCHES_PATH = "/wm/core/controller/switches/json"
DEVICES_PATH = "/wm/device/"


class RestClient:
    """Thin synchronous JSON client bound to the controller REST base URL.

    A caller-supplied httpx.Client is used as-is (tests pass one with a
    MockTransport); otherwise one client is created per request so that
    concurrent sessions never share a connection pool.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8080",
        timeout: float = 5.0,
        client: Optional[httpx.Client] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client

    def _get(self, path: str) -> str:
        url = f"{self.base_url}{path}"
        log.debug("GET %s", url)
        try:
            if self._client is not None:
                response = self._client.get(url)
            else:
                with httpx.Client(timeout=httpx.Timeout(self.timeout)) as client:
                    response = client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise BackendError(
                f"{url} returned HTTP {e.response.status_code}", e.response.text
            ) from e
        except httpx.HTTPError as e:
            raise BackendError(f"Cannot reach {url}: {e}") from e
        return response.text

    def get_json_array(self, path: str) -> list[dict[str, Any]]:
        """GET a path and return its body as a list of JSON objects.

        Raises:
            BackendError: on transport failure, invalid JSON or a body that
                is not an array of objects. The raw body is kept as payload.
        """
        body = self._get(path)
        try:
            data = json.loads(body)
        except json.JSONDecodeError as e:
            raise BackendError(f"Malformed JSON from {path}: {e.msg}", body) from e
        if not isinstance(data, list):
            raise BackendError(
                f"Expected a JSON array from {path}, got {type(data).__name__}", body
            )
        if not all(isinstance(item, dict) for item in data):
            raise BackendError(f"Expected an array of objects from {path}", body)
        return data


class SwitchClient(RestClient):
    """Switches currently connected to the controller."""

    def list_switches(self) -> list[SwitchModel]:
        records = self.get_json_array(SWITCHES_PATH)
        switches = []
        for record in records:
            try:
                switches.append(SwitchModel.model_validate(record))
            except ValidationError as e:
                raise BackendError(
                    f"Malformed switch record: {e.error_count()} invalid field(s)",
                    json.dumps(record),
                ) from e
        return switches


class DeviceInventory(ABC):
    """Source of the devices (hosts) known to the controller."""

    @abstractmethod
    def get_all_devices(self) -> list[DeviceModel]:
        """Return every known device; an empty list when there are none."""


class RestDeviceInventory(RestClient, DeviceInventory):
    """Device inventory read from the device manager REST endpoint."""

    def get_all_devices(self) -> list[DeviceModel]:
        records = self.get_json_array(DEVICES_PATH)
        devices = []
        for record in records:
            try:
                devices.append(DeviceModel.from_rest(record))
            except (ValidationError, KeyError, TypeError, ValueError) as e:
                raise BackendError(
                    f"Malformed device record: {e}", json.dumps(record)
                ) from e
        return devices


class StaticDeviceInventory(DeviceInventory):
    """Fixed in-memory inventory, for embedding and local testing."""

    def __init__(self, devices: Optional[list[DeviceModel]] = None):
        self._devices = list(devices or [])

    def get_all_devices(self) -> list[DeviceModel]:
        return list(self._devices)
