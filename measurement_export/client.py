"""
DapClient: thin synchronous wrapper over the measurement API (/api/v1).

One ``requests.Session`` per client, reused for every call. The caller
owns the client and closes it (or uses it as a context manager).
HTTP errors and malformed bodies are raised, never swallowed.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional

import requests
import urllib3

from .models import (
    Device,
    DeviceListOut,
    Measurement,
    MeasurementListOut,
    Parameter,
    ParameterListOut,
    Timeline,
    TimelineListOut,
)

logger = logging.getLogger(__name__)


def _join_ids(ids: Iterable[Any]) -> str:
    return ",".join(str(i) for i in ids)


class DapClient:
    def __init__(
        self,
        base_url: str,
        private_token: str,
        *,
        verify: bool = False,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.private_token = private_token
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.verify = verify
        if not verify:
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    def __enter__(self) -> "DapClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    # -------------------------------------------------------------------
    # LOOKUPS
    # -------------------------------------------------------------------
    def devices_for_profile(self, profile_id: Any) -> Optional[List[Device]]:
        body = self._get("/api/v1/devices", {"profile_id": profile_id})
        return DeviceListOut.model_validate(body).devices

    def devices(self, ids: Iterable[Any]) -> Optional[List[Device]]:
        """Devices belonging to the given device aggregations."""
        body = self._get("/api/v1/devices", {"device_aggregation_id": _join_ids(ids)})
        return DeviceListOut.model_validate(body).devices

    def parameters(self, parameter_ids: Iterable[Any]) -> Optional[List[Parameter]]:
        body = self._get("/api/v1/parameters", {"id": _join_ids(parameter_ids)})
        return ParameterListOut.model_validate(body).parameters

    def timeline(
        self, context_id: Any, scenario_id: Any, parameter_id: Any
    ) -> Optional[Timeline]:
        """First timeline for the (context, scenario, parameter) triple, or None."""
        params = {"parameter_id": parameter_id, "context_id": context_id}
        if scenario_id is not None:
            params["scenario_id"] = scenario_id
        timelines = TimelineListOut.model_validate(
            self._get("/api/v1/timelines", params)
        ).timelines
        return timelines[0] if timelines else None

    def measurements(
        self,
        timeline_id: Any,
        time_from: Any = None,
        time_to: Any = None,
    ) -> Optional[List[Measurement]]:
        params: Dict[str, Any] = {"timeline_id": timeline_id}
        if time_from is not None:
            params["time_from"] = time_from
        if time_to is not None:
            params["time_to"] = time_to
        body = self._get("/api/v1/measurements", params)
        return MeasurementListOut.model_validate(body).measurements

    # -------------------------------------------------------------------
    # INTERNAL
    # -------------------------------------------------------------------
    def _get(self, path: str, params: Dict[str, Any]) -> Any:
        query = {**params, "private_token": self.private_token}
        logger.debug("GET %s %s", path, params)
        r = self.session.get(f"{self.base_url}{path}", params=query, timeout=self.timeout)
        r.raise_for_status()
        return r.json()
