import pytest
import requests

from measurement_export.client import DapClient
from measurement_export.models import Device, Timeline


class FakeResponse:
    def __init__(self, body, status_code=200):
        self._body = body
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def json(self):
        if isinstance(self._body, Exception):
            raise self._body
        return self._body


class FakeSession:
    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []
        self.verify = True
        self.closed = False

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        return self.responses.pop(0)

    def close(self):
        self.closed = True


def _client(*responses, **kwargs):
    session = FakeSession(*responses)
    return DapClient("https://dap.test/", "secret", session=session, **kwargs), session


def test_tls_verification_disabled_by_default():
    _, session = _client()
    assert session.verify is False


def test_tls_verification_can_be_enabled():
    _, session = _client(verify=True)
    assert session.verify is True


def test_devices_for_profile():
    client, session = _client(FakeResponse({
        "devices": [{"id": 1, "custom_id": "PZ1", "parameter_ids": [3, 4], "extra": "ignored"}],
    }))

    devices = client.devices_for_profile(42)

    assert devices == [Device(id=1, custom_id="PZ1", parameter_ids=[3, 4])]
    assert session.calls == [{
        "url": "https://dap.test/api/v1/devices",
        "params": {"profile_id": 42, "private_token": "secret"},
        "timeout": None,
    }]


def test_devices_by_aggregation_joins_ids():
    client, session = _client(FakeResponse({"devices": []}))
    assert client.devices([5, 6]) == []
    assert session.calls[0]["params"] == {"device_aggregation_id": "5,6", "private_token": "secret"}


def test_missing_list_key_is_none():
    client, _ = _client(FakeResponse({}))
    assert client.devices_for_profile(1) is None


def test_parameters_batched_in_one_call():
    client, session = _client(FakeResponse({"parameters": [
        {"id": 3, "measurement_type_name": "Temperatura"},
        {"id": 4, "measurement_type_name": "Ciśnienie porowe"},
    ]}))

    params = client.parameters([3, 4])

    assert [p.measurement_type_name for p in params] == ["Temperatura", "Ciśnienie porowe"]
    assert len(session.calls) == 1
    assert session.calls[0]["url"].endswith("/api/v1/parameters")
    assert session.calls[0]["params"]["id"] == "3,4"


def test_timeline_takes_first_and_omits_missing_scenario():
    client, session = _client(FakeResponse({"timelines": [{"id": 7}, {"id": 8}]}))

    assert client.timeline("ctx", None, 3) == Timeline(id=7)
    assert session.calls[0]["params"] == {
        "parameter_id": 3, "context_id": "ctx", "private_token": "secret",
    }


def test_timeline_with_scenario():
    client, session = _client(FakeResponse({"timelines": [{"id": 7}]}))
    client.timeline("ctx", 0, 3)
    assert session.calls[0]["params"]["scenario_id"] == 0


@pytest.mark.parametrize("body", [{"timelines": []}, {"timelines": None}, {}])
def test_timeline_none_when_empty(body):
    client, _ = _client(FakeResponse(body))
    assert client.timeline("ctx", None, 3) is None


def test_measurements_window_params():
    body = {"measurements": [{"value": 1.5, "timestamp": "2023-01-01T00:00:00Z"}]}
    client, session = _client(FakeResponse(body), FakeResponse(body), timeout=3.0)

    client.measurements(9)
    client.measurements(9, "2023-01-01", "2023-02-01")

    assert session.calls[0]["params"] == {"timeline_id": 9, "private_token": "secret"}
    assert session.calls[1]["params"] == {
        "timeline_id": 9,
        "time_from": "2023-01-01",
        "time_to": "2023-02-01",
        "private_token": "secret",
    }
    assert session.calls[1]["timeout"] == 3.0


def test_measurement_value_kept_as_sent():
    client, _ = _client(FakeResponse({"measurements": [
        {"value": 10, "timestamp": "2023-01-01T00:00:00Z"},
        {"value": "10.50", "timestamp": "2023-01-01T00:01:00Z"},
    ]}))
    values = [m.value for m in client.measurements(1)]
    assert values == [10, "10.50"]


def test_http_error_propagates():
    client, _ = _client(FakeResponse({}, status_code=500))
    with pytest.raises(requests.HTTPError):
        client.devices_for_profile(1)


def test_bad_json_propagates():
    client, _ = _client(FakeResponse(ValueError("Expecting value")))
    with pytest.raises(ValueError):
        client.parameters([1])


def test_context_manager_closes_session():
    client, session = _client()
    with client:
        pass
    assert session.closed
