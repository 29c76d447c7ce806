import pytest

from fakes import FakeClient, series
from measurement_export.models import Device, Parameter, Timeline


@pytest.fixture
def device():
    return Device(id=1, custom_id="P-01", parameter_ids=[11, 12])


@pytest.fixture
def complete_client(device):
    """One device with both parameters, both timelines and two paired points."""
    return FakeClient(
        devices=[device],
        parameters={
            11: Parameter(id=11, measurement_type_name="Temperatura"),
            12: Parameter(id=12, measurement_type_name="Ciśnienie porowe"),
        },
        timelines={11: Timeline(id=101), 12: Timeline(id=102)},
        measurements={101: series(10, 11), 102: series(20, 21)},
    )
