from typing import Any, List, Optional, Union

from pydantic import BaseModel

Id = Union[int, str]


# -------------------------------------------------------------------
# Pydantic MODELS (upstream /api/v1 payloads)
# -------------------------------------------------------------------
class Device(BaseModel):
    id: Id
    custom_id: Union[str, int]
    parameter_ids: List[Id] = []


class Parameter(BaseModel):
    id: Id
    measurement_type_name: Optional[str] = None


class Timeline(BaseModel):
    id: Id


class Measurement(BaseModel):
    value: Any = None  # kept as sent, rendered verbatim into the CSV
    timestamp: str


# -------------------------------------------------------------------
# Response envelopes. A null or missing list means "no data".
# -------------------------------------------------------------------
class DeviceListOut(BaseModel):
    devices: Optional[List[Device]] = None


class ParameterListOut(BaseModel):
    parameters: Optional[List[Parameter]] = None


class TimelineListOut(BaseModel):
    timelines: Optional[List[Timeline]] = None


class MeasurementListOut(BaseModel):
    measurements: Optional[List[Measurement]] = None
