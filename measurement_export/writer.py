import logging
import os
from pathlib import Path
from typing import Any, List, Sequence

import pandas as pd

from .models import Device, Measurement

logger = logging.getLogger(__name__)


def to_unix_timestamp(date_str: str) -> int:
    """Parse a measurement date string into integer epoch seconds (naive = UTC)."""
    ts = pd.Timestamp(date_str)
    if ts is pd.NaT:
        raise ValueError(f"Unparseable timestamp: {date_str!r}")
    return int(ts.timestamp())


def _field(value: Any) -> str:
    """Render a JSON value the way the downstream reader expects it.

    null -> empty, booleans lower-case, floats always carry a fractional
    part, also in exponent form (1e-05 -> 1.0e-05).
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        text = repr(value)
        mantissa, sep, exponent = text.partition("e")
        if sep and "." not in mantissa:
            return f"{mantissa}.0e{exponent}"
        return text
    return str(value)


def build_row(
    device: Device,
    temperature: Measurement,
    pressure: Measurement,
    scenario: bool,
) -> List[str]:
    # Scenario and measurement files carry their columns in a different order:
    #   measurement: 0,0,0,0,T,P,ts,custom_id
    #   scenario:    0,0,0,T,P,ts,0,custom_id
    values = [
        _field(temperature.value),
        _field(pressure.value),
        str(to_unix_timestamp(temperature.timestamp)),
    ]
    if scenario:
        return ["0", "0", "0", *values, "0", str(device.custom_id)]
    return ["0", "0", "0", "0", *values, str(device.custom_id)]


def csv_path(device: Device, file_name_prefix: str, working_dir: str) -> Path:
    if not working_dir.endswith("/"):
        working_dir += "/"
    return Path(f"{working_dir}{file_name_prefix}{device.custom_id}.csv")


def write_measurements(
    device: Device,
    pressure: Sequence[Measurement],
    temperature: Sequence[Measurement],
    file_name_prefix: str,
    working_dir: str,
    scenario: bool,
) -> Path:
    """Write one row per index of the paired sequences, truncating any old file.

    No header, no quoting. The timestamp column comes from the temperature series.
    """
    os.makedirs(working_dir, exist_ok=True)
    path = csv_path(device, file_name_prefix, working_dir)
    logger.info("Writing file %s", path)

    with open(path, "w", newline="", encoding="utf-8") as f:
        for t, p in zip(temperature, pressure):
            f.write(",".join(build_row(device, t, p, scenario)) + "\n")
    return path
