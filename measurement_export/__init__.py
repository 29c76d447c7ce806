"""
Export paired temperature / pore-pressure measurements from the DAP
measurement API into per-device CSV files.
"""

from .client import DapClient
from .config import Settings
from .exceptions import ConfigError, ExportError
from .fetcher import ExportReport, MeasurementFetcher, get, select_param_of_type
from .models import Device, Measurement, Parameter, Timeline
from .writer import build_row, to_unix_timestamp, write_measurements


__all__ = [
    # pipeline
    "get",
    "MeasurementFetcher",
    "ExportReport",
    "select_param_of_type",

    # upstream API
    "DapClient",
    "Device",
    "Parameter",
    "Timeline",
    "Measurement",

    # csv output
    "build_row",
    "to_unix_timestamp",
    "write_measurements",

    # configuration / errors
    "Settings",
    "ExportError",
    "ConfigError",
]
