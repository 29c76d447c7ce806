"""
Fetch paired temperature / pore-pressure series per device and export CSVs.

For every device of a profile:
  device -> parameters -> (temperature, pressure) parameters
         -> one timeline each -> measurements -> CSV file

Any missing piece of data skips the device; the run moves on to the next
one. Network and decoding failures propagate to the caller.
"""
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, List, Optional, Tuple

from .client import DapClient
from .config import DEFAULT_WORKING_DIR, Settings
from .models import Device, Parameter
from .writer import write_measurements

logger = logging.getLogger(__name__)

TEMPERATURE = "Temperatura"
PORE_PRESSURE = "Ciśnienie porowe"

# Skip reasons
NO_PARAMETERS = "no_parameters"
NO_TEMPERATURE_PARAMETER = "no_temperature_parameter"
NO_PRESSURE_PARAMETER = "no_pressure_parameter"
NO_TEMPERATURE_TIMELINE = "no_temperature_timeline"
NO_PRESSURE_TIMELINE = "no_pressure_timeline"
NO_MEASUREMENTS = "no_measurements"
LENGTH_MISMATCH = "length_mismatch"


@dataclass
class ExportReport:
    written: List[Path] = field(default_factory=list)
    skipped: List[Tuple[str, str]] = field(default_factory=list)  # (custom_id, reason)

    @property
    def written_count(self) -> int:
        return len(self.written)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)


def select_param_of_type(
    parameters: Iterable[Parameter], type_name: str
) -> Optional[Parameter]:
    return next((p for p in parameters if p.measurement_type_name == type_name), None)


class MeasurementFetcher:
    def __init__(self, client: DapClient):
        self.client = client

    def get(
        self,
        context_id: Any,
        scenario_id: Any,
        profile_id: Any,
        time_from: Any = None,
        time_to: Any = None,
        file_name_prefix: str = "",
        working_dir: str = DEFAULT_WORKING_DIR,
    ) -> ExportReport:
        report = ExportReport()
        scenario = scenario_id is not None

        for device in self.client.devices_for_profile(profile_id) or []:
            path_or_reason = self._export_device(
                device, context_id, scenario_id, time_from, time_to,
                file_name_prefix, working_dir, scenario,
            )
            if isinstance(path_or_reason, Path):
                report.written.append(path_or_reason)
            else:
                logger.info("Skipping device %s: %s", device.custom_id, path_or_reason)
                report.skipped.append((str(device.custom_id), path_or_reason))

        logger.info(
            "Export finished: %d written, %d skipped",
            report.written_count, report.skipped_count,
        )
        return report

    def _export_device(
        self,
        device: Device,
        context_id: Any,
        scenario_id: Any,
        time_from: Any,
        time_to: Any,
        file_name_prefix: str,
        working_dir: str,
        scenario: bool,
    ):
        """Return the written CSV path, or the reason the device was skipped."""
        if not device.parameter_ids:
            return NO_PARAMETERS
        parameters = self.client.parameters(device.parameter_ids) or []

        temp_param = select_param_of_type(parameters, TEMPERATURE)
        if temp_param is None:
            return NO_TEMPERATURE_PARAMETER
        press_param = select_param_of_type(parameters, PORE_PRESSURE)
        if press_param is None:
            return NO_PRESSURE_PARAMETER

        temp_tl = self.client.timeline(context_id, scenario_id, temp_param.id)
        if temp_tl is None:
            return NO_TEMPERATURE_TIMELINE
        press_tl = self.client.timeline(context_id, scenario_id, press_param.id)
        if press_tl is None:
            return NO_PRESSURE_TIMELINE

        temp_measurements = self.client.measurements(temp_tl.id, time_from, time_to)
        if temp_measurements is None:
            return NO_MEASUREMENTS
        press_measurements = self.client.measurements(press_tl.id, time_from, time_to)
        if press_measurements is None:
            return NO_MEASUREMENTS
        if not temp_measurements or not press_measurements:
            return NO_MEASUREMENTS
        if len(temp_measurements) != len(press_measurements):
            return LENGTH_MISMATCH

        return write_measurements(
            device, press_measurements, temp_measurements,
            file_name_prefix, working_dir, scenario,
        )


def get(
    context_id: Any,
    scenario_id: Any,
    profile_id: Any,
    time_from: Any = None,
    time_to: Any = None,
    file_name_prefix: str = "",
    working_dir: str = DEFAULT_WORKING_DIR,
    settings: Optional[Settings] = None,
) -> ExportReport:
    """One-shot export using settings from the environment."""
    settings = settings or Settings.from_env()
    with DapClient(
        settings.base_url,
        settings.private_token,
        verify=settings.verify_ssl,
        timeout=settings.timeout,
    ) as client:
        return MeasurementFetcher(client).get(
            context_id, scenario_id, profile_id, time_from, time_to,
            file_name_prefix, working_dir,
        )
