from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

MeasurementValue = Union[float, int, bool]


@dataclass(frozen=True)
class Measurement:
    value: MeasurementValue
    unit: str

    def as_dict(self) -> dict[str, Any]:
        return {"value": self.value, "unit": self.unit}


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


@dataclass(frozen=True)
class SensorRecord:
    """
    Decoded snapshot of one frame.

    Records are immutable: every mapping is wrapped in a read-only proxy, and
    each poll cycle produces new records instead of updating old ones.

    Attributes:
        frame_index: The 1-based frame (or CAN node) the record was read from.
        device_type: Controller model the frame was decoded as.
        outputs: Output name -> on/off.
        speed_levels: Speed-level name -> level, ``None`` when inactive.
        analog_inputs: Input name -> measurement.
        thermal_counters: Heat-meter value name -> measurement.
        thermal_counter_active: Heat-meter channel -> active flag.
        sections: CMI section name -> entry key -> measurement.
        source: ``"blnet"`` or ``"cmi"``.
        received_at: When the frame was decoded.
    """
    frame_index: int
    device_type: str
    outputs: Mapping[str, bool] = field(default_factory=dict)
    speed_levels: Mapping[str, Optional[int]] = field(default_factory=dict)
    analog_inputs: Mapping[str, Measurement] = field(default_factory=dict)
    thermal_counters: Mapping[str, Measurement] = field(default_factory=dict)
    thermal_counter_active: Mapping[str, bool] = field(default_factory=dict)
    sections: Mapping[str, Mapping[str, Measurement]] = field(default_factory=dict)
    source: str = "blnet"
    received_at: dt.datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        for name in ("outputs", "speed_levels", "analog_inputs", "thermal_counters", "thermal_counter_active"):
            object.__setattr__(self, name, MappingProxyType(dict(getattr(self, name))))
        frozen_sections = {key: MappingProxyType(dict(entries)) for key, entries in self.sections.items()}
        object.__setattr__(self, "sections", MappingProxyType(frozen_sections))

    def as_dict(self) -> dict[str, Any]:
        return {
            "frame_index": self.frame_index,
            "device_type": self.device_type,
            "source": self.source,
            "received_at": self.received_at.isoformat(),
            "outputs": dict(self.outputs),
            "speed_levels": dict(self.speed_levels),
            "analog_inputs": {key: m.as_dict() for key, m in self.analog_inputs.items()},
            "thermal_counters": {key: m.as_dict() for key, m in self.thermal_counters.items()},
            "thermal_counter_active": dict(self.thermal_counter_active),
            "sections": {
                name: {key: m.as_dict() for key, m in entries.items()}
                for name, entries in self.sections.items()
            },
        }
