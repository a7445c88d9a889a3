"""Data models for softnet statistics."""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from .exceptions import SerializationError

U32_MAX = 0xFFFFFFFF

# Field order used for JSON output
FIELDS = (
    'processed',
    'dropped',
    'time_squeeze',
    'cpu_collision',
    'received_rps',
    'flow_limit_count',
)
REQUIRED_FIELDS = FIELDS[:4]
OPTIONAL_FIELDS = FIELDS[4:]


@dataclass(frozen=True)
class SoftnetStat:
    """Network data processing statistics for a single CPU.

    processed may exceed the number of frames received when ethernet bonding
    makes the driver re-process frames. received_rps appeared in kernel
    2.6.36 and flow_limit_count in 3.11; on older kernels they are None.
    """
    processed: int  # Frames processed
    dropped: int  # Frames dropped because the backlog queue was full
    time_squeeze: int  # net_rx_action ran out of budget or time with work left
    cpu_collision: int  # Collisions taking the device lock on transmit
    received_rps: Optional[int] = None  # Wakeups via inter-processor interrupt
    flow_limit_count: Optional[int] = None  # Times the RPS flow limit was reached

    def __post_init__(self):
        if self.flow_limit_count is not None and self.received_rps is None:
            raise ValueError("flow_limit_count cannot be set without received_rps")

    def to_dict(self) -> Dict[str, Optional[int]]:
        """Return the JSON mapping of this record, None for absent fields."""
        return {name: getattr(self, name) for name in FIELDS}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'SoftnetStat':
        """Build a record from a mapping produced by to_dict().

        Raises:
            SerializationError: If a required key is missing or a value is not
                an unsigned 32-bit integer
        """
        if not isinstance(data, dict):
            raise SerializationError(f"Expected a JSON object, got {type(data).__name__}")

        values: Dict[str, Optional[int]] = {}
        for name in FIELDS:
            value = data.get(name)
            if value is None:
                if name in REQUIRED_FIELDS:
                    raise SerializationError(f"Missing required field '{name}'")
                values[name] = None
                continue
            # bool is an int subclass but never a counter
            if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= U32_MAX:
                raise SerializationError(f"Field '{name}' is not an unsigned 32-bit integer: {value!r}")
            values[name] = value

        try:
            return cls(**values)
        except ValueError as e:
            raise SerializationError(str(e)) from e
