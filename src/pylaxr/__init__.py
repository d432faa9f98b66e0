"""pylaxr - MQTT sensor telemetry to smoothly animated gauge dials."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pylaxr")
except PackageNotFoundError:
    __version__ = "0+local"
from pylaxr.client import LaxrClient
from pylaxr.config import LaxrConfig
from pylaxr.consumer import Actuator, GaugeConsumer
from pylaxr.decoder import decode
from pylaxr.exceptions import (
    ConfigurationError,
    DecodeError,
    DecodeFailure,
    DispatchError,
    LaxrError,
)
from pylaxr.mapping import angular_distance, map_to_angle, shortest_arc, wrap_degrees
from pylaxr.models import (
    Axis,
    ChangeKind,
    ConsumerConfig,
    ConsumerState,
    SensorRecord,
    TopicMessage,
    TrackedEntity,
    TrackingChange,
    TrackingState,
)
from pylaxr.router import TopicRouter
from pylaxr.smoothing import advance
from pylaxr.tracking import ChangeReporter

__all__ = [
    "__version__",
    "Actuator",
    "Axis",
    "ChangeKind",
    "ChangeReporter",
    "ConfigurationError",
    "ConsumerConfig",
    "ConsumerState",
    "DecodeError",
    "DecodeFailure",
    "DispatchError",
    "GaugeConsumer",
    "LaxrClient",
    "LaxrConfig",
    "LaxrError",
    "SensorRecord",
    "TopicMessage",
    "TopicRouter",
    "TrackedEntity",
    "TrackingChange",
    "TrackingState",
    "advance",
    "angular_distance",
    "decode",
    "map_to_angle",
    "shortest_arc",
    "wrap_degrees",
]
