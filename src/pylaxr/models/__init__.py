"""Data models for pylaxr."""

from pylaxr.models._base import LaxrBaseModel
from pylaxr.models.consumer import Axis, ConsumerConfig, ConsumerState, EulerAngles
from pylaxr.models.message import TopicMessage
from pylaxr.models.sensor import SensorRecord
from pylaxr.models.tracking import ChangeKind, TrackedEntity, TrackingChange, TrackingState

__all__ = [
    "Axis",
    "ChangeKind",
    "ConsumerConfig",
    "ConsumerState",
    "EulerAngles",
    "LaxrBaseModel",
    "SensorRecord",
    "TopicMessage",
    "TrackedEntity",
    "TrackingChange",
    "TrackingState",
]
