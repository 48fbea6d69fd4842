"""Core framework components for SKIDODGE."""

from .state import State, StateMachine
from .events import EventBus, Event, EventType
from .errors import SkidodgeError, ResourceUnavailable, InvalidConfiguration
from .scheduling import FrameScheduler, FrameQueue, TextSink

__all__ = [
    "FrameScheduler",
    "FrameQueue",
    "TextSink",
    "State",
    "StateMachine",
    "EventBus",
    "Event",
    "EventType",
    "SkidodgeError",
    "ResourceUnavailable",
    "InvalidConfiguration",
]
