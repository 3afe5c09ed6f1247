"""
Delivery pipeline: one inbound message to per-recipient rows and events.

Exports:
    - DeliveryPipeline: Orchestrates text and voice sends
    - FanOutChannel: Queue between the pipeline and the realtime gateway
    - SendState / SendTrace: Per-send lifecycle tracking
"""

from .channel import FanOutChannel
from .coordinator import DeliveryPipeline, StagedDelivery
from .state import SendState, SendTrace

__all__ = [
    "DeliveryPipeline",
    "StagedDelivery",
    "FanOutChannel",
    "SendState",
    "SendTrace",
]
