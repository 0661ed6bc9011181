"""Event bus for declared, per-store publish/subscribe channels."""

from .bus import EventBus, Subscriber

__all__ = ["EventBus", "Subscriber"]
