"""
Event system for side effects decoupled from request handling.
"""
from showcase.events.bus import event_bus

__all__ = ['event_bus']
