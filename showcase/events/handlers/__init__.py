"""
Event handlers for application events.

Import this module at application startup to register all handlers.
"""

# The @event_bus.on() decorators register handlers on import
from showcase.events.handlers import notifications

__all__ = ['notifications']
