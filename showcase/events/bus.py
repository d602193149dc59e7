"""
Simple in-app event bus for side effects that must not affect the caller.

Example:
    # Register a handler
    @event_bus.on('inquiry.created')
    async def notify_sales(data: dict):
        ...

    # Emit an event
    await event_bus.emit('inquiry.created', {'inquiry': {...}, 'vehicle': {...}})
"""
from typing import Callable, Dict, List, Any
import inspect
import logging

logger = logging.getLogger(__name__)


class EventBus:
    """
    In-memory publish-subscribe bus.

    Handlers run sequentially in registration order. A failing handler is
    logged and never propagates to the emitter.
    """

    def __init__(self):
        self._handlers: Dict[str, List[Callable]] = {}

    def on(self, event_name: str):
        """
        Decorator to register an event handler.

        Example:
            @event_bus.on('inquiry.created')
            async def handle_inquiry(data: dict):
                ...
        """
        def decorator(handler: Callable):
            self.register(event_name, handler)
            return handler
        return decorator

    def register(self, event_name: str, handler: Callable):
        """Register an event handler programmatically (alternative to decorator)."""
        self._handlers.setdefault(event_name, []).append(handler)
        logger.debug(
            f"Registered handler {handler.__name__} for event '{event_name}'")

    async def emit(self, event_name: str, data: Any = None):
        """
        Emit an event to all registered handlers.

        Args:
            event_name: Name of the event to emit
            data: Data to pass to handlers (typically a dict)
        """
        handlers = list(self._handlers.get(event_name, []))
        if not handlers:
            logger.debug(f"No handlers registered for event '{event_name}'")
            return

        logger.debug(
            f"Emitting event '{event_name}' to {len(handlers)} handler(s)")

        for handler in handlers:
            try:
                if inspect.iscoroutinefunction(handler):
                    await handler(data)
                else:
                    handler(data)
            except Exception as e:
                logger.error(
                    f"Error in handler {handler.__name__} for event '{event_name}': {e}",
                    exc_info=True
                )


# Global event bus instance
event_bus = EventBus()
