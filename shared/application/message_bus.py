"""
Message Bus

Central hub for routing commands and events to their handlers.
Views dispatch commands here; the unit of work publishes events here
after commit.
"""

from typing import Dict, List, Callable, Type, Any
import logging

from shared.domain.base import DomainEvent

logger = logging.getLogger(__name__)


class MessageBus:
    """
    Message bus for commands and events

    Commands: One handler per command (1:1)
    Events: Multiple handlers per event (1:N)
    """

    def __init__(self):
        self._event_handlers: Dict[Type[DomainEvent], List[Callable]] = {}
        self._command_handlers: Dict[Type, Callable] = {}

    def register_event_handler(
        self,
        event_type: Type[DomainEvent],
        handler: Callable[[DomainEvent], None]
    ):
        """Register an event handler; registering the same handler twice is a no-op"""
        handlers = self._event_handlers.setdefault(event_type, [])
        if handler not in handlers:
            handlers.append(handler)
            logger.debug(f"Registered event handler for {event_type.__name__}")

    def register_command_handler(
        self,
        command_type: Type,
        handler: Callable[[Any], Any]
    ):
        """
        Register a command handler

        Only one handler can be registered per command type.
        """
        if command_type in self._command_handlers:
            raise ValueError(
                f"Handler for {command_type.__name__} is already registered. "
                "Commands can have only one handler."
            )
        self._command_handlers[command_type] = handler
        logger.debug(f"Registered command handler for {command_type.__name__}")

    def has_command_handler(self, command_type: Type) -> bool:
        return command_type in self._command_handlers

    def handle_command(self, command: Any) -> Any:
        """
        Handle a command

        Returns the result from the command handler. Domain errors raised
        by the handler propagate unchanged.
        """
        command_type = type(command)
        handler = self._command_handlers.get(command_type)

        if not handler:
            raise LookupError(
                f"No handler registered for command {command_type.__name__}"
            )

        logger.info(f"Handling command: {command_type.__name__}")
        try:
            return handler(command)
        except Exception as e:
            logger.info(f"Command {command_type.__name__} failed: {e.__class__.__name__}: {e}")
            raise

    def publish_events(self, events: List[DomainEvent]):
        """
        Publish domain events

        All registered handlers for each event type will be called.
        Errors in handlers are logged but don't stop other handlers.
        """
        for event in events:
            event_type = type(event)
            handlers = self._event_handlers.get(event_type, [])

            if not handlers:
                logger.debug(f"No handlers registered for event {event_type.__name__}")
                continue

            for handler in handlers:
                try:
                    handler(event)
                except Exception as e:
                    logger.error(
                        f"Error in event handler {getattr(handler, '__name__', handler)} "
                        f"for event {event_type.__name__}: {e}",
                        exc_info=True
                    )


# Global message bus instance
message_bus = MessageBus()
