"""Wires accommodation commands and events into the global message bus."""

from apps.accommodations.application.command_handlers import (
    AmendAccommodationBookingCommand,
    AmendAccommodationBookingHandler,
    CancelAccommodationBookingCommand,
    CancelAccommodationBookingHandler,
    CreateAccommodationBookingCommand,
    CreateAccommodationBookingHandler,
    UpdatePaymentStatusCommand,
    UpdatePaymentStatusHandler,
)
from apps.accommodations.application.event_handlers import EVENT_HANDLERS
from apps.accommodations.repository import DjangoAccommodationRepository
from apps.catalog.repository import DjangoCatalogRepository
from shared.application.message_bus import MessageBus, message_bus


def register_handlers(bus: MessageBus = message_bus):
    """Safe to call more than once (AppConfig.ready may run twice in tests)"""
    booking_repo = DjangoAccommodationRepository()
    catalog_repo = DjangoCatalogRepository()

    command_handlers = {
        CreateAccommodationBookingCommand: CreateAccommodationBookingHandler(booking_repo, catalog_repo).handle,
        AmendAccommodationBookingCommand: AmendAccommodationBookingHandler(booking_repo, catalog_repo).handle,
        UpdatePaymentStatusCommand: UpdatePaymentStatusHandler(booking_repo).handle,
        CancelAccommodationBookingCommand: CancelAccommodationBookingHandler(booking_repo).handle,
    }
    for command_type, handler in command_handlers.items():
        if not bus.has_command_handler(command_type):
            bus.register_command_handler(command_type, handler)

    for event_type, handlers in EVENT_HANDLERS.items():
        for handler in handlers:
            bus.register_event_handler(event_type, handler)
