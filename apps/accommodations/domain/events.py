"""
Accommodation Domain Events

Published after the unit of work commits. Nothing in the engine sends
email; a notifier can subscribe to these instead.
"""

from dataclasses import dataclass
from uuid import UUID

from shared.domain.base import DomainEvent
from shared.domain.value_objects import Money


@dataclass
class AccommodationBookingCreated(DomainEvent):
    booking_id: UUID
    user_id: int
    total_price: Money

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update(
            booking_id=str(self.booking_id),
            user_id=self.user_id,
            total_price=str(self.total_price.amount),
        )
        return data


@dataclass
class AccommodationBookingAmended(DomainEvent):
    """
    Event: a booking was edited

    additional_amount is relative to the total right before this edit;
    first_amendment is True when the original payment snapshot was taken.
    """
    booking_id: UUID
    user_id: int
    previous_total: Money
    new_total: Money
    additional_amount: Money
    first_amendment: bool

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update(
            booking_id=str(self.booking_id),
            user_id=self.user_id,
            previous_total=str(self.previous_total.amount),
            new_total=str(self.new_total.amount),
            additional_amount=str(self.additional_amount.amount),
            first_amendment=self.first_amendment,
        )
        return data


@dataclass
class AccommodationPaymentStatusChanged(DomainEvent):
    booking_id: UUID
    old_status: str
    new_status: str
    changed_by: int | None

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update(
            booking_id=str(self.booking_id),
            old_status=self.old_status,
            new_status=self.new_status,
            changed_by=self.changed_by,
        )
        return data


@dataclass
class AccommodationBookingCancelled(DomainEvent):
    booking_id: UUID
    user_id: int
    cancelled_by: int | None
    reason: str

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update(
            booking_id=str(self.booking_id),
            user_id=self.user_id,
            cancelled_by=self.cancelled_by,
            reason=self.reason,
        )
        return data
