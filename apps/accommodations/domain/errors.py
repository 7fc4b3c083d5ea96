"""
Accommodation Errors

The failure taxonomy of the booking engine. Each error carries a stable
code and HTTP status; the message is safe to show to the user as-is.
"""

from shared.domain.errors import DomainError, StorageUnavailableError

__all__ = [
    'AccommodationError',
    'AuthenticationRequiredError',
    'DuplicateBookingError',
    'BookingNotFoundError',
    'ValidationError',
    'PaymentProofRequiredError',
    'ConcurrentModificationError',
    'StorageUnavailableError',
]


class AccommodationError(DomainError):
    code = 'accommodation_error'


class AuthenticationRequiredError(AccommodationError):
    code = 'authentication_required'
    status_code = 401
    default_message = 'Not authenticated'


class DuplicateBookingError(AccommodationError):
    code = 'duplicate_booking'
    status_code = 409
    default_message = (
        'You already have an active accommodation booking. '
        'You can edit your existing booking instead.'
    )


class BookingNotFoundError(AccommodationError):
    code = 'booking_not_found'
    status_code = 404
    default_message = 'Booking not found or unauthorized'


class ValidationError(AccommodationError):
    code = 'validation_error'
    status_code = 400
    default_message = 'Invalid booking data'


class PaymentProofRequiredError(AccommodationError):
    code = 'payment_proof_required'
    status_code = 400
    default_message = 'This change increases the total. Please submit a payment proof for the additional amount.'


class ConcurrentModificationError(AccommodationError):
    code = 'concurrent_modification'
    status_code = 409
    default_message = 'The booking was changed by another request. Reload it and try again.'
