"""
Payment Record Adapter

Turns a raw "payment submitted" input into the fields a booking stores.
The proof reference is an opaque storage key; it is checked for presence
only, never opened.
"""

import re
from dataclasses import dataclass

from shared.domain.base import ValueObject

from .errors import ValidationError

UPI_HANDLE_RE = re.compile(r'^[\w.\-]{2,256}@[A-Za-z][A-Za-z0-9.\-]{1,63}$')

MAX_TRANSACTION_ID_LENGTH = 100
MAX_PROOF_REF_LENGTH = 255


@dataclass(frozen=True)
class PaymentSubmission:
    """Payment fields exactly as the client sent them"""
    transaction_id: str | None = None
    proof_ref: str | None = None
    payment_handle: str | None = None

    @property
    def is_blank(self) -> bool:
        """Every field empty or whitespace: nothing was actually submitted"""
        return not any((value or '').strip() for value in (self.transaction_id, self.proof_ref, self.payment_handle))


@dataclass(frozen=True)
class PaymentProof(ValueObject):
    transaction_id: str
    proof_ref: str
    payment_handle: str = ''


def normalize_payment(submission: PaymentSubmission | PaymentProof) -> PaymentProof:
    if isinstance(submission, PaymentProof):
        return submission

    transaction_id = (submission.transaction_id or '').strip()
    proof_ref = (submission.proof_ref or '').strip()
    payment_handle = (submission.payment_handle or '').strip()

    errors = {}
    if not transaction_id:
        errors['transaction_id'] = 'Transaction ID is required'
    elif len(transaction_id) > MAX_TRANSACTION_ID_LENGTH:
        errors['transaction_id'] = f'Transaction ID must be at most {MAX_TRANSACTION_ID_LENGTH} characters'

    if not proof_ref:
        errors['proof_ref'] = 'Payment screenshot is required'
    elif len(proof_ref) > MAX_PROOF_REF_LENGTH:
        errors['proof_ref'] = 'Payment screenshot reference is too long'

    if payment_handle and not UPI_HANDLE_RE.match(payment_handle):
        errors['payment_handle'] = 'Enter a valid UPI ID (for example name@bank)'

    if errors:
        raise ValidationError(next(iter(errors.values())), details=errors)

    return PaymentProof(
        transaction_id=transaction_id,
        proof_ref=proof_ref,
        payment_handle=payment_handle,
    )
