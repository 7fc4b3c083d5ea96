"""
Common Value Objects

Value objects used across multiple domains:
- Money: Represents monetary amounts as integer minor units with currency
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from shared.domain.base import ValueObject

SUPPORTED_CURRENCIES = ('INR',)

MINOR_UNITS_PER_MAJOR = 100


@dataclass(frozen=True)
class Money(ValueObject):
    """
    Money value object

    Stores the amount in minor units (paise for INR) so that repeated
    additions and subtractions are exact. Decimal is only used at the
    persistence and presentation edges (from_decimal / amount).
    """
    minor: int
    currency: str = 'INR'

    def __post_init__(self):
        if not isinstance(self.minor, int) or isinstance(self.minor, bool):
            raise TypeError("Money is stored as integer minor units")
        if self.minor < 0:
            raise ValueError("Amount cannot be negative")
        if self.currency not in SUPPORTED_CURRENCIES:
            raise ValueError(f"Unsupported currency: {self.currency}")

    @classmethod
    def zero(cls, currency: str = 'INR') -> 'Money':
        return cls(0, currency)

    @classmethod
    def from_decimal(cls, amount, currency: str = 'INR') -> 'Money':
        """Build from a Decimal/str/int major-unit amount, rounding to the nearest paisa"""
        if isinstance(amount, float):
            amount = str(amount)
        value = Decimal(amount).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)
        return cls(int(value * MINOR_UNITS_PER_MAJOR), currency)

    @property
    def amount(self) -> Decimal:
        """Major-unit Decimal with two places"""
        return (Decimal(self.minor) / MINOR_UNITS_PER_MAJOR).quantize(Decimal('0.01'))

    def _check_currency(self, other: 'Money'):
        if not isinstance(other, Money):
            raise TypeError("Can only combine Money with Money")
        if self.currency != other.currency:
            raise ValueError(f"Cannot combine different currencies: {self.currency} and {other.currency}")

    def __add__(self, other: 'Money') -> 'Money':
        """Add two money objects"""
        self._check_currency(other)
        return Money(self.minor + other.minor, self.currency)

    def __sub__(self, other: 'Money') -> 'Money':
        """Subtract two money objects; negative results are rejected"""
        self._check_currency(other)
        return Money(self.minor - other.minor, self.currency)

    def __mul__(self, factor: int) -> 'Money':
        """Multiply money by a whole number (nights, quantities)"""
        if not isinstance(factor, int) or isinstance(factor, bool):
            raise TypeError("Can only multiply Money by an integer")
        return Money(self.minor * factor, self.currency)

    def __lt__(self, other: 'Money') -> bool:
        self._check_currency(other)
        return self.minor < other.minor

    def __le__(self, other: 'Money') -> bool:
        self._check_currency(other)
        return self.minor <= other.minor

    def __gt__(self, other: 'Money') -> bool:
        self._check_currency(other)
        return self.minor > other.minor

    def __ge__(self, other: 'Money') -> bool:
        self._check_currency(other)
        return self.minor >= other.minor

    def __bool__(self) -> bool:
        return self.minor != 0

    def surplus_over(self, other: 'Money') -> 'Money':
        """max(0, self - other)"""
        self._check_currency(other)
        return Money(max(0, self.minor - other.minor), self.currency)

    def __str__(self):
        return f"{self.amount:,.2f} {self.currency}"

    def __repr__(self):
        return f"Money({self.amount}, '{self.currency}')"
