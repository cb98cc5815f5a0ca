"""Value objects shared by consent and refund requests."""

from dataclasses import dataclass
from typing import Annotated, Optional

from pydantic import StringConstraints

from blink_debit.models.enums import Currency

TOTAL_PATTERN = r"^\d{1,10}\.\d{1,2}$"
PCR_MAX_LENGTH = 12

Total = Annotated[str, StringConstraints(pattern=TOTAL_PATTERN)]


class TaggedVariant:
    """
    Mixin for the concrete members of a tagged union.

    Each concrete dataclass declares ``type: Literal[...]`` with a default,
    so building the variant sets its discriminator. Passing any other value
    for ``type`` is rejected.
    """

    def __post_init__(self) -> None:
        expected = self.__dataclass_fields__["type"].default
        if self.type != expected:
            raise TypeError(
                f"{type(self).__name__} is always of type {expected!r}, got {self.type!r}"
            )


@dataclass
class Pcr:
    """Particulars, code and reference shown on the bank statement."""

    particulars: Optional[str] = None
    code: Optional[str] = None
    reference: Optional[str] = None


@dataclass
class Amount:
    currency: Optional[Currency] = None
    total: Total = None  # Required decimal string, e.g. "25.00"
