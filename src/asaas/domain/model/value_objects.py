"""Simple Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist: the
``of()`` factories sanitize raw input, and ``__post_init__`` rejects
anything that is not already in normalized form.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from email_validator import EmailNotValidError, validate_email

from asaas.domain import sanitizer
from asaas.domain.exceptions import InvalidFormatError

CPF_LENGTH = 11
CNPJ_LENGTH = 14

_CPF_WEIGHTS_1 = range(10, 1, -1)
_CPF_WEIGHTS_2 = range(11, 1, -1)
_CNPJ_WEIGHTS_1 = (5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2)
_CNPJ_WEIGHTS_2 = (6, 5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2)


@dataclass(frozen=True)
class SimpleValueObject:
    """A single normalized string.

    ``value`` is what the API receives by default; ``str()`` is the
    human-readable form.
    """

    value: str

    def formatted(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.formatted()


# --- Document numbers ---------------------------------------------------------


@dataclass(frozen=True)
class Cpf(SimpleValueObject):
    """Brazilian individual taxpayer number (11 digits, two check digits)."""

    def __post_init__(self) -> None:
        if len(self.value) != CPF_LENGTH or not _is_digits(self.value):
            raise InvalidFormatError("cpf", "CPF must contain exactly 11 digits")
        if not is_valid_cpf(self.value):
            raise InvalidFormatError("cpf", f"Invalid CPF: {self.value}")

    def formatted(self) -> str:
        v = self.value
        return f"{v[:3]}.{v[3:6]}.{v[6:9]}-{v[9:]}"

    @staticmethod
    def of(raw: Any) -> Cpf:
        return Cpf(sanitizer.digits_only(raw) or "")


@dataclass(frozen=True)
class Cnpj(SimpleValueObject):
    """Brazilian company registration number (14 digits, two check digits)."""

    def __post_init__(self) -> None:
        if len(self.value) != CNPJ_LENGTH or not _is_digits(self.value):
            raise InvalidFormatError("cnpj", "CNPJ must contain exactly 14 digits")
        if not is_valid_cnpj(self.value):
            raise InvalidFormatError("cnpj", f"Invalid CNPJ: {self.value}")

    def formatted(self) -> str:
        v = self.value
        return f"{v[:2]}.{v[2:5]}.{v[5:8]}/{v[8:12]}-{v[12:]}"

    @staticmethod
    def of(raw: Any) -> Cnpj:
        return Cnpj(sanitizer.digits_only(raw) or "")


def document_number(raw: Any) -> Cpf | Cnpj:
    """Build a Cpf or Cnpj depending on how many digits *raw* carries."""
    digits = sanitizer.digits_only(raw) or ""
    if len(digits) == CPF_LENGTH:
        return Cpf(digits)
    if len(digits) == CNPJ_LENGTH:
        return Cnpj(digits)
    raise InvalidFormatError("cpfCnpj", "CPF or CNPJ must contain 11 or 14 digits")


def is_valid_cpf(raw: Any) -> bool:
    digits = sanitizer.digits_only(raw) or ""
    if len(digits) != CPF_LENGTH or _is_repeated(digits):
        return False
    numbers = [int(d) for d in digits]
    first = _cpf_check_digit(numbers[:9], _CPF_WEIGHTS_1)
    second = _cpf_check_digit(numbers[:10], _CPF_WEIGHTS_2)
    return numbers[9] == first and numbers[10] == second


def is_valid_cnpj(raw: Any) -> bool:
    digits = sanitizer.digits_only(raw) or ""
    if len(digits) != CNPJ_LENGTH or _is_repeated(digits):
        return False
    numbers = [int(d) for d in digits]
    first = _cnpj_check_digit(numbers[:12], _CNPJ_WEIGHTS_1)
    second = _cnpj_check_digit(numbers[:13], _CNPJ_WEIGHTS_2)
    return numbers[12] == first and numbers[13] == second


def _cpf_check_digit(numbers: list[int], weights) -> int:
    digit = 11 - sum(n * w for n, w in zip(numbers, weights)) % 11
    return 0 if digit >= 10 else digit


def _cnpj_check_digit(numbers: list[int], weights) -> int:
    remainder = sum(n * w for n, w in zip(numbers, weights)) % 11
    return 0 if remainder < 2 else 11 - remainder


def _is_repeated(digits: str) -> bool:
    return len(set(digits)) == 1


def _is_digits(value: str) -> bool:
    return value.isascii() and value.isdigit()


# --- Contact data -------------------------------------------------------------


@dataclass(frozen=True)
class Email(SimpleValueObject):

    def __post_init__(self) -> None:
        if self.value != self.value.strip().lower():
            raise InvalidFormatError("email", "Email must be trimmed and lower-case")
        try:
            validate_email(self.value, check_deliverability=False)
        except EmailNotValidError as exc:
            raise InvalidFormatError("email", f"Email is not valid: {exc}") from exc

    @staticmethod
    def of(raw: Any) -> Email:
        return Email(sanitizer.normalize_case(raw) or "")


@dataclass(frozen=True)
class Phone(SimpleValueObject):
    """Landline (10 digits) or mobile (11 digits), area code included."""

    def __post_init__(self) -> None:
        if not self.value:
            raise InvalidFormatError("phone", "Phone number cannot be empty")
        if not _is_digits(self.value) or len(self.value) not in (10, 11):
            raise InvalidFormatError("phone", "Phone must contain 10 or 11 digits")

    @property
    def is_mobile(self) -> bool:
        return len(self.value) == 11

    @property
    def is_landline(self) -> bool:
        return len(self.value) == 10

    def formatted(self) -> str:
        v = self.value
        return f"({v[:2]}) {v[2:-4]}-{v[-4:]}"

    @staticmethod
    def of(raw: Any) -> Phone:
        return Phone(sanitizer.digits_only(raw) or "")


@dataclass(frozen=True)
class PostalCode(SimpleValueObject):
    """Brazilian CEP (8 digits)."""

    def __post_init__(self) -> None:
        if len(self.value) != 8 or not _is_digits(self.value):
            raise InvalidFormatError("postalCode", "Postal code must contain exactly 8 digits")

    def formatted(self) -> str:
        return f"{self.value[:5]}-{self.value[5:]}"

    @staticmethod
    def of(raw: Any) -> PostalCode:
        return PostalCode(sanitizer.digits_only(raw) or "")
