"""Data Transfer Objects: validated inputs that cross into the API.

A DTO is built in two phases: ``sanitize()`` normalizes a raw,
API-shaped mapping (never fails), then ``validate()`` checks required
fields first and delegates every other field to its value object.
The resulting frozen dataclass is the only thing handlers send over
the wire, through ``to_payload()``.

Serialization is driven by the value's type (``to_wire``), except for
the fields a DTO lists in its ``transmit`` table, which name the method
to call instead (e.g. a postal code is sent in its formatted form).
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from dataclasses import dataclass, fields
from datetime import date
from decimal import Decimal
from enum import Enum
from functools import singledispatch
from typing import Any, ClassVar, TypeVar

from asaas.domain import sanitizer
from asaas.domain.exceptions import InvalidFormatError, ValidationError
from asaas.domain.model.payment_terms import StructuredValueObject
from asaas.domain.model.value_objects import SimpleValueObject

T = TypeVar("T")
D = TypeVar("D", bound="BaseDTO")

_CAMEL_BOUNDARY = re.compile(r"_([a-z0-9])")


@dataclass(frozen=True)
class Transmit:
    """Send a field as ``getattr(value, method)(*args)`` instead of the default."""

    method: str
    args: tuple[Any, ...] = ()

    def apply(self, value: Any) -> Any:
        return getattr(value, self.method)(*self.args)


# --- Default wire representation, by type -------------------------------------


@singledispatch
def to_wire(value: Any) -> Any:
    return value


@to_wire.register
def _(value: SimpleValueObject) -> str:
    return value.value


@to_wire.register
def _(value: StructuredValueObject) -> Any:
    return value.to_payload()


@to_wire.register
def _(value: Enum) -> Any:
    return value.value


@to_wire.register
def _(value: Decimal) -> float:
    return float(value)


@to_wire.register
def _(value: date) -> str:
    return value.isoformat()


def wire_name(attribute: str) -> str:
    """``cpf_cnpj`` -> ``cpfCnpj``."""
    return _CAMEL_BOUNDARY.sub(lambda m: m.group(1).upper(), attribute)


# --- Base DTO -----------------------------------------------------------------


class BaseDTO(ABC):
    """Base for all input DTOs (subclasses are frozen dataclasses)."""

    transmit: ClassVar[Mapping[str, Transmit]] = {}

    @classmethod
    def from_raw(cls: type[D], data: Mapping[str, Any]) -> D:
        return cls(**cls.validate(cls.sanitize(data)))

    @classmethod
    @abstractmethod
    def sanitize(cls, data: Mapping[str, Any]) -> dict[str, Any]:
        """Normalize raw input into constructor keyword arguments."""

    @classmethod
    def validate(cls, data: dict[str, Any]) -> dict[str, Any]:
        return data

    def to_payload(self) -> dict[str, Any]:
        """Present fields only, keyed by their API names."""
        payload: dict[str, Any] = {}
        for f in fields(self):  # type: ignore[arg-type]
            value = getattr(self, f.name)
            if value is None:
                continue
            policy = self.transmit.get(f.name)
            payload[wire_name(f.name)] = policy.apply(value) if policy else to_wire(value)
        return payload


# --- Helpers shared by the concrete DTOs --------------------------------------


def raw_value(data: Mapping[str, Any], attribute: str, *aliases: str) -> Any:
    """Look a field up by its API name, then by snake_case name and aliases."""
    for key in (wire_name(attribute), attribute, *aliases):
        if data.get(key) is not None:
            return data[key]
    return None


def strict_value_object(
    data: dict[str, Any],
    key: str,
    factory: Callable[[Any], T],
    kind: type | tuple[type, ...] | None = None,
) -> None:
    """Replace ``data[key]`` by ``factory(data[key])``, re-raising under *key*.

    Values that already are of *kind* are kept as they are.
    """
    raw = data.get(key)
    if raw is None or (kind is not None and isinstance(raw, kind)):
        return
    try:
        data[key] = factory(raw)
    except ValidationError as exc:
        raise InvalidFormatError(
            wire_name(key), f"Invalid format for '{wire_name(key)}': {exc.reason}"
        ) from exc
    except (TypeError, AttributeError) as exc:
        raise InvalidFormatError(
            wire_name(key), f"Invalid format for '{wire_name(key)}': {exc}"
        ) from exc


def lenient_value_object(raw: Any, factory: Callable[[Any], T]) -> T | None:
    """Return ``factory(raw)``, or None if *raw* is absent or malformed."""
    if sanitizer.normalize_string(raw) is None:
        return None
    try:
        return factory(raw)
    except ValidationError:
        return None
