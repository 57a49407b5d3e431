# ==============================================================================
# LEDGER ENTITIES - client-side record shapes
# ==============================================================================
# Each entity is an immutable dataclass holding the camelCase wire shape's
# values as Python types. Edits produce a new instance (dataclasses.replace),
# so an in-memory record set can be swapped wholesale.
# ==============================================================================

import uuid
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict, Optional

from apps.records.timestamps import parse_timestamp

from .exceptions import ParseError


# ==============================================================================
# ENUMERATIONS
# ==============================================================================

class PaymentStatus(str, Enum):
    """Payment state of a purchase input."""
    PENDING = "pending"
    PAID = "paid"
    PARTIAL = "partial"


class ProductType(str, Enum):
    """Processed output sold by the business."""
    COCONUT = "coconut"
    HUSK = "husk"
    SHELL = "shell"

    @property
    def label(self) -> str:
        return PRODUCT_LABELS[self]

    @property
    def unit(self) -> str:
        return "loads" if self is ProductType.HUSK else "kg"

    @property
    def sold_by_load(self) -> bool:
        return self is ProductType.HUSK


PRODUCT_LABELS = {
    ProductType.COCONUT: "Coconut (Meat)",
    ProductType.HUSK: "Husk",
    ProductType.SHELL: "Shell",
}


def new_record_id() -> str:
    """Random identifier for a new record."""
    return str(uuid.uuid4())


def to_decimal(value: Any) -> Decimal:
    """Convert a JSON number or numeric string to Decimal without float noise."""
    if isinstance(value, bool) or value is None:
        raise ParseError(f"Expected a number, got {value!r}")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value))
        except (InvalidOperation, ValueError) as exc:
            raise ParseError(f"Expected a number, got {value!r}") from exc
    if not result.is_finite():
        raise ParseError(f"Expected a finite number, got {value!r}")
    return result


def _require(data: Dict[str, Any], key: str) -> Any:
    if not isinstance(data, dict):
        raise ParseError(f"Expected an object, got {type(data).__name__}")
    if data.get(key) is None:
        raise ParseError(f"Missing field '{key}'")
    return data[key]


def _optional_decimal(data: Dict[str, Any], key: str) -> Optional[Decimal]:
    value = data.get(key)
    return None if value is None else to_decimal(value)


# ==============================================================================
# SERVER-BACKED RECORDS
# ==============================================================================

@dataclass(frozen=True)
class PurchaseInput:
    """Coconuts bought from a client."""
    id: str
    date: str
    count: int
    price_per_unit: Decimal
    total_price: Decimal
    client_name: str
    payment_status: str = PaymentStatus.PENDING.value

    @property
    def timestamp(self):
        return parse_timestamp(self.date)

    def to_wire(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date,
            "count": self.count,
            "pricePerUnit": self.price_per_unit,
            "totalPrice": self.total_price,
            "clientName": self.client_name,
            "paymentStatus": self.payment_status,
        }

    @classmethod
    def from_wire(cls, data: Dict[str, Any]) -> "PurchaseInput":
        count = to_decimal(_require(data, "count"))
        if count != count.to_integral_value():
            raise ParseError(f"Count must be a whole number, got {count}")
        try:
            status = PaymentStatus(data.get("paymentStatus") or PaymentStatus.PENDING.value)
        except ValueError as exc:
            raise ParseError(str(exc)) from exc
        return cls(
            id=str(_require(data, "id")),
            date=str(_require(data, "date")),
            count=int(count),
            price_per_unit=to_decimal(_require(data, "pricePerUnit")),
            total_price=to_decimal(_require(data, "totalPrice")),
            client_name=str(_require(data, "clientName")),
            payment_status=status.value,
        )


@dataclass(frozen=True)
class LabourWage:
    """Wage paid to a worker."""
    id: str
    date: str
    worker_name: str
    days: Decimal
    rate_per_day: Decimal
    total_wage: Decimal

    @property
    def timestamp(self):
        return parse_timestamp(self.date)

    def to_wire(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date,
            "workerName": self.worker_name,
            "days": self.days,
            "ratePerDay": self.rate_per_day,
            "totalWage": self.total_wage,
        }

    @classmethod
    def from_wire(cls, data: Dict[str, Any]) -> "LabourWage":
        return cls(
            id=str(_require(data, "id")),
            date=str(_require(data, "date")),
            worker_name=str(_require(data, "workerName")),
            days=to_decimal(_require(data, "days")),
            rate_per_day=to_decimal(_require(data, "ratePerDay")),
            total_wage=to_decimal(_require(data, "totalWage")),
        )


@dataclass(frozen=True)
class Client:
    """Supplier of coconuts; purchase inputs reference it by name."""
    id: str
    name: str

    def to_wire(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name}

    @classmethod
    def from_wire(cls, data: Dict[str, Any]) -> "Client":
        # Older caches hold bare client names
        if isinstance(data, str):
            return cls(id=data, name=data)
        return cls(id=str(_require(data, "id")), name=str(_require(data, "name")))


# ==============================================================================
# CLIENT-ONLY RECORDS
# ==============================================================================

@dataclass(frozen=True)
class OutputProduct:
    """
    Processed product sold (never sent to the Record Store).

    Husk is sold by the load (loads, price_per_load); coconut meat and
    shell by weight (weight, price_per_kg). Exactly one pair is set.
    """
    id: str
    date: str
    product_type: str
    total_price: Decimal
    weight: Optional[Decimal] = None
    price_per_kg: Optional[Decimal] = None
    loads: Optional[Decimal] = None
    price_per_load: Optional[Decimal] = None

    def __post_init__(self):
        product = ProductType(self.product_type)
        by_load = (self.loads, self.price_per_load)
        by_weight = (self.weight, self.price_per_kg)
        used, unused = (by_load, by_weight) if product.sold_by_load else (by_weight, by_load)
        if any(value is None for value in used) or any(value is not None for value in unused):
            raise ValueError(
                f"{product.value} output must set only "
                f"{'loads/pricePerLoad' if product.sold_by_load else 'weight/pricePerKg'}"
            )

    @property
    def timestamp(self):
        return parse_timestamp(self.date)

    @property
    def quantity(self) -> Decimal:
        """Loads for husk, kilograms otherwise."""
        return self.loads if self.product_type == ProductType.HUSK.value else self.weight

    def to_wire(self) -> Dict[str, Any]:
        payload = {
            "id": self.id,
            "date": self.date,
            "productType": self.product_type,
        }
        if self.product_type == ProductType.HUSK.value:
            payload["loads"] = self.loads
            payload["pricePerLoad"] = self.price_per_load
        else:
            payload["weight"] = self.weight
            payload["pricePerKg"] = self.price_per_kg
        payload["totalPrice"] = self.total_price
        return payload

    @classmethod
    def from_wire(cls, data: Dict[str, Any]) -> "OutputProduct":
        try:
            return cls(
                id=str(_require(data, "id")),
                date=str(_require(data, "date")),
                product_type=str(_require(data, "productType")),
                total_price=to_decimal(_require(data, "totalPrice")),
                weight=_optional_decimal(data, "weight"),
                price_per_kg=_optional_decimal(data, "pricePerKg"),
                loads=_optional_decimal(data, "loads"),
                price_per_load=_optional_decimal(data, "pricePerLoad"),
            )
        except ValueError as exc:
            raise ParseError(str(exc)) from exc


# ==============================================================================
# RECORD KINDS - where each kind lives
# ==============================================================================

@dataclass(frozen=True)
class RecordKind:
    """Binds an entity to its cache key and, if server-backed, its endpoint."""
    name: str
    cache_key: str
    entity: type
    endpoint: Optional[str] = None

    @property
    def server_backed(self) -> bool:
        return self.endpoint is not None


PURCHASE_INPUTS = RecordKind("purchase_inputs", "coconutInputs", PurchaseInput, endpoint="coconut")
LABOUR_WAGES = RecordKind("labour_wages", "labourWages", LabourWage, endpoint="labour")
CLIENTS = RecordKind("clients", "clients", Client, endpoint="clients")
OUTPUTS = RecordKind("outputs", "outputs", OutputProduct)
