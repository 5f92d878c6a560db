"""
Domain entities for the optical shop ledger.

Core business objects representing clients, the frame/lens catalog and
the two kinds of sales. Entities are built from plain store rows and are
framework-agnostic.
"""

from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any, Dict, Optional, Tuple

CENTS = Decimal("0.01")


class _LabelEnum(str, Enum):
    """
    Enum whose value is the label stored in the database.

    Lookups also accept the English aliases declared in ``_aliases``,
    case-insensitively.
    """

    @classmethod
    def _aliases(cls) -> Dict[str, str]:
        return {}

    @classmethod
    def _missing_(cls, value):
        if not isinstance(value, str):
            return None
        needle = value.strip().lower()
        for member in cls:
            if member.value.lower() == needle:
                return member
        target = cls._aliases().get(needle)
        if target is not None:
            return cls(target)
        return None


class PaymentMethod(_LabelEnum):
    """Payment methods accepted at the counter."""

    CREDIT = "Crédito"
    DEBIT = "Débito"
    PIX = "Pix"
    CASH = "Dinheiro"

    @classmethod
    def _aliases(cls) -> Dict[str, str]:
        return {
            "credit": "Crédito",
            "credito": "Crédito",
            "debit": "Débito",
            "debito": "Débito",
            "cash": "Dinheiro",
        }


class InstallmentType(_LabelEnum):
    """How a glasses sale is paid."""

    LUMP_SUM = "À vista"
    INSTALLMENTS = "Parcelado"

    @classmethod
    def _aliases(cls) -> Dict[str, str]:
        return {
            "lump-sum": "À vista",
            "lump_sum": "À vista",
            "a vista": "À vista",
            "installments": "Parcelado",
        }


class MiscSaleType(_LabelEnum):
    """Kinds of miscellaneous sales."""

    MAINTENANCE = "Manutenção"
    PRODUCT = "Produtos"

    @classmethod
    def _aliases(cls) -> Dict[str, str]:
        return {
            "maintenance": "Manutenção",
            "manutencao": "Manutenção",
            "product": "Produtos",
            "products": "Produtos",
        }


# Closed item vocabularies, in display order
MAINTENANCE_ITEMS: Tuple[str, ...] = ("Plaquetas", "Parafuso", "Mola", "Charneira", "Solda")
PRODUCT_ITEMS: Tuple[str, ...] = ("Xerox", "Pano Mágico", "Limpa lentes")

ITEMS_BY_TYPE: Dict[MiscSaleType, Tuple[str, ...]] = {
    MiscSaleType.MAINTENANCE: MAINTENANCE_ITEMS,
    MiscSaleType.PRODUCT: PRODUCT_ITEMS,
}


def to_amount(value: Any) -> Decimal:
    """Convert a stored numeric value to a two-place Decimal."""
    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)


def parse_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def parse_timestamp(value: Any) -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, datetime):
        ts = value
    else:
        # PostgREST returns "+00:00" offsets; older Pythons reject a bare "Z"
        ts = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


@dataclass
class Client:
    """
    A registered client of the shop.

    Attributes:
        id: Opaque unique identifier
        name: Client name, never empty
        phone: Contact phone
        address: Postal address
        dnp: Pupillary distance note
        prescription: Free-text prescription
        created_at: Registration timestamp
    """

    id: str
    name: str
    phone: Optional[str] = None
    address: Optional[str] = None
    dnp: Optional[str] = None
    prescription: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Client":
        return cls(
            id=str(row["id"]),
            name=row["name"],
            phone=row.get("phone"),
            address=row.get("address"),
            dnp=row.get("dnp"),
            prescription=row.get("prescription"),
            created_at=parse_timestamp(row.get("created_at")),
        )


@dataclass(frozen=True)
class InventoryFrame:
    """Catalog frame. Read only from the ledger's point of view."""

    id: str
    name: str
    code: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "InventoryFrame":
        return cls(
            id=str(row["id"]),
            name=row["name"],
            code=row.get("code"),
            created_at=parse_timestamp(row.get("created_at")),
        )


@dataclass(frozen=True)
class InventoryLens:
    """Catalog lens. Read only from the ledger's point of view."""

    id: str
    product_code: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "InventoryLens":
        return cls(
            id=str(row["id"]),
            product_code=row["product_code"],
            description=row.get("description"),
            created_at=parse_timestamp(row.get("created_at")),
        )


@dataclass(frozen=True)
class GlassesSale:
    """
    An eyewear sale.

    client_id, frame_id and lens_id are weak references: the referenced
    rows may disappear later without affecting the sale.
    """

    id: str
    client_id: Optional[str]
    frame_id: Optional[str]
    lens_id: Optional[str]
    sale_date: date
    amount: Decimal
    payment_method: PaymentMethod
    installment_type: InstallmentType
    installment_count: int
    created_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "GlassesSale":
        return cls(
            id=str(row["id"]),
            client_id=row.get("client_id"),
            frame_id=row.get("frame_id"),
            lens_id=row.get("lens_id"),
            sale_date=parse_date(row["sale_date"]),
            amount=to_amount(row["amount"]),
            payment_method=PaymentMethod(row["payment_method"]),
            installment_type=InstallmentType(row["installment_type"]),
            installment_count=row.get("installment_count") or 1,
            created_at=parse_timestamp(row.get("created_at")),
        )


@dataclass(frozen=True)
class MiscSale:
    """A maintenance service or small product sale."""

    id: str
    type: MiscSaleType
    item_detail: str
    sale_date: date
    amount: Decimal
    created_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "MiscSale":
        return cls(
            id=str(row["id"]),
            type=MiscSaleType(row["type"]),
            item_detail=row["item_detail"],
            sale_date=parse_date(row["sale_date"]),
            amount=to_amount(row["amount"]),
            created_at=parse_timestamp(row.get("created_at")),
        )


@dataclass(frozen=True)
class PurchaseHistoryEntry:
    """
    One line of a client's purchase history.

    frame_name and lens_code are None when the referenced catalog row
    is missing.
    """

    sale_id: str
    sale_date: date
    amount: Decimal
    payment_method: str
    installment_type: str
    installment_count: Optional[int]
    frame_name: Optional[str] = None
    lens_code: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "PurchaseHistoryEntry":
        frame = row.get("frame") or {}
        lens = row.get("lens") or {}
        return cls(
            sale_id=str(row["id"]),
            sale_date=parse_date(row["sale_date"]),
            amount=to_amount(row["amount"]),
            payment_method=row["payment_method"],
            installment_type=row["installment_type"],
            installment_count=row.get("installment_count"),
            frame_name=frame.get("name"),
            lens_code=lens.get("product_code"),
            created_at=parse_timestamp(row.get("created_at")),
        )
