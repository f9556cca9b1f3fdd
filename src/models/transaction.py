import logging
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict

from pydantic import BaseModel, Field, field_validator, ConfigDict

logger = logging.getLogger(__name__)


class TransactionRecord(BaseModel):
    """
    A single ledger row as read from the external transaction store.

    Records are immutable; the detector only reads them. Amounts follow the
    ledger convention of positive for expenses and negative for income.
    """
    date: date
    amount: Decimal = Decimal("0")
    merchant_raw: str = Field(default="", alias="merchantRaw")
    category_primary: str = Field(default="", alias="categoryPrimary")
    account_name: str = Field(default="", alias="accountName")
    pending: bool = False

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
        json_encoders={
            Decimal: str
        }
    )

    @field_validator('date', mode='before')
    @classmethod
    def coerce_date(cls, v: Any) -> Any:
        # datetimes would otherwise be rejected for carrying a time component
        if isinstance(v, datetime):
            return v.date()
        if isinstance(v, str):
            return date.fromisoformat(v.strip()[:10])
        return v

    @field_validator('amount', mode='before')
    @classmethod
    def ensure_amount_is_decimal(cls, v: Any) -> Decimal:
        if isinstance(v, Decimal):
            return v if v.is_finite() else Decimal("0")
        if v is None or isinstance(v, bool):
            return Decimal("0")
        try:
            amount = Decimal(str(v).strip().replace(",", "").replace("$", ""))
        except (InvalidOperation, ValueError):
            logger.debug(f"Non-numeric amount {v!r} treated as zero")
            return Decimal("0")
        return amount if amount.is_finite() else Decimal("0")

    @field_validator('merchant_raw', 'category_primary', 'account_name', mode='before')
    @classmethod
    def none_to_empty(cls, v: Any) -> str:
        if v is None:
            return ""
        return str(v)

    @field_validator('pending', mode='before')
    @classmethod
    def parse_pending(cls, v: Any) -> bool:
        if isinstance(v, str):
            return v.strip().lower() in ("true", "yes", "y", "1", "pending")
        if v is None:
            return False
        return bool(v)

    @property
    def absolute_amount(self) -> Decimal:
        return abs(self.amount)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with camelCase keys, the shape the ledger store exports."""
        return self.model_dump(by_alias=True)
