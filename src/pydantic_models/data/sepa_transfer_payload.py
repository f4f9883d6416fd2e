from __future__ import annotations

from decimal import Decimal
from enum import IntEnum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator, model_validator
from pydantic_core import PydanticCustomError

from shared_modules.utils import safe_str, to_decimal

MIN_AMOUNT = Decimal("0.01")
MAX_AMOUNT = Decimal("999999999.99")


class CharacterSet(IntEnum):
    """Zeichensatz-Kennungen nach EPC069-12 (Zeile 3 des Payloads)."""
    UTF_8 = 1
    ISO8859_1 = 2
    ISO8859_2 = 3
    ISO8859_4 = 4
    ISO8859_5 = 5
    ISO8859_7 = 6
    ISO8859_10 = 7
    ISO8859_15 = 8


class SepaTransferPayload(BaseModel):
    """
    Feldzustand eines SEPA-Überweisungs-QR-Codes (GiroCode).
    Jede Zuweisung wird sofort validiert (validate_assignment), ungesetzte optionale
    Felder bleiben None. Die Pflichtfeldprüfung (Name, IBAN, BIC bei Version 1)
    erfolgt erst beim Rendern im Builder, da ein Payload schrittweise aufgebaut wird.
    """
    model_config = ConfigDict(validate_assignment=True)

    service_tag: StrictStr = "BCD"
    version: int = Field(default=2, ge=1, le=2)
    character_set: int = Field(default=1, ge=1, le=8)
    identification: StrictStr = "SCT"

    bic: Optional[StrictStr] = None
    name: Optional[StrictStr] = Field(default=None, max_length=70)
    iban: Optional[StrictStr] = Field(default=None, max_length=34)
    currency: Optional[StrictStr] = Field(default=None, min_length=3, max_length=3)
    amount: Optional[Decimal] = Field(default=None, ge=MIN_AMOUNT, le=MAX_AMOUNT)
    purpose: Optional[StrictStr] = Field(default=None, min_length=4, max_length=4)
    remittance_reference: Optional[StrictStr] = Field(default=None, max_length=35)
    remittance_text: Optional[StrictStr] = Field(default=None, max_length=140)
    information: Optional[StrictStr] = Field(default=None, max_length=70)

    @field_validator("version", "character_set", mode="before")
    @classmethod
    def ensure_int(cls, value: Any) -> int:
        """
        Lässt nur echte Ganzzahlen zu. bool, float und Strings wie "v1" werden abgelehnt,
        IntEnum-Werte (z.B. CharacterSet.ISO8859_1) als int gespeichert.
        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise PydanticCustomError("int_type", "Ganzzahl erwartet, erhalten: {value}", {"value": repr(value)})
        return int(value)

    @field_validator("service_tag")
    @classmethod
    def check_service_tag(cls, value: str) -> str:
        if value != "BCD":
            raise ValueError("Service-Tag muss 'BCD' sein")
        return value

    @field_validator("identification")
    @classmethod
    def check_identification(cls, value: str) -> str:
        if value != "SCT":
            raise ValueError("Identifikationscode muss 'SCT' sein")
        return value

    @field_validator("bic")
    @classmethod
    def check_bic_length(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and len(value) not in (8, 11):
            raise ValueError("BIC muss 8 oder 11 Zeichen lang sein")
        return value

    @field_validator("amount", mode="before")
    @classmethod
    def ensure_decimal(cls, value: Any) -> Optional[Decimal]:
        """
        Beträge als int, float oder Decimal. Strings und bool werden nicht still umgewandelt.
        """
        if value is None:
            return None
        amount = to_decimal(value)
        if amount is None:
            raise PydanticCustomError(
                "decimal_type", "Betrag muss numerisch sein, erhalten: {value}", {"value": repr(value)}
            )
        return amount

    @field_validator("remittance_reference", mode="before")
    @classmethod
    def reference_as_str(cls, value: Any) -> Any:
        """
        Strukturierte Referenzen kommen oft als Zahl aus der Datenquelle und werden als String gespeichert.
        """
        if isinstance(value, int) and not isinstance(value, bool):
            return safe_str(value)
        return value

    @model_validator(mode="after")
    def check_remittance_exclusive(self) -> "SepaTransferPayload":
        """
        Strukturierter und unstrukturierter Verwendungszweck schließen sich gegenseitig aus.
        """
        if self.remittance_reference is not None and self.remittance_text is not None:
            raise PydanticCustomError(
                "remittance_exclusive",
                "Entweder strukturierten oder unstrukturierten Verwendungszweck verwenden",
            )
        return self
