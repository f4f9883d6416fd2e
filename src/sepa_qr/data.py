from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any, Dict, Union

from loguru import logger
from pydantic import ValidationError

from pydantic_models.data.sepa_transfer_payload import CharacterSet, SepaTransferPayload
from shared_modules.utils import to_decimal

from .exceptions import InvalidField, MissingField

Amount = Union[Decimal, float, int]

# Fehlertexte je Feld, werden bei InvalidField ausgegeben
_REASONS: Dict[str, str] = {
    "service_tag": "Ungültiger Service-Tag (erlaubt ist nur 'BCD')",
    "version": "Ungültige Version (erlaubt sind 1 oder 2)",
    "character_set": "Ungültiger Zeichensatz (erlaubt sind die Kennungen 1 bis 8)",
    "identification": "Ungültiger Identifikationscode (erlaubt ist nur 'SCT')",
    "bic": "BIC des Empfängers kann nur 8 oder 11 Zeichen lang sein",
    "name": "Name des Empfängers darf nicht länger als 70 Zeichen sein",
    "iban": "Kontonummer (IBAN) des Empfängers darf nicht länger als 34 Zeichen sein",
    "currency": "Währung der Überweisung muss ein gültiger ISO-4217-Code sein",
    "amount": "Betrag der Überweisung muss zwischen 0.01 und 999999999.99 liegen",
    "purpose": "Purpose-Code muss genau 4 Zeichen lang sein",
    "remittance_reference": "Strukturierter Verwendungszweck darf nicht länger als 35 Zeichen sein",
    "remittance_text": "Unstrukturierter Verwendungszweck darf nicht länger als 140 Zeichen sein",
    "information": "Hinweis an den Auftraggeber darf nicht länger als 70 Zeichen sein",
}
_REMITTANCE_EXCLUSIVE = "Entweder strukturierten oder unstrukturierten Verwendungszweck verwenden"

# Erwarteter Typ je Feld für Typfehler, alle übrigen Felder erwarten Text
_EXPECTED_TYPES: Dict[str, str] = {
    "version": "Ganzzahl",
    "character_set": "Ganzzahl",
    "amount": "Zahl (int, float oder Decimal)",
}
_TYPE_ERRORS = {"string_type", "int_type", "decimal_type"}

# Werte für ungesetzte Felder beim Rendern
_RENDER_DEFAULTS: Dict[str, Any] = {
    "bic": "",
    "name": "",
    "iban": "",
    "currency": "EUR",
    "amount": 0,
    "purpose": "",
    "remittance_reference": "",
    "remittance_text": "",
    "information": "",
}


def format_money(currency: str = "EUR", amount: Amount = 0) -> str:
    """
    Formatiert das Betragsfeld (Zeile 8) als Währung + Betrag, z.B. "EUR1075.25".
    Der Betrag wird nur angehängt, wenn er größer als 0 ist. Ein fehlender Betrag
    bleibt leer statt "0.00", damit die Banking-App den Betrag selbst abfragt.

    Args:
        currency (str): Währungscode, wird in Großbuchstaben ausgegeben.
        amount (Decimal | float | int): Betrag, zwei Nachkommastellen, "." als Dezimaltrenner.

    Returns:
        str: Formatiertes Betragsfeld.
    """
    value = to_decimal(amount)
    if value is None or not value.is_finite():
        raise ValueError(f"Betrag muss eine endliche Zahl sein, erhalten: {amount!r}")
    formatted = ""
    if value > 0:
        # Genauigkeit an die Stellenzahl anpassen, sonst scheitert quantize ab 28 Stellen
        with localcontext() as ctx:
            ctx.prec = max(ctx.prec, value.adjusted() + 3)
            formatted = f"{value.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP):f}"
    return f"{currency.upper()}{formatted}"


def _type_reason(field: str, value: Any) -> str:
    expected = _EXPECTED_TYPES.get(field, "Text (str)")
    return f"Feld '{field}' erwartet {expected}, erhalten: {type(value).__name__}"


class SepaQrData:
    """
    Builder für den Text-Payload eines SEPA-Überweisungs-QR-Codes (EPC069-12).

    Jeder Setter prüft seinen Wert sofort und gibt die Instanz zurück, sodass Aufrufe
    verkettet werden können. Pflichtfelder werden erst beim Rendern geprüft.

    Beispiel:
        payload = (
            SepaQrData.create()
            .set_name("Max Mustermann")
            .set_iban("DE02120300000000202051")
            .set_amount(123.45)
            .set_remittance_text("Rechnung 1234")
            .render()
        )
    """

    UTF_8 = CharacterSet.UTF_8
    ISO8859_1 = CharacterSet.ISO8859_1
    ISO8859_2 = CharacterSet.ISO8859_2
    ISO8859_4 = CharacterSet.ISO8859_4
    ISO8859_5 = CharacterSet.ISO8859_5
    ISO8859_7 = CharacterSet.ISO8859_7
    ISO8859_10 = CharacterSet.ISO8859_10
    ISO8859_15 = CharacterSet.ISO8859_15

    format_money = staticmethod(format_money)

    def __init__(self) -> None:
        self._payload = SepaTransferPayload()

    @classmethod
    def create(cls) -> "SepaQrData":
        return cls()

    def _set(self, field: str, value: Any) -> "SepaQrData":
        """
        Validiert die Zuweisung an einer Kopie und übernimmt sie nur bei Erfolg,
        damit ein ungültiger Wert den bisherigen Zustand nicht verändert.
        """
        if value is None:
            reason = _type_reason(field, value)
            logger.debug(f"Ungültiger Wert für Feld '{field}': {reason}")
            raise InvalidField(reason, field)

        candidate = self._payload.model_copy()
        try:
            setattr(candidate, field, value)
        except ValidationError as e:
            error_types = {err["type"] for err in e.errors()}
            if "remittance_exclusive" in error_types:
                reason = _REMITTANCE_EXCLUSIVE
            elif error_types & _TYPE_ERRORS:
                reason = _type_reason(field, value)
            else:
                reason = f"{_REASONS[field]} (erhalten: {value!r})"
            logger.debug(f"Ungültiger Wert für Feld '{field}': {reason}")
            raise InvalidField(reason, field) from e
        self._payload = candidate
        return self

    def set_service_tag(self, service_tag: str = "BCD") -> "SepaQrData":
        return self._set("service_tag", service_tag)

    def set_version(self, version: int = 2) -> "SepaQrData":
        return self._set("version", version)

    def set_character_set(self, character_set: int = CharacterSet.UTF_8) -> "SepaQrData":
        return self._set("character_set", character_set)

    def set_identification(self, identification: str = "SCT") -> "SepaQrData":
        return self._set("identification", identification)

    def set_bic(self, bic: str) -> "SepaQrData":
        return self._set("bic", bic)

    def set_name(self, name: str) -> "SepaQrData":
        return self._set("name", name)

    def set_iban(self, iban: str) -> "SepaQrData":
        return self._set("iban", iban)

    def set_currency(self, currency: str) -> "SepaQrData":
        return self._set("currency", currency)

    def set_amount(self, amount: Amount) -> "SepaQrData":
        return self._set("amount", amount)

    def set_purpose(self, purpose: str) -> "SepaQrData":
        return self._set("purpose", purpose)

    def set_remittance_reference(self, remittance_reference: Union[str, int]) -> "SepaQrData":
        """Strukturierte Referenz (z.B. RF18539007547034), max. 35 Zeichen."""
        return self._set("remittance_reference", remittance_reference)

    def set_remittance_text(self, remittance_text: str) -> "SepaQrData":
        """Freitext-Verwendungszweck, max. 140 Zeichen."""
        return self._set("remittance_text", remittance_text)

    def set_information(self, information: str) -> "SepaQrData":
        return self._set("information", information)

    @property
    def character_set(self) -> int:
        return self._payload.character_set

    def as_dict(self) -> dict:
        """
        Gibt die gesetzten Felder als Dictionary zurück (ungesetzte Felder fehlen).
        """
        return self._payload.model_dump(exclude_none=True)

    def render(self) -> str:
        """
        Erzeugt den Payload-Text: 12 Zeilen in fester Reihenfolge, getrennt durch "\\n".
        Leere Felder am Ende werden samt Trennzeichen entfernt, leere Felder dazwischen bleiben erhalten.

        Raises:
            MissingField: Falls BIC (nur Version 1), Name oder IBAN fehlen.
        """
        values = {**_RENDER_DEFAULTS, **self.as_dict()}

        if values["version"] == 1 and not values["bic"]:
            logger.error("BIC des Empfängers fehlt (Pflicht bei Version 1).")
            raise MissingField("BIC des Empfängers fehlt", "bic")
        if not values["name"]:
            logger.error("Name des Empfängers fehlt.")
            raise MissingField("Name des Empfängers fehlt", "name")
        if not values["iban"]:
            logger.error("Kontonummer (IBAN) des Empfängers fehlt.")
            raise MissingField("Kontonummer (IBAN) des Empfängers fehlt", "iban")

        lines = [
            values["service_tag"],
            f"{values['version']:03d}",
            str(values["character_set"]),
            values["identification"],
            values["bic"],
            values["name"],
            values["iban"],
            format_money(values["currency"], values["amount"]),
            values["purpose"],
            values["remittance_reference"],
            values["remittance_text"],
            values["information"],
        ]
        payload = "\n".join(lines).rstrip("\n")
        logger.debug(f"EPC-Payload erzeugt ({len(payload.splitlines())} Zeilen).")
        return payload

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.as_dict()!r})"
