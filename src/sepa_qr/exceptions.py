from typing import Optional


class SepaQrError(ValueError):
    """
    Basisklasse für alle Fehler beim Aufbau eines EPC-QR-Payloads.

    Attribute:
        field (Optional[str]): Name des betroffenen Feldes (Python-Name, z.B. "remittance_text").
        reason (str): Lesbare Fehlerbeschreibung.
    """

    def __init__(self, reason: str, field: Optional[str] = None):
        super().__init__(reason)
        self.field = field
        self.reason = reason


class InvalidField(SepaQrError):
    """
    Wird von einem Setter ausgelöst, wenn der übergebene Wert die Feldregeln verletzt
    (Länge, Wertebereich, gegenseitiger Ausschluss der Verwendungszweck-Felder).
    Die Instanz behält in diesem Fall ihren vorherigen Zustand.
    """


class MissingField(SepaQrError):
    """
    Wird erst beim Rendern ausgelöst, wenn ein Pflichtfeld fehlt
    (BIC bei Version 1, Name und IBAN immer).
    """
