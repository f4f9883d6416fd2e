from typing import Optional
from pydantic import BaseModel

class BeneficiaryConfig(BaseModel):
    """
    Zahlungsempfänger, der in jeden erzeugten QR-Code übernommen wird.
    Längen und Formate prüft erst der SepaQrData-Builder.
    """
    name: str = ""
    iban: str = ""
    bic: Optional[str] = None
    currency: Optional[str] = "EUR"
    information: Optional[str] = None
