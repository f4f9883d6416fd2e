from typing import Literal, Optional

from pydantic import BaseModel, Field


class QrCodeConfig(BaseModel):
    """
    Modell für die Bildausgabe des QR-Codes.

    Attribute:
        error_correction (str): Fehlerkorrektur-Level ("L", "M", "Q", "H"). EPC069-12 empfiehlt "M".
        box_size (int): Pixel pro QR-Modul.
        border (int): Ruhezone in Modulen (Minimum laut ISO/IEC 18004: 4).
        output_path (Optional[str]): Ausgabeverzeichnis für erzeugte PNG-Dateien.
    """
    error_correction: Literal["L", "M", "Q", "H"] = "M"
    box_size: int = Field(default=10, ge=1)
    border: int = Field(default=4, ge=0)
    output_path: Optional[str] = "output"
