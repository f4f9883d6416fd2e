from pathlib import Path
from typing import Optional, Union

import qrcode
from loguru import logger
from qrcode.constants import ERROR_CORRECT_H, ERROR_CORRECT_L, ERROR_CORRECT_M, ERROR_CORRECT_Q

from pydantic_models.config.qr_code_config import QrCodeConfig
from shared_modules.utils import ensure_dir

from .data import SepaQrData
from .exceptions import InvalidField

_ERROR_CORRECTION = {
    "L": ERROR_CORRECT_L,
    "M": ERROR_CORRECT_M,
    "Q": ERROR_CORRECT_Q,
    "H": ERROR_CORRECT_H,
}

# Python-Codecs zu den Zeichensatz-Kennungen aus Zeile 3
_CODECS = {
    1: "utf-8",
    2: "iso8859_1",
    3: "iso8859_2",
    4: "iso8859_4",
    5: "iso8859_5",
    6: "iso8859_7",
    7: "iso8859_10",
    8: "iso8859_15",
}


def encode_payload(data: Union[SepaQrData, str]) -> bytes:
    """
    Rendert den Payload und kodiert ihn im Zeichensatz, den der Payload selbst angibt.
    Reine Strings werden als UTF-8 kodiert.

    Raises:
        InvalidField: Falls der Text Zeichen enthält, die der gewählte Zeichensatz nicht abbildet.
    """
    if isinstance(data, str):
        return data.encode("utf-8")

    payload = data.render()
    codec = _CODECS[data.character_set]
    try:
        return payload.encode(codec)
    except UnicodeEncodeError as e:
        logger.error(f"Payload lässt sich nicht als {codec} kodieren: {e}")
        raise InvalidField(
            f"Payload enthält Zeichen, die im Zeichensatz {codec} nicht darstellbar sind",
            "character_set",
        ) from e


def make_qr_image(data: Union[SepaQrData, str], qr_config: Optional[QrCodeConfig] = None):
    """
    Übergibt den Payload an qrcode und gibt das erzeugte PIL-Bild zurück.

    Args:
        data (SepaQrData | str): Builder oder bereits gerenderter Payload.
        qr_config (QrCodeConfig, optional): Fehlerkorrektur, Modulgröße und Rand.
    """
    cfg = qr_config or QrCodeConfig()
    qr = qrcode.QRCode(
        error_correction=_ERROR_CORRECTION[cfg.error_correction],
        box_size=cfg.box_size,
        border=cfg.border,
    )
    qr.add_data(encode_payload(data))
    qr.make(fit=True)
    logger.debug(f"QR-Code erzeugt (Version {qr.version}, Fehlerkorrektur {cfg.error_correction}).")
    return qr.make_image(fill_color="black", back_color="white")


def save_qr_image(
    data: Union[SepaQrData, str],
    output_png: Path,
    qr_config: Optional[QrCodeConfig] = None,
) -> Path:
    """
    Erzeugt den QR-Code und speichert ihn als PNG. Das Zielverzeichnis wird bei Bedarf angelegt.

    Returns:
        Path: Pfad der geschriebenen Datei.
    """
    output_png = Path(output_png)
    ensure_dir(output_png.parent)
    img = make_qr_image(data, qr_config)
    img.save(output_png)
    logger.info(f"QR-Code gespeichert: {output_png}")
    return output_png
