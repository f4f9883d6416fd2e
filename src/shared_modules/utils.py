from contextlib import contextmanager
from decimal import Decimal
from pathlib import Path
from typing import Any, Callable, Dict, Generator, Optional

from loguru import logger


def safe_str(val) -> str:
    """
    Gibt immer einen String zurück, auch wenn val None oder numerisch ist.
    """
    return "" if val is None else str(val)


@contextmanager
def log_exceptions(msg: str, continue_on_error: bool = True) -> Generator[None, None, None]:
    """
    Context-Manager für das Logging von Ausnahmen.
    Loggt eine Fehlermeldung und entscheidet, ob die Exception weitergereicht wird.

    Args:
        msg (str): Nachricht für das Logging im Fehlerfall.
        continue_on_error (bool): Bei False wird die Exception erneut ausgelöst, ansonsten nur geloggt.

    Beispiel:
        with log_exceptions("Fehler beim Speichern des QR-Codes", continue_on_error=False):
            save_qr_image(data, output_png)
    """
    try:
        yield
    except Exception as e:
        logger.error(f"{msg}: {e}")
        if not continue_on_error:
            raise


# Floats werden über ihre kürzeste Darstellung umgewandelt, damit 1075.25 nicht zu
# 1075.2499999999999... wird.
_DECIMAL_CONVERTERS: Dict[type, Callable[[Any], Optional[Decimal]]] = {
    type(None): lambda _v: None,
    int: lambda v: Decimal(v),
    float: lambda v: Decimal(repr(v)),
    Decimal: lambda v: v,
}


def to_decimal(v: Any) -> Optional[Decimal]:
    """Typbasierte Betrags-Konvertierung (None/int/float/Decimal -> Decimal|None)."""
    conv = _DECIMAL_CONVERTERS.get(type(v))
    return conv(v) if conv else None


def ensure_dir(path: Path) -> Path:
    """Erzeugt ein Verzeichnis (rekursiv), falls es fehlt, und gibt den Pfad zurück."""
    path.mkdir(parents=True, exist_ok=True)
    return path
