import os
import sys
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import List, Optional

from loguru import logger
from rich import print

from sepa_qr.data import SepaQrData
from sepa_qr.exceptions import SepaQrError
from sepa_qr.qr_image import save_qr_image
from shared_modules.config import Config
from shared_modules.utils import log_exceptions

DEFAULT_CONFIG_PATH: Path = Path(__file__).parents[2] / ".config" / "sepa_qr_config.yaml"
DEFAULT_FILE_NAME = "zahlung_qr.png"

USAGE = "Aufruf: qr_erstellen <betrag> <verwendungszweck, optional> <dateiname.png, optional>  (z.B. 123.45 \"Rechnung 1234\")"


def build_payment(config: Config, amount: Decimal, remittance_text: Optional[str]) -> SepaQrData:
    """
    Baut den Payload aus dem Zahlungsempfänger der Config und den Angaben des Aufrufs.
    """
    beneficiary = config.beneficiary
    data = SepaQrData.create().set_name(beneficiary.name).set_iban(beneficiary.iban)
    if beneficiary.bic:
        data.set_bic(beneficiary.bic)
    if beneficiary.currency:
        data.set_currency(beneficiary.currency)
    if beneficiary.information:
        data.set_information(beneficiary.information)
    data.set_amount(amount)
    if remittance_text:
        data.set_remittance_text(remittance_text)
    return data


def main(argv: Optional[List[str]] = None) -> int:
    """
    Einstiegspunkt: erzeugt einen GiroCode als PNG für den konfigurierten Zahlungsempfänger.
    Der Pfad zur YAML-Konfiguration kann über SEPA_QR_CONFIG überschrieben werden.

    Returns:
        int: 0 bei Erfolg, 1 bei ungültigen Zahlungsdaten, 2 bei fehlerhaftem Aufruf.
    """
    args = sys.argv[1:] if argv is None else argv
    if not args:
        print(USAGE)
        return 2

    try:
        amount = Decimal(args[0].replace(",", "."))
    except InvalidOperation:
        print(f"Ungültiger Betrag: {args[0]}")
        print(USAGE)
        return 2
    remittance_text = args[1] if len(args) > 1 else None
    file_name = args[2] if len(args) > 2 else DEFAULT_FILE_NAME

    config_path = Path(os.getenv("SEPA_QR_CONFIG", str(DEFAULT_CONFIG_PATH)))
    config = Config(config_path)
    output_png = Path(config.qr_code.output_path or ".") / file_name

    try:
        data = build_payment(config, amount, remittance_text)
        with log_exceptions("Fehler beim Erzeugen des QR-Codes", continue_on_error=False):
            save_qr_image(data, output_png, config.qr_code)
    except SepaQrError as e:
        logger.error(f"Ungültige Zahlungsdaten ({e.field}): {e.reason}")
        return 1

    logger.success(f"GiroCode für {config.beneficiary.name} über {amount} erstellt: {output_png}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
