import sys
from pathlib import Path
from typing import Any, Dict, Optional, Type

import yaml
from loguru import logger
from pydantic import BaseModel

from pydantic_models.config.beneficiary_config import BeneficiaryConfig
from pydantic_models.config.logging_config import LoggingConfig
from pydantic_models.config.qr_code_config import QrCodeConfig


class Config:
    """
    Singleton für das Laden und Prüfen der Konfiguration.
    Nutzt statische Pydantic-Modelle für alle Abschnitte (logging, qr_code, beneficiary).
    Fehlende Abschnitte werden mit den Defaultwerten der Modelle belegt.
    """

    _instance: Optional["Config"] = None

    def __new__(cls, config_path: Path):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Path):
        # Fallback-Logger für Fehler beim Laden der Config
        logger.remove()
        logger.add(sys.stderr, level="WARNING")
        self.config_path = config_path
        try:
            self.raw_config: Dict[str, Any] = self._load_config()
            self.logging = self._parse_section(self.raw_config, "logging", LoggingConfig)
            self._setup_logging()
            logger.debug(f"Lade Konfiguration von {config_path}")

            self.qr_code = self._parse_section(self.raw_config, "qr_code", QrCodeConfig)
            self.beneficiary = self._parse_section(self.raw_config, "beneficiary", BeneficiaryConfig)
        except Exception as e:
            logger.error(f"Fehler beim Laden der Konfiguration: {e}")
            raise

        logger.debug("Konfiguration erfolgreich geladen und validiert.")
        self._initialized = True

    def _setup_logging(self) -> None:
        """
        Initialisiert loguru mit den Einstellungen aus der Config-Datei.
        """
        logger.remove()
        log_file = getattr(self.logging, "log_file", None)
        log_level = getattr(self.logging, "log_level", None) or "INFO"
        if log_file:
            logger.add(log_file, level=log_level, rotation="10 MB", retention="10 days")
        logger.add(sys.stderr, level=log_level)

    def _load_config(self) -> Dict[str, Any]:
        """
        Lädt die YAML-Konfigurationsdatei. Eine leere Datei ergibt eine leere Konfiguration.
        """
        if not self.config_path.exists():
            raise FileNotFoundError(f"Konfigurationsdatei nicht gefunden: {self.config_path}")
        with open(self.config_path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    def _parse_section(self, config: Dict[str, Any], section: str, model: Type[BaseModel]) -> Any:
        """
        Parst einen Abschnitt der Config mit dem passenden Pydantic-Modell.
        """
        data = config.get(section) or {}
        logger.debug(f"Parsiere Abschnitt '{section}': {data}")
        return model(**data)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Allgemeiner Getter für beliebige Felder (dot-notation für verschachtelte Felder).
        """
        parts = key.split(".")
        val = self.raw_config
        for part in parts:
            if isinstance(val, dict) and part in val:
                val = val[part]
            else:
                logger.debug(f"Feld '{key}' nicht gefunden, Rückgabe Default: {default}")
                return default
        return val


if __name__ == "__main__":
    config_path = Path(__file__).parent.parent.parent / ".config" / "sepa_qr_config.yaml"
    config = Config(config_path)
    logger.info("Zahlungsempfänger: {}", config.beneficiary.name)
