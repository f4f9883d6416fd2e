from pathlib import Path

import pytest
import yaml

from shared_modules.config import Config


@pytest.fixture(autouse=True)
def reset_config_singleton():
    """Jeder Test startet ohne geladene Config-Instanz."""
    Config._instance = None
    yield
    Config._instance = None


@pytest.fixture
def write_config(tmp_path):
    """Schreibt ein Config-Dictionary als YAML und gibt den Pfad zurück."""

    def _write(data, name: str = "sepa_qr_config.yaml") -> Path:
        path = tmp_path / name
        path.write_text(yaml.safe_dump(data, allow_unicode=True), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_config(tmp_path):
    """Vollständige Konfiguration ohne Logdatei, Ausgabe ins tmp-Verzeichnis."""
    return {
        "logging": {"log_file": None, "log_level": "DEBUG"},
        "qr_code": {
            "error_correction": "M",
            "box_size": 5,
            "border": 4,
            "output_path": str(tmp_path / "output"),
        },
        "beneficiary": {
            "name": "Max Mustermann",
            "iban": "DE02120300000000202051",
            "bic": "BYLADEM1001",
            "currency": "EUR",
        },
    }
