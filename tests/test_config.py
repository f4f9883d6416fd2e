"""
Unit tests for Config
"""

import pytest
from pydantic import ValidationError

from shared_modules.config import Config


class TestConfig:
    """Tests for loading the YAML configuration"""

    def test_sections_are_parsed(self, write_config, sample_config):
        config = Config(write_config(sample_config))

        assert config.beneficiary.name == "Max Mustermann"
        assert config.beneficiary.bic == "BYLADEM1001"
        assert config.qr_code.box_size == 5
        assert config.logging.log_level == "DEBUG"

    def test_missing_sections_use_defaults(self, write_config):
        config = Config(write_config({"logging": {"log_file": None}}))

        assert config.qr_code.error_correction == "M"
        assert config.qr_code.border == 4
        assert config.beneficiary.currency == "EUR"
        assert config.beneficiary.bic is None

    def test_empty_file(self, tmp_path):
        path = tmp_path / "leer.yaml"
        path.write_text("", encoding="utf-8")

        config = Config(path)

        assert config.raw_config == {}
        assert config.qr_code.output_path == "output"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Config(tmp_path / "fehlt.yaml")

    def test_invalid_section(self, write_config, sample_config):
        sample_config["qr_code"]["error_correction"] = "X"
        with pytest.raises(ValidationError):
            Config(write_config(sample_config))

    def test_singleton(self, write_config, sample_config):
        path = write_config(sample_config)
        assert Config(path) is Config(path)

    def test_get_dot_notation(self, write_config, sample_config):
        config = Config(write_config(sample_config))

        assert config.get("beneficiary.iban") == "DE02120300000000202051"
        assert config.get("beneficiary.fehlt", "default") == "default"
        assert config.get("qr_code.box_size.tief") is None

    def test_log_file_is_written(self, write_config, sample_config, tmp_path):
        log_file = tmp_path / "logs" / "sepa_qr.log"
        sample_config["logging"] = {"log_file": str(log_file), "log_level": "DEBUG"}

        Config(write_config(sample_config))

        assert log_file.exists()
