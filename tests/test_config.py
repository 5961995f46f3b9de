"""
Unit tests for configuration loading, logging setup and exceptions.
"""

import logging
from pathlib import Path

import pytest

from compensated import CapabilityError, CompensatedError, ConfigurationError
from compensated.utils.config_parser import get_nested_value, load_config
from compensated.utils.logging import get_logger, setup_logging

DEMO_CONFIG = Path(__file__).resolve().parent.parent / "examples" / "demo_config.yaml"


def write_config(tmp_path, text):
    path = tmp_path / "config.yaml"
    path.write_text(text)
    return path


@pytest.fixture
def package_logger():
    """Restore the package logger after a test reconfigures it."""
    logger = logging.getLogger("compensated")
    classifier_logger = logging.getLogger("compensated.capabilities")
    handlers, level = list(logger.handlers), logger.level
    classifier_level = classifier_logger.level
    yield logger
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers = handlers
    logger.setLevel(level)
    classifier_logger.setLevel(classifier_level)


class TestLoadConfig:
    """Test YAML loading and validation."""

    def test_valid_config(self, tmp_path):
        """A complete configuration loads unchanged."""
        path = write_config(
            tmp_path,
            "summation_demo:\n"
            "  log_level: DEBUG\n"
            "  dtypes: [float32]\n"
            "  sequence: [1.0, 2, -3.5]\n",
        )
        config = load_config(path)
        assert config["summation_demo"]["dtypes"] == ["float32"]
        assert config["summation_demo"]["sequence"] == [1.0, 2, -3.5]

    def test_shipped_demo_config(self):
        """The example configuration is valid."""
        config = load_config(DEMO_CONFIG)
        demo = config["summation_demo"]
        assert demo["dtypes"] == ["float64", "float32"]
        assert demo["sequence"][0] == 1e16
        assert demo["trace_classification"] is True

    def test_missing_file(self, tmp_path):
        """A missing file is a configuration error."""
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(tmp_path / "absent.yaml")

    def test_invalid_yaml(self, tmp_path):
        """Unparsable YAML is a configuration error."""
        path = write_config(tmp_path, "summation_demo: [float32\n")
        with pytest.raises(ConfigurationError, match="parsing"):
            load_config(path)

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "other: {}\n",
            "summation_demo: [float32]\n",
            "summation_demo:\n  log_level: INFO\n",
        ],
    )
    def test_missing_sections(self, tmp_path, text):
        """The summation_demo mapping and its dtypes are required."""
        with pytest.raises(ConfigurationError):
            load_config(write_config(tmp_path, text))

    @pytest.mark.parametrize(
        "body",
        [
            "  dtypes: []\n",
            "  dtypes: float64\n",
            "  dtypes: [float16]\n",
            "  dtypes: [float64]\n  log_level: LOUD\n",
            "  dtypes: [float64]\n  sequence: 1.0\n",
            "  dtypes: [float64]\n  sequence: [1.0, one]\n",
            "  dtypes: [float64]\n  sequence: [1.0, true]\n",
            "  dtypes: [float64]\n  trace_classification: yes please\n",
        ],
    )
    def test_invalid_fields(self, tmp_path, body):
        """Invalid dtypes, log levels and sequences are rejected."""
        with pytest.raises(ConfigurationError):
            load_config(write_config(tmp_path, "summation_demo:\n" + body))


class TestGetNestedValue:
    """Test dot-path lookup."""

    def test_present(self):
        config = {"summation_demo": {"log_level": "DEBUG"}}
        assert get_nested_value(config, "summation_demo.log_level") == "DEBUG"

    def test_missing_returns_default(self):
        config = {"summation_demo": {"log_level": "DEBUG"}}
        assert get_nested_value(config, "summation_demo.sequence") is None
        assert get_nested_value(config, "summation_demo.log_level.x", "INFO") == "INFO"


class TestLogging:
    """Test logger configuration."""

    def test_setup_logging_level(self, package_logger):
        """The package logger gets the requested level and one console handler."""
        logger = setup_logging("debug")
        assert logger is package_logger
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_setup_logging_twice(self, package_logger):
        """Reconfiguring replaces handlers instead of duplicating them."""
        setup_logging("INFO")
        logger = setup_logging("WARNING")
        assert len(logger.handlers) == 1
        assert logger.level == logging.WARNING

    def test_log_file(self, package_logger, tmp_path):
        """Messages are also written to the log file."""
        log_file = tmp_path / "logs" / "summation.log"
        logger = setup_logging("INFO", log_file=log_file)
        get_logger("demo").info("float64 scenario done")
        for handler in logger.handlers:
            handler.flush()
        assert "float64 scenario done" in log_file.read_text()

    def test_trace_classification(self, package_logger):
        """Classification messages pass even when the package level is higher."""
        setup_logging("WARNING", trace_classification=True)
        classifier_logger = logging.getLogger("compensated.capabilities.classifier")
        assert classifier_logger.isEnabledFor(logging.DEBUG)
        assert not get_logger("demo").isEnabledFor(logging.INFO)

        setup_logging("WARNING")
        assert not classifier_logger.isEnabledFor(logging.DEBUG)

    def test_numeric_level(self, package_logger):
        """Levels may be given as numbers."""
        assert setup_logging(logging.ERROR).level == logging.ERROR

    def test_get_logger(self):
        """Loggers are children of the package logger."""
        assert get_logger().name == "compensated"
        assert get_logger("demo").name == "compensated.demo"


class TestExceptions:
    """Test the exception hierarchy."""

    def test_capability_error(self):
        """CapabilityError names the type and the missing capability."""
        error = CapabilityError(str, "binary -", "no __sub__")
        assert isinstance(error, CompensatedError)
        assert isinstance(error, TypeError)
        assert error.raw_type is str
        assert str(error) == "Raw value type 'str' is missing the 'binary -' capability: no __sub__"

    def test_configuration_error(self):
        assert issubclass(ConfigurationError, CompensatedError)
