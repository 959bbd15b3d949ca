"""Root test configuration."""

import logging

import pytest
import structlog

from promprobe.config.settings import get_settings
from promprobe.config.target import PrometheusTargetConf
from promprobe.providers.models import Sample


def pytest_configure(config):
    """Configure structlog for tests to suppress debug/info output."""
    logging.basicConfig(level=logging.WARNING, force=True)
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def target_conf():
    return PrometheusTargetConf(address="http://prometheus:9090")


@pytest.fixture
def two_samples():
    """Two samples with distinct labelsets and values 12.5 and 7.0."""
    return [
        Sample(labels={"__name__": "page_rt", "page": "/home"}, value="12.5"),
        Sample(labels={"__name__": "page_rt", "page": "/cart"}, value="7.0"),
    ]
