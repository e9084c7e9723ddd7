"""Unit tests for per-category log level setup."""

import logging

import pytest

from app.config import Settings
from app.infrastructure.logging.log_config import setup_logging


@pytest.fixture
def restore_levels():
    names = ["sqlalchemy.engine", "ContractDocumentPipeline", "uvicorn.access", "httpx"]
    saved = {name: logging.getLogger(name).level for name in names}
    root_level = logging.getLogger().level
    yield
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)
    logging.getLogger().setLevel(root_level)


def test_each_group_gets_its_configured_level(restore_levels):
    settings = Settings(
        _env_file=None,
        log_level="WARNING",
        log_level_sql="DEBUG",
        log_level_pipeline="ERROR",
    )

    applied = setup_logging(settings)

    assert applied["root"] == logging.WARNING
    assert logging.getLogger("sqlalchemy.engine").level == logging.DEBUG
    assert logging.getLogger("ContractDocumentPipeline").level == logging.ERROR
    assert applied["uvicorn.access"] == logging.INFO


def test_unknown_level_name_falls_back_to_info(restore_levels):
    settings = Settings(_env_file=None, log_level_http="chatty")

    applied = setup_logging(settings)

    assert applied["httpx"] == logging.INFO
