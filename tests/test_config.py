import logging
from logging.handlers import RotatingFileHandler
import os
import pytest
from pydantic import ValidationError

from transaction_service.config import Settings, SumStrategy, load_settings
from transaction_service.logging_config import setup_logging

ENV_VARS = [
    "DATABASE_URL",
    "DB_POOL_SIZE",
    "DB_MAX_OVERFLOW",
    "DB_POOL_TIMEOUT",
    "DB_ECHO",
    "TRANSITIVE_SUM_STRATEGY",
    "LOG_LEVEL",
    "LOG_FILE",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # Run from an empty directory so no stray development.env is picked up
    monkeypatch.chdir(tmp_path)
    return monkeypatch


@pytest.fixture
def restore_root_logger():
    root_logger = logging.getLogger()
    level = root_logger.level
    yield
    # Drop the handlers setup_logging installed, leave pytest's own alone
    for handler in list(root_logger.handlers):
        if type(handler) in (logging.StreamHandler, RotatingFileHandler):
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(level)


def test_defaults(clean_env):
    settings = load_settings()

    assert settings.database_url == "sqlite:///./transactions.db"
    assert settings.db_pool_size == 10
    assert settings.db_max_overflow == 10
    assert settings.transitive_sum_strategy == SumStrategy.QUERY
    assert settings.log_level == "INFO"
    assert settings.log_file is None


def test_reads_environment(clean_env):
    clean_env.setenv("DATABASE_URL", "postgresql://user:pw@db:5432/tx")
    clean_env.setenv("DB_POOL_SIZE", "25")
    clean_env.setenv("DB_ECHO", "true")
    clean_env.setenv("TRANSITIVE_SUM_STRATEGY", "walk")
    clean_env.setenv("LOG_LEVEL", "debug")

    settings = load_settings()

    assert settings.database_url == "postgresql://user:pw@db:5432/tx"
    assert settings.db_pool_size == 25
    assert settings.db_echo is True
    assert settings.transitive_sum_strategy == SumStrategy.WALK
    assert settings.log_level == "DEBUG"


def test_reads_env_file(clean_env, tmp_path):
    env_file = tmp_path / "test.env"
    env_file.write_text("DATABASE_URL=sqlite:///from-file.db\nDB_MAX_OVERFLOW=3\n")

    settings = load_settings(str(env_file))

    assert settings.database_url == "sqlite:///from-file.db"
    assert settings.db_max_overflow == 3


def test_environment_wins_over_env_file(clean_env, tmp_path):
    env_file = tmp_path / "test.env"
    env_file.write_text("DATABASE_URL=sqlite:///from-file.db\n")
    clean_env.setenv("DATABASE_URL", "sqlite:///from-env.db")

    assert load_settings(str(env_file)).database_url == "sqlite:///from-env.db"


def test_empty_log_file_turns_file_log_off(clean_env, tmp_path):
    env_file = tmp_path / "test.env"
    env_file.write_text("LOG_FILE=logs/transactions.log\n")
    assert load_settings(str(env_file)).log_file == "logs/transactions.log"

    clean_env.setenv("LOG_FILE", "")
    assert load_settings(str(env_file)).log_file is None


def test_env_file_does_not_leak_into_environment(clean_env, tmp_path):
    env_file = tmp_path / "test.env"
    env_file.write_text("DATABASE_URL=sqlite:///from-file.db\n")

    load_settings(str(env_file))
    assert "DATABASE_URL" not in os.environ


def test_invalid_strategy(clean_env):
    clean_env.setenv("TRANSITIVE_SUM_STRATEGY", "guess")
    with pytest.raises(ValidationError):
        load_settings()


def test_invalid_pool_size(clean_env):
    clean_env.setenv("DB_POOL_SIZE", "0")
    with pytest.raises(ValidationError):
        load_settings()


def test_invalid_log_level():
    with pytest.raises(ValidationError):
        Settings(log_level="LOUD")


def test_setup_logging_console_only(restore_root_logger):
    setup_logging(Settings(log_level="WARNING"))

    root_logger = logging.getLogger()
    assert root_logger.level == logging.WARNING
    assert len(root_logger.handlers) == 1
    assert isinstance(root_logger.handlers[0], logging.StreamHandler)


def test_setup_logging_with_file(restore_root_logger, tmp_path):
    log_file = tmp_path / "logs" / "transactions.log"
    setup_logging(Settings(log_file=str(log_file)))

    logging.getLogger("transaction_service.test").info("hello from the test")
    for handler in logging.getLogger().handlers:
        handler.flush()

    file_handlers = [
        h for h in logging.getLogger().handlers if isinstance(h, RotatingFileHandler)
    ]
    assert len(file_handlers) == 1
    content = log_file.read_text(encoding="utf-8")
    assert "| INFO     | transaction_service.test | hello from the test" in content
