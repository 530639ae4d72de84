import pytest

from userstore.core.errors import ParseError
from userstore.core.settings import Settings, load_settings


def test_defaults():
    s = load_settings(_env_file=None)
    assert isinstance(s, Settings)
    assert s.database_url.startswith("sqlite")
    assert s.log_level == "INFO"


def test_log_level_is_normalized():
    assert load_settings(log_level=" debug ").log_level == "DEBUG"


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite:///./other.db")
    assert load_settings().database_url == "sqlite:///./other.db"


@pytest.mark.parametrize(
    "overrides",
    [
        {"database_url": "not a database url"},
        {"log_level": "loud"},
        {"sql_echo": "sometimes"},
    ],
)
def test_malformed_values_raise_parse_error(overrides):
    with pytest.raises(ParseError) as ei:
        load_settings(**overrides)
    assert ei.value.kind == "parse_error"
