import pydantic
import pytest

from mapstr.mapping import M
from mapstr.redaction import DEFAULT_MASKED_KEYS, LoggingMask, MaskSettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("MAPSTR_MASK_KEYS", "MAPSTR_MASK_REPLACEMENT", "MAPSTR_MASK_CASE_INSENSITIVE"):
        monkeypatch.delenv(name, raising=False)


def test_default_settings() -> None:
    settings = MaskSettings()
    assert settings.keys == list(DEFAULT_MASKED_KEYS)
    assert settings.replacement == "xxxxx"
    assert settings.case_insensitive is True


def test_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MAPSTR_MASK_KEYS", '["token"]')
    monkeypatch.setenv("MAPSTR_MASK_REPLACEMENT", "***")
    monkeypatch.setenv("MAPSTR_MASK_CASE_INSENSITIVE", "false")

    mask = LoggingMask.from_env()
    data = M({"token": "t", "Token": "T", "password": "p"})
    mask(data)
    assert data == {"token": "***", "Token": "T", "password": "p"}


def test_settings_reject_empty_keys() -> None:
    with pytest.raises(pydantic.ValidationError, match="masked keys must not be empty"):
        _ = MaskSettings(keys=["password", ""])


def test_mask_recurses_into_maps_and_map_sequences() -> None:
    data = M(
        {
            "Password": "p",
            "output": {"hosts": ["es:9200"], "username": "elastic"},
            "inputs": [{"url": "http://x"}, {"id": 1}],
            "message": "password=abc",
        },
    )
    LoggingMask()(data)
    assert data == {
        "Password": "xxxxx",
        "output": {"hosts": "xxxxx", "username": "elastic"},
        "inputs": [{"url": "xxxxx"}, {"id": 1}],
        "message": "password=abc",
    }


def test_mask_recurses_into_mixed_and_nested_sequences() -> None:
    data = M(
        {
            "items": [{"password": "p"}, "plain"],
            "matrix": [[{"host": "h"}], ("x", {"url": "u"})],
        },
    )
    LoggingMask()(data)
    assert data == {
        "items": [{"password": "xxxxx"}, "plain"],
        "matrix": [[{"host": "xxxxx"}], ("x", {"url": "xxxxx"})],
    }


def test_mask_only_touches_present_keys() -> None:
    data = M({"name": "a"})
    LoggingMask(MaskSettings(keys=["secret"]))(data)
    assert data == {"name": "a"}


def test_is_masked() -> None:
    mask = LoggingMask(MaskSettings(keys=["Secret"]))
    assert mask.is_masked("secret")
    assert mask.is_masked("SECRET")
    assert not mask.is_masked("secrets")
