from __future__ import annotations

from pylaxr._redact import redact_for_log


def test_redact_for_log_redacts_broker_credentials() -> None:
    settings = {
        "host": "broker.local",
        "port": 8883,
        "username": "gauge",
        "password": "pw",
        "nested": {"token": "abc"},
    }

    redacted = redact_for_log(settings)
    assert redacted["host"] == "broker.local"
    assert redacted["port"] == 8883
    assert redacted["username"] == "<redacted>"
    assert redacted["password"] == "<redacted>"
    assert redacted["nested"]["token"] == "<redacted>"


def test_redact_for_log_keeps_missing_credentials_visible() -> None:
    assert redact_for_log({"password": None})["password"] is None


def test_redact_for_log_truncates_long_strings() -> None:
    long_value = "x" * 600
    redacted = redact_for_log({"value": long_value}, max_string=10)
    assert redacted["value"].startswith("x" * 10)
    assert "<truncated>" in redacted["value"]


def test_redact_for_log_shortens_payload_bytes() -> None:
    assert redact_for_log(b'{"sound_db":1}') == '{"sound_db":1}'
    assert redact_for_log(b"x" * 600) == "<bytes:600b>"
