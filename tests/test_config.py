import importlib
import logging

import config


def test_state_code_follows_gstin(monkeypatch):
    monkeypatch.setenv("GST_COMPANY_GSTIN", "27ABCDE1234F1Z5")
    monkeypatch.delenv("GST_COMPANY_STATE_CODE", raising=False)
    try:
        reloaded = importlib.reload(config)
        assert reloaded.COMPANY_INFO["state_code"] == "27"
    finally:
        monkeypatch.undo()
        importlib.reload(config)


def test_explicit_state_code_wins(monkeypatch):
    monkeypatch.setenv("GST_COMPANY_GSTIN", "27ABCDE1234F1Z5")
    monkeypatch.setenv("GST_COMPANY_STATE_CODE", "29")
    try:
        assert importlib.reload(config).COMPANY_INFO["state_code"] == "29"
    finally:
        monkeypatch.undo()
        importlib.reload(config)


def test_configure_logging_accepts_level_names(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))
    config.configure_logging("debug")
    assert calls[0]["level"] == logging.DEBUG
