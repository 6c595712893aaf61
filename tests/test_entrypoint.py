import logging

from redash_exporter import __main__ as entrypoint


def test_main_runs_uvicorn_with_listen_address(monkeypatch, caplog):
    calls = []
    monkeypatch.setattr(entrypoint, "configure_logging", lambda level: None)
    monkeypatch.setattr(entrypoint.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))
    caplog.set_level(logging.INFO, logger="redash_exporter")

    entrypoint.main()

    assert len(calls) == 1
    app, kwargs = calls[0]
    assert app is entrypoint.app
    assert kwargs["host"] == entrypoint.settings.listen_host
    assert kwargs["port"] == entrypoint.settings.listen_port
    assert "start Redash exporter." in caplog.text


def test_configure_logging_silences_httpx_request_lines():
    entrypoint.configure_logging("INFO")
    assert logging.getLogger("httpx").getEffectiveLevel() == logging.WARNING
