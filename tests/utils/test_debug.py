import logging

from skipsync.utils import debug as dbg


def test_debug_silent_by_default(monkeypatch, capsys):
    monkeypatch.delenv("SKIPSYNC_DEBUG", raising=False)
    dbg.debug("hidden message")
    captured = capsys.readouterr()
    assert "hidden message" not in captured.err
    assert "hidden message" not in captured.out


def test_debug_goes_to_stderr_only(monkeypatch, capsys):
    monkeypatch.setenv("SKIPSYNC_DEBUG", "1")
    dbg.debug("visible message")
    captured = capsys.readouterr()
    assert "[DEBUG] skipsync: visible message" in captured.err
    assert captured.out == ""


def test_module_loggers_share_the_handler(monkeypatch, capsys):
    monkeypatch.setenv("SKIPSYNC_DEBUG", "true")
    dbg.get_logger()
    logging.getLogger("skipsync.metadata.clients.jikan").debug("child record")
    captured = capsys.readouterr()
    assert "skipsync.metadata.clients.jikan: child record" in captured.err
    assert captured.out == ""


def test_handler_attached_once():
    dbg.get_logger()
    logger = dbg.get_logger()
    handlers = [h for h in logger.handlers if isinstance(h, dbg._StderrHandler)]
    assert len(handlers) == 1


def test_warn_and_error_reach_logger(caplog):
    with caplog.at_level(logging.WARNING, logger="skipsync"):
        dbg.warn("careful")
        dbg.error("broken")
    assert [r.levelname for r in caplog.records] == ["WARNING", "ERROR"]
