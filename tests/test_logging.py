import logging

import pytest

from termview import logging as tv_logging
from termview import notify
from termview.ctlseqs import SGR_FG_RED, SGR_FG_YELLOW, SGR_NORMAL
from termview.logging import Filter, init_log, log, log_exception

from . import log_session  # noqa: F401

logger = logging.getLogger("termview-cli.test")


@pytest.fixture
def log_file(tmp_path, log_session):  # noqa: F811
    return tmp_path / "logs" / "termview.log"


def start(log_file, level=logging.WARNING, **flags):
    options = dict(debug=False, quiet=False, verbose=False, verbose_log=False)
    options.update(flags)
    init_log(str(log_file), level, *options.values())


class TestNotify:
    def test_levels(self, capsys, log_session):  # noqa: F811
        notify.notify("info")
        notify.notify("warning", notify.WARNING)
        notify.notify("error", notify.ERROR)
        notify.notify("critical", notify.CRITICAL, "ctx")
        out, err = capsys.readouterr()
        assert not out
        assert err.splitlines() == [
            "info",
            f"{SGR_FG_YELLOW}warning{SGR_NORMAL}",
            f"{SGR_FG_RED}error{SGR_NORMAL}",
            f"{SGR_FG_RED}ctx: critical{SGR_NORMAL}",
        ]

    def test_quiet(self, capsys, monkeypatch, log_session):  # noqa: F811
        monkeypatch.setattr(tv_logging, "QUIET", True)
        notify.notify("error", notify.ERROR)
        notify.notify("critical", notify.CRITICAL)
        assert capsys.readouterr().err == f"{SGR_FG_RED}critical{SGR_NORMAL}\n"

    def test_verbose(self, capsys, monkeypatch, log_session):  # noqa: F811
        notify.notify("hidden", verbose=True)
        assert not capsys.readouterr().err
        monkeypatch.setattr(tv_logging, "VERBOSE", True)
        notify.notify("shown", verbose=True)
        assert capsys.readouterr().err == "shown\n"


class TestInitLog:
    def test_creates_file(self, log_file):
        start(log_file, logging.INFO)
        assert log_file.is_file()
        assert "Starting a new session" in log_file.read_text()
        assert logging.getLogger().level == logging.INFO

    @pytest.mark.parametrize(
        "flags,level",
        [
            ({}, logging.WARNING),
            ({"verbose": True}, logging.INFO),
            ({"verbose_log": True}, logging.INFO),
            ({"debug": True}, logging.DEBUG),
        ],
    )
    def test_level(self, log_file, flags, level):
        start(log_file, **flags)
        assert logging.getLogger().level == level

    def test_debug_level_implies_debug(self, log_file):
        start(log_file, logging.DEBUG)
        assert tv_logging.DEBUG
        assert not tv_logging.VERBOSE

    def test_flags(self, log_file):
        start(log_file, quiet=True)
        assert tv_logging.QUIET
        assert not tv_logging.DEBUG
        assert not tv_logging.VERBOSE
        assert not tv_logging.VERBOSE_LOG

    def test_warnings(self, log_file, capsys):
        start(log_file)
        tv_logging._log_warning("Watch out", UserWarning, "file.py", 1)
        assert "Watch out" in log_file.read_text()
        assert "view the logs" in capsys.readouterr().err


class TestLog:
    def test_direct(self, log_file, capsys):
        start(log_file)
        log("to both", logger, logging.ERROR)
        log("to file", logger, logging.ERROR, direct=False)
        log("to console", logger, logging.ERROR, file=False)
        text = log_file.read_text()
        assert "to both" in text
        assert "to file" in text
        assert "to console" not in text
        err = capsys.readouterr().err
        assert "to both" in err
        assert "to file" not in err
        assert "to console" in err

    def test_below_level(self, log_file, capsys):
        start(log_file)
        log("ignored", logger, logging.INFO, direct=False)
        assert "ignored" not in log_file.read_text()

    @pytest.mark.parametrize(
        "flags,in_file,on_console",
        [
            ({}, False, False),
            ({"verbose": True}, True, True),
            ({"verbose_log": True}, True, False),
        ],
    )
    def test_verbose(self, log_file, capsys, flags, in_file, on_console):
        start(log_file, **flags)
        log("details", logger, verbose=True)
        assert ("details" in log_file.read_text()) is in_file
        assert ("details" in capsys.readouterr().err) is on_console

    @pytest.mark.parametrize(
        "flags,expected",
        [
            ({}, "Failed\n"),
            ({"verbose": True}, "Failed due to: (builtins.ValueError) bad"),
            ({"debug": True}, "Traceback"),
        ],
    )
    def test_exception(self, log_file, flags, expected):
        start(log_file, **flags)
        try:
            raise ValueError("bad")
        except ValueError:
            log_exception("Failed", logger)
        assert expected in log_file.read_text()

    def test_exception_direct(self, log_file, capsys):
        start(log_file, verbose=True)
        try:
            raise ValueError("bad")
        except ValueError:
            log_exception("Failed", logger, direct=True, fatal=True)
        assert f"{SGR_FG_RED}Failed{SGR_NORMAL}" in capsys.readouterr().err


def test_filter():
    filter_ = Filter({"PIL"})
    record = logging.LogRecord("PIL.PngImagePlugin", 10, "", 0, "", (), None)
    assert not filter_.filter(record)
    record.name = "termview.sources"
    assert filter_.filter(record)
    filter_.add("termview")
    assert not filter_.filter(record)
    filter_.remove("termview")
    assert filter_.filter(record)
