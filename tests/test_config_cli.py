"""Tests for configuration loading and the console."""

import logging

import pytest

from fakedis import CommandError, Config, DataStore, FakeConnection
from fakedis.cli import FakedisCLI, format_reply, setup_logging


class TestConfig:

    def test_defaults(self) -> None:
        config = Config()
        assert config.read_timeout == 5.0
        assert config.loglevel == "info"

    def test_from_file(self, tmp_path) -> None:
        path = tmp_path / "fakedis.conf"
        path.write_text(
            "# connection settings\n"
            "read_timeout 2.5\n"
            "\n"
            "LOGLEVEL debug\n"
            "logfile \"/tmp/fakedis.log\"\n"
            "unknown_option 1\n"
        )
        config = Config.from_file(str(path))
        assert config.read_timeout == 2.5
        assert config.loglevel == "debug"
        assert config.logfile == "/tmp/fakedis.log"
        assert config.connect_timeout == 1.0

    def test_missing_file_gives_defaults(self, tmp_path) -> None:
        assert Config.from_file(str(tmp_path / "absent.conf")) == Config()


class TestFormatReply:

    @pytest.mark.parametrize("reply, expected", [
        (None, "(nil)"),
        (5, "(integer) 5"),
        ("bar", '"bar"'),
        (1.5, '"1.5"'),
        ([], "(empty list or set)"),
    ])
    def test_scalars(self, reply, expected) -> None:
        assert format_reply(reply) == expected

    def test_error(self) -> None:
        assert format_reply(CommandError("ERR oops")) == "(error) ERR oops"

    def test_array(self) -> None:
        assert format_reply(["a", None, 3]) == '1) "a"\n2) (nil)\n3) (integer) 3'


class TestCLI:

    @pytest.fixture
    def cli(self) -> FakedisCLI:
        return FakedisCLI(FakeConnection(store=DataStore()))

    def test_parse_input(self, cli: FakedisCLI) -> None:
        assert cli.parse_input('SET k "hello world"') == ["SET", "k", "hello world"]
        assert cli.parse_input("SET k ''") == ["SET", "k", ""]
        assert cli.parse_input("  GET   k  ") == ["GET", "k"]

    def test_send_command(self, cli: FakedisCLI) -> None:
        assert cli.send_command(["SET", "a", "1"]) == '"OK"'
        assert cli.send_command(["INCR", "a"]) == "(integer) 2"
        assert cli.send_command(["NOPE"]).startswith("(error) ERR unknown command")

    def test_run_script(self, cli: FakedisCLI, capsys) -> None:
        assert cli.run(["SET greeting hi", "", "GET greeting", "quit", "GET greeting"]) == 0
        out = capsys.readouterr().out
        assert '"OK"' in out
        assert '"hi"' in out
        assert out.count('"hi"') == 1
        assert cli.connection.connected is False

    def test_setup_logging(self, tmp_path) -> None:
        logger = logging.getLogger("fakedis")
        before = list(logger.handlers)
        logfile = tmp_path / "fakedis.log"
        try:
            setup_logging("debug", str(logfile))
            assert logger.level == logging.DEBUG
            logger.debug("written")
        finally:
            for handler in logger.handlers[len(before):]:
                handler.close()
                logger.removeHandler(handler)
            logger.setLevel(logging.NOTSET)
        assert "written" in logfile.read_text()
