"""Tests for the command line interface."""

from pathlib import Path

import pytest

from polyconst import cli

EXAMPLE = Path(__file__).parent.parent / "examples" / "constants.pc"

BAD = """\
static OK: u8 = 1;
static BIG: u8 | i16 = 300;
static NEG: u32 = -1;
"""


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch):
    monkeypatch.setattr(cli, "setup_logging", lambda level: None)


def run(*argv):
    return cli.main(["--pointer-width", "64", *map(str, argv)])


class TestCheck:
    def test_ok(self, capsys):
        assert run("check", EXAMPLE) == 0
        out = capsys.readouterr().out
        assert out.strip() == f"{EXAMPLE}: 6 constant(s) ok"

    def test_errors(self, tmp_path, capsys):
        path = tmp_path / "bad.pc"
        path.write_text(BAD)
        assert run("check", path) == 1
        err = capsys.readouterr().err.splitlines()
        assert err == [
            f"{path}:2:1: error[PC004]: BIG: literal 300 overflows 'u8' (range is 0..=255)",
            f"{path}:3:1: error[PC005]: NEG: negative literal -1 cannot be stored in unsigned tag 'u32'",
            f"{path}: 2 errors",
        ]

    def test_one_bad_file_fails_the_run(self, tmp_path, capsys):
        path = tmp_path / "bad.pc"
        path.write_text(BAD)
        assert run("check", EXAMPLE, path) == 1
        assert "6 constant(s) ok" in capsys.readouterr().out

    def test_missing_file(self, tmp_path, capsys):
        assert run("check", tmp_path / "missing.pc") == 1
        assert "error: file not found" in capsys.readouterr().err

    def test_syntax_error(self, tmp_path, capsys):
        path = tmp_path / "broken.pc"
        path.write_text("static X u8 = 1;")
        assert run("check", path) == 1
        assert capsys.readouterr().err.strip() == f"{path}:1:10: error: expected COLON, got IDENT"


class TestGenerate:
    def test_stdout(self, capsys):
        assert run("generate", EXAMPLE) == 0
        out = capsys.readouterr().out
        assert out.startswith('"""Constants generated by polyconst from constants.pc.')
        assert "class PolymorphicConstantAsciiLineReturn:" in out

    def test_output_file(self, tmp_path, load_generated):
        out = tmp_path / "pkg" / "constants.py"
        assert run("generate", EXAMPLE, "-o", out) == 0
        module = load_generated(out.read_text())
        assert module.HEIGHT.u16 * module.WIDTH.u16 == 512
        assert int(module.ASCII_LINE_RETURN.nz_u8) == 10

    def test_nothing_written_on_failure(self, tmp_path, capsys):
        src = tmp_path / "bad.pc"
        src.write_text(BAD)
        out = tmp_path / "constants.py"
        assert run("generate", src, "-o", out) == 1
        assert not out.exists()
        assert "error[PC004]" in capsys.readouterr().err


class TestSettings:
    def test_config_file(self, tmp_path, capsys):
        config = tmp_path / "polyconst.yaml"
        config.write_text("class_prefix: Const\n")
        assert cli.main(["--config", str(config), "generate", str(EXAMPLE)]) == 0
        assert "class ConstPi:" in capsys.readouterr().out

    def test_missing_config(self, tmp_path, capsys):
        assert cli.main(["--config", str(tmp_path / "nope.yaml"), "check", str(EXAMPLE)]) == 2
        assert "Config file not found" in capsys.readouterr().err

    def test_invalid_log_level(self, capsys):
        assert cli.main(["--log-level", "chatty", "check", str(EXAMPLE)]) == 2
        assert "unknown log level" in capsys.readouterr().err

    def test_pointer_width_choices(self):
        with pytest.raises(SystemExit):
            cli.main(["--pointer-width", "16", "check", str(EXAMPLE)])
