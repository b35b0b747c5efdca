"""Smoke tests for the CLI."""

import io
from pathlib import Path

import pytest
from rich.console import Console
from typer.testing import CliRunner

from contentconv import cli as cli_module
from contentconv import config as config_module
from contentconv.cli import app

SAMPLE = (
    "slug: my-post\n"
    "title: Hello, World\n"
    "category: news\n"
    'excerpt: A "great" day\n'
    "content: |\n"
    "Line one\n"
    "Line two\n"
    "image: http://x/y.png\n"
)


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _isolated(monkeypatch, tmp_path: Path):
    for key in (
        "CONTENTCONV_MODE",
        "CONTENTCONV_FAILURE_POLICY",
        "CONTENTCONV_INCLUDE_HEADER",
        "CONTENTCONV_OUTPUT_DIR",
        "CONTENTCONV_SAFE_FILENAMES",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(config_module, "GLOBAL_CONFIG_PATH", tmp_path / "missing.toml")


@pytest.fixture
def sample_file(tmp_path: Path) -> Path:
    path = tmp_path / "post.txt"
    path.write_text(SAMPLE, encoding="utf-8")
    return path


class TestCLI:
    """Tests for the CLI entry point."""

    def test_main_help(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "csv" in result.output.lower()

    def test_main_version(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "contentconv" in result.output


class TestParseCommand:
    def test_shows_fields(self, runner: CliRunner, sample_file: Path) -> None:
        result = runner.invoke(app, ["parse", str(sample_file)])
        assert result.exit_code == 0
        assert "my-post" in result.output
        assert "news" in result.output

    def test_reads_stdin(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["parse"], input=SAMPLE)
        assert result.exit_code == 0
        assert "my-post" in result.output

    def test_empty_input_is_not_an_error(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["parse"], input="   \n")
        assert result.exit_code == 0
        assert "no content" in result.output.lower()

    def test_strict_failure_exits_1(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["parse", "--mode", "strict"], input="title: x\nslug: y\n")
        assert result.exit_code == 1
        assert "error" in result.output.lower()

    def test_tolerant_accepts_any_order(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["parse", "--mode", "tolerant"], input="title: x\nslug: y\n")
        assert result.exit_code == 0

    def test_missing_file(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(app, ["parse", str(tmp_path / "nope.txt")])
        assert result.exit_code == 1
        assert "not found" in result.output.lower()


class TestTsvCommand:
    def test_prints_tab_separated_payload(self, runner: CliRunner, sample_file: Path) -> None:
        result = runner.invoke(app, ["tsv", str(sample_file)])
        assert result.exit_code == 0
        columns = result.stdout.rstrip("\n").split("\t")
        assert len(columns) == 7
        assert columns[0].isdigit()
        assert columns[1:4] == ["my-post", "Hello, World", "news"]
        assert columns[-1] == "http://x/y.png"


class TestCsvCommand:
    def test_writes_file(self, runner: CliRunner, sample_file: Path, tmp_path: Path) -> None:
        out_dir = tmp_path / "out"
        result = runner.invoke(app, ["csv", str(sample_file), "--output", str(out_dir)])
        assert result.exit_code == 0
        written = out_dir / "content_my-post.csv"
        assert written.exists()
        text = written.read_text(encoding="utf-8")
        assert '"Hello, World"' in text
        assert '"A ""great"" day"' in text
        assert not text.startswith("id,")

    def test_header_flag(self, runner: CliRunner, sample_file: Path, tmp_path: Path) -> None:
        result = runner.invoke(
            app, ["csv", str(sample_file), "--header", "--output", str(tmp_path)]
        )
        assert result.exit_code == 0
        text = (tmp_path / "content_my-post.csv").read_text(encoding="utf-8")
        assert text.startswith("id,slug,title,category,excerpt,content,image\n")

    def test_stdout(self, runner: CliRunner, sample_file: Path, tmp_path: Path) -> None:
        result = runner.invoke(app, ["csv", str(sample_file), "--stdout"])
        assert result.exit_code == 0
        assert ',my-post,"Hello, World",news,' in result.stdout
        assert not list(tmp_path.glob("*.csv"))

    def test_safe_names_by_default(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(
            app, ["csv", "--output", str(tmp_path)], input="slug: a b\ntitle: T\n"
        )
        assert result.exit_code == 0
        assert (tmp_path / "content_a-b.csv").exists()

    def test_raw_names(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(
            app,
            ["csv", "--raw-names", "--output", str(tmp_path)],
            input="slug: a b\ntitle: T\n",
        )
        assert result.exit_code == 0
        assert (tmp_path / "content_a b.csv").exists()

    def test_config_file_header(self, runner: CliRunner, sample_file: Path, tmp_path: Path) -> None:
        config_path = tmp_path / "conf.toml"
        config_path.write_text("[export]\ninclude_header = true\n")
        result = runner.invoke(
            app, ["--config", str(config_path), "csv", str(sample_file), "--stdout"]
        )
        assert result.exit_code == 0
        assert result.stdout.startswith("id,slug,")

    def test_failure_writes_nothing(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(
            app, ["csv", "--output", str(tmp_path)], input="category: nothing useful\n"
        )
        assert result.exit_code == 1
        assert not list(tmp_path.glob("*.csv"))


class TestCsvFlagOverrides:
    def test_no_header_overrides_config(
        self, runner: CliRunner, sample_file: Path, tmp_path: Path
    ) -> None:
        config_path = tmp_path / "conf.toml"
        config_path.write_text("[export]\ninclude_header = true\n")
        result = runner.invoke(
            app,
            ["--config", str(config_path), "csv", str(sample_file), "--no-header", "--stdout"],
        )
        assert result.exit_code == 0
        assert not result.stdout.startswith("id,")
        assert ",my-post," in result.stdout

    def test_safe_names_overrides_config(self, runner: CliRunner, tmp_path: Path) -> None:
        config_path = tmp_path / "conf.toml"
        config_path.write_text("[export]\nsafe_filenames = false\n")
        out_dir = tmp_path / "out"
        result = runner.invoke(
            app,
            ["--config", str(config_path), "csv", "--safe-names", "--output", str(out_dir)],
            input="slug: a b\ntitle: T\n",
        )
        assert result.exit_code == 0
        assert (out_dir / "content_a-b.csv").exists()
        assert not (out_dir / "content_a b.csv").exists()

    def test_config_raw_names_without_flag(self, runner: CliRunner, tmp_path: Path) -> None:
        config_path = tmp_path / "conf.toml"
        config_path.write_text("[export]\nsafe_filenames = false\n")
        out_dir = tmp_path / "out"
        result = runner.invoke(
            app,
            ["--config", str(config_path), "csv", "--output", str(out_dir)],
            input="slug: a b\ntitle: T\n",
        )
        assert result.exit_code == 0
        assert (out_dir / "content_a b.csv").exists()


class TestInputErrors:
    def test_invalid_utf8_file(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "bad.txt"
        path.write_bytes(b"slug: \xff\xfe\ntitle: t")
        result = runner.invoke(app, ["parse", str(path)])
        assert result.exit_code == 1
        assert not isinstance(result.exception, UnicodeDecodeError)
        assert "cannot read" in result.output.lower()


class TestMessagesGoToStderr:
    @pytest.fixture
    def captured_err(self, monkeypatch) -> io.StringIO:
        buffer = io.StringIO()
        monkeypatch.setattr(cli_module, "err_console", Console(file=buffer, width=200))
        return buffer

    def test_empty_input_keeps_stdout_clean(
        self, runner: CliRunner, captured_err: io.StringIO
    ) -> None:
        result = runner.invoke(app, ["tsv"], input="  \n")
        assert result.exit_code == 0
        assert result.stdout == ""
        assert "No content to parse." in captured_err.getvalue()

    def test_failure_keeps_stdout_clean(
        self, runner: CliRunner, captured_err: io.StringIO
    ) -> None:
        result = runner.invoke(app, ["tsv"], input="category: nothing useful\n")
        assert result.exit_code == 1
        assert result.stdout == ""
        assert "Error:" in captured_err.getvalue()
