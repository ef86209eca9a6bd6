"""CLI tests for nullguard.main."""

from pathlib import Path

from typer.testing import CliRunner

from nullguard.config import get_default_config
from nullguard.main import app, run_rules
from nullguard.rules.base import Rule

runner = CliRunner()


def test_analyze_file_with_findings(tmp_path):
    js_file = tmp_path / "app.js"
    js_file.write_text("if (a == null) {}\nb === undefined;\n")
    result = runner.invoke(app, [str(js_file)])
    assert result.exit_code == 1
    lines = result.output.strip().splitlines()
    assert len(lines) == 2
    assert lines[0].endswith(
        "app.js:1:10: WARNING [no-undefined-or-null-comparison] Comparison operand is null"
    )
    assert lines[1].endswith(
        "app.js:2:7: WARNING [no-undefined-or-null-comparison] Comparison operand is undefined"
    )


def test_analyze_clean_file(tmp_path):
    js_file = tmp_path / "clean.js"
    js_file.write_text("if (a === b) {}\n")
    result = runner.invoke(app, [str(js_file)])
    assert result.exit_code == 0
    assert "No findings." in result.output


def test_allow_flags(tmp_path):
    js_file = tmp_path / "app.js"
    js_file.write_text("a == null;\nb == undefined;\n")

    result = runner.invoke(app, [str(js_file), "--allow-null-check"])
    assert result.exit_code == 1
    assert "Comparison operand is undefined" in result.output
    assert "Comparison operand is null" not in result.output

    result = runner.invoke(
        app, [str(js_file), "--allow-null-check", "--allow-undefined-check"]
    )
    assert result.exit_code == 0


def test_analyze_directory(tmp_path):
    (tmp_path / "src").mkdir()
    (tmp_path / "node_modules").mkdir()
    (tmp_path / "src" / "a.js").write_text("x != null;\n")
    (tmp_path / "src" / "b.ts").write_text("let y: number | undefined;\ny !== undefined;\n")
    (tmp_path / "node_modules" / "c.js").write_text("z == null;\n")
    result = runner.invoke(app, [str(tmp_path)])
    assert result.exit_code == 1
    lines = result.output.strip().splitlines()
    assert len(lines) == 2
    assert "a.js:1:6" in lines[0]
    assert "b.ts:2:7" in lines[1]


def test_unsupported_file_extension(tmp_path):
    py_file = tmp_path / "script.py"
    py_file.write_text("x = None\n")
    result = runner.invoke(app, [str(py_file)])
    assert result.exit_code == 2


def test_rich_output(tmp_path):
    js_file = tmp_path / "app.js"
    js_file.write_text("a == null;\n")
    result = runner.invoke(app, [str(js_file), "--format", "rich", "--verbose"])
    assert result.exit_code == 1
    assert "[no-undefined-or-null-comparison]" in result.output
    assert "1 finding" in result.output
    assert "Summary" in result.output


class _ExplodingRule(Rule):
    id = "exploding"
    name = "Always fails"

    def run(self, context, config):
        raise RuntimeError("boom")


def test_run_rules_continues_after_rule_failure(tmp_path, caplog):
    js_file = tmp_path / "app.js"
    js_file.write_text("a == null;\n")
    config = get_default_config()
    config.rules = [_ExplodingRule(), *config.rules]
    findings = run_rules([js_file], config)
    assert len(findings) == 1
    assert "Rule exploding failed" in caplog.text


def test_run_rules_skips_unreadable_file(tmp_path):
    js_file = tmp_path / "app.js"
    js_file.write_text("a == null;\n")
    findings = run_rules([Path(tmp_path / "missing.js"), js_file], get_default_config())
    assert len(findings) == 1
