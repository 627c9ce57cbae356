import json
import textwrap
from pathlib import Path

from typer.testing import CliRunner

from stackette.cli import app

runner = CliRunner()
EXAMPLE = Path(__file__).resolve().parents[1] / "examples" / "cache_app.yml"


def test_validate_example():
    result = runner.invoke(app, ["validate", str(EXAMPLE)])
    assert result.exit_code == 0, result.output
    assert "all valid" in result.output


def test_synth_writes_templates(tmp_path):
    out = tmp_path / "out"
    result = runner.invoke(app, ["synth", str(EXAMPLE), "--out", str(out)])
    assert result.exit_code == 0, result.output

    template = json.loads((out / "CacheStack.template.json").read_text())
    assert len(template["Resources"]) == 7
    assert (out / "manifest.json").exists()


def test_inspect_prints_tree():
    result = runner.invoke(app, ["inspect", str(EXAMPLE)])
    assert result.exit_code == 0, result.output
    assert "Construct Tree" in result.output
    assert "Sessions" in result.output


def test_invalid_file_exits_with_error(tmp_path):
    bad = tmp_path / "bad.yml"
    bad.write_text(textwrap.dedent(
        """
        stacks:
          - name: S
        """
    ))
    result = runner.invoke(app, ["validate", str(bad)])
    assert result.exit_code == 1
    assert "Invalid file" in result.output


def test_composer_error_exits_with_error(tmp_path):
    bad = tmp_path / "empty.yml"
    bad.write_text(textwrap.dedent(
        """
        stacks:
          - name: S
            vpc: {id: vpc-1}
            clusters:
              - id: Cache
        """
    ))
    result = runner.invoke(app, ["synth", str(bad), "--out", str(tmp_path / "out")])
    assert result.exit_code == 1
    assert "no private subnets" in result.output
