import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from discriminated_unions.discriminated_unions import collect_sources, discriminated_unions

TEST_DATA = Path(__file__).parent / "test_data"
SHAPE = TEST_DATA / "sources" / "Shape.cs"
SHAPE_MANIFEST = TEST_DATA / "reference_cases" / "shape_record_capability" / "manifest.json"


@pytest.fixture
def runner():
    return CliRunner()


def test_generate_from_source(runner, tmp_path):
    result = runner.invoke(discriminated_unions, [str(SHAPE), str(tmp_path)])
    assert result.exit_code == 0, result.output
    text = (tmp_path / "Demo.Shape.g.cs").read_text(encoding="utf-8")
    assert "public static partial Demo.Shape Circle(double radius) => new global::Demo.Circle(radius);" in text
    assert "global::System.Func<double, TResult> circle," in text


def test_existing_output_requires_force(runner, tmp_path):
    (tmp_path / "Demo.Shape.g.cs").write_text("old")

    result = runner.invoke(discriminated_unions, [str(SHAPE), str(tmp_path)])
    assert result.exit_code == 1
    assert "already exists" in result.output
    assert (tmp_path / "Demo.Shape.g.cs").read_text() == "old"

    result = runner.invoke(discriminated_unions, ["--force", str(SHAPE), str(tmp_path)])
    assert result.exit_code == 0, result.output
    assert (tmp_path / "Demo.Shape.g.cs").read_text(encoding="utf-8") != "old"


def test_dry_run(runner, tmp_path):
    out = tmp_path / "out"
    result = runner.invoke(discriminated_unions, ["--dry-run", "--attribute-source", str(SHAPE), str(out)])
    assert result.exit_code == 0, result.output
    assert "DiscriminatedUnionAttribute.g.cs" in result.output
    assert "Demo.Shape.g.cs" in result.output
    assert not out.exists()


def test_manifest_input(runner, tmp_path):
    result = runner.invoke(discriminated_unions, ["--manifest", str(SHAPE_MANIFEST), str(tmp_path)])
    assert result.exit_code == 0, result.output
    assert (tmp_path / "Demo.Shape.g.cs").exists()


def test_no_inputs(runner, tmp_path):
    result = runner.invoke(discriminated_unions, [str(tmp_path)])
    assert result.exit_code == 2
    assert "--manifest" in result.output


def test_syntax_error_is_reported(runner, tmp_path):
    result = runner.invoke(discriminated_unions, [str(TEST_DATA / "sources" / "Invalid.cs"), str(tmp_path / "out")])
    assert result.exit_code == 1
    assert "Invalid.cs" in result.output


def test_style_option(runner, tmp_path):
    result = runner.invoke(discriminated_unions, ["--style", "capability", str(SHAPE), str(tmp_path)])
    assert result.exit_code == 0, result.output
    text = (tmp_path / "Demo.Shape.g.cs").read_text(encoding="utf-8")
    assert "public static partial Demo.Shape Circle(double radius) => new Implementations.Circle(radius);" in text
    assert "file sealed" not in text


def test_config_file(runner, tmp_path):
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"reference_style": "capability", "add_generation_comment": False}))
    out = tmp_path / "out"

    result = runner.invoke(discriminated_unions, ["--config", str(config), str(SHAPE), str(out)])
    assert result.exit_code == 0, result.output
    text = (out / "Demo.Shape.g.cs").read_text(encoding="utf-8")
    assert text.startswith("#nullable enable\n")
    assert "public sealed record Dot() : Shape, Shape.Cases.Dot;" in text


def test_collect_sources_skips_generated_files(tmp_path):
    (tmp_path / "nested").mkdir()
    (tmp_path / "nested" / "Shape.cs").write_text(SHAPE.read_text(encoding="utf-8"), encoding="utf-8")
    (tmp_path / "nested" / "Demo.Shape.g.cs").write_text("not C# {", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("ignored")

    sources = collect_sources((str(tmp_path),))
    assert list(sources) == [str(tmp_path / "nested" / "Shape.cs")]


def test_directory_input(runner, tmp_path):
    src = tmp_path / "src"
    src.mkdir()
    (src / "Shape.cs").write_text(SHAPE.read_text(encoding="utf-8"), encoding="utf-8")
    (src / "Stale.g.cs").write_text("not C# {", encoding="utf-8")

    result = runner.invoke(discriminated_unions, [str(src), str(tmp_path / "out")])
    assert result.exit_code == 0, result.output
    assert sorted(p.name for p in (tmp_path / "out").iterdir()) == ["Demo.Shape.g.cs"]
