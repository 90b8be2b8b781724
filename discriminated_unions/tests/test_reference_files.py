import json
from pathlib import Path

import pytest

from discriminated_unions.pipeline import CodeGeneratorConfig, PipelineGenerator


def discover_test_cases():
    """Automatically discover all test cases from the reference_cases directory"""
    test_cases_dir = Path(__file__).parent / "test_data" / "reference_cases"
    test_cases = []

    for test_dir in sorted(test_cases_dir.iterdir()):
        if not test_dir.is_dir() or test_dir.name.startswith("."):
            continue

        manifest_file = test_dir / "manifest.json"
        if not manifest_file.exists():
            continue

        test_cases.append(
            {
                "test_name": test_dir.name,
                "manifest_file": manifest_file,
                "config_file": test_dir / "config.json",
                "expected_dir": test_dir / "expected",
            }
        )

    return test_cases


@pytest.mark.parametrize("test_case", discover_test_cases(), ids=lambda tc: tc["test_name"])
def test_reference_file_generation(test_case):
    """Test union generation against reference files"""
    with open(test_case["manifest_file"]) as f:
        manifest = json.load(f)

    if test_case["config_file"].exists():
        with open(test_case["config_file"]) as f:
            config = CodeGeneratorConfig.from_dict(json.load(f))
    else:
        config = CodeGeneratorConfig()

    sources = PipelineGenerator(config).generate_from_manifest(manifest)

    expected_files = sorted(p.name for p in test_case["expected_dir"].iterdir())
    assert sorted(source.file_name for source in sources) == expected_files

    for source in sources:
        with open(test_case["expected_dir"] / source.file_name) as f:
            reference_code = f.read()

        if source.text != reference_code:
            import difflib

            diff = difflib.unified_diff(
                reference_code.splitlines(keepends=True),
                source.text.splitlines(keepends=True),
                fromfile="reference",
                tofile="generated",
                lineterm="",
            )
            diff_text = "".join(diff)

            pytest.fail(f"Generated code does not match reference for {source.file_name}\n\nDiff:\n{diff_text}")


if __name__ == "__main__":
    test_cases = discover_test_cases()
    print(f"Discovered {len(test_cases)} test cases:")
    for tc in test_cases:
        print(f"  - {tc['test_name']}")
