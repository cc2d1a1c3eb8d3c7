"""
Functional tests driven by test_data/functional_tests.json.

Each case names an input (example value or schema), a config, and the
patterns expected in (or absent from) each generated file.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from json_to_pojo.pipeline import GeneratorConfig, PojoGenerator


def load_test_cases():
    """Load all test cases from test_data/functional_tests.json."""
    test_data_path = Path(__file__).parent / "test_data" / "functional_tests.json"
    with open(test_data_path) as f:
        return json.load(f)


@pytest.mark.parametrize("test_case", load_test_cases(), ids=lambda case: case["name"])
def test_functional_generation(test_case):
    config = GeneratorConfig.from_dict(test_case.get("config", {}))
    result = PojoGenerator(config).generate(test_case["kind"], json.dumps(test_case["input"]))

    if "expected_files" in test_case:
        assert list(result.files) == test_case["expected_files"]

    for file_name, patterns in test_case.get("expected", {}).items():
        source = result.files[file_name]
        for expected in patterns:
            assert expected in source, f"Expected '{expected}' not found in {file_name}:\n{source}"

    for file_name, patterns in test_case.get("not_expected", {}).items():
        source = result.files[file_name]
        for unexpected in patterns:
            assert unexpected not in source, f"Unexpected '{unexpected}' found in {file_name}:\n{source}"


if __name__ == "__main__":
    pytest.main([__file__])
