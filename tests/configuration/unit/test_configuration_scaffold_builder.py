"""Configuration scaffold builder tests."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from dictionary_schema_registry.configuration import (
    Configuration,
    build_placeholder_configuration,
    load_configuration,
    write_placeholder_configuration,
)


def test_build_placeholder_configuration_contains_all_supported_sections() -> None:
    scaffold = build_placeholder_configuration()
    parsed = yaml.safe_load(scaffold)

    assert set(parsed) == {"workbook", "schema", "registry", "import", "logging"}
    assert parsed["workbook"]["sheet_name"] == "Raw Data"
    assert "# Dotted prefix" in scaffold


def test_scaffold_loads_to_default_settings(tmp_path: Path) -> None:
    output_path = write_placeholder_configuration(tmp_path / "registry-config.yaml")

    configuration = load_configuration(output_path)
    defaults = Configuration()

    assert configuration.workbook == defaults.workbook
    assert configuration.schema == defaults.schema
    assert configuration.imports == defaults.imports
    assert configuration.logging == defaults.logging
    assert configuration.registry.path == (tmp_path / "schema-registry.json").resolve()


def test_write_placeholder_configuration_writes_file(tmp_path: Path) -> None:
    output_path = tmp_path / "config.yaml"

    written_path = write_placeholder_configuration(output_path)

    assert written_path == output_path.resolve()
    assert output_path.read_text(encoding="utf-8") == build_placeholder_configuration()


def test_write_placeholder_configuration_fails_when_file_exists(tmp_path: Path) -> None:
    output_path = tmp_path / "config.yaml"
    output_path.write_text("existing", encoding="utf-8")

    with pytest.raises(FileExistsError, match="already exists"):
        write_placeholder_configuration(output_path)

    assert output_path.read_text(encoding="utf-8") == "existing"
