"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "registry-config.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Configuration for dictionary-schema-registry.
# Every value below is the default; delete the lines you do not need to change.

workbook:
  # Sheet holding the data dictionary.
  sheet_name: "Raw Data"
  # 1-based row numbers; data rows must start after the header row.
  header_row: 3
  data_start_row: 4

schema:
  # Dotted prefix marking fields stored in the nested override document.
  document_prefix: "model_specific_overrides"
  # Base URL used to build each schema's $id.
  id_base_url: "https://schemas.example.com/rating-models"

registry:
  # JSON registry file, resolved relative to this configuration file.
  path: "schema-registry.json"

import:
  # Entries synthesized and registered in parallel; 1 keeps processing sequential.
  max_workers: 1

logging:
  # DEBUG, INFO, WARNING, ERROR or CRITICAL.
  level: "INFO"
"""


def build_placeholder_configuration() -> str:
    """Build a YAML configuration scaffold with defaults and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the configuration scaffold to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
