"""JSON Schema definitions for Document Studio."""

from pathlib import Path

SCHEMA_DIR = Path(__file__).parent


def get_project_schema_path() -> Path:
    """Return the path to the project.schema.json file."""
    return SCHEMA_DIR / "project.schema.json"
