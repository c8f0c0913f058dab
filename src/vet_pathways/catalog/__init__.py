"""Pre-authored pathway templates shipped as YAML."""

from vet_pathways.catalog.loader import (
    CATALOG_DIR,
    list_templates,
    load_template,
    load_templates,
)

__all__ = ["CATALOG_DIR", "list_templates", "load_template", "load_templates"]
