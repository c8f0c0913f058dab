from __future__ import annotations

from functools import lru_cache
from pathlib import Path

import yaml

from vet_pathways.models.template import PathwayTemplate

CATALOG_DIR = Path(__file__).parent


def load_template_file(path: str | Path) -> PathwayTemplate:
    """Load a single pathway template from a YAML file."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Template not found: {path.name}")
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return PathwayTemplate(**data)


@lru_cache(maxsize=None)
def load_templates(catalog_dir: str | Path = CATALOG_DIR) -> tuple[PathwayTemplate, ...]:
    """Load every template in the catalogue, ordered by filename.

    The order is part of the selection contract: the hash index is taken
    modulo this tuple, so reordering files remaps every profile.
    """
    paths = sorted(Path(catalog_dir).glob("*.yaml"))
    if not paths:
        raise FileNotFoundError(f"No pathway templates found in {catalog_dir}")
    return tuple(load_template_file(p) for p in paths)


def load_template(key: str) -> PathwayTemplate:
    """Look up a shipped template by its key."""
    for template in load_templates():
        if template.key == key:
            return template
    raise FileNotFoundError(f"Template not found: {key}")


def list_templates() -> list[str]:
    """List available template keys in selection order."""
    return [t.key for t in load_templates()]
