"""Deterministic template selection from a profile fingerprint."""

from __future__ import annotations

from collections.abc import Sequence

from vet_pathways.catalog import load_templates
from vet_pathways.models.profile import VeteranProfile
from vet_pathways.models.template import PathwayTemplate

_UINT32 = 0xFFFFFFFF
_INT32_SIGN = 0x80000000


def string_hash(text: str) -> int:
    """Polynomial rolling hash (h = h * 31 + unit) over UTF-16 code units.

    Wrapped to a signed 32-bit integer at every step, absolute value of the
    final result. Matches ``String.hashCode`` style hashing, so "hello"
    gives 99162322. Changing this remaps every existing profile.
    """
    data = text.encode("utf-16-le")
    h = 0
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        h = (h * 31 + unit) & _UINT32
    if h & _INT32_SIGN:
        h -= 1 << 32
    return abs(h)


def fingerprint(profile: VeteranProfile) -> str:
    """MOS + branch + concatenated skills, in submission order."""
    return profile.mos + profile.branch + "".join(profile.technical_skills)


def template_index(profile: VeteranProfile, count: int) -> int:
    if count <= 0:
        raise ValueError("Template catalogue is empty")
    return string_hash(fingerprint(profile)) % count


def select_template(
    profile: VeteranProfile,
    templates: Sequence[PathwayTemplate] | None = None,
) -> PathwayTemplate:
    """Pick the pathway template for a profile. Same inputs, same template."""
    if templates is None:
        templates = load_templates()
    return templates[template_index(profile, len(templates))]
