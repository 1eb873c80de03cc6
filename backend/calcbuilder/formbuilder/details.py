"""
Form details step: calculator name and URL slug.
"""

import re
from typing import Dict

from calcbuilder.formbuilder.configuration import FormConfiguration

SLUG_PATTERN = re.compile(r"^[a-z0-9-]+$")

_TRANSLITERATE = [
    (re.compile(r"[åäà]"), "a"),
    (re.compile(r"[öø]"), "o"),
    (re.compile(r"[éê]"), "e"),
]


def generate_slug(name: str) -> str:
    """'Städning Plus' -> 'stadning-plus'"""
    slug = name.lower()
    for pattern, replacement in _TRANSLITERATE:
        slug = pattern.sub(replacement, slug)
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


def clean_slug(slug: str) -> str:
    slug = re.sub(r"[^a-z0-9-]", "", slug.lower())
    return re.sub(r"-+", "-", slug).strip("-")


def validate_details(config: FormConfiguration) -> Dict[str, str]:
    """Field name -> error message; empty when the step may proceed."""
    errors = {}
    if not config.name.strip():
        errors["name"] = "Calculator name is required"
    if not config.slug.strip():
        errors["slug"] = "URL slug is required"
    elif not SLUG_PATTERN.match(config.slug):
        errors["slug"] = "Slug can only contain lowercase letters, numbers, and hyphens"
    return errors
