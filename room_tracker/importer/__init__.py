"""Checklist importer: README -> categories and rooms in Supabase."""

from .parser import (
    CATEGORY_NAME_MAP,
    normalize_category_name,
    parse_checklist,
    read_checklist,
    strip_title_prefix,
)
from .seeder import ChecklistSeeder, SeedReport

__all__ = [
    "CATEGORY_NAME_MAP",
    "ChecklistSeeder",
    "SeedReport",
    "normalize_category_name",
    "parse_checklist",
    "read_checklist",
    "strip_title_prefix",
]
