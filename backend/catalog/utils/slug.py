"""
Slug generation for category names.
"""

import re
import unicodedata

DEFAULT_SLUG = "category"


def create_slug(text: str) -> str:
    """
    Create a URL-safe slug from a display name.

    "Men's Running Shoes" -> "mens-running-shoes". Accents are folded to ASCII;
    names with no usable characters fall back to DEFAULT_SLUG.
    """
    slug = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    slug = slug.lower().strip()
    slug = re.sub(r"['’]", "", slug)
    slug = re.sub(r"[^a-z0-9]+", "-", slug)
    slug = slug.strip("-")
    return slug or DEFAULT_SLUG
