"""
AIDOI suffix and default target URL, derived from the object's title.
"""

import re
from typing import Optional

DEFAULT_RESOLVER = "https://aidoi.org"
MAX_SUFFIX_LENGTH = 50


def slugify_title(title: str) -> str:
    """'My Model: v2 (beta)' -> 'my-model-v2-beta'."""
    slug = re.sub(r"[^a-z0-9]+", "-", (title or "").lower())
    slug = slug.strip("-")
    return slug[:MAX_SUFFIX_LENGTH]


def build_suffix(title: str, version: Optional[str] = None) -> str:
    slug = slugify_title(title)
    if version:
        return f"{slug}/v{version}"
    return slug


def default_target_url(title: str, resolver: str = DEFAULT_RESOLVER) -> str:
    """Landing URL used when the minting form leaves target_url blank."""
    return f"{resolver.rstrip('/')}/{slugify_title(title)}"
