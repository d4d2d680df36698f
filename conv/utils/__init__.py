"""Shared utilities for the conv package."""

from conv.utils.build_utils import (
    load_yaml_file,
    validate_duplicate_keys,
    validate_required_fields,
)
from conv.utils.resolver import (
    topk_matches,
)

__all__ = [
    # Table loading
    "load_yaml_file",
    "validate_duplicate_keys",
    "validate_required_fields",
    # Resolution
    "topk_matches",
]
