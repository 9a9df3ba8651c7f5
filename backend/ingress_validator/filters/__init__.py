"""Filter kinds known to the router.

Usage:
    from ingress_validator.filters import default_registry

    registry = default_registry()
    registry.get("setPath").check_args(["/foo"])
"""

from ingress_validator.filters.registry import (
    ArgsFilterSpec,
    FilterSpec,
    InvalidFilterParameters,
    Registry,
    default_registry,
)

__all__ = [
    "ArgsFilterSpec",
    "FilterSpec",
    "InvalidFilterParameters",
    "Registry",
    "default_registry",
]
