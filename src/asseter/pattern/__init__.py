"""
Instance lifecycle helpers (Singleton and Multiton registries).
"""

from .registry import (
    Initializable,
    InstanceRegistry,
    ManagedInstanceError,
    Multiton,
    RegistryClosedError,
    RegistryError,
    Singleton,
    UnmanageableTypeError,
    seal,
)

__all__ = [
    "Initializable",
    "InstanceRegistry",
    "ManagedInstanceError",
    "Multiton",
    "RegistryClosedError",
    "RegistryError",
    "Singleton",
    "UnmanageableTypeError",
    "seal",
]
