"""File-backed users and groups with role bitmasks, attributes, password policies and hashing."""

__version__ = "0.1.0"

__all__ = ["attributes", "bits", "group", "hashing", "policy", "store", "user"]