from __future__ import annotations


class ItemNotFoundError(LookupError):
    """A unique lookup (post or category by slug) matched no row."""

    def __init__(self, code: str, key: str | None = None):
        self.code = code
        self.key = key
        super().__init__(code if key is None else f"{code}: {key}")


class DataIntegrityError(RuntimeError):
    """Stored rows reference each other inconsistently, e.g. a post whose main category is gone."""
