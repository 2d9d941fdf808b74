"""Module-level defaults. Dataclass configs in ``models`` read from here."""
