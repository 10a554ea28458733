"""Racing league management core: registration, associations, and scoring."""

__version__ = "1.0.0"
