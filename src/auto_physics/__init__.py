"""Auto Physics: physics question generation serialized through a sequential task queue."""

__version__ = "0.1.0"
