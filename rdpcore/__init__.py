"""Display-processor worker state and colour combiner model."""

__version__ = "0.1.0"
__all__ = ["state", "combine", "combiner"]