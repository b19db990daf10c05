"""
Script Studio - idea to segmented video script.

The segmentation engine is pure and dependency-free. Generation providers,
history stores and identity are injected by the host at runtime.
"""

__version__ = "0.1.0"
