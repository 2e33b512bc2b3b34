"""Evidence Coach - evidence-informed program template compilation and personalization."""

import importlib.metadata

try:
    __version__ = importlib.metadata.version("evidence-coach")
except importlib.metadata.PackageNotFoundError:
    __version__ = "unknown"
