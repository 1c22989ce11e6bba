"""Documentation extraction for Go packages held in memory."""

from .config import WalkerConfig, load_config
from .models import Package, Source, WalkDepth, WalkMode, WalkRequest, WalkType
from .walker import Walker

__all__ = [
    "Package",
    "Source",
    "WalkDepth",
    "WalkMode",
    "WalkRequest",
    "WalkType",
    "Walker",
    "WalkerConfig",
    "load_config",
]
