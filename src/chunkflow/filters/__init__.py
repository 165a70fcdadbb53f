from .text import lower, skip, take, upper
from .wiring import build_filter_registry

__all__ = ["upper", "lower", "skip", "take", "build_filter_registry"]
