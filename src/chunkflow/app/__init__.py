from .cli import run
from .composition_root import AppRuntime, build_runtime

__all__ = ["AppRuntime", "build_runtime", "run"]
