from .logging import LEVELS, LogMessage

__all__ = ["LEVELS", "LogMessage"]
