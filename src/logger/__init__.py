from .logging_config import AsyncLogger

__all__ = ["AsyncLogger"]
