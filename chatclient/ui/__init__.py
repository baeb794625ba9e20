from .cli import ConsoleActor

__all__ = ["ConsoleActor"]
