from .filter import should_delete

__all__ = ["should_delete"]
