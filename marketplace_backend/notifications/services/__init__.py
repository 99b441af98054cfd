from .notify import broadcast, notify, notify_on_commit

__all__ = ["broadcast", "notify", "notify_on_commit"]
