from .conversations import mark_read, send_message

__all__ = ["mark_read", "send_message"]
