from .contact_info import ContactInfo
from .contact_message import ContactMessage

__all__ = ["ContactInfo", "ContactMessage"]
