from .admin import AdminContactMessageViewSet
from .info import AdminContactInfoView, ContactInfoView
from .public import ContactSubmitView

__all__ = [
    "AdminContactInfoView",
    "AdminContactMessageViewSet",
    "ContactInfoView",
    "ContactSubmitView",
]
