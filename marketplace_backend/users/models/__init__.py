from .address import Address
from .user import User, UserManager

__all__ = ["Address", "User", "UserManager"]
