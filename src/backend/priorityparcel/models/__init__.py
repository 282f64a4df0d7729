from .user import User, USER_ROLES
from .contact_message import ContactMessage
from .prijs_offerte import PrijsOfferte
from .zending import Zending, ZendingUpdate, ZENDING_STATUSES

__all__ = [
    "User",
    "USER_ROLES",
    "ContactMessage",
    "PrijsOfferte",
    "Zending",
    "ZendingUpdate",
    "ZENDING_STATUSES",
]
