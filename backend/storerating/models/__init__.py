from .base import Base
from .user import User
from .store import Store
from .rating import Rating

__all__ = ["Base", "User", "Store", "Rating"]
