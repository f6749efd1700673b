from .review import ReviewRecord
from .user import User

__all__ = ["ReviewRecord", "User"]
