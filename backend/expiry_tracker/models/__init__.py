from expiry_tracker.models.user import User, Account, Session
from expiry_tracker.models.grocery import Grocery

__all__ = ["User", "Account", "Session", "Grocery"]
