from .hidden_order import HiddenOrder
from .time_entry import TimeEntry
from .user import User

__all__ = ["User", "TimeEntry", "HiddenOrder"]
