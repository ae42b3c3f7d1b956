from backend.models.user import User
from backend.models.profile import Profile, UserGoal
from backend.models.meal import Meal

__all__ = ["User", "Profile", "UserGoal", "Meal"]
