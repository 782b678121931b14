from .user import User
from .gym import Gym
from .membership import Membership
from .check_in import CheckIn

from .gym_class import GymClass, ClassSchedule
from .booking import Booking

from .exercises import Exercise
from .workout import Workout
from .workout_session import WorkoutSession
from .workout_log import WorkoutLog

from .goal import Goal
from .body_metric import BodyMetric

__all__ = [
    "User", "Gym", "Membership", "CheckIn",
    "GymClass", "ClassSchedule", "Booking",
    "Exercise", "Workout", "WorkoutSession", "WorkoutLog",
    "Goal", "BodyMetric",
]
