from .profile import Profile
from .ikigai import IkigaiMap
from .ledger import Reward, Penalty
from .streak import Streak
from .achievement import Achievement
from .goal import Goal, SubGoal, Milestone, GoalFeedback
from .challenge import Challenge
from .reflection import DailyReflection
from .community import (
    Community,
    CommunityPost,
    PostLike,
    PostComment,
    TeamChallenge,
    TeamChallengeParticipant,
)

__all__ = [
    "Profile",
    "IkigaiMap",
    "Reward",
    "Penalty",
    "Streak",
    "Achievement",
    "Goal",
    "SubGoal",
    "Milestone",
    "GoalFeedback",
    "Challenge",
    "DailyReflection",
    "Community",
    "CommunityPost",
    "PostLike",
    "PostComment",
    "TeamChallenge",
    "TeamChallengeParticipant",
]
