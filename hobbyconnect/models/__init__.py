from hobbyconnect.models.comment import Comment
from hobbyconnect.models.post import DEFAULT_CATEGORY, Post, PostLike
from hobbyconnect.models.user import User

__all__ = [
    "Comment",
    "DEFAULT_CATEGORY",
    "Post",
    "PostLike",
    "User",
]
