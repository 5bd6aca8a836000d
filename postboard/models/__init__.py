from postboard.models.comment import Comment
from postboard.models.post import Post
from postboard.models.user import User

__all__ = [
    "Comment",
    "Post",
    "User",
]
