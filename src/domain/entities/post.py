"""Post domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass
class Like:
    """A single actor's like on a post."""

    user_id: UUID
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class Comment:
    """A comment on a post, with the commenter's name/avatar as of creation."""

    user_id: UUID
    text: str
    name: str = ""
    avatar: str | None = None
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class Post:
    """Domain entity for a Post.

    ``name`` and ``avatar`` are a snapshot of the author taken at creation
    time and are not updated when the account changes later. ``likes`` and
    ``comments`` are kept most-recent-first. ``version`` increases on every
    nested collection write.
    """

    user_id: UUID
    text: str
    name: str = ""
    avatar: str | None = None
    id: UUID = field(default_factory=uuid4)
    likes: list[Like] = field(default_factory=list)
    comments: list[Comment] = field(default_factory=list)
    version: int = 1
    created_at: datetime = field(default_factory=datetime.utcnow)

    def is_liked_by(self, user_id: UUID) -> bool:
        return any(like.user_id == user_id for like in self.likes)
