"""SQLAlchemy model for blog posts and their optional secret gate."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from quillpost.db.session import Base
from quillpost.db.time import utcnow

if TYPE_CHECKING:
    from .comment import Comment
    from .user import User


class Post(Base):
    """A titled post owned by a single author.

    A secret post keeps a bcrypt digest of its password; a public post never
    has one. The check constraint mirrors the rule enforced by the service.
    """

    __tablename__ = "posts"
    __table_args__ = (
        CheckConstraint(
            "(is_secret AND secret_password_hash IS NOT NULL) "
            "OR (NOT is_secret AND secret_password_hash IS NULL)",
            name="ck_posts_secret_password",
        ),
        Index("ix_posts_author_id", "author_id"),
        Index("ix_posts_created_at", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    author_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    is_secret: Mapped[bool] = mapped_column(nullable=False, default=False)
    secret_password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )
    # Optimistic locking counter; a stale UPDATE raises StaleDataError.
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    author: Mapped[User] = relationship("User", back_populates="posts")
    comments: Mapped[list[Comment]] = relationship(
        "Comment",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="Comment.id",
    )

    __mapper_args__ = {"version_id_col": version}

    def __repr__(self) -> str:
        return f"Post(id={self.id!r}, title={self.title!r}, author_id={self.author_id!r})"
