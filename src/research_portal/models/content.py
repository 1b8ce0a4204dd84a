"""Magazine content and engagement models from the content service."""

from dataclasses import dataclass, field
from typing import Literal

MagazineStatus = Literal["pending", "online", "archived"]


@dataclass
class Comment:
    """Reader comment on a magazine."""

    id: str
    body: str
    created_by: str | None = None
    created_at: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "Comment":
        return cls(
            id=data["_id"],
            body=data.get("body", ""),
            created_by=data.get("created_by"),
            created_at=data.get("createdAt"),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "body": self.body,
            "created_by": self.created_by,
            "created_at": self.created_at,
        }


@dataclass
class Magazine:
    """Magazine article as listed and displayed by the portal."""

    id: str
    title: str
    subtitle: str = ""
    image_url: str = ""
    body: str = ""  # Markdown, rendered client-side
    est_read_time: int = 0
    status: MagazineStatus = "pending"
    author: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    comments: list[Comment] = field(default_factory=list)
    likes_count: int = 0
    comments_count: int = 0

    @classmethod
    def from_dict(cls, data: dict) -> "Magazine":
        created_by = data.get("created_by")
        if isinstance(created_by, dict):
            author = created_by.get("name")
        else:
            author = created_by
        return cls(
            id=data["_id"],
            title=data.get("title", ""),
            subtitle=data.get("subtitle", ""),
            image_url=data.get("image_url", ""),
            body=data.get("body", ""),
            est_read_time=data.get("est_read_time", 0),
            status=data.get("status", "pending"),
            author=author,
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
            comments=[Comment.from_dict(c) for c in data.get("comments") or []],
            likes_count=data.get("likesCount", 0),
            comments_count=data.get("commentsCount", 0),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "subtitle": self.subtitle,
            "image_url": self.image_url,
            "body": self.body,
            "est_read_time": self.est_read_time,
            "status": self.status,
            "author": self.author,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
            "comments": [c.to_dict() for c in self.comments],
            "likes_count": self.likes_count,
            "comments_count": self.comments_count,
        }


@dataclass
class Analytics:
    """Likes and comments attached to one magazine."""

    id: str
    content_id: str
    likes: int = 0
    comments: list[Comment] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "Analytics":
        return cls(
            id=data["_id"],
            content_id=data.get("content", ""),
            likes=len(data.get("likes") or []),
            comments=[Comment.from_dict(c) for c in data.get("comments") or []],
        )


@dataclass
class Pagination:
    """Server-side page metadata."""

    current_page: int = 1
    total_pages: int = 1
    total_count: int = 0
    limit: int = 9
    has_next_page: bool = False
    has_prev_page: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> "Pagination":
        return cls(
            current_page=data.get("currentPage", 1),
            total_pages=data.get("totalPages", 1),
            total_count=data.get("totalCount", 0),
            limit=data.get("limit", 9),
            has_next_page=data.get("hasNextPage", False),
            has_prev_page=data.get("hasPrevPage", False),
        )

    def to_dict(self) -> dict:
        return {
            "current_page": self.current_page,
            "total_pages": self.total_pages,
            "total_count": self.total_count,
            "limit": self.limit,
            "has_next_page": self.has_next_page,
            "has_prev_page": self.has_prev_page,
        }


@dataclass
class MagazinePage:
    """One page of magazines."""

    magazines: list[Magazine]
    pagination: Pagination
