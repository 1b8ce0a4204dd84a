"""Client for the magazine content service."""

from research_portal.clients.http import BackendClient, path_segment
from research_portal.config import settings
from research_portal.models import Analytics, Comment, Magazine, MagazinePage, MagazineStatus, Pagination


class ContentClient(BackendClient):
    """Magazines plus likes and comments."""

    service_name = "content"

    def __init__(self, base_url: str | None = None, **kwargs) -> None:
        kwargs.setdefault("auth_token", settings.auth_token)
        super().__init__(base_url or settings.content_api_url, **kwargs)

    async def magazines(self) -> list[Magazine]:
        data = await self.get_data("/content")
        return [Magazine.from_dict(item) for item in data or []]

    async def online_magazines(self) -> list[Magazine]:
        """Published magazines only (filtered here, the service returns all)."""
        return [m for m in await self.magazines() if m.status == "online"]

    async def paginated_magazines(
        self,
        page: int = 1,
        limit: int = 9,
        status: MagazineStatus | None = None,
    ) -> MagazinePage:
        params: dict[str, str | int] = {"page": page, "limit": limit}
        if status:
            params["status"] = status
        data = await self.get_data("/content/paginated", params=params) or {}
        return MagazinePage(
            magazines=[Magazine.from_dict(item) for item in data.get("magazines") or []],
            pagination=Pagination.from_dict(data.get("pagination") or {}),
        )

    async def magazine(self, magazine_id: str) -> Magazine:
        return Magazine.from_dict(await self.get_data(f"/content/{path_segment(magazine_id)}"))

    async def like(self, content_id: str) -> Analytics:
        return Analytics.from_dict(await self.post_data("/content/like", {"contentId": content_id}))

    async def dislike(self, content_id: str) -> Analytics:
        return Analytics.from_dict(await self.post_data("/content/dislike", {"contentId": content_id}))

    async def add_comment(self, content_id: str, body: str) -> Comment:
        data = await self.post_data("/content/comment", {"contentId": content_id, "body": body})
        return Comment.from_dict(data)

    async def delete_comment(self, content_id: str, comment_id: str) -> None:
        await self.post("/content/uncomment", {"contentId": content_id, "commentId": comment_id})
