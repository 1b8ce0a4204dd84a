"""Faculty directory models."""

from dataclasses import dataclass, field


@dataclass
class Faculty:
    """A faculty member as shown in the directory."""

    id: str
    name: str
    department: str | None = None
    email: str | None = None
    h_index: int = 0
    citation_count: int = 0
    scopus_id: str | None = None
    research_areas: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "Faculty":
        return cls(
            id=data["_id"],
            name=data.get("name", ""),
            department=data.get("department"),
            email=data.get("email"),
            h_index=data.get("hIndex") or 0,
            citation_count=data.get("citationCount") or 0,
            scopus_id=data.get("scopusId"),
            research_areas=data.get("research_areas") or [],
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "department": self.department,
            "email": self.email,
            "h_index": self.h_index,
            "citation_count": self.citation_count,
            "scopus_id": self.scopus_id,
            "research_areas": self.research_areas,
        }
