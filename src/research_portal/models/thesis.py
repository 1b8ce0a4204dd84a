"""Thesis and department collection records from the hierarchy service."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ThesisRecord:
    """
    A thesis as stored by the repository (Dublin Core fields).

    Partial records arrive with the student's thesis list; the detail
    endpoint returns the full record.
    """

    id: int | str
    dc_title: str | None = None
    dc_contributor_author: str | None = None
    dc_contributor_advisor: str | None = None
    dc_date_issued: str | None = None
    dc_subject: str | None = None  # "||" separated
    dc_type: str | None = None
    dc_identifier_uri: str | None = None
    dc_description_abstract: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def title(self) -> str:
        return self.dc_title or "Untitled Thesis"

    @property
    def subjects(self) -> list[str]:
        if not self.dc_subject:
            return []
        return [s.strip() for s in self.dc_subject.split("||") if s.strip()]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "dc_title": self.dc_title,
            "dc_contributor_author": self.dc_contributor_author,
            "dc_contributor_advisor": self.dc_contributor_advisor,
            "dc_date_issued": self.dc_date_issued,
            "dc_subject": self.dc_subject,
            "dc_type": self.dc_type,
            "dc_identifier_uri": self.dc_identifier_uri,
            "dc_description_abstract": self.dc_description_abstract,
            "subjects": self.subjects,
            **self.extra,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ThesisRecord":
        known = {
            "id",
            "dc_title",
            "dc_contributor_author",
            "dc_contributor_advisor",
            "dc_date_issued",
            "dc_subject",
            "dc_type",
            "dc_identifier_uri",
            "dc_description_abstract",
            "subjects",
        }
        return cls(
            id=data.get("id", data.get("_id")),
            dc_title=data.get("dc_title"),
            dc_contributor_author=data.get("dc_contributor_author"),
            dc_contributor_advisor=data.get("dc_contributor_advisor"),
            dc_date_issued=data.get("dc_date_issued"),
            dc_subject=data.get("dc_subject"),
            dc_type=data.get("dc_type"),
            dc_identifier_uri=data.get("dc_identifier_uri"),
            dc_description_abstract=data.get("dc_description_abstract"),
            extra={k: v for k, v in data.items() if k not in known and k != "_id"},
        )


@dataclass
class DepartmentCollection:
    """A department, school or centre with its repository handle."""

    id: str
    name: str
    handle: str

    @classmethod
    def from_dict(cls, data: dict) -> "DepartmentCollection":
        return cls(
            id=str(data.get("id", data.get("_id", ""))),
            name=data["name"],
            handle=data["handle"],
        )
