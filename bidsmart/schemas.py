"""Pydantic schemas for stored records, model output and API payloads."""

from datetime import date, datetime
from typing import Annotated, Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator
from pydantic.alias_generators import to_camel

ProjectStatus = Literal["pending", "designing", "quoting", "submitted", "archived"]
ProjectSource = Literal["crawled", "manual"]
CaseResult = Literal["won", "lost", "unknown"]
TenderStatus = Literal["new", "confirmed", "ignored"]


class CamelModel(BaseModel):
    """Stored documents use camelCase keys; Python code uses snake_case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class BidProject(CamelModel):
    """A tender being pursued."""

    id: str
    name: str
    client: str
    industry: str
    budget: str
    deadline: date
    status: ProjectStatus
    source: ProjectSource
    requirements: str = ""
    created_at: date
    updated_at: date


class CaseRecord(CamelModel):
    """Archived outcome of a finished project."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    project_id: str
    name: str
    industry: str
    scale: str
    final_quote: float
    result: CaseResult
    design_summary: str = ""
    archived_at: date


class ParsedTender(BaseModel):
    """One tender record extracted by the model."""

    title: str = Field(min_length=1)
    client: Optional[str] = None
    industry: Optional[str] = None
    budget: Optional[str] = None
    deadline: Optional[str] = None
    requirements: Optional[str] = None
    source_url: Optional[str] = None

    @field_validator("title", mode="before")
    @classmethod
    def _strip_title(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator(
        "client", "industry", "budget", "deadline", "requirements", "source_url",
        mode="before",
    )
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:
        # Models sometimes answer budgets as numbers or requirements as lists
        if value is None:
            return None
        if isinstance(value, str):
            return value.strip() or None
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        if isinstance(value, list) and all(isinstance(v, str) for v in value):
            return "；".join(v.strip() for v in value if v.strip()) or None
        return value


class TenderOut(BaseModel):
    """Tender candidate as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    crawl_config_id: Optional[int] = None
    title: str
    client: Optional[str] = None
    industry: Optional[str] = None
    budget: Optional[str] = None
    deadline: Optional[str] = None
    requirements: Optional[str] = None
    source_url: Optional[str] = None
    status: TenderStatus
    project_id: Optional[str] = None
    created_at: datetime


class CrawlConfigIn(BaseModel):
    """Create/update payload for a crawl config."""

    name: str = Field(min_length=1)
    url: str = Field(min_length=1)
    keywords: List[str] = Field(default_factory=list)
    enabled: bool = True

    @field_validator("keywords", mode="before")
    @classmethod
    def _clean_keywords(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, list):
            return [k.strip() for k in value if isinstance(k, str) and k.strip()]
        return value


class CrawlConfigOut(BaseModel):
    """Crawl config as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    url: str
    keywords: List[str] = Field(default_factory=list)
    enabled: bool
    last_crawled_at: Optional[datetime] = None
    created_at: datetime


class ScrapeResult(BaseModel):
    """Outcome of one scrape call."""

    success: bool
    tenders: List[ParsedTender] = Field(default_factory=list)
    raw_markdown: str = ""
    source_url: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
    error: Optional[str] = None
    status_code: int = 200

    def to_response(self) -> Dict[str, Any]:
        if not self.success:
            return {"success": False, "error": self.error}
        return {
            "success": True,
            "tenders": [t.model_dump() for t in self.tenders],
            "rawMarkdown": self.raw_markdown,
            "sourceUrl": self.source_url,
            "metadata": self.metadata,
        }


class SearchResult(BaseModel):
    """Outcome of one search call."""

    success: bool
    tenders: List[ParsedTender] = Field(default_factory=list)
    search_result_count: int = 0
    error: Optional[str] = None
    status_code: int = 200

    def to_response(self) -> Dict[str, Any]:
        if not self.success:
            return {"success": False, "error": self.error}
        return {
            "success": True,
            "tenders": [t.model_dump() for t in self.tenders],
            "searchResultCount": self.search_result_count,
        }


class ScrapeRequest(BaseModel):
    url: Optional[str] = None
    keywords: Optional[List[str]] = None


class SearchRequest(BaseModel):
    query: Optional[str] = None
    keywords: Optional[List[str]] = None
    limit: Optional[int] = None


class ProjectCreateRequest(BaseModel):
    name: str = Field(min_length=1)
    client: str = ""
    industry: str = ""
    budget: str = ""
    deadline: date
    requirements: str = ""


class StatusUpdateRequest(BaseModel):
    status: ProjectStatus


class ArchiveRequest(CamelModel):
    result: CaseResult = "unknown"
    final_quote: float = Field(default=0.0, ge=0)
    design_summary: str = ""
    scale: Optional[str] = None


class AdHocSearchRequest(BaseModel):
    query: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
