from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from enum import Enum

from app.modules.groups.classifier import StatusCategory, StatusFilter


class ManagementField(str, Enum):
    SQUAD = "squad"
    HEAD = "head"
    GESTOR = "gestor"


FIELD_LABELS = {
    "squad": "Squad",
    "head": "Head",
    "gestor": "Gestor",
}


class GroupRecord(BaseModel):
    """Immutable snapshot of one group row merged with its message count."""
    model_config = ConfigDict(frozen=True)

    id: int
    group_key: Optional[str] = None
    name: Optional[str] = None
    status: Optional[str] = None
    summary: Optional[str] = None
    squad: Optional[str] = None
    head: Optional[str] = None
    gestor: Optional[str] = None
    message_count: int = Field(default=0, ge=0)


class GroupCreate(BaseModel):
    group_key: Optional[str] = None
    name: Optional[str] = None
    status: Optional[str] = None
    summary: Optional[str] = None
    squad: Optional[str] = None
    head: Optional[str] = None
    gestor: Optional[str] = None


class GroupUpdate(BaseModel):
    name: Optional[str] = None
    status: Optional[str] = None
    summary: Optional[str] = None
    squad: Optional[str] = None
    head: Optional[str] = None
    gestor: Optional[str] = None


class GroupFieldUpdate(BaseModel):
    # Plain str so an unsupported name reaches the repository and fails there
    field: str
    value: Optional[str] = None


class GroupResponse(GroupRecord):
    status_category: StatusCategory

    @classmethod
    def from_record(cls, record: GroupRecord, category: StatusCategory) -> "GroupResponse":
        return cls(**record.model_dump(), status_category=category)


class GroupFieldUpdateResponse(BaseModel):
    group: GroupResponse
    message: str


class StatusSummary(BaseModel):
    stable: int = 0
    warning: int = 0
    critical: int = 0
    no_messages: int = 0
    total: int = 0


class GroupQuery(BaseModel):
    search: str = ""
    status: StatusFilter = StatusFilter.ALL
    squad: str = ""
    head: str = ""
    gestor: str = ""


class GroupListResponse(BaseModel):
    items: List[GroupResponse]
    page: int
    page_size: int
    total: int
    total_pages: int
    summary: StatusSummary
    is_loading: bool
    last_error: Optional[str] = None


class ManagementOptions(BaseModel):
    squads: List[str]
    heads: List[str]
    gestores: List[str]


class RefreshResponse(BaseModel):
    refreshed: bool
    total: int


class ClearStatusResponse(BaseModel):
    success: bool


class ClearEmptyResponse(BaseModel):
    cleared: List[int]
