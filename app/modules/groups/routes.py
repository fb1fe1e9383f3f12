from fastapi import APIRouter, Depends, Query
from app.config.settings import settings
from app.database.supabase_client import get_supabase
from app.modules.groups.classifier import StatusFilter
from app.modules.groups.schemas import (
    FIELD_LABELS, GroupCreate, GroupUpdate, GroupResponse, GroupFieldUpdate, GroupFieldUpdateResponse,
    GroupListResponse, GroupQuery, ManagementOptions, StatusSummary,
    RefreshResponse, ClearStatusResponse, ClearEmptyResponse
)
from app.modules.groups.repository import GroupRepository
from app.modules.groups.store import GroupStore
from app.modules.groups import service
from app.core.dependencies import get_current_user
from typing import Dict, Optional
import threading

router = APIRouter(prefix="/groups", tags=["groups"])

_repository: Optional[GroupRepository] = None
_repository_lock = threading.Lock()


def get_group_repository() -> GroupRepository:
    """Process-wide repository; the snapshot outlives individual requests."""
    global _repository
    with _repository_lock:
        if _repository is None:
            _repository = GroupRepository(GroupStore(get_supabase()))
        return _repository


def get_loaded_repository(repository: GroupRepository = Depends(get_group_repository)) -> GroupRepository:
    repository.ensure_loaded()
    return repository


@router.get("", response_model=GroupListResponse)
def list_groups(
    search: str = "",
    status: StatusFilter = StatusFilter.ALL,
    squad: str = "",
    head: str = "",
    gestor: str = "",
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    current_user: Dict = Depends(get_current_user),
    repository: GroupRepository = Depends(get_loaded_repository)
):
    """List groups with name search, status/management filters and pagination"""
    query = GroupQuery(search=search, status=status, squad=squad, head=head, gestor=gestor)
    filtered = service.filter_groups(repository.records, query)
    items, total_pages = service.paginate(filtered, page, page_size)
    return GroupListResponse(
        items=[service.to_response(record) for record in items],
        page=page,
        page_size=page_size,
        total=len(filtered),
        total_pages=total_pages,
        summary=service.status_summary(filtered),
        is_loading=repository.is_loading,
        last_error=repository.last_error,
    )


@router.get("/summary", response_model=StatusSummary)
def get_status_summary(
    current_user: Dict = Depends(get_current_user),
    repository: GroupRepository = Depends(get_loaded_repository)
):
    """Count groups per status category"""
    return service.status_summary(repository.records)


@router.get("/management-options", response_model=ManagementOptions)
def get_management_options(
    current_user: Dict = Depends(get_current_user),
    repository: GroupRepository = Depends(get_loaded_repository)
):
    """Distinct squad/head/gestor values currently assigned"""
    return service.management_options(repository.records)


@router.post("/refresh", response_model=RefreshResponse)
def refresh_groups(
    current_user: Dict = Depends(get_current_user),
    repository: GroupRepository = Depends(get_group_repository)
):
    """Reload groups and message counts; no-op while another refresh is running"""
    refreshed = repository.refresh()
    return RefreshResponse(refreshed=refreshed, total=len(repository.records))


@router.post("/clear-empty", response_model=ClearEmptyResponse)
def clear_empty_groups(
    current_user: Dict = Depends(get_current_user),
    repository: GroupRepository = Depends(get_loaded_repository)
):
    """Clear status of every group without messages"""
    return ClearEmptyResponse(cleared=repository.clear_empty_groups())


@router.post("", response_model=GroupResponse, status_code=201)
def create_group(
    group_data: GroupCreate,
    current_user: Dict = Depends(get_current_user),
    repository: GroupRepository = Depends(get_loaded_repository)
):
    """Create a new group"""
    return service.to_response(repository.create_group(group_data.model_dump()))


@router.get("/{group_id}", response_model=GroupResponse)
def get_group(
    group_id: int,
    current_user: Dict = Depends(get_current_user),
    repository: GroupRepository = Depends(get_loaded_repository)
):
    """Get group by ID"""
    return service.to_response(repository.get(group_id))


@router.put("/{group_id}", response_model=GroupResponse)
def update_group(
    group_id: int,
    group_data: GroupUpdate,
    current_user: Dict = Depends(get_current_user),
    repository: GroupRepository = Depends(get_loaded_repository)
):
    """Update group fields that were sent"""
    return service.to_response(repository.update_group(group_id, group_data.model_dump(exclude_unset=True)))


@router.delete("/{group_id}", status_code=204)
def delete_group(
    group_id: int,
    current_user: Dict = Depends(get_current_user),
    repository: GroupRepository = Depends(get_loaded_repository)
):
    """Delete group"""
    repository.delete_group(group_id)
    return None


@router.patch("/{group_id}/fields", response_model=GroupFieldUpdateResponse)
def update_group_field(
    group_id: int,
    field_update: GroupFieldUpdate,
    current_user: Dict = Depends(get_current_user),
    repository: GroupRepository = Depends(get_loaded_repository)
):
    """Inline edit of squad, head or gestor"""
    record = repository.update_field(group_id, field_update.field, field_update.value)
    return GroupFieldUpdateResponse(
        group=service.to_response(record),
        message=f"{FIELD_LABELS[field_update.field]} do grupo foi atualizado.",
    )


@router.post("/{group_id}/clear-status", response_model=ClearStatusResponse)
def clear_group_status(
    group_id: int,
    current_user: Dict = Depends(get_current_user),
    repository: GroupRepository = Depends(get_loaded_repository)
):
    """Remove status of a group that has no messages"""
    return ClearStatusResponse(success=repository.clear_status(group_id))
