from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.gestores.schemas import GestorCreate, GestorUpdate, GestorResponse
from app.modules.gestores.service import GestorService
from app.core.dependencies import get_current_user
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/gestores", tags=["gestores"])


def get_gestor_service(supabase: Client = Depends(get_supabase)) -> GestorService:
    return GestorService(supabase)


@router.get("", response_model=List[GestorResponse])
async def list_gestores(
    current_user: Dict = Depends(get_current_user),
    service: GestorService = Depends(get_gestor_service)
):
    """List active gestores"""
    return service.list_gestores()


@router.post("", response_model=GestorResponse, status_code=201)
async def create_gestor(
    gestor_data: GestorCreate,
    current_user: Dict = Depends(get_current_user),
    service: GestorService = Depends(get_gestor_service)
):
    """Create a new gestor"""
    return service.create_gestor(gestor_data)


@router.put("/{gestor_id}", response_model=GestorResponse)
async def update_gestor(
    gestor_id: int,
    gestor_data: GestorUpdate,
    current_user: Dict = Depends(get_current_user),
    service: GestorService = Depends(get_gestor_service)
):
    """Update gestor"""
    return service.update_gestor(gestor_id, gestor_data)


@router.delete("/{gestor_id}", status_code=204)
async def delete_gestor(
    gestor_id: int,
    current_user: Dict = Depends(get_current_user),
    service: GestorService = Depends(get_gestor_service)
):
    """Deactivate gestor"""
    service.delete_gestor(gestor_id)
    return None
