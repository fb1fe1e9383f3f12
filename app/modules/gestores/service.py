from supabase import Client
from app.config.settings import settings
from app.modules.gestores.schemas import GestorCreate, GestorUpdate, GestorResponse
from typing import List
from fastapi import HTTPException
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)


class GestorService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.table = settings.gestores_table

    def list_gestores(self) -> List[GestorResponse]:
        """List active gestores ordered by name"""
        try:
            result = self.supabase.table(self.table)\
                .select("*")\
                .eq("ativo", True)\
                .order("nome")\
                .execute()
            logger.debug(f"Loaded {len(result.data or [])} gestores")
            return [GestorResponse(**row) for row in (result.data or [])]
        except Exception as e:
            logger.error(f"Error loading gestores: {e}")
            raise HTTPException(status_code=500, detail="Erro ao carregar gestores")

    def create_gestor(self, data: GestorCreate) -> GestorResponse:
        try:
            result = self.supabase.table(self.table).insert({
                "nome": data.nome,
                "email": data.email,
                "ativo": True
            }).execute()
            if not result.data:
                raise HTTPException(status_code=500, detail="Erro ao criar gestor")
            return GestorResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error creating gestor: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def update_gestor(self, gestor_id: int, data: GestorUpdate) -> GestorResponse:
        try:
            update_data = {"updated_at": datetime.now(timezone.utc).isoformat()}
            if data.nome:
                update_data["nome"] = data.nome
            if data.email is not None:
                update_data["email"] = data.email

            result = self.supabase.table(self.table)\
                .update(update_data)\
                .eq("id", gestor_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Gestor não encontrado")

            return GestorResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error updating gestor {gestor_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def delete_gestor(self, gestor_id: int) -> bool:
        """Soft delete: mark the gestor inactive"""
        try:
            result = self.supabase.table(self.table)\
                .update({"ativo": False, "updated_at": datetime.now(timezone.utc).isoformat()})\
                .eq("id", gestor_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Gestor não encontrado")
            return True
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error deleting gestor {gestor_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
