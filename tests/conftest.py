import os
import sys

import pytest

os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")

TESTS_DIR = os.path.dirname(__file__)
if TESTS_DIR not in sys.path:
    sys.path.insert(0, TESTS_DIR)

from fake_supabase import FakeSupabase  # noqa: E402
from app.modules.auth.service import clear_auth_cache  # noqa: E402
from app.modules.groups.repository import GroupRepository  # noqa: E402
from app.modules.groups.store import GroupStore  # noqa: E402

GROUPS_TABLE = "Lista_de_Grupos"
MESSAGES_TABLE = "Lista_de_Mensagens"

VALID_TOKEN = "valid-token"
USER_ID = "user-1"


def group_row(id, grupo, nome, status=None, resumo=None, squad=None, head=None, gestor=None):
    return {
        "id": id,
        "grupo": grupo,
        "nome_grupo": nome,
        "status": status,
        "resumo": resumo,
        "squad": squad,
        "head": head,
        "gestor": gestor,
    }


def seed_tables():
    return {
        GROUPS_TABLE: [
            group_row(1, "a@g.us", "Cliente Alfa", "Estável", "Conversa tranquila", squad="X", gestor="Ana"),
            group_row(2, "b@g.us", "Cliente Beta"),
            group_row(3, "c@g.us", "Cliente Gama", "Crítico", "erro na entrega", squad="Y", head="Bruno", gestor="Ana"),
            group_row(4, "d@g.us", "Delta", "Alerta", "aguardando retorno", squad="X", head="Bruno"),
        ],
        MESSAGES_TABLE: (
            [{"grupoJid": "a@g.us"}] * 3
            + [{"grupoJid": "c@g.us"}] * 2
            + [{"grupoJid": "d@g.us"}]
            + [{"grupoJid": "zz@g.us"}]
        ),
        "profiles": [],
        "Gestores": [],
    }


@pytest.fixture(autouse=True)
def _reset_auth_cache():
    clear_auth_cache()
    yield
    clear_auth_cache()


@pytest.fixture
def fake_db():
    db = FakeSupabase(seed_tables())
    db.auth.add_user(USER_ID, "ana@example.com", "secret", VALID_TOKEN)
    return db


@pytest.fixture
def repository(fake_db):
    return GroupRepository(GroupStore(fake_db))


@pytest.fixture
def loaded_repository(repository):
    repository.refresh()
    return repository


@pytest.fixture
def client(fake_db, repository):
    from fastapi.testclient import TestClient
    from app.main import app
    from app.database.supabase_client import get_supabase
    from app.modules.groups.routes import get_group_repository

    app.dependency_overrides[get_supabase] = lambda: fake_db
    app.dependency_overrides[get_group_repository] = lambda: repository
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {VALID_TOKEN}"}
