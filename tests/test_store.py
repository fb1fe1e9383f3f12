import pytest

from app.config.settings import settings
from app.modules.groups.store import GroupStore, to_columns, to_fields

from conftest import GROUPS_TABLE, MESSAGES_TABLE


class TestColumnMapping:
    def test_to_columns_renames_record_fields(self):
        assert to_columns({"name": "Alfa", "summary": "ok", "squad": "X"}) == {
            "nome_grupo": "Alfa",
            "resumo": "ok",
            "squad": "X",
        }

    def test_to_fields_drops_unknown_columns(self):
        row = {"id": 1, "grupo": "a@g.us", "nome_grupo": "Alfa", "created_at": "2024-01-01"}
        assert to_fields(row) == {"id": 1, "group_key": "a@g.us", "name": "Alfa"}


class TestGroupStore:
    def test_list_groups_newest_first(self, fake_db):
        rows = GroupStore(fake_db).list_groups()
        assert [row["id"] for row in rows] == [4, 3, 2, 1]
        assert rows[-1]["summary"] == "Conversa tranquila"

    def test_list_messages_filters_by_key(self, fake_db):
        rows = GroupStore(fake_db).list_messages(["a@g.us", "c@g.us"])
        assert sorted(row["group_key"] for row in rows) == ["a@g.us"] * 3 + ["c@g.us"] * 2

    def test_list_messages_without_keys_skips_query(self, fake_db):
        assert GroupStore(fake_db).list_messages([None, ""]) == []
        assert fake_db.count_calls(MESSAGES_TABLE, "select") == 0

    def test_list_messages_reads_every_page(self, fake_db, monkeypatch):
        monkeypatch.setattr(settings, "messages_page_size", 2)
        fake_db.tables[MESSAGES_TABLE] = [{"grupoJid": "a@g.us"} for _ in range(5)]
        rows = GroupStore(fake_db).list_messages(["a@g.us"])
        assert len(rows) == 5
        assert fake_db.count_calls(MESSAGES_TABLE, "select") == 3

    def test_list_messages_pages_in_id_order(self, fake_db, monkeypatch):
        monkeypatch.setattr(settings, "messages_page_size", 2)
        fake_db.tables[MESSAGES_TABLE] = [
            {"id": 3, "grupoJid": "c"},
            {"id": 1, "grupoJid": "a"},
            {"id": 5, "grupoJid": "e"},
            {"id": 2, "grupoJid": "b"},
            {"id": 4, "grupoJid": "d"},
        ]
        rows = GroupStore(fake_db).list_messages(["a", "b", "c", "d", "e"])
        assert [row["group_key"] for row in rows] == ["a", "b", "c", "d", "e"]

    def test_update_group_returns_translated_row(self, fake_db):
        row = GroupStore(fake_db).update_group(1, {"summary": "novo resumo"})
        assert row["summary"] == "novo resumo"
        assert fake_db.tables[GROUPS_TABLE][0]["resumo"] == "novo resumo"

    def test_update_missing_group_raises(self, fake_db):
        with pytest.raises(LookupError):
            GroupStore(fake_db).update_group(999, {"squad": "X"})

    def test_insert_and_delete(self, fake_db):
        store = GroupStore(fake_db)
        row = store.insert_group({"name": "Novo", "group_key": "n@g.us"})
        assert row["id"] == 5
        assert row["name"] == "Novo"
        assert store.delete_group(5) is True
        assert store.delete_group(5) is False
