from supabase import Client
from app.config.settings import settings
from app.modules.groups.models import GROUP_COLUMNS, MESSAGE_GROUP_KEY_COLUMN
from typing import Any, Dict, Iterable, List
import logging

logger = logging.getLogger(__name__)

_FIELDS_BY_COLUMN = {column: field for field, column in GROUP_COLUMNS.items()}


def to_columns(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Translate record field names to store column names."""
    return {GROUP_COLUMNS.get(name, name): value for name, value in fields.items()}


def to_fields(row: Dict[str, Any]) -> Dict[str, Any]:
    """Translate a store row to record field names, dropping unknown columns."""
    return {_FIELDS_BY_COLUMN[column]: value for column, value in row.items() if column in _FIELDS_BY_COLUMN}


class GroupStore:
    """Direct Supabase access for groups and messages. Errors propagate to the caller."""

    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.groups_table = settings.groups_table
        self.messages_table = settings.messages_table
        self.page_size = settings.messages_page_size

    def list_groups(self) -> List[Dict[str, Any]]:
        result = self.supabase.table(self.groups_table)\
            .select("*")\
            .order("id", desc=True)\
            .execute()
        return [to_fields(row) for row in (result.data or [])]

    def list_messages(self, group_keys: Iterable[str]) -> List[Dict[str, Any]]:
        keys = sorted({key for key in group_keys if key})
        if not keys:
            return []
        rows: List[Dict[str, Any]] = []
        start = 0
        while True:
            result = self.supabase.table(self.messages_table)\
                .select(MESSAGE_GROUP_KEY_COLUMN)\
                .in_(MESSAGE_GROUP_KEY_COLUMN, keys)\
                .order("id")\
                .range(start, start + self.page_size - 1)\
                .execute()
            page = result.data or []
            rows.extend({"group_key": row.get(MESSAGE_GROUP_KEY_COLUMN)} for row in page)
            if len(page) < self.page_size:
                break
            start += self.page_size
        logger.debug(f"Fetched {len(rows)} message rows for {len(keys)} group keys")
        return rows

    def update_group(self, group_id: int, fields: Dict[str, Any]) -> Dict[str, Any]:
        result = self.supabase.table(self.groups_table)\
            .update(to_columns(fields))\
            .eq("id", group_id)\
            .execute()
        if not result.data:
            raise LookupError(f"Group {group_id} was not updated")
        return to_fields(result.data[0])

    def insert_group(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        result = self.supabase.table(self.groups_table)\
            .insert(to_columns(fields))\
            .execute()
        if not result.data:
            raise LookupError("Group was not created")
        return to_fields(result.data[0])

    def delete_group(self, group_id: int) -> bool:
        result = self.supabase.table(self.groups_table)\
            .delete()\
            .eq("id", group_id)\
            .execute()
        return len(result.data or []) > 0
