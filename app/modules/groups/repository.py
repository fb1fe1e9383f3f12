"""
Process-local group snapshot with optimistic edits.

The snapshot is an immutable tuple of frozen GroupRecord objects. Every
change builds a new tuple and swaps it in under `_lock`; store calls run
outside the lock. A field edit goes Clean -> OptimisticallyUpdated and
then either Confirmed (store write succeeded, value kept) or RolledBack
(store write failed, previous value restored).
"""
from collections import Counter
from typing import Any, Dict, List, Optional, Tuple
import logging
import threading

from pydantic import ValidationError

from app.config.settings import settings
from app.core.errors import FieldValidationError, GroupNotFoundError, LoadError, WriteError
from app.modules.groups.schemas import FIELD_LABELS, GroupRecord, ManagementField
from app.modules.groups.store import GroupStore

logger = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = "Não foi possível carregar os grupos. Tente novamente."


class GroupRepository:
    def __init__(self, store: GroupStore):
        self.store = store
        self._records: Tuple[GroupRecord, ...] = ()
        self._lock = threading.Lock()
        self._refresh_lock = threading.Lock()
        self._loaded = False
        self._last_error: Optional[str] = None

    @property
    def records(self) -> Tuple[GroupRecord, ...]:
        return self._records

    @property
    def is_loading(self) -> bool:
        return self._refresh_lock.locked()

    @property
    def last_error(self) -> Optional[str]:
        return self._last_error

    @property
    def loaded(self) -> bool:
        return self._loaded

    def load_all(self) -> List[GroupRecord]:
        """Fetch every group and attach its message count. Does not touch the snapshot."""
        try:
            rows = self.store.list_groups()
            messages = self.store.list_messages(row.get("group_key") for row in rows)
        except Exception as e:
            logger.error(f"Error loading groups: {e}")
            raise LoadError(LOAD_ERROR_MESSAGE) from e

        counts = Counter(message["group_key"] for message in messages)
        try:
            records = [
                GroupRecord(**row, message_count=counts[row["group_key"]] if row.get("group_key") else 0)
                for row in rows
            ]
        except (ValidationError, TypeError) as e:
            logger.error(f"Malformed group row from store: {e}")
            raise LoadError(LOAD_ERROR_MESSAGE) from e

        logger.info(f"Loaded {len(records)} groups ({len(messages)} messages)")
        return records

    def refresh(self) -> bool:
        """Reload the snapshot. Returns False without loading if a refresh is already running."""
        if not self._refresh_lock.acquire(blocking=False):
            logger.info("Refresh already in flight, skipping")
            return False
        try:
            records = self.load_all()
            with self._lock:
                self._records = tuple(records)
                self._loaded = True
                self._last_error = None
            return True
        except LoadError as e:
            self._last_error = e.message
            raise
        finally:
            self._refresh_lock.release()

    def ensure_loaded(self) -> None:
        """Load the snapshot once, waiting on a first load already run by another caller."""
        while not self._loaded:
            if self.refresh():
                return
            with self._refresh_lock:
                pass

    def get(self, group_id: int) -> GroupRecord:
        for record in self._records:
            if record.id == group_id:
                return record
        raise GroupNotFoundError(group_id)

    def _swap(self, group_id: int, changes: Dict[str, Any]) -> Optional[GroupRecord]:
        """Replace one record in the snapshot. Caller holds _lock. Returns None if absent."""
        updated = None
        records = []
        for record in self._records:
            if record.id == group_id:
                updated = record.model_copy(update=changes)
                records.append(updated)
            else:
                records.append(record)
        if updated is not None:
            self._records = tuple(records)
        return updated

    def update_field(self, group_id: int, field: str, value: Optional[str]) -> GroupRecord:
        """Optimistically set squad/head/gestor, rolling back if the store write fails."""
        try:
            field = ManagementField(field).value
        except ValueError:
            raise FieldValidationError(f"Campo '{field}' não é válido")

        with self._lock:
            previous = getattr(self.get(group_id), field)
            optimistic = self._swap(group_id, {field: value})
        logger.info(f"Optimistic update of group {group_id}: {field}={value!r}")

        try:
            self.store.update_group(group_id, {field: value})
        except Exception as e:
            with self._lock:
                self._swap(group_id, {field: previous})
            logger.error(f"Error updating {field} of group {group_id}, rolled back to {previous!r}: {e}")
            raise WriteError(f"Não foi possível atualizar o {field}. Tente novamente.") from e

        logger.info(f"{FIELD_LABELS[field]} of group {group_id} confirmed")
        return optimistic

    def clear_status(self, group_id: int) -> bool:
        """Clear status and mark the summary as having no messages.

        The local copy is changed first and is not rolled back if the store
        write fails; the stale summary is fixed by the next full reload.
        """
        changes = {"status": None, "summary": settings.no_messages_summary}
        with self._lock:
            self._swap(group_id, changes)
        try:
            self.store.update_group(group_id, changes)
        except Exception as e:
            self._last_error = "Não foi possível remover o status do grupo."
            logger.warning(f"Error clearing status of group {group_id}: {e}")
            return False
        logger.info(f"Status removed for group {group_id} (no messages)")
        return True

    def clear_empty_groups(self) -> List[int]:
        """Clear status of every group without messages that still carries analysis text."""
        targets = [
            record.id for record in self._records
            if record.message_count == 0
            and (record.status or record.summary != settings.no_messages_summary)
        ]
        return [group_id for group_id in targets if self.clear_status(group_id)]

    def create_group(self, fields: Dict[str, Any]) -> GroupRecord:
        try:
            record = GroupRecord(**self.store.insert_group(fields))
        except Exception as e:
            logger.error(f"Error creating group: {e}")
            raise WriteError(f"Erro ao criar grupo: {e}") from e
        with self._lock:
            self._records = (record,) + self._records
        logger.info(f"Group {record.id} created")
        return record

    def update_group(self, group_id: int, fields: Dict[str, Any]) -> GroupRecord:
        if not fields:
            raise FieldValidationError("Nenhum campo para atualizar")
        try:
            row = self.store.update_group(group_id, fields)
        except Exception as e:
            logger.error(f"Error updating group {group_id}: {e}")
            raise WriteError(f"Erro ao atualizar grupo: {e}") from e
        row.pop("id", None)
        with self._lock:
            updated = self._swap(group_id, row)
        if updated is None:
            # Not in the snapshot yet; the next reload will bring it in with its count
            updated = GroupRecord(id=group_id, **row)
        logger.info(f"Group {group_id} updated")
        return updated

    def delete_group(self, group_id: int) -> None:
        try:
            deleted = self.store.delete_group(group_id)
        except Exception as e:
            logger.error(f"Error deleting group {group_id}: {e}")
            raise WriteError(f"Erro ao deletar grupo: {e}") from e
        if not deleted:
            raise GroupNotFoundError(group_id)
        with self._lock:
            self._records = tuple(record for record in self._records if record.id != group_id)
        logger.info(f"Group {group_id} deleted")
