"""
Error taxonomy for the groups core.

Each error carries a human-readable message and the HTTP status the API
answers with. Handlers are registered in app.main.
"""


class GroupsMonitorError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class LoadError(GroupsMonitorError):
    """Store unreachable or malformed response during a full load. Retryable."""
    status_code = 503


class FieldValidationError(GroupsMonitorError):
    """Caller asked to edit a field that is not editable."""
    status_code = 422


class WriteError(GroupsMonitorError):
    """Remote update/insert/delete failed."""
    status_code = 502


class GroupNotFoundError(GroupsMonitorError):
    status_code = 404

    def __init__(self, group_id: int):
        super().__init__(f"Grupo {group_id} não encontrado")
        self.group_id = group_id
