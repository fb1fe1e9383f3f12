from typing import Iterable, List, Sequence, Tuple
import math

from app.modules.groups.classifier import StatusCategory, classify, matches_filter
from app.modules.groups.schemas import (
    GroupQuery, GroupRecord, GroupResponse, ManagementOptions, StatusSummary
)


def categorize(record: GroupRecord) -> StatusCategory:
    return classify(record.status, record.summary, record.message_count)


def to_response(record: GroupRecord) -> GroupResponse:
    return GroupResponse.from_record(record, categorize(record))


def filter_groups(records: Iterable[GroupRecord], query: GroupQuery) -> List[GroupRecord]:
    """Apply name search, status filter and management filters (AND semantics)."""
    search = query.search.strip().lower()
    result = []
    for record in records:
        if search and search not in (record.name or record.group_key or "").lower():
            continue
        if not matches_filter(categorize(record), query.status):
            continue
        if query.squad and record.squad != query.squad:
            continue
        if query.head and record.head != query.head:
            continue
        if query.gestor and record.gestor != query.gestor:
            continue
        result.append(record)
    return result


def paginate(records: Sequence[GroupRecord], page: int, page_size: int) -> Tuple[List[GroupRecord], int]:
    """Return the 1-based page slice and the total number of pages."""
    total_pages = math.ceil(len(records) / page_size)
    start = (page - 1) * page_size
    return list(records[start:start + page_size]), total_pages


def status_summary(records: Iterable[GroupRecord]) -> StatusSummary:
    summary = StatusSummary()
    for record in records:
        category = categorize(record)
        if category == StatusCategory.STABLE:
            summary.stable += 1
        elif category == StatusCategory.WARNING:
            summary.warning += 1
        elif category == StatusCategory.CRITICAL:
            summary.critical += 1
        else:
            summary.no_messages += 1
        summary.total += 1
    return summary


def management_options(records: Iterable[GroupRecord]) -> ManagementOptions:
    squads, heads, gestores = set(), set(), set()
    for record in records:
        if record.squad and record.squad.strip():
            squads.add(record.squad)
        if record.head and record.head.strip():
            heads.add(record.head)
        if record.gestor and record.gestor.strip():
            gestores.add(record.gestor)
    return ManagementOptions(squads=sorted(squads), heads=sorted(heads), gestores=sorted(gestores))
