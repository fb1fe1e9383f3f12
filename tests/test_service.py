"""
Unit tests for group filtering, pagination and status summaries.
"""
import pytest

from app.modules.groups.classifier import StatusCategory, StatusFilter
from app.modules.groups.schemas import GroupQuery, GroupRecord
from app.modules.groups import service


@pytest.fixture
def records():
    return [
        GroupRecord(id=1, group_key="a@g.us", name="Cliente Alfa", status="Estável", squad="X", gestor="Ana", message_count=3),
        GroupRecord(id=2, group_key="b@g.us", name=None, message_count=0),
        GroupRecord(id=3, group_key="c@g.us", name="Cliente Gama", status="Crítico", squad="Y", head="Bruno", gestor="Ana", message_count=2),
        GroupRecord(id=4, group_key="d@g.us", name="Delta", status="Alerta", squad="X", head="Bruno", message_count=1),
    ]


def ids(records):
    return [record.id for record in records]


class TestFilterGroups:
    def test_no_filters_returns_everything(self, records):
        assert ids(service.filter_groups(records, GroupQuery())) == [1, 2, 3, 4]

    def test_search_is_case_insensitive_substring(self, records):
        assert ids(service.filter_groups(records, GroupQuery(search="CLIENTE"))) == [1, 3]

    def test_search_falls_back_to_group_key(self, records):
        assert ids(service.filter_groups(records, GroupQuery(search="b@g"))) == [2]

    def test_status_filter(self, records):
        assert ids(service.filter_groups(records, GroupQuery(status=StatusFilter.CRITICAL))) == [3]
        assert ids(service.filter_groups(records, GroupQuery(status=StatusFilter.NO_MESSAGES))) == [2]

    def test_management_filters_are_exact_and_combined(self, records):
        assert ids(service.filter_groups(records, GroupQuery(squad="X"))) == [1, 4]
        assert ids(service.filter_groups(records, GroupQuery(squad="X", head="Bruno"))) == [4]
        assert ids(service.filter_groups(records, GroupQuery(gestor="An"))) == []

    def test_all_filters_combined(self, records):
        query = GroupQuery(search="cliente", status=StatusFilter.STABLE, gestor="Ana")
        assert ids(service.filter_groups(records, query)) == [1]


class TestPaginate:
    def test_pages(self, records):
        page, total_pages = service.paginate(records, 1, 3)
        assert ids(page) == [1, 2, 3]
        assert total_pages == 2
        page, _ = service.paginate(records, 2, 3)
        assert ids(page) == [4]

    def test_page_past_end_is_empty(self, records):
        page, total_pages = service.paginate(records, 5, 10)
        assert page == []
        assert total_pages == 1

    def test_empty_list(self):
        assert service.paginate([], 1, 10) == ([], 0)


class TestSummaries:
    def test_status_summary(self, records):
        summary = service.status_summary(records)
        assert (summary.stable, summary.warning, summary.critical, summary.no_messages, summary.total) == (1, 1, 1, 1, 4)

    def test_to_response_carries_category(self, records):
        response = service.to_response(records[2])
        assert response.status_category == StatusCategory.CRITICAL
        assert response.message_count == 2

    def test_management_options(self, records):
        options = service.management_options(records)
        assert options.squads == ["X", "Y"]
        assert options.heads == ["Bruno"]
        assert options.gestores == ["Ana"]
