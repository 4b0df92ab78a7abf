"""
Tests for the company CRUD layer against SQLite.
"""

import pytest
from sqlalchemy import text

from app.core.exceptions import InvalidInputError, NotFoundError
from app.crud import company as company_crud

NEW_COMPANY = {
    "handle": "new",
    "name": "New",
    "description": "New Description",
    "numEmployees": 1,
    "logoUrl": "http://new.img",
}


def _company(n):
    return {
        "handle": f"c{n}",
        "name": f"C{n}",
        "description": f"Desc{n}",
        "numEmployees": n,
        "logoUrl": f"http://c{n}.img",
    }


class TestCreate:

    def test_create(self, db_session, seed):
        assert company_crud.create(db_session, NEW_COMPANY) == NEW_COMPANY

        row = db_session.execute(text("SELECT num_employees FROM companies WHERE handle = 'new'")).one()
        assert row[0] == 1

    def test_duplicate(self, db_session, seed):
        company_crud.create(db_session, NEW_COMPANY)

        with pytest.raises(InvalidInputError) as exc_info:
            company_crud.create(db_session, NEW_COMPANY)
        assert exc_info.value.message == "Duplicate company: new"

    def test_duplicate_name(self, db_session, seed):
        with pytest.raises(InvalidInputError) as exc_info:
            company_crud.create(db_session, {**NEW_COMPANY, "name": "C1"})

        assert exc_info.value.message == "Duplicate company name: C1"
        assert company_crud.find_all(db_session, name="C1") == [_company(1)]


class TestFindAll:

    def test_no_filter(self, db_session, seed):
        assert company_crud.find_all(db_session) == [_company(1), _company(2), _company(3)]

    def test_name_is_case_insensitive(self, db_session, seed):
        assert company_crud.find_all(db_session, name="c1") == [_company(1)]

    def test_employee_range(self, db_session, seed):
        companies = company_crud.find_all(db_session, min_employees=2, max_employees=3)

        assert [c["handle"] for c in companies] == ["c2", "c3"]

    def test_min_only(self, db_session, seed):
        assert [c["handle"] for c in company_crud.find_all(db_session, min_employees=3)] == ["c3"]

    def test_max_only(self, db_session, seed):
        assert [c["handle"] for c in company_crud.find_all(db_session, max_employees=1)] == ["c1"]

    def test_no_match(self, db_session, seed):
        assert company_crud.find_all(db_session, name="zzz") == []

    def test_min_greater_than_max(self, db_session, seed):
        with pytest.raises(InvalidInputError):
            company_crud.find_all(db_session, min_employees=5, max_employees=1)


class TestGet:

    def test_get_includes_jobs(self, db_session, seed):
        j1, j2, _ = seed["job_ids"]

        assert company_crud.get(db_session, "c1") == {
            **_company(1),
            "jobs": [
                {"id": j1, "title": "J1", "salary": 100000, "equity": "0.01"},
                {"id": j2, "title": "J2", "salary": 200000, "equity": "0.02"},
            ],
        }

    def test_company_without_jobs(self, db_session, seed):
        assert company_crud.get(db_session, "c3")["jobs"] == []

    def test_not_found(self, db_session, seed):
        with pytest.raises(NotFoundError):
            company_crud.get(db_session, "nope")


class TestUpdate:

    def test_update(self, db_session, seed):
        data = {"name": "New", "description": "New Description", "numEmployees": 10, "logoUrl": "http://new.img"}

        assert company_crud.update(db_session, "c1", data) == {"handle": "c1", **data}

    def test_null_fields(self, db_session, seed):
        company = company_crud.update(db_session, "c1", {"numEmployees": None, "logoUrl": None})

        assert company["numEmployees"] is None
        assert company["logoUrl"] is None
        assert company["name"] == "C1"

    def test_name_taken_by_other_company(self, db_session, seed):
        with pytest.raises(InvalidInputError) as exc_info:
            company_crud.update(db_session, "c2", {"name": "C1"})

        assert exc_info.value.message == "Duplicate company name: C1"

    def test_keeping_own_name(self, db_session, seed):
        assert company_crud.update(db_session, "c1", {"name": "C1"}) == _company(1)

    def test_not_found(self, db_session, seed):
        with pytest.raises(NotFoundError):
            company_crud.update(db_session, "nope", {"name": "x"})

    def test_no_data(self, db_session, seed):
        with pytest.raises(InvalidInputError):
            company_crud.update(db_session, "c1", {})


class TestRemove:

    def test_remove_cascades_to_jobs(self, db_session, seed):
        company_crud.remove(db_session, "c1")

        assert db_session.execute(text("SELECT handle FROM companies WHERE handle = 'c1'")).all() == []
        assert db_session.execute(text("SELECT id FROM jobs WHERE company_handle = 'c1'")).all() == []

    def test_not_found(self, db_session, seed):
        with pytest.raises(NotFoundError):
            company_crud.remove(db_session, "nope")
