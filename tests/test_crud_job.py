"""
Tests for the job CRUD layer against SQLite.
"""

import pytest
from sqlalchemy import text

from app.core.exceptions import InvalidInputError, NotFoundError
from app.crud import job as job_crud


def _job(title, salary, equity, handle, job_id=None):
    return {"id": job_id, "title": title, "salary": salary, "equity": equity, "companyHandle": handle}


class TestCreate:

    def test_create(self, db_session, seed):
        job = job_crud.create(db_session, {"title": "New", "salary": 100000, "equity": "0.1", "companyHandle": "c1"})

        assert isinstance(job["id"], int)
        assert job == _job("New", 100000, "0.1", "c1", job["id"])

        row = db_session.execute(
            text("SELECT title, company_handle FROM jobs WHERE id = :id"), {"id": job["id"]}
        ).one()
        assert tuple(row) == ("New", "c1")

    def test_optional_fields(self, db_session, seed):
        job = job_crud.create(db_session, {"title": "Unpaid", "companyHandle": "c3"})

        assert job["salary"] is None
        assert job["equity"] is None

    def test_unknown_company(self, db_session, seed):
        with pytest.raises(NotFoundError):
            job_crud.create(db_session, {"title": "New", "companyHandle": "nope"})


class TestFindAll:

    def test_no_filter(self, db_session, seed):
        j1, j2, j3 = seed["job_ids"]

        assert job_crud.find_all(db_session) == [
            _job("J1", 100000, "0.01", "c1", j1),
            _job("J2", 200000, "0.02", "c1", j2),
            _job("J3", 300000, "0", "c2", j3),
        ]

    def test_title(self, db_session, seed):
        jobs = job_crud.find_all(db_session, title="j1")

        assert [job["title"] for job in jobs] == ["J1"]

    def test_min_salary(self, db_session, seed):
        jobs = job_crud.find_all(db_session, min_salary=150000)

        assert [job["title"] for job in jobs] == ["J2", "J3"]

    def test_has_equity(self, db_session, seed):
        jobs = job_crud.find_all(db_session, has_equity=True)

        assert [job["title"] for job in jobs] == ["J1", "J2"]

    def test_has_equity_false_is_no_filter(self, db_session, seed):
        assert len(job_crud.find_all(db_session, has_equity=False)) == 3

    def test_combined(self, db_session, seed):
        jobs = job_crud.find_all(db_session, title="J", min_salary=150000, has_equity=True)

        assert [job["title"] for job in jobs] == ["J2"]

    def test_title_wildcards_match_literally(self, db_session, seed):
        assert job_crud.find_all(db_session, title="%") == []


class TestGet:

    def test_get(self, db_session, seed):
        j1 = seed["job_ids"][0]

        assert job_crud.get(db_session, j1) == _job("J1", 100000, "0.01", "c1", j1)

    def test_not_found(self, db_session, seed):
        with pytest.raises(NotFoundError):
            job_crud.get(db_session, 999999)


class TestUpdate:

    def test_update(self, db_session, seed):
        j1 = seed["job_ids"][0]
        job = job_crud.update(db_session, j1, {"title": "Updated", "salary": 200000, "equity": "0.2"})

        assert job == _job("Updated", 200000, "0.2", "c1", j1)
        assert job_crud.get(db_session, j1) == job

    def test_only_given_fields_change(self, db_session, seed):
        j1 = seed["job_ids"][0]
        job = job_crud.update(db_session, j1, {"salary": 5})

        assert job == _job("J1", 5, "0.01", "c1", j1)

    def test_not_found(self, db_session, seed):
        with pytest.raises(NotFoundError):
            job_crud.update(db_session, 999999, {"title": "Nope"})

    def test_no_data(self, db_session, seed):
        with pytest.raises(InvalidInputError):
            job_crud.update(db_session, seed["job_ids"][0], {})


class TestRemove:

    def test_remove(self, db_session, seed):
        j1 = seed["job_ids"][0]
        job_crud.remove(db_session, j1)

        rows = db_session.execute(text("SELECT id FROM jobs WHERE id = :id"), {"id": j1}).all()
        assert rows == []

    def test_remove_cascades_to_applications(self, db_session, seed):
        job_crud.remove(db_session, seed["job_ids"][0])

        rows = db_session.execute(text("SELECT * FROM applications")).all()
        assert rows == []

    def test_not_found(self, db_session, seed):
        with pytest.raises(NotFoundError):
            job_crud.remove(db_session, 999999)


class TestFormatEquity:

    @pytest.mark.parametrize("value, expected", [
        (None, None),
        (0, "0"),
        (0.05, "0.05"),
        ("0.10", "0.1"),
        (1, "1"),
    ])
    def test_format(self, value, expected):
        assert job_crud.format_equity(value) == expected
