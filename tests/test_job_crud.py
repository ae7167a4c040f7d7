"""
Tests for job CRUD functions.
"""

import pytest

from jobly.core.exceptions import BadRequestError, NotFoundError
from jobly.crud import job as job_crud


def _titles(jobs):
    return [j["title"] for j in jobs]


class TestCreate:

    def test_create(self, db_session, seeded):
        job = job_crud.create(db_session, {
            "title": "New",
            "salary": 500,
            "equity": "0.25",
            "companyHandle": "c3",
        })

        assert isinstance(job["id"], int)
        assert job["title"] == "New"
        assert job["salary"] == 500
        assert float(job["equity"]) == 0.25
        assert job["companyHandle"] == "c3"

    def test_ids_are_generated(self, db_session, seeded):
        first = job_crud.create(db_session, {"title": "X", "companyHandle": "c3"})
        second = job_crud.create(db_session, {"title": "X", "companyHandle": "c3"})

        assert first["id"] != second["id"]

    def test_unknown_company(self, db_session, seeded):
        with pytest.raises(BadRequestError):
            job_crud.create(db_session, {"title": "New", "companyHandle": "nope"})


class TestFindAll:

    def test_no_filter_orders_by_company_then_title(self, db_session, seeded):
        jobs = job_crud.find_all(db_session)

        assert _titles(jobs) == ["Job1", "Job2", "Job3", "Job4", "A-Job"]
        assert jobs[0]["companyHandle"] == "c1"
        assert jobs[0]["companyName"] == "C1"
        assert jobs[-1]["companyName"] == "C2"

    def test_min_salary_is_inclusive(self, db_session, seeded):
        assert _titles(job_crud.find_all(db_session, min_salary=200)) == ["Job2", "Job3"]

    def test_has_equity(self, db_session, seeded):
        """Zero and missing equity are both excluded"""
        assert _titles(job_crud.find_all(db_session, has_equity=True)) == ["Job1", "Job2", "A-Job"]

    def test_has_equity_false_is_no_filter(self, db_session, seeded):
        assert len(job_crud.find_all(db_session, has_equity=False)) == 5

    def test_title(self, db_session, seeded):
        assert _titles(job_crud.find_all(db_session, title="job1")) == ["Job1"]
        assert _titles(job_crud.find_all(db_session, title="a-")) == ["A-Job"]

    def test_filters_combine(self, db_session, seeded):
        jobs = job_crud.find_all(db_session, min_salary=150, has_equity=True, title="job")

        assert _titles(jobs) == ["Job2", "A-Job"]

    def test_no_match(self, db_session, seeded):
        assert job_crud.find_all(db_session, min_salary=1000) == []


class TestGet:

    def test_get_embeds_company(self, db_session, seeded):
        job_id = seeded["job_ids"]["Job1"]

        job = job_crud.get(db_session, job_id)

        assert job["id"] == job_id
        assert job["title"] == "Job1"
        assert "companyHandle" not in job
        assert job["company"] == {
            "handle": "c1",
            "name": "C1",
            "description": "Desc1",
            "numEmployees": 1,
            "logoUrl": "http://c1.img",
        }

    def test_not_found(self, db_session, seeded):
        with pytest.raises(NotFoundError):
            job_crud.get(db_session, 0)


class TestUpdate:

    def test_update(self, db_session, seeded):
        job_id = seeded["job_ids"]["Job1"]

        job = job_crud.update(db_session, job_id, {"title": "Renamed", "salary": 999})

        assert job["id"] == job_id
        assert job["title"] == "Renamed"
        assert job["salary"] == 999
        assert float(job["equity"]) == 0.1
        assert job["companyHandle"] == "c1"

    def test_clear_salary(self, db_session, seeded):
        job = job_crud.update(db_session, seeded["job_ids"]["Job2"], {"salary": None})

        assert job["salary"] is None

    def test_not_found(self, db_session, seeded):
        with pytest.raises(NotFoundError):
            job_crud.update(db_session, 0, {"title": "x"})

    def test_no_data(self, db_session, seeded):
        with pytest.raises(BadRequestError):
            job_crud.update(db_session, seeded["job_ids"]["Job1"], {})

    def test_check_constraint(self, db_session, seeded):
        job_id = seeded["job_ids"]["Job1"]

        with pytest.raises(BadRequestError):
            job_crud.update(db_session, job_id, {"salary": -1})

        assert job_crud.get(db_session, job_id)["salary"] == 100


class TestRemove:

    def test_remove(self, db_session, seeded):
        job_id = seeded["job_ids"]["Job4"]

        job_crud.remove(db_session, job_id)

        with pytest.raises(NotFoundError):
            job_crud.get(db_session, job_id)

    def test_not_found(self, db_session, seeded):
        with pytest.raises(NotFoundError):
            job_crud.remove(db_session, 0)


class TestIdOutOfRange:
    """Ids that cannot fit jobs.id name no job"""

    TOO_LARGE = job_crud.MAX_JOB_ID + 1

    def test_get(self, db_session, seeded):
        with pytest.raises(NotFoundError) as exc_info:
            job_crud.get(db_session, 99999999999999999999)

        assert exc_info.value.message == "No job: 99999999999999999999"

    def test_update(self, db_session, seeded):
        with pytest.raises(NotFoundError):
            job_crud.update(db_session, self.TOO_LARGE, {"title": "x"})

    def test_remove(self, db_session, seeded):
        with pytest.raises(NotFoundError):
            job_crud.remove(db_session, self.TOO_LARGE)

    def test_largest_id_is_looked_up(self, db_session, seeded):
        with pytest.raises(NotFoundError):
            job_crud.get(db_session, job_crud.MAX_JOB_ID)
