"""Shared fixtures for DSTest tests."""

import pytest

from dstest.core.db.sqlite import SQLiteDatabase
from dstest.core.models import TestCase, TestCasePredicate, TestRun, TestRunStatus, TestSuite

from .helpers import CHARGES_URL, HEADER_ID


@pytest.fixture
def charge_case() -> TestCase:
    return TestCase(
        name="TestCase1",
        url=CHARGES_URL,
        predicates=[
            TestCasePredicate(attribute="amount.total", expected_value="300"),
            TestCasePredicate(attribute="source.sourceType", expected_value="PaymentTrack"),
        ],
        expected_status=201,
    )


@pytest.fixture
def charge_body() -> dict:
    return {"amount": {"total": 300}, "source": {"sourceType": "PaymentTrack"}}


@pytest.fixture
def payments_suite(charge_case) -> TestSuite:
    return TestSuite(
        name="TestSuite1",
        test_cases=[
            charge_case,
            TestCase(
                name="TestCase2",
                url=CHARGES_URL,
                predicates=[TestCasePredicate(attribute="amount.total", expected_value="200")],
                expected_status=500,
            ),
        ],
    )


@pytest.fixture
def test_run(payments_suite) -> TestRun:
    return TestRun(
        name="Tom Run 1",
        api_key="apikey000001",
        header_id=HEADER_ID,
        test_suite=payments_suite,
        status=TestRunStatus.CREATED,
    )


@pytest.fixture
async def database(tmp_path):
    db = SQLiteDatabase(str(tmp_path / "dstest.db"))
    await db.initialize()
    yield db
    await db.close()
