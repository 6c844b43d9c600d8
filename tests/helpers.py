"""Builders shared by the test modules."""

import json
from datetime import datetime, timedelta, timezone

from dstest.core.models import Transaction

CHARGES_URL = "/ch/payments/v1/charges"
HEADER_ID = "1234567890123456"
BASE_TIME = datetime(2024, 5, 16, 12, 0, 0, tzinfo=timezone.utc)


def make_transaction(body, status=201, url=CHARGES_URL, minutes=0, **kwargs) -> Transaction:
    """Build a transaction; ``minutes`` offsets the capture time from BASE_TIME."""
    return Transaction(
        api_key=kwargs.pop("api_key", "apikey000001"),
        run_header_id=kwargs.pop("run_header_id", HEADER_ID),
        status=status,
        url=url,
        request=body if isinstance(body, str) else json.dumps(body),
        response=kwargs.pop("response", "{}"),
        timestamp=BASE_TIME + timedelta(minutes=minutes),
        **kwargs
    )


# Test run as served by the configuration service
SERVICE_DOCUMENT = {
    "_id": "62828e4072277df7cd3a4254",
    "name": "Tom Run 1",
    "apikey": "apikey000001",
    "header_id": "1234567890123456",
    "test_suite": {
        "_id": "627a8285b1c63cf751cfc1fd",
        "name": "TestSuite1",
        "test_cases": [
            {
                "_id": "627a8285b1c63cf751cfc1fa",
                "name": "TestCase1",
                "url": "/ch/payments/v1/charges",
                "predicates": [
                    {"attribute": "amount.total", "expected_value": "300"},
                    {"attribute": "transactionDetails.captureFlag", "expected_value": True},
                ],
                "expected_status": 201,
            }
        ],
    },
    "test_results": None,
    "status": 1,
    "timestamp": "2022-05-16T17:47:44.123Z",
}
