"""Core data models for DSTest.

Field aliases follow the JSON documents served by the configuration service
(``_id``, ``apikey``, ``header_id``...). Models accept either the alias or the
Python field name.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from dstest.utils.helpers import new_object_id, utcnow


class TestRunStatus(int, Enum):
    """Lifecycle status of a test run."""
    
    UNDEFINED = 0
    CREATED = 1
    IN_PROGRESS = 2
    COMPLETE = 3


class TestStatus(int, Enum):
    """Verdict for a single test case.
    
    ``UNDEFINED`` means no candidate transaction was found and never
    appears on a stored ``TestResult``.
    """
    
    UNDEFINED = 0
    SUCCESS = 1
    FAILURE = 2


class Transaction(BaseModel):
    """A recorded HTTP exchange captured by the instrumented service."""
    
    model_config = ConfigDict(frozen=True, populate_by_name=True)
    
    id: str = Field(
        default_factory=new_object_id,
        alias="_id",
        validation_alias=AliasChoices("_id", "id")
    )
    api_key: str = Field(default="", alias="apikey")
    run_header_id: str = Field(default="", alias="testrunid")
    status: int = 0
    url: str = ""
    headers: str = ""
    request: str = ""
    response: str = ""
    timestamp: datetime = Field(default_factory=utcnow)


class TestCasePredicate(BaseModel):
    """Required value at a dotted JSON path of the request body."""
    
    model_config = ConfigDict(frozen=True, populate_by_name=True)
    
    id: str = Field(default_factory=new_object_id, alias="_id")
    name: str = ""
    attribute: str
    expected_value: str
    
    @field_validator("expected_value", mode="before")
    @classmethod
    def coerce_expected_value(cls, v):
        """Accept numbers and booleans authored without quotes."""
        if isinstance(v, bool):
            return "true" if v else "false"
        if isinstance(v, (int, float)):
            return str(v)
        return v


class TestCase(BaseModel):
    """One expected behavior: URL pattern, predicates and expected status."""
    
    model_config = ConfigDict(frozen=True, populate_by_name=True)
    
    id: str = Field(default_factory=new_object_id, alias="_id")
    name: str
    url: str
    predicates: List[TestCasePredicate] = Field(default_factory=list)
    expected_status: int


class TestSuite(BaseModel):
    """Ordered collection of test cases."""
    
    model_config = ConfigDict(frozen=True, populate_by_name=True)
    
    id: str = Field(default_factory=new_object_id, alias="_id")
    name: str
    test_cases: List[TestCase] = Field(default_factory=list)


class TestResult(BaseModel):
    """Outcome of matching one test case to one transaction."""
    
    model_config = ConfigDict(populate_by_name=True)
    
    id: str = Field(default_factory=new_object_id, alias="_id")
    test_case: TestCase
    transaction: Transaction
    status: TestStatus
    timestamp: datetime = Field(default_factory=utcnow)
    
    @field_validator("status")
    @classmethod
    def validate_status(cls, v: TestStatus) -> TestStatus:
        if v == TestStatus.UNDEFINED:
            raise ValueError("a test result must be a success or a failure")
        return v


class TestRun(BaseModel):
    """One execution of a test suite against a transaction pool."""
    
    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)
    
    id: str = Field(default_factory=new_object_id, alias="_id")
    name: str = ""
    api_key: str = Field(default="", alias="apikey")
    header_id: str
    test_suite: TestSuite
    test_results: List[TestResult] = Field(default_factory=list)
    status: TestRunStatus = TestRunStatus.UNDEFINED
    timestamp: datetime = Field(default_factory=utcnow)
    
    @field_validator("test_results", mode="before")
    @classmethod
    def default_results(cls, v):
        # The service sends null for a run that has never been collected
        return [] if v is None else v
    
    def result_for(self, test_case: TestCase) -> Optional[TestResult]:
        """Return the result recorded for ``test_case``, if any."""
        for result in self.test_results:
            if result.test_case.id == test_case.id:
                return result
        return None
    
    def is_complete(self) -> bool:
        """True when every test case in the suite has a result."""
        return len(self.test_results) == len(self.test_suite.test_cases)
