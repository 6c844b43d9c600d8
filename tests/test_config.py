"""Tests for settings and logging setup."""

import json
import logging

import pytest
from pydantic import ValidationError

from dstest.config import Settings
from dstest.logger import SimpleFormatter, StructuredFormatter, get_logger


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("DSTEST_RUNS_API_URL", raising=False)
        settings = Settings(_env_file=None)
        
        assert settings.runs_api_url == "http://localhost:8000/dstestapi/testruns/"
        assert settings.reset_results is True
    
    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("DSTEST_RUNS_API_URL", "https://config.example.com/dstestapi/testruns")
        monkeypatch.setenv("DSTEST_HTTP_MAX_RETRIES", "0")
        
        settings = Settings(_env_file=None)
        
        assert settings.runs_api_url == "https://config.example.com/dstestapi/testruns/"
        assert settings.http_max_retries == 0
    
    def test_rejects_non_http_url(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, runs_api_url="ftp://config.example.com/")


class TestLogging:
    def make_record(self, **extra) -> logging.LogRecord:
        record = logging.LogRecord("dstest.test", logging.INFO, __file__, 10, "collected %s", ("run",), None)
        for key, value in extra.items():
            setattr(record, key, value)
        return record
    
    def test_structured_format_redacts_api_keys(self):
        output = json.loads(StructuredFormatter(sanitize=True).format(self.make_record(apikey="apikey000001")))
        
        assert output["message"] == "collected run"
        assert output["apikey"] == "[REDACTED]"
    
    def test_structured_format_without_sanitizing(self):
        output = json.loads(StructuredFormatter(sanitize=False).format(self.make_record(apikey="apikey000001")))
        assert output["apikey"] == "apikey000001"
    
    def test_simple_format(self):
        assert "collected run" in SimpleFormatter().format(self.make_record())
    
    def test_module_loggers_share_the_package_logger(self):
        assert get_logger("dstest.matching.selector").parent is logging.getLogger("dstest")
        assert get_logger("elsewhere").name == "dstest.elsewhere"
