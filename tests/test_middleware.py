"""Unit tests for app.core.middleware: response time header, request log, performance warnings."""

import unittest
from unittest.mock import MagicMock, patch

from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import ValidationError

from app.core import middleware
from app.core.config import Settings

MB = 1024 * 1024


def _settings(monitoring: bool = True, slow_ms: int = 1000, memory_mb: float = 10.0) -> MagicMock:
    settings = MagicMock()
    settings.PERFORMANCE_MONITORING = monitoring
    settings.is_dev = False
    settings.SLOW_REQUEST_MS = slow_ms
    settings.HIGH_MEMORY_MB = memory_mb
    return settings


def _client(settings: MagicMock) -> TestClient:
    app = FastAPI()

    @app.get("/ping")
    def ping() -> dict:
        return {"ok": True}

    middleware.register_middleware(app, settings)
    return TestClient(app)


class TestResponseTime(unittest.TestCase):
    def test_header_set_without_monitoring(self) -> None:
        response = _client(_settings(monitoring=False)).get("/ping")
        self.assertEqual(response.status_code, 200)
        self.assertRegex(response.headers["X-Response-Time"], r"^\d+ms$")

    def test_format_duration_rounds(self) -> None:
        self.assertEqual(middleware.format_duration(12.6), "13ms")


class TestRequestLog(unittest.TestCase):
    def test_request_line_carries_structured_fields(self) -> None:
        client = _client(_settings(monitoring=False))
        with self.assertLogs("app.core.middleware", level="INFO") as cm:
            client.get("/ping", headers={"User-Agent": "quill-test"})
        record = next(r for r in cm.records if r.getMessage() == "GET /ping")
        self.assertEqual(record.method, "GET")
        self.assertEqual(record.path, "/ping")
        self.assertEqual(record.user_agent, "quill-test")


class TestPerformanceWarnings(unittest.TestCase):
    def setUp(self) -> None:
        patcher = patch.object(middleware, "tracemalloc")
        self.tracemalloc = patcher.start()
        self.tracemalloc.is_tracing.return_value = True
        self.addCleanup(patcher.stop)

    def test_slow_request_is_a_warning(self) -> None:
        self.tracemalloc.get_traced_memory.return_value = (0, 0)
        client = _client(_settings(slow_ms=1))
        with patch.object(middleware, "time") as fake_time:
            fake_time.perf_counter.side_effect = [0.0, 2.5]
            with self.assertLogs("app.core.middleware", level="WARNING") as cm:
                client.get("/ping")
        slow = [r for r in cm.records if r.getMessage().startswith("Slow request detected")]
        self.assertEqual(len(slow), 1)
        self.assertEqual(slow[0].duration, "2500ms")
        self.assertEqual(slow[0].status, 200)

    def test_high_memory_growth_is_a_warning(self) -> None:
        self.tracemalloc.get_traced_memory.side_effect = [(0, 0), (25 * MB, 25 * MB)]
        client = _client(_settings(memory_mb=10.0))
        with self.assertLogs("app.core.middleware", level="WARNING") as cm:
            client.get("/ping")
        high = [r for r in cm.records if r.getMessage().startswith("High memory usage detected")]
        self.assertEqual(len(high), 1)
        self.assertEqual(high[0].memory_used, "25.00MB")
        self.assertEqual(high[0].path, "/ping")

    def test_small_requests_log_at_debug_only(self) -> None:
        self.tracemalloc.get_traced_memory.side_effect = [(0, 0), (MB, MB)]
        client = _client(_settings())
        with self.assertLogs("app.core.middleware", level="DEBUG") as cm:
            client.get("/ping")
        levels = {r.levelname for r in cm.records}
        self.assertNotIn("WARNING", levels)
        self.assertIn("DEBUG", levels)

    def test_tracing_started_when_monitoring(self) -> None:
        self.tracemalloc.is_tracing.return_value = False
        middleware.make_timing_middleware(_settings())
        self.tracemalloc.start.assert_called_once()

    def test_tracing_not_started_without_monitoring(self) -> None:
        self.tracemalloc.is_tracing.return_value = False
        middleware.make_timing_middleware(_settings(monitoring=False))
        self.tracemalloc.start.assert_not_called()


class TestMemoryThresholdSetting(unittest.TestCase):
    def test_threshold_must_be_positive(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(HIGH_MEMORY_MB=0)
