import os
import sys
from pathlib import Path
import unittest
from unittest import mock

import httpx

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from combiner.infrastructure.resilient_http import CircuitOpenError, post_json_with_retry, reset_circuit_breakers


class ResilientHttpTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        reset_circuit_breakers()

    def tearDown(self) -> None:
        reset_circuit_breakers()

    async def test_retries_retryable_status_then_succeeds(self) -> None:
        calls = {"count": 0}

        def handler(request: httpx.Request) -> httpx.Response:
            calls["count"] += 1
            if calls["count"] == 1:
                return httpx.Response(429, json={"error": "slow down"})
            return httpx.Response(200, json={"ok": True})

        async with httpx.AsyncClient(base_url="https://retry.test", transport=httpx.MockTransport(handler)) as client:
            body = await post_json_with_retry(client, "/chat", payload={}, retries=2, backoff_seconds=0)

        self.assertEqual({"ok": True}, body)
        self.assertEqual(2, calls["count"])

    async def test_does_not_retry_client_errors(self) -> None:
        calls = {"count": 0}

        def handler(request: httpx.Request) -> httpx.Response:
            calls["count"] += 1
            return httpx.Response(400, json={"error": "bad"})

        async with httpx.AsyncClient(base_url="https://bad.test", transport=httpx.MockTransport(handler)) as client:
            with self.assertRaises(httpx.HTTPStatusError):
                await post_json_with_retry(client, "/chat", payload={}, retries=3, backoff_seconds=0)

        self.assertEqual(1, calls["count"])

    async def test_list_body_is_wrapped(self) -> None:
        handler = lambda request: httpx.Response(200, json=[1, 2])
        async with httpx.AsyncClient(base_url="https://list.test", transport=httpx.MockTransport(handler)) as client:
            body = await post_json_with_retry(client, "/chat", payload={})

        self.assertEqual({"results": [1, 2]}, body)

    async def test_circuit_opens_after_threshold_failures(self) -> None:
        calls = {"count": 0}

        def handler(request: httpx.Request) -> httpx.Response:
            calls["count"] += 1
            return httpx.Response(503, json={"error": "down"})

        env = {
            "COMBINER_HTTP_CIRCUIT_FAILURE_THRESHOLD": "2",
            "COMBINER_HTTP_CIRCUIT_RESET_SECONDS": "300",
        }
        with mock.patch.dict(os.environ, env, clear=False):
            async with httpx.AsyncClient(base_url="https://down.test", transport=httpx.MockTransport(handler)) as client:
                for _ in range(2):
                    with self.assertRaises(httpx.HTTPStatusError):
                        await post_json_with_retry(client, "/chat", payload={}, backoff_seconds=0)
                with self.assertRaises(CircuitOpenError):
                    await post_json_with_retry(client, "/chat", payload={}, backoff_seconds=0)

        self.assertEqual(2, calls["count"])

    async def test_circuit_can_be_disabled(self) -> None:
        calls = {"count": 0}

        def handler(request: httpx.Request) -> httpx.Response:
            calls["count"] += 1
            return httpx.Response(503, json={"error": "down"})

        env = {
            "COMBINER_HTTP_CIRCUIT_BREAKER_ENABLED": "0",
            "COMBINER_HTTP_CIRCUIT_FAILURE_THRESHOLD": "1",
        }
        with mock.patch.dict(os.environ, env, clear=False):
            async with httpx.AsyncClient(base_url="https://nobreaker.test", transport=httpx.MockTransport(handler)) as client:
                for _ in range(3):
                    with self.assertRaises(httpx.HTTPStatusError):
                        await post_json_with_retry(client, "/chat", payload={}, backoff_seconds=0)

        self.assertEqual(3, calls["count"])


if __name__ == "__main__":
    unittest.main()
