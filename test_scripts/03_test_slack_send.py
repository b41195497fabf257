#!/usr/bin/env python3
"""
Test: Slack Send
Purpose: Verify message posting and error normalization

Tests:
- Successful post returns the ts token
- Configured channel is used, caller's channel ignored
- Missing channel short-circuits without a network call
- Missing API key sends without Authorization and logs an error
- HTTP error status, no response, and request errors become descriptors
- Slack ok=false bodies are passed through
"""

import asyncio
import sys

import httpx
from structlog.testing import capture_logs

from fixtures import (
    print_test_header, print_pass, print_fail, print_summary,
    assert_equal, assert_true, assert_in, assert_not_in,
    FakeSlackAPI, StaticIntegrationManager, make_adapter
)

from slack_binding.adapters.slack import is_error

CONFIG = {"apiKey": "xoxb-test", "channel": "C-CONFIGURED"}


async def test_send_returns_ts():
    """Test a successful post returns exactly the ts field"""
    adapter, fake, _ = make_adapter(CONFIG, fake=FakeSlackAPI(post_body={"ok": True, "ts": "123.45"}))

    result = await adapter.send("#ignored", "hello")

    assert_equal(result, "123.45")
    request = fake.last_request()
    assert_equal(request.method, "POST")
    assert_equal(str(request.url), "https://slack.test/api/chat.postMessage")
    assert_equal(request.headers["Authorization"], "Bearer xoxb-test")
    assert_equal(request.headers["Content-Type"], "application/json")


async def test_send_ignores_channel_argument():
    """Test the configured channel is posted to, not the caller's"""
    adapter, fake, _ = make_adapter(CONFIG)

    await adapter.send("#somewhere-else", "hello")

    assert_equal(fake.last_json(), {"channel": "C-CONFIGURED", "text": "hello"})


async def test_send_uses_integration_manager_channel():
    """Test the integration manager's channel takes precedence"""
    manager = StaticIntegrationManager({"channel": "C-MANAGER", "apiKey": "xoxb-manager"})
    adapter, fake, _ = make_adapter(CONFIG, integration_manager=manager)

    await adapter.send("#ignored", "hi")

    assert_equal(fake.last_json()["channel"], "C-MANAGER")
    assert_equal(fake.last_request().headers["Authorization"], "Bearer xoxb-manager")


async def test_send_without_channel():
    """Test a missing channel returns an error and makes no request"""
    adapter, fake, _ = make_adapter({"apiKey": "xoxb-test"})

    result = await adapter.send("#requested", "hello")

    assert_equal(result, {"error": "Slack channel not configured"})
    assert_equal(fake.count(), 0, "No request should be made")


async def test_send_with_empty_channel():
    """Test an empty configured channel counts as missing"""
    manager = StaticIntegrationManager({"channel": ""})
    adapter, fake, _ = make_adapter({"channel": ""}, integration_manager=manager)

    result = await adapter.send("#requested", "hello")

    assert_equal(result, {"error": "Slack channel not configured"})
    assert_equal(fake.count(), 0)


async def test_send_without_api_key():
    """Test a missing key still posts, without Authorization, and logs an error"""
    adapter, fake, _ = make_adapter({"channel": "C1"})

    with capture_logs() as logs:
        result = await adapter.send("C1", "hello")

    assert_equal(result, "1700000000.000100")
    assert_equal(fake.count(), 1, "Request should still be sent")
    assert_not_in("Authorization", fake.last_request().headers)
    assert_true(
        any(entry["event"] == "slack_api_key_missing" and entry["log_level"] == "error" for entry in logs),
        "Missing key should be logged as an error"
    )


async def test_send_http_error_status():
    """Test a non-success status includes code and reason phrase"""
    fake = FakeSlackAPI(post_status=429, post_body={"ok": False})
    adapter, _, _ = make_adapter(CONFIG, fake=fake)

    with capture_logs() as logs:
        result = await adapter.send("C1", "hello")

    assert_equal(result, {"error": "HTTP error! status: 429 Too Many Requests"})
    assert_true(
        any(entry["event"] == "slack_send_failed" for entry in logs),
        "Send failure should be logged"
    )


async def test_send_no_response():
    """Test transport failures map to the generic no-response message"""
    for error in (httpx.ReadTimeout("timed out"), httpx.ConnectError("connection refused")):
        adapter, _, _ = make_adapter(CONFIG, fake=FakeSlackAPI(error=error))

        result = await adapter.send("C1", "hello")

        assert_equal(result, {"error": "No response received from server"}, type(error).__name__)


async def test_send_request_error():
    """Test errors raised before a request goes out keep their message"""
    error = httpx.UnsupportedProtocol("Request URL has an unsupported protocol 'ftp://'.")
    adapter, _, _ = make_adapter(CONFIG, fake=FakeSlackAPI(error=error))

    result = await adapter.send("C1", "hello")

    assert_equal(result, {"error": "Request URL has an unsupported protocol 'ftp://'."})


async def test_send_undecodable_body():
    """Test a non-JSON body is reported, not raised"""

    def handler(request):
        return httpx.Response(200, content=b"<html>oops</html>")

    adapter, _, _ = make_adapter(CONFIG)
    adapter._transport = httpx.MockTransport(handler)

    result = await adapter.send("C1", "hello")

    assert_true(is_error(result), "Decode failure should be an error descriptor")


async def test_send_slack_api_error_passthrough():
    """Test a Slack ok=false body is returned as the error descriptor"""
    body = {"ok": False, "error": "channel_not_found"}
    adapter, _, _ = make_adapter(CONFIG, fake=FakeSlackAPI(post_body=body))

    result = await adapter.send("C1", "hello")

    assert_equal(result, body)
    assert_in("error", result)


async def main():
    """Run all Slack send tests"""
    print_test_header("Slack Send Tests")

    tests_passed = 0
    tests_failed = 0

    tests = [
        ("Send returns ts", test_send_returns_ts),
        ("Send ignores channel argument", test_send_ignores_channel_argument),
        ("Send uses integration manager channel", test_send_uses_integration_manager_channel),
        ("Send without channel", test_send_without_channel),
        ("Send with empty channel", test_send_with_empty_channel),
        ("Send without API key", test_send_without_api_key),
        ("Send HTTP error status", test_send_http_error_status),
        ("Send no response", test_send_no_response),
        ("Send request error", test_send_request_error),
        ("Send undecodable body", test_send_undecodable_body),
        ("Send Slack API error passthrough", test_send_slack_api_error_passthrough),
    ]

    for test_name, test_func in tests:
        try:
            await test_func()
            print_pass(test_name)
            tests_passed += 1
        except Exception as e:
            print_fail(test_name, str(e))
            import traceback
            traceback.print_exc()
            tests_failed += 1

    print_summary(tests_passed, tests_failed)
    return 0 if tests_failed == 0 else 1


if __name__ == "__main__":
    exit_code = asyncio.run(main())
    sys.exit(exit_code)
