#!/usr/bin/env python3
"""
Test: Slack Receive
Purpose: Verify the fixed wait and single thread poll

Tests:
- Last message text returned when the thread has replies
- "no response" for a thread with only the original message
- Missing channel returns immediately without waiting
- Request errors are returned verbatim
- Exactly one fixed 10 second wait and one GET per call
"""

import asyncio
import sys

import httpx

from fixtures import (
    print_test_header, print_pass, print_fail, print_summary,
    assert_equal, assert_not_in,
    FakeSlackAPI, make_adapter
)

from slack_binding.adapters.slack import REPLY_WAIT_SECONDS

CONFIG = {"apiKey": "xoxb-test", "channel": "C1"}


async def test_receive_returns_last_reply():
    """Test the text of the last message is returned"""
    fake = FakeSlackAPI(replies_body={"messages": [{"text": "a"}, {"text": "b"}, {"text": "c"}]})
    adapter, _, sleep = make_adapter(CONFIG, fake=fake)

    result = await adapter.receive("T1")

    assert_equal(result, "c")
    assert_equal(sleep.calls, [10], "Should wait 10 seconds once before polling")


async def test_receive_no_reply():
    """Test a thread holding only the original message"""
    fake = FakeSlackAPI(replies_body={"messages": [{"text": "a"}]})
    adapter, _, _ = make_adapter(CONFIG, fake=fake)

    result = await adapter.receive("T1")

    assert_equal(result, "no response")


async def test_receive_missing_messages_field():
    """Test a body without messages is treated as no reply"""
    fake = FakeSlackAPI(replies_body={"ok": True})
    adapter, _, _ = make_adapter(CONFIG, fake=fake)

    result = await adapter.receive("T1")

    assert_equal(result, "no response")


async def test_receive_request_shape():
    """Test the GET targets conversations.replies with thread and channel"""
    fake = FakeSlackAPI(replies_body={"messages": [{"text": "a"}, {"text": "b"}]})
    adapter, _, _ = make_adapter(CONFIG, fake=fake)

    await adapter.receive("1700000000.000100")

    request = fake.last_request()
    assert_equal(fake.count(), 1, "Exactly one poll")
    assert_equal(request.method, "GET")
    assert_equal(request.url.path, "/api/conversations.replies")
    assert_equal(request.url.params["ts"], "1700000000.000100")
    assert_equal(request.url.params["channel"], "C1")
    assert_equal(request.headers["Authorization"], "Bearer xoxb-test")


async def test_receive_without_channel():
    """Test a missing channel returns before the wait"""
    adapter, fake, sleep = make_adapter({"apiKey": "xoxb-test"})

    result = await adapter.receive("T1")

    assert_equal(result, {"error": "Channel not configured"})
    assert_equal(sleep.calls, [], "Should not wait")
    assert_equal(fake.count(), 0, "Should not poll")


async def test_receive_http_error():
    """Test an error status is returned verbatim"""
    fake = FakeSlackAPI(replies_status=500, replies_body={"ok": False})
    adapter, _, _ = make_adapter(CONFIG, fake=fake)

    result = await adapter.receive("T1")

    assert_equal(result, {"error": "HTTP error! status: 500 Internal Server Error"})


async def test_receive_no_response():
    """Test a timeout after the wait"""
    fake = FakeSlackAPI(error=httpx.ReadTimeout("timed out"))
    adapter, _, sleep = make_adapter(CONFIG, fake=fake)

    result = await adapter.receive("T1")

    assert_equal(result, {"error": "No response received from server"})
    assert_equal(sleep.calls, [REPLY_WAIT_SECONDS])


async def test_receive_slack_error_body():
    """Test a Slack ok=false body is passed through"""
    body = {"ok": False, "error": "thread_not_found"}
    adapter, _, _ = make_adapter(CONFIG, fake=FakeSlackAPI(replies_body=body))

    result = await adapter.receive("T1")

    assert_equal(result, body)


async def test_receive_without_api_key():
    """Test polling still happens without Authorization"""
    fake = FakeSlackAPI(replies_body={"messages": [{"text": "a"}, {"text": "b"}]})
    adapter, _, _ = make_adapter({"channel": "C1"}, fake=fake)

    result = await adapter.receive("T1")

    assert_equal(result, "b")
    assert_not_in("Authorization", fake.last_request().headers)


async def test_receive_non_object_messages():
    """Test thread entries that are not objects become an error descriptor"""
    fake = FakeSlackAPI(replies_body={"messages": ["a", "b"]})
    adapter, _, _ = make_adapter(CONFIG, fake=fake)

    result = await adapter.receive("T1")

    assert_equal(result, {"error": "Unexpected response body: message is str"})


async def test_receive_messages_not_a_list():
    """Test a messages field that is not a list counts as no reply"""
    fake = FakeSlackAPI(replies_body={"messages": "ab"})
    adapter, _, _ = make_adapter(CONFIG, fake=fake)

    result = await adapter.receive("T1")

    assert_equal(result, "no response")


async def main():
    """Run all Slack receive tests"""
    print_test_header("Slack Receive Tests")

    tests_passed = 0
    tests_failed = 0

    tests = [
        ("Receive returns last reply", test_receive_returns_last_reply),
        ("Receive with no reply", test_receive_no_reply),
        ("Receive without messages field", test_receive_missing_messages_field),
        ("Receive request shape", test_receive_request_shape),
        ("Receive without channel", test_receive_without_channel),
        ("Receive HTTP error", test_receive_http_error),
        ("Receive no response", test_receive_no_response),
        ("Receive Slack error body", test_receive_slack_error_body),
        ("Receive without API key", test_receive_without_api_key),
        ("Receive non-object messages", test_receive_non_object_messages),
        ("Receive messages not a list", test_receive_messages_not_a_list),
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
