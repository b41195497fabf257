#!/usr/bin/env python3
"""
Test: Workflow Binding
Purpose: Verify event dispatch to the Slack send workflow

Tests:
- SendSlackMessage event returns whatever send returns
- Error descriptors pass through unchanged
- Unknown events and invalid payloads are rejected
"""

import asyncio
import sys

from pydantic import ValidationError

from fixtures import (
    print_test_header, print_pass, print_fail, print_summary,
    assert_equal, assert_true, assert_false, assert_raises_async,
    FakeSlackAPI, make_adapter
)

from slack_binding.core.workflows import (
    WorkflowRegistry, UnknownEventError, register_slack_workflows
)
from slack_binding.models.schemas import EventType, SendSlackMessage


def _registry(config, fake=None):
    adapter, fake, _ = make_adapter(config, fake=fake)
    registry = WorkflowRegistry()
    register_slack_workflows(registry, adapter)
    return registry, fake


async def test_send_event_returns_ts():
    """Test the workflow result is the send result"""
    registry, fake = _registry(
        {"apiKey": "xoxb-test", "channel": "C1"},
        fake=FakeSlackAPI(post_body={"ok": True, "ts": "123.45"}),
    )

    result = await registry.dispatch(
        EventType.SEND_SLACK_MESSAGE,
        {"channel": "#ops", "message": "deployed"},
    )

    assert_equal(result, "123.45")
    assert_equal(fake.last_json(), {"channel": "C1", "text": "deployed"})


async def test_send_event_passes_error_through():
    """Test an error descriptor is returned as-is"""
    registry, fake = _registry({"apiKey": "xoxb-test"})

    result = await registry.dispatch(
        EventType.SEND_SLACK_MESSAGE,
        {"channel": "#ops", "message": "deployed"},
    )

    assert_equal(result, {"error": "Slack channel not configured"})
    assert_equal(fake.count(), 0)


async def test_unknown_event():
    """Test dispatching an unbound event"""
    registry = WorkflowRegistry()

    assert_false(registry.is_bound(EventType.SEND_SLACK_MESSAGE))
    await assert_raises_async(
        UnknownEventError,
        registry.dispatch(EventType.SEND_SLACK_MESSAGE, {"channel": "c", "message": "m"}),
    )


async def test_invalid_payload():
    """Test a payload missing the message field"""
    registry, fake = _registry({"apiKey": "xoxb-test", "channel": "C1"})

    await assert_raises_async(
        ValidationError,
        registry.dispatch(EventType.SEND_SLACK_MESSAGE, {"channel": "#ops"}),
    )
    assert_equal(fake.count(), 0, "Invalid payload should not reach Slack")


async def test_registration():
    """Test the Slack workflow is bound to its event model"""
    registry, _ = _registry({})

    assert_true(registry.is_bound(EventType.SEND_SLACK_MESSAGE))
    event = SendSlackMessage(channel="#ops", message="hi")
    assert_equal(event.model_dump(), {"channel": "#ops", "message": "hi"})


async def main():
    """Run all workflow binding tests"""
    print_test_header("Workflow Binding Tests")

    tests_passed = 0
    tests_failed = 0

    tests = [
        ("Send event returns ts", test_send_event_returns_ts),
        ("Send event passes error through", test_send_event_passes_error_through),
        ("Unknown event", test_unknown_event),
        ("Invalid payload", test_invalid_payload),
        ("Registration", test_registration),
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
