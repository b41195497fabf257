"""
Test fixtures and helper utilities for standalone test scripts.
Provides common setup, fake Slack API, and assertion helpers.
"""

import sys
import os
import json
from typing import Optional

import httpx

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from slack_binding.adapters.integration import IntegrationManager, SettingLookup
from slack_binding.adapters.slack import SlackAdapter
from slack_binding.config.settings import Settings
from slack_binding.config.store import ConfigStore, MemoryBackend


# ============================================================================
# Color codes for terminal output
# ============================================================================

GREEN = '\033[92m'
RED = '\033[91m'
YELLOW = '\033[93m'
BLUE = '\033[94m'
CYAN = '\033[96m'
RESET = '\033[0m'


# ============================================================================
# Test output helpers
# ============================================================================

def print_test_header(test_name):
    """Print formatted test header"""
    print(f"\n{'='*70}")
    print(f"{CYAN}Running: {test_name}{RESET}")
    print(f"{'='*70}\n")


def print_pass(test_name):
    """Print test pass message"""
    print(f"{GREEN}✓ PASS{RESET}: {test_name}")


def print_fail(test_name, error):
    """Print test failure message with error details"""
    print(f"{RED}✗ FAIL{RESET}: {test_name}")
    print(f"{RED}  Error: {error}{RESET}")


def print_info(message):
    """Print informational message"""
    print(f"{BLUE}ℹ {message}{RESET}")


def print_summary(tests_passed, tests_failed):
    """Print test summary"""
    print(f"\n{'='*70}")
    total = tests_passed + tests_failed
    if tests_failed == 0:
        print(f"{GREEN}✓ ALL TESTS PASSED{RESET}: {tests_passed}/{total}")
    else:
        print(f"{RED}✗ SOME TESTS FAILED{RESET}: {tests_passed} passed, {tests_failed} failed")
    print(f"{'='*70}\n")


# ============================================================================
# Assertion helpers
# ============================================================================

def assert_equal(actual, expected, message=""):
    """Assert two values are equal"""
    if actual != expected:
        raise AssertionError(
            f"{message}\nExpected: {expected}\nActual: {actual}"
        )


def assert_true(condition, message=""):
    """Assert condition is true"""
    if not condition:
        raise AssertionError(message or "Expected condition to be true")


def assert_false(condition, message=""):
    """Assert condition is false"""
    if condition:
        raise AssertionError(message or "Expected condition to be false")


def assert_in(item, container, message=""):
    """Assert item is in container"""
    if item not in container:
        raise AssertionError(
            f"{message}\nExpected {item} to be in {container}"
        )


def assert_not_in(item, container, message=""):
    """Assert item is not in container"""
    if item in container:
        raise AssertionError(
            f"{message}\nExpected {item} to not be in {container}"
        )


async def assert_raises_async(exception_type, coro):
    """Assert async function raises specific exception"""
    try:
        await coro
        raise AssertionError(
            f"Expected {exception_type.__name__} to be raised, but no exception was raised"
        )
    except exception_type:
        pass  # Expected
    except Exception as e:
        raise AssertionError(
            f"Expected {exception_type.__name__} to be raised, but got {type(e).__name__}: {e}"
        )


# ============================================================================
# Mock helpers
# ============================================================================

class FakeSlackAPI:
    """
    In-process Slack Web API served through httpx.MockTransport.
    Records every request it receives.
    """

    def __init__(
        self,
        post_status=200,
        post_body=None,
        replies_status=200,
        replies_body=None,
        error: Optional[Exception] = None,
    ):
        self.post_status = post_status
        self.post_body = post_body if post_body is not None else {"ok": True, "ts": "1700000000.000100"}
        self.replies_status = replies_status
        self.replies_body = replies_body if replies_body is not None else {"ok": True, "messages": []}
        self.error = error
        self.requests = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if self.error is not None:
            raise self.error

        if request.url.path.endswith("/chat.postMessage"):
            return httpx.Response(self.post_status, json=self.post_body)
        if request.url.path.endswith("/conversations.replies"):
            return httpx.Response(self.replies_status, json=self.replies_body)

        return httpx.Response(404, json={"ok": False, "error": "unknown_method"})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> dict:
        return json.loads(self.last_request().content)

    def count(self) -> int:
        return len(self.requests)


class RecordingSleep:
    """Stand-in for asyncio.sleep that returns immediately"""

    def __init__(self):
        self.calls = []

    async def __call__(self, seconds):
        self.calls.append(seconds)


class StaticIntegrationManager(IntegrationManager):
    """Integration manager answering from a fixed mapping"""

    def __init__(self, values: dict):
        self.values = values
        self.lookups = []

    def get_integration_config(self, namespace, key):
        self.lookups.append((namespace, key))
        return self.values.get(key)


def make_settings(**overrides) -> Settings:
    """Settings isolated from the caller's environment and .env file"""
    values = {
        "slack_api_key": None,
        "slack_channel": None,
        "config_store_enabled": False,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_adapter(config=None, integration_manager=None, fake=None):
    """
    Build an adapter over an in-memory store and a fake Slack API.

    Returns:
        Tuple of (adapter, fake_api, sleep)
    """
    store = ConfigStore(MemoryBackend())
    store.init(config or {})
    fake = fake or FakeSlackAPI()
    sleep = RecordingSleep()
    adapter = SlackAdapter(
        SettingLookup(store, integration_manager),
        base_url="https://slack.test/api",
        timeout=5.0,
        transport=fake.transport,
        sleep=sleep,
    )
    return adapter, fake, sleep
