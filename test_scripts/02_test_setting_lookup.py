#!/usr/bin/env python3
"""
Test: Setting Lookup
Purpose: Verify integration manager first, local store second

Tests:
- Integration manager value wins over the store
- Empty integration manager value falls back to the store
- Missing integration manager falls back to the store
- Settings-backed integration manager loading
- initialize_slack_config seeds the store and returns the manager
"""

import asyncio
import json
import sys

from fixtures import (
    print_test_header, print_pass, print_fail, print_summary,
    assert_equal, assert_true, assert_in,
    StaticIntegrationManager, make_settings
)

from structlog.testing import capture_logs

from slack_binding.adapters.integration import (
    SettingLookup, SettingsIntegrationManager, load_integration_manager
)
from slack_binding.config.store import STORAGE_KEY, ConfigStore, MemoryBackend
from slack_binding.core.workflows import initialize_slack_config


def _store(values):
    store = ConfigStore(MemoryBackend())
    store.init(values)
    return store


async def test_integration_manager_wins():
    """Test the primary source is used when it has a value"""
    manager = StaticIntegrationManager({"apiKey": "primary-key", "channel": "C-PRIMARY"})
    lookup = SettingLookup(_store({"apiKey": "local-key", "channel": "C-LOCAL"}), manager)

    assert_equal(lookup.api_key(), "primary-key")
    assert_equal(lookup.channel(), "C-PRIMARY")
    assert_in(("slack", "apiKey"), manager.lookups, "Lookup should use the slack namespace")


async def test_empty_primary_value_falls_back():
    """Test an empty string from the integration manager still falls through"""
    manager = StaticIntegrationManager({"apiKey": "", "channel": ""})
    lookup = SettingLookup(_store({"apiKey": "local-key", "channel": "C-LOCAL"}), manager)

    assert_equal(lookup.api_key(), "local-key", "Empty primary key should fall back")
    assert_equal(lookup.channel(), "C-LOCAL", "Empty primary channel should fall back")


async def test_none_primary_value_falls_back():
    """Test a None answer from the integration manager falls through"""
    manager = StaticIntegrationManager({})
    lookup = SettingLookup(_store({"channel": "C-LOCAL"}), manager)

    assert_equal(lookup.channel(), "C-LOCAL")
    assert_equal(lookup.api_key(), None, "Nothing configured anywhere should be None")


async def test_absent_integration_manager():
    """Test lookup works with only the local store"""
    lookup = SettingLookup(_store({"apiKey": "local-key"}))

    assert_equal(lookup.api_key(), "local-key")
    assert_equal(lookup.channel(), None)


async def test_settings_integration_manager():
    """Test the environment-backed manager answers in the slack namespace only"""
    manager = SettingsIntegrationManager(make_settings(slack_api_key="xoxb-env", slack_channel="C-ENV"))

    assert_equal(manager.get_integration_config("slack", "apiKey"), "xoxb-env")
    assert_equal(manager.get_integration_config("slack", "channel"), "C-ENV")
    assert_equal(manager.get_integration_config("github", "apiKey"), None)


async def test_load_integration_manager():
    """Test loading returns None when the environment has no Slack values"""
    assert_equal(load_integration_manager(make_settings()), None, "No values should mean no manager")

    manager = load_integration_manager(make_settings(slack_channel="C-ENV"))
    assert_true(isinstance(manager, SettingsIntegrationManager), "Should load the settings manager")


async def test_initialize_slack_config():
    """Test initialization merges explicit and persisted values"""
    backend = MemoryBackend({STORAGE_KEY: json.dumps({"apiKey": "Y", "channel": "C"})})
    store = ConfigStore(backend)

    manager = initialize_slack_config({"apiKey": "X"}, store, make_settings())

    assert_equal(manager, None, "No environment values should mean no manager")
    assert_equal(store.get("apiKey"), "X")
    assert_equal(store.get("channel"), "C")


async def test_failing_integration_manager_falls_back():
    """Test a raising integration manager is logged and the store is used"""

    class FailingIntegrationManager(StaticIntegrationManager):
        def get_integration_config(self, namespace, key):
            raise RuntimeError("secret store offline")

    lookup = SettingLookup(_store({"channel": "C-LOCAL"}), FailingIntegrationManager({}))

    with capture_logs() as logs:
        channel = lookup.channel()

    assert_equal(channel, "C-LOCAL")
    assert_true(
        any(entry["event"] == "integration_manager_lookup_failed" for entry in logs),
        "Lookup failure should be logged"
    )


async def test_missing_env_api_key_is_informational():
    """Test a key absent from the environment is not reported as a warning"""
    with capture_logs() as logs:
        make_settings().validate_critical_config()

    levels = [entry["log_level"] for entry in logs if entry["event"] == "slack_api_key_not_in_environment"]
    assert_equal(levels, ["info"])


async def main():
    """Run all setting lookup tests"""
    print_test_header("Setting Lookup Tests")

    tests_passed = 0
    tests_failed = 0

    tests = [
        ("Integration manager wins", test_integration_manager_wins),
        ("Empty primary value falls back", test_empty_primary_value_falls_back),
        ("None primary value falls back", test_none_primary_value_falls_back),
        ("Absent integration manager", test_absent_integration_manager),
        ("Settings integration manager", test_settings_integration_manager),
        ("Load integration manager", test_load_integration_manager),
        ("Initialize Slack config", test_initialize_slack_config),
        ("Failing integration manager falls back", test_failing_integration_manager_falls_back),
        ("Missing env API key is informational", test_missing_env_api_key_is_informational),
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
