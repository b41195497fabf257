#!/usr/bin/env python3
"""
Test: Configuration Store
Purpose: Verify merge, read/write and persistence rules of ConfigStore

Tests:
- Explicit values win over persisted ones
- Persisted values fill missing keys
- set() persists the whole mapping
- Corrupt persisted data is ignored
- Memory-only store works without persistence
- JSON file backend survives a fresh load
"""

import asyncio
import json
import os
import stat
import sys
import tempfile

from fixtures import (
    print_test_header, print_pass, print_fail, print_summary,
    assert_equal, assert_true, assert_false, make_settings
)

from structlog.testing import capture_logs

from slack_binding.config.store import (
    STORAGE_KEY, ConfigStore, JsonFileBackend, MemoryBackend, create_config_store
)


async def test_explicit_values_win_over_persisted():
    """Test init() keeps explicit values and fills gaps from storage"""
    backend = MemoryBackend({STORAGE_KEY: json.dumps({"apiKey": "Y", "channel": "C"})})
    store = ConfigStore(backend)

    store.init({"apiKey": "X"})

    assert_equal(store.get("apiKey"), "X", "Explicit apiKey should win")
    assert_equal(store.get("channel"), "C", "Persisted channel should fill the gap")


async def test_get_missing_key_returns_none():
    """Test get() on an unset key"""
    store = ConfigStore(MemoryBackend())
    store.init({})

    assert_equal(store.get("channel"), None, "Unset key should be None")


async def test_set_updates_and_persists():
    """Test set() is visible immediately and recovered by a fresh load"""
    backend = MemoryBackend()
    store = ConfigStore(backend)
    store.init({"apiKey": "X"})

    store.set("channel", "C2")
    assert_equal(store.get("channel"), "C2", "set() should be visible immediately")

    persisted = json.loads(backend.read(STORAGE_KEY))
    assert_equal(persisted, {"apiKey": "X", "channel": "C2"}, "Whole mapping should be persisted")

    fresh = ConfigStore(backend)
    fresh.init({})
    assert_equal(fresh.get("channel"), "C2", "Fresh load should recover the value")
    assert_equal(fresh.get("apiKey"), "X")


async def test_corrupt_persisted_config_is_ignored():
    """Test malformed stored JSON is logged and skipped"""
    backend = MemoryBackend({STORAGE_KEY: "{not json"})
    store = ConfigStore(backend)

    with capture_logs() as logs:
        store.init({"channel": "C"})

    assert_equal(store.get("channel"), "C", "In-memory values should survive")
    assert_true(
        any(entry["event"] == "config_parse_failed" and entry["log_level"] == "warning" for entry in logs),
        "Parse failure should be logged as a warning"
    )


async def test_non_object_persisted_config_is_ignored():
    """Test a JSON value that is not an object is treated as corrupt"""
    backend = MemoryBackend({STORAGE_KEY: json.dumps(["apiKey", "Y"])})
    store = ConfigStore(backend)

    store.init({})

    assert_equal(store.as_dict(), {}, "Nothing should be loaded from a JSON list")


async def test_memory_only_store():
    """Test a store without backend treats persistence as a no-op"""
    store = ConfigStore()
    store.init(None)

    store.set("channel", "C")

    assert_false(store.persistent, "Store should report no persistence")
    assert_equal(store.get("channel"), "C")


async def test_json_file_backend_round_trip():
    """Test values written through the file backend survive a new store"""
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "nested", "slack.json")

        store = ConfigStore(JsonFileBackend(path))
        store.init({})
        store.set("apiKey", "xoxb-1")
        store.set("channel", "C123")

        mode = stat.S_IMODE(os.stat(path).st_mode)
        assert_equal(mode, 0o600, "Storage file should be private")

        fresh = ConfigStore(JsonFileBackend(path))
        fresh.init({"channel": "OVERRIDE"})
        assert_equal(fresh.get("apiKey"), "xoxb-1")
        assert_equal(fresh.get("channel"), "OVERRIDE", "Explicit value should still win")


async def test_json_file_backend_unreadable_file():
    """Test a garbage file reads as empty storage"""
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "slack.json")
        with open(path, "w") as f:
            f.write("garbage")

        backend = JsonFileBackend(path)
        assert_equal(backend.read(STORAGE_KEY), None, "Unreadable file should read as empty")


async def test_create_config_store_respects_settings():
    """Test the factory honours config_store_enabled"""
    store = create_config_store(make_settings(config_store_enabled=False))
    assert_false(store.persistent, "Disabled store should be memory-only")

    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "slack.json")
        store = create_config_store(make_settings(config_store_enabled=True, config_store_path=path))
        assert_true(store.persistent, "Enabled store should persist")
        assert_true(os.path.exists(path), "Storage file should be created")


async def main():
    """Run all configuration store tests"""
    print_test_header("Configuration Store Tests")

    tests_passed = 0
    tests_failed = 0

    tests = [
        ("Explicit values win over persisted", test_explicit_values_win_over_persisted),
        ("Missing key returns None", test_get_missing_key_returns_none),
        ("set() updates and persists", test_set_updates_and_persists),
        ("Corrupt persisted config is ignored", test_corrupt_persisted_config_is_ignored),
        ("Non-object persisted config is ignored", test_non_object_persisted_config_is_ignored),
        ("Memory-only store", test_memory_only_store),
        ("JSON file backend round trip", test_json_file_backend_round_trip),
        ("JSON file backend unreadable file", test_json_file_backend_unreadable_file),
        ("Factory respects settings", test_create_config_store_respects_settings),
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
