"""Test doubles for monitor-wake tests."""
