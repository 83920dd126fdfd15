"""Pytest configuration: opt-in tests against a real VOC dataset."""

import pytest


def pytest_addoption(parser):
    """Add --slow option to run tests that read a full dataset."""
    parser.addoption(
        "--slow",
        action="store_true",
        default=False,
        help="Run slow tests against the dataset in VOC_DATASET_DIR"
    )


def pytest_configure(config):
    """Register slow marker."""
    config.addinivalue_line("markers", "slow: reads a real VOC dataset (skip by default)")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --slow is passed."""
    if config.getoption("--slow"):
        return

    skip_slow = pytest.mark.skip(reason="need --slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)
