"""Root pytest configuration.

Layout::

    tests/
    ├── nucleus_config/        # Settings and logging
    ├── nucleus_identity/
    │   ├── unit/              # Mocked repositories, no database
    │   ├── persistence/       # Repositories on in-memory SQLite
    │   ├── e2e/               # UserManagementService on in-memory SQLite
    │   └── integration/       # UserManagementService on PostgreSQL
    └── shared/fixtures/       # Engines and session makers

Tests carrying an opt-in marker stay collected but are skipped unless the
matching option or environment variable is given:

    --run-integration / RUN_INTEGRATION=1   needs Docker for Testcontainers
    --run-all         / RUN_ALL_TESTS=1     everything
"""

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv

from nucleus_config import clear_settings_cache

CONFIG_DIR = Path(__file__).resolve().parents[1] / "config"

# marker -> (command line option, environment variable, description)
OPT_IN_MARKERS = {
    "integration": (
        "--run-integration",
        "RUN_INTEGRATION",
        "Runs against a PostgreSQL container (auto-skipped)",
    ),
}

for _name in (".env.dev", ".env"):
    if (CONFIG_DIR / _name).is_file():
        load_dotenv(CONFIG_DIR / _name)
        break


def _enabled(config, option: str, variable: str) -> bool:
    if config.getoption(option):
        return True
    return os.environ.get(variable, "").lower() in ("1", "true", "yes")


def pytest_addoption(parser):
    for marker, (option, _, _) in OPT_IN_MARKERS.items():
        parser.addoption(
            option,
            action="store_true",
            default=False,
            help=f"Run tests marked with @pytest.mark.{marker}",
        )
    parser.addoption(
        "--run-all",
        action="store_true",
        default=False,
        help="Run all tests regardless of markers",
    )


def pytest_configure(config):
    for marker, (_, _, description) in OPT_IN_MARKERS.items():
        config.addinivalue_line("markers", f"{marker}: {description}")


def pytest_collection_modifyitems(config, items):
    if _enabled(config, "--run-all", "RUN_ALL_TESTS"):
        return

    skipped = {
        marker: pytest.mark.skip(reason=f"run with {option} or {variable}=1")
        for marker, (option, variable, _) in OPT_IN_MARKERS.items()
        if not _enabled(config, option, variable)
    }
    for item in items:
        # explicit markers only, directories do not imply one
        for marker in {mark.name for mark in item.iter_markers()} & skipped.keys():
            item.add_marker(skipped[marker])


@pytest.fixture(scope="session", autouse=True)
def fresh_settings_cache():
    clear_settings_cache()
    yield
    clear_settings_cache()
