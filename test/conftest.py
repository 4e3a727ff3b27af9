"""
Test Configuration

Unit tests run against the in-memory seat store; nothing here needs PostgreSQL.
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings and the loguru sinks are built at import time
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    worker_id = os.environ.get('PYTEST_XDIST_WORKER', 'master')
    if worker_id == 'master':
        os.environ['POSTGRES_DB'] = 'segment_booking_test_db'
    else:
        os.environ['POSTGRES_DB'] = f'segment_booking_test_db_{worker_id}'

    os.environ['SEAT_STORE_BACKEND'] = 'memory'

    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)


_early_setup_test_environment()

from collections.abc import Generator  # noqa: E402

import pytest  # noqa: E402

from src.platform.config.di import container  # noqa: E402


@pytest.fixture(autouse=True)
def reset_container() -> Generator[None, None, None]:
    """Every test starts from fresh singletons and no provider overrides."""
    yield
    container.reset_override()
    container.reset_singletons()
