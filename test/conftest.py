"""
Test Configuration

Environment setup MUST happen before any application import: settings and the loguru
sinks are configured at import time.
"""

import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    """Point logs at test/test_log and keep the seat API on a dummy host"""
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    os.environ.setdefault('DEPLOY_ENV', 'test')
    os.environ.setdefault('SEAT_API_BASE_URL', 'http://seat-api.test')


# Call immediately to set env vars before any imports
_early_setup_test_environment()
