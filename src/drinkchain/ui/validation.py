"""Pre-flight validation for the Streamlit UI.

Uses the API client for backend checks.
"""
from typing import List


def validate_data_dir() -> List[str]:
    """Validate that the data directory exists and is writable."""
    errors = []
    from drinkchain.config import settings
    data_dir = settings.data_dir

    try:
        data_dir.mkdir(parents=True, exist_ok=True)
        test_file = data_dir / ".write_test"
        test_file.touch()
        test_file.unlink()
    except OSError as e:
        errors.append(f"Cannot write to data directory {data_dir}: {e}")

    return errors


def validate_backend_connection() -> List[str]:
    """Validate that the FastAPI backend is reachable."""
    errors = []
    try:
        from drinkchain.ui.api_client import DrinkChainClient
        client = DrinkChainClient()
        client.health()
    except Exception as e:
        errors.append(f"Backend connection failed: {e}")
    return errors


def run_all_checks() -> List[str]:
    """Run all validation checks."""
    errors = []
    errors.extend(validate_data_dir())
    errors.extend(validate_backend_connection())
    return errors
