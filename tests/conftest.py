"""
Pytest configuration and common fixtures for the data insight explorer tests.
"""
import os
import sys
import pytest
from unittest.mock import Mock, patch

import pandas as pd

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


# Mock environment variables
@pytest.fixture(autouse=True)
def mock_env_vars():
    """Mock environment variables for testing."""
    with patch.dict(os.environ, {
        'OPENAI_API_KEY': 'test-api-key',
        'OPENAI_MODEL': 'gpt-4',
        'SUPABASE_URL': 'https://example.supabase.co',
        'SUPABASE_ANON_KEY': 'test-anon-key',
        'MAX_UPLOAD_MB': '10',
        'LOG_VERBOSITY': '0',
    }):
        yield


def make_completion(content):
    """Build an object shaped like a chat-completions response."""
    return Mock(choices=[Mock(message=Mock(content=content))])


@pytest.fixture
def mock_openai_client():
    """Mock OpenAI client for testing."""
    mock_client = Mock()
    mock_client.chat.completions.create.return_value = make_completion("")
    return mock_client


@pytest.fixture
def mock_supabase_client():
    """Mock Supabase client for testing."""
    mock_client = Mock()
    mock_client.auth.sign_in_with_password.return_value = Mock(
        user=Mock(email="ada@example.com"),
        session=Mock(access_token="access-123", refresh_token="refresh-456"),
    )
    mock_client.auth.sign_up.return_value = Mock(
        user=Mock(email="ada@example.com"),
        session=None,
    )
    return mock_client


@pytest.fixture
def sales_df():
    """Small mixed-type dataset, every cell a string like the CSV reader produces."""
    return pd.DataFrame({
        "region": ["North", "South", "North", "East", "North", "South"],
        "units": ["10", "20", "30", "40", "50", "60"],
        "revenue": ["100.5", "199.5", "301", "398", "502", "600"],
        "order_date": ["2024-01-05", "2024-01-06", "2024-02-01",
                       "2024-02-03", "2024-03-10", "2024-03-11"],
    })


@pytest.fixture
def sample_csv_bytes():
    return (
        b"region,units,revenue\n"
        b"North,10,100.5\n"
        b"South,20,199.5\n"
        b"North,30,301\n"
    )


@pytest.fixture
def sample_ai_response():
    return (
        "# Strong correlation between units and revenue\n\n"
        "Revenue rises almost linearly with units sold across every region.\n\n"
        "Recommendation: Forecast revenue from planned unit volumes.\n\n"
        "## Unusual spike in the South region\n\n"
        "One South order is far above the regional median and may be a data entry error."
    )
