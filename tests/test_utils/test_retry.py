"""Tests for retry helpers."""

import pytest
from unittest.mock import Mock, patch

from addondeploy.models.config import RetryConfig
from addondeploy.utils.retry import calculate_delay, retry_call


class TestCalculateDelay:
    """Test backoff delays."""

    def test_exponential_without_jitter(self, monkeypatch):
        """Test delays double per attempt."""
        monkeypatch.delenv("SKIP_RETRY_DELAYS", raising=False)
        config = RetryConfig(initial_delay=1.0, max_delay=100.0, jitter=False)

        assert calculate_delay(config, 1) == 2.0
        assert calculate_delay(config, 2) == 4.0
        assert calculate_delay(config, 3) == 8.0

    def test_capped(self, monkeypatch):
        """Test delays never exceed max_delay."""
        monkeypatch.delenv("SKIP_RETRY_DELAYS", raising=False)
        config = RetryConfig(initial_delay=5.0, max_delay=120.0, jitter=False)

        assert calculate_delay(config, 10) == 120.0

    def test_jitter_range(self, monkeypatch):
        """Test jitter stays within 30 percent."""
        monkeypatch.delenv("SKIP_RETRY_DELAYS", raising=False)
        config = RetryConfig(initial_delay=5.0, max_delay=120.0, jitter=True)

        for _ in range(50):
            delay = calculate_delay(config, 1)
            assert 7.0 <= delay <= 13.0

    def test_skip_delays(self, no_retry_delays):
        """Test delays are disabled through the environment."""
        assert calculate_delay(RetryConfig(), 5) == 0.0


class TestRetryCall:
    """Test retry_call."""

    def test_success_first_try(self):
        """Test no retries when the operation succeeds."""
        operation = Mock(return_value="ok")
        sleep = Mock()

        assert retry_call(operation, RetryConfig(), lambda e: True, sleep=sleep) == "ok"
        operation.assert_called_once()
        sleep.assert_not_called()

    def test_retries_then_succeeds(self):
        """Test retryable failures are retried."""
        operation = Mock(side_effect=[ConnectionError("a"), ConnectionError("b"), "ok"])
        sleep = Mock()
        config = RetryConfig(initial_delay=1.0, jitter=False)

        with patch.dict("os.environ", {"SKIP_RETRY_DELAYS": ""}):
            result = retry_call(operation, config, lambda e: True, sleep=sleep)

        assert result == "ok"
        assert operation.call_count == 3
        assert [c.args[0] for c in sleep.call_args_list] == [2.0, 4.0]

    def test_permanent_error_not_retried(self):
        """Test non-retryable errors are raised immediately."""
        operation = Mock(side_effect=ValueError("bad"))

        with pytest.raises(ValueError):
            retry_call(operation, RetryConfig(), lambda e: False, sleep=Mock())

        operation.assert_called_once()

    def test_last_error_raised(self):
        """Test the last error is raised unchanged after max attempts."""
        errors = [ConnectionError(str(i)) for i in range(3)]
        operation = Mock(side_effect=errors)

        with pytest.raises(ConnectionError) as exc_info:
            retry_call(operation, RetryConfig(max_attempts=3), lambda e: True, sleep=Mock())

        assert exc_info.value is errors[2]
        assert operation.call_count == 3
