"""Unit tests for cli.output module."""

from unittest.mock import patch

import pytest

from guidesync.cli.output import OutputHandler


class TestOutputHandlerInit:
    """Test cases for OutputHandler initialization."""

    def test_init_default_verbosity_and_color(self):
        """Initialize with default verbosity (0) and color enabled."""
        handler = OutputHandler()

        assert handler.verbosity == 0
        assert handler.console.no_color is False

    def test_init_no_color_true(self):
        """Initialize with no_color=True disables colors."""
        handler = OutputHandler(no_color=True)

        assert handler.console.no_color is True

    def test_console_writes_to_stderr(self):
        """Status output never mixes with converted content on stdout."""
        handler = OutputHandler()

        assert handler.console.stderr is True


class TestOutputHandlerMessages:
    """Test cases for verbosity filtering of messages."""

    @pytest.mark.parametrize("verbosity", [0, 1, 2])
    def test_error_always_printed(self, verbosity):
        """Errors are shown at every verbosity."""
        handler = OutputHandler(verbosity=verbosity)
        with patch.object(handler.console, "print") as mock_print:
            handler.error("Failed")

        mock_print.assert_called_once()
        assert "Failed" in mock_print.call_args[0][0]

    @pytest.mark.parametrize("method", ["success", "info"])
    def test_quiet_at_verbosity_0(self, method):
        """Success and info messages are suppressed by default."""
        handler = OutputHandler(verbosity=0)
        with patch.object(handler.console, "print") as mock_print:
            getattr(handler, method)("message")

        mock_print.assert_not_called()

    @pytest.mark.parametrize("method", ["success", "info"])
    def test_shown_at_verbosity_1(self, method):
        """Success and info messages appear with -v 1."""
        handler = OutputHandler(verbosity=1)
        with patch.object(handler.console, "print") as mock_print:
            getattr(handler, method)("message")

        mock_print.assert_called_once()

    def test_debug_requires_verbosity_2(self):
        """Debug messages appear only at the highest verbosity."""
        quiet = OutputHandler(verbosity=1)
        loud = OutputHandler(verbosity=2)

        with patch.object(quiet.console, "print") as quiet_print:
            quiet.debug("details")
        with patch.object(loud.console, "print") as loud_print:
            loud.debug("details")

        quiet_print.assert_not_called()
        loud_print.assert_called_once()
