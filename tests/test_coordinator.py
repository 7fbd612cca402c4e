"""Tests for tier selection and fallback in SelectionCoordinator"""

import io
from contextlib import contextmanager, nullcontext
from unittest.mock import Mock

import pytest

from git_worktree_keeper.exceptions import (
    InputClosedError,
    NoWorktreesError,
    RawModeUnavailable,
    SelectionCancelled,
    TerminalUnavailableError,
)
from git_worktree_keeper.models import (
    ConfirmResult,
    InputField,
    InputResult,
    SelectionAction,
    SelectionResult,
    SelectorOptions,
)
from git_worktree_keeper.ui import Capability, SelectionCoordinator
from git_worktree_keeper.ui.selectors import SelectorStrategy
from git_worktree_keeper.ui.terminal import controlling_terminal


class FakeStrategy(SelectorStrategy):
    """Strategy returning canned results and recording what it was asked."""

    def __init__(self, selection=None, confirmation=None, answers=None, error=None):
        self.selection = selection
        self.confirmation = confirmation or ConfirmResult(confirmed=True)
        self.answers = answers or InputResult(values=["x"], submitted=True)
        self.error = error
        self.calls = []

    def _answer(self, name, value):
        self.calls.append(name)
        if self.error is not None:
            raise self.error
        return value

    def select(self, worktrees, options):
        return self._answer("select", self.selection or SelectionResult(SelectionAction.SELECT, worktrees[0]))

    def confirm(self, title, message):
        return self._answer("confirm", self.confirmation)

    def prompt(self, title, fields):
        return self._answer("prompt", self.answers)


def unavailable(tier_name):
    """Factory whose context manager cannot acquire its terminal."""
    @contextmanager
    def factory():
        raise TerminalUnavailableError(f"{tier_name} unavailable")
        yield  # pragma: no cover
    return factory


def coordinator_with(capability, **strategies):
    """Coordinator whose tiers are the given fake strategies."""
    factories = {Capability[name.upper()]: (lambda s=s: nullcontext(s)) for name, s in strategies.items()}
    return SelectionCoordinator(capability=capability, factories=factories)


class TestSelect:
    """Test worktree selection through the coordinator."""

    def test_empty_list_runs_no_selector(self):
        """Test an empty inventory fails without any interaction."""
        full = FakeStrategy()
        coordinator = coordinator_with(Capability.FULL, full=full)

        with pytest.raises(NoWorktreesError):
            coordinator.select([])
        assert full.calls == []

    def test_uses_detected_tier(self, sample_worktrees):
        """Test the strategy for the detected tier runs."""
        full, basic, none = FakeStrategy(), FakeStrategy(), FakeStrategy()
        coordinator = coordinator_with(Capability.BASIC, full=full, basic=basic, none=none)

        result = coordinator.select(sample_worktrees)

        assert result.worktree == sample_worktrees[0]
        assert (full.calls, basic.calls, none.calls) == ([], ["select"], [])

    def test_override_forces_numbered_tier(self, sample_worktrees):
        """Test override skips every richer tier."""
        full, none = FakeStrategy(), FakeStrategy()
        coordinator = coordinator_with(Capability.FULL, full=full, none=none)

        coordinator.select(sample_worktrees, override=True)

        assert full.calls == []
        assert none.calls == ["select"]

    def test_quit_raises_cancelled(self, sample_worktrees):
        """Test a QUIT result surfaces as SelectionCancelled."""
        full = FakeStrategy(selection=SelectionResult.quit())
        coordinator = coordinator_with(Capability.FULL, full=full)

        with pytest.raises(SelectionCancelled):
            coordinator.select(sample_worktrees)

    def test_other_actions_returned(self, sample_worktrees):
        """Test delete and create results are passed back to the caller."""
        deletion = SelectionResult(SelectionAction.DELETE, sample_worktrees[1])
        coordinator = coordinator_with(Capability.FULL, full=FakeStrategy(selection=deletion))
        assert coordinator.select(sample_worktrees, SelectorOptions(allow_delete=True)) == deletion

    def test_falls_back_one_tier(self, sample_worktrees):
        """Test an unavailable full-screen tier falls back to the raw tier."""
        basic, none = FakeStrategy(), FakeStrategy()
        coordinator = coordinator_with(Capability.FULL, basic=basic, none=none)
        coordinator.factories[Capability.FULL] = unavailable("full")

        coordinator.select(sample_worktrees)

        assert basic.calls == ["select"]
        assert none.calls == []

    def test_falls_back_to_numbered(self, sample_worktrees):
        """Test a raw tier that cannot enter raw mode falls back to the numbered tier."""
        none = FakeStrategy()
        coordinator = coordinator_with(
            Capability.FULL,
            basic=FakeStrategy(error=RawModeUnavailable("not a terminal")),
            none=none,
        )
        coordinator.factories[Capability.FULL] = unavailable("full")

        coordinator.select(sample_worktrees)
        assert none.calls == ["select"]

    def test_numbered_failure_is_raised(self, sample_worktrees):
        """Test there is nothing below the numbered tier."""
        coordinator = coordinator_with(Capability.NONE)
        coordinator.factories[Capability.NONE] = unavailable("none")

        with pytest.raises(TerminalUnavailableError):
            coordinator.select(sample_worktrees)

    def test_no_fallback_on_closed_input(self, sample_worktrees):
        """Test end of input is reported rather than retried on another tier."""
        none = FakeStrategy()
        coordinator = coordinator_with(
            Capability.BASIC, basic=FakeStrategy(error=InputClosedError()), none=none
        )

        with pytest.raises(InputClosedError):
            coordinator.select(sample_worktrees)
        assert none.calls == []

    def test_no_fallback_on_quit(self, sample_worktrees):
        """Test quitting is final."""
        none = FakeStrategy()
        coordinator = coordinator_with(
            Capability.FULL, full=FakeStrategy(selection=SelectionResult.quit()), none=none
        )
        with pytest.raises(SelectionCancelled):
            coordinator.select(sample_worktrees)
        assert none.calls == []


class TestConfirmAndPrompt:
    """Test dialogs go through the same tier logic."""

    def test_confirm_falls_back(self):
        """Test confirm walks down the tiers like select."""
        basic = FakeStrategy(confirmation=ConfirmResult(confirmed=False, cancelled=True))
        coordinator = coordinator_with(Capability.FULL, basic=basic)
        coordinator.factories[Capability.FULL] = unavailable("full")

        assert coordinator.confirm("Remove", "Remove it?").cancelled
        assert basic.calls == ["confirm"]

    def test_prompt_override(self):
        """Test prompt honours override."""
        full, none = FakeStrategy(), FakeStrategy()
        coordinator = coordinator_with(Capability.FULL, full=full, none=none)

        result = coordinator.prompt("New", [InputField("Branch")], override=True)

        assert result.values == ["x"]
        assert full.calls == []
        assert none.calls == ["prompt"]


class TestDetection:
    """Test capability detection is lazy and happens once."""

    def test_detector_called_once_lazily(self, sample_worktrees):
        detector = Mock(return_value=Capability.NONE)
        none = FakeStrategy()
        coordinator = SelectionCoordinator(detector=detector, factories={Capability.NONE: lambda: nullcontext(none)})

        detector.assert_not_called()
        coordinator.select(sample_worktrees)
        coordinator.confirm("t", "m")

        detector.assert_called_once_with()
        assert none.calls == ["select", "confirm"]

    def test_explicit_capability_skips_detection(self):
        detector = Mock()
        coordinator = SelectionCoordinator(capability=Capability.BASIC, detector=detector)
        assert coordinator.capability is Capability.BASIC
        detector.assert_not_called()

    def test_override_does_not_detect(self, sample_worktrees):
        """Test forcing the numbered tier never inspects the terminal."""
        detector = Mock()
        none = FakeStrategy()
        coordinator = SelectionCoordinator(detector=detector, factories={Capability.NONE: lambda: nullcontext(none)})

        coordinator.select(sample_worktrees, override=True)
        detector.assert_not_called()


class TestDefaultNumberedTier:
    """Test the built-in numbered tier against text streams."""

    def test_select_through_streams(self, sample_worktrees):
        """Test the default numbered factory reads stdin and writes stderr."""
        stdin, stderr = io.StringIO("2\n"), io.StringIO()
        coordinator = SelectionCoordinator(capability=Capability.NONE, stdin=stdin, stderr=stderr)

        result = coordinator.select(sample_worktrees, SelectorOptions(title="Switch Worktree"))

        assert result.worktree == sample_worktrees[1]
        assert "Switch Worktree" in stderr.getvalue()

    def test_quit_through_streams(self, sample_worktrees):
        coordinator = SelectionCoordinator(capability=Capability.NONE, stdin=io.StringIO("q\n"), stderr=io.StringIO())
        with pytest.raises(SelectionCancelled):
            coordinator.select(sample_worktrees)

    def test_raw_tier_without_terminal_falls_back(self, sample_worktrees, monkeypatch):
        """Test the default raw tier degrades when the controlling terminal cannot be opened."""
        monkeypatch.setattr(
            "git_worktree_keeper.ui.coordinator.controlling_terminal",
            lambda: controlling_terminal("/nonexistent/tty"),
        )
        stdin, stderr = io.StringIO("1\n"), io.StringIO()
        coordinator = SelectionCoordinator(capability=Capability.BASIC, stdin=stdin, stderr=stderr)

        result = coordinator.select(sample_worktrees)
        assert result.worktree == sample_worktrees[0]
        assert "Select worktree (1-2)" in stderr.getvalue()
