"""Command-line states and the context that holds the current one."""

from __future__ import annotations

import argparse
import sys
from abc import ABC, abstractmethod
from typing import Optional, TextIO

HELP_TEXT = (
    "Commands:\n"
    "[help] - prints the list of commands\n"
    "[exit] - closes the application\n"
    "[sign_up] - registers a new account\n"
    "[start_session] - starts a new session on this device\n"
)


class State(ABC):
    """A screen of the command-line interface."""

    @abstractmethod
    def help(self) -> None:
        """Print the commands available in this state."""

    @abstractmethod
    def exit(self) -> None:
        """Leave the application."""


class WelcomePageState(State):
    """The first screen shown to a user."""

    def __init__(self, out: Optional[TextIO] = None) -> None:
        self.out = out

    def help(self) -> None:
        stream = self.out if self.out is not None else sys.stdout
        stream.write(HELP_TEXT + "\n")
        stream.flush()

    def exit(self) -> None:
        raise SystemExit(0)


class StateContext:
    """Holds the active state; starts on the welcome page."""

    def __init__(self, state: Optional[State] = None) -> None:
        self.state: State = state if state is not None else WelcomePageState()

    def transition(self, new_state: State) -> None:
        self.state = new_state


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="chatcore")
    parser.parse_args(argv)
    StateContext()
    return 0