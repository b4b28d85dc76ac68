"""feenctl — FEEN position notation codec and command-line tool."""

__version__ = "0.1.0"
