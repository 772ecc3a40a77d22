"""todoterm - a todo list for the command line and the terminal."""

__version__ = "0.1.0"
