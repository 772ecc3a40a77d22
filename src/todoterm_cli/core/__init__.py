"""Core logic for todoterm.

- ``engine``: pure operations over a TodoList
- ``session``: the modal state machine behind the terminal UI
"""
