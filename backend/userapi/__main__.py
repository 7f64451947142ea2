"""Module entry point - `python -m userapi` serves the app on HOST:PORT."""

from userapi.main import run

run()
