"""Deps command app definition."""

from cyclopts import App

app = App(
    name="deps",
    help="Show the dependency tree of one artifact",
    help_on_error=True,
)
