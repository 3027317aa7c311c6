"""Status command app definition."""

from cyclopts import App

app = App(
    name="status",
    help="Check the dependency graph of every specification and implementation",
    help_on_error=True,
)
