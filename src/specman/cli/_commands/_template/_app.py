"""Template command app definition."""

from cyclopts import App

app = App(
    name="template",
    help="Manage template pointers for spec, impl and scratch artifacts",
    help_on_error=True,
)
