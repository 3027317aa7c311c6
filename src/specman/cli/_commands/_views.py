"""Dependency view selection shared by `status` and `deps`."""

from typing import Annotated

from cyclopts import Parameter

from specman.dependencies import DependencyView
from specman.exceptions import UsageError

DownstreamFlag = Annotated[
    bool,
    Parameter(
        name="--downstream",
        negative=(),
        help="Show artifacts that depend on each artifact (default)",
    ),
]
UpstreamFlag = Annotated[
    bool,
    Parameter(
        name="--upstream", negative=(), help="Show artifacts each artifact depends on"
    ),
]
AllFlag = Annotated[
    bool,
    Parameter(name="--all", negative=(), help="Show both directions"),
]


def parse_view(*, downstream: bool, upstream: bool, all_: bool) -> DependencyView:
    """Select the dependency view from mutually exclusive flags.

    Runs before any workspace access, so a conflict is reported without
    touching the file system.

    Raises:
        UsageError: If more than one flag is set.
    """
    selected = [
        view
        for view, flag in (
            (DependencyView.DOWNSTREAM, downstream),
            (DependencyView.UPSTREAM, upstream),
            (DependencyView.ALL, all_),
        )
        if flag
    ]
    if len(selected) > 1:
        msg = "use only one of --downstream, --upstream, or --all"
        raise UsageError(msg)
    return selected[0] if selected else DependencyView.DOWNSTREAM
