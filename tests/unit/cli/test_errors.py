from pathlib import Path

import pytest

from specman.cli._commands import ExitCode, exit_code_for_exception, parse_view
from specman.dependencies import DependencyView
from specman.exceptions import (
    ArtifactNotFoundError,
    CircularDependencyError,
    ConfigValidationError,
    DanglingDependencyError,
    PathEscapeError,
    SpecmanIOError,
    TemplateCacheError,
    TemplateError,
    TemplateFetchError,
    TemplateFetchRejectedError,
    TemplatePointerError,
    TemplatePointerNotFoundError,
    UsageError,
    WorkspaceNotFoundError,
)


class TestExitCodeForException:
    @pytest.mark.parametrize(
        ("exc", "expected"),
        [
            (UsageError("conflict"), ExitCode.USAGE_ERROR),
            (WorkspaceNotFoundError("none"), ExitCode.NOT_FOUND),
            (ArtifactNotFoundError("none", artifact="spec/a"), ExitCode.NOT_FOUND),
            (TemplatePointerNotFoundError("none", pointer="SPEC"), ExitCode.NOT_FOUND),
            (
                DanglingDependencyError("x", artifact="spec/a", reference="impl/b"),
                ExitCode.UNHEALTHY,
            ),
            (
                CircularDependencyError("x", artifact="spec/a", cycle=["spec/a"]),
                ExitCode.UNHEALTHY,
            ),
            (
                SpecmanIOError("x", path=Path("/a"), operation="read"),
                ExitCode.IO_ERROR,
            ),
            (TemplateFetchError("x", url="https://a.test"), ExitCode.IO_ERROR),
            (
                TemplateFetchRejectedError("x", url="https://a.test", status_code=404),
                ExitCode.IO_ERROR,
            ),
            (TemplateCacheError("x", path=Path("/a.json")), ExitCode.IO_ERROR),
            (
                ConfigValidationError("x", key="k", value=1, expected="int"),
                ExitCode.CONFIG_ERROR,
            ),
            (
                PathEscapeError("x", source="SPEC", path=Path("/etc"), root=Path("/ws")),
                ExitCode.CONFIG_ERROR,
            ),
            (TemplatePointerError("x", pointer="SPEC"), ExitCode.CONFIG_ERROR),
            (TemplateError("x"), ExitCode.CONFIG_ERROR),
            (RuntimeError("boom"), ExitCode.INTERNAL_ERROR),
        ],
    )
    def test_maps_exception(self, exc: Exception, expected: ExitCode) -> None:
        assert exit_code_for_exception(exc) is expected


class TestParseView:
    def test_defaults_to_downstream(self) -> None:
        assert (
            parse_view(downstream=False, upstream=False, all_=False)
            is DependencyView.DOWNSTREAM
        )

    @pytest.mark.parametrize(
        ("flags", "expected"),
        [
            ({"downstream": True}, DependencyView.DOWNSTREAM),
            ({"upstream": True}, DependencyView.UPSTREAM),
            ({"all_": True}, DependencyView.ALL),
        ],
    )
    def test_single_flag(self, flags: dict[str, bool], expected: DependencyView) -> None:
        options = {"downstream": False, "upstream": False, "all_": False} | flags

        assert parse_view(**options) is expected

    @pytest.mark.parametrize(
        "flags",
        [
            {"downstream": True, "upstream": True, "all_": False},
            {"downstream": False, "upstream": True, "all_": True},
            {"downstream": True, "upstream": True, "all_": True},
        ],
    )
    def test_conflicting_flags_raise(self, flags: dict[str, bool]) -> None:
        with pytest.raises(UsageError, match="use only one of"):
            _ = parse_view(**flags)
