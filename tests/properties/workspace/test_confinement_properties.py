from pathlib import Path

import pytest
from hypothesis import given, strategies as st

from specman.exceptions import PathEscapeError
from specman.workspace import resolve_within_workspace

segments = st.lists(st.sampled_from(["..", ".", "a", "b", "templates"]), min_size=1, max_size=8)


@pytest.fixture(scope="module")
def root(tmp_path_factory: pytest.TempPathFactory) -> Path:
    return tmp_path_factory.mktemp("workspace").resolve()


@given(parts=segments)
def test_result_is_inside_root_or_rejected(root: Path, parts: list[str]) -> None:
    try:
        resolved = resolve_within_workspace("/".join(parts), root, source="SPEC")
    except PathEscapeError as e:
        assert not e.path.is_relative_to(root)
    else:
        assert resolved.is_relative_to(root)


@given(parts=st.lists(st.sampled_from(["a", "b", "templates", "."]), min_size=1, max_size=8))
def test_paths_without_parent_segments_are_accepted(root: Path, parts: list[str]) -> None:
    resolved = resolve_within_workspace("/".join(parts), root, source="SPEC")

    assert resolved.is_relative_to(root)


@given(depth=st.integers(min_value=1, max_value=5))
def test_leading_parent_segments_escape(root: Path, depth: int) -> None:
    with pytest.raises(PathEscapeError):
        _ = resolve_within_workspace("../" * depth + "outside.md", root, source="SPEC")
