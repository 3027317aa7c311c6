import re

from hypothesis import given, strategies as st

from specman.templates import TemplateScenario, sanitize_key

SAFE_KEY = re.compile(r"[a-z0-9_-]*")


@given(raw=st.text())
def test_sanitized_key_only_has_safe_characters(raw: str) -> None:
    assert SAFE_KEY.fullmatch(sanitize_key(raw))


@given(raw=st.text())
def test_sanitize_is_idempotent(raw: str) -> None:
    once = sanitize_key(raw)
    assert sanitize_key(once) == once


@given(raw=st.from_regex(r"[a-z0-9_-]+", fullmatch=True))
def test_safe_keys_are_unchanged(raw: str) -> None:
    assert sanitize_key(raw) == raw


@given(slug=st.text())
def test_work_type_overrides_stay_in_templates_dir(slug: str) -> None:
    names = TemplateScenario.work_type(slug).override_names()

    assert names[-1] == "scratch.md"
    for name in names:
        assert ".." not in name.split("/")
        assert not name.startswith("/")
