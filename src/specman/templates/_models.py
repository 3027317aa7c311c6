"""Data models for template resolution.

This module defines the scenarios a template can be resolved for, the locators
and tiers that describe where a resolved body lives and how it was found, and
the descriptor/provenance pair returned by the catalog. All models are frozen
dataclasses with slots.
"""

import re
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Any, Self

from specman.exceptions import TemplateError
from specman.utils import read_text

# Characters kept by sanitize_key (after lowercasing)
_KEY_DISALLOWED = re.compile(r"[^a-z0-9_-]")


# =============================================================================
# Enums
# =============================================================================


class TemplateKind(StrEnum):
    """Artifact kinds that own a template pointer file."""

    SPECIFICATION = "spec"
    IMPLEMENTATION = "impl"
    SCRATCH = "scratch"

    @property
    def pointer_name(self) -> str:
        """Return the pointer file name (SPEC, IMPL or SCRATCH)."""
        return self.value.upper()


class TemplateTier(StrEnum):
    """Cascade step that produced a resolved template.

    Members are declared in decreasing precedence.
    """

    WORKSPACE_OVERRIDE = "workspace_override"
    POINTER_FILE = "pointer_file"
    POINTER_URL = "pointer_url"
    EMBEDDED_DEFAULT = "embedded_default"

    @property
    def precedence(self) -> int:
        """Return the tier rank, 0 being the highest precedence."""
        return list(TemplateTier).index(self)


class ScratchPadWorkType(StrEnum):
    """Scratch pad sub-profiles, each resolvable to its own template."""

    REF = "ref"
    FEAT = "feat"
    FIX = "fix"
    REVISION = "revision"
    REFACTOR = "refactor"


def sanitize_key(raw: str) -> str:
    """Reduce a work type slug to lowercase `[a-z0-9_-]` characters.

    Examples:
        >>> sanitize_key("Feat/../X")
        'featx'
    """
    return _KEY_DISALLOWED.sub("", raw.lower())


# =============================================================================
# Scenarios and Locators
# =============================================================================


@dataclass(frozen=True, slots=True)
class TemplateScenario:
    """The artifact-creation scenario a template is resolved for.

    Use the factory classmethods rather than the constructor.

    Attributes:
        kind: Template kind owning the pointer file and embedded default.
        slug: Work type slug for scratch pad sub-profiles, None otherwise.
    """

    kind: TemplateKind
    slug: str | None = None

    @classmethod
    def specification(cls) -> Self:
        return cls(TemplateKind.SPECIFICATION)

    @classmethod
    def implementation(cls) -> Self:
        return cls(TemplateKind.IMPLEMENTATION)

    @classmethod
    def scratch_pad(cls) -> Self:
        return cls(TemplateKind.SCRATCH)

    @classmethod
    def work_type(cls, slug: str) -> Self:
        """Create a scratch pad work type scenario (e.g. `feat`, `fix`)."""
        return cls(TemplateKind.SCRATCH, slug=slug)

    @classmethod
    def for_kind(cls, kind: TemplateKind) -> Self:
        return cls(kind)

    @property
    def pointer_name(self) -> str:
        """Return the pointer file consulted for this scenario.

        Scratch pads and every work type share the SCRATCH pointer.
        """
        return self.kind.pointer_name

    @property
    def embedded_key(self) -> str:
        """Return the key of the built-in body (`spec`, `impl` or `scratch`)."""
        return self.kind.value

    def override_names(self) -> tuple[str, ...]:
        """Return override candidates relative to `.specman/templates/`, in order."""
        if self.slug is None:
            return (f"{self.kind.value}.md",)

        key = sanitize_key(self.slug)
        if not key:
            return ("scratch.md",)
        return (f"scratch/{key}.md", f"scratch-{key}.md", "scratch.md")

    def __str__(self) -> str:
        if self.slug is None:
            return self.kind.value
        return f"{self.kind.value}:{self.slug}"


@dataclass(frozen=True, slots=True)
class FileLocator:
    """Template body stored in a local file."""

    path: Path

    def __str__(self) -> str:
        return str(self.path)


@dataclass(frozen=True, slots=True)
class UrlLocator:
    """Template body served from an HTTP(S) URL."""

    url: str

    def __str__(self) -> str:
        return self.url


type TemplateLocator = FileLocator | UrlLocator


# =============================================================================
# Resolution Results
# =============================================================================


@dataclass(frozen=True, slots=True)
class TemplateDescriptor:
    """How to load a resolved template.

    Attributes:
        locator: Where the body physically lives after resolution.
        scenario: The scenario the template was resolved for.
        required_tokens: Placeholder names a renderer must substitute.
    """

    locator: TemplateLocator
    scenario: TemplateScenario
    required_tokens: tuple[str, ...] = ()

    def read_text(self) -> str:
        """Read the template body.

        Raises:
            TemplateError: If the locator is not a local file.
            SpecmanIOError: If the file cannot be read.
        """
        if not isinstance(self.locator, FileLocator):
            msg = f"Template body for {self.scenario} is not materialized locally"
            raise TemplateError(msg)
        return read_text(self.locator.path)


@dataclass(frozen=True, slots=True)
class TemplateProvenance:
    """Where a resolved template came from, for auditing.

    Attributes:
        tier: Cascade step that produced the template.
        locator: Workspace-relative path when possible, else the literal
            path, URL or `embedded://<key>`.
        pointer: Pointer file name, only for pointer tiers.
        cache_path: Workspace-relative cache file, only for cache-backed tiers.
        last_modified: Last-Modified marker captured for remote bodies.
    """

    tier: TemplateTier
    locator: str
    pointer: str | None = None
    cache_path: str | None = None
    last_modified: str | None = None


@dataclass(frozen=True, slots=True)
class ResolvedTemplate:
    """A descriptor together with its provenance."""

    descriptor: TemplateDescriptor
    provenance: TemplateProvenance

    @property
    def tier(self) -> TemplateTier:
        return self.provenance.tier

    def to_dict(self) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
        """Return a JSON-serializable representation for reports."""
        return {
            "scenario": str(self.descriptor.scenario),
            "tier": self.provenance.tier.value,
            "locator": self.provenance.locator,
            "path": str(self.descriptor.locator),
            "pointer": self.provenance.pointer,
            "cache_path": self.provenance.cache_path,
            "last_modified": self.provenance.last_modified,
            "required_tokens": list(self.descriptor.required_tokens),
        }


@dataclass(frozen=True, slots=True)
class ScratchPadProfile:
    """Template resolution for one scratch pad work type.

    Attributes:
        work_type: The work type the profile describes.
        template: Descriptor of the resolved template.
        provenance: Provenance of the resolved template.
        configuration: Free-form profile settings, empty by default.
    """

    work_type: ScratchPadWorkType
    template: TemplateDescriptor
    provenance: TemplateProvenance
    configuration: dict[str, str] = field(default_factory=dict)
