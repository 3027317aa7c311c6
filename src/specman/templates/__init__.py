"""Template resolution for specman artifacts.

Templates resolve through a cascade of workspace overrides, pointer files and
embedded defaults. Remote pointer bodies are cached under
`.specman/cache/templates/`.

Example:
    >>> from specman.templates import TemplateCatalog, TemplateScenario
    >>> catalog = TemplateCatalog(workspace)
    >>> resolved = catalog.resolve(TemplateScenario.specification())
    >>> resolved.provenance.tier
    <TemplateTier.EMBEDDED_DEFAULT: 'embedded_default'>
"""

from ._cache import CacheHit, CacheMetadata, TemplateCache, url_cache_key
from ._catalog import TemplateCatalog, is_url_pointer, parse_pointer_url
from ._embedded import EMBEDDED_KEYS, embedded_body
from ._models import (
    FileLocator,
    ResolvedTemplate,
    ScratchPadProfile,
    ScratchPadWorkType,
    TemplateDescriptor,
    TemplateKind,
    TemplateLocator,
    TemplateProvenance,
    TemplateScenario,
    TemplateTier,
    UrlLocator,
    sanitize_key,
)
from ._pointers import PointerStore
from ._tokens import create_token_environment, extract_required_tokens

__all__ = [
    "EMBEDDED_KEYS",
    "CacheHit",
    "CacheMetadata",
    "FileLocator",
    "PointerStore",
    "ResolvedTemplate",
    "ScratchPadProfile",
    "ScratchPadWorkType",
    "TemplateCache",
    "TemplateCatalog",
    "TemplateDescriptor",
    "TemplateKind",
    "TemplateLocator",
    "TemplateProvenance",
    "TemplateScenario",
    "TemplateTier",
    "UrlLocator",
    "create_token_environment",
    "embedded_body",
    "extract_required_tokens",
    "is_url_pointer",
    "parse_pointer_url",
    "sanitize_key",
    "url_cache_key",
]
