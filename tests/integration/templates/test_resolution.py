"""End-to-end template resolution through pointers and the cache."""

import httpx
import pytest

from specman.templates import (
    PointerStore,
    TemplateCatalog,
    TemplateKind,
    TemplateScenario,
    TemplateTier,
    url_cache_key,
)
from specman.workspace import WorkspacePaths

URL = "https://example.test/spec.md"


class SwitchableTransport(httpx.BaseTransport):
    """Serves a template until taken offline."""

    def __init__(self, body: str) -> None:
        self.body = body
        self.online = True
        self.requests = 0

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        self.requests += 1
        if not self.online:
            msg = "network unreachable"
            raise httpx.ConnectError(msg, request=request)
        return httpx.Response(
            200,
            text=self.body,
            headers={"Last-Modified": "Fri, 02 Oct 2026 08:00:00 GMT"},
        )


@pytest.fixture
def transport() -> SwitchableTransport:
    return SwitchableTransport("# Remote spec {{ name }}\n")


def test_file_pointer_set_then_resolved(workspace: WorkspacePaths) -> None:
    template = workspace.root / "templates" / "custom-spec.md"
    template.parent.mkdir(parents=True)
    _ = template.write_text("# {{ title }}\n")
    catalog = TemplateCatalog(workspace)

    _ = PointerStore(catalog).set(TemplateKind.SPECIFICATION, "templates/custom-spec.md")
    resolved = catalog.resolve(TemplateScenario.specification())

    assert resolved.tier is TemplateTier.POINTER_FILE
    assert resolved.provenance.locator == "templates/custom-spec.md"


def test_remote_pointer_survives_network_loss(
    workspace: WorkspacePaths, transport: SwitchableTransport
) -> None:
    workspace.templates_dir.mkdir(parents=True)
    _ = (workspace.templates_dir / "SPEC").write_text(f"{URL}\n")
    catalog = TemplateCatalog(workspace, client=httpx.Client(transport=transport))

    online = catalog.resolve(TemplateScenario.specification())

    cache_file = workspace.template_cache_dir / f"url-{url_cache_key(URL)}.md"
    assert online.tier is TemplateTier.POINTER_URL
    assert cache_file.read_text() == "# Remote spec {{ name }}\n"

    transport.online = False
    offline = catalog.resolve(TemplateScenario.specification())

    assert offline.tier is TemplateTier.POINTER_URL
    assert offline.descriptor.read_text() == "# Remote spec {{ name }}\n"
    assert offline.provenance.last_modified == "Fri, 02 Oct 2026 08:00:00 GMT"
    assert offline == online
    assert transport.requests == 2


def test_remote_pointer_refetches_on_every_resolution(
    workspace: WorkspacePaths, transport: SwitchableTransport
) -> None:
    workspace.templates_dir.mkdir(parents=True)
    _ = (workspace.templates_dir / "SPEC").write_text(URL)
    catalog = TemplateCatalog(workspace, client=httpx.Client(transport=transport))
    _ = catalog.resolve(TemplateScenario.specification())

    transport.body = "# Updated {{ title }}\n"
    resolved = catalog.resolve(TemplateScenario.specification())

    assert resolved.descriptor.read_text() == "# Updated {{ title }}\n"
    assert resolved.descriptor.required_tokens == ("title",)
