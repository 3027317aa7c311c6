"""Placeholder discovery for template bodies.

Templates use Jinja2 placeholder syntax (`{{ spec_name }}`). Bodies are parsed
to list the variables a renderer must supply; they are never rendered here. A
body that does not parse is still a usable template, it just lists no tokens.
"""

from dataclasses import dataclass

from jinja2 import Environment, TemplateSyntaxError, meta
from structlog.typing import FilteringBoundLogger

from specman.utils import create_null_logger


@dataclass(slots=True, frozen=True)
class TokenEnvironmentConfig:
    """Parser settings for template bodies.

    Attributes:
        trim_blocks: Remove first newline after a block tag.
        lstrip_blocks: Strip leading whitespace before block tags.
        keep_trailing_newline: Preserve trailing newline in templates.
    """

    trim_blocks: bool = False
    lstrip_blocks: bool = False
    keep_trailing_newline: bool = True


def create_token_environment(config: TokenEnvironmentConfig | None = None) -> Environment:
    """Create a loader-less Jinja2 Environment used only for parsing."""
    if config is None:
        config = TokenEnvironmentConfig()

    # Markdown bodies, never HTML
    return Environment(
        autoescape=False,  # noqa: S701
        trim_blocks=config.trim_blocks,
        lstrip_blocks=config.lstrip_blocks,
        keep_trailing_newline=config.keep_trailing_newline,
    )


def extract_required_tokens(
    body: str,
    *,
    source: str,
    env: Environment | None = None,
    logger: FilteringBoundLogger | None = None,
) -> tuple[str, ...]:
    """Return the sorted, unique placeholder names a body references.

    Args:
        body: The template body.
        source: Human-readable origin of the body, used in log events.
        env: Parser environment. A default one is created if None.
        logger: Logger told about bodies that are not valid placeholder syntax.

    Returns:
        Variable names that are referenced but not defined by the template,
        or an empty tuple if the body cannot be parsed.
    """
    environment = env or create_token_environment()
    try:
        ast = environment.parse(body)
    except TemplateSyntaxError as e:
        (logger or create_null_logger()).warning(
            "template_tokens_unparsable",
            source=source,
            line=e.lineno,
            error=e.message,
        )
        return ()
    return tuple(sorted(meta.find_undeclared_variables(ast)))
