"""Template fetching configuration model."""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field


class TemplatesConfig(BaseModel):
    """Settings for remote template pointers.

    Attributes:
        fetch_timeout: Seconds before a remote template request times out.
        fetch_attempts: Total attempts on transport failure before falling back.
        follow_redirects: Whether HTTP redirects are followed.
        user_agent: User-Agent header sent with template requests.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    fetch_timeout: float = Field(
        default=10.0, gt=0, description="Request timeout in seconds."
    )
    fetch_attempts: int = Field(
        default=1, ge=1, le=10, description="Attempts on transport failure."
    )
    follow_redirects: bool = Field(
        default=True, description="Follow HTTP redirects when fetching."
    )
    user_agent: str = Field(
        default="specman", description="User-Agent header for template requests."
    )
