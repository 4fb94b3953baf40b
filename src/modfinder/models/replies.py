from __future__ import annotations

from typing import NamedTuple

from pydantic import BaseModel, ConfigDict

from modfinder.models.package import PackageRecord

DEFAULT_COLOR = 0x7E0923


class ClosestPackage(NamedTuple):
    distance: int
    record: PackageRecord


class ClosestTitle(NamedTuple):
    distance: int
    title: str


class EmbedField(NamedTuple):
    name: str
    value: str
    inline: bool = False


class Summary(BaseModel):
    """Rich reply describing a single package."""

    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    version: str
    deprecated: bool = False
    page_url: str = ""
    download_url: str = ""
    website_url: str | None = None
    website_label: str | None = None  # "Github" | "Website"
    dependencies: tuple[str, ...] = ()  # already rendered as "Owner - Mod"
    more_dependencies: bool = False
    author: str = "Unknown"
    icon_url: str = ""
    color: int = DEFAULT_COLOR

    def links_text(self) -> str:
        links = [f"[Page]({self.page_url})", f"[Download]({self.download_url})"]
        if self.website_url:
            links.append(f"[{self.website_label or 'Website'}]({self.website_url})")
        return " | ".join(links)

    def dependencies_text(self) -> str:
        lines = [f"• {dep}" for dep in self.dependencies]
        if self.more_dependencies:
            lines.append("...")
        return "\n".join(lines)

    def fields(self) -> list[EmbedField]:
        """Labeled fields in display order. Dependencies only when there are any."""
        fields = [
            EmbedField("Version", self.version),
            EmbedField("Links", self.links_text()),
        ]
        if self.dependencies:
            fields.append(EmbedField("Dependencies", self.dependencies_text(), inline=True))
        fields.append(EmbedField("Author", self.author))
        return fields


class NotFoundSummary(BaseModel):
    """Reply for a query that matched nothing closely enough."""

    model_config = ConfigDict(frozen=True)

    query: str
    suggestion: str | None = None
    title: str = "Mod Not Found"
    color: int = DEFAULT_COLOR

    @property
    def description(self) -> str:
        text = f"Could not find a mod named {self.query}."
        if self.suggestion:
            text += f" Did you mean {self.suggestion}?"
        return text


class TextReply(BaseModel):
    """Plain text reply, sent without mentioning the original author."""

    model_config = ConfigDict(frozen=True)

    content: str


Reply = Summary | NotFoundSummary | TextReply
