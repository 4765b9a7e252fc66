from typing import Literal

from pydantic import BaseModel, Field, field_validator


class ProjectRules(BaseModel):
    slug: str
    rules_version: str

class ImageRules(BaseModel):
    default_width: int = Field(default=1600, gt=0)
    default_height: int = Field(default=900, gt=0)
    default_alt: str = "Article image"
    sizes: str = "(max-width: 1024px) 100vw, 896px"
    loading: Literal["lazy", "eager"] = "lazy"

class LinkRelRules(BaseModel):
    noopener: bool = True
    noreferrer: bool = True

class LinkRules(BaseModel):
    allowed_protocols: list[str] = ["http", "https", "mailto", "tel"]
    external_protocols: list[str] = ["http", "https"]
    rel: LinkRelRules = LinkRelRules()

    @field_validator("allowed_protocols", "external_protocols")
    @classmethod
    def strip_protocol_suffix(cls, value: list[str]) -> list[str]:
        # Accept both "https" and "https:"
        return [protocol.lower().rstrip(":") for protocol in value]

class VideoProviderRule(BaseModel):
    name: str
    hosts: list[str] = Field(min_length=1)
    id_source: Literal["query", "path"]
    query_param: str = "v"
    embed_template: str

    @field_validator("embed_template")
    @classmethod
    def require_id_placeholder(cls, value: str) -> str:
        if "{id}" not in value:
            raise ValueError("embed_template must contain an {id} placeholder")
        if not value.startswith("https://"):
            raise ValueError("embed_template must be an https URL")
        return value

class EmbedRules(BaseModel):
    default_title: str = "Embedded content"
    video_providers: list[VideoProviderRule] = []

class ReferenceRules(BaseModel):
    path_prefixes: dict[str, str] = {"article": "/articles"}

    @field_validator("path_prefixes")
    @classmethod
    def require_absolute_prefix(cls, value: dict[str, str]) -> dict[str, str]:
        for document_type, prefix in value.items():
            if not prefix.startswith("/"):
                raise ValueError(f"Path prefix for '{document_type}' must start with '/'")
        return value

class PortableTextRules(BaseModel):
    images: ImageRules = ImageRules()
    links: LinkRules = LinkRules()
    embeds: EmbedRules = EmbedRules()
    references: ReferenceRules = ReferenceRules()
    field_aliases: dict[str, list[str]] = {}

class Rules(BaseModel):
    project: ProjectRules
    portable_text: PortableTextRules = PortableTextRules()
