"""Link-preview metadata shapes for a game code."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class PreviewImage(BaseModel):
    url: str
    width: int
    height: int
    alt: str


class OpenGraph(BaseModel):
    title: str
    description: str
    images: list[PreviewImage] = Field(default_factory=list)


class TwitterCard(BaseModel):
    card: str = "summary_large_image"
    title: str
    description: str
    images: list[str] = Field(default_factory=list)


class GameMetadata(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str
    description: str
    open_graph: OpenGraph = Field(alias="openGraph")
    twitter: TwitterCard


__all__ = ["PreviewImage", "OpenGraph", "TwitterCard", "GameMetadata"]
