from typing import Optional

from pydantic import BaseModel, Field


class MetadataBase(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    url: str


class MetadataRead(MetadataBase):
    favicons: list[str] = Field(default_factory=list)
    preview_images: list[str] = Field(default_factory=list)


class SingleMetadataRead(MetadataBase):
    favicon: Optional[str] = None
    preview_image: Optional[str] = None
