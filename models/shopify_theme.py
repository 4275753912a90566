from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Theme(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    id: int
    name: str
    role: str


class Asset(BaseModel):
    # Keys are passed through untouched; the upload must target the same key.
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    key: str = Field(..., min_length=1)
    public_url: Optional[str] = None
    content_type: Optional[str] = None
    size: Optional[int] = None
    theme_id: Optional[int] = None

    @field_validator("public_url", mode="before")
    @classmethod
    def _empty_url_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def transferable(self) -> bool:
        return bool(self.public_url)


class ThemesResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    themes: list[Theme] = Field(default_factory=list)


class AssetsResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    assets: list[Asset] = Field(default_factory=list)
