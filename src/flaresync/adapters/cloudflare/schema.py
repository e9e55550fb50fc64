"""Pydantic models describing the Cloudflare IP ranges payload."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CloudflareBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ResponseMessage(CloudflareBaseModel):
    code: int | None = None
    message: str = ""


class IpRangesResult(CloudflareBaseModel):
    ipv4_cidrs: list[str] = Field(default_factory=list)
    ipv6_cidrs: list[str] = Field(default_factory=list)
    etag: str = ""


class IpRangesResponse(CloudflareBaseModel):
    result: IpRangesResult | None = None
    success: bool
    errors: list[ResponseMessage] = Field(default_factory=list)
    messages: list[ResponseMessage] = Field(default_factory=list)
