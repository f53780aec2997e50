"""Pydantic models describing the HackerOne hacker API payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class HackerOneBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class PageLinks(HackerOneBaseModel):
    self_: str | None = Field(default=None, alias="self")
    next: str | None = None


class ProgramAttributes(HackerOneBaseModel):
    handle: str
    name: str = ""
    state: str | None = None
    submission_state: str | None = None
    offers_bounties: bool = False


class ProgramPayload(HackerOneBaseModel):
    id: int | str | None = None
    type: str = "program"
    attributes: ProgramAttributes

    @property
    def handle(self) -> str:
        return self.attributes.handle


class ProgramsPage(HackerOneBaseModel):
    data: list[ProgramPayload] = Field(default_factory=list["ProgramPayload"])
    links: PageLinks = Field(default_factory=PageLinks)


class StructuredScopeAttributes(HackerOneBaseModel):
    asset_identifier: str
    asset_type: str = "OTHER"
    eligible_for_bounty: bool | None = None
    eligible_for_submission: bool = True
    instruction: str | None = None
    max_severity: str | None = None


class StructuredScopePayload(HackerOneBaseModel):
    id: int | str | None = None
    type: str = "structured-scope"
    attributes: StructuredScopeAttributes


class StructuredScopesPage(HackerOneBaseModel):
    data: list[StructuredScopePayload] = Field(default_factory=list["StructuredScopePayload"])
    links: PageLinks = Field(default_factory=PageLinks)


class ErrorPayload(HackerOneBaseModel):
    status: int | str | None = None
    title: str | None = None
    detail: str | None = None


class ErrorResponse(HackerOneBaseModel):
    errors: list[ErrorPayload]
