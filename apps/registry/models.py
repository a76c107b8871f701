from __future__ import annotations

from pydantic import BaseModel, Field

DEFAULT_ASSET_STATUS = "good"


class Asset(BaseModel):
    name: str
    serial: str
    company: str  # owning company's name when created or last edited
    status: str = DEFAULT_ASSET_STATUS


class Inventory(BaseModel):
    date_taken: str
    serial: str
    status: str


class Company(BaseModel):
    id: int = Field(ge=0)
    owner: str
    name: str
    location: str
    assets: list[Asset] = Field(default_factory=list)
    inventories: list[Inventory] = Field(default_factory=list)


class RegistryState(BaseModel):
    """Everything the host persists between invocations."""

    companies: list[Company] = Field(default_factory=list)
