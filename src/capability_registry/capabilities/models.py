from pydantic import BaseModel, ConfigDict, Field


class CapabilityDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    default_identifier: str = ""
    singleton: bool = True


class ImplementationDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    identifier: str = ""
    order: int = 0
    categories: frozenset[str] = Field(default_factory=frozenset)


class ImplementationInfo(BaseModel):
    identifier: str
    qualified_name: str
    order: int | None = None
    categories: list[str] = Field(default_factory=list)
