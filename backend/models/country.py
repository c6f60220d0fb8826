from pydantic import BaseModel, ConfigDict, field_validator


class CountryInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    currency: str
    iso2: str | None = None
    local_name: str | None = None
    aliases: tuple[str, ...] = ()

    @field_validator("currency")
    @classmethod
    def upper_currency(cls, v: str) -> str:
        return v.strip().upper()

    @field_validator("iso2")
    @classmethod
    def upper_iso2(cls, v: str | None) -> str | None:
        return v.strip().upper() if v else None

    @property
    def label(self) -> str:
        """Display label shown in the panel (Spanish name when one is set)."""
        return self.local_name or self.name
