from pydantic import BaseModel, ConfigDict

PLACEHOLDER = "—"


class PresentationRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    country_label: str = PLACEHOLDER
    currency_label: str = PLACEHOLDER
    rate_value: str = PLACEHOLDER
    rate_line: str = PLACEHOLDER
    status_note: str = PLACEHOLDER
    last_update: str = PLACEHOLDER
    next_update: str = PLACEHOLDER
    flag_url: str = ""
    flag_alt: str = ""
    selected: str | None = None


class SelectRequest(BaseModel):
    name: str


class MapPath(BaseModel):
    name: str
    d: str
    selected: bool = False


class MapRender(BaseModel):
    width: int
    height: int
    paths: list[MapPath] = []
