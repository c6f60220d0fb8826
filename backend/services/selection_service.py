from enum import Enum

from models.presentation import PLACEHOLDER, PresentationRecord
from services.country_service import NameResolver
from services.formatting import NumberConvention, format_rate
from services.rate_service import RateStore

MSG_SELECT_PROMPT = "Seleccioná un país"
MSG_LOADING = "Cargando…"
MSG_STARTUP_ERROR = "Error al iniciar la página"
MSG_NOT_AVAILABLE = "País no disponible"
MSG_NO_RATE_DATA = "No hay datos de cotización."
MSG_RATE_UNAVAILABLE = "No disponible"
MSG_CURRENCY_MISSING = "La moneda no aparece en la fuente actual."


class Phase(str, Enum):
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


_EMPTY_PANEL_MESSAGES = {
    Phase.LOADING: MSG_LOADING,
    Phase.READY: MSG_SELECT_PROMPT,
    Phase.FAILED: MSG_STARTUP_ERROR,
}


class SelectionEngine:
    """Resolves a clicked country into the panel record.

    Holds the single current selection; every record is recomputed from the
    reference table and whatever snapshot the rate store holds right now.
    """

    def __init__(
        self,
        resolver: NameResolver,
        store: RateStore,
        convention: NumberConvention | str = "en",
        flag_cdn_url: str = "https://flagcdn.com/w40",
        base_currency: str = "USD",
    ):
        self.resolver = resolver
        self.store = store
        self.convention = convention
        self.flag_cdn_url = flag_cdn_url.rstrip("/")
        self.base_currency = base_currency
        self.phase = Phase.LOADING
        self._selected: str | None = None

    @property
    def selected(self) -> str | None:
        return self._selected

    def select(self, name: str) -> PresentationRecord:
        info = self.resolver.resolve(name)
        # Keep the canonical name so the map highlights the matching feature
        self._selected = info.name if info else name
        return self.build(self._selected)

    def clear(self) -> PresentationRecord:
        self._selected = None
        return self.current()

    def current(self) -> PresentationRecord:
        if self._selected is None:
            return PresentationRecord(country_label=_EMPTY_PANEL_MESSAGES[self.phase])
        return self.build(self._selected)

    def build(self, name: str) -> PresentationRecord:
        info = self.resolver.resolve(name)
        if info is None:
            return PresentationRecord(country_label=MSG_NOT_AVAILABLE)

        snapshot = self.store.snapshot
        base = self.base_currency
        fields = {
            "selected": info.name,
            "country_label": info.label,
            "currency_label": f"Moneda: {info.currency} · Base: {base}",
        }
        if info.iso2:
            fields["flag_url"] = f"{self.flag_cdn_url}/{info.iso2.lower()}.png"
            fields["flag_alt"] = f"Bandera de {info.label}"

        if snapshot is None or not snapshot.ok:
            return PresentationRecord(status_note=MSG_NO_RATE_DATA, **fields)

        fields["last_update"] = snapshot.time_last_update_utc or PLACEHOLDER
        fields["next_update"] = snapshot.time_next_update_utc or PLACEHOLDER

        rate = snapshot.rate_for(info.currency)
        if rate is None:
            return PresentationRecord(
                rate_value=MSG_RATE_UNAVAILABLE, status_note=MSG_CURRENCY_MISSING, **fields
            )

        amount = format_rate(rate, self.convention)
        rate_line = f"1 {base} = {amount} {info.currency}"
        return PresentationRecord(
            rate_value=f"{amount} {info.currency}",
            rate_line=rate_line,
            status_note=rate_line,
            **fields,
        )
