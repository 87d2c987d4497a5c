from pydantic_settings import BaseSettings, SettingsConfigDict

from deckweights.models.weights import FormatVariant, TableSpec

# =============================================================================
# REFERENCE TABLES
# =============================================================================

MAIN_DECK_TABLE = "main"
COMMANDER_TABLE = "commander"

# Weight columns every reference table must carry
WEIGHT_COLUMNS: tuple[str, ...] = (
    "weight_hb_99",
    "weight_hb_cmd",
    "weight_sb_99",
    "weight_sb_cmd",
)

# Format variant -> (main deck column, commander column)
FORMAT_WEIGHT_COLUMNS: dict[FormatVariant, tuple[str, str]] = {
    FormatVariant.HISTORIC: ("weight_hb_99", "weight_hb_cmd"),
    FormatVariant.STANDARD: ("weight_sb_99", "weight_sb_cmd"),
}


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "DeckWeights"
    debug: bool = False

    # http(s) URL or a local directory holding the csv/ folder
    weights_base_url: str = "http://localhost:5000/"

    main_deck_table: str = "csv/WeightsMainDeck.csv"
    commander_table: str = "csv/WeightsCommander.csv"

    fetch_timeout: float = 30.0

    # Load every table during app startup instead of on first use
    warm_on_startup: bool = False

    def table_specs(self) -> list[TableSpec]:
        """Reference tables known to this deployment."""
        return [
            TableSpec(
                table_id=MAIN_DECK_TABLE,
                resource=self.main_deck_table,
                weight_columns=WEIGHT_COLUMNS,
            ),
            TableSpec(
                table_id=COMMANDER_TABLE,
                resource=self.commander_table,
                weight_columns=WEIGHT_COLUMNS,
            ),
        ]


settings = Settings()
