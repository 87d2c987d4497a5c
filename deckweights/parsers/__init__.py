from deckweights.parsers.weights_csv import normalize_card_name, parse_weight_table

__all__ = [
    "normalize_card_name",
    "parse_weight_table",
]
