from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class ScoredCard:
    """
    One deck entry after weights have been applied.

    Attributes:
        quantity: Copies counted (fixed at 1 for the commander)
        name: Card name as parsed from the deck list
        total_weight: unit_weight * quantity
        unit_weight: Weight of a single copy, 0 for unknown cards
    """

    quantity: int
    name: str
    total_weight: int
    unit_weight: int


@dataclass(frozen=True, slots=True)
class DeckScore:
    """Aggregate weight of a deck plus the per-card breakdown."""

    total_weight: int = 0
    cards: list[ScoredCard] = field(default_factory=list)

    @property
    def card_count(self) -> int:
        """Total copies across all scored entries."""
        return sum(card.quantity for card in self.cards)
