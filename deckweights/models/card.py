from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ParsedCardEntry:
    """
    A card entry extracted from a pasted deck list.

    Attributes:
        name: Card name with set/collector annotations removed
        quantity: Number of copies (always 1 for the commander)
        is_commander: True for the card listed under the Commander header
    """

    name: str
    quantity: int
    is_commander: bool = False
