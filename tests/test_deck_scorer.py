import pytest

from deckweights.models.card import ParsedCardEntry
from deckweights.models.failure import DataSourceError
from deckweights.models.score import DeckScore, ScoredCard
from deckweights.models.weights import FormatVariant
from deckweights.services.deck_scorer import DeckScorer, score_deck
from deckweights.services.weight_cache import WeightTableCache

MAIN_RESOURCE = "csv/WeightsMainDeck.csv"
COMMANDER_RESOURCE = "csv/WeightsCommander.csv"

# Historic main deck weights from the sample table
HISTORIC_WEIGHTS = {
    "Mountain": 1,
    "Swamp": 1,
    "Sol Ring": 5,
    "Lightning Bolt": 3,
    "Forest": 2,
    "Island": 2,
}


@pytest.fixture
def scorer(cache: WeightTableCache) -> DeckScorer:
    return DeckScorer(cache)


class TestCommanderScoring:
    async def test_commander_example(self, scorer: DeckScorer) -> None:
        """Commander weight is added once, main deck weights times quantity."""
        text = "Commander\n1 Niv-Mizzet, Parun\nDeck\n3 Mountain\n2 Swamp"

        result = await scorer.parse_and_score(text, FormatVariant.HISTORIC)

        assert result.total_weight == 10
        assert result.cards == [
            ScoredCard(quantity=1, name="Niv-Mizzet, Parun", total_weight=5, unit_weight=5),
            ScoredCard(quantity=3, name="Mountain", total_weight=3, unit_weight=1),
            ScoredCard(quantity=2, name="Swamp", total_weight=2, unit_weight=1),
        ]

    async def test_standard_variant_uses_standard_columns(self, scorer: DeckScorer) -> None:
        text = "Commander\n1 Niv-Mizzet, Parun\nDeck\n3 Mountain\n2 Swamp"

        result = await scorer.parse_and_score(text, FormatVariant.STANDARD)

        # Niv 6 (commander), Mountain 3 x 2, Swamp 2 x 2
        assert result.total_weight == 16
        assert [c.name for c in result.cards] == ["Niv-Mizzet, Parun", "Mountain", "Swamp"]

    async def test_commander_uses_commander_table(self, scorer: DeckScorer) -> None:
        """Niv-Mizzet weighs 4 in the main table but 5 as commander."""
        result = await scorer.parse_and_score("1 Niv-Mizzet, Parun", FormatVariant.HISTORIC)
        assert result.total_weight == 4

        result = await scorer.parse_and_score(
            "Commander\n1 Niv-Mizzet, Parun", FormatVariant.HISTORIC
        )
        assert result.total_weight == 5

    async def test_commander_quantity_ignored(self, cache: WeightTableCache) -> None:
        entries = [ParsedCardEntry(name="Niv-Mizzet, Parun", quantity=3, is_commander=True)]

        result = await score_deck(entries, cache, FormatVariant.HISTORIC)

        assert result.cards == [
            ScoredCard(quantity=1, name="Niv-Mizzet, Parun", total_weight=5, unit_weight=5)
        ]

    async def test_unknown_commander_weighs_zero(self, scorer: DeckScorer) -> None:
        result = await scorer.parse_and_score("Commander\n1 Sol Ring\n2 Swamp")

        assert result.total_weight == 2
        assert ScoredCard(quantity=1, name="Sol Ring", total_weight=0, unit_weight=0) in (
            result.cards
        )

    async def test_multiple_commanders_last_wins(self, scorer: DeckScorer) -> None:
        text = "Commander\n1 Niv-Mizzet, Parun\nCommander\n1 Sheoldred the Apocalypse"

        result = await scorer.parse_and_score(text, FormatVariant.HISTORIC)

        # Sheoldred scores 8 as commander, Niv-Mizzet falls back to main deck weight 4
        assert result.total_weight == 12
        assert result.cards[0].name == "Sheoldred the Apocalypse"

    async def test_score_deck_picks_last_flagged_entry(self, cache: WeightTableCache) -> None:
        entries = [
            ParsedCardEntry(name="Sheoldred the Apocalypse", quantity=1, is_commander=True),
            ParsedCardEntry(name="Niv-Mizzet, Parun", quantity=1, is_commander=True),
        ]

        result = await score_deck(entries, cache, FormatVariant.HISTORIC)

        # Niv-Mizzet commander 5, Sheoldred not in main table
        assert result.total_weight == 5

    async def test_without_commander_only_main_table_loaded(
        self, scorer: DeckScorer, source
    ) -> None:
        await scorer.parse_and_score("3 Mountain\n2 Swamp")

        assert source.calls == [MAIN_RESOURCE]

    async def test_with_commander_both_tables_loaded(self, scorer: DeckScorer, source) -> None:
        await scorer.parse_and_score("Commander\n1 Niv-Mizzet, Parun\n3 Mountain")

        assert sorted(source.calls) == sorted([MAIN_RESOURCE, COMMANDER_RESOURCE])


class TestMainDeckScoring:
    @pytest.mark.parametrize(
        "text",
        [
            "4 Lightning Bolt\n20 Mountain",
            "1 Sol Ring\n2 Forest\n3 Island\n4 Swamp",
            "Deck\n1 Sol Ring (CMR) 472\n7 Black Lotus\n\nSideboard\n2 Lightning Bolt",
        ],
    )
    async def test_total_is_sum_of_unit_times_quantity(
        self, scorer: DeckScorer, text: str
    ) -> None:
        result = await scorer.parse_and_score(text, FormatVariant.HISTORIC)

        expected = sum(
            HISTORIC_WEIGHTS.get(entry.name, 0) * entry.quantity
            for entry in scorer.parser.parse(text)
        )
        assert result.total_weight == expected
        assert result.total_weight == sum(c.total_weight for c in result.cards)

    async def test_unknown_cards_listed_with_zero(self, scorer: DeckScorer) -> None:
        result = await scorer.parse_and_score("2 Black Lotus\n1 Sol Ring")

        assert result.total_weight == 5
        assert result.cards == [
            ScoredCard(quantity=1, name="Sol Ring", total_weight=5, unit_weight=5),
            ScoredCard(quantity=2, name="Black Lotus", total_weight=0, unit_weight=0),
        ]

    async def test_case_insensitive_names(self, scorer: DeckScorer) -> None:
        result = await scorer.parse_and_score("2 sol ring")

        assert result.total_weight == 10
        assert result.cards[0].name == "sol ring"

    async def test_ordered_by_descending_total(self, scorer: DeckScorer) -> None:
        result = await scorer.parse_and_score("1 Swamp\n1 Sol Ring\n2 Lightning Bolt")

        assert [c.total_weight for c in result.cards] == [6, 5, 1]

    async def test_ties_keep_input_order(self, scorer: DeckScorer) -> None:
        result = await scorer.parse_and_score("1 Island\n1 Forest\n2 Mountain\n1 Black Lotus")

        assert [c.name for c in result.cards] == ["Island", "Forest", "Mountain", "Black Lotus"]

    async def test_dense_input(self, scorer: DeckScorer) -> None:
        result = await scorer.parse_and_score("4 Forest 3 Island 1 Sol Ring")

        assert [(c.name, c.quantity) for c in result.cards] == [
            ("Forest", 4),
            ("Island", 3),
            ("Sol Ring", 1),
        ]
        assert result.total_weight == 8 + 6 + 5

    async def test_card_count(self, scorer: DeckScorer) -> None:
        result = await scorer.parse_and_score("Commander\n1 Niv-Mizzet, Parun\n3 Mountain")

        assert result.card_count == 4


class TestEmptyInput:
    @pytest.mark.parametrize("text", ["", "   ", "\n\r\n", "Deck\nSideboard"])
    async def test_empty_input_gives_empty_score(
        self, scorer: DeckScorer, source, text: str
    ) -> None:
        result = await scorer.parse_and_score(text)

        assert result == DeckScore(0, [])
        assert source.calls == []

    async def test_malformed_only_input(self, scorer: DeckScorer) -> None:
        """Lines without quantities fall back to one copy each and score 0."""
        result = await scorer.parse_and_score("About\nName Izzet Brawl\n")

        assert result.total_weight == 0
        assert result.cards == [
            ScoredCard(quantity=1, name="About", total_weight=0, unit_weight=0),
            ScoredCard(quantity=1, name="Name Izzet Brawl", total_weight=0, unit_weight=0),
        ]


class TestDataSourceFailure:
    async def test_failure_propagates(self, scorer: DeckScorer, source) -> None:
        del source.tables[MAIN_RESOURCE]

        with pytest.raises(DataSourceError):
            await scorer.parse_and_score("3 Mountain")

    async def test_commander_table_failure_propagates(self, scorer: DeckScorer, source) -> None:
        del source.tables[COMMANDER_RESOURCE]

        with pytest.raises(DataSourceError) as exc_info:
            await scorer.parse_and_score("Commander\n1 Niv-Mizzet, Parun\n3 Mountain")

        assert exc_info.value.table_id == "commander"


class TestListKnownCardNames:
    async def test_returns_sorted_main_table_names(self, scorer: DeckScorer) -> None:
        names = await scorer.list_known_card_names()

        assert names == sorted(names)
        assert "Sol Ring" in names
        assert "Sheoldred the Apocalypse" not in names
