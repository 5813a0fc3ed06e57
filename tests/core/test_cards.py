"""Tests for Card, Rank, and Suit."""

import pytest

from core.cards import BLACKJACK_VALUES, Card, Rank, Suit


class TestRank:
    """Tests for the Rank enumeration."""

    def test_every_rank_has_a_value(self):
        """Test the lookup table covers the closed rank set."""
        assert set(BLACKJACK_VALUES) == set(Rank)

    def test_parse_api_ranks(self):
        """Test parsing the deck API's rank strings."""
        assert Rank.parse("2") == Rank.TWO
        assert Rank.parse("10") == Rank.TEN
        assert Rank.parse("JACK") == Rank.JACK
        assert Rank.parse("queen") == Rank.QUEEN
        assert Rank.parse(" KING ") == Rank.KING
        assert Rank.parse("ACE") == Rank.ACE

    @pytest.mark.parametrize("raw", ["1", "11", "02", "2.0", "", "JOKER", "A"])
    def test_parse_rejects_unknown_ranks(self, raw):
        """Test there is no permissive numeric parsing."""
        with pytest.raises(ValueError, match="Invalid rank"):
            Rank.parse(raw)

    def test_codes(self):
        """Test card-code rank letters."""
        assert Rank.TEN.code == "0"
        assert Rank.NINE.code == "9"
        assert Rank.KING.code == "K"
        assert Rank.ACE.code == "A"


class TestSuit:
    """Tests for the Suit enumeration."""

    def test_parse(self):
        """Test parsing the deck API's suit names."""
        assert Suit.parse("HEARTS") == Suit.HEARTS
        assert Suit.parse("spades") == Suit.SPADES

    def test_parse_invalid(self):
        """Test unknown suits are rejected."""
        with pytest.raises(ValueError, match="Invalid suit"):
            Suit.parse("STARS")


class TestCard:
    """Tests for the Card class."""

    def test_card_creation(self):
        """Test creating a card."""
        card = Card(Rank.ACE, Suit.SPADES)
        assert card.rank == Rank.ACE
        assert card.suit == Suit.SPADES
        assert card.image is None

    def test_card_immutability(self):
        """Test that cards are immutable."""
        card = Card(Rank.ACE, Suit.SPADES)
        with pytest.raises(AttributeError):
            card.rank = Rank.KING

    def test_card_value(self):
        """Test card blackjack values."""
        assert Card(Rank.TWO, Suit.HEARTS).value == 2
        assert Card(Rank.TEN, Suit.HEARTS).value == 10
        assert Card(Rank.JACK, Suit.HEARTS).value == 10
        assert Card(Rank.QUEEN, Suit.HEARTS).value == 10
        assert Card(Rank.KING, Suit.HEARTS).value == 10
        assert Card(Rank.ACE, Suit.HEARTS).value == 11

    def test_suit_does_not_affect_value(self):
        """Test suit is cosmetic."""
        values = {Card(Rank.SEVEN, suit).value for suit in Suit}
        assert values == {7}

    def test_card_code(self):
        """Test deck API card codes."""
        assert Card(Rank.TEN, Suit.HEARTS).code == "0H"
        assert Card(Rank.ACE, Suit.SPADES).code == "AS"
        assert Card(Rank.QUEEN, Suit.DIAMONDS).code == "QD"

    def test_card_from_api(self):
        """Test building a card from a deck API payload."""
        card = Card.from_api(
            {
                "code": "KH",
                "image": "https://deckofcardsapi.com/static/img/KH.png",
                "value": "KING",
                "suit": "HEARTS",
            }
        )
        assert card == Card(Rank.KING, Suit.HEARTS)
        assert card.image == "https://deckofcardsapi.com/static/img/KH.png"

    def test_card_from_api_invalid(self):
        """Test malformed payloads raise ValueError."""
        with pytest.raises(ValueError):
            Card.from_api({"suit": "HEARTS"})
        with pytest.raises(ValueError):
            Card.from_api({"value": "11", "suit": "HEARTS"})
        with pytest.raises(ValueError):
            Card.from_api({"value": 10, "suit": "HEARTS"})

    def test_image_uri_fallback(self):
        """Test cards without an image use the API's static image."""
        card = Card(Rank.TEN, Suit.CLUBS)
        assert card.image_uri == "https://deckofcardsapi.com/static/img/0C.png"
        assert Card(Rank.TEN, Suit.CLUBS, "x.png").image_uri == "x.png"

    def test_image_ignored_in_equality(self):
        """Test the display reference takes no part in identity."""
        card1 = Card(Rank.ACE, Suit.SPADES, "a.png")
        card2 = Card(Rank.ACE, Suit.SPADES)
        assert card1 == card2
        assert len({card1, card2}) == 1

    def test_card_str(self):
        """Test string representation."""
        card = Card(Rank.ACE, Suit.SPADES)
        assert str(card) == "A♠"
        assert str(Card(Rank.TEN, Suit.HEARTS)) == "10♥"
