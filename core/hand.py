"""Hand evaluation for blackjack."""

from dataclasses import dataclass, field
from typing import Iterator

from core.cards import Card


@dataclass
class Hand:
    """A blackjack hand in deal order."""

    cards: list[Card] = field(default_factory=list)
    stake: float = 1.0
    is_doubled: bool = False
    is_split_hand: bool = False

    def add_card(self, card: Card) -> None:
        """Add a card to the hand."""
        self.cards.append(card)

    @property
    def value(self) -> int:
        """
        Calculate the best hand value.

        Only the first Ace may count as 11; every other Ace counts 1.
        Returns the highest total that doesn't bust, or the lowest bust total.
        """
        high_value = 0
        low_value = 0
        ace_used_high = False

        for card in self.cards:
            if card.is_ace and not ace_used_high:
                high_value += card.rank_value_high
                low_value += card.rank_value_low
                ace_used_high = True
            elif card.is_ace:
                high_value += card.rank_value_low
                low_value += card.rank_value_low
            else:
                high_value += card.rank_value_high
                low_value += card.rank_value_low

        if low_value > 21:
            return low_value
        if high_value > 21:
            return low_value
        return high_value

    def hand_value(self) -> int:
        return self.value

    @property
    def is_pair(self) -> bool:
        """Check if the hand is exactly two cards of the same rank."""
        return len(self.cards) == 2 and self.cards[0].rank is self.cards[1].rank

    @property
    def has_soft_ace(self) -> bool:
        """
        Check if the hand holds an Ace that can count as 11.

        Note this sums every card at its high value, so a second Ace
        makes the check fail even where one Ace could still be high.
        """
        if not any(card.is_ace for card in self.cards):
            return False
        return sum(card.rank_value_high for card in self.cards) <= 21

    @property
    def is_blackjack(self) -> bool:
        """Check if the hand is a natural (21 with 2 cards, not from a split)."""
        return len(self.cards) == 2 and self.value == 21 and not self.is_split_hand

    @property
    def is_busted(self) -> bool:
        return self.value > 21

    @property
    def num_cards(self) -> int:
        return len(self.cards)

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        return f"{','.join(str(card) for card in self.cards)} = {self.value}"

    def __repr__(self) -> str:
        return f"Hand({self.cards!r}, value={self.value})"


def evaluate_hands(player_hand: Hand, dealer_hand: Hand) -> int:
    """
    Compare player and dealer hands.

    Returns:
        1 if player wins
        -1 if dealer wins
        0 if push (tie)
    """
    if player_hand.is_busted:
        return -1
    if dealer_hand.is_busted:
        return 1

    player_bj = player_hand.is_blackjack
    dealer_bj = dealer_hand.is_blackjack
    if player_bj and dealer_bj:
        return 0
    if player_bj:
        return 1
    if dealer_bj:
        return -1

    if player_hand.value > dealer_hand.value:
        return 1
    if dealer_hand.value > player_hand.value:
        return -1
    return 0
