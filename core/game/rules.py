"""Blackjack rule variations used when scoring strategies."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RuleSet:
    """
    Blackjack table rules configuration.

    Only the rules that change how a simulated round plays out.
    """

    # Deck configuration
    num_decks: int = 6

    # Dealer rules
    dealer_hits_soft_17: bool = False  # H17 vs S17

    # Blackjack payout (3:2 = 1.5, 6:5 = 1.2)
    blackjack_payout: float = 1.5

    # Double down rules
    double_after_split: bool = True  # DAS

    # Split rules
    hit_split_aces: bool = False  # Usually only one card to split aces
    max_splits: int = 2  # Maximum number of hands from splitting

    def __post_init__(self) -> None:
        """Validate rule combinations."""
        if self.num_decks < 1 or self.num_decks > 8:
            raise ValueError("num_decks must be between 1 and 8")
        if self.blackjack_payout < 1.0:
            raise ValueError("blackjack_payout must be at least 1.0")
        if self.max_splits < 1:
            raise ValueError("max_splits must be at least 1")

    @classmethod
    def vegas_strip(cls) -> "RuleSet":
        """Standard Vegas Strip rules."""
        return cls(
            num_decks=6,
            dealer_hits_soft_17=False,
            blackjack_payout=1.5,
            double_after_split=True,
            max_splits=4,
        )

    @classmethod
    def single_deck(cls) -> "RuleSet":
        """Single deck rules."""
        return cls(
            num_decks=1,
            dealer_hits_soft_17=True,
            blackjack_payout=1.5,
            double_after_split=False,
        )
