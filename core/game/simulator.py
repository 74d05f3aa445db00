"""Round simulation used to score strategies."""

import logging

from core.cards import Rank, Shoe
from core.hand import Hand, evaluate_hands
from core.game.rules import RuleSet
from core.random_source import RandomSource, Randomizer
from core.strategy.base import Action, StrategyBase

LOGGER = logging.getLogger(__name__)

# Cards held back per hand that may be in play: every split hand plus the dealer.
CARDS_PER_HAND_RESERVE = 10


class StrategyEvaluator:
    """
    Fitness function for strategies.

    Plays a fixed number of rounds with the strategy making every player
    decision and scores it by net units won.
    """

    def __init__(
        self,
        rules: RuleSet | None = None,
        hands_per_evaluation: int = 1000,
        rng: Randomizer | None = None,
    ) -> None:
        """
        Initialize the evaluator.

        Args:
            rules: Table rules (uses defaults if not provided)
            hands_per_evaluation: Rounds played per evaluation
            rng: Randomizer used to shuffle shoes
        """
        if hands_per_evaluation < 1:
            raise ValueError("hands_per_evaluation must be at least 1")

        self.rules = rules or RuleSet()
        self.hands_per_evaluation = hands_per_evaluation
        self._rng = rng or RandomSource()
        self.reshuffle_threshold = CARDS_PER_HAND_RESERVE * (self.rules.max_splits + 1)

    def new_shoe(self) -> Shoe:
        return Shoe(num_decks=self.rules.num_decks, rng=self._rng)

    def evaluate(self, strategy: StrategyBase) -> float:
        """Play hands_per_evaluation rounds and store the net result as fitness."""
        shoe = self.new_shoe()
        total = 0.0

        for _ in range(self.hands_per_evaluation):
            if shoe.cards_remaining < self.reshuffle_threshold:
                shoe = self.new_shoe()

            player = Hand()
            dealer = Hand()
            player.add_card(shoe.deal_next())
            dealer.add_card(shoe.deal_next())
            player.add_card(shoe.deal_next())
            dealer.add_card(shoe.deal_next())

            total += self.play_round(strategy, shoe, dealer, player)

        strategy.fitness = total
        LOGGER.debug("Evaluated strategy over %d hands: %.1f", self.hands_per_evaluation, total)
        return total

    def play_round(self, strategy: StrategyBase, shoe: Shoe, dealer: Hand, player: Hand) -> float:
        """
        Play one round from already dealt hands.

        Args:
            strategy: Strategy making the player's decisions
            shoe: Shoe to draw further cards from
            dealer: Dealer hand, upcard first
            player: Player's starting hand

        Returns:
            Net units won or lost by the player
        """
        if player.is_blackjack or dealer.is_blackjack:
            outcome = evaluate_hands(player, dealer)
            if outcome == 1:
                return player.stake * self.rules.blackjack_payout
            return float(outcome) * player.stake

        upcard = dealer.cards[0].rank
        hands = [player]
        index = 0
        while index < len(hands):
            self._play_hand(strategy, shoe, hands, hands[index], upcard)
            index += 1

        if all(hand.is_busted for hand in hands):
            return -sum(hand.stake for hand in hands)

        self._play_dealer(shoe, dealer)
        return sum(hand.stake * evaluate_hands(hand, dealer) for hand in hands)

    def _play_hand(
        self,
        strategy: StrategyBase,
        shoe: Shoe,
        hands: list[Hand],
        hand: Hand,
        upcard: Rank,
    ) -> None:
        """Play one player hand to completion, appending any split hands."""
        if len(hand.cards) == 1:
            hand.add_card(shoe.deal_next())

        while hand.value < 21:
            if hand.is_split_hand and hand.cards[0].is_ace and not self.rules.hit_split_aces:
                return

            can_split = hand.is_pair and len(hands) < self.rules.max_splits
            can_double = len(hand.cards) == 2 and (
                not hand.is_split_hand or self.rules.double_after_split
            )
            action = strategy.get_action_for(hand, upcard, can_split=can_split)

            if action is Action.STAND:
                return

            if action is Action.SPLIT:
                new_hand = Hand(stake=hand.stake, is_split_hand=True)
                new_hand.add_card(hand.cards.pop())
                hand.is_split_hand = True
                hand.add_card(shoe.deal_next())
                hands.append(new_hand)
                continue

            if action is Action.DOUBLE and can_double:
                hand.stake *= 2
                hand.is_doubled = True
                hand.add_card(shoe.deal_next())
                return

            hand.add_card(shoe.deal_next())

    def _play_dealer(self, shoe: Shoe, dealer: Hand) -> None:
        """Dealer hits until 17+ (or soft 17 if H17 rules)."""
        while self._dealer_should_hit(dealer):
            dealer.add_card(shoe.deal_next())

    def _dealer_should_hit(self, dealer: Hand) -> bool:
        value = dealer.value
        if value < 17:
            return True
        return value == 17 and dealer.has_soft_ace and self.rules.dealer_hits_soft_17


def deal_scenario(shoe: Shoe, upcard_rank: Rank, player_ranks: list[Rank]) -> tuple[Hand, Hand]:
    """
    Build a (dealer, player) pair of hands with chosen ranks.

    The dealer's upcard and the player's cards are pulled by rank from
    anywhere ahead in the shoe; the dealer's hole card is the next card
    in sequence.

    Raises:
        RankNotFoundError: If a requested rank is no longer in the shoe
    """
    dealer = Hand()
    player = Hand()
    dealer.add_card(shoe.deal_next_of_rank(upcard_rank))
    for rank in player_ranks:
        player.add_card(shoe.deal_next_of_rank(rank))
    dealer.add_card(shoe.deal_next())
    return dealer, player
