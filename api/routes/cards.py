"""Hand evaluation and deck generation endpoints."""

from fastapi import APIRouter, HTTPException

from api.schemas import (
    CardResponse,
    DeckRequest,
    DeckResponse,
    HandRequest,
    HandResponse,
)
from core.cards import Card, generate_random_sample, generate_shuffled_deck
from core.hand import Hand
from core.random_source import RandomSource

router = APIRouter()


def card_response(card: Card) -> CardResponse:
    """Build the response model for a card."""
    return CardResponse(
        rank=str(card.rank),
        suit=str(card.suit),
        value_high=card.rank_value_high,
        value_low=card.rank_value_low,
        text=str(card),
    )


@router.post("/hands/evaluate")
async def evaluate_hand(request: HandRequest) -> HandResponse:
    """Compute the value and shape of a hand."""
    hand = Hand()
    try:
        for code in request.cards:
            hand.add_card(Card.from_string(code))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return HandResponse(
        cards=[card_response(c) for c in hand.cards],
        value=hand.value,
        has_soft_ace=hand.has_soft_ace,
        is_pair=hand.is_pair,
        is_busted=hand.is_busted,
        text=str(hand),
    )


@router.post("/deck/shuffled")
async def shuffled_deck(request: DeckRequest) -> DeckResponse:
    """Generate a full shuffled deck."""
    cards = generate_shuffled_deck(RandomSource(request.seed))
    return DeckResponse(cards=[card_response(c) for c in cards])


@router.post("/deck/sample")
async def random_sample(request: DeckRequest) -> DeckResponse:
    """Draw distinct random cards."""
    cards = generate_random_sample(request.num_cards, RandomSource(request.seed))
    return DeckResponse(cards=[card_response(c) for c in cards])
