"""Game state and the core rules of play: setup, drawing, buying and turns."""

from __future__ import annotations

import contextlib
import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import IntEnum

from dominion.cards import (
    HAND_SIZE,
    MAX_PLAYERS,
    NUM_KINGDOM_CARDS,
    NUM_TOTAL_CARDS,
    START_COPPER,
    START_ESTATE,
    TREASURE_VALUES,
    UNUSED_PILE,
    Card,
    Phase,
    card_cost,
)
from dominion.rngs import RandomStreams

# Only the first 25 supply piles are looked at when counting empty piles.
_PILES_CHECKED_FOR_END = 25

_VICTORY_POINTS = {
    Card.CURSE: -1,
    Card.ESTATE: 1,
    Card.DUCHY: 3,
    Card.PROVINCE: 6,
    Card.GREAT_HALL: 1,
}


class GameError(Exception):
    """Raised when a game action is not allowed in the current state."""


class Destination(IntEnum):
    """Where a gained card is placed."""

    DISCARD = 0
    DECK = 1
    HAND = 2


@dataclass
class GameState:
    """The complete state of one game.

    The top of each deck is the last element of its list.
    """

    num_players: int
    supply: list[int] = field(default_factory=lambda: [UNUSED_PILE] * NUM_TOTAL_CARDS)
    embargo_tokens: list[int] = field(default_factory=lambda: [0] * NUM_TOTAL_CARDS)
    outpost_played: int = 0
    outpost_turn: int = 0
    whose_turn: int = 0
    phase: Phase = Phase.ACTION
    num_actions: int = 1
    coins: int = 0
    num_buys: int = 1
    hand: list[list[int]] = field(default_factory=list)
    deck: list[list[int]] = field(default_factory=list)
    discard: list[list[int]] = field(default_factory=list)
    played_cards: list[int] = field(default_factory=list)
    rng: RandomStreams = field(default_factory=RandomStreams)

    def __post_init__(self) -> None:
        for piles in (self.hand, self.deck, self.discard):
            while len(piles) < self.num_players:
                piles.append([])

    def shuffle(self, player: int) -> None:
        """Shuffle the player's deck; raise GameError if it is empty."""
        deck = self.deck[player]
        if not deck:
            raise GameError(f"player {player} has no cards in the deck to shuffle")
        # Sort first so the result depends only on the deck's contents.
        deck.sort()
        shuffled = []
        while deck:
            shuffled.append(deck.pop(math.floor(self.rng.random() * len(deck))))
        deck.extend(shuffled)

    def draw_card(self, player: int) -> int:
        """Move the top card of the player's deck to their hand and return it.

        An empty deck is first refilled from the discard pile and shuffled.
        Raises GameError when there is nothing left to draw.
        """
        deck = self.deck[player]
        if not deck:
            discard = self.discard[player]
            deck.extend(discard)
            discard.clear()
            with contextlib.suppress(GameError):
                self.shuffle(player)
            if not deck:
                raise GameError(f"player {player} has no cards to draw")
        card = deck.pop()
        self.hand[player].append(card)
        return card

    def gain_card(
        self, card: int, player: int, destination: Destination = Destination.DISCARD
    ) -> None:
        """Take ``card`` from the supply and give it to ``player``."""
        if self.supply_count(card) < 1:
            raise GameError(f"no {Card(card).name.lower()} cards left in the supply")
        if destination == Destination.DECK:
            self.deck[player].append(card)
        elif destination == Destination.HAND:
            self.hand[player].append(card)
        else:
            self.discard[player].append(card)
        self.supply[card] -= 1

    def discard_card(self, hand_pos: int, player: int, trash: bool = False) -> int:
        """Remove the card at ``hand_pos`` from the player's hand and return it.

        Unless trashed, the card goes to the played pile. The hand's last
        card takes the freed position.
        """
        hand = self.hand[player]
        if not 0 <= hand_pos < len(hand):
            raise GameError(f"no card at hand position {hand_pos}")
        card = hand[hand_pos]
        if not trash:
            self.played_cards.append(card)
        last = hand.pop()
        if hand_pos < len(hand):
            hand[hand_pos] = last
        return card

    def update_coins(self, player: int, bonus: int = 0) -> int:
        """Recount coins from the treasure in the player's hand plus ``bonus``."""
        self.coins = sum(TREASURE_VALUES.get(card, 0) for card in self.hand[player]) + bonus
        return self.coins

    def buy_card(self, card: int) -> None:
        """Buy ``card`` for the current player, placing it in their discard."""
        if self.num_buys < 1:
            raise GameError("no buys left")
        if self.supply_count(card) < 1:
            raise GameError("none of that card left in the supply")
        cost = card_cost(card)
        if self.coins < cost:
            raise GameError(f"not enough coins: have {self.coins}, need {cost}")
        self.phase = Phase.BUY
        self.gain_card(card, self.whose_turn, Destination.DISCARD)
        self.coins -= cost
        self.num_buys -= 1

    def end_turn(self) -> None:
        """Discard the current hand, pass the turn and draw the next hand."""
        current = self.whose_turn
        self.discard[current].extend(self.hand[current])
        self.hand[current].clear()

        self.whose_turn = current + 1 if current < self.num_players - 1 else 0
        self.outpost_played = 0
        self.phase = Phase.ACTION
        self.num_actions = 1
        self.coins = 0
        self.num_buys = 1
        self.played_cards.clear()
        self.hand[self.whose_turn].clear()

        for _ in range(HAND_SIZE):
            with contextlib.suppress(GameError):
                self.draw_card(self.whose_turn)
        self.update_coins(self.whose_turn)

    def is_game_over(self) -> bool:
        """True when the Provinces are gone or three supply piles are empty."""
        if self.supply[Card.PROVINCE] == 0:
            return True
        empty = sum(1 for count in self.supply[:_PILES_CHECKED_FOR_END] if count == 0)
        return empty >= 3

    def score_for(self, player: int) -> int:
        """Return the player's victory points."""
        gardens_value = self.full_deck_count(player, Card.CURSE) // 10
        counted = [
            *self.hand[player],
            *self.discard[player],
            *self.deck[player][: len(self.discard[player])],
        ]
        score = 0
        for card in counted:
            if card == Card.GARDENS:
                score += gardens_value
            else:
                score += _VICTORY_POINTS.get(card, 0)
        return score

    def get_winners(self) -> list[int]:
        """Return the indices of the winning players, ties included.

        Players tied for the lead who are seated after the current player
        have had one turn fewer and win the tie.
        """
        scores = [self.score_for(player) for player in range(self.num_players)]
        high = max(scores)
        adjusted = [
            score + 1 if score == high and player > self.whose_turn else score
            for player, score in enumerate(scores)
        ]
        best = max(adjusted)
        return [player for player, score in enumerate(adjusted) if score == best]

    def full_deck_count(self, player: int, card: int) -> int:
        """Count copies of ``card`` across the player's deck, hand and discard."""
        return (
            self.deck[player].count(card)
            + self.hand[player].count(card)
            + self.discard[player].count(card)
        )

    def hand_card(self, hand_pos: int) -> int:
        """Return the card at ``hand_pos`` in the current player's hand."""
        hand = self.hand[self.whose_turn]
        if not 0 <= hand_pos < len(hand):
            raise GameError(f"no card at hand position {hand_pos}")
        return hand[hand_pos]

    def num_hand_cards(self) -> int:
        """Return the number of cards in the current player's hand."""
        return len(self.hand[self.whose_turn])

    def supply_count(self, card: int) -> int:
        """Return how many of ``card`` are left; -1 if it is not in the game."""
        if not 0 <= card < NUM_TOTAL_CARDS:
            raise GameError(f"unknown card {card!r}")
        return self.supply[card]


def initialize_game(num_players: int, kingdom_cards: Iterable[int], seed: int) -> GameState:
    """Set up a new game and draw the first player's opening hand."""
    rng = RandomStreams()
    rng.select_stream(1)
    rng.put_seed(seed)

    if not 2 <= num_players <= MAX_PLAYERS:
        raise GameError(f"number of players must be 2 to {MAX_PLAYERS}, not {num_players}")
    kingdom = list(kingdom_cards)
    if len(kingdom) != NUM_KINGDOM_CARDS:
        raise GameError(f"exactly {NUM_KINGDOM_CARDS} kingdom cards are needed")
    if len(set(kingdom)) != len(kingdom):
        raise GameError("kingdom cards must all be different")

    state = GameState(num_players=num_players, rng=rng)
    supply = state.supply

    supply[Card.CURSE] = {2: 10, 3: 20}.get(num_players, 30)
    victory = 8 if num_players == 2 else 12
    for card in (Card.ESTATE, Card.DUCHY, Card.PROVINCE):
        supply[card] = victory
    supply[Card.COPPER] = 60 - 7 * num_players
    supply[Card.SILVER] = 40
    supply[Card.GOLD] = 30

    for card in Card:
        if card < Card.ADVENTURER:
            continue
        if card not in kingdom:
            supply[card] = UNUSED_PILE
        elif card in (Card.GREAT_HALL, Card.GARDENS):
            supply[card] = victory
        else:
            supply[card] = 10

    for player in range(num_players):
        state.deck[player] = [Card.ESTATE] * START_ESTATE + [Card.COPPER] * START_COPPER
    for player in range(num_players):
        state.shuffle(player)

    for _ in range(HAND_SIZE):
        state.draw_card(state.whose_turn)
    state.update_coins(state.whose_turn)
    return state