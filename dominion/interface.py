"""Text views of a game and the built-in computer player."""

from __future__ import annotations

import contextlib
import math
import sys
from collections.abc import Iterable
from typing import TextIO

from dominion.cards import (
    NUM_KINGDOM_CARDS,
    NUM_TOTAL_CARDS,
    TREASURE_VALUES,
    UNUSED_PILE,
    Card,
    card_cost,
    card_name,
    display_cost,
    phase_name,
)
from dominion.game import GameError, GameState
from dominion.rngs import RandomStreams

_HELP = (
    "Commands are: \n"
    "  add [Supply Card Number] \t\t\t- add any card to your hand (teh hacks)\n"
    "  buy [Supply Card Number] \t\t\t- buy a card at supply position\n"
    "  end \t\t\t      \t\t\t- end your turn\n"
    "  init [Number of Players] [Number of Bots] \t- initialize the game\n"
    "  num \t\t\t      \t\t\t- print number of cards in your hand\n"
    "  play [Hand Index] [Choice] [Choice] [Choice]\t- play a card from your hand\n"
    "  resign\t\t\t\t\t- end the game showing the current scores\n"
    "  show \t\t\t\t\t\t- show your current hand\n"
    "  stat \t\t\t\t\t\t- show your turn's status\n"
    "  supp \t\t\t\t\t\t- show the supply\n"
    "  whos \t\t\t      \t\t\t- whos turn\n"
    "  exit \t\t\t      \t\t\t- exit the interface"
    "\n\n"
)


def _listing(title: str, cards: Iterable[int], suffix: str = "") -> str:
    """Render a numbered list of cards under ``title``."""
    cards = list(cards)
    lines = [title]
    if cards:
        lines.append("#  Card")
    lines.extend(
        f"{index:<2} {card_name(card):<13}{suffix}" for index, card in enumerate(cards)
    )
    return "\n".join(lines) + "\n\n"


def format_hand(game: GameState, player: int) -> str:
    """Return the listing of the player's hand."""
    return _listing(f"Player {player}'s hand:", game.hand[player])


def format_deck(game: GameState, player: int) -> str:
    """Return the listing of the player's deck, bottom card first."""
    return _listing(f"Player {player}'s deck: ", game.deck[player])


def format_discard(game: GameState, player: int) -> str:
    """Return the listing of the player's discard pile."""
    return _listing(f"Player {player}'s discard: ", game.discard[player], " ")


def format_played(game: GameState, player: int) -> str:
    """Return the listing of the cards played this turn."""
    return _listing(f"Player {player}'s played cards: ", game.played_cards, " ")


def format_supply(game: GameState) -> str:
    """Return a table of every supply pile that is in the game."""
    lines = ["#   Card          Cost   Copies"]
    for card in range(NUM_TOTAL_CARDS):
        count = game.supply[card]
        if count == UNUSED_PILE:
            continue
        lines.append(
            f"{card:<2}  {card_name(card):<13} {display_cost(card):<5}  {count:<5}"
        )
    return "\n".join(lines) + "\n\n"


def format_state(game: GameState) -> str:
    """Return the current player's turn status."""
    return (
        f"Player {game.whose_turn}:\n"
        f"{phase_name(game.phase)} phase\n"
        f"{game.num_actions} actions\n"
        f"{game.coins} coins\n"
        f"{game.num_buys} buys\n\n"
    )


def format_scores(game: GameState) -> str:
    """Return one score line per player."""
    return "".join(
        f"Player {player} has a score of {game.score_for(player)}\n"
        for player in range(game.num_players)
    )


def help_text() -> str:
    """Return the list of interactive commands."""
    return _HELP


def add_card_to_hand(game: GameState, player: int, card: int) -> None:
    """Put a kingdom card straight into the player's hand.

    Raises GameError unless ``card`` is a kingdom card.
    """
    if not Card.ADVENTURER <= card < NUM_TOTAL_CARDS:
        raise GameError(f"card {card!r} cannot be added to a hand")
    game.hand[player].append(Card(card))


def select_kingdom_cards(seed: int, rng: RandomStreams | None = None) -> list[Card]:
    """Pick ten different kingdom cards at random from stream 1 seeded with ``seed``."""
    if rng is None:
        rng = RandomStreams()
    rng.select_stream(1)
    rng.put_seed(seed)
    chosen: list[Card] = []
    while len(chosen) < NUM_KINGDOM_CARDS:
        card = math.floor(rng.random() * NUM_TOTAL_CARDS)
        if card < Card.ADVENTURER or card in chosen:
            continue
        chosen.append(Card(card))
    return chosen


def count_hand_coins(game: GameState, player: int) -> int:
    """Return the coin value of the treasure in the player's hand."""
    return sum(TREASURE_VALUES.get(card, 0) for card in game.hand[player])


def execute_bot_turn(
    game: GameState, player: int, turn_num: int, out: TextIO | None = None
) -> int:
    """Play one turn for a computer player and return the updated turn number.

    The bot buys the best of Province, Duchy (once Provinces are gone),
    Gold or Silver that its hand can pay for, then ends its turn.
    """
    out = sys.stdout if out is None else out
    coins = count_hand_coins(game, player)
    out.write(
        f"*****************Executing Bot Player {player} "
        f"Turn Number {turn_num}*****************\n"
    )
    out.write(format_supply(game))

    provinces = game.supply_count(Card.PROVINCE)
    choice: Card | None = None
    if coins >= card_cost(Card.PROVINCE) and provinces > 0:
        choice = Card.PROVINCE
    elif provinces == 0 and coins >= card_cost(Card.DUCHY):
        choice = Card.DUCHY
    elif coins >= card_cost(Card.GOLD) and game.supply_count(Card.GOLD) > 0:
        choice = Card.GOLD
    elif coins >= card_cost(Card.SILVER) and game.supply_count(Card.SILVER) > 0:
        choice = Card.SILVER

    if choice is not None:
        with contextlib.suppress(GameError):
            game.buy_card(choice)
        out.write(f"Player {player} buys card {card_name(choice)}\n\n")

    if player == game.num_players - 1:
        turn_num += 1
    game.end_turn()
    if not game.is_game_over():
        out.write(f"Player {game.whose_turn}'s turn number {turn_num}\n\n")
    return turn_num