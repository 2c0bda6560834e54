"""A two-player computer game: a Smithy strategy against an Adventurer one."""

from __future__ import annotations

import contextlib
import sys
from collections.abc import Sequence
from typing import TextIO

from dominion.cards import TREASURE_VALUES, Card, card_cost
from dominion.effects import play_card
from dominion.game import GameError, GameState, initialize_game

DEFAULT_KINGDOM = (
    Card.ADVENTURER,
    Card.GARDENS,
    Card.EMBARGO,
    Card.VILLAGE,
    Card.MINION,
    Card.MINE,
    Card.CUTPURSE,
    Card.SEA_HAG,
    Card.TRIBUTE,
    Card.SMITHY,
)

_MAX_COPIES = 2
USAGE = "Usage: playdom [integer random number seed]\n"


def _hand_money(state: GameState) -> int:
    return sum(TREASURE_VALUES.get(card, 0) for card in state.hand[state.whose_turn])


def _last_position(state: GameState, card: Card) -> int:
    hand = state.hand[state.whose_turn]
    return max((pos for pos, held in enumerate(hand) if held == card), default=-1)


def _play(state: GameState, hand_pos: int) -> None:
    with contextlib.suppress(GameError):
        play_card(state, hand_pos, -1, -1, -1)


def _buy(state: GameState, card: Card) -> None:
    with contextlib.suppress(GameError):
        state.buy_card(card)


def play_game(seed: int, out: TextIO | None = None) -> GameState:
    """Play a full game with the given seed, logging moves to ``out``.

    Returns the final game state.
    """
    out = sys.stdout if out is None else out
    out.write("Starting game.\n")
    state = initialize_game(2, DEFAULT_KINGDOM, seed)

    smithies = 0
    adventurers = 0
    while not state.is_game_over():
        money = _hand_money(state)
        smithy_pos = _last_position(state, Card.SMITHY)
        adventurer_pos = _last_position(state, Card.ADVENTURER)

        if state.whose_turn == 0:
            if smithy_pos != -1:
                out.write(f"0: smithy played from position {smithy_pos}\n")
                _play(state, smithy_pos)
                out.write("smithy played.\n")
                money = _hand_money(state)

            if money >= card_cost(Card.PROVINCE):
                out.write("0: bought province\n")
                _buy(state, Card.PROVINCE)
            elif money >= card_cost(Card.GOLD):
                out.write("0: bought gold\n")
                _buy(state, Card.GOLD)
            elif money >= card_cost(Card.SMITHY) and smithies < _MAX_COPIES:
                out.write("0: bought smithy\n")
                _buy(state, Card.SMITHY)
                smithies += 1
            elif money >= card_cost(Card.SILVER):
                out.write("0: bought silver\n")
                _buy(state, Card.SILVER)

            out.write("0: end turn\n")
            state.end_turn()
        else:
            if adventurer_pos != -1:
                out.write(f"1: adventurer played from position {adventurer_pos}\n")
                _play(state, adventurer_pos)
                money = _hand_money(state)

            if money >= card_cost(Card.PROVINCE):
                out.write("1: bought province\n")
                _buy(state, Card.PROVINCE)
            elif money >= card_cost(Card.ADVENTURER) and adventurers < _MAX_COPIES:
                out.write("1: bought adventurer\n")
                _buy(state, Card.ADVENTURER)
                adventurers += 1
            elif money >= card_cost(Card.GOLD):
                out.write("1: bought gold\n")
                _buy(state, Card.GOLD)
            elif money >= card_cost(Card.SILVER):
                out.write("1: bought silver\n")
                _buy(state, Card.SILVER)

            out.write("1: endTurn\n")
            state.end_turn()

    out.write("Finished game.\n")
    out.write(f"Player 0: {state.score_for(0)}\nPlayer 1: {state.score_for(1)}\n")
    return state


def main(argv: Sequence[str] | None = None) -> int:
    """Run a computer game seeded from the first argument."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        sys.stderr.write(USAGE)
        return 2
    try:
        seed = int(args[0])
    except ValueError:
        sys.stderr.write(USAGE)
        return 2
    play_game(seed)
    return 0


if __name__ == "__main__":
    sys.exit(main())