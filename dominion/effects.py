"""Action card effects and playing a card from the hand."""

from __future__ import annotations

import contextlib
from collections.abc import Callable

from dominion.cards import TREASURE_VALUES, UNUSED_PILE, Card, Phase, card_cost
from dominion.game import Destination, GameError, GameState

_FEAST_ALLOWANCE = 5
_MINION_REDRAW = 4
_HAND_LIMIT_FOR_MINION = 4
_VICTORY_CARDS = frozenset(
    {Card.ESTATE, Card.DUCHY, Card.PROVINCE, Card.GARDENS, Card.GREAT_HALL}
)
_NO_CARD = -1


def _draw(state: GameState, player: int, times: int = 1) -> None:
    """Draw up to ``times`` cards, ignoring draws that find nothing."""
    for _ in range(times):
        with contextlib.suppress(GameError):
            state.draw_card(player)


def _gain(state: GameState, card: int, player: int, destination: Destination) -> None:
    """Gain ``card`` if the supply still has one."""
    with contextlib.suppress(GameError):
        state.gain_card(card, player, destination)


def _discard_first(state: GameState, player: int, card: int, trash: bool = False) -> None:
    """Discard the first copy of ``card`` in the player's hand, if any."""
    hand = state.hand[player]
    if card in hand:
        state.discard_card(hand.index(card), player, trash)


def _discard_hand(state: GameState, player: int, hand_pos: int) -> None:
    """Move the player's whole hand to the played pile."""
    hand = state.hand[player]
    while hand:
        state.discard_card(max(0, min(hand_pos, len(hand) - 1)), player)


def _others(state: GameState, player: int) -> list[int]:
    return [other for other in range(state.num_players) if other != player]


def _adventurer(state: GameState, player: int, c1: int, c2: int, c3: int, hand_pos: int) -> None:
    hand = state.hand[player]
    revealed: list[int] = []
    treasures = 0
    while treasures < 2:
        try:
            card = state.draw_card(player)
        except GameError:
            break
        if card in TREASURE_VALUES:
            treasures += 1
        else:
            hand.pop()
            revealed.append(card)
    state.discard[player].extend(reversed(revealed))


def _council_room(state: GameState, player: int, c1: int, c2: int, c3: int, hand_pos: int) -> None:
    _draw(state, player, 4)
    state.num_buys += 1
    for other in _others(state, player):
        _draw(state, other)
    state.discard_card(hand_pos, player)


def _feast(state: GameState, player: int, c1: int, c2: int, c3: int, hand_pos: int) -> None:
    if state.supply_count(c1) <= 0:
        raise GameError("none of that card left in the supply")
    if card_cost(c1) > _FEAST_ALLOWANCE:
        raise GameError("that card is too expensive")
    state.coins = _FEAST_ALLOWANCE
    state.gain_card(c1, player, Destination.DISCARD)


def _mine(state: GameState, player: int, c1: int, c2: int, c3: int, hand_pos: int) -> None:
    trashed = state.hand_card(c1)
    if not Card.COPPER <= trashed <= Card.GOLD:
        raise GameError("mine must trash a treasure")
    if not Card.CURSE <= c2 <= Card.TREASURE_MAP:
        raise GameError(f"unknown card {c2!r}")
    if card_cost(trashed) + 3 > card_cost(c2):
        raise GameError("mine cannot gain that card")
    _gain(state, c2, player, Destination.HAND)
    state.discard_card(hand_pos, player)
    _discard_first(state, player, trashed)


def _remodel(state: GameState, player: int, c1: int, c2: int, c3: int, hand_pos: int) -> None:
    trashed = state.hand_card(c1)
    try:
        gained_cost = card_cost(c2)
    except ValueError:
        raise GameError(f"unknown card {c2!r}") from None
    if card_cost(trashed) + 2 > gained_cost:
        raise GameError("remodel cannot gain that card")
    _gain(state, c2, player, Destination.DISCARD)
    state.discard_card(hand_pos, player)
    _discard_first(state, player, trashed)


def _smithy(state: GameState, player: int, c1: int, c2: int, c3: int, hand_pos: int) -> None:
    _draw(state, player, 3)
    state.discard_card(hand_pos, player)


def _village(state: GameState, player: int, c1: int, c2: int, c3: int, hand_pos: int) -> None:
    _draw(state, player)
    state.num_actions += 2
    state.discard_card(hand_pos, player)


def _baron(state: GameState, player: int, c1: int, c2: int, c3: int, hand_pos: int) -> None:
    state.num_buys += 1
    hand = state.hand[player]
    if c1 > 0 and Card.ESTATE in hand:
        state.coins += 4
        state.discard[player].append(hand.pop(hand.index(Card.ESTATE)))
    elif state.supply_count(Card.ESTATE) > 0:
        state.gain_card(Card.ESTATE, player, Destination.DISCARD)
        # The estate pile is charged twice for this gain.
        state.supply[Card.ESTATE] -= 1


def _great_hall(state: GameState, player: int, c1: int, c2: int, c3: int, hand_pos: int) -> None:
    _draw(state, player)
    state.num_actions += 1
    state.discard_card(hand_pos, player)


def _minion(state: GameState, player: int, c1: int, c2: int, c3: int, hand_pos: int) -> None:
    state.num_actions += 1
    state.discard_card(hand_pos, player)
    if c1:
        state.coins += 2
    elif c2:
        _discard_hand(state, player, hand_pos)
        _draw(state, player, _MINION_REDRAW)
        for other in _others(state, player):
            if len(state.hand[other]) > _HAND_LIMIT_FOR_MINION:
                _discard_hand(state, other, hand_pos)
                _draw(state, other, _MINION_REDRAW)


def _steward(state: GameState, player: int, c1: int, c2: int, c3: int, hand_pos: int) -> None:
    if c1 == 1:
        _draw(state, player, 2)
    elif c1 == 2:
        state.coins += 2
    else:
        state.discard_card(c2, player, trash=True)
        state.discard_card(c3, player, trash=True)
    state.discard_card(hand_pos, player)


def _tribute(state: GameState, player: int, c1: int, c2: int, c3: int, hand_pos: int) -> None:
    next_player = (player + 1) % state.num_players
    deck = state.deck[next_player]
    discard = state.discard[next_player]
    revealed = [_NO_CARD, _NO_CARD]
    if len(deck) + len(discard) <= 1:
        if deck:
            revealed[0] = deck.pop()
        elif discard:
            revealed[0] = discard.pop()
    else:
        for slot in range(2):
            if not deck:
                deck.extend(discard)
                discard.clear()
                state.shuffle(next_player)
            revealed[slot] = deck.pop()

    if revealed[0] == revealed[1] and revealed[1] != _NO_CARD:
        state.played_cards.append(revealed[1])
        revealed[1] = _NO_CARD

    for card in revealed:
        if card in TREASURE_VALUES:
            state.coins += 2
        elif card in _VICTORY_CARDS:
            _draw(state, player, 2)
        else:
            state.num_actions += 2


def _ambassador(state: GameState, player: int, c1: int, c2: int, c3: int, hand_pos: int) -> None:
    if not 0 <= c2 <= 2:
        raise GameError("ambassador returns 0 to 2 cards")
    if c1 == hand_pos:
        raise GameError("ambassador cannot reveal itself")
    revealed = state.hand_card(c1)
    hand = state.hand[player]
    # Positions are matched against the revealed card's value.
    matches = sum(
        1 for pos, _ in enumerate(hand) if pos != hand_pos and pos == revealed and pos != c1
    )
    if matches < c2:
        raise GameError("not enough copies in hand to return")

    state.supply[revealed] += c2
    for other in _others(state, player):
        _gain(state, revealed, other, Destination.DISCARD)
    state.discard_card(hand_pos, player)
    for _ in range(c2):
        current = hand[c1] if 0 <= c1 < len(hand) else _NO_CARD
        _discard_first(state, player, current, trash=True)


def _cutpurse(state: GameState, player: int, c1: int, c2: int, c3: int, hand_pos: int) -> None:
    state.update_coins(player, 2)
    for other in _others(state, player):
        _discard_first(state, other, Card.COPPER)
    state.discard_card(hand_pos, player)


def _embargo(state: GameState, player: int, c1: int, c2: int, c3: int, hand_pos: int) -> None:
    if state.supply_count(c1) == UNUSED_PILE:
        raise GameError("that pile is not in the game")
    state.coins += 2
    state.embargo_tokens[c1] += 1
    state.discard_card(hand_pos, player, trash=True)


def _outpost(state: GameState, player: int, c1: int, c2: int, c3: int, hand_pos: int) -> None:
    state.outpost_played += 1
    state.discard_card(hand_pos, player)


def _salvager(state: GameState, player: int, c1: int, c2: int, c3: int, hand_pos: int) -> None:
    state.num_buys += 1
    if c1:
        state.coins += card_cost(state.hand_card(c1))
        state.discard_card(c1, player, trash=True)
    state.discard_card(hand_pos, player)


def _sea_hag(state: GameState, player: int, c1: int, c2: int, c3: int, hand_pos: int) -> None:
    for other in _others(state, player):
        deck = state.deck[other]
        if deck:
            state.discard[other].append(deck.pop())
        deck.append(Card.CURSE)


def _treasure_map(state: GameState, player: int, c1: int, c2: int, c3: int, hand_pos: int) -> None:
    hand = state.hand[player]
    partner = next(
        (pos for pos, card in enumerate(hand) if card == Card.TREASURE_MAP and pos != hand_pos),
        None,
    )
    if partner is None:
        raise GameError("no second treasure map in hand")
    for pos in sorted((hand_pos, partner), reverse=True):
        state.discard_card(pos, player, trash=True)
    for _ in range(4):
        _gain(state, Card.GOLD, player, Destination.DECK)


_Effect = Callable[[GameState, int, int, int, int, int], None]

_EFFECTS: dict[int, _Effect] = {
    Card.ADVENTURER: _adventurer,
    Card.COUNCIL_ROOM: _council_room,
    Card.FEAST: _feast,
    Card.MINE: _mine,
    Card.REMODEL: _remodel,
    Card.SMITHY: _smithy,
    Card.VILLAGE: _village,
    Card.BARON: _baron,
    Card.GREAT_HALL: _great_hall,
    Card.MINION: _minion,
    Card.STEWARD: _steward,
    Card.TRIBUTE: _tribute,
    Card.AMBASSADOR: _ambassador,
    Card.CUTPURSE: _cutpurse,
    Card.EMBARGO: _embargo,
    Card.OUTPOST: _outpost,
    Card.SALVAGER: _salvager,
    Card.SEA_HAG: _sea_hag,
    Card.TREASURE_MAP: _treasure_map,
}


def card_effect(
    state: GameState,
    card: int,
    choice1: int = 0,
    choice2: int = 0,
    choice3: int = 0,
    hand_pos: int = 0,
) -> None:
    """Apply the effect of ``card`` for the current player.

    ``hand_pos`` is the position of the played card in the hand. Raises
    GameError when the card cannot be played with these choices.
    """
    effect = _EFFECTS.get(card)
    if effect is None:
        raise GameError(f"card {card!r} has no playable effect")
    effect(state, state.whose_turn, choice1, choice2, choice3, hand_pos)


def play_card(
    state: GameState, hand_pos: int, choice1: int = 0, choice2: int = 0, choice3: int = 0
) -> None:
    """Play the action card at ``hand_pos`` from the current player's hand."""
    if state.phase != Phase.ACTION:
        raise GameError("cards can only be played in the action phase")
    if state.num_actions < 1:
        raise GameError("no actions left")
    card = state.hand_card(hand_pos)
    if not Card.ADVENTURER <= card <= Card.TREASURE_MAP:
        raise GameError("only action cards can be played")
    card_effect(state, card, choice1, choice2, choice3, hand_pos)
    state.num_actions -= 1
    state.update_coins(state.whose_turn, 0)