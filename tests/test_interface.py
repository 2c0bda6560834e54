import io

import pytest

from dominion.cards import (
    COPPER_VALUE,
    GOLD_VALUE,
    NUM_KINGDOM_CARDS,
    SILVER_VALUE,
    UNUSED_PILE,
    Card,
)
from dominion.game import GameError, GameState, initialize_game
from dominion.interface import (
    add_card_to_hand,
    count_hand_coins,
    execute_bot_turn,
    format_deck,
    format_discard,
    format_hand,
    format_played,
    format_scores,
    format_state,
    format_supply,
    help_text,
    select_kingdom_cards,
)
from dominion.rngs import RandomStreams

KINGDOM = [
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
]


@pytest.fixture
def game():
    return initialize_game(2, KINGDOM, 1)


def test_format_hand_lists_cards():
    state = GameState(num_players=2)
    state.hand[0] = [Card.COPPER, Card.SMITHY]
    text = format_hand(state, 0)
    lines = text.split("\n")
    assert lines[0] == "Player 0's hand:"
    assert lines[1] == "#  Card"
    assert lines[2] == "0  Copper       "
    assert lines[3].startswith("1  Smithy")
    assert text.endswith("\n\n")


def test_format_hand_empty_has_no_header():
    state = GameState(num_players=2)
    assert format_hand(state, 1) == "Player 1's hand:\n\n"


def test_format_deck_and_discard_titles(game):
    deck_text = format_deck(game, 1)
    assert deck_text.startswith("Player 1's deck: \n#  Card\n")
    assert len(deck_text.splitlines()) == len(game.deck[1]) + 3
    discard_text = format_discard(game, 0)
    assert discard_text == "Player 0's discard: \n\n"


def test_format_played_rows_have_trailing_space():
    state = GameState(num_players=2)
    state.played_cards = [Card.VILLAGE]
    rows = format_played(state, 0).splitlines()
    assert rows[0] == "Player 0's played cards: "
    assert rows[2].startswith("0  Village")
    assert rows[2].endswith(" ")


def test_format_supply_skips_unused_piles(game):
    text = format_supply(game)
    lines = text.splitlines()
    in_game = sum(1 for count in game.supply if count != UNUSED_PILE)
    assert lines[0] == "#   Card          Cost   Copies"
    assert len(lines) == in_game + 2
    assert not any("Treasure Map" in line for line in lines)
    assert any(line.startswith("4   Copper") for line in lines)


def test_format_state_shows_phase_and_counts(game):
    text = format_state(game)
    assert text.startswith(f"Player {game.whose_turn}:\n")
    assert "Action phase\n" in text
    assert f"{game.coins} coins\n" in text
    assert f"{game.num_buys} buys\n" in text


def test_format_scores_one_line_per_player(game):
    lines = format_scores(game).splitlines()
    assert len(lines) == game.num_players
    assert lines[1] == f"Player 1 has a score of {game.score_for(1)}"


def test_help_text_lists_commands():
    text = help_text()
    assert text.startswith("Commands are: \n")
    for command in ("add", "buy", "init", "play", "resign", "supp", "whos", "exit"):
        assert f"  {command}" in text


def test_add_card_to_hand_accepts_kingdom_card(game):
    before = len(game.hand[0])
    add_card_to_hand(game, 0, Card.SMITHY)
    assert len(game.hand[0]) == before + 1
    assert game.hand[0][-1] == Card.SMITHY


@pytest.mark.parametrize("card", [Card.COPPER, Card.CURSE, -1, len(Card)])
def test_add_card_to_hand_rejects_non_kingdom(game, card):
    before = list(game.hand[0])
    with pytest.raises(GameError):
        add_card_to_hand(game, 0, card)
    assert game.hand[0] == before


def test_select_kingdom_cards_distinct_and_deterministic():
    cards = select_kingdom_cards(5)
    assert len(cards) == NUM_KINGDOM_CARDS
    assert len(set(cards)) == NUM_KINGDOM_CARDS
    assert all(card >= Card.ADVENTURER for card in cards)
    assert select_kingdom_cards(5) == cards


def test_select_kingdom_cards_uses_given_stream():
    rng = RandomStreams()
    cards = select_kingdom_cards(9, rng)
    assert rng.stream == 1
    assert cards == select_kingdom_cards(9)


def test_count_hand_coins():
    state = GameState(num_players=2)
    state.hand[0] = [Card.COPPER, Card.SILVER, Card.GOLD, Card.ESTATE]
    assert count_hand_coins(state, 0) == COPPER_VALUE + SILVER_VALUE + GOLD_VALUE
    assert count_hand_coins(state, 1) == 0


def test_bot_buys_province_with_enough_coins(game):
    game.hand[0] = [Card.GOLD] * 3
    game.update_coins(0)
    provinces = game.supply_count(Card.PROVINCE)
    out = io.StringIO()
    turn = execute_bot_turn(game, 0, 0, out)
    assert turn == 0
    assert game.supply_count(Card.PROVINCE) == provinces - 1
    assert Card.PROVINCE in game.discard[0]
    assert game.whose_turn == 1
    text = out.getvalue()
    assert "Executing Bot Player 0 Turn Number 0" in text
    assert "Player 0 buys card Province\n\n" in text
    assert "Player 1's turn number 0\n\n" in text


def test_bot_last_player_advances_turn_number(game):
    game.end_turn()
    before = 4
    out = io.StringIO()
    after = execute_bot_turn(game, 1, before, out)
    assert after == before + 1
    assert game.whose_turn == 0


def test_bot_without_money_buys_nothing(game):
    game.hand[0] = [Card.ESTATE] * 5
    game.update_coins(0)
    supply_before = list(game.supply)
    out = io.StringIO()
    execute_bot_turn(game, 0, 0, out)
    assert game.supply == supply_before
    assert "buys card" not in out.getvalue()