# dominion

A Python model of the Dominion deck-building card game. Every game is
reproducible from its random seed.

## Modules

- `dominion.rngs`: `RandomStreams`, a Lehmer random number generator with 256
  independent streams (`random`, `select_stream`, `put_seed`, `get_seed`,
  `plant_seeds`, `self_test`). `find_value(seed, target)` counts draws from
  stream 1 until `floor(random() * 1e9)` equals `target`, and raises
  `ValueError` if it never can.
- `dominion.cards`: the `Card` and `Phase` enumerations, with `card_cost`,
  `card_name`, `display_cost` and `phase_name`, and game-wide limits such as
  `MAX_PLAYERS`, `MAX_HAND` and `MAX_DECK`.
- `dominion.game`: `GameState` and `initialize_game(num_players,
  kingdom_cards, seed)`. The state supports shuffling, drawing, gaining
  (to discard, deck or hand, see `Destination`), discarding, buying, ending
  turns, scoring (`score_for`) and picking winners (`get_winners`).
- `dominion.effects`: `card_effect` and `play_card` for the nineteen action
  cards (Gardens has no effect to play).
- `dominion.interface`: text views of a game (`format_hand`, `format_deck`,
  `format_discard`, `format_played`, `format_supply`, `format_state`,
  `format_scores`, `help_text`), `add_card_to_hand`, `select_kingdom_cards`,
  `count_hand_coins` and `execute_bot_turn`, a bot that buys Province, Duchy
  (once the Provinces are gone), Gold or Silver.
- `dominion.playdom`: `play_game(seed, out)`, a scripted match between a
  Smithy player and an Adventurer player.
- `dominion.player`: `PlayerSession`, an interactive command console.

## Installation

```
pip install .
```

Install the `test` extra to get the test tools:

```
pip install ".[test]"
```

## Command line

Play an automatic two-player game. The argument is the random seed:

```
dominion-playdom 42
```

Without a valid integer seed it prints its usage line and exits with
status 2.

Start the interactive console. The seed must be a positive integer;
otherwise the usage line is printed:

```
dominion-player 7
```

Commands are read from standard input at the `$ ` prompt. Type `help` to see
them: `add`, `buy`, `end`, `init`, `num`, `play`, `resign`, `show`, `stat`,
`supp`, `whos` and `exit`. Commands of four letters or more are recognised by
their first four letters. `init 3 1` starts a game with three players, the
last of which is a bot. The game stops and shows the scores and winners once
it is over.

## Library use

```python
from dominion.cards import Card
from dominion.game import initialize_game
from dominion.effects import play_card

kingdom = [Card.ADVENTURER, Card.GARDENS, Card.EMBARGO, Card.VILLAGE, Card.MINION,
           Card.MINE, Card.CUTPURSE, Card.SEA_HAG, Card.TRIBUTE, Card.SMITHY]
state = initialize_game(2, kingdom, seed=1)
print(state.num_hand_cards(), state.supply_count(Card.PROVINCE))  # 5 8
```

Moves that are not allowed raise `GameError` from `dominion.game`.

## What it does not do

- Games cannot be saved or loaded; a game lives only in memory.
- The console always uses the fixed kingdom of `dominion.playdom.DEFAULT_KINGDOM`;
  `select_kingdom_cards` is available to library users but the console does
  not call it.
- There is no graphical or networked play; the console is text on standard
  input and output.