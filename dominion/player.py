"""Interactive command-line game with optional computer players."""

from __future__ import annotations

import contextlib
import sys
from collections.abc import Callable, Iterable, Sequence
from typing import TextIO

from dominion.cards import MAX_PLAYERS, card_name
from dominion.effects import play_card
from dominion.game import GameError, initialize_game
from dominion.interface import (
    add_card_to_hand,
    execute_bot_turn,
    format_deck,
    format_discard,
    format_hand,
    format_played,
    format_scores,
    format_state,
    format_supply,
    help_text,
)
from dominion.playdom import DEFAULT_KINGDOM

USAGE = "Usage: player [integer random number seed]\n"
INTRO = 'Please enter a command or "help" for commands\n'
PROMPT = "$ "
_UNUSED = -1
_NUM_ARGS = 4


def _matches(command: str, keyword: str) -> bool:
    """Compare on at most four characters; shorter keywords must match whole."""
    if len(keyword) >= 4:
        return command[:4] == keyword[:4]
    return command == keyword


def _parse(line: str) -> tuple[str, list[int]]:
    """Split a command line into its word and up to four integer arguments."""
    tokens = line.split()
    command = tokens[0] if tokens else ""
    args = [_UNUSED] * _NUM_ARGS
    for index, token in enumerate(tokens[1 : _NUM_ARGS + 1]):
        try:
            args[index] = int(token)
        except ValueError:
            break
    return command, args


class PlayerSession:
    """One interactive game, driven by lines of commands."""

    def __init__(self, seed: int, out: TextIO | None = None) -> None:
        if seed <= 0:
            raise ValueError("the random seed must be a positive integer")
        self.seed = seed
        self.out = sys.stdout if out is None else out
        self.game = initialize_game(2, DEFAULT_KINGDOM, seed)
        self.is_bot = [False] * MAX_PLAYERS
        self.turn_num = 0
        self.game_started = False
        self._commands: list[tuple[str, Callable[[int, list[int]], bool]]] = [
            ("add", self._add),
            ("buy", self._buy),
            ("end", self._end),
            ("exit", self._exit),
            ("help", self._help),
            ("init", self._init),
            ("num", self._num),
            ("play", self._play),
            ("resi", self._resign),
            ("show", self._show),
            ("stat", self._stat),
            ("supp", self._supply),
            ("whos", self._whos),
        ]

    def _write(self, text: str) -> None:
        self.out.write(text)

    def handle(self, line: str) -> bool:
        """Carry out one command line; return False when the session ends."""
        command, args = _parse(line)
        player = self.game.whose_turn
        for keyword, action in self._commands:
            if _matches(command, keyword):
                return action(player, args)
        return True

    def run(self, lines: Iterable[str]) -> None:
        """Play until the game ends, a command stops it, or input runs out."""
        self._write(INTRO)
        source = iter(lines)
        while True:
            if self.game_started and self.game.is_game_over():
                self._report_final()
                return
            current = self.game.whose_turn
            if self.is_bot[current]:
                self.turn_num = execute_bot_turn(self.game, current, self.turn_num, self.out)
                continue
            self._write(PROMPT)
            line = next(source, None)
            if line is None or not self.handle(line):
                return

    def _report_final(self) -> None:
        game = self.game
        self._write(format_scores(game))
        winners = game.get_winners()
        self._write(f"After {self.turn_num} turns, the winner(s) are:\n")
        for player in winners:
            self._write(f"Player {player}\n")
        for player in range(game.num_players):
            self._write(format_hand(game, player))
            self._write(format_played(game, player))
            self._write(format_discard(game, player))
            self._write(format_deck(game, player))

    def _add(self, player: int, args: list[int]) -> bool:
        with contextlib.suppress(GameError):
            add_card_to_hand(self.game, player, args[0])
        self._write(f"Player {player} adds {card_name(args[0])} to their hand\n\n")
        return True

    def _buy(self, player: int, args: list[int]) -> bool:
        card = args[0]
        try:
            self.game.buy_card(card)
        except (GameError, ValueError):
            self._write(f"Player {player} cannot buy card {card}, {card_name(card)}\n\n")
        else:
            self._write(f"Player {player} buys card {card}, {card_name(card)}\n\n")
        return True

    def _end(self, player: int, args: list[int]) -> bool:
        if self.game_started:
            if player == self.game.num_players - 1:
                self.turn_num += 1
            self.game.end_turn()
            self._write(f"Player {self.game.whose_turn}'s turn number {self.turn_num}\n\n")
        return True

    def _exit(self, player: int, args: list[int]) -> bool:
        return False

    def _help(self, player: int, args: list[int]) -> bool:
        self._write(help_text())
        return True

    def _init(self, player: int, args: list[int]) -> bool:
        num_players, num_bots = args[0], args[1]
        for bot in range(num_players - num_bots, num_players):
            if 0 <= bot < MAX_PLAYERS:
                self.is_bot[bot] = True
        try:
            game = initialize_game(num_players, DEFAULT_KINGDOM, self.seed)
        except GameError:
            self._write("\n")
            return True
        self._write("\n")
        self.game = game
        self.game_started = True
        self._write(f"Player {game.whose_turn}'s turn number {self.turn_num}\n\n")
        return True

    def _num(self, player: int, args: list[int]) -> bool:
        self._write(f"There are {self.game.num_hand_cards()} cards in your hand.\n")
        return True

    def _play(self, player: int, args: list[int]) -> bool:
        hand_pos = args[0]
        try:
            card = self.game.hand_card(hand_pos)
            play_card(self.game, hand_pos, args[1], args[2], args[3])
        except (GameError, ValueError, IndexError):
            self._write(f"Player {player} cannot play card {hand_pos}\n\n")
        else:
            self._write(f"Player {player} plays {card_name(card)}\n\n")
        return True

    def _resign(self, player: int, args: list[int]) -> bool:
        self.game.end_turn()
        self._write(format_scores(self.game))
        return False

    def _show(self, player: int, args: list[int]) -> bool:
        if self.game_started:
            self._write(format_hand(self.game, player))
            self._write(format_played(self.game, player))
        return True

    def _stat(self, player: int, args: list[int]) -> bool:
        if self.game_started:
            self._write(format_state(self.game))
        return True

    def _supply(self, player: int, args: list[int]) -> bool:
        self._write(format_supply(self.game))
        return True

    def _whos(self, player: int, args: list[int]) -> bool:
        self._write(f"Player {self.game.whose_turn}'s turn\n")
        return True


def _parse_seed(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Start an interactive game seeded from the only argument."""
    args = sys.argv[1:] if argv is None else list(argv)
    seed = _parse_seed(args[0]) if len(args) == 1 else 0
    if seed <= 0:
        sys.stdout.write(USAGE)
        return 0
    PlayerSession(seed).run(sys.stdin)
    return 0


if __name__ == "__main__":
    sys.exit(main())