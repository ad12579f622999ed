"""
cli.py - Command-line interface for gravity4

This module provides a terminal front end for playing gravity4 against a
friend or the computer, and a benchmark of the AI tiers. All input parsing
happens here; the engine only ever sees integer columns.
"""

import argparse
import random
import sys
import time
from typing import List, Optional

from gravity4.ai.strategy import choose_move
from gravity4.config import AI_DELAY_MS, DIFFICULTY_PRESETS, get_preset
from gravity4.debug import debug, DebugLevel
from gravity4.game.rules import apply_move, new_game
from gravity4.session import GameSession, GameSettings
from gravity4.utils import AITier, GameMode, GravityMode, Player

QUIT = "q"
RESTART = "r"


class SimpleCLI:
    """Simple command-line interface for gravity4."""

    def __init__(self, argv: Optional[List[str]] = None):
        self.argv = argv
        self.args = None
        self.session: Optional[GameSession] = None

    def build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(description='Connect Four with reversing gravity')
        parser.add_argument('--debug-level', default=None,
                            choices=[level.name.lower() for level in DebugLevel],
                            help='Logging level')

        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        play_parser = subparsers.add_parser('play', help='Play a game interactively')
        play_parser.add_argument('--difficulty', choices=sorted(DIFFICULTY_PRESETS), default='easy',
                                 help='Board size preset')
        play_parser.add_argument('--mode', choices=[m.value for m in GravityMode], default='normal',
                                 help="'inverse' reverses gravity every 5 moves")
        play_parser.add_argument('--opponent', choices=[m.value for m in GameMode], default='ai',
                                 help='Second player')
        play_parser.add_argument('--ai-level', choices=[t.value for t in AITier], default='medium',
                                 help='Computer strength')
        play_parser.add_argument('--name', default='', help='Name of player 1')
        play_parser.add_argument('--name2', default='', help='Name of player 2')
        play_parser.add_argument('--debug', action='store_true', help='Enable debug logging')

        benchmark_parser = subparsers.add_parser('benchmark', help='Time the AI tiers')
        benchmark_parser.add_argument('--games', type=int, default=5,
                                      help='AI-vs-AI games per tier')
        benchmark_parser.add_argument('--difficulty', choices=sorted(DIFFICULTY_PRESETS),
                                      default='easy', help='Board size preset')
        benchmark_parser.add_argument('--seed', type=int, default=None, help='Random seed')

        return parser

    def parse_args(self) -> None:
        """Parse command-line arguments and apply the logging level."""
        self.args = self.build_parser().parse_args(self.argv)

        if getattr(self.args, 'debug', False):
            debug.configure(level=DebugLevel.DEBUG)
        elif self.args.debug_level:
            debug.set_from_string(self.args.debug_level)

    def run(self) -> int:
        """Run the CLI based on the parsed arguments; returns an exit code."""
        if not self.args:
            self.parse_args()

        if self.args.command == 'play':
            self.play_game()
        elif self.args.command == 'benchmark':
            self.benchmark()
        else:
            print("Please specify a command. Use --help for options.")
            return 1
        return 0

    def play_game(self) -> None:
        """Play a game interactively."""
        settings = GameSettings.from_labels(difficulty=self.args.difficulty,
                                            mode=self.args.mode,
                                            game_mode=self.args.opponent,
                                            ai_level=self.args.ai_level,
                                            name_one=self.args.name,
                                            name_two=self.args.name2)
        self.session = GameSession(settings)
        state = self.session.state

        print(f"Starting a {state.rows}x{state.cols} game "
              f"({settings.gravity_mode.value} gravity).")
        print(f"Enter a column number (0-{state.cols - 1}), '{QUIT}' to quit, '{RESTART}' to restart.")
        print(self.session.state.render())

        while not self.session.state.game_over:
            if self.session.ai_pending:
                print("AI is thinking...")
                time.sleep(AI_DELAY_MS / 1000.0)
                column = self.session.ai_move()
                if column is None:
                    print("AI has no move left.")
                    break
                print(f"AI plays column {column}")
            else:
                command = self.get_human_move()
                if command == QUIT:
                    print("Quitting game.")
                    return
                if command == RESTART:
                    self.session.rematch()
                    print("Game restarted.")
                    print(self.session.state.render())
                    continue
                if not self.session.play(command):
                    print(f"Column {command} cannot take a token.")
                    continue

            print(self.session.state.render())
            self.print_gravity_notice()

        message = self.session.end_message()
        if message:
            print(message)

    def print_gravity_notice(self) -> None:
        state = self.session.state
        if state.gravity_mode == GravityMode.REVERSING and not state.game_over:
            print(f"Gravity: {state.gravity.name} (turn {state.turn_count})")

    def get_human_move(self):
        """
        Read a move from the current human player.

        Returns:
            A column index, QUIT or RESTART
        """
        state = self.session.state
        name = self.session.display_name(state.current_player)
        while True:
            try:
                user_input = input(f"{name} ({state.current_player}) move: ").strip().lower()
            except EOFError:
                return QUIT

            if user_input in (QUIT, RESTART):
                return user_input

            try:
                column = int(user_input)
            except ValueError:
                print("Invalid input. Please enter a column number or command.")
                continue

            if 0 <= column < state.cols:
                return column
            print(f"Column must be between 0 and {state.cols - 1}.")

    def benchmark(self) -> None:
        """Play each AI tier against a random mover and report timings."""
        rng = random.Random(self.args.seed)
        preset = get_preset(self.args.difficulty)

        for tier in AITier:
            wins = 0
            moves = 0
            debug.start_timer(f"benchmark_{tier.value}")
            for _ in range(self.args.games):
                state = new_game(preset.rows, preset.cols, preset.prefill,
                                 ai_tier=tier, rng=rng)
                while not state.game_over:
                    if state.current_player == Player.TWO:
                        column = choose_move(state, tier, rng)
                    else:
                        column = choose_move(state, AITier.EASY, rng)
                    if column is None or not apply_move(state, column):
                        break
                    moves += 1
                if state.winner == Player.TWO:
                    wins += 1
            elapsed = debug.end_timer(f"benchmark_{tier.value}", "cli") or 0.0

            per_move = elapsed / moves * 1000 if moves else 0.0
            print(f"{tier.name:<6} won {wins}/{self.args.games} vs random, "
                  f"{moves} moves in {elapsed:.3f}s ({per_move:.3f} ms per move)")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    return SimpleCLI(argv).run()


if __name__ == "__main__":
    sys.exit(main())
