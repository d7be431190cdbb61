"""
cli.py - Command-line interface for FlipFour

Plays hot-seat games or games against the heuristic opponent in the
terminal, and benchmarks the engine.
"""

import argparse
import sys
import time
from typing import List, Optional

import numpy as np

from flipfour.ai.heuristic import HeuristicPlayer
from flipfour.debug import debug, DebugLevel
from flipfour.errors import ColumnFull, InvalidState, NoLegalMove
from flipfour.game.session import GameSession
from flipfour.game.state import GameState
from flipfour.utils import DIFFICULTIES, DEFAULT_DIFFICULTY, render_board_ascii

QUIT = -1
REMATCH = -2


class SimpleCLI:
    """Terminal front end driving a GameSession."""

    def __init__(self):
        self.session = GameSession()
        self.args = None

    def parse_args(self, argv: Optional[List[str]] = None) -> argparse.Namespace:
        """Parse command-line arguments and configure logging."""
        parser = argparse.ArgumentParser(description='FlipFour - Connect Four with flipping gravity')
        parser.add_argument('--debug', action='store_true', help='Shortcut for --debug-level debug')
        parser.add_argument('--debug-level', default='warning',
                            choices=[level.name.lower() for level in DebugLevel],
                            help='Logging level')
        parser.add_argument('--log-file', default=None, help='Also write log output to this file')

        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        play_parser = subparsers.add_parser('play', help='Play a game in the terminal')
        play_parser.add_argument('--difficulty', choices=sorted(DIFFICULTIES), default=DEFAULT_DIFFICULTY,
                                 help='Board size and number of blocked cells')
        play_parser.add_argument('--ai', action='store_true', help='Player 2 is the heuristic opponent')
        play_parser.add_argument('--seed-tokens', action='store_true',
                                 help='Start with random tokens on the board (not with --ai)')
        play_parser.add_argument('--player1', default='Player 1', help='Name of player 1')
        play_parser.add_argument('--player2', default=None, help='Name of player 2')

        benchmark_parser = subparsers.add_parser('benchmark', help='Benchmark engine performance')
        benchmark_parser.add_argument('--iterations', type=int, default=1000,
                                      help='Number of iterations for benchmarking')
        benchmark_parser.add_argument('--difficulty', choices=sorted(DIFFICULTIES), default=DEFAULT_DIFFICULTY)

        self.args = parser.parse_args(argv)

        if self.args.command == 'play' and self.args.ai and self.args.seed_tokens:
            parser.error('--seed-tokens cannot be combined with --ai')

        level = DebugLevel.DEBUG if self.args.debug else DebugLevel[self.args.debug_level.upper()]
        debug.configure(level=level, log_file=self.args.log_file)
        return self.args

    def run(self) -> None:
        """Run the command selected on the command line."""
        if not self.args:
            self.parse_args()

        if self.args.command == 'play':
            self.play_game()
        elif self.args.command == 'benchmark':
            self.benchmark()
        else:
            print("Please specify a command. Use --help for options.")
            sys.exit(1)

    def play_game(self) -> None:
        """Play games in the terminal until the user quits."""
        player2 = self.args.player2 or ('Computer' if self.args.ai else 'Player 2')
        snapshot = self.session.new_game(
            self.args.player1, player2, self.args.difficulty,
            seed_tokens=self.args.seed_tokens,
            ai_player=2 if self.args.ai else None,
        )
        print(f"Starting a {snapshot['difficulty']} game: {snapshot['player_names'][0]} (X) "
              f"vs {snapshot['player_names'][1]} (O)")
        print(f"Enter a column (0-{snapshot['cols'] - 1}). Gravity flips every 5 moves. "
              "'q' quits, 'r' starts a rematch.")
        self.show(snapshot)

        while True:
            if snapshot['game_over']:
                self.announce(snapshot)
                answer = input("Rematch? [y/N]: ").strip().lower()
                if answer != 'y':
                    return
                snapshot = self.session.rematch()
                self.show(snapshot)
                continue

            if snapshot['ai_player'] == snapshot['current_player']:
                print("Computer is thinking...")
                time.sleep(0.3)
                try:
                    snapshot = self.session.play_ai_turn()
                except NoLegalMove:
                    snapshot = self.session.snapshot()
                    continue
                print(f"Computer plays column {snapshot['last_move'][1]}")
                self.show(snapshot)
                continue

            move = self.get_human_move(snapshot)
            if move is None:
                continue
            if move == QUIT:
                print("Quitting game.")
                return
            if move == REMATCH:
                snapshot = self.session.rematch()
                print("Game restarted.")
                self.show(snapshot)
                continue

            try:
                snapshot = self.session.submit_column(move)
            except ColumnFull:
                print(f"Column {move} is full.")
                continue
            except InvalidState as e:
                print(f"Move rejected: {e}")
                continue
            self.show(snapshot)

    def get_human_move(self, snapshot: dict) -> Optional[int]:
        """
        Read a move from the player to move.

        Returns:
            Column index, QUIT, REMATCH, or None if the input was not understood
        """
        name = snapshot['player_names'][snapshot['current_player'] - 1]
        user_input = input(f"{name}'s move: ").strip().lower()

        if user_input == 'q':
            return QUIT
        if user_input == 'r':
            return REMATCH

        try:
            move = int(user_input)
        except ValueError:
            print("Invalid input. Please enter a column number, 'q' or 'r'.")
            return None

        if not 0 <= move < snapshot['cols']:
            print(f"Column must be between 0 and {snapshot['cols'] - 1}.")
            return None
        return move

    @staticmethod
    def show(snapshot: dict) -> None:
        grid = np.array(snapshot['board'], dtype=np.int8)
        print(render_board_ascii(grid, snapshot['gravity_down'], snapshot['winning_line']))
        print(f"Turn {snapshot['turn_count']}, gravity {'down' if snapshot['gravity_down'] else 'up'}")

    @staticmethod
    def announce(snapshot: dict) -> None:
        print("Game over!")
        if snapshot['winner']:
            print(f"{snapshot['player_names'][snapshot['winner'] - 1]} wins! Finish him!")
        else:
            print("It's a draw!")

    def benchmark(self) -> None:
        """Benchmark the FlipFour engine."""
        iterations = self.args.iterations
        difficulty = self.args.difficulty
        rng = np.random.default_rng()
        print(f"Running benchmark with {iterations} iterations on {difficulty}...")

        debug.start_timer("game_init")
        for _ in range(iterations):
            GameState("A", "B", difficulty, rng=rng)
        init_time = debug.end_timer("game_init", "benchmark")
        print(f"Game creation: {init_time:.6f} seconds total, "
              f"{init_time / iterations * 1000:.6f} ms per game")

        debug.start_timer("moves")
        state = GameState("A", "B", difficulty, rng=rng)
        moves_made = 0
        for _ in range(iterations):
            if state.game_over:
                state.rematch()
            try:
                state.submit_column(int(rng.integers(0, state.board.cols)))
                moves_made += 1
            except ColumnFull:
                pass
        moves_time = debug.end_timer("moves", "benchmark")
        print(f"Making {moves_made} moves: {moves_time:.6f} seconds total, "
              f"{moves_time / max(moves_made, 1) * 1000:.6f} ms per move")

        debug.start_timer("heuristic_games")
        games = max(iterations // 10, 1)
        total_moves = 0
        wins = {0: 0, 1: 0, 2: 0}
        for _ in range(games):
            state = GameState("A", "B", difficulty, rng=rng)
            players = {1: HeuristicPlayer(1, rng=rng), 2: HeuristicPlayer(2, rng=rng)}
            while not state.game_over:
                state.submit_column(players[state.current_player].choose_column(state))
                total_moves += 1
            wins[state.winner] += 1
        games_time = debug.end_timer("heuristic_games", "benchmark")
        print(f"Played {games} heuristic games with {total_moves} moves: "
              f"{games_time / games * 1000:.6f} ms per game "
              f"(player 1: {wins[1]}, player 2: {wins[2]}, draws: {wins[0]})")


def main(argv: Optional[List[str]] = None):
    """Main entry point for the CLI."""
    cli = SimpleCLI()
    cli.parse_args(argv)
    cli.run()


if __name__ == "__main__":
    main()
