#!/usr/bin/env python3
"""Play many games with one strategy and report how it did.

Features:
  - Draws secrets from the word list with a fixed seed.
  - Optionally spreads the games over several processes.
  - Outputs a summary table, CSV, JSON and a guess-count histogram.
"""

from __future__ import annotations

import argparse
import csv
import json
import random
import sys
import time as _time_mod
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import asdict, dataclass, field
from datetime import datetime
from pathlib import Path

import numpy as np

from lexicon import Lexicon, load_lexicon
from strategies import find_strategy
from strategies.frequency_strat import OPENING_WORD
from strategy import NoCandidatesError, Strategy
from wordle_env import GuessResult, LetterStatus, WordleEnv

RESULTS_DIR = Path(__file__).resolve().parent / "results"

_SQUARES = {
    LetterStatus.CORRECT: "\U0001f7e9",
    LetterStatus.MISPLACED: "\U0001f7e8",
    LetterStatus.UNUSED: "\u2b1b",
}


# ------------------------------------------------------------------
# Result containers
# ------------------------------------------------------------------

@dataclass
class GameResult:
    strategy: str
    secret: str
    num_guesses: int
    solved: bool
    guesses: list[str] = field(default_factory=list)
    error: str | None = None   # "no_candidates" or "invalid_guess"


@dataclass
class TrialResults:
    games: list[GameResult] = field(default_factory=list)

    def summary(self) -> dict:
        """Aggregate stats over all games."""
        n = len(self.games)
        if n == 0:
            return {
                "games": 0, "solved": 0, "solve_rate": 0.0,
                "mean_guesses": 0.0, "median_guesses": 0.0, "max_guesses": 0,
                "failures": 0, "guess_distribution": {},
            }
        guesses = np.array([g.num_guesses for g in self.games])
        solved = np.array([g.solved for g in self.games])

        dist: dict[str, int] = {}
        values, counts = np.unique(guesses[solved], return_counts=True)
        for v, c in zip(values, counts):
            dist[str(int(v))] = int(c)
        n_failed = int(n - solved.sum())
        if n_failed:
            dist["failed"] = n_failed

        return {
            "games": n,
            "solved": int(solved.sum()),
            "solve_rate": round(float(solved.mean()), 4),
            "mean_guesses": round(float(guesses.mean()), 3),
            "median_guesses": float(np.median(guesses)),
            "max_guesses": int(guesses.max()),
            "failures": sum(1 for g in self.games if g.error is not None),
            "guess_distribution": dist,
        }

    def print_summary(self) -> None:
        s = self.summary()
        if not s["games"]:
            print("No games played.")
            return
        print(f"\n{'Games':>6} {'Solved':>7} {'Rate':>6} "
              f"{'Mean':>6} {'Median':>7} {'Max':>5} {'Errors':>7}")
        print("-" * 50)
        print(f"{s['games']:>6} {s['solved']:>7} {100 * s['solve_rate']:>5.1f}% "
              f"{s['mean_guesses']:>6.2f} {s['median_guesses']:>7.1f} "
              f"{s['max_guesses']:>5} {s['failures']:>7}")
        print("  distribution: " + ", ".join(
            f"{k}: {v}" for k, v in s["guess_distribution"].items()))
        print()

    def to_csv(self, path: str | Path) -> None:
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        with p.open("w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(["strategy", "secret", "num_guesses", "solved", "guesses", "error"])
            for g in self.games:
                writer.writerow([g.strategy, g.secret, g.num_guesses, int(g.solved),
                                 " ".join(g.guesses), g.error or ""])

    def to_json(self, path: str | Path, config: dict | None = None) -> None:
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        data = {
            "timestamp": datetime.now().isoformat(),
            "config": config or {},
            "summary": self.summary(),
            "games": [asdict(g) for g in self.games],
        }
        p.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")

    def plot_histogram(self, path: str | Path | None = None) -> None:
        try:
            import matplotlib
            matplotlib.use("Agg")
            import matplotlib.pyplot as plt
        except ImportError:
            print("matplotlib not installed — skipping plot", file=sys.stderr)
            return

        if not self.games:
            return
        guesses = [g.num_guesses for g in self.games if g.solved]
        failed = sum(1 for g in self.games if not g.solved)
        name = self.games[0].strategy

        mx = max(guesses) if guesses else 6
        bins = list(range(1, mx + 2))
        fig, ax = plt.subplots(figsize=(6, 4))
        ax.hist(guesses, bins=bins, edgecolor="black", align="left")
        ax.set_title(f"{name} — guess distribution ({failed} failed)")
        ax.set_xlabel("Guesses")
        ax.set_ylabel("Count")
        fig.tight_layout()

        dest = Path(path) if path else RESULTS_DIR / f"simulate_{name.lower()}.png"
        dest.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(dest, dpi=150)
        plt.close(fig)
        print(f"Histogram saved to {dest}")


# ------------------------------------------------------------------
# Playing games
# ------------------------------------------------------------------

def _format_statuses(result: GuessResult) -> str:
    return "".join(_SQUARES[s] for s in result.letter_statuses)


def play_game(
    strat: Strategy,
    env: WordleEnv,
    secret: str,
    verbose: bool = False,
) -> GameResult:
    """Play one game to the end.

    A strategy that runs out of candidates, or an invalid guess, ends
    the game as a loss.
    """
    env.reset(secret=secret)
    strat.reset()

    result = GuessResult.initial()
    error = None
    while not env.game_over():
        try:
            word = strat.pick_next_guess(result)
        except NoCandidatesError:
            error = "no_candidates"
            break
        result = env.guess(word)
        if not result.is_valid:
            error = "invalid_guess"
            break
        if verbose:
            print(f"  Guess {len(result.guesses)}: {word}  {_format_statuses(result)}")

    played = [r.word for r in env.history]
    if verbose:
        status = "SOLVED" if env.is_solved() else f"FAILED ({error or 'out of guesses'})"
        print(f"  -> {status} in {len(played)} guesses")

    return GameResult(
        strategy=strat.name,
        secret=secret,
        num_guesses=len(played),
        solved=env.is_solved(),
        guesses=played,
        error=error,
    )


def _build_strategy(name: str, lexicon: Lexicon, opening_word: str) -> Strategy:
    cls = find_strategy(name)
    return cls(lexicon, opening_word=opening_word)


def _run_games_worker(
    strategy_name: str,
    words: tuple[str, ...],
    secrets: list[str],
    max_guesses: int,
    opening_word: str,
    verbose: bool = False,
) -> list[GameResult]:
    """Play *secrets* with a fresh strategy instance. May run in a subprocess."""
    lexicon = Lexicon(words=words)
    strat = _build_strategy(strategy_name, lexicon, opening_word)
    env = WordleEnv(vocabulary=lexicon.words, max_guesses=max_guesses)

    results: list[GameResult] = []
    for i, secret in enumerate(secrets, 1):
        if verbose:
            print(f"\n--- Game {i}/{len(secrets)} | Secret: {secret} ---")
        results.append(play_game(strat, env, secret, verbose=verbose))
    return results


def _sample_secrets(words: tuple[str, ...], num_games: int, seed: int) -> list[str]:
    rng = random.Random(seed)
    if num_games <= len(words):
        return rng.sample(list(words), num_games)
    return rng.choices(list(words), k=num_games)


def run_trials(
    lexicon: Lexicon,
    strategy_name: str = "Frequency",
    num_games: int = 1000,
    seed: int = 42,
    max_guesses: int = 6,
    opening_word: str = OPENING_WORD,
    max_workers: int | None = None,
    verbose: bool = False,
) -> TrialResults:
    """Play *num_games* games, each against a randomly drawn secret.

    With ``max_workers > 1`` the secrets are split into one chunk per
    worker process; each worker builds its own strategy instance.
    """
    if num_games < 1:
        raise ValueError(f"num_games must be positive, got {num_games}")

    # Fail fast on an unknown strategy or bad opening word
    _build_strategy(strategy_name, lexicon, opening_word)

    secrets = _sample_secrets(lexicon.words, num_games, seed)
    results = TrialResults()

    if not max_workers or max_workers <= 1:
        results.games.extend(_run_games_worker(
            strategy_name, lexicon.words, secrets, max_guesses, opening_word, verbose,
        ))
        return results

    chunks = [c for c in (secrets[i::max_workers] for i in range(max_workers)) if c]
    print(f"Playing {len(secrets)} games with {strategy_name} "
          f"(workers: {len(chunks)}) ...", flush=True)

    with ProcessPoolExecutor(max_workers=len(chunks)) as executor:
        futures = {
            executor.submit(
                _run_games_worker,
                strategy_name,
                lexicon.words,
                chunk,
                max_guesses,
                opening_word,
                verbose,
            ): idx
            for idx, chunk in enumerate(chunks)
        }
        by_chunk: dict[int, list[GameResult]] = {}
        for fut in as_completed(futures):
            idx = futures[fut]
            try:
                game_results = fut.result()
                by_chunk[idx] = game_results
                solved = sum(1 for g in game_results if g.solved)
                print(f"  chunk {idx} done — {solved}/{len(game_results)} solved", flush=True)
            except Exception as exc:
                print(f"  chunk {idx} FAILED: {exc}", file=sys.stderr)

    # Completion order varies between runs; keep the output reproducible
    for idx in sorted(by_chunk):
        results.games.extend(by_chunk[idx])
    return results


# ------------------------------------------------------------------
# CLI
# ------------------------------------------------------------------

def main() -> None:
    parser = argparse.ArgumentParser(
        description="Play many Wordle games with one strategy",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
examples:
  python simulate.py                                  # 1000 games, bundled words
  python simulate.py --words data/wordle.txt          # full word list
  python simulate.py --num-games 20 --verbose         # print every guess
  python simulate.py --opening slate --workers 4      # other opener, 4 processes
""",
    )
    parser.add_argument("--words", type=str, default=None, help="Path to word list (.txt)")
    parser.add_argument("--strategy", type=str, default="Frequency",
                        help="Strategy name (default: Frequency)")
    parser.add_argument("--opening", type=str, default=OPENING_WORD,
                        help=f"Opening word (default: {OPENING_WORD})")
    parser.add_argument("--num-games", type=int, default=1000,
                        help="Number of games to play (default: 1000)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument("--max-guesses", type=int, default=6,
                        help="Max guesses per game (default: 6)")
    parser.add_argument("--workers", type=int, default=None,
                        help="Parallel worker processes (default: run in-process)")
    parser.add_argument("--verbose", action="store_true", help="Print per-game details")
    parser.add_argument("--csv", type=str, default=None, help="Save results CSV path")
    parser.add_argument("--json", type=str, default=None, help="Save results JSON path")
    parser.add_argument("--plot", type=str, default=None, help="Save histogram path")
    args = parser.parse_args()

    try:
        lex = load_lexicon(path=args.words)
    except (FileNotFoundError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(1)
    print(f"Vocabulary: {len(lex)} words")

    out_dir = RESULTS_DIR
    out_dir.mkdir(parents=True, exist_ok=True)

    t0 = _time_mod.time()
    try:
        results = run_trials(
            lexicon=lex,
            strategy_name=args.strategy,
            num_games=args.num_games,
            seed=args.seed,
            max_guesses=args.max_guesses,
            opening_word=args.opening,
            max_workers=args.workers,
            verbose=args.verbose,
        )
    except (KeyError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(1)
    elapsed = _time_mod.time() - t0

    results.print_summary()
    print(f"Elapsed: {elapsed:.1f}s")

    stem = f"simulate_{args.strategy.lower()}"
    csv_path = args.csv or str(out_dir / f"{stem}.csv")
    results.to_csv(csv_path)
    print(f"CSV saved to {csv_path}")

    json_path = args.json or str(out_dir / f"{stem}.json")
    results.to_json(json_path, config={
        "strategy": args.strategy,
        "opening": args.opening,
        "num_games": args.num_games,
        "seed": args.seed,
        "max_guesses": args.max_guesses,
        "words": args.words,
    })
    print(f"JSON saved to {json_path}")

    plot_path = args.plot or str(out_dir / f"{stem}.png")
    results.plot_histogram(plot_path)


if __name__ == "__main__":
    main()
