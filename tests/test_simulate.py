import concurrent.futures
import csv
import json

import pytest

from lexicon import Lexicon
import simulate
from simulate import GameResult, TrialResults, play_game, run_trials
from strategies.frequency_strat import FrequencyStrategy
from strategy import NoCandidatesError
from wordle_env import GuessResult, WordleEnv


class _GivesUpStrategy(FrequencyStrategy):
    def pick_next_guess(self, previous: GuessResult) -> str:
        if previous.guesses:
            raise NoCandidatesError("nothing left")
        return super().pick_next_guess(previous)


class _NonsenseStrategy(FrequencyStrategy):
    def pick_next_guess(self, previous: GuessResult) -> str:
        return "qqqqq"


def test_play_game_solves(small_lexicon):
    strat = FrequencyStrategy(small_lexicon, opening_word="apple")
    env = WordleEnv(small_lexicon.words)
    result = play_game(strat, env, "allot")
    assert result == GameResult(
        strategy="Frequency",
        secret="allot",
        num_guesses=2,
        solved=True,
        guesses=["apple", "allot"],
    )


def test_play_game_counts_exhaustion_as_loss(small_lexicon):
    strat = _GivesUpStrategy(small_lexicon, opening_word="apple")
    result = play_game(strat, WordleEnv(small_lexicon.words), "allot")
    assert not result.solved
    assert result.error == "no_candidates"
    assert result.guesses == ["apple"]


def test_play_game_stops_on_invalid_guess(small_lexicon):
    strat = _NonsenseStrategy(small_lexicon, opening_word="apple")
    result = play_game(strat, WordleEnv(small_lexicon.words), "allot")
    assert not result.solved
    assert result.error == "invalid_guess"
    assert result.num_guesses == 0


def test_run_trials(lexicon):
    results = run_trials(lexicon, num_games=10, seed=3, max_guesses=len(lexicon))
    assert len(results.games) == 10
    assert len({g.secret for g in results.games}) == 10
    assert all(g.solved for g in results.games)
    assert all(g.guesses[0] == "arose" for g in results.games)

    again = run_trials(lexicon, num_games=10, seed=3, max_guesses=len(lexicon))
    assert again.games == results.games


def test_run_trials_samples_with_replacement(small_lexicon):
    results = run_trials(small_lexicon, num_games=7, opening_word="apple")
    assert len(results.games) == 7


def test_run_trials_rejects_bad_arguments(lexicon):
    with pytest.raises(ValueError):
        run_trials(lexicon, num_games=0)
    with pytest.raises(KeyError):
        run_trials(lexicon, strategy_name="nope", num_games=1)
    with pytest.raises(ValueError):
        run_trials(Lexicon(words=("crane",)), num_games=1)


def test_summary():
    results = TrialResults(games=[
        GameResult("Frequency", "crane", 2, True),
        GameResult("Frequency", "slate", 4, True),
        GameResult("Frequency", "stone", 4, True),
        GameResult("Frequency", "horse", 6, False),
        GameResult("Frequency", "shore", 1, False, error="no_candidates"),
    ])
    s = results.summary()
    assert s["games"] == 5
    assert s["solved"] == 3
    assert s["solve_rate"] == 0.6
    assert s["mean_guesses"] == 3.4
    assert s["median_guesses"] == 4.0
    assert s["max_guesses"] == 6
    assert s["failures"] == 1
    assert s["guess_distribution"] == {"2": 1, "4": 2, "failed": 2}


def test_summary_empty():
    assert TrialResults().summary()["games"] == 0


def test_exports(tmp_path, small_lexicon):
    results = run_trials(small_lexicon, num_games=3, opening_word="apple")

    csv_path = tmp_path / "out" / "games.csv"
    results.to_csv(csv_path)
    with csv_path.open(encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 3
    assert rows[0]["guesses"].split()[0] == "apple"

    json_path = tmp_path / "out" / "games.json"
    results.to_json(json_path, config={"seed": 42})
    data = json.loads(json_path.read_text(encoding="utf-8"))
    assert data["config"] == {"seed": 42}
    assert data["summary"]["games"] == 3
    assert len(data["games"]) == 3


def test_plot_histogram(tmp_path, small_lexicon):
    pytest.importorskip("matplotlib")
    results = run_trials(small_lexicon, num_games=3, opening_word="apple")
    dest = tmp_path / "hist.png"
    results.plot_histogram(dest)
    assert dest.exists()


def test_parallel_results_come_back_in_chunk_order(lexicon):
    secrets = simulate._sample_secrets(lexicon.words, 9, seed=5)
    expected = [s for i in range(3) for s in secrets[i::3]]

    for _ in range(2):
        results = run_trials(
            lexicon, num_games=9, seed=5, max_guesses=len(lexicon), max_workers=3,
        )
        assert [g.secret for g in results.games] == expected
        assert all(g.solved for g in results.games)


def test_parallel_verbose_prints_traces(monkeypatch, capsys, lexicon):
    # threads stand in for processes so the output is captured
    monkeypatch.setattr(simulate, "ProcessPoolExecutor", concurrent.futures.ThreadPoolExecutor)
    results = run_trials(lexicon, num_games=4, seed=1, max_workers=2, verbose=True)

    out = capsys.readouterr().out
    assert len(results.games) == 4
    assert out.count("Secret:") == 4
    assert "Guess 1: arose" in out
