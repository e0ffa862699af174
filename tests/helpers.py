from wordle_env import LetterStatus

C = LetterStatus.CORRECT
M = LetterStatus.MISPLACED
U = LetterStatus.UNUSED

WORDS = [
    "arose", "apple", "alloy", "allot", "llama", "those", "sheep", "crane",
    "slate", "stone", "shore", "horse", "spare", "pears", "reaps", "eerie",
    "geese", "tweet", "abbey", "mamma", "robin", "lever", "revel", "elder",
]


def statuses(code: str) -> tuple[LetterStatus, ...]:
    """``"CUUMU"`` -> (CORRECT, UNUSED, UNUSED, MISPLACED, UNUSED)."""
    return tuple({"C": C, "M": M, "U": U}[ch] for ch in code)
