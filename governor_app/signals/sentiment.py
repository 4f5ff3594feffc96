"""AFINN sentiment scoring for signal text."""

import re
from dataclasses import dataclass
from typing import Optional

from afinn import Afinn

# A negator flips the valence of the token right after it.
NEGATORS = frozenset({
    "not", "no", "never", "neither", "nor", "without", "cannot",
    "don't", "dont", "doesn't", "doesnt", "didn't", "didnt",
    "isn't", "isnt", "aren't", "arent", "wasn't", "wasnt", "weren't",
    "won't", "wont", "can't", "cant", "couldn't", "shouldn't", "wouldn't",
    "hasn't", "haven't", "hadn't",
})

_STRIP = re.compile(r"[.,/#!?$%^&*;:{}=_`\"~()\[\]<>\\|+-]")

_afinn: Optional[Afinn] = None


def _lexicon() -> Afinn:
    global _afinn
    if _afinn is None:
        _afinn = Afinn(language="en")
    return _afinn


@dataclass(frozen=True)
class SentimentResult:
    """Lexicon score of one text body."""
    score: float
    comparative: float
    tokens: int


def tokenize(text: str) -> list[str]:
    """Lowercase, strip punctuation (apostrophes kept) and split on whitespace."""
    return _STRIP.sub(" ", text.lower()).split()


def analyze(text: str) -> SentimentResult:
    """
    Score ``text`` token by token against AFINN-165.

    ``comparative`` is the summed valence divided by the token count, so
    long bodies are not favoured over short ones.
    """
    afinn = _lexicon()
    tokens = tokenize(text)

    score = 0.0
    for i, token in enumerate(tokens):
        valence = afinn.score(token)
        if valence and i > 0 and tokens[i - 1] in NEGATORS:
            valence = -valence
        score += valence

    comparative = score / len(tokens) if tokens else 0.0
    return SentimentResult(score=score, comparative=comparative, tokens=len(tokens))
