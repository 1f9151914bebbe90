"""Free text to structured command.

The grammar is deliberately small: articles are dropped, the first word
that is a known verb synonym becomes the verb, and whatever follows it
(minus prepositions) is the noun phrase.
"""

from dataclasses import dataclass

from .state import DIRECTIONS
from .world import Vocabulary


@dataclass(frozen=True)
class Command:
    """A parsed command. ``verb`` is a verb key, not the word typed."""

    verb: str | None
    noun: str | None
    raw: str


def parse(raw_input: str, vocabulary: Vocabulary) -> Command:
    """Parse raw player input against the vocabulary."""
    words = [w for w in raw_input.lower().split() if w not in vocabulary.articles]
    if not words:
        return Command(verb=None, noun=None, raw=raw_input)

    verb = None
    verb_index = -1
    for i, word in enumerate(words):
        verb = vocabulary.verb_for(word)
        if verb is not None:
            verb_index = i
            break

    # A bare direction ("north", "n") means go; the direction stays in the noun
    if verb is None and words[0] in DIRECTIONS:
        verb = "go"

    remaining = words[verb_index + 1:]
    noun_words = [w for w in remaining if w not in vocabulary.prepositions]
    noun = " ".join(noun_words) or None

    return Command(verb=verb, noun=noun, raw=raw_input)
