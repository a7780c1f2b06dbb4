from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, List, Mapping, Sequence, Tuple

from . import settings

_NON_ALNUM = re.compile(r"[^a-z0-9]")


@dataclass(slots=True)
class NormalizerConfig:
    filler_phrases: Tuple[str, ...] = settings.FILLER_PHRASES
    homophones: Mapping[str, str] = field(default_factory=lambda: dict(settings.HOMOPHONES))


class Normalizer:
    """Turns ids, aliases and raw utterances into comparable keys.

    Text is lower-cased and split into words, each word loses its
    punctuation, filler phrases are dropped and homophones are replaced.
    ``key`` joins the remaining tokens, so ``"Main Gateway"`` and
    ``"MainGateway"`` share the key ``"maingateway"``.
    """

    def __init__(self, config: NormalizerConfig | None = None) -> None:
        self.config = config or NormalizerConfig()
        fillers = [self._split(phrase) for phrase in self.config.filler_phrases]
        self._fillers = sorted((tokens for tokens in fillers if tokens), key=len, reverse=True)
        self._homophones = [
            (self._split(source), self._split(target))
            for source, target in self.config.homophones.items()
            if self._split(source)
        ]

    @staticmethod
    def _split(text: str) -> List[str]:
        tokens = (_NON_ALNUM.sub("", word) for word in (text or "").lower().split())
        return [token for token in tokens if token]

    def tokens(self, text: str) -> List[str]:
        tokens = self._split(text)
        for phrase in self._fillers:
            tokens = _replace_phrase(tokens, phrase, [])
        for source, target in self._homophones:
            tokens = _replace_phrase(tokens, source, target)
        return tokens

    def key(self, text: str) -> str:
        return "".join(self.tokens(text))

    __call__ = key


def _replace_phrase(tokens: Sequence[str], phrase: Sequence[str], replacement: Iterable[str]) -> List[str]:
    replacement = list(replacement)
    size = len(phrase)
    result: List[str] = []
    index = 0
    while index < len(tokens):
        if list(tokens[index : index + size]) == list(phrase):
            result.extend(replacement)
            index += size
        else:
            result.append(tokens[index])
            index += 1
    return result


def contains_on_boundary(tokens: Sequence[str], alias_key: str) -> bool:
    """True when ``alias_key`` equals the concatenation of a contiguous token run."""
    if not alias_key:
        return False
    for start in range(len(tokens)):
        run = ""
        for token in tokens[start:]:
            run += token
            if run == alias_key:
                return True
            if len(run) >= len(alias_key) or not alias_key.startswith(run):
                break
    return False
