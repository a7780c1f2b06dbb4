from __future__ import annotations

"""Default vocabulary for utterance normalization."""

# Phrases removed before matching. Longer phrases are stripped first.
FILLER_PHRASES = (
    "i want to go to",
    "take me to",
    "bring me to",
    "navigate to",
    "directions to",
    "go to",
    "nearest",
    "closest",
)

# Common speech-to-text confusions for the letter "N"
HOMOPHONES = {
    "and": "n",
    "end": "n",
    "add": "n",
}

# token: aliases must align with utterance word boundaries
# substring: aliases may match anywhere inside the squashed utterance
ALIAS_MATCH = "token"
