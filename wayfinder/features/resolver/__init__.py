from . import settings as resolver_settings
from .normalizer import Normalizer, NormalizerConfig
from .resolver import MatchMode, Resolution, UtteranceResolver
from .synonyms import DEFAULT_SYNONYMS, SynonymEntry, SynonymTable

__all__ = [
    "Normalizer",
    "NormalizerConfig",
    "MatchMode",
    "Resolution",
    "UtteranceResolver",
    "DEFAULT_SYNONYMS",
    "SynonymEntry",
    "SynonymTable",
    "resolver_settings",
]
