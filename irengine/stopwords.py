"""Built-in stop-word sets.

English comes from scikit-learn's list so it matches what ``TfidfVectorizer(stop_words="english")``
drops. Portuguese is a fixed list shipped here. Sets are tuples so their order is stable.
"""

from typing import Dict, Optional, Tuple

from sklearn.feature_extraction.text import ENGLISH_STOP_WORDS


ENGLISH: Tuple[str, ...] = tuple(sorted(ENGLISH_STOP_WORDS))

PORTUGUESE: Tuple[str, ...] = (
    "a", "ao", "aos", "aquela", "aquelas", "aquele", "aqueles", "aquilo", "as", "até",
    "com", "como", "da", "das", "de", "dela", "delas", "dele", "deles", "depois",
    "do", "dos", "e", "é", "ela", "elas", "ele", "eles", "em", "entre",
    "era", "eram", "essa", "essas", "esse", "esses", "esta", "está", "estão", "estas",
    "este", "estes", "eu", "foi", "foram", "há", "isso", "isto", "já", "lhe",
    "lhes", "mais", "mas", "me", "mesmo", "meu", "meus", "minha", "minhas", "muito",
    "na", "não", "nas", "nem", "no", "nos", "nós", "nossa", "nossas", "nosso",
    "nossos", "num", "numa", "o", "os", "ou", "para", "pela", "pelas", "pelo",
    "pelos", "por", "qual", "quando", "que", "quem", "são", "se", "seja", "sem",
    "ser", "seu", "seus", "só", "sua", "suas", "também", "te", "tem", "têm",
    "teu", "teus", "tu", "tua", "tuas", "um", "uma", "umas", "uns", "você",
    "vocês", "vos",
)

NONE: Tuple[str, ...] = ()

# canonical name -> words
STOP_WORDS: Dict[str, Tuple[str, ...]] = {
    "none": NONE,
    "english": ENGLISH,
    "portuguese": PORTUGUESE,
}

# accepted tags -> canonical name
_ALIASES = {
    "none": "none",
    "en": "english",
    "english": "english",
    "pt": "portuguese",
    "portuguese": "portuguese",
}


def canonical_language(tag: Optional[str]) -> Optional[str]:
    """Map a language tag such as ``"en"`` to its canonical name, or None if unknown."""
    if tag is None:
        return "none"
    return _ALIASES.get(tag.strip().lower())


def stop_words_for(language: str) -> Tuple[str, ...]:
    return STOP_WORDS[language]
