"""
Deterministic ingredient-name normalization.

Every name entering an exclusion set or cache key passes through normalize().
Plural handling is a fixed lookup table, not general morphology: unknown
plurals are left alone.
"""
import re
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional

# Common plurals -> canonical singular. No value may itself be a key.
PLURAL_FORMS: Mapping[str, str] = MappingProxyType({
    "almonds": "almond",
    "anchovies": "anchovy",
    "apples": "apple",
    "beans": "bean",
    "bell peppers": "bell pepper",
    "berries": "berry",
    "brussels sprouts": "brussels sprout",
    "capers": "caper",
    "carrots": "carrot",
    "cashews": "cashew",
    "cherries": "cherry",
    "chickpeas": "chickpea",
    "clams": "clam",
    "crabs": "crab",
    "cucumbers": "cucumber",
    "eggplants": "eggplant",
    "eggs": "egg",
    "grains": "grain",
    "green onions": "green onion",
    "hazelnuts": "hazelnut",
    "kidney beans": "kidney bean",
    "legumes": "legume",
    "lentils": "lentil",
    "lima beans": "lima bean",
    "lobsters": "lobster",
    "mushrooms": "mushroom",
    "mussels": "mussel",
    "nuts": "nut",
    "oats": "oat",
    "olives": "olive",
    "onions": "onion",
    "oysters": "oyster",
    "peanuts": "peanut",
    "pears": "pear",
    "peas": "pea",
    "pecans": "pecan",
    "peppers": "pepper",
    "pistachios": "pistachio",
    "potatoes": "potato",
    "prawns": "prawn",
    "raisins": "raisin",
    "sardines": "sardine",
    "scallions": "scallion",
    "scallops": "scallop",
    "seeds": "seed",
    "sesame seeds": "sesame seed",
    "shrimps": "shrimp",
    "snap peas": "snap pea",
    "snow peas": "snow pea",
    "soybeans": "soybean",
    "strawberries": "strawberry",
    "sweet potatoes": "sweet potato",
    "tomatoes": "tomato",
    "tree nuts": "tree nut",
    "walnuts": "walnut",
    "zucchinis": "zucchini",
})

_PUNCTUATION = re.compile(r"[^\w\s-]")
_WHITESPACE = re.compile(r"\s+")


def normalize(name: Optional[str]) -> str:
    """Canonicalize a free-form ingredient name.

    Lower-cases, turns underscores into spaces, drops punctuation other than
    hyphens, collapses whitespace, trims, then maps known plurals to their
    singular form. Idempotent; empty or missing input yields "".
    """
    if not name:
        return ""
    text = name.lower().replace("_", " ")
    text = _PUNCTUATION.sub("", text)
    text = _WHITESPACE.sub(" ", text).strip()
    return PLURAL_FORMS.get(text, text)


def normalize_all(names: Iterable[str]) -> List[str]:
    """Normalize each name, dropping those that normalize to nothing."""
    normalized = (normalize(name) for name in names)
    return [name for name in normalized if name]
