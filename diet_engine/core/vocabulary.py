from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, FrozenSet, Mapping, Optional, Tuple

# Every ingredient name in these tables is stored in normalized form
# (see diet_engine.utils.normalizer.normalize).

# --- Diet Tokens ---
# Maps our diet tags to the recipe API's diet parameter.
# low-fodmap has no external equivalent and is expressed through exclusions only.
DIET_TOKENS: Mapping[str, Optional[str]] = MappingProxyType({
    "vegan": "vegan",
    "vegetarian": "vegetarian",
    "pescatarian": "pescetarian",  # The API spells it "pescetarian"
    "ketogenic": "ketogenic",
    "paleo": "paleo",
    "primal": "primal",
    "low-fodmap": None,
    "whole30": "whole30",
    "none": None,
})

# --- Diet Exclusions ---
# Ingredients implied out by each diet
DIET_EXCLUSIONS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "vegan": (
        "gelatin", "whey", "casein", "lactose", "egg", "meat", "fish",
        "shellfish", "honey", "milk", "cheese", "butter", "cream",
    ),
    "vegetarian": ("gelatin", "meat", "fish", "shellfish"),
    "pescatarian": ("beef", "pork", "chicken", "lamb"),
    "ketogenic": ("sugar", "corn syrup", "wheat flour", "white rice", "maple syrup"),
    "paleo": ("legume", "peanut", "bean", "grain", "wheat", "rice", "dairy"),
    "primal": ("legume", "peanut", "bean", "grain", "wheat", "rice"),
    "low-fodmap": (),  # Relies on strict_fodmap + FODMAP_STRICT_EXCLUSIONS
    "whole30": ("added sugar", "alcohol", "grain", "legume", "dairy"),
    "none": (),
})

FODMAP_STRICT_EXCLUSIONS: Tuple[str, ...] = (
    "onion", "garlic", "wheat flour", "honey", "agave", "apple", "pear",
    "cauliflower", "kidney bean",
)

GLUTEN_FREE_EXCLUSIONS: Tuple[str, ...] = ("barley", "rye", "farro", "spelt")


# --- Allergen Definitions ---
@dataclass(frozen=True)
class AllergenDefinition:
    name: str
    display_name: str
    description: str
    intolerance_token: str
    severity: str
    exclusions: Tuple[str, ...]


ALLERGEN_DEFINITIONS: Mapping[str, AllergenDefinition] = MappingProxyType({
    "dairy": AllergenDefinition(
        "dairy", "Dairy", "Milk and dairy products", "dairy", "moderate",
        ("dairy", "milk", "cheese", "butter", "cream", "yogurt", "whey", "casein", "lactose"),
    ),
    "eggs": AllergenDefinition(
        "eggs", "Eggs", "Chicken eggs and egg products", "egg", "severe",
        ("egg", "albumin", "mayonnaise"),
    ),
    "gluten": AllergenDefinition(
        "gluten", "Gluten", "Gluten intolerance or celiac disease", "gluten", "severe",
        ("gluten", "wheat", "wheat flour", "malt", "seitan") + GLUTEN_FREE_EXCLUSIONS,
    ),
    "grain": AllergenDefinition(
        "grain", "Grains", "All grains", "grain", "moderate",
        ("grain", "wheat", "rice", "corn", "oat", "barley", "rye"),
    ),
    "peanuts": AllergenDefinition(
        "peanuts", "Peanuts", "Peanut allergy", "peanut", "severe",
        ("peanut", "peanut butter", "peanut oil"),
    ),
    "fish": AllergenDefinition(
        "fish", "Fish", "All fish", "seafood", "severe",
        ("fish", "salmon", "tuna", "cod", "tilapia", "anchovy", "fish sauce"),
    ),
    "seafood": AllergenDefinition(
        "seafood", "Seafood", "Fish and seafood allergy", "seafood", "severe",
        ("seafood", "fish", "shellfish", "shrimp", "crab", "lobster", "salmon", "tuna"),
    ),
    "sesame": AllergenDefinition(
        "sesame", "Sesame", "Sesame allergy", "sesame", "severe",
        ("sesame", "sesame seed", "sesame oil", "tahini"),
    ),
    "shellfish": AllergenDefinition(
        "shellfish", "Shellfish", "Shellfish allergy", "shellfish", "severe",
        ("shellfish", "shrimp", "crab", "lobster", "clam", "mussel", "oyster", "scallop"),
    ),
    "soy": AllergenDefinition(
        "soy", "Soy", "Soy allergy or intolerance", "soy", "moderate",
        ("soy", "soybean", "soy sauce", "tofu", "tempeh", "edamame", "miso"),
    ),
    "tree_nuts": AllergenDefinition(
        "tree_nuts", "Tree Nuts", "Tree nut allergies", "tree nut", "severe",
        ("tree nut", "almond", "cashew", "walnut", "pecan", "pistachio", "hazelnut", "macadamia"),
    ),
    "wheat": AllergenDefinition(
        "wheat", "Wheat", "Wheat allergy", "wheat", "severe",
        ("wheat", "wheat flour", "semolina", "couscous", "bulgur", "farro", "spelt"),
    ),
})


# --- Synonyms ---
# Each group lists spellings of the same ingredient. Lookup is symmetric:
# any member expands to the whole group.
SYNONYM_GROUPS: Tuple[Tuple[str, ...], ...] = (
    ("cilantro", "coriander leaf"),
    ("scallion", "green onion", "spring onion"),
    ("chickpea", "garbanzo"),
    ("bell pepper", "capsicum"),
    ("zucchini", "courgette"),
    ("eggplant", "aubergine"),
    ("shrimp", "prawn"),
    ("lima bean", "butter bean"),
    ("snap pea", "sugar snap pea"),
    ("snow pea", "mangetout"),
    ("corn", "maize"),
    ("sweet potato", "yam"),
    ("arugula", "rocket"),
    ("endive", "chicory"),
    ("bok choy", "pak choi"),
    ("chinese cabbage", "napa cabbage"),
    ("gelatin", "gelatine"),
    ("tahini", "sesame paste"),
)


def _build_synonym_index(groups: Tuple[Tuple[str, ...], ...]) -> Mapping[str, FrozenSet[str]]:
    index: Dict[str, FrozenSet[str]] = {}
    for group in groups:
        members = frozenset(group)
        for name in group:
            index[name] = index.get(name, frozenset()) | members
    return MappingProxyType(index)


INGREDIENT_SYNONYMS: Mapping[str, FrozenSet[str]] = _build_synonym_index(SYNONYM_GROUPS)


# --- Exclusion shortlists ---
# Top 20 exclusions offered by preference UIs
COMMON_EXCLUSIONS: Tuple[str, ...] = (
    "onion", "garlic", "cilantro", "mushroom", "olive", "caper",
    "bell pepper", "tomato", "eggplant", "zucchini", "celery", "cucumber",
    "broccoli", "cauliflower", "brussels sprout", "spinach", "kale",
    "nut", "seed", "cheese",
)

# Ingredients the relaxation ladder may temporarily allow again
COMMONLY_OVER_EXCLUDED: Tuple[str, ...] = ("onion", "garlic", "mushrooms", "tomato")


# --- Conflict Definitions ---
# Animal products whose presence in a vegan profile's exclusion list is flagged
VEGAN_CONFLICT_TERMS: FrozenSet[str] = frozenset({"cheese", "milk", "butter", "meat", "fish"})

# Explicitly incompatible pairs, reported as errors
CONFLICTING_DIETS: Tuple[Tuple[str, str], ...] = (
    ("vegan", "pescatarian"),
    ("vegan", "ketogenic"),  # Often difficult to combine
)

# Combinable but very restrictive, reported as warnings
RESTRICTIVE_DIET_COMBINATIONS: Tuple[Tuple[str, str], ...] = (
    ("ketogenic", "low-fodmap"),
)

# Restriction pairs where the first already covers the second, reported as warnings.
# Each restriction is a ("diet" | "allergy", tag) pair.
REDUNDANT_RESTRICTIONS: Tuple[Tuple[Tuple[str, str], Tuple[str, str], str], ...] = (
    (("allergy", "wheat"), ("allergy", "gluten"), "Redundant: wheat allergy covers gluten intolerance"),
    (("diet", "vegan"), ("allergy", "dairy"), "Redundant: vegan diet already excludes dairy"),
)


def diet_exclusions(diet: str, strict_fodmap: bool = False) -> Tuple[str, ...]:
    """Implied exclusions for a diet, with the strict variant for low-FODMAP."""
    base = DIET_EXCLUSIONS.get(diet, ())
    if diet == "low-fodmap" and strict_fodmap:
        return base + FODMAP_STRICT_EXCLUSIONS
    return base


def allergen_exclusions(allergen: str) -> Tuple[str, ...]:
    definition = ALLERGEN_DEFINITIONS.get(allergen)
    if definition is None:
        # Unknown allergens still exclude themselves
        return (allergen,)
    return definition.exclusions


def intolerance_token(allergen: str) -> str:
    definition = ALLERGEN_DEFINITIONS.get(allergen)
    return definition.intolerance_token if definition else allergen.lower()


def synonyms_for(name: str) -> FrozenSet[str]:
    """The name plus its direct aliases. Aliases of aliases are not followed."""
    return INGREDIENT_SYNONYMS.get(name, frozenset()) | {name}
