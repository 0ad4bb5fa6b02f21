from types import MappingProxyType
from typing import List, Mapping, Tuple, Union

from app.models import DisposalAdvice, WasteCategory

# Most important step first; order is shown to the user as-is
DISPOSAL_INSTRUCTIONS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    WasteCategory.BIODEGRADABLE.value: (
        "Place in green/brown composting bin",
        "Keep separate from plastic and metal waste",
        "Can be used for home composting if available",
        "Breaks down naturally in 2-6 months",
    ),
    WasteCategory.PLASTIC.value: (
        "Rinse and clean before disposal",
        "Place in recycling bin (check local guidelines)",
        "Remove any labels or caps if possible",
        "Do not mix with biodegradable waste",
        "Takes 450+ years to decompose if not recycled",
    ),
    WasteCategory.METAL.value: (
        "Clean and dry before recycling",
        "Place in metal recycling bin",
        "Aluminum cans can be crushed to save space",
        "Highly recyclable - can be reused indefinitely",
        "Keep separate from other waste types",
    ),
})

FALLBACK_INSTRUCTIONS: Tuple[str, ...] = ("Please consult local waste management guidelines",)


def instructions_for(category: Union[WasteCategory, str, None]) -> List[str]:
    """
    Return the disposal instructions for a waste category.

    Unknown categories get the generic fallback instead of an error.
    """
    key = category.value if isinstance(category, WasteCategory) else category
    return list(DISPOSAL_INSTRUCTIONS.get(key, FALLBACK_INSTRUCTIONS))


def advice_for(category: Union[WasteCategory, str]) -> DisposalAdvice:
    key = category.value if isinstance(category, WasteCategory) else category
    return DisposalAdvice(category=key, instructions=instructions_for(key))
