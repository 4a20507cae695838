"""Synonym lexicon: canonical cause name -> trigger keywords."""

# fmt: off
SYNONYM_LEXICON: dict[str, tuple[str, ...]] = {
    "health": ("malaria", "pathogen", "vaccine", "medical", "pneumonia"),
    "technology": ("innovation",),
    "housing": ("apartment",),
    "science": ("laboratory", "scientific", "genetic"),
    "food": ("farmer", "agriculture", "agricultural"),
    "public services": ("sanitation",),
    "covid-19": ("sars2-cov2",),
}
# fmt: on
