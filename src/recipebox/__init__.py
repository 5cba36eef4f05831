"""RecipeBox: recipe collection with rule-based duplicate detection."""

__version__ = "0.3.0"
