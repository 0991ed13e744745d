from airbnb_cleaning.explode import explode_column
from airbnb_cleaning.pipeline import STEPS, CleaningResult, clean_listings

__all__ = ["explode_column", "clean_listings", "CleaningResult", "STEPS"]
