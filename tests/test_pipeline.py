import pandas as pd
import pytest
from hydra import compose, initialize
from omegaconf import OmegaConf

from airbnb_cleaning.pipeline import STEPS, clean_listings, resolve_steps


@pytest.fixture
def config():
    # config.yaml lives at the project root, one level above this file
    with initialize(version_base=None, config_path=".."):
        cfg = compose(config_name="config", overrides=["collapse.min_count=2", "drop.max_levels=3"])
    return cfg


@pytest.fixture
def raw_listings():
    return pd.DataFrame({
        "id": [1, 2, 3, 4, 5],
        "name": ["Loft", "Flat", "Room", "Boat", "Castle"],
        "price": ["$100.00", "$85.00", "$1,500.00", "oops", "$60.00"],
        "host_response_rate": ["100%", "90%", None, "N/A", "80%"],
        "host_is_superhost": ["t", "f", "f", None, "t"],
        "host_since": ["2012-01-01", "2013-05-05", None, "2015-07-07", "2016-08-08"],
        "property_type": ["Apartment", "Apartment", "House", "Boat", "House"],
        "room_type": ["Entire home/apt", "Private room", "Entire home/apt", "Entire home/apt", "Shared room"],
        "bedrooms": [1.0, None, 4.0, 1.0, 1.0],
        "minimum_nights": [1, 2, 3, 1, 500],
        "amenities": [
            '{TV,"Wireless Internet",Kitchen}',
            '{HDTV,"24-hour check-in"}',
            "{}",
            '{Kitchen,"translation missing: en.hosting_amenity_50"}',
            None,
        ],
        "host_verifications": [
            "['email', 'phone']",
            "['email']",
            "[]",
            "['phone', 'reviews']",
            None,
        ],
    })


def test_resolve_steps():
    assert resolve_steps("all") == STEPS
    assert resolve_steps(None) == STEPS
    assert resolve_steps("outliers, fix_types") == ["fix_types", "outliers"]
    with pytest.raises(ValueError):
        resolve_steps("fix_types,download")


def test_config_sections(config):
    assert config.main.steps == "all"
    assert [e.prefix for e in config.explode] == ["amenity_", "verification_"]
    assert config.outliers.price.max == 1000


def test_clean_listings_end_to_end(config, raw_listings):
    result = clean_listings(raw_listings, config, steps=config.main.steps)
    full, trimmed, stats = result

    # both multi-valued columns exploded, sources dropped
    assert "amenities" not in full.columns
    assert "host_verifications" not in full.columns
    assert full["amenity_TV"].tolist() == [True, True, False, False, False]
    assert full["amenity_x24-hour_check-in"].tolist() == [False, True, False, False, False]
    assert full["amenity_other"].tolist() == [False, False, False, True, False]
    assert full["verification_email"].tolist() == [True, True, False, False, False]
    assert stats["vocabulary_amenities"] == 6
    assert stats["vocabulary_host_verifications"] == 3

    # types fixed and imputed
    assert full["price"].tolist()[:3] == [100.0, 85.0, 1500.0]
    assert full["price"].notna().all()
    assert full["bedrooms"].notna().all()
    assert full["host_response_rate"].notna().all()
    assert full["host_since"].notna().all()

    # dropped and collapsed
    assert "id" not in full.columns
    assert "name" not in full.columns
    assert full["property_type"].tolist() == ["Apartment", "Apartment", "House", "Other", "House"]

    # price 1500 and minimum_nights 500 are outliers
    assert len(full) == 5
    assert len(trimmed) == 3
    assert stats["outliers_removed"] == 2
    assert set(trimmed.index) <= set(full.index)
    assert list(trimmed.columns) == list(full.columns)


def test_clean_listings_subset_of_steps(config, raw_listings):
    full, trimmed, stats = clean_listings(raw_listings, config, steps="fix_types,explode")

    assert "amenities" in full.columns
    assert "amenity_Kitchen" in full.columns
    assert pd.isna(full.loc[3, "price"])
    assert len(trimmed) == len(full) == 5
    assert stats["outliers_removed"] == 0


def test_clean_listings_with_plain_dict(raw_listings):
    config = OmegaConf.to_container(OmegaConf.create({
        "explode": [{"column": "amenities", "rules": "amenities", "prefix": "amenity_"}],
        "outliers": {"minimum_nights": {"max": 365}},
    }))
    full, trimmed, _ = clean_listings(raw_listings, config, steps=["explode", "outliers"])
    assert "amenity_Wireless_Internet" in full.columns
    assert len(trimmed) == 4
