import numpy as np
import pandas as pd
import pytest

from airbnb_cleaning.outliers import outlier_mask, remove_outliers
from airbnb_cleaning.persist import read_listings, read_snapshot, write_snapshot


@pytest.fixture
def listings():
    return pd.DataFrame({
        "price": [5.0, 120.0, 2500.0, np.nan, 300.0],
        "minimum_nights": [1, 2, 3, 4, 400],
        "room_type": pd.Series(["a", "b", "a", "b", "a"], dtype="category"),
        "host_since": pd.to_datetime(["2014-01-01", "2015-06-30", None, "2016-02-29", "2017-12-31"]),
        "instant_bookable": pd.array([True, False, None, True, False], dtype="boolean"),
    })


def test_outlier_mask(listings):
    thresholds = {"price": {"min": 10, "max": 1000}, "minimum_nights": {"max": 365}}
    mask = outlier_mask(listings, thresholds)
    assert mask.tolist() == [True, False, True, False, True]


def test_outlier_mask_skips_unknown_columns(listings):
    mask = outlier_mask(listings, {"bedrooms": {"max": 5}})
    assert not mask.any()


def test_remove_outliers(listings):
    out = remove_outliers(listings, {"price": {"max": 1000}})
    assert len(out) == 4
    assert out.index.tolist() == [0, 1, 3, 4]


def test_snapshot_round_trip(listings, tmp_path):
    path = str(tmp_path / "nested" / "listings.pkl")
    write_snapshot(listings, path)
    pd.testing.assert_frame_equal(read_snapshot(path), listings)


def test_read_listings(tmp_path):
    path = tmp_path / "listings.csv"
    path.write_text('id,price,amenities\n1,"$100.00","{TV,Kitchen}"\n2,"$1,250.00",\n')
    df = read_listings(str(path))
    assert df.shape == (2, 3)
    assert df["price"].tolist() == ["$100.00", "$1,250.00"]
    assert pd.isna(df.loc[1, "amenities"])


def test_read_listings_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_listings(str(tmp_path / "nope.csv"))
