import pandas as pd

from stockroom.services.stock_status import annotate_low_stock, is_low_stock, low_stock_mask


def test_is_low_stock_boundaries():
    assert is_low_stock(3, 10)
    assert is_low_stock(10, 10)
    assert not is_low_stock(11, 10)
    assert is_low_stock(0, 0)


def test_annotate_recomputes_flag():
    df = pd.DataFrame(
        {"quantity": [15, 8, 3], "reorder_level": [5, 10, 10], "is_low_stock": [True, False, False]}
    )
    annotated = annotate_low_stock(df)
    assert annotated["is_low_stock"].tolist() == [False, True, True]
    # input untouched
    assert df["is_low_stock"].tolist() == [True, False, False]


def test_mask_of_empty_frame():
    df = pd.DataFrame(columns=["quantity", "reorder_level"])
    assert low_stock_mask(df).empty
    assert "is_low_stock" in annotate_low_stock(df).columns
