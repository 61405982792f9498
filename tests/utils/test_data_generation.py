import pandas as pd
import pytest
from pandas.api.types import (
    is_datetime64_any_dtype,
    is_float_dtype,
    is_integer_dtype,
    is_string_dtype,
)

# Function to test
from utils.data_generation import generate_synthetic_sales_history

# Define common parameters for tests
TEST_END_DATE = "2024-06-30"
TEST_NUM_DAYS = 120
TEST_NUM_PRODUCTS = 6
TEST_SEED = 123


@pytest.fixture(scope="module")  # Generate data once for the module
def generated_data():
    """Fixture to generate data once for multiple tests."""
    return generate_synthetic_sales_history(
        end_date_str=TEST_END_DATE,
        num_days=TEST_NUM_DAYS,
        num_products=TEST_NUM_PRODUCTS,
        seed=TEST_SEED,
    )


def test_output_types(generated_data):
    """Test that the function returns three pandas DataFrames."""
    sales_df, product_df, inventory_df = generated_data
    assert isinstance(sales_df, pd.DataFrame)
    assert isinstance(product_df, pd.DataFrame)
    assert isinstance(inventory_df, pd.DataFrame)


def test_sales_df_columns_and_types(generated_data):
    """Test the columns and data types in the sales DataFrame."""
    sales_df, _, _ = generated_data
    expected_cols_types = {
        "product_id": is_string_dtype,
        "quantity": is_integer_dtype,
        "unit_price": is_float_dtype,
        "sale_timestamp": is_datetime64_any_dtype,
        "sale_status": is_string_dtype,
    }
    assert set(sales_df.columns) == set(expected_cols_types.keys())
    for col, type_check_func in expected_cols_types.items():
        assert type_check_func(sales_df[col]), f"Column '{col}' failed type check {type_check_func.__name__}"


def test_product_df_catalog(generated_data):
    """Products have prices, categories and every fifth one lacks a cost."""
    _, product_df, _ = generated_data
    assert list(product_df.columns) == ["product_id", "name", "base_price", "cost_price", "category", "brand"]
    assert len(product_df) == TEST_NUM_PRODUCTS
    assert (product_df["base_price"] > 0).all()

    missing_cost = product_df[product_df["cost_price"].isna()]["product_id"].tolist()
    assert missing_cost == ["P005"]
    known = product_df.dropna(subset=["cost_price"])
    assert (known["cost_price"] < known["base_price"]).all()


def test_inventory_per_location(generated_data):
    _, _, inventory_df = generated_data
    assert len(inventory_df) == TEST_NUM_PRODUCTS * 2
    assert set(inventory_df["location"]) == {"STORE", "WAREHOUSE"}
    assert (inventory_df["quantity_on_hand"] >= 0).all()


def test_ranges_and_relationships(generated_data):
    sales_df, product_df, _ = generated_data
    assert (sales_df["quantity"] >= 1).all()
    assert sales_df["sale_status"].isin(["COMPLETED", "CANCELLED"]).all()
    assert set(sales_df["product_id"].unique()).issubset(set(product_df["product_id"]))

    end = pd.Timestamp(TEST_END_DATE, tz="UTC")
    start = end - pd.Timedelta(days=TEST_NUM_DAYS)
    assert (sales_df["sale_timestamp"] >= start).all()
    assert (sales_df["sale_timestamp"] < end + pd.Timedelta(days=1)).all()


def test_slow_and_dead_products_go_quiet(generated_data):
    """The last product stops 95 days before the end, the two before it 65 days before."""
    sales_df, _, _ = generated_data
    end = pd.Timestamp(TEST_END_DATE, tz="UTC")
    last_sale_day = sales_df.groupby("product_id")["sale_timestamp"].max().dt.normalize()

    assert last_sale_day["P006"] <= end - pd.Timedelta(days=95)
    assert last_sale_day["P005"] <= end - pd.Timedelta(days=65)
    assert last_sale_day["P004"] <= end - pd.Timedelta(days=65)
    assert last_sale_day["P001"] > end - pd.Timedelta(days=7)


def test_reproducibility_with_seed():
    """Test that using the same seed produces identical results."""
    params = {
        "end_date_str": TEST_END_DATE,
        "num_days": 30,
        "num_products": 4,
        "seed": 42,
    }

    sales_df1, product_df1, inventory_df1 = generate_synthetic_sales_history(**params)
    sales_df2, product_df2, inventory_df2 = generate_synthetic_sales_history(**params)

    pd.testing.assert_frame_equal(sales_df1, sales_df2)
    pd.testing.assert_frame_equal(product_df1, product_df2)
    pd.testing.assert_frame_equal(inventory_df1, inventory_df2)

    params["seed"] = 43
    sales_df3, _, _ = generate_synthetic_sales_history(**params)
    with pytest.raises(AssertionError):
        pd.testing.assert_frame_equal(sales_df1, sales_df3)
