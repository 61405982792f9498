import pandas as pd
import numpy as np

CATEGORIES = ["PREMIUM", "GROCERY", "HOUSEHOLD", "BEVERAGES"]
BRANDS = ["Acme", "Northwind", "Contoso", "Globex"]
LOCATIONS = ["STORE", "WAREHOUSE"]


def _product_role(index: int, num_products: int, num_deadstock: int, num_slow: int) -> str:
    """Last products are deadstock, the ones before them slow movers, the rest regular."""
    if index >= num_products - num_deadstock:
        return "deadstock"
    if index >= num_products - num_deadstock - num_slow:
        return "slow"
    return "regular"


def generate_synthetic_sales_history(
    end_date_str: str = "2024-06-30",
    num_days: int = 120,
    num_products: int = 12,
    seed: int = 42,
    base_daily_units: float = 8.0,
    daily_trend_options: tuple[float, ...] = (0.04, -0.02, 0.0),
    noise_std_dev: float = 0.2,
    base_price_start: float = 4.99,
    category_price_add: float = 3.0,
    cost_ratio_range: tuple[float, float] = (0.45, 0.85),
    unknown_cost_every: int = 5,
    cancelled_prob: float = 0.03,
    num_slow_movers: int = 2,
    num_deadstock: int = 1,
    slow_mover_quiet_days: int = 65,
    deadstock_quiet_days: int = 95,
    stock_days_of_cover_range: tuple[int, int] = (2, 150),
) -> tuple[pd.DataFrame, pd.DataFrame, pd.DataFrame]:
    """
    Generates a synthetic sales history with trending, slow-moving and dead products.

    Args:
        end_date_str: Last day of history (YYYY-MM-DD), interpreted as UTC.
        num_days: Number of days of history ending at ``end_date_str``.
        num_products: Number of products to simulate.
        seed: Random seed for reproducibility.
        base_daily_units: Mean daily units of a regular product at the start.
        daily_trend_options: Relative change in demand per day, cycled over regular products.
        noise_std_dev: Standard deviation of multiplicative normal noise on demand.
        base_price_start: Base price of the first product.
        category_price_add: Added price per category position.
        cost_ratio_range: Range of cost as a share of base price.
        unknown_cost_every: Every n-th product has no recorded cost.
        cancelled_prob: Probability that a sale line belongs to a cancelled sale.
        num_slow_movers: Products that stop selling ``slow_mover_quiet_days`` before the end.
        num_deadstock: Products that stop selling ``deadstock_quiet_days`` before the end.
        slow_mover_quiet_days: Days without sales at the end of a slow mover's history.
        deadstock_quiet_days: Days without sales at the end of a deadstock history.
        stock_days_of_cover_range: Range of on-hand stock expressed in days of base demand.

    Returns:
        A tuple containing:
        - sales_df: one row per sale line
          (product_id, quantity, unit_price, sale_timestamp, sale_status).
        - product_df: product catalog
          (product_id, name, base_price, cost_price, category, brand).
        - inventory_df: on-hand stock per location
          (product_id, location, quantity_on_hand).
    """
    rng = np.random.default_rng(seed)
    end = pd.Timestamp(end_date_str, tz="UTC")
    dates = pd.date_range(end=end, periods=num_days, freq="D")
    product_ids = [f"P{i:03d}" for i in range(1, num_products + 1)]

    product_rows = []
    for index, product_id in enumerate(product_ids):
        category = CATEGORIES[index % len(CATEGORIES)]
        base_price = round(base_price_start + (index % len(CATEGORIES)) * category_price_add + index * 0.5, 2)
        cost_price = None
        if unknown_cost_every <= 0 or (index + 1) % unknown_cost_every != 0:
            cost_price = round(base_price * rng.uniform(*cost_ratio_range), 2)
        product_rows.append(
            {
                "product_id": product_id,
                "name": f"{category.title()} Item {index + 1}",
                "base_price": base_price,
                "cost_price": cost_price,
                "category": category,
                "brand": BRANDS[index % len(BRANDS)],
            }
        )
    product_df = pd.DataFrame(product_rows)

    data = []
    for index, row in enumerate(product_rows):
        role = _product_role(index, num_products, num_deadstock, num_slow_movers)
        if role == "deadstock":
            last_sale_day = end - pd.Timedelta(days=deadstock_quiet_days)
        elif role == "slow":
            last_sale_day = end - pd.Timedelta(days=slow_mover_quiet_days)
        else:
            last_sale_day = end
        daily_trend = daily_trend_options[index % len(daily_trend_options)]

        for day_number, day in enumerate(dates):
            if day > last_sale_day:
                break
            expected = base_daily_units * max(0.1, 1 + daily_trend * day_number)
            expected *= max(0.0, rng.normal(1.0, noise_std_dev))
            units = int(rng.poisson(max(0.1, expected)))
            # Split the day's units over one or two sales
            split = [units] if units < 2 or rng.random() < 0.5 else [units // 2, units - units // 2]
            for quantity in split:
                if quantity < 1:
                    continue
                seconds = int(rng.integers(8 * 3600, 20 * 3600))
                data.append(
                    {
                        "product_id": row["product_id"],
                        "quantity": quantity,
                        "unit_price": row["base_price"],
                        "sale_timestamp": day + pd.Timedelta(seconds=seconds),
                        "sale_status": "CANCELLED" if rng.random() < cancelled_prob else "COMPLETED",
                    }
                )

    sales_df = pd.DataFrame(
        data, columns=["product_id", "quantity", "unit_price", "sale_timestamp", "sale_status"]
    )

    inventory_rows = []
    for index, product_id in enumerate(product_ids):
        days_of_cover = int(rng.integers(*stock_days_of_cover_range))
        total = int(round(base_daily_units * days_of_cover))
        # Spread stock over locations; the store holds roughly a third
        store_share = total // 3
        for location, quantity in zip(LOCATIONS, [store_share, total - store_share]):
            inventory_rows.append(
                {"product_id": product_id, "location": location, "quantity_on_hand": quantity}
            )
    inventory_df = pd.DataFrame(inventory_rows)

    return sales_df, product_df, inventory_df
