"""Print a sample order's JSON next to the estimated bounds for the Order type."""
import sys
from datetime import date, datetime, timezone
from pathlib import Path
from uuid import uuid4

# Add project root and this directory to path
example_dir = Path(__file__).resolve().parent
sys.path.insert(0, str(example_dir.parent.parent))
sys.path.insert(0, str(example_dir))

from models import Customer, Order, OrderLine, OrderStatus

from jsonbound.estimation import JsonSizeEstimator, serialized_length, to_json
from jsonbound.schema import load_schema

if __name__ == "__main__":
    now = datetime.now(timezone.utc)
    customer = Customer(id=uuid4(), created_at=now, name="Ada", email="ada@example.com")
    order = Order(
        id=uuid4(),
        created_at=now,
        customer=customer,
        status=OrderStatus.PAID,
        lines=[OrderLine(sku="SKU-1", quantity=2, unit_price=9.99)],
        placed_on=date.today(),
    )

    print(to_json(order))
    print(f"Actual JSON size: {serialized_length(order)} bytes")

    estimator = JsonSizeEstimator(10)  # Max 10 items in collections
    print(f"Estimated JSON size (classes): {estimator.estimate(Order)}")

    schema_estimator = JsonSizeEstimator(10, load_schema(example_dir / "orders.yaml"))
    print(f"Estimated JSON size (schema):  {schema_estimator.estimate('Order')}")
