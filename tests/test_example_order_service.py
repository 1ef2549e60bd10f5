"""
Estimate the example order service model, from its classes and from its YAML schema,
and check a realistic order against the bounds.
"""

import importlib.util
import sys
from datetime import date, datetime, timezone
from pathlib import Path
from uuid import uuid4

from jsonbound.estimation import JsonSizeEstimator, serialized_length, within_bounds
from jsonbound.schema import load_schema

EXAMPLE_DIR = Path(__file__).resolve().parent.parent / "examples" / "order_service"


def _load_models():
    """Import examples/order_service/models.py as order_service_models."""
    name = "order_service_models"
    if name in sys.modules:
        return sys.modules[name]
    spec = importlib.util.spec_from_file_location(name, EXAMPLE_DIR / "models.py")
    module = importlib.util.module_from_spec(spec)
    sys.modules[name] = module
    spec.loader.exec_module(module)
    return module


def _sample_order(models, line_count: int = 1):
    now = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)
    customer = models.Customer(
        id=uuid4(), created_at=now, name="Ada", email="ada@example.com", tags=["vip"]
    )
    return models.Order(
        id=uuid4(),
        created_at=now,
        customer=customer,
        status=models.OrderStatus.PAID,
        lines=[
            models.OrderLine(sku=f"SKU-{i}", quantity=i + 1, unit_price=9.99)
            for i in range(line_count)
        ],
        placed_on=date(2024, 3, 1),
        notes="leave at the door",
    )


def test_order_fields_flattened_with_ancestors():
    models = _load_models()
    estimator = JsonSizeEstimator(10)
    order = estimator.describe(models.Order)
    assert [f.name for f in order.fields] == [
        "customer",
        "status",
        "lines",
        "placed_on",
        "notes",
        "replaces",
        "id",
        "created_at",
    ]


def test_classes_and_schema_agree():
    """The Python model and orders.yaml describe the same JSON shape."""
    models = _load_models()
    from_classes = JsonSizeEstimator(10).estimate(models.Order)
    from_schema = JsonSizeEstimator(10, load_schema(EXAMPLE_DIR / "orders.yaml")).estimate("Order")
    assert from_classes == from_schema
    assert from_classes.min_size < from_classes.max_size


def test_sample_orders_within_bounds():
    models = _load_models()
    estimate = JsonSizeEstimator(10).estimate(models.Order)
    for line_count in (0, 1, 10):
        order = _sample_order(models, line_count)
        assert within_bounds(estimate, order), (line_count, serialized_length(order), estimate)


def test_estimate_report_has_no_warnings():
    models = _load_models()
    report = JsonSizeEstimator(10).estimate_report(models.Order)
    assert report.warnings == ()
    assert report.type_name == "order_service_models.Order"
