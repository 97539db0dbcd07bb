from __future__ import annotations

import json
from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from backoffice.cli import main
from backoffice.domain.catalog import CatalogShard
from backoffice.persistence.models import CustomerModel, ExpenseModel, OrderModel, product_model


def test_report_command_prints_json(session, capsys):
    session.add(CustomerModel(id="c1", name="Olena", created_at=datetime(2026, 3, 1, tzinfo=timezone.utc)))
    session.add(
        OrderModel(
            id="o1",
            customer_id="c1",
            date=datetime(2026, 3, 2, 8, tzinfo=timezone.utc),
            status="Received",
            total_amount=Decimal("75.50"),
        )
    )
    session.add(ExpenseModel(id="e1", name="Courier", amount=Decimal("5.25"), date=date(2026, 3, 3)))
    session.commit()

    assert main(["report", "--start", "2026-03-01", "--end", "2026-03-07"]) == 0
    body = json.loads(capsys.readouterr().out)

    assert body["period"] == {"start": "2026-03-01", "end": "2026-03-07"}
    assert body["total_revenue"] == 75.5
    assert body["total_expenses"] == 5.25
    assert len(body["sales_by_day"]) == 7


def test_low_stock_command_keeps_cyrillic_labels(session, capsys):
    session.add(product_model(CatalogShard.GUASHA)(id="g1", name="Скребок", quantity=1))
    session.commit()

    assert main(["low-stock", "--threshold", "2"]) == 0
    out = capsys.readouterr().out
    assert "Гуаша" in out
    assert json.loads(out)["count"] == 1


def test_inverted_range_is_a_usage_error():
    with pytest.raises(SystemExit) as excinfo:
        main(["managers", "--start", "2026-03-07", "--end", "2026-03-01"])
    assert excinfo.value.code == 2
