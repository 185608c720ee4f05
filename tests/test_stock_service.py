import pytest

from storefront.data.models.product import ProductModel
from storefront.domain.errors import (
    InsufficientStock,
    InvalidQuantity,
    ProductInactive,
    ProductNotFound,
)
from storefront.repos.product_repo import ProductRepo
from storefront.services.stock_service import StockService, merge_lines


def test_merge_lines_sums_duplicates():
    assert merge_lines([(1, 2), (2, 1), (1, 3)]) == {1: 5, 2: 1}

    with pytest.raises(InvalidQuantity):
        merge_lines([(1, 0)])


def test_validate_reports_requested_and_available(db, make_product):
    pid = make_product(name="Lamp", stock=5)

    with pytest.raises(InsufficientStock) as exc:
        StockService(db).validate([(pid, 10)])

    assert exc.value.requested == 10
    assert exc.value.available == 5
    assert exc.value.details["product_id"] == pid


def test_validate_counts_duplicate_lines_together(db, make_product):
    pid = make_product(stock=5)

    with pytest.raises(InsufficientStock):
        StockService(db).validate([(pid, 3), (pid, 3)])


def test_validate_missing_and_inactive(db, make_product):
    inactive = make_product(is_active=False)

    with pytest.raises(ProductNotFound):
        StockService(db).validate([(12345, 1)])

    with pytest.raises(ProductInactive):
        StockService(db).validate([(inactive, 1)])


def test_conditional_decrement_never_goes_negative(db, make_product):
    pid = make_product(stock=5)
    repo = ProductRepo(db)

    assert repo.decrement_stock(pid, 3) is True
    assert repo.decrement_stock(pid, 3) is False
    assert repo.decrement_stock(pid, 2) is True
    assert repo.decrement_stock(pid, 1) is False
    db.commit()

    assert db.get(ProductModel, pid).stock == 0


def test_reserve_fails_when_stock_moved_after_validation(db, make_product):
    pid = make_product(stock=5)
    stock = StockService(db)
    lines = stock.validate([(pid, 4)])

    # ktos inny kupil w miedzyczasie
    ProductRepo(db).decrement_stock(pid, 3)

    with pytest.raises(InsufficientStock) as exc:
        stock.reserve(lines)

    assert exc.value.available == 2


def test_restore_increments_and_fails_for_missing_product(db, make_product):
    pid = make_product(stock=1)
    stock = StockService(db)

    stock.restore([(pid, 4)])
    db.commit()
    assert db.get(ProductModel, pid).stock == 5

    with pytest.raises(ProductNotFound):
        stock.restore([(999, 1)])
