"""
Testes do catálogo de produtos.
"""
from decimal import Decimal

import pytest

from dakarmarket.errors import NotFoundError, ValidationError
from dakarmarket.models import CartItem, Favorite, Role
from dakarmarket.services.cart_service import CartService, FavoriteService
from dakarmarket.services.order_service import OrderService
from dakarmarket.services.product_service import ProductService


@pytest.fixture
def catalog(merchant, make_profile):
    other = make_profile(Role.MERCHANT)
    ProductService.create(merchant.id, {"title": "Boubou bazin", "price": "45.00", "category": "mode"})
    ProductService.create(merchant.id, {"title": "Thiéboudienne kit", "price": "12.00", "category": "food"})
    ProductService.create(other.id, {"title": "Boubou enfant", "price": "20.00", "category": "mode"})
    return merchant, other


def _titles(pag):
    return [p.title for p in pag.items]


def test_default_order_is_newest_first(catalog):
    assert _titles(ProductService.list_products()) == ["Boubou enfant", "Thiéboudienne kit", "Boubou bazin"]


def test_sort_by_price_ascending(catalog):
    assert _titles(ProductService.list_products(sort_by="price")) == [
        "Thiéboudienne kit", "Boubou enfant", "Boubou bazin"]


def test_search_category_and_owner(catalog):
    merchant, _ = catalog
    assert set(_titles(ProductService.list_products(search="boubou"))) == {"Boubou bazin", "Boubou enfant"}
    assert _titles(ProductService.list_products(category="food")) == ["Thiéboudienne kit"]
    assert len(ProductService.list_products(category="all").items) == 3
    assert set(_titles(ProductService.list_products(user_id=merchant.id))) == {"Boubou bazin", "Thiéboudienne kit"}


def test_pagination(catalog):
    pag = ProductService.list_products(page=2, per_page=2)
    assert pag.total == 3
    assert pag.pages == 2
    assert len(pag.items) == 1


def test_create_validation(merchant):
    with pytest.raises(ValidationError):
        ProductService.create(merchant.id, {"title": "  ", "price": 1})
    with pytest.raises(ValidationError):
        ProductService.create(merchant.id, {"title": "x", "price": "-1"})
    with pytest.raises(ValidationError):
        ProductService.create(merchant.id, {"title": "x", "price": "abc"})


def test_update_and_delete_owner_only(catalog):
    merchant, other = catalog
    product = ProductService.list_products(user_id=merchant.id, sort_by="price").items[0]

    updated = ProductService.update(merchant.id, product.id, {"price": "15", "category": ""})
    assert updated.price == Decimal("15.00")
    assert updated.category == "other"

    with pytest.raises(NotFoundError):
        ProductService.update(other.id, product.id, {"title": "hack"})
    with pytest.raises(NotFoundError):
        ProductService.delete(other.id, product.id)

    ProductService.delete(merchant.id, product.id)
    with pytest.raises(NotFoundError):
        ProductService.get(product.id)
    assert ProductService.count_for(merchant.id) == 1


def test_delete_removes_cart_lines_and_favorites(merchant, client_profile):
    product = ProductService.create(merchant.id, {"title": "Bissap 1L", "price": "3.00"})
    CartService.add_item(client_profile.id, product.id, 2)
    FavoriteService.add_item(client_profile.id, product.id)

    ProductService.delete(merchant.id, product.id)

    assert CartItem.query.count() == 0
    assert Favorite.query.count() == 0
    assert CartService.total(CartService.get_items(client_profile.id)) == Decimal("0.00")


def test_delete_refused_when_ordered(merchant, client_profile):
    product = ProductService.create(merchant.id, {"title": "Bissap 1L", "price": "3.00"})
    CartService.add_item(client_profile.id, product.id)
    OrderService.checkout_cart(client_profile.id)

    with pytest.raises(ValidationError):
        ProductService.delete(merchant.id, product.id)
    assert ProductService.get(product.id).title == "Bissap 1L"
