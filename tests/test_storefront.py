"""
Unit tests for storefront store resolution, cart pricing and checkout
"""
from datetime import datetime, timezone
from unittest.mock import patch

import pytest

from souq.model.order_schema import Address, CartLine, CartRequest, CheckoutRequest
from souq.model.product_schema import Product, ProductVariant
from souq.model.store_schema import ShippingSettings, Store, StoreSettings, TaxSettings
from souq.model.storefront_schema import ProductFilter
from souq.repository import customer_repository, order_repository, product_repository
from souq.service.storefront import (
    CartError,
    StoreNotFoundError,
    checkout,
    filter_products,
    find_storefront_store,
    load_storefront,
    merge_cart_lines,
    price_cart,
    resolve_store,
)


def _store(store_id: str, subdomain: str, name: str = "Shop", owner_id: str = "m1", status: str = "active") -> Store:
    return Store(id=store_id, name=name, subdomain=subdomain, owner_id=owner_id, status=status)


STORES = [
    _store("store_1700000000000_abc123def", "alpha-books", "Alpha Books", owner_id="m1"),
    _store("store_1700000000001_xyz789uvw", "beta-fashion", "Beta Fashion", owner_id="m2"),
]


class TestResolveStore:
    """Test the ordered lookup heuristics"""

    def test_exact_subdomain(self):
        match = resolve_store(STORES, "beta-fashion")

        assert match.store.subdomain == "beta-fashion"
        assert match.strategy == "exact_subdomain"

    def test_exact_id(self):
        match = resolve_store(STORES, "store_1700000000000_abc123def")

        assert match.strategy == "exact_id"

    def test_partial_id(self):
        match = resolve_store(STORES, "xyz789uvw")

        assert match.store.subdomain == "beta-fashion"
        assert match.strategy == "partial_id"

    def test_partial_subdomain(self):
        match = resolve_store(STORES, "alpha")

        assert match.store.subdomain == "alpha-books"
        assert match.strategy == "partial_subdomain"

    def test_name_match(self):
        match = resolve_store(STORES, "Fashion")

        assert match.store.subdomain == "beta-fashion"
        assert match.strategy == "name"

    def test_preview_owner_id_in_normal_mode(self):
        match = resolve_store(STORES, "zz", preview_owner_id="m2", allow_fallback=False)

        assert match.store.owner_id == "m2"
        assert match.strategy == "preview_owner_id"

    def test_short_keys_skip_partial_matches(self):
        assert resolve_store(STORES, "al", allow_fallback=False) is None

    def test_only_store(self):
        match = resolve_store(STORES[:1], "unknown-store", allow_fallback=False)

        assert match.strategy == "only_store"

    def test_fallback_prefers_active_store(self):
        stores = [_store("s_a", "one", status="inactive"), _store("s_b", "two")]

        match = resolve_store(stores, "unknown-store")

        assert match.store.id == "s_b"
        assert match.strategy == "fallback"

    def test_no_match_without_fallback(self):
        assert resolve_store(STORES, "unknown-store", allow_fallback=False) is None

    def test_empty_store_list(self):
        assert resolve_store([], "alpha-books") is None


class TestResolveStorePreview:
    """Preview mode looks up by id and owner, not by subdomain"""

    def test_preview_ignores_subdomain(self):
        assert resolve_store(STORES, "beta-fashion", preview=True, allow_fallback=False) is None

    def test_preview_exact_id(self):
        match = resolve_store(STORES, "store_1700000000001_xyz789uvw", preview=True)

        assert match.strategy == "exact_id"

    def test_preview_store_id(self):
        match = resolve_store(
            STORES, "missing", preview=True, preview_store_id="store_1700000000000_abc123def"
        )

        assert match.store.subdomain == "alpha-books"
        assert match.strategy == "preview_store_id"

    def test_preview_partial_id_on_suffix(self):
        match = resolve_store(STORES, "preview-00001_xyz789uvw", preview=True, allow_fallback=False)

        assert match.store.subdomain == "beta-fashion"
        assert match.strategy == "partial_id"

    def test_preview_current_user(self):
        match = resolve_store(STORES, "draft", preview=True, current_user_id="m2", allow_fallback=False)

        assert match.store.owner_id == "m2"
        assert match.strategy == "current_user"


class TestStorefrontView:
    """Test loading the storefront from the document store"""

    def test_load_storefront_filters_products(self, docs, make_store, make_product):
        store = make_store()
        other = make_store(name="Other", subdomain="other-store", owner_id="m9")
        make_product(store.id, name="Blue Shirt", category="Fashion", featured=True)
        make_product(store.id, name="Red Shirt", category="Fashion")
        make_product(store.id, name="Blue Lamp", category="Home")
        make_product(store.id, name="Hidden Shirt", status="inactive")
        make_product(other.id, name="Blue Shirt Elsewhere")

        view = load_storefront(docs, "test-store", ProductFilter(search="blue"))

        assert view.matched_by == "exact_subdomain"
        assert sorted(p.name for p in view.products) == ["Blue Lamp", "Blue Shirt"]
        assert [p.name for p in view.featured_products] == ["Blue Shirt"]

        view = load_storefront(docs, "test-store", ProductFilter(category="Fashion"))
        assert sorted(p.name for p in view.products) == ["Blue Shirt", "Red Shirt"]

    @patch("souq.service.storefront.settings")
    def test_missing_store_lists_available(self, mock_settings, docs, make_store):
        mock_settings.STOREFRONT_WAIT_SECONDS = 0
        mock_settings.STOREFRONT_FALLBACK_TO_FIRST = False
        make_store()
        make_store(name="Other", subdomain="other-store")

        with pytest.raises(StoreNotFoundError) as exc:
            find_storefront_store(docs, "no-such-shop")

        assert exc.value.requested == "no-such-shop"
        assert {s.subdomain for s in exc.value.available} == {"test-store", "other-store"}


class TestFilterProducts:
    """Test storefront search, price, rating and sorting"""

    CATALOG = [
        Product(
            id="p1", store_id="s1", name="Oud Perfume", description="Rich agarwood scent", price=300,
            rating=4.8, review_count=12, created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        ),
        Product(
            id="p2", store_id="s1", name="Prayer Mat", description="Soft velvet", price=80,
            rating=4.1, review_count=40, created_at=datetime(2024, 3, 1, tzinfo=timezone.utc),
        ),
        Product(
            id="p3", store_id="s1", name="Incense Burner", description="Brass, for oud chips", price=120,
            rating=3.5, review_count=3, created_at=datetime(2024, 2, 1, tzinfo=timezone.utc),
        ),
        Product(id="p4", store_id="s1", name="Old Oud", price=10, status="inactive"),
    ]

    def _ids(self, **filters):
        return [p.id for p in filter_products(self.CATALOG, ProductFilter(**filters))]

    def test_defaults_to_newest_active_products(self):
        assert self._ids() == ["p2", "p3", "p1"]

    def test_search_matches_name_or_description(self):
        assert self._ids(search="OUD") == ["p3", "p1"]

    def test_price_range_is_inclusive(self):
        assert self._ids(min_price=80, max_price=120) == ["p2", "p3"]

    def test_min_rating(self):
        assert self._ids(min_rating=4) == ["p2", "p1"]

    @pytest.mark.parametrize(
        "sort_by,expected",
        [
            ("price_low", ["p2", "p3", "p1"]),
            ("price_high", ["p1", "p3", "p2"]),
            ("rating", ["p1", "p2", "p3"]),
            ("popularity", ["p2", "p1", "p3"]),
        ],
    )
    def test_sort_orders(self, sort_by, expected):
        assert self._ids(sort_by=sort_by) == expected


class TestMergeCartLines:
    def test_duplicates_are_summed_and_empty_lines_dropped(self):
        lines = [
            CartLine(product_id="p1", quantity=1),
            CartLine(product_id="p2", quantity=2),
            CartLine(product_id="p1", quantity=2),
            CartLine(product_id="p2", quantity=-2),
        ]

        assert merge_cart_lines(lines) == [CartLine(product_id="p1", quantity=3)]


def _product(product_id: str, price: float, stock: int = 10, **extra) -> Product:
    return Product(id=product_id, store_id="s1", name=product_id.title(), price=price, stock=stock, **extra)


def _pricing_store(tax: TaxSettings = None, shipping: ShippingSettings = None) -> Store:
    return Store(
        id="s1",
        name="Shop",
        subdomain="shop",
        owner_id="m1",
        settings=StoreSettings(taxes=tax or TaxSettings(), shipping=shipping or ShippingSettings()),
    )


class TestPriceCart:
    """Test subtotal, tax and shipping calculation"""

    def test_default_shipping_below_threshold(self):
        quote = price_cart(
            _pricing_store(), {"p1": _product("p1", 40)}, CartRequest(items=[CartLine(product_id="p1", quantity=2)])
        )

        assert quote.subtotal == 80
        assert quote.shipping_cost == 25
        assert quote.tax_amount == 0
        assert quote.discount_amount == 0
        assert quote.total == 105
        assert quote.item_count == 2
        assert quote.currency == "SAR"

    def test_free_shipping_at_threshold_and_tax(self):
        store = _pricing_store(tax=TaxSettings(enabled=True, rate=15))
        quote = price_cart(store, {"p1": _product("p1", 100)}, CartRequest(items=[CartLine(product_id="p1", quantity=2)]))

        assert quote.shipping_cost == 0
        assert quote.tax_amount == 30
        assert quote.total == 230

    def test_tax_included_in_price_is_not_added(self):
        store = _pricing_store(tax=TaxSettings(enabled=True, rate=15, include_in_price=True))
        quote = price_cart(store, {"p1": _product("p1", 10)}, CartRequest(items=[CartLine(product_id="p1", quantity=1)]))

        assert quote.tax_amount == 0

    def test_zero_threshold_always_charges_shipping(self):
        store = _pricing_store(shipping=ShippingSettings(free_shipping_threshold=0, default_cost=12))
        quote = price_cart(store, {"p1": _product("p1", 500)}, CartRequest(items=[CartLine(product_id="p1", quantity=1)]))

        assert quote.shipping_cost == 12

    def test_empty_cart_has_no_shipping(self):
        quote = price_cart(_pricing_store(), {}, CartRequest(items=[]))

        assert quote.total == 0

    def test_variant_price_and_stock(self):
        product = _product(
            "p1", 40, variants=[ProductVariant(id="v1", name="XL", price=45, stock=1)]
        )
        cart = CartRequest(items=[CartLine(product_id="p1", variant_id="v1", quantity=1)])

        quote = price_cart(_pricing_store(), {"p1": product}, cart)
        assert quote.items[0].price == 45
        assert quote.items[0].variant_name == "XL"

        cart.items[0].quantity = 2
        with pytest.raises(CartError):
            price_cart(_pricing_store(), {"p1": product}, cart)

    def test_variant_lines_share_product_stock(self):
        product = _product(
            "p1", 40, stock=5, variants=[ProductVariant(id="s", name="S"), ProductVariant(id="m", name="M")]
        )
        cart = CartRequest(
            items=[
                CartLine(product_id="p1", variant_id="s", quantity=3),
                CartLine(product_id="p1", variant_id="m", quantity=3),
            ]
        )

        with pytest.raises(CartError):
            price_cart(_pricing_store(), {"p1": product}, cart)

        cart.items[1].quantity = 2
        assert price_cart(_pricing_store(), {"p1": product}, cart).item_count == 5

    @pytest.mark.parametrize(
        "product",
        [
            None,
            _product("p1", 10, stock=1),
            _product("p1", 10, status="inactive"),
            Product(id="p1", store_id="other", name="Foreign", price=10, stock=10),
        ],
    )
    def test_rejected_lines(self, product):
        products = {"p1": product} if product else {}

        with pytest.raises(CartError):
            price_cart(_pricing_store(), products, CartRequest(items=[CartLine(product_id="p1", quantity=2)]))


class TestCheckout:
    """Test order creation, stock and customer bookkeeping"""

    def _request(self, address: dict, *lines):
        return CheckoutRequest(
            items=[CartLine(product_id=p, quantity=q) for p, q in lines],
            shipping_address=Address(**address),
        )

    def test_checkout_creates_order_and_updates_stock(self, docs, make_store, make_product):
        store = make_store()
        product = make_product(store.id, price=30, stock=3)
        address = {"first_name": "Ahmed", "last_name": "Ali", "email": "ahmed@example.com"}

        order, customer = checkout(docs, store, self._request(address, (product.id, 3)))

        assert order.order_number.startswith("ORD-")
        assert order.total == 115
        assert order.billing_address == order.shipping_address
        assert order_repository.get_order_by_id(docs, order.id) is not None

        refreshed = product_repository.get_product_by_id(docs, product.id)
        assert refreshed.stock == 0
        assert refreshed.status == "out_of_stock"

        assert customer.name == "Ahmed Ali"
        assert customer.total_orders == 1
        assert customer.total_spent == 115

    def test_repeat_customer_is_reused_by_email(self, docs, make_store, make_product):
        store = make_store()
        product = make_product(store.id, price=250, stock=10)

        checkout(docs, store, self._request({"first_name": "Sara", "email": "sara@example.com"}, (product.id, 1)))
        _, customer = checkout(
            docs, store, self._request({"first_name": "Sara", "email": "SARA@example.com"}, (product.id, 1))
        )

        assert len(customer_repository.get_customers(docs, store.id)) == 1
        assert customer.total_orders == 2
        assert customer.total_spent == 500

    def test_empty_cart_is_rejected(self, docs, make_store):
        store = make_store()

        with pytest.raises(CartError):
            checkout(docs, store, self._request({"first_name": "Sara", "email": "sara@example.com"}))

    def test_oversold_variants_leave_stock_untouched(self, docs, make_store, make_product):
        store = make_store()
        product = make_product(
            store.id, stock=5, variants=[ProductVariant(id="s", name="S"), ProductVariant(id="m", name="M")]
        )
        request = CheckoutRequest(
            items=[
                CartLine(product_id=product.id, variant_id="s", quantity=3),
                CartLine(product_id=product.id, variant_id="m", quantity=3),
            ],
            shipping_address=Address(first_name="Sara", email="sara@example.com"),
        )

        with pytest.raises(CartError):
            checkout(docs, store, request)

        assert product_repository.get_product_by_id(docs, product.id).stock == 5
        assert order_repository.get_orders(docs, store.id) == []
