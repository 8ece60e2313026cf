from app.schemas.cart import CartItemCreate
from app.schemas.order import OrderCreate

from conftest import product_data


def order_data(**overrides) -> OrderCreate:
    data = {
        "customerName": "Ada Lovelace",
        "customerEmail": "ada@example.com",
        "items": [{"productId": "p1", "name": "Mug", "price": "9.5", "quantity": 2}],
        "total": "19.00",
    }
    data.update(overrides)
    return OrderCreate(**data)


# ----- Products -----


def test_created_product_is_returned_by_id_with_defaults(storage):
    created = storage.create_product(product_data())

    fetched = storage.get_product(created.id)

    assert fetched is not None
    assert fetched.model_dump() == created.model_dump()
    assert fetched.in_stock is True
    assert fetched.inventory == 0
    assert fetched.created_at is not None


def test_missing_ids_are_reported_without_raising(storage):
    assert storage.get_product("nope") is None
    assert storage.update_product("nope", {"name": "x"}) is None
    assert storage.delete_product("nope") is False


def test_update_replaces_only_listed_fields(storage):
    created = storage.create_product(product_data(inventory=5))

    updated = storage.update_product(created.id, {"price": "99.00", "in_stock": False})

    assert updated.price == "99.00"
    assert updated.in_stock is False
    assert updated.inventory == 5
    assert storage.get_product(created.id).name == "Wireless Bluetooth Headphones"


def test_delete_product(storage):
    created = storage.create_product(product_data())

    assert storage.delete_product(created.id) is True
    assert storage.get_product(created.id) is None
    assert storage.get_products() == []


def test_search_matches_name_description_or_category(storage):
    headphones = storage.create_product(product_data())
    chair = storage.create_product(
        product_data(
            name="Ergonomic Office Chair",
            description="Lumbar support for all-day comfort.",
            category="Furniture",
        )
    )

    assert [p.id for p in storage.search_products("headphones")] == [headphones.id]
    assert [p.id for p in storage.search_products("LUMBAR")] == [chair.id]
    assert [p.id for p in storage.search_products("furn")] == [chair.id]


def test_reads_keep_creation_order(storage):
    created = [
        storage.create_product(product_data(name=f"Speaker {n}", category=category))
        for n, category in enumerate(["Audio", "Electronics", "Audio", "Electronics", "Audio"])
    ]
    ids = [p.id for p in created]

    assert [p.id for p in storage.get_products()] == ids
    assert [p.id for p in storage.search_products("speaker")] == ids
    assert [p.id for p in storage.get_products_by_category("audio")] == ids[::2]


def test_cart_lines_keep_creation_order(storage):
    products = [storage.create_product(product_data(name=f"Item {n}")) for n in range(4)]
    for product in reversed(products):
        storage.add_to_cart("s1", CartItemCreate(product_id=product.id))

    lines = storage.get_cart_items("s1")

    assert [line.product_id for line in lines] == [p.id for p in reversed(products)]


def test_search_blank_or_unmatched_query_returns_empty(storage):
    storage.create_product(product_data())

    assert storage.search_products("") == []
    assert storage.search_products("   ") == []
    assert storage.search_products("submarine") == []
    assert storage.search_products("%") == []


def test_category_match_is_exact_and_case_insensitive(storage):
    storage.create_product(product_data())

    assert len(storage.get_products_by_category("electronics")) == 1
    assert storage.get_products_by_category("Electro") == []


# ----- Cart -----


def test_adding_same_product_twice_merges_into_one_line(storage):
    product = storage.create_product(product_data())

    first = storage.add_to_cart("s1", CartItemCreate(product_id=product.id, quantity=2))
    second = storage.add_to_cart("s1", CartItemCreate(product_id=product.id, quantity=3))

    lines = storage.get_cart_items("s1")
    assert second.id == first.id
    assert len(lines) == 1
    assert lines[0].quantity == 5
    assert lines[0].product.id == product.id


def test_add_to_cart_defaults_to_quantity_one(storage):
    product = storage.create_product(product_data())

    item = storage.add_to_cart("s1", CartItemCreate(product_id=product.id))

    assert item.quantity == 1


def test_same_product_in_two_sessions_gives_two_lines(storage):
    product = storage.create_product(product_data())

    storage.add_to_cart("s1", CartItemCreate(product_id=product.id))
    storage.add_to_cart("s2", CartItemCreate(product_id=product.id))

    assert len(storage.get_cart_items("s1")) == 1
    assert len(storage.get_cart_items("s2")) == 1


def test_zero_or_negative_quantity_removes_the_line(storage):
    product = storage.create_product(product_data())
    a = storage.add_to_cart("s1", CartItemCreate(product_id=product.id))
    other = storage.create_product(product_data(name="Other"))
    b = storage.add_to_cart("s1", CartItemCreate(product_id=other.id))

    assert storage.update_cart_item_quantity(a.id, 0) is None
    assert storage.update_cart_item_quantity(b.id, -3) is None
    assert storage.get_cart_item(a.id) is None
    assert storage.get_cart_item(b.id) is None
    assert storage.get_cart_items("s1") == []


def test_positive_quantity_is_set(storage):
    product = storage.create_product(product_data())
    item = storage.add_to_cart("s1", CartItemCreate(product_id=product.id))

    updated = storage.update_cart_item_quantity(item.id, 7)

    assert updated.quantity == 7
    assert storage.update_cart_item_quantity("missing", 3) is None


def test_cart_read_skips_lines_of_deleted_products(storage):
    kept = storage.create_product(product_data(name="Kept"))
    gone = storage.create_product(product_data(name="Gone"))
    storage.add_to_cart("s1", CartItemCreate(product_id=kept.id))
    orphan = storage.add_to_cart("s1", CartItemCreate(product_id=gone.id))

    storage.delete_product(gone.id)

    lines = storage.get_cart_items("s1")
    assert [line.product.name for line in lines] == ["Kept"]
    # the row itself is still there, only hidden from the joined view
    assert storage.get_cart_item(orphan.id) is not None


def test_remove_from_cart(storage):
    product = storage.create_product(product_data())
    item = storage.add_to_cart("s1", CartItemCreate(product_id=product.id))

    assert storage.remove_from_cart(item.id) is True
    assert storage.remove_from_cart(item.id) is False


def test_clear_cart_is_idempotent_and_scoped_to_the_session(storage):
    product = storage.create_product(product_data())
    storage.add_to_cart("s1", CartItemCreate(product_id=product.id))
    storage.add_to_cart("s2", CartItemCreate(product_id=product.id))

    assert storage.clear_cart("s1") is True
    assert storage.clear_cart("s1") is True
    assert storage.clear_cart("empty") is True

    assert storage.get_cart_items("s1") == []
    assert len(storage.get_cart_items("s2")) == 1


# ----- Orders -----


def test_order_defaults_to_pending_and_status_can_change(storage):
    order = storage.create_order(order_data())

    assert order.status == "pending"
    assert storage.get_order(order.id).customer_email == "ada@example.com"

    updated = storage.update_order_status(order.id, "shipped")
    assert updated.status == "shipped"
    assert [o.status for o in storage.get_orders()] == ["shipped"]


def test_order_status_update_on_missing_order(storage):
    assert storage.get_order("nope") is None
    assert storage.update_order_status("nope", "shipped") is None


# ----- Users -----


def test_users(storage):
    user = storage.create_user("ada", "secret")

    assert storage.get_user(user.id).username == "ada"
    assert storage.get_user_by_username("ada").id == user.id
    assert storage.get_user_by_username("bob") is None
    assert storage.get_user("nope") is None
