from datetime import datetime
from decimal import Decimal

import pytest

from inventory_tracker.exceptions import DuplicateNameError, NotFoundError, ValidationError
from inventory_tracker.models.reason import Reason
from inventory_tracker.models.stock import StockMovement
from inventory_tracker.schemas.category import CategoryCreate, CategoryUpdate
from inventory_tracker.schemas.product import ProductCreate, ProductUpdate
from inventory_tracker.schemas.reason import ReasonCreate
from inventory_tracker.schemas.supplier import SupplierCreate
from inventory_tracker.services.catalog import CatalogManager, INITIAL_STOCK_REASON

from tests.conftest import ACTOR, FrozenClock, supplier_payload


class TestCategories:
    def test_create_trims_and_stamps(self, catalog):
        category = catalog.create_category(
            CategoryCreate(name="  Snacks ", description="   "), actor=ACTOR
        )
        assert category.name == "Snacks"
        assert category.description is None
        assert category.is_active is True
        assert category.created_by == ACTOR
        assert category.last_modified_by == ACTOR
        assert category.created_at == category.last_modified_at

    def test_duplicate_name_is_case_insensitive_after_trim(self, catalog, category):
        with pytest.raises(DuplicateNameError) as exc:
            catalog.create_category(CategoryCreate(name=" beverages "), actor=ACTOR)
        assert exc.value.errors == {"name": ["A category with this name already exists."]}
        assert len(catalog.list_categories()) == 1

    def test_blank_name_rejected(self, catalog):
        with pytest.raises(ValidationError) as exc:
            catalog.create_category(CategoryCreate(name="   "), actor=ACTOR)
        assert "name" in exc.value.errors

    def test_rename_to_own_name_is_allowed(self, catalog, category):
        updated = catalog.update_category(
            category.id, CategoryUpdate(name="BEVERAGES", description="Drinks"), actor="Editor"
        )
        assert updated.name == "BEVERAGES"
        assert updated.last_modified_by == "Editor"
        assert updated.created_by == ACTOR

    def test_list_filters(self, catalog, category):
        other = catalog.create_category(CategoryCreate(name="Canned Goods"), actor=ACTOR)
        catalog.toggle_category(other.id, actor=ACTOR)

        assert [c.name for c in catalog.list_categories(search="CAN")] == ["Canned Goods"]
        assert [c.name for c in catalog.list_categories(status="Active")] == ["Beverages"]
        assert [c.name for c in catalog.list_categories(status="Inactive")] == ["Canned Goods"]
        assert len(catalog.list_categories(status="anything else")) == 2

    @pytest.mark.parametrize("existing, incoming", [("CAFÉ", "café"), ("Straße", "STRASSE")])
    def test_duplicate_check_folds_unicode(self, catalog, existing, incoming):
        catalog.create_category(CategoryCreate(name=existing), actor=ACTOR)
        with pytest.raises(DuplicateNameError):
            catalog.create_category(CategoryCreate(name=incoming), actor=ACTOR)
        assert len(catalog.list_categories()) == 1

    def test_search_treats_wildcards_literally(self, catalog, category):
        promo = catalog.create_category(CategoryCreate(name="50% Off_Items"), actor=ACTOR)

        assert catalog.list_categories(search="_") == [promo]
        assert catalog.list_categories(search="%") == [promo]
        assert catalog.list_categories(search="0%") == [promo]
        assert catalog.list_categories(search="B_v") == []

    def test_search_matches_non_ascii_case(self, catalog):
        cafe = catalog.create_category(CategoryCreate(name="CAFÉ Supplies"), actor=ACTOR)
        assert catalog.list_categories(search="café") == [cafe]

    def test_missing_category(self, catalog):
        with pytest.raises(NotFoundError):
            catalog.get_category(999)


class TestSuppliers:
    def test_create_keeps_address_and_contacts(self, supplier):
        assert supplier.address["street_address"] == "123 Ayala Ave"
        assert supplier.address["province"] is None
        assert supplier.contact_persons == [
            {"name": "Ana Cruz", "email": "ana@acme.ph", "phone": "+639171234567"}
        ]

    def test_all_contact_errors_reported_together(self, catalog):
        payload = supplier_payload(
            company_contact_num="12345",
            contact_persons=[
                {"name": "", "email": "not-an-email", "phone": "0917"},
                {"name": "Ben", "email": "ben@acme.ph", "phone": "09171234567"},
            ],
        )
        with pytest.raises(ValidationError) as exc:
            catalog.create_supplier(SupplierCreate(**payload), actor=ACTOR)

        errors = exc.value.errors
        assert set(errors) == {
            "company_contact_num",
            "contact_persons[0].name",
            "contact_persons[0].email",
            "contact_persons[0].phone",
        }
        assert catalog.list_suppliers() == []

    def test_email_must_also_pass_email_str(self, catalog):
        # matches the form pattern, but consecutive dots are not a valid address
        payload = supplier_payload(contact_persons=[
            {"name": "Ana Cruz", "email": "ana..cruz@acme.ph", "phone": "09171234567"},
        ])
        with pytest.raises(ValidationError) as exc:
            catalog.create_supplier(SupplierCreate(**payload), actor=ACTOR)
        assert exc.value.errors == {"contact_persons[0].email": ["Invalid email address."]}

    @pytest.mark.parametrize("number", ["09171234567", "+639171234567", "+63 2 123 4567", "1800 10 123 4567"])
    def test_company_phone_formats(self, catalog, number):
        supplier = catalog.create_supplier(
            SupplierCreate(**supplier_payload(company_contact_num=number)), actor=ACTOR
        )
        assert supplier.company_contact_num == number

    def test_street_address_required(self, catalog):
        payload = supplier_payload(address={"city": "Makati"})
        with pytest.raises(ValidationError) as exc:
            catalog.create_supplier(SupplierCreate(**payload), actor=ACTOR)
        assert "address.street_address" in exc.value.errors

    def test_duplicate_supplier(self, catalog, supplier):
        with pytest.raises(DuplicateNameError):
            catalog.create_supplier(SupplierCreate(**supplier_payload(name="ACME TRADING")), actor=ACTOR)

    def test_toggle_twice_restores_flag_with_increasing_stamps(self, db, supplier):
        clock = FrozenClock(datetime(2024, 5, 1, 9, 0, 0))
        catalog = CatalogManager(db, clock=clock)
        first_stamp = supplier.last_modified_at

        once = catalog.toggle_supplier(supplier.id, actor="A")
        stamp_once = once.last_modified_at
        assert once.is_active is False

        twice = catalog.toggle_supplier(supplier.id, actor="B")
        assert twice.is_active is True
        assert twice.last_modified_by == "B"
        # frozen clock, still strictly increasing
        assert stamp_once < twice.last_modified_at
        assert first_stamp != twice.last_modified_at


class TestReasons:
    def test_invalid_type_rejected(self, catalog):
        with pytest.raises(ValidationError) as exc:
            catalog.create_reason(ReasonCreate(name="Sale", type="Sideways"))
        assert "type" in exc.value.errors

    def test_delete_returns_name(self, catalog):
        reason = catalog.create_reason(ReasonCreate(name="Damaged", type="Out"))
        assert catalog.delete_reason(reason.id) == "Damaged"
        assert catalog.list_reasons() == []


class TestProducts:
    def test_initial_stock_movement(self, db, make_product):
        product = make_product(quantity=20)

        movements = db.query(StockMovement).filter(StockMovement.product_id == product.id).all()
        assert len(movements) == 1
        movement = movements[0]
        assert movement.quantity_change == 20
        assert movement.remarks == "Product created"
        assert movement.user_name == ACTOR
        assert movement.timestamp == product.created_at

        reason = db.query(Reason).filter(Reason.id == movement.reason_id).one()
        assert reason.name == INITIAL_STOCK_REASON
        assert reason.type == "In"

    def test_initial_stock_reason_reused(self, db, make_product):
        make_product(quantity=1)
        make_product(quantity=2)
        assert db.query(Reason).filter(Reason.name == INITIAL_STOCK_REASON).count() == 1

    def test_zero_quantity_writes_no_movement(self, db, make_product):
        make_product(quantity=0)
        assert db.query(StockMovement).count() == 0

    def test_unknown_references(self, catalog):
        payload = ProductCreate(name="Cola", quantity=0, price="12.50", category_id=41, supplier_id=42)
        with pytest.raises(ValidationError) as exc:
            catalog.create_product(payload, actor=ACTOR)
        assert exc.value.errors == {
            "category_id": ["Category not found."],
            "supplier_id": ["Supplier not found."],
        }

    def test_update_does_not_touch_quantity(self, catalog, make_product, category, supplier):
        product = make_product(quantity=7, name="Cola")
        updated = catalog.update_product(
            product.id,
            ProductUpdate(name=" Cola Zero ", price="15.00", category_id=category.id, supplier_id=supplier.id),
            actor="Editor",
        )
        assert updated.name == "Cola Zero"
        assert updated.quantity == 7
        assert updated.price == Decimal("15.00")

    def test_list_products_paged(self, catalog, make_product):
        for _ in range(5):
            make_product()
        items, total = catalog.list_products(page=2, page_size=2)
        assert total == 5
        assert [p.name for p in items] == ["Product 3", "Product 4"]

    def test_list_products_filters_combine(self, catalog, category, supplier):
        snacks = catalog.create_category(CategoryCreate(name="Snacks"), actor=ACTOR)
        other = catalog.create_supplier(SupplierCreate(**supplier_payload(name="Other Supply")), actor=ACTOR)

        def add(name, category_id, supplier_id):
            return catalog.create_product(
                ProductCreate(name=name, price="5.00", category_id=category_id, supplier_id=supplier_id),
                actor=ACTOR,
            )

        cola = add("Cola", category.id, supplier.id)
        cola_lite = add("Cola Lite", snacks.id, supplier.id)
        chips = add("Chips", snacks.id, other.id)
        cola_max = add("Cola Max", snacks.id, other.id)
        catalog.toggle_product(cola_max.id, actor=ACTOR)

        def ids(**filters):
            items, total = catalog.list_products(page_size=50, **filters)
            assert total == len(items)
            return [p.id for p in items]

        assert ids(search="cola") == [cola.id, cola_lite.id, cola_max.id]
        assert ids(status="Inactive") == [cola_max.id]
        assert ids(category_id=snacks.id) == [cola_lite.id, chips.id, cola_max.id]
        assert ids(supplier_id=other.id) == [chips.id, cola_max.id]
        assert ids(search="cola", status="Active", category_id=snacks.id) == [cola_lite.id]
        assert ids(search="cola", category_id=snacks.id, supplier_id=other.id) == [cola_max.id]
        assert ids(search="chips", supplier_id=supplier.id) == []
