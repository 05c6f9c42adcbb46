# inventory_tracker/services/catalog.py
"""
Catalog manager: products, categories, suppliers and reasons.

Every write goes through the same steps: trim free text, validate, check the
name is not taken (case-insensitive, excluding the row being edited), stamp the
audit fields with the acting user and commit. Catalog rows are never deleted;
toggling the active flag is the only way to retire them. Reasons are the
exception and can be removed outright, since movements only hold a weak
reference to them.
"""
import logging
from typing import Callable, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from inventory_tracker.exceptions import DuplicateNameError, NotFoundError
from inventory_tracker.models.category import Category
from inventory_tracker.models.product import Product
from inventory_tracker.models.reason import Reason, ReasonType
from inventory_tracker.models.stock import StockMovement
from inventory_tracker.models.supplier import Supplier
from inventory_tracker.schemas import category as category_schemas
from inventory_tracker.schemas import product as product_schemas
from inventory_tracker.schemas import reason as reason_schemas
from inventory_tracker.schemas import supplier as supplier_schemas
from inventory_tracker.utils.clock import next_stamp, utcnow
from inventory_tracker.utils.validation import (
    COMPANY_PHONE_RE,
    MOBILE_RE,
    ErrorCollector,
    escape_like,
    trim,
    trim_optional,
)

logger = logging.getLogger(__name__)

INITIAL_STOCK_REASON = "Initial Stock"
INITIAL_STOCK_DESCRIPTION = "System generated reason for new products"
INITIAL_STOCK_REMARKS = "Product created"

STATUS_ACTIVE = "Active"
STATUS_INACTIVE = "Inactive"

REASON_TYPES = {t.value for t in ReasonType}


class CatalogManager:
    def __init__(self, db: Session, clock: Callable = utcnow):
        self.db = db
        self.clock = clock

    # ------------------------------------------------------------------
    # Shared helpers
    # ------------------------------------------------------------------

    def _get(self, model, entity_id: int, entity: str):
        obj = self.db.query(model).filter(model.id == entity_id).first()
        if obj is None:
            raise NotFoundError(entity, entity_id)
        return obj

    def _name_taken(self, model, name: Optional[str], exclude_id: Optional[int] = None) -> bool:
        if not name:
            return False
        # Folded in Python; SQLite lower() only handles ASCII
        key = name.casefold()
        query = self.db.query(model.id, model.name)
        if exclude_id is not None:
            query = query.filter(model.id != exclude_id)
        return any(existing.casefold() == key for _, existing in query)

    def _check_name(self, errors: ErrorCollector, model, entity: str, name: Optional[str],
                    exclude_id: Optional[int] = None) -> None:
        if self._name_taken(model, name, exclude_id):
            errors.duplicate(DuplicateNameError(entity, name))

    def _stamp_created(self, obj, actor: str) -> None:
        now = self.clock()
        obj.created_at = now
        obj.created_by = actor
        obj.last_modified_at = now
        obj.last_modified_by = actor

    def _stamp_modified(self, obj, actor: str) -> None:
        obj.last_modified_at = next_stamp(self.clock(), obj.last_modified_at)
        obj.last_modified_by = actor

    def _filtered(self, model, search: Optional[str], status: Optional[str]):
        query = self.db.query(model)
        search = trim(search)
        if search:
            query = query.filter(model.name.ilike(f"%{escape_like(search)}%", escape="\\"))
        if status == STATUS_ACTIVE:
            query = query.filter(model.is_active.is_(True))
        elif status == STATUS_INACTIVE:
            query = query.filter(model.is_active.is_(False))
        return query

    def _toggle(self, model, entity_id: int, entity: str, actor: str):
        obj = self._get(model, entity_id, entity)
        obj.is_active = not obj.is_active
        self._stamp_modified(obj, actor)
        self.db.commit()
        self.db.refresh(obj)
        logger.info(f"{entity} {obj.id} active={obj.is_active} (by {actor})")
        return obj

    def _save(self, obj):
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    def list_categories(self, search: Optional[str] = None, status: Optional[str] = None) -> List[Category]:
        return self._filtered(Category, search, status).order_by(Category.name).all()

    def get_category(self, category_id: int) -> Category:
        return self._get(Category, category_id, "Category")

    def create_category(self, data: category_schemas.CategoryCreate, actor: str) -> Category:
        name = trim(data.name)
        description = trim_optional(data.description)

        errors = ErrorCollector()
        errors.require("name", name, "Name is required.")
        self._check_name(errors, Category, "Category", name)
        errors.raise_if_any()

        category = Category(name=name, description=description, is_active=True)
        self._stamp_created(category, actor)
        self._save(category)
        logger.info(f"Category {category.id} '{category.name}' created by {actor}")
        return category

    def update_category(self, category_id: int, data: category_schemas.CategoryUpdate, actor: str) -> Category:
        category = self.get_category(category_id)
        name = trim(data.name)
        description = trim_optional(data.description)

        errors = ErrorCollector()
        errors.require("name", name, "Name is required.")
        self._check_name(errors, Category, "Category", name, exclude_id=category.id)
        errors.raise_if_any()

        category.name = name
        category.description = description
        if data.is_active is not None:
            category.is_active = data.is_active
        self._stamp_modified(category, actor)
        self.db.commit()
        self.db.refresh(category)
        return category

    def toggle_category(self, category_id: int, actor: str) -> Category:
        return self._toggle(Category, category_id, "Category", actor)

    # ------------------------------------------------------------------
    # Suppliers
    # ------------------------------------------------------------------

    def list_suppliers(self, search: Optional[str] = None, status: Optional[str] = None) -> List[Supplier]:
        return self._filtered(Supplier, search, status).order_by(Supplier.name).all()

    def get_supplier(self, supplier_id: int) -> Supplier:
        return self._get(Supplier, supplier_id, "Supplier")

    def _clean_supplier(self, data, errors: ErrorCollector) -> Tuple[str, Optional[str], dict, list]:
        name = trim(data.name)
        contact_num = trim(data.company_contact_num)

        address = data.address
        address_doc = {
            "region": trim_optional(address.region),
            "province": trim_optional(address.province),
            "city": trim_optional(address.city),
            "barangay": trim_optional(address.barangay),
            "street_address": trim(address.street_address),
            "postal_code": trim_optional(address.postal_code),
        }

        errors.require("name", name, "Company name is required.")
        errors.require("company_contact_num", contact_num, "Company phone is required.")
        errors.match(
            "company_contact_num", contact_num, COMPANY_PHONE_RE,
            "Invalid format. (e.g., 09xxxxxxxxx, +63 2 123 4567, or 1800 10 123 4567)",
        )
        errors.require("address.street_address", address_doc["street_address"], "Street / House No. is required.")

        contacts = []
        for i, contact in enumerate(data.contact_persons):
            prefix = f"contact_persons[{i}]"
            doc = {
                "name": trim(contact.name),
                "email": trim(contact.email),
                "phone": trim(contact.phone),
            }
            errors.require(f"{prefix}.name", doc["name"], "Contact name is required.")
            errors.require(f"{prefix}.email", doc["email"], "Email is required.")
            errors.email(f"{prefix}.email", doc["email"], "Invalid email address.")
            errors.require(f"{prefix}.phone", doc["phone"], "Phone is required.")
            errors.match(
                f"{prefix}.phone", doc["phone"], MOBILE_RE,
                "Invalid Philippine phone number. (e.g., 09xxxxxxxxx or +639xxxxxxxxx)",
            )
            contacts.append(doc)

        return name, contact_num, address_doc, contacts

    def create_supplier(self, data: supplier_schemas.SupplierCreate, actor: str) -> Supplier:
        errors = ErrorCollector()
        name, contact_num, address, contacts = self._clean_supplier(data, errors)
        self._check_name(errors, Supplier, "Supplier", name)
        errors.raise_if_any()

        supplier = Supplier(
            name=name, company_contact_num=contact_num,
            address=address, contact_persons=contacts, is_active=True,
        )
        self._stamp_created(supplier, actor)
        self._save(supplier)
        logger.info(f"Supplier {supplier.id} '{supplier.name}' created by {actor}")
        return supplier

    def update_supplier(self, supplier_id: int, data: supplier_schemas.SupplierUpdate, actor: str) -> Supplier:
        supplier = self.get_supplier(supplier_id)
        errors = ErrorCollector()
        name, contact_num, address, contacts = self._clean_supplier(data, errors)
        self._check_name(errors, Supplier, "Supplier", name, exclude_id=supplier.id)
        errors.raise_if_any()

        supplier.name = name
        supplier.company_contact_num = contact_num
        supplier.address = address
        supplier.contact_persons = contacts
        if data.is_active is not None:
            supplier.is_active = data.is_active
        self._stamp_modified(supplier, actor)
        self.db.commit()
        self.db.refresh(supplier)
        return supplier

    def toggle_supplier(self, supplier_id: int, actor: str) -> Supplier:
        return self._toggle(Supplier, supplier_id, "Supplier", actor)

    # ------------------------------------------------------------------
    # Reasons
    # ------------------------------------------------------------------

    def list_reasons(self) -> List[Reason]:
        return self.db.query(Reason).order_by(Reason.name).all()

    def get_reason(self, reason_id: int) -> Reason:
        return self._get(Reason, reason_id, "Reason")

    def _clean_reason(self, data, errors: ErrorCollector):
        name = trim(data.name)
        description = trim_optional(data.description)
        reason_type = trim_optional(data.type)
        errors.require("name", name, "Reason name is required.")
        if reason_type is not None and reason_type not in REASON_TYPES:
            errors.add("type", "Type must be one of In, Out or Both.")
        return name, description, reason_type

    def create_reason(self, data: reason_schemas.ReasonCreate) -> Reason:
        errors = ErrorCollector()
        name, description, reason_type = self._clean_reason(data, errors)
        self._check_name(errors, Reason, "Reason", name)
        errors.raise_if_any()
        return self._save(Reason(name=name, description=description, type=reason_type))

    def update_reason(self, reason_id: int, data: reason_schemas.ReasonUpdate) -> Reason:
        reason = self.get_reason(reason_id)
        errors = ErrorCollector()
        name, description, reason_type = self._clean_reason(data, errors)
        self._check_name(errors, Reason, "Reason", name, exclude_id=reason.id)
        errors.raise_if_any()

        reason.name = name
        reason.description = description
        reason.type = reason_type
        self.db.commit()
        self.db.refresh(reason)
        return reason

    def delete_reason(self, reason_id: int) -> str:
        # Movements keep the dangling id and show up as "Uncategorized"
        reason = self.get_reason(reason_id)
        name = reason.name
        self.db.delete(reason)
        self.db.commit()
        logger.info(f"Reason {reason_id} '{name}' deleted")
        return name

    def initial_stock_reason(self) -> Reason:
        """The well-known reason used when a product is created with stock; created on first use."""
        reason = self.db.query(Reason).filter(func.lower(Reason.name) == INITIAL_STOCK_REASON.lower()).first()
        if reason is None:
            reason = Reason(name=INITIAL_STOCK_REASON, type=ReasonType.IN.value,
                            description=INITIAL_STOCK_DESCRIPTION)
            self.db.add(reason)
            self.db.flush()
        return reason

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------

    def list_products(
        self,
        search: Optional[str] = None,
        status: Optional[str] = None,
        category_id: Optional[int] = None,
        supplier_id: Optional[int] = None,
        page: int = 1,
        page_size: int = 10,
    ) -> Tuple[List[Product], int]:
        query = self._filtered(Product, search, status)
        if category_id is not None:
            query = query.filter(Product.category_id == category_id)
        if supplier_id is not None:
            query = query.filter(Product.supplier_id == supplier_id)

        total = query.count()
        items = query.order_by(Product.id).offset((page - 1) * page_size).limit(page_size).all()
        return items, total

    def get_product(self, product_id: int) -> Product:
        return self._get(Product, product_id, "Product")

    def _check_references(self, errors: ErrorCollector, category_id: int, supplier_id: int) -> None:
        if self.db.query(Category.id).filter(Category.id == category_id).first() is None:
            errors.add("category_id", "Category not found.")
        if self.db.query(Supplier.id).filter(Supplier.id == supplier_id).first() is None:
            errors.add("supplier_id", "Supplier not found.")

    def create_product(self, data: product_schemas.ProductCreate, actor: str) -> Product:
        name = trim(data.name)

        errors = ErrorCollector()
        errors.require("name", name, "Name is required.")
        self._check_references(errors, data.category_id, data.supplier_id)
        self._check_name(errors, Product, "Product", name)
        errors.raise_if_any()

        product = Product(
            name=name, quantity=data.quantity, price=data.price,
            category_id=data.category_id, supplier_id=data.supplier_id, is_active=True,
        )
        self._stamp_created(product, actor)
        self.db.add(product)
        self.db.flush()

        # Seed the ledger so that quantity == sum(movements) from the start
        if data.quantity > 0:
            reason = self.initial_stock_reason()
            self.db.add(StockMovement(
                product_id=product.id,
                reason_id=reason.id,
                quantity_change=data.quantity,
                remarks=INITIAL_STOCK_REMARKS,
                timestamp=product.created_at,
                user_name=actor,
            ))

        self.db.commit()
        self.db.refresh(product)
        logger.info(f"Product {product.id} '{product.name}' created by {actor} with quantity {product.quantity}")
        return product

    def update_product(self, product_id: int, data: product_schemas.ProductUpdate, actor: str) -> Product:
        product = self.get_product(product_id)
        name = trim(data.name)

        errors = ErrorCollector()
        errors.require("name", name, "Name is required.")
        self._check_references(errors, data.category_id, data.supplier_id)
        self._check_name(errors, Product, "Product", name, exclude_id=product.id)
        errors.raise_if_any()

        product.name = name
        product.price = data.price
        product.category_id = data.category_id
        product.supplier_id = data.supplier_id
        if data.is_active is not None:
            product.is_active = data.is_active
        self._stamp_modified(product, actor)
        self.db.commit()
        self.db.refresh(product)
        return product

    def toggle_product(self, product_id: int, actor: str) -> Product:
        return self._toggle(Product, product_id, "Product", actor)
