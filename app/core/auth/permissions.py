# app/core/auth/permissions.py
from enum import Enum
from typing import Dict, FrozenSet


class Role(str, Enum):
    administrador = "administrador"
    vendedor = "vendedor"


class Capability(str, Enum):
    view_products = "view_products"
    manage_products = "manage_products"
    delete_product = "delete_product"
    adjust_stock = "adjust_stock"
    view_suppliers = "view_suppliers"
    manage_suppliers = "manage_suppliers"
    delete_supplier = "delete_supplier"
    create_sale = "create_sale"
    view_sales = "view_sales"
    view_statistics = "view_statistics"
    view_invoices = "view_invoices"
    manage_invoices = "manage_invoices"
    delete_invoice = "delete_invoice"


# Cada rol debe figurar aquí; los administradores tienen todas las capacidades
ROLE_CAPABILITIES: Dict[Role, FrozenSet[Capability]] = {
    Role.administrador: frozenset(Capability),
    Role.vendedor: frozenset({
        Capability.view_products,
        Capability.manage_products,
        Capability.create_sale,
        Capability.view_sales,
    }),
}


def has_permission(role: Role, capability: Capability) -> bool:
    return capability in ROLE_CAPABILITIES[role]
