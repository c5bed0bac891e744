from wmsconsole.schemas.order import Order, OrderCreate, OrderLineIn, OrderLineItem
from wmsconsole.schemas.picking_task import PickingTask
from wmsconsole.schemas.product import Product, ProductIn

__all__ = [
    "Order",
    "OrderCreate",
    "OrderLineIn",
    "OrderLineItem",
    "PickingTask",
    "Product",
    "ProductIn",
]
