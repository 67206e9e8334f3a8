from app.models.order import OrderPayment, SalesOrder

__all__ = [
    "OrderPayment",
    "SalesOrder",
]
