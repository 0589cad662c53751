"""Customer services."""

from customer_api.customer.services.customer_service import CustomerService

__all__ = ["CustomerService"]
