"""
Customer System

Registration, login and profile lifecycle for customer accounts.
"""

from customer_api.customer.services.customer_service import CustomerService

__all__ = [
    "CustomerService",
]
