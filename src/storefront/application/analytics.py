"""Application service: back-office analytics (admin query).

All figures are computed locally from full table reads; there are no
server-side aggregates.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass

from storefront.application.context import StoreContext
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository

UNCATEGORIZED = "Uncategorized"
TOP_PRODUCTS = 5


@dataclass(frozen=True)
class DailySales:
    date: str  # YYYY-MM-DD
    amount: str


@dataclass(frozen=True)
class TopProduct:
    name: str
    units_sold: int
    revenue: str


@dataclass(frozen=True)
class AnalyticsDTO:
    total_revenue: str
    total_orders: int
    total_products: int
    total_customers: int
    daily_sales: list[DailySales]
    orders_by_status: dict[str, int]
    products_by_category: dict[str, int]
    top_products: list[TopProduct]


class AnalyticsHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        context: StoreContext,
        currency: str,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._context = context
        self._currency = currency

    def handle(self) -> AnalyticsDTO:
        self._context.require_admin()

        orders = sorted(self._order_repo.list_all(), key=lambda o: o.created_at)
        products = self._product_repo.list_all()
        # Every order is loaded, so read all items rather than filter by id.
        items = self._order_repo.list_items() if orders else []

        revenue = Money.zero(self._currency)
        daily: dict[str, Money] = {}
        for order in orders:
            revenue = revenue + order.total_amount
            day = order.created_at.strftime("%Y-%m-%d")
            daily[day] = daily.get(day, Money.zero(self._currency)) + order.total_amount

        customers = {
            (o.customer_email or o.customer_phone or o.customer_name).lower() for o in orders
        }

        units: Counter[str] = Counter()
        sales: dict[str, Money] = {}
        for item in items:
            units[item.product_name] += item.quantity.value
            sales[item.product_name] = (
                sales.get(item.product_name, Money.zero(self._currency)) + item.line_total
            )

        return AnalyticsDTO(
            total_revenue=str(revenue),
            total_orders=len(orders),
            total_products=len(products),
            total_customers=len(customers),
            daily_sales=[DailySales(date=d, amount=str(m)) for d, m in daily.items()],
            orders_by_status=dict(Counter(o.status.value for o in orders)),
            products_by_category=dict(Counter(p.category or UNCATEGORIZED for p in products)),
            top_products=[
                TopProduct(name=name, units_sold=count, revenue=str(sales[name]))
                for name, count in units.most_common(TOP_PRODUCTS)
            ],
        )
