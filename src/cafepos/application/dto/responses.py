from __future__ import annotations

from pydantic import BaseModel, Field


class MoneyResponse(BaseModel):
    amountCents: int
    currency: str
    amount: str


class AddOnResponse(BaseModel):
    name: str
    price: MoneyResponse
    allowQuantity: bool


class MenuItemResponse(BaseModel):
    itemId: str
    name: str
    price: MoneyResponse
    category: str
    addOns: list[AddOnResponse] = Field(default_factory=list)


class MenuResponse(BaseModel):
    items: list[MenuItemResponse] = Field(default_factory=list)
    drinkCount: int
    foodCount: int


class SelectedAddOnResponse(BaseModel):
    name: str
    price: MoneyResponse
    allowQuantity: bool
    quantity: int


class OrderItemResponse(BaseModel):
    menuItem: MenuItemResponse
    quantity: int
    addOns: list[SelectedAddOnResponse] = Field(default_factory=list)
    customText: str = ""
    unitPrice: MoneyResponse
    subtotal: MoneyResponse


class CartResponse(BaseModel):
    lines: list[OrderItemResponse] = Field(default_factory=list)
    total: MoneyResponse


class OrderResponse(BaseModel):
    orderId: str
    items: list[OrderItemResponse] = Field(default_factory=list)
    total: MoneyResponse
    itemCount: int
    timestamp: str
    date: str


class CheckoutResponse(BaseModel):
    order: OrderResponse
    change: MoneyResponse


class OrderListResponse(BaseModel):
    orders: list[OrderResponse] = Field(default_factory=list)
    orderCount: int
    total: MoneyResponse


class SaleSessionResponse(BaseModel):
    sessionId: str
    name: str | None = None
    date: str
    closedAt: str
    lastUpdated: str | None = None
    orders: list[OrderResponse] = Field(default_factory=list)
    totalSales: MoneyResponse
    totalItems: int
    orderCount: int


class ArchiveResponse(BaseModel):
    sessions: list[SaleSessionResponse] = Field(default_factory=list)
    sessionCount: int
    orderCount: int
    totalSales: MoneyResponse


class ImportPreviewResponse(BaseModel):
    previewId: str
    sessions: list[SaleSessionResponse] = Field(default_factory=list)


class ImportResultResponse(BaseModel):
    importedSessions: int
    importedOrders: int


class ItemSalesResponse(BaseModel):
    name: str
    quantity: int
    revenue: MoneyResponse


class DailyRevenueResponse(BaseModel):
    date: str
    revenue: MoneyResponse
    orderCount: int


class AnalyticsResponse(BaseModel):
    range: str
    totalRevenue: MoneyResponse
    totalOrders: int
    totalItems: int
    averageOrderValue: MoneyResponse
    topSellingItems: list[ItemSalesResponse] = Field(default_factory=list)
    revenueByCategory: dict[str, MoneyResponse] = Field(default_factory=dict)
    ordersByHour: list[int] = Field(default_factory=list)
    peakHour: str
    dailyRevenue: list[DailyRevenueResponse] = Field(default_factory=list)


class DashboardResponse(BaseModel):
    todayOrderCount: int
    todayRevenue: MoneyResponse
    todayItemsSold: int
    menuItemCount: int
    drinkCount: int
    foodCount: int
    archivedRevenue: MoneyResponse
    totalRevenue: MoneyResponse
    recentOrders: list[OrderResponse] = Field(default_factory=list)
