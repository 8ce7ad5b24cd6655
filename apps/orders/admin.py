from django.contrib import admin
from .models import Order, OrderLine, Sale


class OrderLineInline(admin.TabularInline):
    """Inline admin for order lines"""
    model = OrderLine
    extra = 0
    can_delete = False
    readonly_fields = [
        'product', 'quantity', 'unit_price', 'line_total',
        'discount_amount', 'reward_points_used', 'reward_discount_amount'
    ]


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """Orders are changed through the settlement coordinator, not edited here"""
    list_display = ['order_code', 'user', 'status', 'total_amount', 'reward_points_used',
                    'reward_points_earned', 'created_at']
    list_filter = ['status', 'payment_method', 'created_at']
    search_fields = ['order_code', 'user__username']
    ordering = ['-created_at']
    inlines = [OrderLineInline]

    def has_change_permission(self, request, obj=None):
        return False


@admin.register(Sale)
class SaleAdmin(admin.ModelAdmin):
    list_display = ['id', 'product', 'quantity', 'total_amount', 'created_at']
    readonly_fields = ['order_line', 'product', 'quantity', 'total_amount', 'created_by', 'created_at']
