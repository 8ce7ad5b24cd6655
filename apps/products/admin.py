from django import forms
from django.contrib import admin
from django.db import transaction

from .models import Inventory, Product
from .services import InventoryLedger


class InventoryInline(admin.StackedInline):
    """Read-only view of the stock counter; changes go through InventoryAdmin"""
    model = Inventory
    extra = 0
    can_delete = False
    fields = ['stock_level', 'reorder_threshold', 'updated_by', 'updated_at']
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ['name', 'sku', 'price', 'stock_level', 'created_by', 'created_at']
    search_fields = ['name', 'sku']
    inlines = [InventoryInline]

    def stock_level(self, obj):
        inventory = getattr(obj, 'inventory', None)
        return inventory.stock_level if inventory else 0
    stock_level.short_description = 'Stock'


class InventoryAdjustmentForm(forms.ModelForm):
    stock_delta = forms.IntegerField(
        initial=0,
        required=False,
        help_text='Units to add to stock; negative to remove',
    )

    class Meta:
        model = Inventory
        fields = ['product', 'reorder_threshold']

    def clean_stock_delta(self):
        delta = self.cleaned_data.get('stock_delta') or 0
        if self.instance.stock_level + delta < 0:
            raise forms.ValidationError(f"Only {self.instance.stock_level} units in stock")
        return delta


@admin.register(Inventory)
class InventoryAdmin(admin.ModelAdmin):
    form = InventoryAdjustmentForm
    list_display = ['product', 'stock_level', 'reorder_threshold', 'is_low_stock', 'updated_at']
    list_select_related = ['product']
    search_fields = ['product__name', 'product__sku']
    readonly_fields = ['stock_level', 'updated_by', 'updated_at']

    def get_readonly_fields(self, request, obj=None):
        if obj is not None:
            return ['product'] + self.readonly_fields
        return self.readonly_fields

    def save_model(self, request, obj, form, change):
        """Apply the delta under the ledger's row lock instead of saving the loaded count"""
        delta = form.cleaned_data.get('stock_delta') or 0
        with transaction.atomic():
            record = InventoryLedger.adjust(obj.product_id, delta, actor=request.user)
            Inventory.objects.filter(pk=record.pk).update(reorder_threshold=obj.reorder_threshold)

        obj.pk = record.pk
        obj.refresh_from_db()

    def is_low_stock(self, obj):
        return obj.is_low_stock
    is_low_stock.boolean = True
