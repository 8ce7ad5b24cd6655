from django.contrib import admin
from .models import PointsAccount, RewardRule, RewardSetting, RewardLog


@admin.register(PointsAccount)
class PointsAccountAdmin(admin.ModelAdmin):
    list_display = ['user', 'reward_points', 'last_login_reward_at', 'updated_at']
    search_fields = ['user__username', 'user__email']
    readonly_fields = ['reward_points', 'last_login_reward_at', 'created_at', 'updated_at']

    def has_add_permission(self, request):
        return False  # Points accounts are created automatically


@admin.register(RewardRule)
class RewardRuleAdmin(admin.ModelAdmin):
    list_display = ['id', 'reward_type', 'min_purchase_amount', 'max_purchase_amount',
                    'points_multiplier', 'fixed_points', 'is_active']
    list_filter = ['reward_type', 'is_active']
    list_editable = ['is_active']


@admin.register(RewardSetting)
class RewardSettingAdmin(admin.ModelAdmin):
    list_display = ['setting_key', 'setting_value', 'updated_by', 'updated_at']


@admin.register(RewardLog)
class RewardLogAdmin(admin.ModelAdmin):
    list_display = ['account', 'type', 'points', 'reference_id', 'created_at']
    list_filter = ['type', 'created_at']
    search_fields = ['account__user__username', 'reference_id']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
