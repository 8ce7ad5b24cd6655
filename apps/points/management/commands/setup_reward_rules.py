from decimal import Decimal

from django.core.management.base import BaseCommand
from apps.points.models import RewardRule, RewardSetting


class Command(BaseCommand):
    help = 'Set up default reward tiers and program settings'

    def handle(self, *args, **options):
        rules_data = [
            {
                'min_purchase_amount': Decimal('0'),
                'max_purchase_amount': Decimal('49.99'),
                'reward_type': RewardRule.TYPE_MULTIPLIER,
                'points_multiplier': Decimal('1.0'),
                'description': '1 point per unit spent under 50'
            },
            {
                'min_purchase_amount': Decimal('50'),
                'max_purchase_amount': Decimal('199.99'),
                'reward_type': RewardRule.TYPE_MULTIPLIER,
                'points_multiplier': Decimal('2.0'),
                'description': '2 points per unit spent from 50'
            },
            {
                'min_purchase_amount': Decimal('200'),
                'max_purchase_amount': None,
                'reward_type': RewardRule.TYPE_STEP,
                'fixed_points': 250,
                'description': '250 points for every 100 spent from 200'
            },
        ]

        created_count = 0
        for rule_data in rules_data:
            _, created = RewardRule.objects.get_or_create(
                min_purchase_amount=rule_data['min_purchase_amount'],
                defaults=rule_data
            )
            if created:
                created_count += 1
                self.stdout.write(
                    self.style.SUCCESS(f"Created reward rule from {rule_data['min_purchase_amount']}")
                )

        settings_data = {
            RewardSetting.ENABLE_REWARDS: '1',
            RewardSetting.MIN_REDEMPTION_POINTS: '1',
            RewardSetting.DAILY_LOGIN_BONUS: '10',
        }
        for key, value in settings_data.items():
            RewardSetting.objects.get_or_create(setting_key=key, defaults={'setting_value': value})

        self.stdout.write(
            self.style.SUCCESS(f"Reward setup complete: {created_count} rules created")
        )
