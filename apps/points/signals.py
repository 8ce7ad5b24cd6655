from django.db.models.signals import post_save
from django.dispatch import receiver
from django.contrib.auth import get_user_model
from .services import LoyaltyLedger

User = get_user_model()


@receiver(post_save, sender=User)
def create_points_account_for_new_user(sender, instance, created, **kwargs):
    """Every user gets a zero-balance points account"""
    if created:
        LoyaltyLedger.get_or_create_account(instance)
