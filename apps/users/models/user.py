from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """Platform account; the role decides checkout rights and loyalty eligibility"""
    ROLE_USER = 'user'
    ROLE_TENANT = 'tenant'
    ROLE_ADMIN = 'admin'

    ROLE_CHOICES = [
        (ROLE_USER, 'User'),
        (ROLE_TENANT, 'Tenant'),
        (ROLE_ADMIN, 'Admin'),
    ]

    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_USER)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'users'
        verbose_name = 'User'
        verbose_name_plural = 'Users'

    def __str__(self):
        return self.username or f"User {self.id}"

    @property
    def is_loyalty_member(self):
        """Only regular user accounts earn and redeem reward points"""
        return self.role == self.ROLE_USER

    @property
    def is_elevated(self):
        return self.role in (self.ROLE_TENANT, self.ROLE_ADMIN)
