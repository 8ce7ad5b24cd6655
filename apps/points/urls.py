from django.urls import path
from . import views

urlpatterns = [
    path('balance', views.get_points_balance, name='points-balance'),
    path('history', views.get_points_history, name='points-history'),
    path('daily-login', views.claim_daily_login, name='points-daily-login'),
    path('rules', views.get_reward_rules, name='reward-rules'),
]
