from django.urls import path
from . import views

urlpatterns = [
    path('', views.OrderListView.as_view(), name='order-list'),
    path('checkout', views.CheckoutView.as_view(), name='order-checkout'),
    path('<int:order_id>/status', views.UpdateOrderStatusView.as_view(), name='order-status'),
]
