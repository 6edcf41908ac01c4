"""
URL configuration for the catalog.
"""

from django.urls import path

from . import views

app_name = 'catalog'

urlpatterns = [
    path('', views.CatalogListView.as_view(), name='list'),
    path('<uuid:pk>/', views.CatalogDetailView.as_view(), name='detail'),
]
