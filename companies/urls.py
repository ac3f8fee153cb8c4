from django.urls import path
from .views import MyCompanyView, CompanyDetailView, CompanyLogoView

urlpatterns = [
    path('my/', MyCompanyView.as_view(), name='my-company'),
    path('<int:pk>/', CompanyDetailView.as_view(), name='company-detail'),
    path('<int:pk>/logo/', CompanyLogoView.as_view(), name='company-logo'),
]
