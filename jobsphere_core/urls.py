from django.contrib import admin
from django.urls import path, include
from jobs.views import AdminPendingJobsView, AdminApproveJobView, AdminRejectJobView
from payments.views import AdminPendingPaymentsView, AdminPaymentDetailView, AdminDecidePaymentView
from .admin_views import AdminUserListView, AdminUserStatusView, AdminSystemStatsView

admin_urlpatterns = [
    path('payments/', AdminPendingPaymentsView.as_view(), name='admin-pending-payments'),
    path('payments/<int:pk>/', AdminPaymentDetailView.as_view(), name='admin-payment-detail'),
    path('payments/<int:pk>/decide/', AdminDecidePaymentView.as_view(), name='admin-decide-payment'),
    path('jobs/pending/', AdminPendingJobsView.as_view(), name='admin-pending-jobs'),
    path('jobs/<int:pk>/approve/', AdminApproveJobView.as_view(), name='admin-approve-job'),
    path('jobs/<int:pk>/reject/', AdminRejectJobView.as_view(), name='admin-reject-job'),
    path('users/', AdminUserListView.as_view(), name='admin-users'),
    path('users/<int:user_id>/status/', AdminUserStatusView.as_view(), name='admin-user-status'),
    path('stats/', AdminSystemStatsView.as_view(), name='admin-stats'),
]

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/users/', include('users.urls')),
    path('api/companies/', include('companies.urls')),
    path('api/payments/', include('payments.urls')),
    path('api/jobs/', include('jobs.urls')),
    path('api/notifications/', include('notifications.urls')),
    path('api/admin/', include(admin_urlpatterns)),
]
