from django.urls import path
from .views import (
    JobListView, JobDetailView, ResubmitJobView, CloseJobView, MyJobsView,
    CompanyJobsView, SeekerProfileView, SeekerResumeView, ApplyJobView, MyApplicationsView,
    JobApplicationsView, EmployerApplicationsView, ApplicationStatusView, ApplicationResumeView
)

urlpatterns = [
    # Public & Employer
    path('', JobListView.as_view(), name='job-list'),  # GET (Active), POST (Create)
    path('<int:pk>/', JobDetailView.as_view(), name='job-detail'),
    path('<int:pk>/resubmit/', ResubmitJobView.as_view(), name='job-resubmit'),
    path('<int:pk>/close/', CloseJobView.as_view(), name='job-close'),
    path('my/', MyJobsView.as_view(), name='my-jobs'),
    path('companies/<int:company_id>/', CompanyJobsView.as_view(), name='company-jobs'),

    # Seeker
    path('profile/me/', SeekerProfileView.as_view(), name='seeker-profile'),
    path('profile/me/resume/', SeekerResumeView.as_view(), name='seeker-resume'),
    path('<int:job_id>/apply/', ApplyJobView.as_view(), name='job-apply'),
    path('applications/my/', MyApplicationsView.as_view(), name='my-applications'),

    # Employer Management
    path('<int:job_id>/applications/', JobApplicationsView.as_view(), name='job-applications'),
    path('applications/received/', EmployerApplicationsView.as_view(), name='employer-applications'),
    path('applications/<int:pk>/status/', ApplicationStatusView.as_view(), name='application-status'),
    path('applications/<int:pk>/resume/', ApplicationResumeView.as_view(), name='application-resume'),
]
