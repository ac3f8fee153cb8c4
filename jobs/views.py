from rest_framework import filters, generics, permissions, status
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView
from jobsphere_core.downloads import attachment
from workflow.orchestrator import Workflow
from workflow.principal import Principal
from .pagination import JobPagination
from .serializers import (
    ApplicationSerializer, ApplicationStatusSerializer, ApplySerializer,
    JobRejectionSerializer, JobSearchSerializer, JobSerializer, SeekerProfileSerializer
)


def _principal(request):
    if request.user and request.user.is_authenticated:
        return Principal.from_user(request.user)
    return None


# --- PUBLIC / SEEKER JOB SEARCH ---

class KeywordSearchFilter(filters.SearchFilter):
    search_param = 'keyword'


class JobListView(generics.ListCreateAPIView):
    """
    GET: Public, paginated list of ACTIVE jobs (keyword, category, location, salary filters, ordering).
    POST: Employer posts a new job. It waits for admin approval.
    """
    serializer_class = JobSerializer
    permission_classes = [permissions.IsAuthenticatedOrReadOnly]
    pagination_class = JobPagination
    filter_backends = [KeywordSearchFilter, filters.OrderingFilter]
    search_fields = ['title', 'description', 'requirements', 'company__name']
    ordering_fields = ['published_at', 'min_salary', 'max_salary', 'title']

    def get_queryset(self):
        params = JobSearchSerializer(data=self.request.query_params)
        params.is_valid(raise_exception=True)
        return Workflow.list_active_jobs(**params.validated_data)

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        job = Workflow.create_job(_principal(request), serializer.validated_data)
        return Response(JobSerializer(job).data, status=status.HTTP_201_CREATED)


class JobDetailView(APIView):
    """
    GET: View job details. Non-active jobs are only visible to their owner and admins.
    PUT: Owner edits a job that is still pending approval.
    """
    permission_classes = [permissions.IsAuthenticatedOrReadOnly]

    def get(self, request, pk):
        job = Workflow.get_job(_principal(request), pk)
        return Response(JobSerializer(job).data)

    def put(self, request, pk):
        serializer = JobSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        job = Workflow.update_job(_principal(request), pk, serializer.validated_data)
        return Response(JobSerializer(job).data)


class ResubmitJobView(APIView):
    """
    Owner resubmits a rejected job. Creates a new posting pending approval.
    """
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, pk):
        serializer = JobSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        job = Workflow.resubmit_job(_principal(request), pk, serializer.validated_data)
        return Response(JobSerializer(job).data, status=status.HTTP_201_CREATED)


class CloseJobView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def put(self, request, pk):
        job = Workflow.close_job(_principal(request), pk)
        return Response(JobSerializer(job).data)


class MyJobsView(APIView):
    """
    Every job of my company, whatever its status.
    """
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        jobs = Workflow.list_own_jobs(_principal(request))
        return Response(JobSerializer(jobs, many=True).data)


class CompanyJobsView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, company_id):
        jobs = Workflow.list_company_jobs(_principal(request), company_id)
        return Response(JobSerializer(jobs, many=True).data)


# --- SEEKER ACTIONS ---

class SeekerProfileView(APIView):
    """
    Manage your CV / Profile.
    """
    permission_classes = [permissions.IsAuthenticated]
    parser_classes = [JSONParser, MultiPartParser, FormParser]

    def get(self, request):
        profile = Workflow.get_seeker_profile(_principal(request))
        return Response(SeekerProfileSerializer(profile).data)

    def patch(self, request):
        serializer = SeekerProfileSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        profile = Workflow.update_seeker_profile(_principal(request), serializer.validated_data)
        return Response(SeekerProfileSerializer(profile).data)


class SeekerResumeView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        profile = Workflow.get_seeker_profile(_principal(request))
        return attachment(profile.resume)


class ApplyJobView(APIView):
    """
    Apply for a specific job ID.
    """
    permission_classes = [permissions.IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser]

    def post(self, request, job_id):
        serializer = ApplySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        application = Workflow.apply_to_job(
            _principal(request),
            job_id,
            serializer.validated_data.get('resume'),
            serializer.validated_data.get('cover_letter', ''),
        )
        return Response(ApplicationSerializer(application).data, status=status.HTTP_201_CREATED)


class MyApplicationsView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        applications = Workflow.list_own_applications(_principal(request))
        return Response(ApplicationSerializer(applications, many=True).data)


class ApplicationResumeView(APIView):
    """
    Download the resume filed with an application.
    The applicant, the employer who owns the job, and admins may read it.
    """
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, pk):
        application = Workflow.get_application(_principal(request), pk)
        return attachment(application.resume)


# --- EMPLOYER DASHBOARD ---

class JobApplicationsView(APIView):
    """
    Applications for one of MY jobs (admins may view any job).
    """
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, job_id):
        applications = Workflow.list_job_applications(_principal(request), job_id)
        return Response(ApplicationSerializer(applications, many=True).data)


class EmployerApplicationsView(APIView):
    """
    View all applications for MY jobs, with a count per status.
    """
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        applications, summary = Workflow.employer_pipeline(_principal(request))
        return Response({
            "summary": summary,
            "applications": ApplicationSerializer(applications, many=True).data,
        })


class ApplicationStatusView(APIView):
    """
    Employer moves an application along the hiring pipeline.
    """
    permission_classes = [permissions.IsAuthenticated]

    def put(self, request, pk):
        serializer = ApplicationStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        application = Workflow.update_application_status(
            _principal(request),
            pk,
            serializer.validated_data['status'],
            serializer.validated_data['employer_notes'],
        )
        return Response(ApplicationSerializer(application).data)


# --- ADMIN REVIEW ---

class AdminPendingJobsView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        jobs = Workflow.list_pending_jobs(_principal(request))
        return Response(JobSerializer(jobs, many=True).data)


class AdminApproveJobView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def put(self, request, pk):
        job = Workflow.approve_job(_principal(request), pk)
        return Response(JobSerializer(job).data)


class AdminRejectJobView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def put(self, request, pk):
        serializer = JobRejectionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        job = Workflow.reject_job(_principal(request), pk, serializer.validated_data['reason'])
        return Response(JobSerializer(job).data)
