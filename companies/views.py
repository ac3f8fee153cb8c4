from rest_framework import permissions, status
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView
from jobsphere_core.downloads import attachment
from workflow.orchestrator import Workflow
from workflow.principal import Principal
from .serializers import CompanySerializer


class MyCompanyView(APIView):
    """
    POST: Employer registers their company (once).
    GET: View my company.
    PUT: Update my company profile. ``payment_verified`` cannot be changed here.
    """
    permission_classes = [permissions.IsAuthenticated]
    parser_classes = [JSONParser, MultiPartParser, FormParser]  # For logo upload

    def get(self, request):
        company = Workflow.get_own_company(Principal.from_user(request.user))
        return Response(CompanySerializer(company).data)

    def post(self, request):
        serializer = CompanySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        company = Workflow.create_company(Principal.from_user(request.user), serializer.validated_data)
        return Response(CompanySerializer(company).data, status=status.HTTP_201_CREATED)

    def put(self, request):
        serializer = CompanySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        company = Workflow.update_company(Principal.from_user(request.user), serializer.validated_data)
        return Response(CompanySerializer(company).data)


class CompanyDetailView(APIView):
    """
    Public company profile.
    """
    permission_classes = [permissions.AllowAny]

    def get(self, request, pk):
        return Response(CompanySerializer(Workflow.get_company_by_id(pk)).data)


class CompanyLogoView(APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request, pk):
        return attachment(Workflow.get_company_by_id(pk).logo, as_attachment=False)
