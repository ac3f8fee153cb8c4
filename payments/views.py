from rest_framework import permissions, status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView
from jobsphere_core.downloads import attachment
from workflow.orchestrator import Workflow
from workflow.principal import Principal
from .serializers import PaymentDecisionSerializer, PaymentProofSerializer, PaymentStatusSerializer


class SubmitPaymentProofView(APIView):
    """
    Employer uploads proof of the listing fee. Starts in PENDING_REVIEW.
    """
    permission_classes = [permissions.IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser]

    def post(self, request):
        serializer = PaymentProofSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        proof = Workflow.submit_payment_proof(
            Principal.from_user(request.user),
            serializer.validated_data['reference_number'],
            serializer.validated_data['file'],
        )
        return Response(PaymentProofSerializer(proof).data, status=status.HTTP_201_CREATED)


class MyPaymentStatusView(APIView):
    """
    Current verification status of my company, with the latest proof.
    """
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        result = Workflow.get_own_payment_status(Principal.from_user(request.user))
        return Response(PaymentStatusSerializer(result).data)


class CompanyPaymentStatusView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, company_id):
        result = Workflow.get_payment_status(Principal.from_user(request.user), company_id)
        return Response(PaymentStatusSerializer(result).data)


class MyPaymentHistoryView(APIView):
    """
    Every proof my company ever submitted, newest first.
    """
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        proofs = Workflow.get_own_payment_history(Principal.from_user(request.user))
        return Response(PaymentProofSerializer(proofs, many=True).data)


class PaymentProofFileView(APIView):
    """
    Download the uploaded proof. Company owner and admins only.
    """
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, pk):
        proof = Workflow.get_payment_proof(Principal.from_user(request.user), pk)
        return attachment(proof.file)


# --- ADMIN REVIEW ---

class AdminPendingPaymentsView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        proofs = Workflow.list_pending_payments(Principal.from_user(request.user))
        return Response(PaymentProofSerializer(proofs, many=True).data)


class AdminPaymentDetailView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, pk):
        proof = Workflow.get_payment_proof(Principal.from_user(request.user), pk)
        return Response(PaymentProofSerializer(proof).data)


class AdminDecidePaymentView(APIView):
    """
    Admin verifies or rejects a pending proof.
    """
    permission_classes = [permissions.IsAuthenticated]

    def put(self, request, pk):
        serializer = PaymentDecisionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        proof = Workflow.decide_payment_proof(
            Principal.from_user(request.user),
            pk,
            serializer.validated_data['status'],
            serializer.validated_data['admin_notes'],
        )
        return Response(PaymentProofSerializer(proof).data)
