from django.urls import reverse
from rest_framework import serializers
from .models import SeekerProfile, Job, Application, ApplicationStatusChange


class SeekerProfileSerializer(serializers.ModelSerializer):
    user_name = serializers.CharField(source='user.full_name', read_only=True)
    resume_url = serializers.SerializerMethodField()

    class Meta:
        model = SeekerProfile
        fields = ['user_name', 'skills', 'resume', 'resume_url', 'portfolio_url', 'updated_at']
        read_only_fields = ['updated_at']
        extra_kwargs = {'resume': {'write_only': True}}

    def get_resume_url(self, obj):
        return reverse('seeker-resume') if obj.resume else None


class JobSerializer(serializers.ModelSerializer):
    company_name = serializers.CharField(source='company.name', read_only=True)

    class Meta:
        model = Job
        fields = [
            'id', 'company', 'company_name', 'title', 'description', 'category',
            'location', 'employment_type', 'min_salary', 'max_salary',
            'requirements', 'responsibilities', 'status', 'rejection_reason',
            'reviewed_at', 'published_at', 'closed_at', 'resubmitted_from', 'created_at', 'updated_at'
        ]
        read_only_fields = [
            'company', 'status', 'rejection_reason', 'reviewed_at', 'published_at', 'closed_at',
            'resubmitted_from', 'created_at', 'updated_at'
        ]

    def validate(self, data):
        min_salary, max_salary = data.get('min_salary'), data.get('max_salary')
        if min_salary is not None and max_salary is not None and min_salary > max_salary:
            raise serializers.ValidationError("Minimum salary cannot exceed maximum salary.")
        return data


class JobSearchSerializer(serializers.Serializer):
    """
    Query-string filters for the public job list. ``keyword`` and ``ordering``
    are handled by the view's filter backends.
    """
    category = serializers.CharField(required=False, allow_blank=True)
    location = serializers.CharField(required=False, allow_blank=True)
    min_salary = serializers.DecimalField(max_digits=12, decimal_places=2, required=False)
    max_salary = serializers.DecimalField(max_digits=12, decimal_places=2, required=False)


class JobRejectionSerializer(serializers.Serializer):
    reason = serializers.CharField(allow_blank=True)


class ApplicationStatusChangeSerializer(serializers.ModelSerializer):
    class Meta:
        model = ApplicationStatusChange
        fields = ['from_status', 'to_status', 'notes', 'changed_at']
        read_only_fields = fields


class ApplicationSerializer(serializers.ModelSerializer):
    seeker_name = serializers.CharField(source='job_seeker.full_name', read_only=True)
    seeker_email = serializers.CharField(source='job_seeker.email', read_only=True)
    job_title = serializers.CharField(source='job.title', read_only=True)
    company_name = serializers.CharField(source='job.company.name', read_only=True)
    resume_url = serializers.SerializerMethodField()
    status_history = ApplicationStatusChangeSerializer(many=True, read_only=True)

    class Meta:
        model = Application
        fields = [
            'id', 'job', 'job_title', 'company_name', 'job_seeker', 'seeker_name',
            'seeker_email', 'resume_url', 'cover_letter', 'status', 'employer_notes',
            'status_history', 'applied_at', 'updated_at'
        ]
        read_only_fields = fields

    def get_resume_url(self, obj):
        # Resumes are only handed out through the authorized download route
        return reverse('application-resume', args=[obj.pk])


class ApplySerializer(serializers.ModelSerializer):
    """
    Upload is optional: the resume stored on the seeker profile is used when absent.
    """
    class Meta:
        model = Application
        fields = ['resume', 'cover_letter']
        extra_kwargs = {'resume': {'required': False}}


class ApplicationStatusSerializer(serializers.Serializer):
    status = serializers.CharField()
    employer_notes = serializers.CharField(required=False, allow_blank=True, default='')
