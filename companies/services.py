import logging

from django.db import IntegrityError, transaction

from workflow.exceptions import AlreadyExists, NotFound, require_text
from .models import Company

logger = logging.getLogger(__name__)


class CompanyService:
    """
    Owns the Company record of each employer.
    ``payment_verified`` is write-protected here: profile updates never touch it.
    """
    PROFILE_FIELDS = ('name', 'description', 'industry', 'website', 'address', 'phone_number', 'logo')

    @classmethod
    def _clean_profile(cls, profile):
        data = {key: value for key, value in profile.items() if key in cls.PROFILE_FIELDS}
        data['name'] = require_text(data.get('name'), "Company name")
        data['address'] = require_text(data.get('address'), "Address")
        return data

    @classmethod
    @transaction.atomic
    def create_company(cls, owner, profile):
        if Company.objects.filter(owner=owner).exists():
            raise AlreadyExists("Company already exists for this employer.")

        data = cls._clean_profile(profile)
        try:
            # Savepoint so a lost race on the one-to-one owner keeps the outer transaction usable
            with transaction.atomic():
                company = Company.objects.create(owner=owner, payment_verified=False, **data)
        except IntegrityError:
            raise AlreadyExists("Company already exists for this employer.")

        logger.info("Company %s created for employer %s", company.pk, owner.pk)
        return company

    @classmethod
    @transaction.atomic
    def update_company(cls, owner, profile):
        try:
            company = Company.objects.select_for_update().get(owner=owner)
        except Company.DoesNotExist:
            raise NotFound("Company not found.")

        for field, value in cls._clean_profile(profile).items():
            setattr(company, field, value)
        company.save()
        return company

    @classmethod
    def get_company(cls, owner):
        try:
            return Company.objects.get(owner=owner)
        except Company.DoesNotExist:
            raise NotFound("Company not found.")

    @classmethod
    def get_company_by_id(cls, company_id):
        try:
            return Company.objects.select_related('owner').get(pk=company_id)
        except Company.DoesNotExist:
            raise NotFound("Company not found.")

    @classmethod
    @transaction.atomic
    def mark_payment_verified(cls, company_id):
        """
        One-way switch: nothing sets the flag back to False.
        """
        company = Company.objects.select_for_update().get(pk=company_id)
        if not company.payment_verified:
            company.payment_verified = True
            company.save(update_fields=['payment_verified', 'updated_at'])
            logger.info("Company %s is now payment verified", company.pk)
        return company
