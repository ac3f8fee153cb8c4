"""
Read-only projections over jobs and applications.

Nothing here writes; the employer pipeline joins Application -> Job -> Company
at query time instead of keeping a denormalised dashboard in sync.
"""
from django.db.models import Count

from .models import Application


def _applications():
    return Application.objects.select_related('job', 'job__company', 'job_seeker').prefetch_related('status_history')


def list_by_job(job):
    return _applications().filter(job=job).order_by('-applied_at', '-id')


def list_by_job_seeker(job_seeker):
    return _applications().filter(job_seeker=job_seeker).order_by('-applied_at', '-id')


def list_all_for_employer(employer):
    """All applications received across every job of the employer's company."""
    return _applications().filter(job__company__owner=employer).order_by('-applied_at', '-id')


def pipeline_summary(employer):
    counts = {status: 0 for status in Application.Status.values}
    rows = (
        Application.objects
        .filter(job__company__owner=employer)
        .order_by()
        .values('status')
        .annotate(total=Count('id'))
    )
    for row in rows:
        counts[row['status']] = row['total']
    counts['TOTAL'] = sum(counts.values())
    return counts
