from django.contrib import admin
from .models import SeekerProfile, Job, Application, ApplicationStatusChange


admin.site.register(SeekerProfile)


@admin.register(Job)
class JobAdmin(admin.ModelAdmin):
    list_display = ('title', 'company', 'status', 'created_at', 'published_at')
    list_filter = ('status', 'category')
    readonly_fields = ('status', 'reviewed_by', 'reviewed_at', 'published_at', 'closed_at')


class ApplicationStatusChangeInline(admin.TabularInline):
    model = ApplicationStatusChange
    extra = 0
    readonly_fields = ('from_status', 'to_status', 'notes', 'changed_by', 'changed_at')
    can_delete = False


@admin.register(Application)
class ApplicationAdmin(admin.ModelAdmin):
    list_display = ('job', 'job_seeker', 'status', 'applied_at')
    list_filter = ('status',)
    readonly_fields = ('status',)
    inlines = [ApplicationStatusChangeInline]
