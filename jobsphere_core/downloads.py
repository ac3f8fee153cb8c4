import os

from django.http import FileResponse

from workflow.exceptions import NotFound


def attachment(field_file, as_attachment=True):
    """
    Stream a stored upload back to the caller as a download.
    Callers authorize access first; media is never served from MEDIA_URL.
    """
    if not field_file:
        raise NotFound("File not found.")
    try:
        handle = field_file.open('rb')
    except FileNotFoundError:
        raise NotFound("File not found.")
    return FileResponse(handle, as_attachment=as_attachment, filename=os.path.basename(field_file.name))
