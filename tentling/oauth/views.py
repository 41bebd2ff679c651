"""Read-only views of registered apps.

Only the public fields are shown; MAC credentials are never revealed here.
"""

from django.http import JsonResponse
from django.views.decorators.http import require_GET

from .models import App


@require_GET
def app_list(request):
    return JsonResponse([app.as_json() for app in App.objects.all()], safe=False)


@require_GET
def app_detail(request, public_id):
    try:
        app = App.objects.get(public_id=public_id)
    except App.DoesNotExist:
        return JsonResponse({"error": "App not found"}, status=404)
    return JsonResponse(app.as_json())
