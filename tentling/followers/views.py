"""Views for the followers resource.

These are called by other Tent servers, not browsers, so they
exchange JSON and are exempt from CSRF checks.
"""

import json
import logging

from django.http import HttpResponse, JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from ..discovery import DiscoveryError
from .forms import FollowerForm, FollowerUpdateForm
from .models import AlreadyFollowing, Follower
from .negotiation import IdentityConflict, follow


logger = logging.getLogger(__name__)


def error_response(message, status):
    return JsonResponse({"error": message}, status=status)


def decode_json_object(request):
    """Return the JSON object in the request body, or None if it is not one."""
    try:
        data = json.loads(request.body or b"{}")
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


@method_decorator(csrf_exempt, name="dispatch")
class FollowerListView(View):
    """List followers, or negotiate a new one."""

    def get(self, request):
        return JsonResponse([f.as_json() for f in Follower.objects.all()], safe=False)

    def post(self, request):
        data = decode_json_object(request)
        if data is None:
            return error_response("Expected a JSON object", 400)
        form = FollowerForm(data)
        if not form.is_valid():
            return JsonResponse({"error": form.errors.get_json_data()}, status=400)

        try:
            follower = follow(**form.cleaned_data)
        except DiscoveryError as e:
            return error_response(f"Discovery failed: {e.reason}", 404)
        except IdentityConflict as e:
            return error_response(f"Entity mismatch: profile is for {e.discovered_entity}", 409)
        except AlreadyFollowing as e:
            return error_response(f"Already following: {e.entity}", 409)
        return JsonResponse(follower.credentials_json())


@method_decorator(csrf_exempt, name="dispatch")
class FollowerDetailView(View):
    """Read, update, or delete one follower."""

    def dispatch(self, request, *args, pk, **kwargs):
        try:
            self.follower = Follower.objects.find(pk)
        except Follower.DoesNotExist:
            return error_response("Follower not found", 404)
        return super().dispatch(request, *args, **kwargs)

    def get(self, request):
        return JsonResponse(self.follower.as_json())

    def put(self, request):
        data = decode_json_object(request)
        if data is None:
            return error_response("Expected a JSON object", 400)
        form = FollowerUpdateForm(data)
        if not form.is_valid():
            return JsonResponse({"error": form.errors.get_json_data()}, status=400)

        follower = Follower.objects.update_follower(self.follower, form.changes())
        return JsonResponse(follower.as_json())

    def delete(self, request):
        self.follower.delete()
        logger.info(f"Deleted follower {self.follower.entity}")
        return HttpResponse(status=200)
