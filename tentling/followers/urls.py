"""URLconf for followers."""

from django.urls import path

from . import views

app_name = "followers"
urlpatterns = [
    path("followers", views.FollowerListView.as_view(), name="list"),
    path("followers/<str:pk>", views.FollowerDetailView.as_view(), name="detail"),
]
