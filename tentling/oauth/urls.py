"""URLconf for apps."""

from django.urls import path

from . import views

app_name = "oauth"
urlpatterns = [
    path("apps", views.app_list, name="app-list"),
    path("apps/<str:public_id>", views.app_detail, name="app-detail"),
]
