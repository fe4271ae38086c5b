from django.conf import settings
from django.shortcuts import redirect


def index(request):
    # Logged in? send to the app dashboard
    if request.user.is_authenticated:
        return redirect(settings.AUTH_HOME_URL)
    return redirect(settings.FRONTEND_URL)
