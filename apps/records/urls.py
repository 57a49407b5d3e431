from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'records'

# No trailing slashes: the ledger client calls /api/coconut, /api/coconut/{id}
router = SimpleRouter(trailing_slash=False)
router.register(r'coconut', views.CoconutInputViewSet, basename='coconut')
router.register(r'labour', views.LabourWageViewSet, basename='labour')
router.register(r'clients', views.ClientViewSet, basename='client')

urlpatterns = [
    # GET    /api/coconut          - List purchase inputs (newest first)
    # POST   /api/coconut          - Create purchase input
    # PUT    /api/coconut/{id}     - Update purchase input
    # DELETE /api/coconut/{id}     - Delete purchase input
    # Same pattern for /api/labour; /api/clients has no PUT
    path('', include(router.urls)),
]
