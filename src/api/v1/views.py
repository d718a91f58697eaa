"""
API v1 viewsets.

Mutating endpoints answer ``{"success": true, ...}``; failures are
rendered by :func:`api.exceptions.action_exception_handler`.
"""
import logging
from pathlib import Path

from django.conf import settings
from django.contrib.auth import get_user_model
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.response import Response

from accounts import services as account_services
from core.exceptions import ActionError
from leads import services as lead_services
from leads.models import Lead
from merchants import services as merchant_services
from merchants.export import export_merchants
from merchants.models import Merchant

from .permissions import HasActionRole, IsAdminRole
from .serializers import (
    ActivityLogSerializer,
    BulkIdsSerializer,
    BulkStatusSerializer,
    ExportSerializer,
    InviteUserSerializer,
    LeadSerializer,
    MerchantDetailSerializer,
    MerchantRowSerializer,
    MerchantWriteSerializer,
    NoteSerializer,
    RoleSerializer,
    StatusSerializer,
    UserSerializer,
)

logger = logging.getLogger('pililokal')

User = get_user_model()

VIEWER = User.Role.VIEWER
EDITOR = User.Role.EDITOR


def _validated(serializer_class, data):
    serializer = serializer_class(data=data)
    serializer.is_valid(raise_exception=True)
    return serializer.validated_data


# ---------------------------------------------------------------------------
# Leads
# ---------------------------------------------------------------------------

class LeadViewSet(mixins.ListModelMixin,
                  mixins.RetrieveModelMixin,
                  viewsets.GenericViewSet):
    """
    Leads pipeline.

    Reads are open to every role; edits, imports and bulk actions need EDITOR.
    """

    queryset = Lead.objects.all()
    serializer_class = LeadSerializer
    permission_classes = [HasActionRole]
    parser_classes = [JSONParser, FormParser, MultiPartParser]
    default_role = EDITOR
    action_roles = {
        'list': VIEWER,
        'retrieve': VIEWER,
        'kpis': VIEWER,
    }
    filterset_fields = ['source_sheet', 'stage', 'country', 'shopify_status', 'needs_followup']
    search_fields = ['merchant_name', 'category', 'email', 'contact', 'address', 'status_notes']
    ordering_fields = ['position', 'merchant_name', 'source_sheet', 'stage', 'social_score']

    def partial_update(self, request, pk=None):
        patch = lead_services.LeadPatch.from_payload(request.data)
        lead = lead_services.update_lead(pk, patch)
        return Response({'success': True, 'lead': LeadSerializer(lead).data})

    def destroy(self, request, pk=None):
        lead_services.delete_lead(pk)
        return Response({'success': True})

    @action(detail=False, methods=['get'])
    def kpis(self, request):
        return Response({'success': True, 'kpis': lead_services.lead_kpis()})

    @action(detail=False, methods=['post'], url_path='import')
    def import_workbook(self, request):
        upload = request.FILES.get('file')
        if upload is not None:
            source = upload
        else:
            source = Path(settings.LEADS_WORKBOOK_PATH)
            if not source.exists():
                raise ActionError(lead_services.NO_DATA_MESSAGE)
        result = lead_services.import_workbook(source)
        return Response({'success': True, 'count': result.count, 'by_sheet': result.by_sheet})

    @action(detail=True, methods=['post'], url_path='status')
    def update_status(self, request, pk=None):
        data = _validated(StatusSerializer, request.data)
        lead = lead_services.update_lead_status(pk, data['status'])
        return Response({'success': True, 'lead': LeadSerializer(lead).data})

    @action(detail=True, methods=['post'])
    def convert(self, request, pk=None):
        merchant = lead_services.convert_lead_to_merchant(pk, request.user)
        return Response(
            {'success': True, 'merchant_id': str(merchant.pk)},
            status=status.HTTP_201_CREATED,
        )

    @action(detail=False, methods=['post'], url_path='bulk-status')
    def bulk_status(self, request):
        data = _validated(BulkStatusSerializer, request.data)
        count = lead_services.bulk_update_lead_status(data['ids'], data['status'])
        return Response({'success': True, 'count': count})

    @action(detail=False, methods=['post'], url_path='bulk-delete')
    def bulk_delete(self, request):
        data = _validated(BulkIdsSerializer, request.data)
        count = lead_services.bulk_delete_leads(data['ids'])
        return Response({'success': True, 'count': count})

    @action(detail=False, methods=['post'], url_path='add-confirmed-merchants')
    def add_confirmed_merchants(self, request):
        added, skipped = lead_services.bulk_add_confirmed_as_merchants(request.user)
        return Response({'success': True, 'added': added, 'skipped': skipped})


# ---------------------------------------------------------------------------
# Merchants
# ---------------------------------------------------------------------------

class MerchantViewSet(viewsets.GenericViewSet):
    """
    Merchant onboarding.

    Reads (including export) are open to every role; every mutation needs EDITOR.
    """

    serializer_class = MerchantDetailSerializer
    permission_classes = [HasActionRole]
    default_role = EDITOR
    action_roles = {
        'list': VIEWER,
        'retrieve': VIEWER,
        'dashboard': VIEWER,
        'activity': VIEWER,
        'export': VIEWER,
    }
    filterset_fields = ['shopify_status', 'submission_type', 'selection_mode']
    search_fields = ['name', 'category', 'contact_name', 'email']
    ordering_fields = ['name', 'last_updated_at', 'shopify_status']

    def get_queryset(self):
        return merchant_services.dashboard_queryset()

    def _detail_response(self, merchant, status_code=status.HTTP_200_OK):
        row = merchant_services.annotate_merchant(merchant)
        data = MerchantDetailSerializer(merchant).data
        data.update({
            'address_complete': row.address_complete,
            'completion_percent': row.completion_percent,
            'needs_attention': row.needs_attention,
        })
        return Response({'success': True, 'merchant': data}, status=status_code)

    def list(self, request):
        queryset = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(queryset)
        merchants = page if page is not None else list(queryset)
        rows = [merchant_services.annotate_merchant(merchant) for merchant in merchants]
        data = MerchantRowSerializer(rows, many=True).data
        if page is not None:
            return self.get_paginated_response(data)
        return Response({'success': True, 'results': data})

    def retrieve(self, request, pk=None):
        merchant = merchant_services.get_merchant(pk)
        return self._detail_response(merchant)

    def _save(self, request, pk=None):
        data = dict(_validated(MerchantWriteSerializer, request.data))
        approved_products = data.pop('approved_products')
        return merchant_services.save_merchant(pk, data, approved_products, request.user)

    def create(self, request):
        merchant = self._save(request)
        return self._detail_response(merchant, status.HTTP_201_CREATED)

    def update(self, request, pk=None):
        merchant = self._save(request, pk)
        return self._detail_response(merchant)

    def destroy(self, request, pk=None):
        merchant_services.delete_merchant(pk)
        return Response({'success': True})

    @action(detail=False, methods=['get'])
    def dashboard(self, request):
        queryset = self.filter_queryset(self.get_queryset())
        rows = [merchant_services.annotate_merchant(merchant) for merchant in queryset]
        return Response({
            'success': True,
            'summary': merchant_services.dashboard_summary(rows),
            'merchants': MerchantRowSerializer(rows, many=True).data,
        })

    @action(detail=True, methods=['post'], url_path='status')
    def update_status(self, request, pk=None):
        data = _validated(StatusSerializer, request.data)
        merchant = merchant_services.update_merchant_status(pk, data['status'], request.user)
        return self._detail_response(merchant)

    @action(detail=True, methods=['post'])
    def notes(self, request, pk=None):
        data = _validated(NoteSerializer, request.data)
        entry = merchant_services.add_note(pk, data['message'], request.user)
        return Response(
            {'success': True, 'activity': ActivityLogSerializer(entry).data},
            status=status.HTTP_201_CREATED,
        )

    @action(detail=True, methods=['get'])
    def activity(self, request, pk=None):
        entries = merchant_services.list_activity(pk)
        return Response({'success': True, 'results': ActivityLogSerializer(entries, many=True).data})

    @action(detail=False, methods=['post'], url_path='bulk-status')
    def bulk_status(self, request):
        data = _validated(BulkStatusSerializer, request.data)
        count = merchant_services.bulk_update_merchant_status(data['ids'], data['status'], request.user)
        return Response({'success': True, 'count': count})

    @action(detail=False, methods=['post'], url_path='bulk-delete')
    def bulk_delete(self, request):
        data = _validated(BulkIdsSerializer, request.data)
        count = merchant_services.bulk_delete_merchants(data['ids'])
        return Response({'success': True, 'count': count})

    @action(detail=False, methods=['post'])
    def export(self, request):
        data = _validated(ExportSerializer, request.data)
        return export_merchants(data['ids'], data['fields'])


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------

class UserViewSet(mixins.ListModelMixin,
                  mixins.RetrieveModelMixin,
                  viewsets.GenericViewSet):
    """User administration. Admin only."""

    queryset = User.objects.select_related('invited_by').order_by('-created_at')
    serializer_class = UserSerializer
    permission_classes = [IsAdminRole]
    filterset_fields = ['role', 'is_active']
    search_fields = ['email', 'name']
    pagination_class = None

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())
        return Response({'success': True, 'results': UserSerializer(queryset, many=True).data})

    def create(self, request):
        data = _validated(InviteUserSerializer, request.data)
        result = account_services.invite_user(
            name=data['name'],
            email=data['email'],
            role=data['role'],
            invited_by=request.user,
        )
        payload = {
            'success': True,
            'user': UserSerializer(result.user).data,
            'temp_password': result.temp_password,
        }
        if result.email_error:
            payload['email_error'] = result.email_error
        return Response(payload, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['post'])
    def role(self, request, pk=None):
        data = _validated(RoleSerializer, request.data)
        user = account_services.update_user_role(pk, data['role'])
        return Response({'success': True, 'user': UserSerializer(user).data})

    @action(detail=True, methods=['post'], url_path='toggle-active')
    def toggle_active(self, request, pk=None):
        user = account_services.toggle_user_active(pk, acting_user=request.user)
        return Response({'success': True, 'user': UserSerializer(user).data})

    @action(detail=True, methods=['post'], url_path='reset-password')
    def reset_password(self, request, pk=None):
        user, temp_password = account_services.reset_user_password(pk)
        return Response({'success': True, 'user': UserSerializer(user).data, 'temp_password': temp_password})
