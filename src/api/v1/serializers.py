"""DRF serializers for API v1."""
from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers
from rest_framework.utils import html

from core.parsing import FormValueError, parse_form_bool
from leads.models import Lead
from merchants.export import EXPORT_COLUMNS
from merchants.models import ActivityLog, Merchant, MerchantProductApproval

User = get_user_model()


# ---------------------------------------------------------------------------
# Users / auth
# ---------------------------------------------------------------------------

class UserSerializer(serializers.ModelSerializer):
    """Read serializer for User model."""

    last_login_at = serializers.DateTimeField(source='last_login', read_only=True)
    invited_by_name = serializers.CharField(source='invited_by.name', read_only=True, default=None)

    class Meta:
        model = User
        fields = [
            'id', 'name', 'email', 'role', 'is_active',
            'last_login_at', 'created_at', 'invited_by', 'invited_by_name',
        ]
        read_only_fields = fields


class LoginSerializer(serializers.Serializer):
    email = serializers.CharField()
    password = serializers.CharField(trim_whitespace=False)


class PasswordChangeSerializer(serializers.Serializer):
    current_password = serializers.CharField(trim_whitespace=False)
    new_password = serializers.CharField(trim_whitespace=False)

    def validate_new_password(self, value):
        user = self.context['request'].user
        try:
            validate_password(value, user=user)
        except DjangoValidationError as exc:
            raise serializers.ValidationError(list(exc.messages))
        return value


class InviteUserSerializer(serializers.Serializer):
    name = serializers.CharField(allow_blank=True, required=False, default='')
    email = serializers.CharField(allow_blank=True, required=False, default='')
    role = serializers.CharField(allow_blank=True, required=False, default='')


class RoleSerializer(serializers.Serializer):
    role = serializers.CharField(allow_blank=True)


# ---------------------------------------------------------------------------
# Leads
# ---------------------------------------------------------------------------

class LeadSerializer(serializers.ModelSerializer):

    class Meta:
        model = Lead
        fields = [
            'id', 'source_sheet', 'merchant_name', 'category', 'products',
            'email', 'contact', 'address', 'status_notes',
            'fb', 'ig', 'tiktok', 'website', 'encoded_by',
            'result', 'calls_update', 'followup_email', 'reach_via_socmed',
            'registered_name', 'contact_person', 'designation', 'authorized_signatory',
            'country', 'city', 'social_score', 'stage', 'needs_followup',
            'last_activity_dates', 'shopify_status', 'created_at', 'updated_at',
        ]
        read_only_fields = fields


class StatusSerializer(serializers.Serializer):
    status = serializers.CharField()


class BulkIdsSerializer(serializers.Serializer):
    ids = serializers.ListField(child=serializers.CharField(), required=False, default=list)


class BulkStatusSerializer(BulkIdsSerializer):
    status = serializers.CharField()


# ---------------------------------------------------------------------------
# Merchants
# ---------------------------------------------------------------------------

class FormBooleanField(serializers.BooleanField):
    """Checkbox-style boolean: ``on``/``yes``/``1`` or ``off``/``no``/``0``/blank."""

    def to_internal_value(self, data):
        try:
            return parse_form_bool(data, self.field_name)
        except FormValueError:
            self.fail('invalid', input=data)


class BlankAsNullMixin:
    """Blank strings validate as ``None`` on nullable fields."""

    def validate_empty_values(self, data):
        if isinstance(data, str) and not data.strip() and self.allow_null:
            return (True, None)
        return super().validate_empty_values(data)


class OptionalIntegerField(BlankAsNullMixin, serializers.IntegerField):
    pass


class OptionalDateTimeField(BlankAsNullMixin, serializers.DateTimeField):
    pass


class ApprovedProductListSerializer(serializers.ListSerializer):
    """Form posts must index items; a flat value is rejected, not dropped."""

    def get_value(self, dictionary):
        if html.is_html_input(dictionary) and self.field_name in dictionary:
            return dictionary.get(self.field_name)
        return super().get_value(dictionary)


class MerchantProductApprovalSerializer(serializers.ModelSerializer):

    class Meta:
        model = MerchantProductApproval
        fields = ['id', 'product_name', 'product_url']
        extra_kwargs = {'product_name': {'allow_blank': True}}
        list_serializer_class = ApprovedProductListSerializer


class ActivityLogSerializer(serializers.ModelSerializer):
    user_name = serializers.CharField(source='user.name', read_only=True, default=None)

    class Meta:
        model = ActivityLog
        fields = ['id', 'type', 'message', 'user', 'user_name', 'created_at']
        read_only_fields = fields


class MerchantRowSerializer(serializers.Serializer):
    """Dashboard row: merchant summary plus read-time metrics."""

    id = serializers.UUIDField(source='merchant.id')
    name = serializers.CharField(source='merchant.name')
    category = serializers.CharField(source='merchant.category')
    contact_name = serializers.CharField(source='merchant.contact_name')
    email = serializers.CharField(source='merchant.email')
    phone = serializers.CharField(source='merchant.phone')
    shopify_status = serializers.CharField(source='merchant.shopify_status')
    products_uploaded_count = serializers.IntegerField(source='merchant.products_uploaded_count')
    last_updated_at = serializers.DateTimeField(source='merchant.last_updated_at')
    last_updated_by_name = serializers.CharField(
        source='merchant.last_updated_by.name', default=None,
    )
    address_complete = serializers.BooleanField()
    completion_percent = serializers.IntegerField()
    needs_attention = serializers.BooleanField()


class MerchantDetailSerializer(serializers.ModelSerializer):
    approved_products = MerchantProductApprovalSerializer(many=True, read_only=True)
    last_updated_by_name = serializers.CharField(source='last_updated_by.name', read_only=True, default=None)
    uploaded_by_name = serializers.CharField(source='uploaded_by.name', read_only=True, default=None)

    class Meta:
        model = Merchant
        exclude = ['updated_at']
        read_only_fields = [field.name for field in Merchant._meta.fields]


def _text(max_length=None):
    return serializers.CharField(required=False, allow_blank=True, default='', max_length=max_length)


def _flag():
    return FormBooleanField(required=False, default=False)


def _count(**kwargs):
    return OptionalIntegerField(min_value=0, required=False, allow_null=True, **kwargs)


class MerchantWriteSerializer(serializers.Serializer):
    """Create / full update payload; omitted fields reset to their defaults."""

    CHOICE_DEFAULTS = {
        'submission_type': Merchant.SubmissionType.MERCHANT_SELECTED,
        'selection_mode': Merchant.SelectionMode.SELECTED_ONLY,
        'shopify_status': Merchant.ShopifyStatus.NOT_STARTED,
    }

    name = serializers.CharField(max_length=255)
    category = _text(255)
    contact_name = _text(255)
    email = _text(255)
    phone = _text(100)
    source_website = _text(500)
    source_facebook = _text(500)
    source_instagram = _text(500)

    submission_type = serializers.ChoiceField(
        choices=Merchant.SubmissionType.choices, required=False, allow_blank=True, default='',
    )
    selection_mode = serializers.ChoiceField(
        choices=Merchant.SelectionMode.choices, required=False, allow_blank=True, default='',
    )
    selection_confirmed = _flag()

    shopify_status = serializers.ChoiceField(
        choices=Merchant.ShopifyStatus.choices, required=False, allow_blank=True, default='',
    )
    shopify_vendor_name = _text(255)
    shopify_collection = _text(255)
    shopify_tags = _text(500)
    shopify_phone = _text(100)
    products_submitted_count = _count(default=None)
    products_uploaded_count = _count(default=0)
    products_target_count = _count(default=None)

    products_extracted = _flag()
    products_sent_for_confirmation = _flag()
    merchant_approved_extracted_list = _flag()
    approved_at = OptionalDateTimeField(
        required=False, allow_null=True, default=None, input_formats=['iso-8601', '%Y-%m-%d'],
    )

    variants_complete = _flag()
    pricing_added = _flag()
    inventory_added = _flag()
    sku_added = _flag()
    images_complete = _flag()
    final_reviewed = _flag()

    business_address = _text()
    warehouse_address = _text()
    return_address = _text()
    address_country = _text(100)
    address_state = _text(100)
    address_zip = _text(20)

    approved_products = MerchantProductApprovalSerializer(many=True, required=False, default=list)

    def validate_products_uploaded_count(self, value):
        return value or 0

    def validate(self, attrs):
        for field, default in self.CHOICE_DEFAULTS.items():
            if not attrs.get(field):
                attrs[field] = default
        return attrs


class NoteSerializer(serializers.Serializer):
    message = serializers.CharField(allow_blank=True)


class ExportSerializer(serializers.Serializer):
    ids = serializers.ListField(child=serializers.CharField(), required=False, default=list)
    fields = serializers.ListField(
        child=serializers.ChoiceField(choices=list(EXPORT_COLUMNS)),
        required=False,
        default=list,
    )
