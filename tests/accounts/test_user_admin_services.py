import pytest
from django.core import mail

from accounts import services
from accounts.models import User
from core.exceptions import ActionError


@pytest.mark.django_db
class TestAuthenticate:

    def test_valid_credentials(self, editor_user):
        user = services.authenticate_user("  EDITOR@test.com ", "TestPass123!")

        assert user == editor_user
        assert user.last_login_at is not None

    def test_wrong_password(self, editor_user):
        assert services.authenticate_user("editor@test.com", "nope") is None

    def test_unknown_email(self, db):
        assert services.authenticate_user("ghost@test.com", "TestPass123!") is None

    def test_inactive_user(self, inactive_admin):
        assert services.authenticate_user("inactive@test.com", "TestPass123!") is None


@pytest.mark.django_db
class TestChangePassword:

    def test_changes_password(self, viewer_user):
        services.change_password(viewer_user, "TestPass123!", "BrandNew99")
        viewer_user.refresh_from_db()
        assert viewer_user.check_password("BrandNew99")

    def test_wrong_current_password(self, viewer_user):
        with pytest.raises(ActionError, match="Current password is incorrect"):
            services.change_password(viewer_user, "wrong", "BrandNew99")


@pytest.mark.django_db
class TestInvite:

    def test_invite_creates_user_and_sends_email(self, admin_user):
        result = services.invite_user(
            name=" Maria ", email=" Maria@Example.com ", role="EDITOR", invited_by=admin_user,
        )

        user = result.user
        assert user.email == "maria@example.com"
        assert user.name == "Maria"
        assert user.role == User.Role.EDITOR
        assert user.invited_by == admin_user
        assert len(result.temp_password) == 16
        assert user.check_password(result.temp_password)
        assert result.email_error is None
        assert len(mail.outbox) == 1
        assert mail.outbox[0].to == ["maria@example.com"]
        assert result.temp_password in mail.outbox[0].body

    def test_unknown_role_becomes_viewer(self, admin_user):
        result = services.invite_user(
            name="Jo", email="jo@example.com", role="SUPERUSER", invited_by=admin_user,
        )
        assert result.user.role == User.Role.VIEWER

    def test_duplicate_email(self, admin_user, viewer_user):
        with pytest.raises(ActionError, match="already exists"):
            services.invite_user(
                name="Dup", email="VIEWER@test.com", role="VIEWER", invited_by=admin_user,
            )

    def test_missing_fields(self, admin_user):
        with pytest.raises(ActionError, match="Name and email are required"):
            services.invite_user(name="", email="a@b.com", role="VIEWER", invited_by=admin_user)

    def test_email_failure_keeps_user(self, admin_user, monkeypatch):
        def fail(**kwargs):
            raise ConnectionRefusedError("SMTP down")

        monkeypatch.setattr(services, "send_invite_email", fail)
        result = services.invite_user(
            name="Jo", email="jo@example.com", role="VIEWER", invited_by=admin_user,
        )

        assert result.email_error == "SMTP down"
        assert User.objects.filter(email="jo@example.com").exists()


@pytest.mark.django_db
class TestUserManagement:

    def test_update_role(self, viewer_user):
        services.update_user_role(viewer_user.pk, "ADMIN")
        viewer_user.refresh_from_db()
        assert viewer_user.role == User.Role.ADMIN

    def test_toggle_active(self, admin_user, viewer_user):
        assert services.toggle_user_active(viewer_user.pk, acting_user=admin_user).is_active is False
        assert services.toggle_user_active(viewer_user.pk, acting_user=admin_user).is_active is True

    def test_cannot_deactivate_self(self, admin_user):
        with pytest.raises(ActionError, match="cannot deactivate your own account"):
            services.toggle_user_active(admin_user.pk, acting_user=admin_user)

    def test_reset_password(self, viewer_user):
        user, temp_password = services.reset_user_password(viewer_user.pk)

        user.refresh_from_db()
        assert user.check_password(temp_password)
        assert not user.check_password("TestPass123!")

    def test_missing_user(self, db):
        with pytest.raises(ActionError, match="User not found"):
            services.get_user("not-a-uuid")
