from io import StringIO

import pytest
from django.core.management import call_command

from accounts.models import User


@pytest.mark.django_db
def test_creates_admin_with_password():
    out = StringIO()
    call_command("seed_admin", "--email", "Boss@Pililokal.com", "--password", "Secret123!", stdout=out)

    user = User.objects.get(email="boss@pililokal.com")
    assert user.role == User.Role.ADMIN
    assert user.is_staff
    assert user.check_password("Secret123!")
    assert "Admin boss@pililokal.com created." in out.getvalue()
    assert "Temporary password" not in out.getvalue()


@pytest.mark.django_db
def test_generates_temporary_password():
    out = StringIO()
    call_command("seed_admin", stdout=out)

    assert User.objects.filter(email="admin@pililokal.com").exists()
    assert "Temporary password:" in out.getvalue()


@pytest.mark.django_db
def test_existing_user_untouched(admin_user):
    out = StringIO()
    call_command("seed_admin", "--email", "admin@test.com", "--password", "Other123!", stdout=out)

    admin_user.refresh_from_db()
    assert admin_user.check_password("TestPass123!")
    assert "already exists" in out.getvalue()
