import io
import uuid

from brandkeeper.core.auth.security import verify_password
from brandkeeper.db.seed import build_super_admin
from brandkeeper.settings import Settings


def test_super_admin_uses_configured_password():
    settings = Settings(_env_file=None, SEED_ADMIN_EMAIL="Root@Example.com", SEED_ADMIN_PASSWORD="Configurada-123")
    out = io.StringIO()
    user = build_super_admin(uuid.uuid4(), settings, out)
    assert user.email == "root@example.com"
    assert user.role == "super_admin"
    assert verify_password("Configurada-123", user.hashed_password)
    assert out.getvalue() == ""


def test_generated_password_is_printed_not_logged(caplog):
    caplog.set_level("DEBUG")
    settings = Settings(_env_file=None, SEED_ADMIN_PASSWORD="")
    out = io.StringIO()
    user = build_super_admin(uuid.uuid4(), settings, out)

    password = out.getvalue().strip().rsplit(": ", 1)[1]
    assert verify_password(password, user.hashed_password)
    assert password not in caplog.text
