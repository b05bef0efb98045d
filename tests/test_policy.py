import uuid

import pytest

from brandkeeper.core.errors import Forbidden
from brandkeeper.core.policy import Action, Resource, ResourceKind, Subject, UserRole, authorize, can, is_admin_or_above

OWN = uuid.uuid4()
OTHER = uuid.uuid4()


def subject(role: UserRole) -> Subject:
    return Subject(user_id=uuid.uuid4(), role=role, company_id=OWN)


def brand(company_id=OWN, is_global=False) -> Resource:
    return Resource(kind=ResourceKind.BRAND_SETTINGS, company_id=company_id, is_global=is_global)


def template(company_id=OWN, is_global=False, is_active=True) -> Resource:
    return Resource(kind=ResourceKind.EMAIL_TEMPLATE, company_id=company_id, is_global=is_global, is_active=is_active)


@pytest.mark.parametrize("action", list(Action))
def test_super_admin_can_do_anything(action):
    admin = subject(UserRole.SUPER_ADMIN)
    assert can(admin, action, brand(OTHER, is_global=True))
    assert can(admin, action, Resource(kind=ResourceKind.COMPANY, company_id=OTHER))


def test_admin_manages_only_own_company_brand():
    admin = subject(UserRole.ADMIN)
    assert can(admin, Action.UPDATE, brand())
    assert not can(admin, Action.UPDATE, brand(OTHER))
    assert not can(admin, Action.UPDATE, brand(is_global=True))
    assert not can(admin, Action.CREATE, brand(is_global=True))


def test_admin_reads_global_templates_but_cannot_edit_them():
    admin = subject(UserRole.ADMIN)
    assert can(admin, Action.READ, template(OTHER, is_global=True))
    assert not can(admin, Action.UPDATE, template(OTHER, is_global=True))
    assert not can(admin, Action.READ, template(OTHER))


def test_collaborator_is_read_only():
    collaborator = subject(UserRole.COLLABORATOR)
    assert can(collaborator, Action.READ, brand())
    assert can(collaborator, Action.READ, brand(OTHER, is_global=True))
    assert not can(collaborator, Action.READ, brand(OTHER))
    for action in (Action.CREATE, Action.UPDATE, Action.DELETE):
        assert not can(collaborator, action, brand())


def test_collaborator_never_sees_inactive_templates():
    collaborator = subject(UserRole.COLLABORATOR)
    assert can(collaborator, Action.READ, template())
    assert not can(collaborator, Action.READ, template(is_active=False))
    assert not can(collaborator, Action.READ, template(is_global=True, is_active=False))


def test_companies_belong_to_super_admin():
    admin = subject(UserRole.ADMIN)
    assert can(admin, Action.READ, Resource(kind=ResourceKind.COMPANY, company_id=OWN))
    assert not can(admin, Action.UPDATE, Resource(kind=ResourceKind.COMPANY, company_id=OWN))
    assert not can(admin, Action.CREATE, Resource(kind=ResourceKind.COMPANY))


def test_users_only_touch_their_own_profile():
    collaborator = subject(UserRole.COLLABORATOR)
    own = Resource(kind=ResourceKind.USER, company_id=OWN, owner_id=collaborator.user_id)
    someone = Resource(kind=ResourceKind.USER, company_id=OWN, owner_id=uuid.uuid4())
    assert can(collaborator, Action.UPDATE, own)
    assert not can(collaborator, Action.DELETE, own)
    assert not can(collaborator, Action.READ, someone)


def test_social_media_write_needs_admin():
    resource = Resource(kind=ResourceKind.SOCIAL_MEDIA, company_id=OWN)
    assert can(subject(UserRole.COLLABORATOR), Action.READ, resource)
    assert not can(subject(UserRole.COLLABORATOR), Action.UPDATE, resource)
    assert can(subject(UserRole.ADMIN), Action.UPDATE, resource)


def test_authorize_raises_forbidden_with_message():
    with pytest.raises(Forbidden) as exc:
        authorize(subject(UserRole.ADMIN), Action.DELETE, brand(OTHER), message="Solo tu empresa")
    assert exc.value.status_code == 403
    assert exc.value.to_content() == {"success": False, "error": "Solo tu empresa"}


def test_is_admin_or_above():
    assert is_admin_or_above(UserRole.SUPER_ADMIN)
    assert is_admin_or_above(UserRole.ADMIN)
    assert not is_admin_or_above(UserRole.COLLABORATOR)
