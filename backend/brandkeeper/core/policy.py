"""
Single capability check for every resource the API exposes.

Handlers describe *who* (Subject), *what* (Action) and *on which* (Resource);
``can`` decides, ``authorize`` turns a denial into ``Forbidden``.
"""
import enum
import uuid
from dataclasses import dataclass

from brandkeeper.core.errors import Forbidden


class UserRole(str, enum.Enum):
    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    COLLABORATOR = "collaborator"


class Action(str, enum.Enum):
    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class ResourceKind(str, enum.Enum):
    COMPANY = "company"
    USER = "user"
    BRAND_SETTINGS = "brand_settings"
    EMAIL_TEMPLATE = "email_template"
    SOCIAL_MEDIA = "social_media"


@dataclass(frozen=True)
class Subject:
    user_id: uuid.UUID
    role: UserRole
    company_id: uuid.UUID


@dataclass(frozen=True)
class Resource:
    kind: ResourceKind
    company_id: uuid.UUID | None = None
    is_global: bool = False
    is_active: bool = True
    owner_id: uuid.UUID | None = None


def can(subject: Subject, action: Action, resource: Resource) -> bool:
    if subject.role is UserRole.SUPER_ADMIN:
        return True

    same_company = resource.company_id is not None and resource.company_id == subject.company_id

    # Companies and other people's accounts are super_admin territory.
    if resource.kind is ResourceKind.USER:
        return resource.owner_id == subject.user_id and action in (Action.READ, Action.UPDATE)
    if resource.kind is ResourceKind.COMPANY:
        return action is Action.READ and same_company

    if subject.role is UserRole.ADMIN:
        if resource.kind is ResourceKind.EMAIL_TEMPLATE and action is Action.READ:
            return same_company or resource.is_global
        return same_company and not resource.is_global

    if subject.role is UserRole.COLLABORATOR and action is Action.READ:
        if resource.kind is ResourceKind.BRAND_SETTINGS:
            return same_company or resource.is_global
        if resource.kind is ResourceKind.EMAIL_TEMPLATE:
            return resource.is_active and (same_company or resource.is_global)
        if resource.kind is ResourceKind.SOCIAL_MEDIA:
            return same_company

    return False


def authorize(subject: Subject, action: Action, resource: Resource, message: str | None = None) -> None:
    if not can(subject, action, resource):
        raise Forbidden(message)


def is_admin_or_above(role: UserRole) -> bool:
    return role in (UserRole.SUPER_ADMIN, UserRole.ADMIN)
