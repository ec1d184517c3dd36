"""Which templates each role may see, edit and delete."""

from sqlalchemy import and_, or_, true

from src.auth.dtos import RoleSlug, SessionUser
from src.invitation_templates.dtos import TemplatePermissionError
from src.invitation_templates.repository.orm_models import Template


def visible_templates_clause(user: SessionUser | None):
    """
    super-admin: every template
    application-admin: system templates and non-premium ones
    host: system templates and the ones they created
    attendee or anonymous: system templates only
    """
    role = user.role_slug if user else None
    if role == RoleSlug.SUPER_ADMIN.value:
        return true()
    if role == RoleSlug.APPLICATION_ADMIN.value:
        return or_(Template.is_system_template.is_(True), Template.is_premium.is_(False))
    if role == RoleSlug.HOST.value:
        return or_(
            Template.is_system_template.is_(True),
            Template.created_by_user_id == user.id,
        )
    return Template.is_system_template.is_(True)


def deletable_templates_clause(user: SessionUser):
    """Hosts may only delete the custom templates they created."""
    if user.role_slug == RoleSlug.HOST.value:
        return and_(
            Template.is_system_template.is_(False),
            Template.created_by_user_id == user.id,
        )
    return visible_templates_clause(user)


def can_change_templates(user: SessionUser) -> bool:
    """Attendees never edit or delete templates."""
    return user.has_role((RoleSlug.SUPER_ADMIN, RoleSlug.APPLICATION_ADMIN, RoleSlug.HOST))


def check_template_flags(user: SessionUser, is_system_template: bool | None, is_premium: bool | None) -> None:
    """Raise TemplatePermissionError when ``user`` sets a flag their role does not own."""
    if user.role_slug == RoleSlug.HOST.value:
        if is_system_template:
            raise TemplatePermissionError("Hosts cannot make templates system templates")
        if is_premium:
            raise TemplatePermissionError("Hosts cannot make templates premium")
    elif user.role_slug == RoleSlug.APPLICATION_ADMIN.value and is_premium:
        raise TemplatePermissionError("Application admins cannot make templates premium")
