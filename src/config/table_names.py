from enum import Enum


class TableNames(str, Enum):
    USER_ROLES = "user_roles"
    USERS = "users"
    TEMPLATE_CATEGORIES = "template_categories"
    TEMPLATES = "templates"
    EVENTS = "events"
    GUESTS = "guests"
