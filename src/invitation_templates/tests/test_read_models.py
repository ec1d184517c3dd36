"""Tests for the SQL template read models. Rows are committed because the read models open their own sessions."""

from uuid import uuid4

from src.auth.dtos import RoleSlug
from src.invitation_templates.repository.read_models import SqlTemplateCategoryReadModel, SqlTemplateReadModel


async def test_list_templates_filters(db, add_template):
    await add_template("Rose Garden", category="wedding", is_premium=True)
    await add_template("Balloons", category="birthday")
    await add_template("Old Style", category="wedding", is_trashed=True)
    await db.commit()
    read_model = SqlTemplateReadModel()

    everything = await read_model.list_templates()
    weddings = await read_model.list_templates(category="wedding")
    free = await read_model.list_templates(is_premium=False)
    searched = await read_model.list_templates(search="BIRTH")

    assert sorted(template.name for template in everything) == ["Balloons", "Rose Garden"]
    assert [template.name for template in weddings] == ["Rose Garden"]
    assert [template.name for template in free] == ["Balloons"]
    assert [template.name for template in searched] == ["Balloons"]


async def test_get_visible_template(db, add_template, user_factory):
    system = await add_template("System", is_system_template=True)
    custom = await add_template("Custom")
    trashed = await add_template("Trashed", is_system_template=True, is_trashed=True)
    await db.commit()
    read_model = SqlTemplateReadModel()

    assert (await read_model.get_visible_template(system.uuid, None)).name == "System"
    assert await read_model.get_visible_template(custom.uuid, None) is None
    assert await read_model.get_visible_template(custom.uuid, user_factory(RoleSlug.SUPER_ADMIN)) is not None
    assert await read_model.get_visible_template(trashed.uuid, user_factory(RoleSlug.SUPER_ADMIN)) is None


async def test_list_categories_in_sort_order(db, add_category):
    await add_category("wedding", sort_order=2)
    await add_category("birthday", sort_order=1)
    await add_category("parties", sort_order=1)
    await add_category("retired", is_active=False)
    await db.commit()
    read_model = SqlTemplateCategoryReadModel()

    active = await read_model.list_categories()
    inactive = await read_model.list_categories(is_active=False)

    assert [category.slug for category in active] == ["birthday", "parties", "wedding"]
    assert [category.slug for category in inactive] == ["retired"]


async def test_get_category(db, add_category):
    category = await add_category("wedding", color="#f9a8d4")
    await db.commit()
    read_model = SqlTemplateCategoryReadModel()

    found = await read_model.get_category(category.uuid)

    assert found.name == "Wedding"
    assert found.color == "#f9a8d4"
    assert await read_model.get_category(uuid4()) is None


async def test_search_percent_is_literal(db, add_template):
    await add_template("100% Love", category="wedding")
    await add_template("Balloons", category="birthday")
    await db.commit()

    found = await SqlTemplateReadModel().list_templates(search="%")

    assert [template.name for template in found] == ["100% Love"]
